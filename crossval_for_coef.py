"""
In this example, we look for the continuation factor of the penalty
parameters that gives the best reconstruction from noisy measures, using
cross-validation.

For a given realization of the noise, we reconstruct the image for several
values of the continuation factor. A slow continuation keeps the penalties
small and the data constraint loose, which filters the noise, whereas a
fast continuation fits the noisy measures. For each reconstruction we
compute the l2 distance between its projections and another set of measures
corresponding to a different realization of the noise. Since we expect the
errors to be uncorrelated, the minimum distance corresponds to the
reconstruction closest to the initial image.

The reconstructions are independent, and computed in parallel.
"""
print(__doc__)

import warnings

import numpy as np
from tvrecon.util import generate_synthetic_data, rasterize
from tvrecon.projections import build_projection_operator, projection
from tvrecon.tval3 import tval3_tv, ConvergenceWarning
from joblib import Parallel, delayed

# Synthetic data
l = 24
x = generate_synthetic_data(l, n_pts=9)

n_dir = l // 2

# Projection operator and projections data, with 2 realizations of the noise
H = build_projection_operator(l, n_dir, random_state=0)
y = rasterize(projection(H, x))
rs = np.random.RandomState(0)
y1 = y + 0.5 * rs.randn(*y.shape)  # 1st realization
y2 = y + 0.5 * rs.randn(*y.shape)  # 2nd realization

# Range of continuation factors
coefs = [1.01, 1.02, 1.05, 1.1, 1.2]


def rec_error(coef):
    """
    cross-validation
    """
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', ConvergenceWarning)
        res, energies, converged = tval3_tv(y1, H, coef=coef, n_iter_max=40)
    yres = H.dot(rasterize(res[-1]))
    return (((yres - y2) ** 2).mean()), res[-1], energies


results = Parallel(n_jobs=-1)(delayed(rec_error)(coef) for coef in coefs)

errors = [res[0] for res in results]

images = [res[1] for res in results]

# Segmentation compared to ground truth
segmentation_error = [np.abs((image > 0.5) - x).mean() for image in images]


print("best coef from cross-validation %f" % (coefs[np.argmin(errors)]))
print("best coef for segmentation compared to ground truth %f"
      % (coefs[np.argmin(segmentation_error)]))
