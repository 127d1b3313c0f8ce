"""
Total-variation reconstruction with the TVAL3 algorithm
=======================================================

In this example, we reconstruct an image from an uncomplete set of random
projections: the number of measures is half the number of pixels. The image
is piecewise constant, so that its gradient is sparse, and it can be
recovered by minimizing its total variation under the constraint that its
projections match the measures.

The constrained problem is solved by the augmented Lagrangian method of
TVAL3: alternate minimization of the Lagrangian in the image and in a
surrogate of its gradient, then update of the multipliers and of the
penalty parameters.
"""

print(__doc__)

import numpy as np
from tvrecon.tval3 import tval3_tv
from tvrecon.projections import build_projection_operator, projection
from tvrecon.util import generate_synthetic_data, rasterize
from tvrecon.gradient import tv_norm
from time import time
import matplotlib.pyplot as plt

# Synthetic data
l = 32
x = generate_synthetic_data(l, n_pts=9)

# Projection operator and projections data
n_dir = l // 2
H = build_projection_operator(l, n_dir, random_state=0)
y = projection(H, x)

# Reconstruction
t1 = time()
res, energies, converged = tval3_tv(y, H, n_iter_max=60, verbose=1)
t2 = time()
print("reconstruction done in %f s, converged: %s" % (t2 - t1, converged))

# Fraction of errors of segmented image wrt ground truth
err = [np.abs(x - (resi > 0.5)).mean() for resi in res]

error = x - res[-1]
print('Error norm: %.3e' % np.sqrt(np.sum(error ** 2)))
print('Data misfit: %.3e' % np.sqrt(np.sum((H.dot(rasterize(res[-1])) -
                                            rasterize(y)) ** 2)))
print('TV norm: %.3e (original image: %.3e)' % (tv_norm(res[-1]), tv_norm(x)))

# Display results
plt.figure()
plt.subplot(221)
plt.imshow(x, cmap='gray', interpolation='nearest', vmin=0, vmax=1)
plt.title('original data (%dx%d)' % (l, l))
plt.axis('off')
plt.subplot(222)
plt.imshow(res[-1], cmap='gray', interpolation='nearest', vmin=0, vmax=1)
plt.title('reconstruction after %d rounds' % len(res))
plt.axis('off')
plt.subplot(223)
plt.semilogy(np.abs(energies), 'o')
plt.xlabel('round number')
plt.title('augmented Lagrangian')
plt.subplot(224)
plt.semilogy(err, 'o')
plt.xlabel('round number')
plt.title('error fraction')
plt.show()
