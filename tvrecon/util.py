import numpy as np
from scipy import ndimage


def rasterize(im):
    """
    Linearize a 2-d array column by column

    Parameters
    ----------
    im: 2-d ndarray

    Returns
    -------
    u: 1-d ndarray of size im.size, u[j * n_rows + i] = im[i, j]
    """
    im = np.asarray(im)
    if im.ndim != 2:
        raise ValueError('Can only rasterize 2-d arrays, got an array of '
                         'shape %s' % (im.shape,))
    return im.ravel(order='F')


def unrasterize(u, rows, cols):
    """
    Inverse of ``rasterize``: fill a (rows, cols) array column by column
    """
    u = np.asarray(u)
    if u.size != rows * cols:
        raise ValueError('Cannot reshape a vector of size %d into a '
                         '(%d, %d) array' % (u.size, rows, cols))
    return u.reshape((rows, cols), order='F')


def normalize(im):
    """
    Rescale the values of an array between 0 and 1

    A constant array is mapped to ones.
    """
    im = np.asarray(im, dtype=float)
    im_range = im.max() - im.min()
    if im_range == 0:
        return np.ones_like(im)
    return (im - im.min()) / im_range


def check_finite(**arrays):
    """
    Raise a FloatingPointError if one of the keyword arrays holds NaN or
    infinite values
    """
    for name, arr in sorted(arrays.items()):
        if not np.all(np.isfinite(arr)):
            raise FloatingPointError('Non-finite values in %s' % name)


def generate_synthetic_data(l_x=128, seed=None, crop=True, n_pts=25):
    """
    Generate synthetic binary data looking like phase separation

    Parameters
    ----------

    l_x: int, default 128
        Linear size of the returned image

    seed: int, default 0
        seed with which to initialize the random number generator.

    crop: bool, default True
        If True, non-zero data are found only within a central circle
        of radius l_x / 2

    n_pts: int, default 25
        number of seeds used to generate the structures. The larger n_pts,
        the finer will be the structures.

    Returns
    -------

    res: ndarray of float, of shape lxl
        Output binary image

    Examples
    --------
    >>> im = generate_synthetic_data(l_x=32, seed=2, n_pts=9)
    >>> im.shape
    (32, 32)
    """
    if seed is None:
        seed = 0
    rs = np.random.RandomState(seed)
    x, y = np.ogrid[:l_x, :l_x]
    seeds = np.zeros((l_x, l_x))
    points = (l_x * rs.rand(2, n_pts)).astype(int)
    seeds[points[0], points[1]] = 1
    seeds = ndimage.gaussian_filter(seeds, sigma=l_x / (4. * np.sqrt(n_pts)))
    mask = seeds > seeds.mean()
    if crop:
        mask_outer = (x - l_x / 2.) ** 2 + (y - l_x / 2.) ** 2 < (l_x / 2.) ** 2
        mask = np.logical_and(mask, mask_outer)
    return mask.astype(float)
