"""
Discrete 2-D gradient of a rasterized square image.

Images are handled as vectors of length N = l_x**2, rasterized column by
column: pixel p sits at row p % l_x and column p // l_x, its right neighbour
is p + l_x and its down neighbour is p + 1. The gradient at p is the pair of
forward differences

    D_p u = (u[p] - u[p + l_x], u[p] - u[p + 1])

with a zero right difference on the last column and a zero down difference
on the last row.
"""

import numpy as np
from scipy import sparse


def _as_vector(u):
    # 2-d images are rasterized column by column, column vectors flattened
    return np.asarray(u, dtype=float).ravel(order='F')


def side_length(n_pix):
    """Linear size of a square image of n_pix pixels"""
    l_x = int(round(np.sqrt(n_pix)))
    if l_x * l_x != n_pix:
        raise ValueError('Cannot compute the gradient of a vector of '
                         'length %d: not the size of a square image' % n_pix)
    return l_x


def gradient_at(u, pixel):
    """
    Right and down differences of the image `u` at a single pixel.

    Parameters
    ----------
    u : ndarray of floats
        rasterized image, of length l_x**2

    pixel : int
        index of the pixel in `u`

    Returns
    -------
    du : ndarray of shape (2,)
        (right difference, down difference)
    """
    u = _as_vector(u)
    n_pix = u.size
    if pixel < 0 or pixel >= n_pix:
        raise ValueError('Pixel index %d out of range for an image of %d '
                         'pixels' % (pixel, n_pix))
    l_x = side_length(n_pix)
    du = np.zeros(2)
    if pixel // l_x < l_x - 1:
        du[0] = u[pixel] - u[pixel + l_x]
    if pixel % l_x < l_x - 1:
        du[1] = u[pixel] - u[pixel + 1]
    return du


def gradient(u):
    """
    Gradient of a rasterized image at every pixel.

    Parameters
    ----------
    u : ndarray of floats
        rasterized image, of length l_x**2 (or l_x x l_x image)

    Returns
    -------
    grad : ndarray of shape (l_x**2, 2)
        line i is ``gradient_at(u, i)``
    """
    u = _as_vector(u)
    l_x = side_length(u.size)
    im = u.reshape((l_x, l_x), order='F')
    right = np.zeros_like(im)
    down = np.zeros_like(im)
    right[:, :-1] = im[:, :-1] - im[:, 1:]
    down[:-1] = im[:-1] - im[1:]
    return np.column_stack((right.ravel(order='F'), down.ravel(order='F')))


def gradient_adjoint(grad):
    """
    Apply the transpose of the gradient operator to a field of pairs.

    Computes sum_i D_i^T p_i without building any per-pixel matrix.

    Parameters
    ----------
    grad : ndarray of shape (l_x**2, 2)

    Returns
    -------
    res : ndarray of shape (l_x**2,)
    """
    grad = np.asarray(grad, dtype=float)
    if grad.ndim != 2 or grad.shape[1] != 2:
        raise ValueError('Expected a field of shape (n_pix, 2), got %s'
                         % (grad.shape,))
    l_x = side_length(grad.shape[0])
    right = grad[:, 0].reshape((l_x, l_x), order='F').copy()
    down = grad[:, 1].reshape((l_x, l_x), order='F').copy()
    # Differences are identically zero on the boundary
    right[:, -1] = 0
    down[-1] = 0
    res = right + down
    res[:, 1:] -= right[:, :-1]
    res[1:] -= down[:-1]
    return res.ravel(order='F')


def unit_gradient_row(u, pixel):
    """
    Sparse (2, l_x**2) matrix D_i such that D_i * u == gradient_at(u, i).

    Entries are +1 at the pixel and -1 at its right (first line) and down
    (second line) neighbours, lines are empty on the boundaries.
    """
    u = _as_vector(u)
    n_pix = u.size
    if pixel < 0 or pixel >= n_pix:
        raise ValueError('Pixel index %d out of range for an image of %d '
                         'pixels' % (pixel, n_pix))
    l_x = side_length(n_pix)
    rows, cols, data = [], [], []
    if pixel // l_x < l_x - 1:
        rows += [0, 0]
        cols += [pixel, pixel + l_x]
        data += [1., -1.]
    if pixel % l_x < l_x - 1:
        rows += [1, 1]
        cols += [pixel, pixel + 1]
        data += [1., -1.]
    op = sparse.coo_matrix((data, (rows, cols)), shape=(2, n_pix))
    return sparse.csr_matrix(op)


def tv_norm(u):
    """Compute the (isotropic) TV norm of an image"""
    grad = gradient(u)
    return np.sqrt((grad ** 2).sum(axis=1)).sum()
