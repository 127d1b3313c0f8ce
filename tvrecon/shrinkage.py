"""
Closed-form solution of the w-subproblem (isotropic TV shrinkage).

For every pixel, w_i minimizes

    ||w_i|| - nu_i . (D_i u - w_i) + beta / 2 ||D_i u - w_i||^2

which is the soft-thresholding of d_i = D_i u - nu_i / beta at level 1/beta.
Pixels are independent from each other.
"""

import numpy as np


def _check_beta(beta):
    if not beta > 0:
        raise ValueError('The penalty parameter beta must be positive, '
                         'got %r' % (beta,))


def shrink(grad_i, nu_i, beta):
    """
    Shrinkage of the gradient at one pixel.

    Parameters
    ----------
    grad_i : ndarray of shape (2,)
        gradient of the current image at the pixel

    nu_i : ndarray of shape (2,)
        multiplier of the pixel

    beta : float
        penalty parameter of the gradient constraint

    Returns
    -------
    w_i : ndarray of shape (2,)
    """
    _check_beta(beta)
    diff = np.asarray(grad_i, dtype=float) - np.asarray(nu_i, dtype=float) / beta
    norm_diff = np.sqrt(np.sum(diff ** 2))
    if norm_diff == 0:
        return np.zeros_like(diff)
    x = max(norm_diff - 1. / beta, 0)
    return x * diff / norm_diff


def shrink_field(grad, nu, beta):
    """
    Shrinkage of the gradient of all pixels at once.

    Parameters
    ----------
    grad, nu : ndarrays of shape (n_pix, 2)

    beta : float

    Returns
    -------
    w : ndarray of shape (n_pix, 2)
        line i is ``shrink(grad[i], nu[i], beta)``
    """
    _check_beta(beta)
    grad = np.asarray(grad, dtype=float)
    nu = np.asarray(nu, dtype=float)
    if grad.shape != nu.shape:
        raise ValueError('Gradient and multiplier fields have different '
                         'shapes: %s and %s' % (grad.shape, nu.shape))
    diff = grad - nu / beta
    norm_diff = np.sqrt(np.sum(diff ** 2, axis=1))
    scale = np.zeros_like(norm_diff)
    nonzero = norm_diff > 0
    scale[nonzero] = np.maximum(norm_diff[nonzero] - 1. / beta, 0) \
                        / norm_diff[nonzero]
    return scale[:, np.newaxis] * diff
