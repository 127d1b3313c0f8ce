"""
u-subproblem of the TVAL3 algorithm.

With the gradient surrogate w fixed, the image u minimizes the quadratic
function

    Q(u) = sum_i (- nu_i . (D_i u - w_i) + beta / 2 ||D_i u - w_i||^2)
           - lambda . (A u - b) + mu / 2 ||A u - b||^2

This is done approximately by a single steepest descent step, with a
Barzilai-Borwein initial step length and a non-monotone Armijo line search.

References
----------

- Chengbo Li (2009). An efficient algorithm for total variation
  regularization with applications to the single pixel camera and
  compressive sensing. Master's thesis, Rice University.

- H. Zhang and W. W. Hager (2004). A nonmonotone line search technique and
  its application to unconstrained optimization. SIAM J. Optim.,
  14(4):1043-1056.
"""

import numpy as np

from .gradient import gradient, gradient_adjoint


def _check_shapes(A, u, b, w, nu, lam):
    n_meas, n_pix = A.shape
    if u.shape != (n_pix,):
        raise ValueError('Image of size %d does not match an operator with '
                         '%d columns' % (u.size, n_pix))
    if b.shape != (n_meas,) or lam.shape != (n_meas,):
        raise ValueError('Measures (%d) and multiplier (%d) must match the '
                         '%d lines of the operator'
                         % (b.size, lam.size, n_meas))
    if w.shape != (n_pix, 2) or nu.shape != (n_pix, 2):
        raise ValueError('Gradient surrogate %s and multiplier %s must be of '
                         'shape (%d, 2)' % (w.shape, nu.shape, n_pix))


def _penalty_terms(A, u, b, w, nu, lam, beta, mu):
    u, b, w, nu, lam = [np.asarray(x, dtype=float)
                        for x in (u, b, w, nu, lam)]
    _check_shapes(A, u, b, w, nu, lam)
    diff = gradient(u) - w
    err = A.dot(u) - b
    value = - np.sum(nu * diff) + beta / 2. * np.sum(diff ** 2)
    value += - np.dot(lam, err) + mu / 2. * np.dot(err, err)
    return value


def lagrangian(A, u, b, w, nu, lam, beta, mu):
    """
    Augmented Lagrangian of the TV problem

        min sum_i ||w_i||  s.t.  D_i u = w_i,  A u = b

    Parameters
    ----------
    A : ndarray or sparse matrix of shape (n_meas, n_pix)
        projection operator

    u : ndarray of shape (n_pix,)
        rasterized image

    b : ndarray of shape (n_meas,)
        measures

    w : ndarray of shape (n_pix, 2)
        gradient surrogate

    nu : ndarray of shape (n_pix, 2)
        multiplier of the gradient constraint

    lam : ndarray of shape (n_meas,)
        multiplier of the data constraint

    beta, mu : floats
        penalty parameters of the gradient and data constraints

    Returns
    -------
    value : float
    """
    w = np.asarray(w, dtype=float)
    tv_w = np.sqrt(np.sum(w ** 2, axis=1)).sum()
    return tv_w + _penalty_terms(A, u, b, w, nu, lam, beta, mu)


def u_subfunction(A, u, b, w, nu, lam, beta, mu):
    """
    Quadratic function Q(u) minimized by the u-subproblem: the augmented
    Lagrangian without the TV term of w (same parameters as ``lagrangian``).
    """
    return _penalty_terms(A, u, b, w, nu, lam, beta, mu)


def onestep_direction(A, u, b, w, nu, lam, beta, mu):
    """
    Gradient of Q with respect to u (same parameters as ``lagrangian``).

        sum_i D_i^T (beta (D_i u - w_i) - nu_i) + mu A^T (A u - b) - A^T lam

    The transposed gradient is applied through the sparsity pattern of the
    finite differences, no per-pixel matrix is built.

    Returns
    -------
    d : ndarray of shape (n_pix,)
    """
    u, b, w, nu, lam = [np.asarray(x, dtype=float)
                        for x in (u, b, w, nu, lam)]
    _check_shapes(A, u, b, w, nu, lam)
    d = gradient_adjoint(beta * (gradient(u) - w) - nu)
    d += A.T.dot(mu * (A.dot(u) - b) - lam)
    return d


def bb_step(s, y, alpha_init=1.):
    """
    Barzilai-Borwein step length (s . y) / (y . y)

    s is the difference between two iterates, y the difference between
    their descent directions. When the ratio is undefined (y == 0) or not
    a positive number, ``alpha_init`` is returned.
    """
    yy = np.dot(y, y)
    if yy == 0:
        return alpha_init
    alpha = np.dot(s, y) / yy
    if not (np.isfinite(alpha) and alpha > 0):
        return alpha_init
    return alpha


def line_search(A, u, d, b, w, nu, lam, beta, mu, alpha0, C, rho=.5,
                delta=.5, n_backtrack_max=60):
    """
    Non-monotone Armijo backtracking along the direction -d.

    The step is divided by 1 / rho before every trial, starting from
    alpha0, until

        Q(u - alpha d) <= C - delta * alpha * ||d||^2

    where C is the non-monotone reference value.

    Parameters
    ----------
    d : ndarray of shape (n_pix,)
        descent direction (gradient of Q at u)

    alpha0 : float
        initial step length (Barzilai-Borwein)

    C : float
        reference value of the non-monotone search

    rho : float, default .5
        backtracking factor

    delta : float, default .5
        sufficient decrease parameter

    n_backtrack_max : int, default 60
        maximal number of trial steps

    Returns
    -------
    alpha : float
        accepted step, 0 if no move was made

    u_new : ndarray of shape (n_pix,)

    accepted : bool
        False if no trial step satisfied the Armijo condition. The step
        is then rejected and u_new equals u.
    """
    u = np.asarray(u, dtype=float)
    d = np.asarray(d, dtype=float)
    dd = np.dot(d, d)
    if dd == 0:
        # u is already the minimizer of Q
        return 0., u.copy(), True
    alpha = alpha0
    for i in range(n_backtrack_max):
        alpha = rho * alpha
        u_new = u - alpha * d
        q = u_subfunction(A, u_new, b, w, nu, lam, beta, mu)
        if q <= C - delta * alpha * dd:
            return alpha, u_new, True
    return 0., u.copy(), False
