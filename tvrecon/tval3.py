import warnings

import numpy as np

from .descent import (bb_step, lagrangian, line_search, onestep_direction,
                      u_subfunction)
from .gradient import gradient, side_length
from .projections import build_projection_operator
from .shrinkage import shrink_field
from .util import check_finite, rasterize, unrasterize


class ConvergenceWarning(UserWarning):
    """Issued when the iteration budget is exhausted before convergence"""


# ------------------ Inner loop: alternating minimization ------------------

def alternating_minimization(A, u, b, w, nu, lam, beta, mu, tol=1.e-2,
                             n_iter_max=200, alpha_init=1., verbose=0):
    """
    Minimize the augmented Lagrangian in (w, u) for fixed multipliers and
    penalty parameters.

    Parameters
    ----------
    A : ndarray or sparse matrix of shape (n_meas, n_pix)
        projection operator

    u : ndarray of shape (n_pix,)
        initial image

    b : ndarray of shape (n_meas,)
        measures

    w : ndarray of shape (n_pix, 2)
        initial gradient surrogate

    nu, lam : ndarrays of shape (n_pix, 2) and (n_meas,)
        multipliers of the gradient and data constraints

    beta, mu : floats
        penalty parameters

    tol : float, default 1.e-2
        the loop stops when the l2 norm of the image update is below tol

    n_iter_max : int, default 200
        maximal number of iterations

    alpha_init : float, default 1.
        step length used when the Barzilai-Borwein step is undefined

    verbose : int
        print the progress of the inner iterations if verbose > 1

    Returns
    -------
    w : ndarray of shape (n_pix, 2)

    u : ndarray of shape (n_pix,)

    converged : bool
        False if n_iter_max was reached or if the line search failed

    Notes
    -----
    Each iteration solves the w-subproblem exactly (shrinkage), then makes
    one steepest descent step on the u-subproblem, with a non-monotone line
    search of reference value

        C_{k+1} = (eta P_k C_k + Q(u_{k+1})) / P_{k+1},  P_{k+1} = eta P_k + 1

    initialized with the augmented Lagrangian at the initial point.
    """
    rho = .5
    delta = .5
    eta = .5
    u = np.array(u, dtype=float)
    w = np.array(w, dtype=float)
    p_k = 1.
    C = lagrangian(A, u, b, w, nu, lam, beta, mu)
    u_prev = u
    converged = False
    for i in range(n_iter_max):
        # w-subproblem
        w = shrink_field(gradient(u), nu, beta)
        # u-subproblem
        d = onestep_direction(A, u, b, w, nu, lam, beta, mu)
        if i == 0:
            d_prev = d
        else:
            d_prev = onestep_direction(A, u_prev, b, w, nu, lam, beta, mu)
        alpha = bb_step(u - u_prev, d - d_prev, alpha_init=alpha_init)
        alpha, u_new, accepted = line_search(A, u, d, b, w, nu, lam, beta,
                                             mu, alpha, C, rho=rho,
                                             delta=delta)
        inner_stop = np.sqrt(np.sum((u_new - u) ** 2))
        # Non-monotone reference value
        p_k1 = eta * p_k + 1
        q_k1 = u_subfunction(A, u_new, b, w, nu, lam, beta, mu)
        C = (eta * p_k * C + q_k1) / p_k1
        p_k = p_k1
        u_prev, u = u, u_new
        check_finite(u=u, w=w)
        if verbose > 1:
            print('    inner iteration % 3i, step %.3e, change %.3e'
                  % (i, alpha, inner_stop))
        if not accepted:
            if verbose:
                print('    line search failed at inner iteration %i' % i)
            break
        if inner_stop <= tol:
            converged = True
            break
    return w, u, converged


# ------------------ Outer loop: multipliers and continuation --------------

def tval3_tv(y, H, beta=np.sqrt(2), mu=3., coef=1.05, tol=1.e-2,
             tol_inner=1.e-2, n_iter_max=100, n_inner_max=200,
             alpha_init=1., verbose=0, callback=None):
    """
    TV reconstruction using the TVAL3 algorithm
    (TV minimization by Augmented Lagrangian and ALternating direction
    ALgorithms)

    Parameters
    ----------

    y : ndarray of floats
        Measures (tomography projection). Either a vector of size n_meas,
        or a sinogram of shape (l_x, n_dir) rasterized column by column.

    H : ndarray or sparse matrix of shape (n_meas, l_x**2)
        tomography design matrix

    beta : float, default sqrt(2)
        initial penalty parameter of the gradient constraint

    mu : float, default 3
        initial penalty parameter of the data constraint

    coef : float, default 1.05
        continuation factor of the penalty parameters

    tol : float, default 1.e-2
        the outer loop stops when the l2 norm of the image update of one
        round is below tol

    tol_inner : float, default 1.e-2
        stopping tolerance of the alternating minimization

    n_iter_max : int, default 100
        maximal number of outer rounds

    n_inner_max : int, default 200
        maximal number of inner iterations per round

    alpha_init : float, default 1.
        step length used when the Barzilai-Borwein step is undefined

    verbose : int, default 0
        1 prints one line per round, 2 adds the inner iterations

    callback : callable, optional
        called as ``callback(i, im)`` at the beginning of round i with the
        current image. If it returns True, the reconstruction stops.

    Returns
    -------

    res : list
        list of iterates of the reconstructed images (one per round)

    energies : list
        values of the augmented Lagrangian at the end of the rounds

    converged : bool
        False if the reconstruction stopped on n_iter_max or on the
        callback. A ConvergenceWarning is issued in the first case.

    Notes
    -----
    This algorithm solves

        min_u sum_i ||D_i u||  s.t.  H u = y

    by introducing w_i = D_i u and minimizing the augmented Lagrangian

        L(w, u) = sum_i (||w_i|| - nu_i . (D_i u - w_i)
                         + beta / 2 ||D_i u - w_i||^2)
                  - lambda . (H u - y) + mu / 2 ||H u - y||^2

    alternately in w and u (``alternating_minimization``). After each
    round the multipliers are updated,

        nu <- nu - beta (D u - w),  lambda <- lambda - mu (H u - y)

    and the penalties grow: beta <- coef beta, then mu <- coef beta.

    References
    ----------

    - Chengbo Li, Wotao Yin, Hong Jiang and Yin Zhang (2013). An efficient
      augmented Lagrangian method with applications to total variation
      minimization. Comput. Optim. Appl., 56(3):507-530.
    """
    b = np.asarray(y, dtype=float).ravel(order='F')
    n_meas, n_pix = H.shape
    if b.size != n_meas:
        raise ValueError('%d measures given for a design matrix with %d '
                         'lines' % (b.size, n_meas))
    l = side_length(n_pix)
    u = np.zeros(n_pix)
    w = np.zeros((n_pix, 2))
    nu = np.zeros((n_pix, 2))
    lam = np.zeros(n_meas)
    res, energies = [], []
    converged = False
    cancelled = False
    for i in range(n_iter_max):
        if callback is not None and callback(i, unrasterize(u, l, l)):
            cancelled = True
            break
        u_k = u
        w, u, inner_converged = alternating_minimization(H, u_k, b, w, nu,
                lam, beta, mu, tol=tol_inner, n_iter_max=n_inner_max,
                alpha_init=alpha_init, verbose=verbose)
        energies.append(lagrangian(H, u, b, w, nu, lam, beta, mu))
        # Multipliers
        nu = nu - beta * (gradient(u) - w)
        lam = lam - mu * (H.dot(u) - b)
        check_finite(nu=nu, lam=lam)
        # Continuation
        beta = coef * beta
        mu = coef * beta
        res.append(unrasterize(u, l, l))
        outer_stop = np.sqrt(np.sum((u - u_k) ** 2))
        if verbose:
            print('Iteration % 3i, energy % 6.3e, change % 6.3e'
                  % (i, energies[-1], outer_stop))
        if outer_stop <= tol and inner_converged:
            converged = True
            break
    if not converged and not cancelled:
        warnings.warn('TVAL3 did not converge in %d rounds'
                      % n_iter_max, ConvergenceWarning)
    return res, energies, converged


def reconstruct(sinogram, tilt_angles=None, H=None, random_state=None,
                **kwargs):
    """
    Reconstruct an image from its sinogram.

    Parameters
    ----------
    sinogram : ndarray of shape (l_x, n_dir)
        column j is the projection acquired at the j-th tilt angle

    tilt_angles : 1-d array of floats, optional
        tilt angles of the acquisition, one per column of the sinogram

    H : ndarray or sparse matrix of shape (l_x n_dir, l_x**2), optional
        design matrix. If None, it is built with
        ``build_projection_operator``.

    random_state : int, RandomState instance or None
        passed to ``build_projection_operator``

    kwargs : parameters of ``tval3_tv``

    Returns
    -------
    im : ndarray of shape (l_x, l_x)
        reconstructed image

    converged : bool
    """
    sinogram = np.asarray(sinogram, dtype=float)
    if sinogram.ndim != 2:
        raise ValueError('The sinogram must be a 2-d array, got shape %s'
                         % (sinogram.shape,))
    if not np.all(np.isfinite(sinogram)):
        raise ValueError('The sinogram holds NaN or infinite values')
    l_x, n_dir = sinogram.shape
    if tilt_angles is not None and len(tilt_angles) != n_dir:
        raise ValueError('Sinogram with %d projections but %d tilt angles'
                         % (n_dir, len(tilt_angles)))
    if H is None:
        H = build_projection_operator(l_x, n_dir, tilt_angles=tilt_angles,
                                      random_state=random_state)
    elif H.shape != (l_x * n_dir, l_x ** 2):
        raise ValueError('Design matrix of shape %s does not match a '
                         'sinogram of shape %s' % (H.shape, sinogram.shape))
    res, energies, converged = tval3_tv(rasterize(sinogram), H, **kwargs)
    if not res:
        return np.zeros((l_x, l_x)), converged
    return res[-1], converged
