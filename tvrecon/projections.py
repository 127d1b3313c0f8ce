import numpy as np

from .util import rasterize, unrasterize

# --------------- Tomo projection operator  --------------------

def _check_random_state(random_state):
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


def build_projection_operator(l_x, n_dir=None, tilt_angles=None,
                              random_state=None):
    """
    Compute the tomography design matrix.

    Parameters
    ----------

    l_x : int
        linear size of image array. The detector also has l_x pixels.

    n_dir : int, default l_x
        number of angles at which projections are acquired.

    tilt_angles : 1-d array of floats, optional
        tilt angles of the acquisition, in degrees. Only its length is
        checked against n_dir (see Notes).

    random_state : int, RandomState instance or None
        seed (or generator) of the random entries

    Returns
    -------
    p : ndarray of shape (n_dir l_x, l_x**2)
        Dense design matrix, mapping an image rasterized column by column
        to a sinogram of shape (l_x, n_dir) rasterized column by column.

    Notes
    -----
    The operator is a placeholder: its entries are independent draws of
    a standard normal distribution, and the geometry of the acquisition
    (tilt angles) is not taken into account. Such a matrix satisfies
    the conditions of compressive sensing, so that images can be recovered
    from measures simulated with the same matrix (see ``projection``), but
    not from real tomography data.

    Examples
    --------
    >>> op = build_projection_operator(8, n_dir=3, random_state=0)
    >>> op.shape
    (24, 64)
    """
    if n_dir is None:
        n_dir = l_x if tilt_angles is None else len(tilt_angles)
    if tilt_angles is not None and len(tilt_angles) != n_dir:
        raise ValueError('%d tilt angles given for %d projection directions'
                         % (len(tilt_angles), n_dir))
    if l_x < 1 or n_dir < 1:
        raise ValueError('Image size and number of directions must be '
                         'positive, got l_x=%r, n_dir=%r' % (l_x, n_dir))
    rs = _check_random_state(random_state)
    return rs.randn(l_x * n_dir, l_x ** 2)


def projection(H, im):
    """
    Sinogram of an image, computed with the design matrix H.

    Parameters
    ----------
    H : ndarray or sparse matrix of shape (n_dir l_x, l_x**2)

    im : ndarray of shape (l_x, l_x)

    Returns
    -------
    sinogram : ndarray of shape (l_x, n_dir)
        column j holds the projection along the j-th direction
    """
    im = np.asarray(im, dtype=float)
    l_x = len(im)
    n_meas, n_pix = H.shape
    if im.shape != (l_x, l_x) or n_pix != l_x ** 2 or n_meas % l_x:
        raise ValueError('Operator of shape %s cannot project an image of '
                         'shape %s' % (H.shape, im.shape))
    return unrasterize(H.dot(rasterize(im)), l_x, n_meas // l_x)
