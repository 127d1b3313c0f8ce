import numpy as np
from numpy.testing import assert_array_equal, assert_raises

from ..util import generate_synthetic_data, rasterize, unrasterize, \
                normalize, check_finite


def test_generate_data():
    l_x = 64
    data = generate_synthetic_data(l_x)
    assert data.shape == (l_x, l_x)
    assert np.all(np.unique(data) == [0, 1])
    x, y = np.ogrid[:l_x, :l_x]
    mask_outer = (x - l_x / 2.) ** 2 + (y - l_x / 2.) ** 2 > (l_x / 2.) ** 2
    assert np.all(data[mask_outer] == 0)
    # Do not crop outside the central circle
    data = generate_synthetic_data(l_x, crop=False)
    assert data[mask_outer].sum() > 0


def test_rasterize_column_major():
    im = np.arange(6.).reshape((2, 3))
    u = rasterize(im)
    assert_array_equal(u, [0, 3, 1, 4, 2, 5])
    n_rows = im.shape[0]
    for i in range(2):
        for j in range(3):
            assert u[j * n_rows + i] == im[i, j]


def test_rasterize_round_trip():
    rs = np.random.RandomState(0)
    im = rs.randn(5, 3)
    assert_array_equal(unrasterize(rasterize(im), 5, 3), im)
    u = rs.randn(12)
    assert_array_equal(rasterize(unrasterize(u, 4, 3)), u)


def test_rasterize_bad_shapes():
    assert_raises(ValueError, unrasterize, np.zeros(10), 3, 3)
    assert_raises(ValueError, rasterize, np.zeros(10))


def test_normalize():
    im = np.array([[-1., 0.], [1., 3.]])
    assert_array_equal(normalize(im), [[0, 0.25], [0.5, 1]])
    assert_array_equal(normalize(2 * np.ones((2, 2))), np.ones((2, 2)))


def test_check_finite():
    check_finite(u=np.zeros(3), w=np.ones((3, 2)))
    assert_raises(FloatingPointError, check_finite, u=np.array([0, np.nan]))
    assert_raises(FloatingPointError, check_finite, lam=np.array([np.inf]))
