import numpy as np
from numpy.testing import assert_array_equal, assert_almost_equal, \
                assert_raises

from ..gradient import gradient_at, gradient, gradient_adjoint, \
                unit_gradient_row, tv_norm, side_length


def test_gradient_at_boundaries():
    l_x = 3
    u = np.arange(l_x ** 2, dtype=float)
    # bottom right corner
    assert_array_equal(gradient_at(u, 8), [0, 0])
    # last column: no right neighbour
    assert_array_equal(gradient_at(u, 6), [0, -1])
    assert_array_equal(gradient_at(u, 7), [0, -1])
    # last row: no down neighbour
    assert_array_equal(gradient_at(u, 2), [-3, 0])
    assert_array_equal(gradient_at(u, 5), [-3, 0])
    # inside
    assert_array_equal(gradient_at(u, 0), [-3, -1])
    assert_array_equal(gradient_at(u, 4), [-3, -1])


def test_gradient_at_image():
    # A 2-d image is rasterized column by column
    im = np.array([[1., 2.],
                   [4., 8.]])
    assert_array_equal(gradient_at(im, 0), [1 - 2, 1 - 4])
    assert_array_equal(gradient_at(im, 1), [4 - 8, 0])
    assert_array_equal(gradient_at(im, 2), [0, 2 - 8])


def test_gradient_at_out_of_range():
    u = np.zeros(16)
    assert_raises(ValueError, gradient_at, u, 16)
    assert_raises(ValueError, gradient_at, u, -1)
    assert_raises(ValueError, unit_gradient_row, u, 16)
    assert_raises(ValueError, gradient_at, np.zeros(15), 0)


def test_side_length():
    assert side_length(64) == 8
    assert side_length(1) == 1
    assert_raises(ValueError, side_length, 10)


def test_full_gradient():
    l_x = 5
    rs = np.random.RandomState(0)
    u = rs.randn(l_x ** 2)
    grad = gradient(u)
    assert grad.shape == (l_x ** 2, 2)
    for i in range(l_x ** 2):
        assert_array_equal(grad[i], gradient_at(u, i))


def test_unit_gradient_row():
    l_x = 4
    rs = np.random.RandomState(1)
    u = rs.randn(l_x ** 2)
    for i in range(l_x ** 2):
        op = unit_gradient_row(u, i)
        assert op.shape == (2, l_x ** 2)
        assert set(np.unique(op.toarray())) <= set([-1, 0, 1])
        assert_almost_equal(op.dot(u), gradient_at(u, i))
    # corner pixel has an empty operator
    assert unit_gradient_row(u, l_x ** 2 - 1).nnz == 0


def test_grad_adjoint():
    # We need to check that <D x, y> = <x, DT y> for x and y random vectors
    l_x = 7
    rs = np.random.RandomState(42)
    x = rs.normal(size=l_x ** 2)
    y = rs.normal(size=(l_x ** 2, 2))
    assert_almost_equal(np.sum(gradient(x) * y),
                        np.sum(x * gradient_adjoint(y)))
    # same as summing the transposed unit gradient rows
    res = sum(unit_gradient_row(x, i).T.dot(y[i]) for i in range(l_x ** 2))
    assert_almost_equal(gradient_adjoint(y), res)


def test_tv_norm():
    assert tv_norm(np.ones(16)) == 0
    im = np.zeros((4, 4))
    im[:, 2:] = 1
    # one vertical edge of length 4
    assert_almost_equal(tv_norm(im), 4)
