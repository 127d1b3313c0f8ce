import numpy as np
from numpy.testing import assert_array_equal, assert_almost_equal, \
                assert_raises

from .. import io
from ..io import load_sinogram, load_tilt_angles, write_image


def test_load_tilt_angles(tmp_path):
    filename = tmp_path / 'angles.txt'
    filename.write_text('-60.\n-30.\n0.\n30.\n60.\n')
    assert_array_equal(load_tilt_angles(str(filename)),
                       [-60, -30, 0, 30, 60])
    # last value counted twice
    filename.write_text('-60.\n0.\n60.\n60.\n')
    assert_array_equal(load_tilt_angles(str(filename)), [-60, 0, 60])


def test_load_tilt_angles_errors(tmp_path):
    filename = tmp_path / 'empty.txt'
    filename.write_text('\n')
    assert_raises(ValueError, load_tilt_angles, str(filename))
    filename.write_text('10. ten\n')
    assert_raises(ValueError, load_tilt_angles, str(filename))
    assert_raises(IOError, load_tilt_angles, str(tmp_path / 'missing.txt'))


def test_write_load_image(tmp_path):
    filename = str(tmp_path / 'sinogram.png')
    rs = np.random.RandomState(0)
    im = rs.rand(8, 5)
    write_image(im, filename)
    loaded = load_sinogram(filename)
    assert loaded.shape == (8, 5)
    # 8 bits quantization
    assert np.abs(loaded - im).max() < 1. / 64
    # values outside [0, 1] are clipped
    write_image(np.array([[-1., 0.], [1., 2.]]), filename)
    assert_almost_equal(load_sinogram(filename), [[0, 0], [1, 1]], decimal=2)


def test_io_errors(tmp_path):
    assert_raises(ValueError, write_image, np.zeros(4),
                  str(tmp_path / 'flat.png'))
    assert_raises(IOError, load_sinogram, str(tmp_path / 'missing.png'))


def test_load_gray_alpha_image(monkeypatch):
    # gray + alpha: the alpha channel is not a gray level
    gray = np.array([[0., 0.25], [0.5, 1.]])
    gray_alpha = np.dstack((gray, np.ones_like(gray)))
    monkeypatch.setattr(io.mpimg, 'imread', lambda filename: gray_alpha)
    assert_array_equal(load_sinogram('gray_alpha.png'), gray)
    # 8 bits images are scaled to [0, 1]
    rgba = np.dstack([(255 * gray).astype(np.uint8)] * 3 +
                     [255 * np.ones((2, 2), dtype=np.uint8)])
    monkeypatch.setattr(io.mpimg, 'imread', lambda filename: rgba)
    assert_almost_equal(load_sinogram('rgba.png'), gray, decimal=2)
