"""
Reading sinograms and tilt angles, writing reconstructed images.
"""

import warnings

import numpy as np
from matplotlib import image as mpimg


def load_sinogram(filename):
    """
    Load a sinogram stored as an image file.

    Parameters
    ----------
    filename : str
        path of the image. Each column of the image is the projection
        acquired at one tilt angle.

    Returns
    -------
    sinogram : ndarray of floats, of shape (l_x, n_dir)
        grayscale values between 0 and 1. Color images are converted to
        grayscale by averaging their RGB channels.
    """
    im = mpimg.imread(filename)
    if im.dtype.kind in 'ui':
        im = im / float(np.iinfo(im.dtype).max)
    im = np.asarray(im, dtype=float)
    if im.ndim == 3:
        if im.shape[-1] <= 2:
            # gray, gray + alpha
            im = im[..., 0]
        else:
            # drop the alpha channel
            im = im[..., :3].mean(axis=-1)
    if im.ndim != 2:
        raise ValueError('%s is not an image' % filename)
    return im


def load_tilt_angles(filename):
    """
    Load tilt angles from a text file.

    Parameters
    ----------
    filename : str
        text file holding one angle per line

    Returns
    -------
    angles : 1-d ndarray of floats
        A last value equal to the one before is considered as counted
        twice, and dropped.
    """
    with warnings.catch_warnings():
        # an empty file is reported below
        warnings.simplefilter('ignore', UserWarning)
        angles = np.loadtxt(filename, ndmin=1).ravel()
    if angles.size == 0:
        raise ValueError('No tilt angle found in %s' % filename)
    if angles.size > 1 and angles[-1] == angles[-2]:
        angles = angles[:-1]
    return angles


def write_image(im, filename):
    """
    Write a 2-d array as a grayscale image.

    Values are expected between 0 and 1 (see ``util.normalize``); values
    outside of this range are clipped.
    """
    im = np.asarray(im, dtype=float)
    if im.ndim != 2:
        raise ValueError('Can only write 2-d arrays, got shape %s'
                         % (im.shape,))
    mpimg.imsave(filename, np.clip(im, 0, 1), cmap='gray', vmin=0, vmax=1)
