"""
Reconstruct an image from a sinogram and its tilt angles.

Usage: tvrecon-recover <sinogram-image> <tilt-angles> <recovered-output>
"""

import argparse
import sys

from .io import load_sinogram, load_tilt_angles, write_image
from .tval3 import reconstruct
from .util import normalize


def build_parser():
    parser = argparse.ArgumentParser(prog='tvrecon-recover',
                                     description=__doc__.strip().split('\n')[0])
    parser.add_argument('sinogram', help='sinogram image, one column per '
                        'tilt angle')
    parser.add_argument('tilt_angles', help='text file of tilt angles')
    parser.add_argument('output', help='reconstructed image file')
    parser.add_argument('--tol', type=float, default=1.e-2,
                        help='stopping tolerance of the outer loop '
                        '(default: %(default)s)')
    parser.add_argument('--max-iter', type=int, default=100,
                        help='maximal number of outer rounds '
                        '(default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed of the random projection operator')
    parser.add_argument('-v', '--verbose', action='count', default=0)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    print('SinogramFile: %s' % args.sinogram)
    print('TiltAngleFile: %s' % args.tilt_angles)
    print('RecoveredOutput: %s' % args.output)
    try:
        tilt_angles = load_tilt_angles(args.tilt_angles)
        sinogram = load_sinogram(args.sinogram)
        print('Loaded %d tilt angles, sinogram of shape %s'
              % (len(tilt_angles), sinogram.shape))
        im, converged = reconstruct(sinogram, tilt_angles,
                                    random_state=args.seed, tol=args.tol,
                                    n_iter_max=args.max_iter,
                                    verbose=args.verbose)
        write_image(normalize(im), args.output)
    except (IOError, ValueError, FloatingPointError) as e:
        print('Error: %s' % e, file=sys.stderr)
        return 2
    if not converged:
        print('Reconstruction did not converge, last iterate written to %s'
              % args.output)
        return 1
    print('Reconstruction written to %s' % args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
