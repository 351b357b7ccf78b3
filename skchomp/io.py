"""Reading and writing trajectories as delimited numeric tables."""

from logging import getLogger

import numpy as np

from skchomp.errors import InvalidInitializationFile
from skchomp.errors import SizeMismatch


logger = getLogger(__name__)


def read_trajectory_csv(path, precision=8, delimiter=',', transpose=False):
    """Read a trajectory matrix from a delimited text file.

    Parameters
    ----------
    path : str or pathlib.Path
        File to read.
    precision : int
        Number of decimals every value is rounded to.
    delimiter : str
        Column delimiter.
    transpose : bool
        If ``True``, rows of the file are joints and columns are points.

    Returns
    -------
    trajectory : numpy.ndarray(n_points, n_joints)
    """
    matrix = np.loadtxt(path, delimiter=delimiter, dtype=np.float64,
                        ndmin=2)
    matrix = np.round(matrix, precision)
    if transpose:
        matrix = matrix.T
    logger.debug('read {} x {} trajectory from {}'.format(
        matrix.shape[0], matrix.shape[1], path))
    return np.ascontiguousarray(matrix)


def write_trajectory_csv(path, trajectory, precision=8, delimiter=',',
                         transpose=False):
    """Write a trajectory matrix, one point per row unless ``transpose``.
    """
    matrix = np.asarray(trajectory, dtype=np.float64)
    if matrix.ndim != 2:
        raise SizeMismatch(
            'trajectory must be a 2D matrix, got shape {}'.format(
                matrix.shape))
    if transpose:
        matrix = matrix.T
    np.savetxt(path, matrix, fmt='%.{}f'.format(precision),
               delimiter=delimiter)


def fill_from_file(trajectory, path, precision=8, delimiter=',',
                   transpose=False):
    """Replace every point of ``trajectory`` by the matrix stored at ``path``.

    Raises
    ------
    InvalidInitializationFile
        If ``path`` cannot be read or does not hold a numeric table.
    SizeMismatch
        If the stored matrix is not ``n_points x n_joints`` after the
        optional transpose.
    """
    try:
        matrix = read_trajectory_csv(path, precision=precision,
                                     delimiter=delimiter,
                                     transpose=transpose)
    except (OSError, ValueError) as e:
        logger.error('Could not read initialization file {}: {}'.format(
            path, e))
        raise InvalidInitializationFile(
            'Could not read initialization file {}: {}'.format(path, e))
    trajectory.set_trajectory(matrix)
    return trajectory
