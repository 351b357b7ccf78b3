"""Initial trajectory fillers.

Every filler writes the free range ``[start_index, end_index]`` of a
:class:`skchomp.trajectory.TrajectoryBuffer` from the two fixed points
right outside of it, which must be set beforehand.
"""

from logging import getLogger

import numpy as np


logger = getLogger(__name__)

# time step of the cubic filler, independent of the buffer discretization
CUBIC_TIME_STEP = 0.001

INITIALIZATION_METHODS = (
    'quintic-spline',
    'linear',
    'cubic',
    'fillTrajectory',
    'from-file',
)


def _boundary(trajectory):
    free = trajectory.free_range.validate(
        trajectory.n_points, with_boundary=True)
    return free.boundary_start, free.boundary_end, len(free) > 0


def fill_linear(trajectory):
    """Fill the free points by linear interpolation.

    Point ``j`` is set to ``x0 + j * (x1 - x0) / (end - 1)`` where ``end``
    is the index of the fixed goal point.
    """
    start, end, has_free_points = _boundary(trajectory)
    if not has_free_points:
        return trajectory
    x0 = trajectory[start]
    x1 = trajectory[end]
    theta = (x1 - x0) / (end - 1)
    j = np.arange(start + 1, end)[:, None]
    trajectory[start + 1:end] = x0 + j * theta
    return trajectory


def fill_cubic(trajectory):
    """Fill the free points with a cubic polynomial per joint.

    The polynomial is evaluated on a fixed time step of
    :data:`CUBIC_TIME_STEP` rather than the buffer discretization.
    """
    start, end, has_free_points = _boundary(trajectory)
    if not has_free_points:
        return trajectory
    dt = CUBIC_TIME_STEP
    total_time = (end - 1) * dt
    x0 = trajectory[start]
    dx = trajectory[end] - x0

    a0 = x0
    a2 = (3.0 / total_time ** 2) * dx
    a3 = (-2.0 / total_time ** 3) * dx

    t = (np.arange(start + 1, end) * dt)[:, None]
    trajectory[start + 1:end] = a0 + a2 * t ** 2 + a3 * t ** 3
    return trajectory


def min_jerk_coefficients(x0, x1, total_time):
    """Coefficients of the rest-to-rest minimum jerk quintic.

    Parameters
    ----------
    x0 : numpy.ndarray
        Start positions.
    x1 : numpy.ndarray
        Goal positions.
    total_time : float
        Duration of the motion.

    Returns
    -------
    coeffs : numpy.ndarray(6, n_joints)
        ``coeffs[k]`` multiplies ``t ** k``.
    """
    x0 = np.asarray(x0, dtype=np.float64)
    x1 = np.asarray(x1, dtype=np.float64)
    dx = x1 - x0
    # zero velocity and acceleration at both ends
    a0 = x0
    a1 = np.zeros_like(x0)
    a2 = np.zeros_like(x0)
    a3 = 10.0 * dx / total_time ** 3
    a4 = -15.0 * dx / total_time ** 4
    a5 = 6.0 * dx / total_time ** 5
    return np.array([a0, a1, a2, a3, a4, a5])


def fill_min_jerk(trajectory):
    """Fill the free points with a minimum jerk quintic spline.

    The spline starts and ends at rest, i.e. its velocity and
    acceleration are zero at both fixed points.
    """
    start, end, has_free_points = _boundary(trajectory)
    if not has_free_points:
        return trajectory
    dt = trajectory.discretization
    coeffs = min_jerk_coefficients(
        trajectory[start], trajectory[end], (end - start) * dt)
    t = (np.arange(start + 1, end) - start) * dt
    powers = t[:, None] ** np.arange(6)[None, :]
    trajectory[start + 1:end] = powers.dot(coeffs)
    return trajectory


_fillers = {
    'quintic-spline': fill_min_jerk,
    'linear': fill_linear,
    'cubic': fill_cubic,
}


def fill_trajectory(trajectory, method='quintic-spline'):
    """Fill the free points of ``trajectory`` with a closed form method.

    Parameters
    ----------
    trajectory : skchomp.trajectory.TrajectoryBuffer
        Buffer whose fixed points are already set.
    method : str
        One of ``'quintic-spline'``, ``'linear'`` or ``'cubic'``.
    """
    if method not in _fillers:
        raise ValueError(
            'Unknown interpolation method {}. Expected one of {}'.format(
                method, sorted(_fillers)))
    logger.debug('filling {} with {}'.format(trajectory, method))
    return _fillers[method](trajectory)
