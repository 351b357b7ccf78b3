from dataclasses import dataclass
from functools import lru_cache
from logging import getLogger

import numpy as np
import scipy.sparse


logger = getLogger(__name__)

DIFF_RULE_LENGTH = 7

# finite difference rules centered on the middle entry, in order
# velocity, acceleration and jerk
DIFF_RULES = np.array([
    [0, 0, -2 / 6.0, -3 / 6.0, 6 / 6.0, -1 / 6.0, 0],
    [0, -1 / 12.0, 16 / 12.0, -30 / 12.0, 16 / 12.0, -1 / 12.0, 0],
    [0, 1 / 12.0, -17 / 12.0, 46 / 12.0, -46 / 12.0, 17 / 12.0, -1 / 12.0],
])

VELOCITY = 0
ACCELERATION = 1
JERK = 2

# duration between two output waypoints
DEFAULT_WAYPOINT_TIME_STEP = 0.1


@lru_cache(maxsize=100)
def diff_matrix(n_points, order=VELOCITY):
    """Banded finite difference matrix of shape (n_points, n_points).

    Row ``i`` holds the rule of ``DIFF_RULES[order]`` centered on column
    ``i``; entries falling outside the matrix are dropped.

    Parameters
    ----------
    n_points : int
        Number of trajectory points.
    order : int
        ``VELOCITY``, ``ACCELERATION`` or ``JERK``.

    Returns
    -------
    matrix : scipy.sparse.csr_matrix
    """
    rule = DIFF_RULES[order]
    half = DIFF_RULE_LENGTH // 2
    offsets = []
    diagonals = []
    for k, coef in enumerate(rule):
        offset = k - half
        if coef == 0 or abs(offset) >= n_points:
            continue
        offsets.append(offset)
        diagonals.append(np.full(n_points - abs(offset), coef))
    matrix = scipy.sparse.diags(
        diagonals, offsets, shape=(n_points, n_points), format='csr')
    # cached, do not allow in-place edits
    matrix.data.setflags(write=False)
    return matrix


def derive_velocities(positions):
    """Per joint velocity of a position matrix.

    Parameters
    ----------
    positions : numpy.ndarray(n_points, n_joints)
        Joint positions over time.

    Returns
    -------
    velocities : numpy.ndarray(n_points, n_joints)
        ``D @ positions`` with ``D = diff_matrix(n_points)``. The first and
        last rows are zero.
    """
    positions = np.asarray(positions, dtype=np.float64)
    n_points = positions.shape[0]
    velocities = np.asarray(diff_matrix(n_points).dot(positions))
    velocities[0] = 0.0
    velocities[-1] = 0.0
    return velocities


@dataclass(frozen=True, eq=False)
class Waypoint:
    """Output trajectory point.

    Attributes
    ----------
    positions : numpy.ndarray
        Joint positions (read-only).
    velocities : numpy.ndarray
        Joint velocities (read-only).
    duration_from_previous : float
        Time from the previous waypoint.
    """

    positions: np.ndarray
    velocities: np.ndarray
    duration_from_previous: float

    def __post_init__(self):
        for name in ('positions', 'velocities'):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.setflags(write=False)
            object.__setattr__(self, name, array)
        object.__setattr__(self, 'duration_from_previous',
                           float(self.duration_from_previous))


def make_waypoints(trajectory, time_step=DEFAULT_WAYPOINT_TIME_STEP):
    """Convert a trajectory buffer into output waypoints.

    Parameters
    ----------
    trajectory : skchomp.trajectory.TrajectoryBuffer
        Optimized trajectory.
    time_step : float
        Duration assigned to every waypoint but the first one, which has
        zero duration.

    Returns
    -------
    waypoints : list[Waypoint]
    """
    positions = trajectory.trajectory
    velocities = derive_velocities(positions)
    waypoints = []
    for i in range(trajectory.n_points):
        waypoints.append(Waypoint(
            positions[i], velocities[i],
            0.0 if i == 0 else time_step))
    logger.debug('created {} waypoints with {} joints'.format(
        len(waypoints), trajectory.n_joints))
    return waypoints
