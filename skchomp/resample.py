from logging import getLogger

import numpy as np

from skchomp.errors import InsufficientWaypoints
from skchomp.errors import JointCountMismatch


logger = getLogger(__name__)


def resample_indices(n_source, n_target):
    """Map every target point to the source waypoint it is copied from.

    If the source is not longer than the target, each source waypoint
    is repeated ``n_target // n_source`` times and the first
    ``n_target % n_source`` waypoints once more. Otherwise the source is
    decimated by taking ``floor(i * n_source / n_target)``.

    Parameters
    ----------
    n_source : int
        Number of source waypoints (>= 2).
    n_target : int
        Number of target points.

    Returns
    -------
    indices : numpy.ndarray[int](n_target,)
        Source index of every target point, in non-decreasing order.
    """
    if n_source < 2:
        raise InsufficientWaypoints(
            'trajectory must contain at least start and goal state, '
            'got {} waypoints'.format(n_source))
    if n_source <= n_target:
        repeat, remainder = divmod(n_target, n_source)
        counts = np.full(n_source, repeat, dtype=np.int64)
        counts[:remainder] += 1
        return np.repeat(np.arange(n_source), counts)
    return (np.arange(n_target) * n_source) // n_target


def _waypoint_positions(waypoint, joint_group):
    if joint_group is None:
        return np.asarray(waypoint, dtype=np.float64).reshape(-1)
    return waypoint.group_positions(joint_group)


def resample(waypoints, trajectory, joint_group=None):
    """Fill ``trajectory`` from a waypoint sequence of arbitrary length.

    Every point of ``trajectory`` including the fixed start and goal
    points is overwritten.

    Parameters
    ----------
    waypoints : sequence
        Source waypoints in time order. Either
        :class:`skchomp.model.RobotState` instances, projected onto the
        active joints of ``joint_group``, or joint position vectors
        already in the trajectory's joint order.
    trajectory : skchomp.trajectory.TrajectoryBuffer
        Target buffer.
    joint_group : skchomp.model.JointModelGroup or None
        Group used to project robot states.

    Returns
    -------
    bool
        ``True`` once the buffer is filled.
    """
    waypoints = list(waypoints)
    if joint_group is not None and joint_group.n_joints != trajectory.n_joints:
        raise JointCountMismatch(
            'group {} has {} active joints but trajectory has {}'.format(
                joint_group.name, joint_group.n_joints, trajectory.n_joints))
    indices = resample_indices(len(waypoints), trajectory.n_points)

    rows = []
    for waypoint in waypoints:
        positions = _waypoint_positions(waypoint, joint_group)
        if positions.shape != (trajectory.n_joints,):
            raise JointCountMismatch(
                'waypoint has {} joints but trajectory has {}'.format(
                    positions.shape[0], trajectory.n_joints))
        rows.append(positions)
    trajectory[:] = np.array(rows)[indices]
    logger.debug('resampled {} waypoints onto {} points'.format(
        len(waypoints), trajectory.n_points))
    return True
