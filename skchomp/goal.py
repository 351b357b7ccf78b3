from logging import getLogger

import numpy as np

from skchomp.errors import JointCountMismatch


logger = getLogger(__name__)


def normalize_angle_positive(angle):
    """Wrap ``angle`` into ``[0, 2 * pi)``."""
    return np.mod(angle, 2.0 * np.pi)


def shortest_angular_distance(from_angle, to_angle):
    """Signed shortest rotation from ``from_angle`` to ``to_angle``.

    Parameters
    ----------
    from_angle : float
        Start angle in radian.
    to_angle : float
        Target angle in radian.

    Returns
    -------
    delta : float
        Value in ``(-pi, pi]`` with
        ``from_angle + delta == to_angle (mod 2 pi)``. A rotation of
        exactly half a turn is reported as ``+pi``.

    Examples
    --------
    >>> from skchomp.goal import shortest_angular_distance
    >>> round(shortest_angular_distance(3.0, -3.0), 4)
    0.2832
    """
    delta = normalize_angle_positive(to_angle - from_angle)
    if delta > np.pi:
        delta -= 2.0 * np.pi
    return float(delta)


def adjust_goal(trajectory, joint_group, start_index=0, goal_index=None):
    """Make continuous joints reach their goal along the shortest way.

    For every continuous revolute joint of ``joint_group`` the goal
    point is rewritten to ``start + shortest_angular_distance(start,
    goal)``. Other joints are left untouched.

    Parameters
    ----------
    trajectory : skchomp.trajectory.TrajectoryBuffer
        Buffer with start and goal points set.
    joint_group : skchomp.model.JointModelGroup
        Group whose active joints match the trajectory columns.
    start_index : int
        Index of the start point.
    goal_index : int or None
        Index of the goal point. The last point if ``None``.

    Returns
    -------
    adjusted : list[int]
        Column indices of the rewritten joints.
    """
    if joint_group.n_joints != trajectory.n_joints:
        raise JointCountMismatch(
            'group {} has {} active joints but trajectory has {}'.format(
                joint_group.name, joint_group.n_joints, trajectory.n_joints))
    if goal_index is None:
        goal_index = trajectory.n_points - 1
    start = trajectory.point(start_index)
    goal = trajectory.point(goal_index)
    adjusted = []
    for i, joint in enumerate(joint_group.active_joints):
        if not joint.is_continuous:
            continue
        delta = shortest_angular_distance(start[i], goal[i])
        logger.info('{}: start is {} end {} short {}'.format(
            joint.name, start[i], goal[i], delta))
        goal[i] = start[i] + delta
        adjusted.append(i)
    return adjusted
