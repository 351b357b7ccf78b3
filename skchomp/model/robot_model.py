from logging import getLogger

from cached_property import cached_property
import numpy as np

from skchomp.model.joint import JointType


logger = getLogger(__name__)


class JointModelGroup(object):
    """Named, ordered subset of the joints of a robot model.

    Parameters
    ----------
    name : str
        Group name, e.g. ``'rarm'``.
    joint_list : list[skchomp.model.JointModel]
        Joints of the group in planning order.
    """

    def __init__(self, name, joint_list):
        self.name = name
        self.joint_list = list(joint_list)

    def __repr__(self):
        return '#<{} {} ({} active joints)>'.format(
            self.__class__.__name__, self.name, len(self.active_joints))

    @cached_property
    def active_joints(self):
        """Joints which carry a variable, in group order."""
        return [j for j in self.joint_list
                if j.joint_type is not JointType.FIXED]

    @cached_property
    def active_joint_names(self):
        return [j.name for j in self.active_joints]

    @cached_property
    def variable_indices(self):
        """Index of the first variable of each active joint."""
        indices = []
        for joint in self.active_joints:
            if joint.variable_count != 1:
                raise ValueError(
                    '{} has {} variables; only single variable joints '
                    'can be planned'.format(joint, joint.variable_count))
            indices.append(joint.variable_index)
        return np.array(indices, dtype=np.int64)

    @property
    def n_joints(self):
        return len(self.active_joints)


class RobotModel(object):
    """Joint level description of a robot.

    Parameters
    ----------
    joint_list : list[skchomp.model.JointModel]
        All joints of the robot. Variable indices are assigned in list
        order.
    groups : dict[str, list[str]] or None
        Mapping from group name to the joint names of the group.

    Examples
    --------
    >>> from skchomp.model import ContinuousJoint, RevoluteJoint, RobotModel
    >>> robot = RobotModel(
    ...     [RevoluteJoint('shoulder'), ContinuousJoint('wrist')],
    ...     groups={'arm': ['shoulder', 'wrist']})
    >>> robot.joint_group('arm').variable_indices
    array([0, 1])
    """

    def __init__(self, joint_list, groups=None, name=None):
        self.name = name
        self.joint_list = list(joint_list)
        self._joints = {}
        index = 0
        for joint in self.joint_list:
            if joint.name in self._joints:
                raise ValueError('duplicated joint name {}'.format(joint.name))
            joint.variable_index = index
            index += joint.variable_count
            self._joints[joint.name] = joint
        self.n_variables = index

        self._groups = {}
        groups = groups or {}
        for group_name, joint_names in groups.items():
            self.add_joint_group(group_name, joint_names)

    def __repr__(self):
        return '#<{} {} ({} joints)>'.format(
            self.__class__.__name__, self.name, len(self.joint_list))

    @cached_property
    def joint_names(self):
        return [j.name for j in self.joint_list]

    def joint(self, name):
        try:
            return self._joints[name]
        except KeyError:
            raise KeyError('unknown joint {}'.format(name))

    def has_joint(self, name):
        return name in self._joints

    def add_joint_group(self, name, joint_names):
        group = JointModelGroup(name, [self.joint(n) for n in joint_names])
        self._groups[name] = group
        logger.debug('added joint group {} with {} active joints'.format(
            name, group.n_joints))
        return group

    def joint_group(self, name):
        try:
            return self._groups[name]
        except KeyError:
            raise KeyError('unknown joint group {}'.format(name))

    def has_joint_group(self, name):
        return name in self._groups

    @property
    def group_names(self):
        return list(self._groups.keys())

    def default_positions(self):
        """Variable vector with every bounded joint at its mid position."""
        positions = np.zeros(self.n_variables)
        for joint in self.joint_list:
            if joint.variable_count != 1:
                continue
            lower, upper = joint.min_position, joint.max_position
            if np.isfinite(lower) and np.isfinite(upper):
                positions[joint.variable_index] = 0.5 * (lower + upper)
        return positions
