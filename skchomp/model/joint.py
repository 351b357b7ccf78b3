from enum import Enum

import numpy as np


class JointType(Enum):
    """Kind of a joint, resolved once when the robot model is built."""

    REVOLUTE = 'revolute'
    PRISMATIC = 'prismatic'
    FIXED = 'fixed'
    PLANAR = 'planar'
    FLOATING = 'floating'


_variable_counts = {
    JointType.REVOLUTE: 1,
    JointType.PRISMATIC: 1,
    JointType.FIXED: 0,
    JointType.PLANAR: 3,
    JointType.FLOATING: 7,
}


class JointModel(object):
    """Description of a single robot joint.

    Parameters
    ----------
    name : str
        Joint name.
    joint_type : JointType or str
        Kind of the joint.
    continuous : bool
        Only meaningful for revolute joints. A continuous joint has no
        travel limit and wraps around every ``2 * pi``.
    min_position : float or None
        Lower position bound. Ignored for continuous joints.
    max_position : float or None
        Upper position bound. Ignored for continuous joints.
    """

    def __init__(self, name,
                 joint_type=JointType.REVOLUTE,
                 continuous=False,
                 min_position=-np.pi,
                 max_position=np.pi):
        joint_type = JointType(joint_type)
        if continuous and joint_type is not JointType.REVOLUTE:
            raise ValueError(
                'only revolute joints can be continuous, {} is {}'.format(
                    name, joint_type.value))
        self.name = name
        self.joint_type = joint_type
        self.continuous = bool(continuous)
        if self.continuous:
            min_position, max_position = -np.inf, np.inf
        if min_position is None:
            min_position = -np.inf
        if max_position is None:
            max_position = np.inf
        if min_position > max_position:
            raise ValueError(
                '{}: min_position {} is larger than max_position {}'.format(
                    name, min_position, max_position))
        self.min_position = min_position
        self.max_position = max_position
        # assigned by RobotModel
        self.variable_index = None

    @property
    def variable_count(self):
        return _variable_counts[self.joint_type]

    @property
    def is_continuous(self):
        return self.joint_type is JointType.REVOLUTE and self.continuous

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        prefix = '{} {} {}'.format(
            self.__class__.__name__, self.joint_type.value, self.name)
        if self.is_continuous:
            prefix += ' continuous'
        return '#<%s>' % prefix

    def satisfies_position_bounds(self, position, margin=0.0):
        if self.is_continuous:
            return True
        return (self.min_position - margin
                <= position
                <= self.max_position + margin)


class RevoluteJoint(JointModel):

    def __init__(self, name, continuous=False,
                 min_position=-np.pi, max_position=np.pi):
        super(RevoluteJoint, self).__init__(
            name, JointType.REVOLUTE, continuous=continuous,
            min_position=min_position, max_position=max_position)


class ContinuousJoint(RevoluteJoint):

    def __init__(self, name):
        super(ContinuousJoint, self).__init__(name, continuous=True)


class PrismaticJoint(JointModel):

    def __init__(self, name, min_position=-1.0, max_position=1.0):
        super(PrismaticJoint, self).__init__(
            name, JointType.PRISMATIC,
            min_position=min_position, max_position=max_position)


class FixedJoint(JointModel):

    def __init__(self, name):
        super(FixedJoint, self).__init__(
            name, JointType.FIXED, min_position=0.0, max_position=0.0)
