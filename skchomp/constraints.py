"""Goal constraints of a planning request."""

from dataclasses import dataclass
from dataclasses import field
from logging import getLogger
import sys
from typing import List

from skchomp.goal import shortest_angular_distance


logger = getLogger(__name__)


@dataclass
class JointConstraintSpec:
    """Target position of one joint with an asymmetric tolerance."""

    joint_name: str
    position: float
    tolerance_above: float = 1e-4
    tolerance_below: float = 1e-4
    weight: float = 1.0


@dataclass
class Constraints:
    """One goal constraint set.

    Only joint constraints are supported by the planner; position and
    orientation constraints are accepted here so that requests carrying
    them can be rejected.
    """

    joint_constraints: List[JointConstraintSpec] = field(default_factory=list)
    position_constraints: list = field(default_factory=list)
    orientation_constraints: list = field(default_factory=list)

    @property
    def is_joint_space(self):
        return (len(self.joint_constraints) > 0
                and len(self.position_constraints) == 0
                and len(self.orientation_constraints) == 0)


class ConstraintEvaluationResult(object):

    def __init__(self, satisfied, distance):
        self.satisfied = satisfied
        self.distance = distance

    def __repr__(self):
        return '#<{} satisfied={} distance={}>'.format(
            self.__class__.__name__, self.satisfied, self.distance)


class JointConstraint(object):
    """Decide whether a robot state satisfies a joint constraint.

    Parameters
    ----------
    robot_model : skchomp.model.RobotModel
        Model the constrained joint belongs to.
    """

    def __init__(self, robot_model):
        self.robot_model = robot_model
        self.clear()

    def clear(self):
        self.joint = None
        self.position = None
        self.tolerance_above = None
        self.tolerance_below = None

    @property
    def enabled(self):
        return self.joint is not None

    def configure(self, spec):
        """Configure from a :class:`JointConstraintSpec`.

        Returns
        -------
        bool
            ``False`` if the joint is unknown, has not exactly one variable
            or the tolerances are negative.
        """
        self.clear()
        if not self.robot_model.has_joint(spec.joint_name):
            logger.error('Joint {} is not known to the robot model'.format(
                spec.joint_name))
            return False
        joint = self.robot_model.joint(spec.joint_name)
        if joint.variable_count != 1:
            logger.error('Joint {} has {} variables'.format(
                spec.joint_name, joint.variable_count))
            return False
        if spec.tolerance_above < 0 or spec.tolerance_below < 0:
            logger.warning('Negative tolerance for joint {}'.format(
                spec.joint_name))
            return False
        self.joint = joint
        self.position = spec.position
        self.tolerance_above = spec.tolerance_above
        self.tolerance_below = spec.tolerance_below
        return True

    def decide(self, state):
        """Evaluate the constraint on ``state``.

        Continuous joints compare along the shortest angular distance.

        Returns
        -------
        result : ConstraintEvaluationResult
        """
        if not self.enabled:
            return ConstraintEvaluationResult(True, 0.0)
        current = state.position(self.joint)
        if self.joint.is_continuous:
            dif = shortest_angular_distance(self.position, current)
        else:
            dif = current - self.position
        eps = sys.float_info.epsilon
        satisfied = (-self.tolerance_below - eps
                     <= dif
                     <= self.tolerance_above + eps)
        if not satisfied:
            logger.debug(
                'Constraint violated: joint {} position {} target {} '
                'tolerance above {} below {}'.format(
                    self.joint.name, current, self.position,
                    self.tolerance_above, self.tolerance_below))
        return ConstraintEvaluationResult(satisfied, abs(dif))
