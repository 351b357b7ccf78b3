# flake8: noqa

from skchomp.model.joint import ContinuousJoint
from skchomp.model.joint import FixedJoint
from skchomp.model.joint import JointModel
from skchomp.model.joint import JointType
from skchomp.model.joint import PrismaticJoint
from skchomp.model.joint import RevoluteJoint
from skchomp.model.robot_model import JointModelGroup
from skchomp.model.robot_model import RobotModel
from skchomp.model.robot_state import RobotState
