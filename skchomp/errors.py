"""Error kinds raised while building and optimizing a trajectory.

Every error carries a distinct :class:`ErrorCode`.  Library functions
raise these exceptions; :meth:`skchomp.planner.ChompPlanner.solve` turns
them into a response code for the caller.
"""

from enum import IntEnum


class ErrorCode(IntEnum):

    SUCCESS = 1
    NO_PLANNING_SCENE = -1
    INVALID_START_STATE = -2
    UNSUPPORTED_GOAL_TYPE = -3
    INVALID_GOAL_STATE = -4
    INVALID_DIMENSIONS = -5
    INDEX_OUT_OF_RANGE = -6
    SIZE_MISMATCH = -7
    JOINT_COUNT_MISMATCH = -8
    INSUFFICIENT_WAYPOINTS = -9
    OPTIMIZER_INIT_FAILED = -10
    COLLISION_DETECTED = -11
    GOAL_TOLERANCE_VIOLATED = -12
    INVALID_GROUP_NAME = -13
    INVALID_INITIALIZATION_FILE = -14


class ChompError(Exception):
    """Base class of all errors raised by skchomp."""

    error_code = None


class NoPlanningScene(ChompError, ValueError):
    error_code = ErrorCode.NO_PLANNING_SCENE


class InvalidStartState(ChompError, ValueError):
    error_code = ErrorCode.INVALID_START_STATE


class UnsupportedGoalType(ChompError, ValueError):
    error_code = ErrorCode.UNSUPPORTED_GOAL_TYPE


class InvalidGoalState(ChompError, ValueError):
    error_code = ErrorCode.INVALID_GOAL_STATE


class InvalidDimensions(ChompError, ValueError):
    error_code = ErrorCode.INVALID_DIMENSIONS


class IndexOutOfRange(ChompError, IndexError):
    error_code = ErrorCode.INDEX_OUT_OF_RANGE


class SizeMismatch(ChompError, ValueError):
    error_code = ErrorCode.SIZE_MISMATCH


class JointCountMismatch(ChompError, ValueError):
    error_code = ErrorCode.JOINT_COUNT_MISMATCH


class InsufficientWaypoints(ChompError, ValueError):
    error_code = ErrorCode.INSUFFICIENT_WAYPOINTS


class OptimizerInitFailed(ChompError, RuntimeError):
    error_code = ErrorCode.OPTIMIZER_INIT_FAILED


class CollisionDetected(ChompError, RuntimeError):
    error_code = ErrorCode.COLLISION_DETECTED


class GoalToleranceViolated(ChompError, RuntimeError):
    error_code = ErrorCode.GOAL_TOLERANCE_VIOLATED


class InvalidGroupName(ChompError, ValueError):
    error_code = ErrorCode.INVALID_GROUP_NAME


class InvalidInitializationFile(ChompError, ValueError):
    error_code = ErrorCode.INVALID_INITIALIZATION_FILE
