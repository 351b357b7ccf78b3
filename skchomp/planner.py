from logging import getLogger
import time

from skchomp.constraints import JointConstraint
from skchomp.errors import ChompError
from skchomp.errors import CollisionDetected
from skchomp.errors import ErrorCode
from skchomp.errors import GoalToleranceViolated
from skchomp.errors import InvalidGoalState
from skchomp.errors import InvalidGroupName
from skchomp.errors import InvalidStartState
from skchomp.errors import NoPlanningScene
from skchomp.errors import UnsupportedGoalType
from skchomp.goal import adjust_goal
from skchomp.interpolation import fill_trajectory
from skchomp.io import fill_from_file
from skchomp.model import RobotState
from skchomp.parameters import ChompParameters
from skchomp.recovery import RecoveryController
from skchomp.resample import resample
from skchomp.trajectory import TrajectoryBuffer
from skchomp.velocity import make_waypoints


logger = getLogger(__name__)


class PlanningScene(object):
    """Robot model and current state to plan in.

    Parameters
    ----------
    robot_model : skchomp.model.RobotModel
        Robot model.
    current_state : skchomp.model.RobotState or None
        Current state of the robot. Default positions if ``None``.
    transforms : dict or None
        Named frames available to state conversions.
    """

    def __init__(self, robot_model, current_state=None, transforms=None):
        self.robot_model = robot_model
        if current_state is None:
            current_state = RobotState(robot_model)
        self._current_state = current_state
        self.transforms = dict(transforms or {})

    def current_state(self):
        """Return a copy of the current state."""
        return self._current_state.copy()

    def set_current_state(self, state):
        self._current_state = state.copy()


class MotionPlanRequest(object):
    """Joint space planning request.

    Parameters
    ----------
    group_name : str
        Planning group.
    goal_constraints : list[skchomp.constraints.Constraints]
        Exactly one joint space constraint set is supported.
    start_state : dict[str, float] or skchomp.model.RobotState or None
        Start positions applied on top of the scene's current state.
    reference_trajectory : sequence or None
        Waypoints used by the ``'fillTrajectory'`` initialization.
    """

    def __init__(self, group_name, goal_constraints, start_state=None,
                 reference_trajectory=None):
        self.group_name = group_name
        self.goal_constraints = list(goal_constraints)
        self.start_state = start_state
        self.reference_trajectory = reference_trajectory


class MotionPlanResponse(object):
    """Result of :meth:`ChompPlanner.solve`.

    Attributes
    ----------
    trajectory : list[skchomp.velocity.Waypoint] or None
        Planned waypoints, ``None`` unless ``error_code`` is ``SUCCESS``.
    error_code : skchomp.errors.ErrorCode
        Outcome of the request.
    processing_time : float
        Wall time spent in seconds.
    recovery : skchomp.recovery.RecoveryResult or None
        Outcome of the optimization loop, if it ran.
    """

    def __init__(self, trajectory=None, error_code=ErrorCode.SUCCESS,
                 processing_time=0.0, recovery=None):
        self.trajectory = trajectory
        self.error_code = error_code
        self.processing_time = processing_time
        self.recovery = recovery

    @property
    def success(self):
        return self.error_code == ErrorCode.SUCCESS

    def __repr__(self):
        return '#<{} {} ({:.4f} sec)>'.format(
            self.__class__.__name__, self.error_code.name,
            self.processing_time)


class ChompPlanner(object):
    """Plan joint space trajectories with a CHOMP style optimizer.

    Parameters
    ----------
    optimizer_factory : callable
        Creates an optimizer context for every attempt, see
        :class:`skchomp.recovery.RecoveryController`.
    constraint_factory : callable
        Called with the robot model; returns an object providing
        ``configure(spec)`` and ``decide(state)``. Defaults to
        :class:`skchomp.constraints.JointConstraint`.
    """

    def __init__(self, optimizer_factory, constraint_factory=None):
        self.optimizer_factory = optimizer_factory
        if constraint_factory is None:
            constraint_factory = JointConstraint
        self.constraint_factory = constraint_factory

    def _start_state(self, planning_scene, request):
        start_state = planning_scene.current_state()
        if isinstance(request.start_state, RobotState):
            start_state = request.start_state.copy()
        elif request.start_state:
            for name in request.start_state:
                if not planning_scene.robot_model.has_joint(name):
                    logger.error('Unknown start state joint {}'.format(name))
                    raise InvalidStartState(
                        'Unknown start state joint {}'.format(name))
            start_state.set_positions(request.start_state)
        if not start_state.satisfies_bounds():
            logger.error('Start state violates joint limits')
            raise InvalidStartState('Start state violates joint limits')
        return start_state

    def _joint_group(self, robot_model, group_name):
        if not robot_model.has_joint_group(group_name):
            logger.error('Unknown planning group {}'.format(group_name))
            raise InvalidGroupName(
                'Unknown planning group {}'.format(group_name))
        group = robot_model.joint_group(group_name)
        for joint in group.active_joints:
            if joint.variable_count != 1:
                logger.error('Group {} has multi-variable joint {}'.format(
                    group_name, joint.name))
                raise InvalidGroupName(
                    'Group {} has multi-variable joint {}'.format(
                        group_name, joint.name))
        return group

    def _goal_constraints(self, request):
        if len(request.goal_constraints) != 1:
            logger.error(
                'Expecting exactly one goal constraint, got: {}'.format(
                    len(request.goal_constraints)))
            raise UnsupportedGoalType(
                'Expecting exactly one goal constraint, got: {}'.format(
                    len(request.goal_constraints)))
        constraints = request.goal_constraints[0]
        if not constraints.is_joint_space:
            logger.error('Only joint-space goals are supported')
            raise UnsupportedGoalType('Only joint-space goals are supported')
        return constraints

    def initialize_trajectory(self, planning_scene, request, parameters):
        """Build the initial trajectory of a request.

        Returns
        -------
        trajectory : skchomp.trajectory.TrajectoryBuffer
            Trajectory with start, goal and initial free points set.
        start_state : skchomp.model.RobotState
            Start state of the request.
        constraints : skchomp.constraints.Constraints
            Goal constraints of the request.
        """
        if planning_scene is None:
            logger.error('No planning scene initialized.')
            raise NoPlanningScene('No planning scene initialized.')
        robot_model = planning_scene.robot_model
        group = self._joint_group(robot_model, request.group_name)

        start_state = self._start_state(planning_scene, request)
        trajectory = TrajectoryBuffer.from_duration(
            parameters.trajectory_duration,
            parameters.trajectory_discretization,
            group.n_joints)
        trajectory.point(0)[:] = start_state.group_positions(group)

        constraints = self._goal_constraints(request)
        goal_index = trajectory.n_points - 1
        goal_state = start_state.copy()
        for spec in constraints.joint_constraints:
            if not robot_model.has_joint(spec.joint_name):
                logger.error('Unknown goal joint {}'.format(spec.joint_name))
                raise InvalidGoalState(
                    'Unknown goal joint {}'.format(spec.joint_name))
            goal_state.set_position(spec.joint_name, spec.position)
        if not goal_state.satisfies_bounds():
            logger.error('Goal state violates joint limits')
            raise InvalidGoalState('Goal state violates joint limits')
        trajectory.point(goal_index)[:] = goal_state.group_positions(group)

        adjust_goal(trajectory, group, start_index=0, goal_index=goal_index)

        method = parameters.trajectory_initialization_method
        if method == 'fillTrajectory':
            reference = request.reference_trajectory
            if reference is None:
                reference = []
            joint_group = None
            if len(reference) > 0 and isinstance(reference[0], RobotState):
                joint_group = group
            resample(reference, trajectory, joint_group=joint_group)
        elif method == 'from-file':
            fill_from_file(
                trajectory, parameters.initialization_file,
                precision=parameters.initialization_file_precision,
                transpose=parameters.initialization_file_transposed)
        else:
            fill_trajectory(trajectory, method)
        logger.info(
            'CHOMP trajectory initialized using method: {}'.format(method))
        return trajectory, start_state, constraints

    def _check_goal_tolerance(self, robot_model, start_state, group,
                              waypoint, constraints):
        last_state = start_state.copy()
        last_state.set_group_positions(group, waypoint.positions)
        evaluator = self.constraint_factory(robot_model)
        for spec in constraints.joint_constraints:
            if not evaluator.configure(spec) \
                    or not evaluator.decide(last_state).satisfied:
                logger.error('Goal constraints are violated: {}'.format(
                    spec.joint_name))
                raise GoalToleranceViolated(
                    'Goal constraints are violated: {}'.format(
                        spec.joint_name))

    def _solve(self, planning_scene, request, parameters, response):
        trajectory, start_state, constraints = self.initialize_trajectory(
            planning_scene, request, parameters)
        group = planning_scene.robot_model.joint_group(request.group_name)

        optimize_time = time.time()
        controller = RecoveryController(self.optimizer_factory, parameters)
        recovery = controller.run(
            trajectory, planning_scene, request.group_name, start_state)
        response.recovery = recovery
        logger.debug('Optimization actually took {} sec to run'.format(
            time.time() - optimize_time))

        logger.debug('Output trajectory has {} joints'.format(
            trajectory.n_joints))
        waypoints = make_waypoints(
            trajectory, time_step=parameters.waypoint_time_step)

        if not recovery.optimizer.is_collision_free():
            logger.error('Motion plan is invalid.')
            raise CollisionDetected('Motion plan is invalid.')
        self._check_goal_tolerance(
            planning_scene.robot_model, start_state, group, waypoints[-1],
            constraints)
        return waypoints

    def solve(self, planning_scene, request, parameters=None):
        """Plan a trajectory for ``request``.

        Parameters
        ----------
        planning_scene : PlanningScene
            Scene to plan in.
        request : MotionPlanRequest
            Start state, goal constraints and planning group.
        parameters : skchomp.parameters.ChompParameters or None
            Planner parameters. Defaults are used if ``None``. The
            object is not modified.

        Returns
        -------
        response : MotionPlanResponse
            On failure ``response.trajectory`` is ``None`` and
            ``response.error_code`` tells the reason. Unknown joints,
            unknown or unplannable groups and unreadable initialization
            files are reported through the response as well; exceptions
            raised by the optimizer factory or the optimizer itself
            propagate.
        """
        start_time = time.time()
        if parameters is None:
            parameters = ChompParameters()
        response = MotionPlanResponse()
        try:
            response.trajectory = self._solve(
                planning_scene, request, parameters, response)
            response.error_code = ErrorCode.SUCCESS
        except ChompError as e:
            response.trajectory = None
            response.error_code = e.error_code
        response.processing_time = time.time() - start_time
        logger.debug('Serviced planning request in {} wall-seconds'.format(
            response.processing_time))
        return response
