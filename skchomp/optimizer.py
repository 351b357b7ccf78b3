"""Optimizer context interface.

The gradient based optimizer itself (obstacle and smoothness costs,
descent step) lives outside this package. The planner only needs the
small interface below.
"""

from abc import ABC
from abc import abstractmethod


class ChompOptimizer(ABC):
    """Abstract optimizer context bound to one trajectory.

    A new context is created for every optimization attempt. Subclasses
    receive the trajectory buffer, the planning scene, the planning group
    name, the (possibly escalated) parameters and the start state, and
    modify the free points of the trajectory in place.

    Parameters
    ----------
    trajectory : skchomp.trajectory.TrajectoryBuffer
        Trajectory to optimize in place.
    planning_scene : skchomp.planner.PlanningScene
        Scene to plan in.
    group_name : str
        Planning group.
    parameters : skchomp.parameters.ChompParameters
        Parameters of this attempt.
    start_state : skchomp.model.RobotState
        Start state of the request.
    """

    def __init__(self, trajectory, planning_scene, group_name, parameters,
                 start_state):
        self.trajectory = trajectory
        self.planning_scene = planning_scene
        self.group_name = group_name
        self.parameters = parameters
        self.start_state = start_state

    @abstractmethod
    def initialize(self):
        """Prepare the optimization.

        Returns
        -------
        bool
            ``False`` if the optimizer cannot be used for this request.
        """

    @abstractmethod
    def optimize(self):
        """Run one optimization within ``parameters.planning_time_limit``.

        Returns
        -------
        bool
            ``True`` if a solution was found.
        """

    @abstractmethod
    def is_collision_free(self):
        """Return ``True`` if the current trajectory is collision free."""
