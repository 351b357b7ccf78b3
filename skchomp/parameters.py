"""Planner parameters.

:class:`ChompParameters` is an immutable snapshot. Failure recovery
does not modify the caller's parameters; :func:`escalate` returns a new
snapshot instead.
"""

import dataclasses
from dataclasses import dataclass
from logging import getLogger
from typing import Optional

import yaml

from skchomp.interpolation import INITIALIZATION_METHODS


logger = getLogger(__name__)

# increments applied after every failed optimization attempt
LEARNING_RATE_STEP = 0.02
RIDGE_FACTOR_STEP = 0.002
PLANNING_TIME_LIMIT_STEP = 5.0
MAX_ITERATIONS_STEP = 50


@dataclass(frozen=True)
class ChompParameters:
    """Configuration of one planning request.

    The optimizer related fields are passed through to the optimizer
    context unchanged; the recovery loop only escalates
    ``learning_rate``, ``ridge_factor``, ``planning_time_limit`` and
    ``max_iterations``.
    """

    planning_time_limit: float = 10.0
    max_iterations: int = 200
    max_iterations_after_collision_free: int = 5
    smoothness_cost_weight: float = 0.1
    obstacle_cost_weight: float = 1.0
    learning_rate: float = 0.01
    smoothness_cost_velocity: float = 0.0
    smoothness_cost_acceleration: float = 1.0
    smoothness_cost_jerk: float = 0.0
    ridge_factor: float = 0.0
    use_pseudo_inverse: bool = False
    pseudo_inverse_ridge_factor: float = 1e-4
    joint_update_limit: float = 0.1
    min_clearance: float = 0.2
    collision_threshold: float = 0.07
    use_stochastic_descent: bool = True
    enable_failure_recovery: bool = False
    max_recovery_attempts: int = 5

    trajectory_initialization_method: str = 'quintic-spline'
    trajectory_duration: float = 3.0
    trajectory_discretization: float = 0.03409
    waypoint_time_step: float = 0.1
    initialization_file: Optional[str] = None
    initialization_file_transposed: bool = False
    initialization_file_precision: int = 8

    def __post_init__(self):
        if self.trajectory_initialization_method not in \
                INITIALIZATION_METHODS:
            raise ValueError(
                'invalid trajectory initialization method {}. '
                'Expected one of {}'.format(
                    self.trajectory_initialization_method,
                    INITIALIZATION_METHODS))
        if self.trajectory_initialization_method == 'from-file' \
                and not self.initialization_file:
            raise ValueError(
                "'from-file' initialization requires initialization_file")
        if self.max_recovery_attempts < 0:
            raise ValueError(
                'max_recovery_attempts must be >= 0, got {}'.format(
                    self.max_recovery_attempts))
        if self.max_iterations < 0:
            raise ValueError(
                'max_iterations must be >= 0, got {}'.format(
                    self.max_iterations))
        if self.planning_time_limit <= 0:
            raise ValueError(
                'planning_time_limit must be positive, got {}'.format(
                    self.planning_time_limit))
        if self.trajectory_duration <= 0 \
                or self.trajectory_discretization <= 0:
            raise ValueError(
                'trajectory duration and discretization must be positive, '
                'got {} and {}'.format(self.trajectory_duration,
                                       self.trajectory_discretization))
        if self.waypoint_time_step < 0:
            raise ValueError(
                'waypoint_time_step must be >= 0, got {}'.format(
                    self.waypoint_time_step))

    @classmethod
    def from_dict(cls, config):
        """Create parameters from a mapping of field names to values.

        Raises
        ------
        ValueError
            If ``config`` contains an unknown key.
        """
        config = dict(config or {})
        names = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(config) - names)
        if unknown:
            raise ValueError('unknown chomp parameters: {}'.format(
                ', '.join(unknown)))
        return cls(**config)

    @classmethod
    def from_yaml(cls, path):
        """Load parameters from a YAML file such as ``chomp_planning.yaml``.
        """
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
        if config is not None and not isinstance(config, dict):
            raise ValueError(
                '{} must contain a mapping, got {}'.format(
                    path, type(config).__name__))
        logger.debug('loaded chomp parameters from {}'.format(path))
        return cls.from_dict(config)

    def to_dict(self):
        return dataclasses.asdict(self)

    def to_yaml(self, path):
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def recovery_params(self):
        """Tuple of the values changed by :func:`escalate`."""
        return (self.learning_rate, self.ridge_factor,
                self.planning_time_limit, self.max_iterations)


def escalate(params):
    """Return a copy of ``params`` for the next optimization attempt.

    The four recovery parameters are increased by the ``*_STEP``
    constants of this module; ``params`` itself is left unchanged.
    """
    return params.replace(
        learning_rate=params.learning_rate + LEARNING_RATE_STEP,
        ridge_factor=params.ridge_factor + RIDGE_FACTOR_STEP,
        planning_time_limit=(params.planning_time_limit
                             + PLANNING_TIME_LIMIT_STEP),
        max_iterations=params.max_iterations + MAX_ITERATIONS_STEP)
