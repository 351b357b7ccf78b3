from enum import Enum
from logging import getLogger
import time

from skchomp.errors import OptimizerInitFailed
from skchomp.parameters import escalate


logger = getLogger(__name__)


class RecoveryState(Enum):

    INIT = 'init'
    ATTEMPTING = 'attempting'
    SUCCESS = 'success'
    EXHAUSTED = 'exhausted'


class RecoveryResult(object):
    """Outcome of :meth:`RecoveryController.run`.

    Attributes
    ----------
    state : RecoveryState
        ``SUCCESS`` or ``EXHAUSTED``.
    attempts : int
        Number of optimization attempts made (>= 1).
    parameters : skchomp.parameters.ChompParameters
        Parameters of the last attempt.
    optimizer : skchomp.optimizer.ChompOptimizer
        Optimizer context of the last attempt.
    """

    def __init__(self, state, attempts, parameters, optimizer):
        self.state = state
        self.attempts = attempts
        self.parameters = parameters
        self.optimizer = optimizer

    @property
    def success(self):
        return self.state is RecoveryState.SUCCESS

    def __repr__(self):
        return '#<{} {} after {} attempts>'.format(
            self.__class__.__name__, self.state.value, self.attempts)


class RecoveryController(object):
    """Run optimization attempts, escalating parameters after failures.

    A failed attempt is retried with :func:`skchomp.parameters.escalate`
    applied to the parameters as long as
    ``parameters.enable_failure_recovery`` is set and fewer than
    ``parameters.max_recovery_attempts`` retries were made, so at most
    ``max_recovery_attempts + 1`` attempts run. The caller's parameters
    are never modified.

    Parameters
    ----------
    optimizer_factory : callable
        Called as ``optimizer_factory(trajectory, planning_scene,
        group_name, parameters, start_state)``; returns a
        :class:`skchomp.optimizer.ChompOptimizer`.
    parameters : skchomp.parameters.ChompParameters
        Parameters of the first attempt.
    """

    def __init__(self, optimizer_factory, parameters):
        self.optimizer_factory = optimizer_factory
        self.initial_parameters = parameters
        self.parameters = parameters
        self.state = RecoveryState.INIT
        self.attempts = 0
        self.optimizer = None

    def _attempt(self, trajectory, planning_scene, group_name, start_state):
        create_time = time.time()
        self.optimizer = self.optimizer_factory(
            trajectory, planning_scene, group_name, self.parameters,
            start_state)
        if not self.optimizer.initialize():
            logger.error('Could not initialize optimizer')
            raise OptimizerInitFailed('Could not initialize optimizer')
        logger.debug('Optimization took {} sec to create'.format(
            time.time() - create_time))
        return self.optimizer.optimize()

    def _can_retry(self):
        return (self.parameters.enable_failure_recovery
                and self.attempts < self.parameters.max_recovery_attempts)

    def run(self, trajectory, planning_scene=None, group_name=None,
            start_state=None):
        """Optimize ``trajectory`` until success or attempts run out.

        Raises
        ------
        OptimizerInitFailed
            If an optimizer context cannot be initialized. Not retried.

        Returns
        -------
        result : RecoveryResult
        """
        self.parameters = self.initial_parameters
        self.attempts = 0
        self.optimizer = None
        self.state = RecoveryState.ATTEMPTING

        while self.state is RecoveryState.ATTEMPTING:
            success = self._attempt(
                trajectory, planning_scene, group_name, start_state)
            p = self.parameters
            if p.enable_failure_recovery:
                logger.info(
                    'Planned with Chomp Parameters (learning_rate, '
                    'ridge_factor, planning_time_limit, max_iterations), '
                    'attempt: # {}'.format(self.attempts + 1))
                logger.info(
                    'Learning rate: {} ridge factor: {} planning time '
                    'limit: {} max_iterations {}'.format(
                        p.learning_rate, p.ridge_factor,
                        p.planning_time_limit, p.max_iterations))
            if success:
                self.state = RecoveryState.SUCCESS
            elif self._can_retry():
                self.parameters = escalate(self.parameters)
                self.attempts += 1
            else:
                self.state = RecoveryState.EXHAUSTED

        if self.state is RecoveryState.EXHAUSTED:
            logger.warning('Optimization failed after {} attempts'.format(
                self.attempts + 1))
        return RecoveryResult(self.state, self.attempts + 1,
                              self.parameters, self.optimizer)
