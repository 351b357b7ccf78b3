import unittest

from skchomp.errors import OptimizerInitFailed
from skchomp.optimizer import ChompOptimizer
from skchomp.parameters import ChompParameters
from skchomp.recovery import RecoveryController
from skchomp.recovery import RecoveryState
from skchomp.trajectory import TrajectoryBuffer


class ScriptedOptimizer(ChompOptimizer):

    def __init__(self, factory, *args):
        super(ScriptedOptimizer, self).__init__(*args)
        self.factory = factory

    def initialize(self):
        return self.factory.initialized

    def optimize(self):
        if self.factory.results:
            return self.factory.results.pop(0)
        return False

    def is_collision_free(self):
        return True


class ScriptedOptimizerFactory(object):
    """Create optimizers returning ``results`` one after another."""

    def __init__(self, results, initialized=True):
        self.results = list(results)
        self.initialized = initialized
        self.parameters = []

    def __call__(self, trajectory, planning_scene, group_name, parameters,
                 start_state):
        self.parameters.append(parameters)
        return ScriptedOptimizer(self, trajectory, planning_scene,
                                 group_name, parameters, start_state)


class TestRecoveryController(unittest.TestCase):

    def setUp(self):
        self.trajectory = TrajectoryBuffer(10, 2, 0.1)

    def test_success_first_attempt(self):
        factory = ScriptedOptimizerFactory([True])
        params = ChompParameters(enable_failure_recovery=True)
        result = RecoveryController(factory, params).run(self.trajectory)
        self.assertTrue(result.success)
        self.assertEqual(result.state, RecoveryState.SUCCESS)
        self.assertEqual(result.attempts, 1)
        self.assertIs(result.parameters, params)

    def test_success_after_escalation(self):
        factory = ScriptedOptimizerFactory([False, False, True])
        params = ChompParameters(enable_failure_recovery=True,
                                 max_recovery_attempts=5)
        result = RecoveryController(factory, params).run(self.trajectory)
        self.assertTrue(result.success)
        self.assertEqual(result.attempts, 3)
        self.assertEqual(len(factory.parameters), 3)
        learning_rates = [p.learning_rate for p in factory.parameters]
        self.assertEqual(sorted(learning_rates), learning_rates)
        self.assertEqual(len(set(learning_rates)), 3)
        self.assertEqual(
            [p.max_iterations for p in factory.parameters], [200, 250, 300])
        self.assertIs(result.optimizer.parameters, factory.parameters[-1])

    def test_exhausted(self):
        factory = ScriptedOptimizerFactory([])
        params = ChompParameters(enable_failure_recovery=True,
                                 max_recovery_attempts=3)
        result = RecoveryController(factory, params).run(self.trajectory)
        self.assertFalse(result.success)
        self.assertEqual(result.state, RecoveryState.EXHAUSTED)
        self.assertEqual(result.attempts, 4)
        self.assertEqual(len(factory.parameters), 4)
        self.assertEqual(params.recovery_params(), (0.01, 0.0, 10.0, 200))

    def test_recovery_disabled(self):
        factory = ScriptedOptimizerFactory([False, True])
        params = ChompParameters(enable_failure_recovery=False)
        result = RecoveryController(factory, params).run(self.trajectory)
        self.assertEqual(result.state, RecoveryState.EXHAUSTED)
        self.assertEqual(result.attempts, 1)

    def test_zero_attempts(self):
        factory = ScriptedOptimizerFactory([False, True])
        params = ChompParameters(enable_failure_recovery=True,
                                 max_recovery_attempts=0)
        result = RecoveryController(factory, params).run(self.trajectory)
        self.assertEqual(result.state, RecoveryState.EXHAUSTED)
        self.assertEqual(result.attempts, 1)

    def test_init_failed(self):
        factory = ScriptedOptimizerFactory([True], initialized=False)
        params = ChompParameters(enable_failure_recovery=True)
        with self.assertRaises(OptimizerInitFailed):
            RecoveryController(factory, params).run(self.trajectory)
        self.assertEqual(len(factory.parameters), 1)

    def test_rerun_starts_from_initial_parameters(self):
        factory = ScriptedOptimizerFactory([False, True, False, True])
        params = ChompParameters(enable_failure_recovery=True)
        controller = RecoveryController(factory, params)
        controller.run(self.trajectory)
        result = controller.run(self.trajectory)
        self.assertEqual(result.attempts, 2)
        self.assertIs(factory.parameters[2], params)

    def test_parameter_log(self):
        factory = ScriptedOptimizerFactory([False, True])
        params = ChompParameters(enable_failure_recovery=True)
        with self.assertLogs('skchomp.recovery', level='INFO') as cm:
            RecoveryController(factory, params).run(self.trajectory)
        messages = [r.getMessage() for r in cm.records]
        self.assertEqual(
            len([m for m in messages if m.startswith('Learning rate')]), 2)

        factory = ScriptedOptimizerFactory([])
        params = ChompParameters(enable_failure_recovery=False)
        with self.assertLogs('skchomp.recovery', level='INFO') as cm:
            RecoveryController(factory, params).run(self.trajectory)
        messages = [r.getMessage() for r in cm.records]
        self.assertEqual(
            [m for m in messages if m.startswith('Learning rate')], [])
        self.assertEqual(len(messages), 1)
