import unittest

import numpy as np
from numpy import testing

from skchomp.constraints import Constraints
from skchomp.constraints import JointConstraint
from skchomp.constraints import JointConstraintSpec
from skchomp.model import ContinuousJoint
from skchomp.model import FixedJoint
from skchomp.model import JointModel
from skchomp.model import JointType
from skchomp.model import PrismaticJoint
from skchomp.model import RevoluteJoint
from skchomp.model import RobotModel
from skchomp.model import RobotState


def sample_robot():
    return RobotModel(
        [RevoluteJoint('shoulder', min_position=-1.0, max_position=2.0),
         FixedJoint('tool_mount'),
         ContinuousJoint('wrist'),
         PrismaticJoint('slider'),
         JointModel('base', JointType.PLANAR)],
        groups={'arm': ['shoulder', 'tool_mount', 'wrist'],
                'base': ['base']},
        name='sample')


class TestJointModel(unittest.TestCase):

    def test_variable_count(self):
        self.assertEqual(RevoluteJoint('a').variable_count, 1)
        self.assertEqual(PrismaticJoint('a').variable_count, 1)
        self.assertEqual(FixedJoint('a').variable_count, 0)
        self.assertEqual(JointModel('a', 'planar').variable_count, 3)
        self.assertEqual(JointModel('a', 'floating').variable_count, 7)

    def test_continuous(self):
        joint = ContinuousJoint('wrist')
        self.assertTrue(joint.is_continuous)
        self.assertTrue(joint.satisfies_position_bounds(100.0))
        self.assertFalse(RevoluteJoint('a').is_continuous)
        with self.assertRaises(ValueError):
            JointModel('a', JointType.PRISMATIC, continuous=True)

    def test_bounds(self):
        joint = RevoluteJoint('a', min_position=-1.0, max_position=1.0)
        self.assertTrue(joint.satisfies_position_bounds(1.0))
        self.assertFalse(joint.satisfies_position_bounds(1.1))
        self.assertTrue(joint.satisfies_position_bounds(1.1, margin=0.2))
        with self.assertRaises(ValueError):
            RevoluteJoint('a', min_position=1.0, max_position=-1.0)


class TestRobotModel(unittest.TestCase):

    def test_variable_indices(self):
        robot = sample_robot()
        self.assertEqual(robot.n_variables, 6)
        self.assertEqual(robot.joint('wrist').variable_index, 1)
        self.assertEqual(robot.joint('slider').variable_index, 2)
        group = robot.joint_group('arm')
        self.assertEqual(group.active_joint_names, ['shoulder', 'wrist'])
        self.assertEqual(group.n_joints, 2)
        testing.assert_equal(group.variable_indices, [0, 1])

    def test_multi_variable_group(self):
        group = sample_robot().joint_group('base')
        with self.assertRaises(ValueError):
            group.variable_indices

    def test_lookup(self):
        robot = sample_robot()
        self.assertTrue(robot.has_joint('wrist'))
        self.assertFalse(robot.has_joint('elbow'))
        self.assertTrue(robot.has_joint_group('arm'))
        self.assertEqual(sorted(robot.group_names), ['arm', 'base'])
        with self.assertRaises(KeyError):
            robot.joint('elbow')
        with self.assertRaises(KeyError):
            robot.joint_group('leg')

    def test_duplicated_joint(self):
        with self.assertRaises(ValueError):
            RobotModel([RevoluteJoint('a'), RevoluteJoint('a')])

    def test_default_positions(self):
        testing.assert_almost_equal(sample_robot().default_positions(),
                                    [0.5, 0.0, 0.0, 0.0, 0.0, 0.0])


class TestRobotState(unittest.TestCase):

    def test_positions(self):
        robot = sample_robot()
        state = RobotState(robot)
        state.set_positions({'shoulder': 0.3, 'wrist': 5.0})
        self.assertEqual(state.position('shoulder'), 0.3)
        self.assertEqual(state.position(robot.joint('wrist')), 5.0)
        group = robot.joint_group('arm')
        testing.assert_equal(state.group_positions(group), [0.3, 5.0])
        state.set_group_positions(group, [0.1, 0.2])
        testing.assert_equal(state.positions[:2], [0.1, 0.2])
        with self.assertRaises(ValueError):
            state.set_group_positions(group, [0.1, 0.2, 0.3])

    def test_velocities(self):
        robot = sample_robot()
        state = RobotState(robot)
        group = robot.joint_group('arm')
        state.set_group_velocities(group, [1.0, -1.0])
        self.assertEqual(state.velocity('wrist'), -1.0)
        testing.assert_equal(state.group_velocities(group), [1.0, -1.0])

    def test_copy(self):
        state = RobotState(sample_robot())
        copied = state.copy()
        copied.set_position('shoulder', 1.5)
        self.assertEqual(state.position('shoulder'), 0.5)

    def test_satisfies_bounds(self):
        state = RobotState(sample_robot())
        self.assertTrue(state.satisfies_bounds())
        state.set_position('wrist', 10.0)
        self.assertTrue(state.satisfies_bounds())
        state.set_position('shoulder', 2.5)
        self.assertFalse(state.satisfies_bounds())
        self.assertTrue(state.satisfies_bounds(margin=0.5))

    def test_invalid_shape(self):
        with self.assertRaises(ValueError):
            RobotState(sample_robot(), positions=np.zeros(3))


class TestJointConstraint(unittest.TestCase):

    def setUp(self):
        self.robot = sample_robot()
        self.constraint = JointConstraint(self.robot)

    def test_is_joint_space(self):
        self.assertFalse(Constraints().is_joint_space)
        self.assertTrue(Constraints(
            joint_constraints=[JointConstraintSpec('wrist', 0.0)]
        ).is_joint_space)
        self.assertFalse(Constraints(
            joint_constraints=[JointConstraintSpec('wrist', 0.0)],
            position_constraints=[object()]).is_joint_space)

    def test_configure(self):
        self.assertTrue(self.constraint.configure(
            JointConstraintSpec('shoulder', 0.0)))
        self.assertTrue(self.constraint.enabled)
        self.assertFalse(self.constraint.configure(
            JointConstraintSpec('elbow', 0.0)))
        self.assertFalse(self.constraint.enabled)
        self.assertFalse(self.constraint.configure(
            JointConstraintSpec('base', 0.0)))
        self.assertFalse(self.constraint.configure(
            JointConstraintSpec('shoulder', 0.0, tolerance_above=-0.1)))

    def test_decide(self):
        state = RobotState(self.robot)
        state.set_position('shoulder', 0.5)
        self.constraint.configure(JointConstraintSpec(
            'shoulder', 0.4, tolerance_above=0.2, tolerance_below=0.0))
        result = self.constraint.decide(state)
        self.assertTrue(result.satisfied)
        testing.assert_almost_equal(result.distance, 0.1)

        self.constraint.configure(JointConstraintSpec(
            'shoulder', 0.6, tolerance_above=0.2, tolerance_below=0.0))
        self.assertFalse(self.constraint.decide(state).satisfied)

    def test_decide_continuous(self):
        state = RobotState(self.robot)
        state.set_position('wrist', 3.0 + 2 * np.pi - 6.0)
        self.constraint.configure(JointConstraintSpec('wrist', -3.0))
        self.assertTrue(self.constraint.decide(state).satisfied)

        state.set_position('wrist', -3.0 + 4 * np.pi + 0.01)
        self.assertFalse(self.constraint.decide(state).satisfied)
        self.constraint.configure(
            JointConstraintSpec('wrist', -3.0, tolerance_above=0.02))
        self.assertTrue(self.constraint.decide(state).satisfied)

    def test_disabled(self):
        self.assertTrue(self.constraint.decide(
            RobotState(self.robot)).satisfied)
