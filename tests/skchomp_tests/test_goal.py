import unittest

import numpy as np
from numpy import testing

from skchomp.errors import JointCountMismatch
from skchomp.goal import adjust_goal
from skchomp.goal import normalize_angle_positive
from skchomp.goal import shortest_angular_distance
from skchomp.model import ContinuousJoint
from skchomp.model import PrismaticJoint
from skchomp.model import RevoluteJoint
from skchomp.model import RobotModel
from skchomp.trajectory import TrajectoryBuffer


class TestAngles(unittest.TestCase):

    def test_normalize_angle_positive(self):
        testing.assert_almost_equal(normalize_angle_positive(-0.5),
                                    2 * np.pi - 0.5)
        testing.assert_almost_equal(normalize_angle_positive(7.0),
                                    7.0 - 2 * np.pi)
        testing.assert_almost_equal(normalize_angle_positive(0.0), 0.0)

    def test_shortest_angular_distance(self):
        testing.assert_almost_equal(
            shortest_angular_distance(3.0, -3.0), 2 * np.pi - 6.0)
        testing.assert_almost_equal(
            shortest_angular_distance(-3.0, 3.0), 6.0 - 2 * np.pi)
        testing.assert_almost_equal(shortest_angular_distance(0.0, 1.0), 1.0)
        testing.assert_almost_equal(
            shortest_angular_distance(0.0, 4 * np.pi + 0.1), 0.1)
        self.assertIsInstance(shortest_angular_distance(0.0, 1.0), float)

    def test_half_turn(self):
        testing.assert_almost_equal(shortest_angular_distance(0.0, np.pi),
                                    np.pi)

    def test_properties(self):
        random_state = np.random.RandomState(0)
        for _ in range(200):
            a, b = random_state.uniform(-10.0, 10.0, 2)
            delta = shortest_angular_distance(a, b)
            self.assertGreater(delta, -np.pi - 1e-12)
            self.assertLessEqual(delta, np.pi + 1e-12)
            testing.assert_almost_equal(np.cos(a + delta), np.cos(b))
            testing.assert_almost_equal(np.sin(a + delta), np.sin(b))


class TestAdjustGoal(unittest.TestCase):

    def setUp(self):
        self.robot = RobotModel(
            [RevoluteJoint('shoulder'),
             ContinuousJoint('wrist'),
             PrismaticJoint('slider')],
            groups={'arm': ['shoulder', 'wrist', 'slider']})
        self.group = self.robot.joint_group('arm')

    def test_adjust_goal(self):
        traj = TrajectoryBuffer(10, 3, 0.1)
        traj.point(0)[:] = [3.0, 3.0, 0.5]
        traj.point(9)[:] = [-3.0, -3.0, -0.5]
        adjusted = adjust_goal(traj, self.group)
        self.assertEqual(adjusted, [1])
        testing.assert_almost_equal(
            traj.trajectory[9], [-3.0, 3.0 + 2 * np.pi - 6.0, -0.5])
        testing.assert_almost_equal(traj.trajectory[9, 1], 3.2832, decimal=4)
        testing.assert_equal(traj.trajectory[0], [3.0, 3.0, 0.5])

    def test_goal_index(self):
        traj = TrajectoryBuffer(10, 3, 0.1)
        traj.point(2)[:] = [0.0, 0.0, 0.0]
        traj.point(5)[:] = [0.0, 2 * np.pi + 0.2, 0.0]
        adjust_goal(traj, self.group, start_index=2, goal_index=5)
        testing.assert_almost_equal(traj.trajectory[5, 1], 0.2)
        testing.assert_equal(traj.trajectory[9], 0.0)

    def test_no_continuous_joint(self):
        robot = RobotModel([RevoluteJoint('a'), RevoluteJoint('b')],
                           groups={'arm': ['a', 'b']})
        traj = TrajectoryBuffer(10, 2, 0.1)
        traj.point(9)[:] = [3.0, -3.0]
        self.assertEqual(adjust_goal(traj, robot.joint_group('arm')), [])
        testing.assert_equal(traj.trajectory[9], [3.0, -3.0])

    def test_joint_count_mismatch(self):
        traj = TrajectoryBuffer(10, 2, 0.1)
        with self.assertRaises(JointCountMismatch):
            adjust_goal(traj, self.group)
