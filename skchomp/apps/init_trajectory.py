#!/usr/bin/env python

import argparse
import logging
import sys

import numpy as np

from skchomp.constraints import Constraints
from skchomp.constraints import JointConstraintSpec
from skchomp.errors import ChompError
from skchomp.io import write_trajectory_csv
from skchomp.model import RevoluteJoint
from skchomp.model import RobotModel
from skchomp.model import RobotState
from skchomp.parameters import ChompParameters
from skchomp.planner import ChompPlanner
from skchomp.planner import MotionPlanRequest
from skchomp.planner import PlanningScene
from skchomp.velocity import derive_velocities


def build_robot_model(n_joints, continuous=(), group_name='arm'):
    """Serial chain of revolute joints named ``joint0``, ``joint1``, ..."""
    continuous = set(continuous)
    joints = [RevoluteJoint('joint{}'.format(i), continuous=i in continuous)
              for i in range(n_joints)]
    return RobotModel(joints, groups={group_name: [j.name for j in joints]},
                      name='chain')


def main(argv=None):
    """Write the initial trajectory between two joint configurations."""
    parser = argparse.ArgumentParser(
        description='Create the initial CHOMP trajectory between a start '
                    'and a goal joint configuration and write it as CSV.',
        formatter_class=argparse.RawTextHelpFormatter)
    parser.add_argument(
        '--start', type=float, nargs='+', required=True,
        help='Start joint positions [rad]')
    parser.add_argument(
        '--goal', type=float, nargs='+', required=True,
        help='Goal joint positions [rad]')
    parser.add_argument(
        '--continuous', type=int, nargs='*', default=[],
        help='Indices of continuous (wrap-around) joints')
    parser.add_argument(
        '--config', type=str, default=None,
        help='YAML file with chomp parameters')
    parser.add_argument(
        '--method', type=str, default=None,
        choices=['quintic-spline', 'linear', 'cubic', 'from-file'],
        help='Initialization method; overrides the config file')
    parser.add_argument(
        '--initialization-file', type=str, default=None,
        help="Trajectory file used by the 'from-file' method")
    parser.add_argument(
        '--with-velocity', action='store_true',
        help='Append finite difference velocities to every row')
    parser.add_argument(
        '-o', '--output', type=str, default=None,
        help='Output CSV path. Printed to stdout if omitted')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Print verbose output')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='[%(levelname)s] %(name)s: %(message)s')

    if len(args.start) != len(args.goal):
        print('Error: start has {} joints but goal has {}'.format(
            len(args.start), len(args.goal)), file=sys.stderr)
        return 1
    for index in args.continuous:
        if not 0 <= index < len(args.start):
            print('Error: continuous joint index {} out of range '
                  '[0, {})'.format(index, len(args.start)), file=sys.stderr)
            return 1

    try:
        if args.config is not None:
            params = ChompParameters.from_yaml(args.config)
        else:
            params = ChompParameters()
        overrides = {}
        if args.method is not None:
            overrides['trajectory_initialization_method'] = args.method
        if args.initialization_file is not None:
            overrides['initialization_file'] = args.initialization_file
        params = params.replace(**overrides)

        robot_model = build_robot_model(len(args.start), args.continuous)
        group = robot_model.joint_group('arm')
        start_state = RobotState(robot_model)
        start_state.set_group_positions(group, args.start)
        request = MotionPlanRequest(
            'arm',
            [Constraints(joint_constraints=[
                JointConstraintSpec(name, position)
                for name, position in zip(group.active_joint_names,
                                          args.goal)])],
            start_state=start_state)
        planner = ChompPlanner(optimizer_factory=None)
        trajectory, _, _ = planner.initialize_trajectory(
            PlanningScene(robot_model), request, params)
    except (ChompError, ValueError, OSError) as e:
        print('Error: {}'.format(e), file=sys.stderr)
        return 1

    matrix = trajectory.trajectory
    if args.with_velocity:
        matrix = np.hstack((matrix, derive_velocities(matrix)))
    output = args.output if args.output is not None else sys.stdout
    write_trajectory_csv(output, matrix,
                         precision=params.initialization_file_precision)
    if args.verbose:
        print('{} points x {} joints, method {}'.format(
            trajectory.n_points, trajectory.n_joints,
            params.trajectory_initialization_method), file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
