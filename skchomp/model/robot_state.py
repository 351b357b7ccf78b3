import copy

import numpy as np


class RobotState(object):
    """Positions and velocities of every variable of a robot model.

    Parameters
    ----------
    robot_model : skchomp.model.RobotModel
        Model the state belongs to.
    positions : array-like or None
        Initial variable positions. If ``None``,
        :meth:`RobotModel.default_positions` is used.
    velocities : array-like or None
        Initial variable velocities. Zero if ``None``.
    """

    def __init__(self, robot_model, positions=None, velocities=None):
        self.robot_model = robot_model
        n = robot_model.n_variables
        if positions is None:
            positions = robot_model.default_positions()
        if velocities is None:
            velocities = np.zeros(n)
        self.positions = np.array(positions, dtype=np.float64)
        self.velocities = np.array(velocities, dtype=np.float64)
        if self.positions.shape != (n,) or self.velocities.shape != (n,):
            raise ValueError(
                'state vectors must have shape ({},), got {} and {}'.format(
                    n, self.positions.shape, self.velocities.shape))

    def __repr__(self):
        return '#<{} {}>'.format(self.__class__.__name__,
                                 np.array2string(self.positions,
                                                 precision=4))

    def copy(self):
        return copy.deepcopy(self)

    def __deepcopy__(self, memo):
        return self.__class__(self.robot_model,
                              self.positions.copy(),
                              self.velocities.copy())

    def _variable_index(self, joint):
        if isinstance(joint, str):
            joint = self.robot_model.joint(joint)
        return joint.variable_index

    def position(self, joint):
        return self.positions[self._variable_index(joint)]

    def set_position(self, joint, value):
        self.positions[self._variable_index(joint)] = value

    def velocity(self, joint):
        return self.velocities[self._variable_index(joint)]

    def set_velocity(self, joint, value):
        self.velocities[self._variable_index(joint)] = value

    def set_positions(self, positions):
        """Set positions from a ``{joint_name: position}`` mapping."""
        for name, value in positions.items():
            self.set_position(name, value)

    def group_positions(self, group):
        """Return the active joint positions of ``group`` in group order."""
        return self.positions[group.variable_indices].copy()

    def set_group_positions(self, group, values):
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (group.n_joints,):
            raise ValueError(
                'group {} has {} joints, got {} values'.format(
                    group.name, group.n_joints, values.shape))
        self.positions[group.variable_indices] = values

    def group_velocities(self, group):
        return self.velocities[group.variable_indices].copy()

    def set_group_velocities(self, group, values):
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (group.n_joints,):
            raise ValueError(
                'group {} has {} joints, got {} values'.format(
                    group.name, group.n_joints, values.shape))
        self.velocities[group.variable_indices] = values

    def satisfies_bounds(self, margin=0.0):
        """Return ``True`` if every single variable joint is within bounds.
        """
        for joint in self.robot_model.joint_list:
            if joint.variable_count != 1:
                continue
            if not joint.satisfies_position_bounds(
                    self.positions[joint.variable_index], margin=margin):
                return False
        return True

