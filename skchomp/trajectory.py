from dataclasses import dataclass
from logging import getLogger

import numpy as np

from skchomp.errors import IndexOutOfRange
from skchomp.errors import InvalidDimensions
from skchomp.errors import SizeMismatch


logger = getLogger(__name__)


@dataclass(frozen=True)
class FreeRange:
    """Inclusive index interval of optimizable trajectory points.

    Points outside ``[start, end]`` are fixed boundary (start and goal)
    or padding points. ``end == start - 1`` denotes an empty range.

    Parameters
    ----------
    start : int
        First free index.
    end : int
        Last free index (inclusive).
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start - 1:
            raise InvalidDimensions(
                'invalid free range [{}, {}]'.format(self.start, self.end))

    def __len__(self):
        return self.end - self.start + 1

    @property
    def boundary_start(self):
        """Index of the fixed point right before the free range."""
        return self.start - 1

    @property
    def boundary_end(self):
        """Index of the fixed point right after the free range."""
        return self.end + 1

    def as_slice(self):
        return slice(self.start, self.end + 1)

    def validate(self, n_points, with_boundary=False):
        """Check that the range fits a trajectory of ``n_points``.

        Parameters
        ----------
        n_points : int
            Number of points of the trajectory.
        with_boundary : bool
            If ``True``, the fixed points right before and after the
            range must exist as well.

        Raises
        ------
        IndexOutOfRange
            If an index lies outside ``[0, n_points)``.
        """
        first, last = self.start, self.end
        if with_boundary:
            first, last = self.boundary_start, self.boundary_end
        if first < 0 or last > n_points - 1:
            raise IndexOutOfRange(
                '{} does not fit a trajectory of {} points'.format(
                    self, n_points))
        return self


class TrajectoryBuffer(object):
    """Fixed-shape store of joint positions over time.

    Rows are trajectory points in ascending time order and columns are
    the active joints of a planning group in the group's order.  The
    first and last points of an un-padded buffer are the fixed start and
    goal states; the interior points form the free range that fillers and
    the optimizer write to.

    Parameters
    ----------
    n_points : int
        Number of trajectory points (>= 2).
    n_joints : int
        Number of joints (>= 1).
    discretization : float
        Time in seconds between two consecutive points (> 0).

    Examples
    --------
    >>> from skchomp.trajectory import TrajectoryBuffer
    >>> traj = TrajectoryBuffer.from_duration(3.0, 0.03409, n_joints=7)
    >>> traj.n_points
    89
    >>> traj.free_range
    FreeRange(start=1, end=87)
    """

    def __init__(self, n_points, n_joints, discretization):
        n_points = int(n_points)
        n_joints = int(n_joints)
        if n_points < 2:
            raise InvalidDimensions(
                'trajectory needs at least 2 points, got {}'.format(n_points))
        if n_joints < 1:
            raise InvalidDimensions(
                'trajectory needs at least 1 joint, got {}'.format(n_joints))
        if not discretization > 0:
            raise InvalidDimensions(
                'discretization must be positive, got {}'.format(
                    discretization))
        self.n_points = n_points
        self.n_joints = n_joints
        self.discretization = float(discretization)
        self.start_index = 1
        self.end_index = n_points - 2
        self.source_index_map = None
        self.trajectory = np.zeros((n_points, n_joints))

    @classmethod
    def from_duration(cls, duration, discretization, n_joints):
        """Create a buffer covering ``duration`` seconds.

        ``n_points = floor(duration / discretization) + 1``.
        """
        if not discretization > 0:
            raise InvalidDimensions(
                'discretization must be positive, got {}'.format(
                    discretization))
        n_points = int(np.floor(duration / discretization)) + 1
        return cls(n_points, n_joints, discretization)

    @classmethod
    def padded(cls, source, stencil_width):
        """Create a copy of ``source`` with replicated boundary rows.

        The copy has at least ``stencil_width - 1`` points on either side
        of its free range so that a finite difference rule of that width
        can be evaluated on every free point.  Extra rows replicate the
        first or last row of ``source``.

        Parameters
        ----------
        source : TrajectoryBuffer
            Buffer to copy.
        stencil_width : int
            Number of points the difference rule reads on each side.

        Returns
        -------
        padded : TrajectoryBuffer
            Padded copy. ``padded.source_index_map[i]`` is the row of
            ``source`` copied into row ``i``.
        """
        stencil_width = int(stencil_width)
        if stencil_width < 1:
            raise InvalidDimensions(
                'stencil width must be positive, got {}'.format(
                    stencil_width))
        start_extra = max(0, (stencil_width - 1) - source.start_index)
        end_extra = max(
            0,
            (stencil_width - 1)
            - ((source.n_points - 1) - source.end_index))
        n_points = source.n_points + start_extra + end_extra

        traj = cls(n_points, source.n_joints, source.discretization)
        # shifting keeps the free length equal to the source's one
        traj.start_index = source.start_index + start_extra
        traj.end_index = source.end_index + start_extra
        traj.source_index_map = np.clip(
            np.arange(n_points) - start_extra, 0, source.n_points - 1)
        traj.trajectory[:] = source.trajectory[traj.source_index_map]
        logger.debug('padded trajectory of {} points to {} points '
                     '(stencil width {})'.format(
                         source.n_points, n_points, stencil_width))
        return traj

    @property
    def duration(self):
        return (self.n_points - 1) * self.discretization

    @property
    def free_range(self):
        return FreeRange(self.start_index, self.end_index)

    @property
    def num_free_points(self):
        return self.end_index - self.start_index + 1

    def __repr__(self):
        return '#<{} {} points x {} joints, dt={}, free={}>'.format(
            self.__class__.__name__, self.n_points, self.n_joints,
            self.discretization, self.free_range)

    def __getitem__(self, key):
        return self.trajectory[key]

    def __setitem__(self, key, value):
        self.trajectory[key] = value

    def point(self, i):
        """Return a writable view of trajectory point ``i``."""
        if not 0 <= i < self.n_points:
            raise IndexOutOfRange(
                'point index {} out of range [0, {})'.format(
                    i, self.n_points))
        return self.trajectory[i]

    def joint_column(self, j):
        """Return a writable view of joint ``j`` over all points."""
        if not 0 <= j < self.n_joints:
            raise IndexOutOfRange(
                'joint index {} out of range [0, {})'.format(
                    j, self.n_joints))
        return self.trajectory[:, j]

    def update_free_region(self, other):
        """Copy the free points of ``other`` into this buffer's free points.

        Used to merge an optimizer's padded working copy back into the
        canonical trajectory.
        """
        if other.num_free_points != self.num_free_points:
            raise SizeMismatch(
                'free range length {} does not match {}'.format(
                    other.num_free_points, self.num_free_points))
        if other.n_joints != self.n_joints:
            raise SizeMismatch(
                'joint count {} does not match {}'.format(
                    other.n_joints, self.n_joints))
        free = self.free_range.validate(self.n_points)
        other_free = other.free_range.validate(other.n_points)
        self.trajectory[free.as_slice()] = \
            other.trajectory[other_free.as_slice()]

    def set_trajectory(self, trajectory):
        """Replace all points by ``trajectory`` of shape (n_points, n_joints).
        """
        trajectory = np.asarray(trajectory, dtype=np.float64)
        if trajectory.shape != self.trajectory.shape:
            raise SizeMismatch(
                'trajectory shape {} does not match expected shape {}'.format(
                    trajectory.shape, self.trajectory.shape))
        self.trajectory[:] = trajectory

    def copy(self):
        traj = self.__class__(self.n_points, self.n_joints,
                              self.discretization)
        traj.start_index = self.start_index
        traj.end_index = self.end_index
        if self.source_index_map is not None:
            traj.source_index_map = self.source_index_map.copy()
        traj.trajectory[:] = self.trajectory
        return traj
