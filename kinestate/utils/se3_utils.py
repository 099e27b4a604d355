"""SE3 interop using sophuspy.

Converts between position + quaternion pairs (the storage used by the
Cartesian states) and sophuspy SE3 objects or 4x4 homogeneous
matrices, so poses can be handed to code that works with Lie groups.
"""

import numpy as np
import sophuspy as sp
from numpy.typing import ArrayLike, NDArray

from kinestate.utils import quaternion as quat

__all__ = [
    "se3_from_pose",
    "se3_from_matrix",
    "pose_from_se3",
    "pose_from_matrix",
    "matrix_from_pose",
]


def se3_from_pose(position: ArrayLike, orientation: ArrayLike) -> sp.SE3:
    """Create SE3 from a position and a [w, x, y, z] quaternion."""
    R = quat.to_rotation_matrix(orientation)
    return sp.SE3(R, np.asarray(position, dtype=np.float64).reshape(3))


def se3_from_matrix(matrix: ArrayLike) -> sp.SE3:
    """Create SE3 from 4x4 homogeneous transformation matrix."""
    m = np.asarray(matrix, dtype=np.float64)
    return sp.SE3(m[:3, :3], m[:3, 3])


def pose_from_se3(se3: sp.SE3) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Split SE3 into (position, [w, x, y, z] quaternion)."""
    position = np.asarray(se3.translation(), dtype=np.float64).reshape(3)
    orientation = quat.from_rotation_matrix(se3.rotationMatrix())
    return position, orientation


def pose_from_matrix(
    matrix: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Split a 4x4 homogeneous matrix into (position, quaternion)."""
    return pose_from_se3(se3_from_matrix(matrix))


def matrix_from_pose(position: ArrayLike, orientation: ArrayLike) -> NDArray[np.float64]:
    """4x4 homogeneous matrix of a position + quaternion pose."""
    return np.asarray(se3_from_pose(position, orientation).matrix(), dtype=np.float64)
