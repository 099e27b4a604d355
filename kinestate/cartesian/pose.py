"""
Cartesian pose: position and orientation of a frame.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np
import sophuspy as sp
from numpy.typing import ArrayLike, NDArray

from kinestate.cartesian.state import CartesianState
from kinestate.types import CartesianStateVariable, StateType, duration_to_seconds
from kinestate.utils import quaternion as quat
from kinestate.utils import se3_utils

if TYPE_CHECKING:
    from kinestate.cartesian.twist import CartesianTwist


class CartesianPose(CartesianState):
    """
    Position + unit quaternion, ``data()`` is ``[x, y, z, qw, qx, qy, qz]``.

    Dividing a pose by a duration gives the twist that produces this
    displacement over that duration.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.CARTESIAN_POSE
    DATA_VARIABLE: ClassVar[CartesianStateVariable] = CartesianStateVariable.POSE

    def __init__(
        self,
        name: str = "",
        reference_frame: str | None = None,
        *,
        position: ArrayLike | None = None,
        orientation: ArrayLike | None = None,
    ):
        super().__init__(name, reference_frame)
        if position is not None:
            self.set_position(position)
        if orientation is not None:
            self.set_orientation(orientation)

    @classmethod
    def from_transformation_matrix(
        cls, name: str, matrix: ArrayLike, reference_frame: str | None = None
    ) -> CartesianPose:
        """Pose from a 4x4 homogeneous transformation matrix."""
        position, orientation = se3_utils.pose_from_matrix(matrix)
        return cls(name, reference_frame, position=position, orientation=orientation)

    @classmethod
    def from_se3(
        cls, name: str, se3: sp.SE3, reference_frame: str | None = None
    ) -> CartesianPose:
        position, orientation = se3_utils.pose_from_se3(se3)
        return cls(name, reference_frame, position=position, orientation=orientation)

    def to_se3(self) -> sp.SE3:
        self._assert_not_empty()
        return se3_utils.se3_from_pose(self._position, self._orientation)

    def _transform_point(self, point: ArrayLike) -> NDArray[np.float64]:
        self._assert_not_empty()
        return quat.rotate(self._orientation, point) + self._position

    def _differentiate(self, dt: timedelta) -> CartesianTwist:
        from kinestate.cartesian.twist import CartesianTwist

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        if period == 0.0:
            raise ZeroDivisionError(f"Cannot differentiate {self._name} over a zero duration")
        twist = CartesianTwist(self._name, self._reference_frame)
        twist.set_linear_velocity(self._position / period)
        # shortest path: take the log of the quaternion on the w >= 0 hemisphere
        orientation = self._orientation if self._orientation[0] >= 0 else -self._orientation
        log_q = quat.log(orientation)
        if quat.dot(orientation, log_q) < 0:
            log_q = -log_q
        twist.set_angular_velocity(2.0 * log_q[1:] / period)
        return twist

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, (np.ndarray, list, tuple)) and np.size(other) == 3:
            return self._transform_point(other)
        return super().__mul__(other)

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._differentiate(other)
        return super().__truediv__(other)
