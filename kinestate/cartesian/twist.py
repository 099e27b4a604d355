"""
Cartesian twist: linear and angular velocity.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

from numpy.typing import ArrayLike

from kinestate.cartesian._linear_angular import _LinearAngularState
from kinestate.types import CartesianStateVariable, StateType, duration_to_seconds
from kinestate.utils import quaternion as quat

if TYPE_CHECKING:
    from kinestate.cartesian.acceleration import CartesianAcceleration
    from kinestate.cartesian.pose import CartesianPose

_V = CartesianStateVariable


class CartesianTwist(_LinearAngularState):
    """
    Linear + angular velocity, ``data()`` is ``[vx, vy, vz, wx, wy, wz]``.

    Multiplying by a duration integrates the twist into a pose through the
    exponential map. Dividing by a duration gives an acceleration.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.CARTESIAN_TWIST
    DATA_VARIABLE: ClassVar[CartesianStateVariable] = _V.TWIST
    LINEAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.LINEAR_VELOCITY
    ANGULAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.ANGULAR_VELOCITY

    def __init__(
        self,
        name: str = "",
        reference_frame: str | None = None,
        *,
        linear_velocity: ArrayLike | None = None,
        angular_velocity: ArrayLike | None = None,
    ):
        super().__init__(name, reference_frame)
        if linear_velocity is not None:
            self.set_linear_velocity(linear_velocity)
        if angular_velocity is not None:
            self.set_angular_velocity(angular_velocity)

    @classmethod
    def Zero(cls, name: str, reference_frame: str | None = None) -> CartesianTwist:
        return cls.Identity(name, reference_frame)

    def _integrate(self, dt: timedelta) -> CartesianPose:
        from kinestate.cartesian.pose import CartesianPose

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        displacement = CartesianPose(self._name, self._reference_frame)
        displacement.set_position(period * self._linear_velocity)
        displacement.set_orientation(quat.exp(self._angular_velocity, 0.5 * period))
        return displacement

    def _differentiate(self, dt: timedelta) -> CartesianAcceleration:
        from kinestate.cartesian.acceleration import CartesianAcceleration

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        if period == 0.0:
            raise ZeroDivisionError(f"Cannot differentiate {self._name} over a zero duration")
        acceleration = CartesianAcceleration(self._name, self._reference_frame)
        acceleration.set_linear_acceleration(self._linear_velocity / period)
        acceleration.set_angular_acceleration(self._angular_velocity / period)
        return acceleration

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__mul__(other)

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__rmul__(other)

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._differentiate(other)
        return super().__truediv__(other)
