"""
Cartesian acceleration: linear and angular acceleration.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

from numpy.typing import ArrayLike

from kinestate.cartesian._linear_angular import _LinearAngularState
from kinestate.types import CartesianStateVariable, StateType, duration_to_seconds

if TYPE_CHECKING:
    from kinestate.cartesian.twist import CartesianTwist

_V = CartesianStateVariable


class CartesianAcceleration(_LinearAngularState):
    """Linear + angular acceleration, ``data()`` is ``[ax, ay, az, alx, aly, alz]``."""

    STATE_TYPE: ClassVar[StateType] = StateType.CARTESIAN_ACCELERATION
    DATA_VARIABLE: ClassVar[CartesianStateVariable] = _V.ACCELERATION
    LINEAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.LINEAR_ACCELERATION
    ANGULAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.ANGULAR_ACCELERATION

    def __init__(
        self,
        name: str = "",
        reference_frame: str | None = None,
        *,
        linear_acceleration: ArrayLike | None = None,
        angular_acceleration: ArrayLike | None = None,
    ):
        super().__init__(name, reference_frame)
        if linear_acceleration is not None:
            self.set_linear_acceleration(linear_acceleration)
        if angular_acceleration is not None:
            self.set_angular_acceleration(angular_acceleration)

    @classmethod
    def Zero(cls, name: str, reference_frame: str | None = None) -> CartesianAcceleration:
        return cls.Identity(name, reference_frame)

    def _integrate(self, dt: timedelta) -> CartesianTwist:
        from kinestate.cartesian.twist import CartesianTwist

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        twist = CartesianTwist(self._name, self._reference_frame)
        twist.set_linear_velocity(period * self._linear_acceleration)
        twist.set_angular_velocity(period * self._angular_acceleration)
        return twist

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__mul__(other)

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__rmul__(other)
