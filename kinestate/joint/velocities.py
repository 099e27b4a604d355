"""
Joint velocities.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

from numpy.typing import ArrayLike

from kinestate.joint._projection import _JointProjection
from kinestate.joint.state import JointNames
from kinestate.types import JointStateVariable, StateType, duration_to_seconds

if TYPE_CHECKING:
    from kinestate.joint.accelerations import JointAccelerations
    from kinestate.joint.positions import JointPositions


class JointVelocities(_JointProjection):
    """
    Joint velocities.

    Multiplying by a duration integrates into joint positions, dividing by
    a duration gives joint accelerations.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.JOINT_VELOCITIES
    DATA_VARIABLE: ClassVar[JointStateVariable] = JointStateVariable.VELOCITIES

    def __init__(
        self,
        robot_name: str = "",
        joint_names: JointNames = 0,
        *,
        velocities: ArrayLike | None = None,
    ):
        super().__init__(robot_name, joint_names)
        if velocities is not None:
            self.set_velocities(velocities)

    def _integrate(self, dt: timedelta) -> JointPositions:
        from kinestate.joint.positions import JointPositions

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        return JointPositions(self._name, self._names, positions=self._velocities * period)

    def _differentiate(self, dt: timedelta) -> JointAccelerations:
        from kinestate.joint.accelerations import JointAccelerations

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        if period == 0.0:
            raise ZeroDivisionError(f"Cannot differentiate {self._name} over a zero duration")
        return JointAccelerations(
            self._name, self._names, accelerations=self._velocities / period
        )

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
