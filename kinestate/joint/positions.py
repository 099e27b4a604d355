"""
Joint positions.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

from numpy.typing import ArrayLike

from kinestate.joint._projection import _JointProjection
from kinestate.joint.state import JointNames
from kinestate.types import JointStateVariable, StateType, duration_to_seconds

if TYPE_CHECKING:
    from kinestate.joint.velocities import JointVelocities


class JointPositions(_JointProjection):
    """Joint positions; dividing by a duration gives joint velocities."""

    STATE_TYPE: ClassVar[StateType] = StateType.JOINT_POSITIONS
    DATA_VARIABLE: ClassVar[JointStateVariable] = JointStateVariable.POSITIONS

    def __init__(
        self,
        robot_name: str = "",
        joint_names: JointNames = 0,
        *,
        positions: ArrayLike | None = None,
    ):
        super().__init__(robot_name, joint_names)
        if positions is not None:
            self.set_positions(positions)

    def _differentiate(self, dt: timedelta) -> JointVelocities:
        from kinestate.joint.velocities import JointVelocities

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        if period == 0.0:
            raise ZeroDivisionError(f"Cannot differentiate {self._name} over a zero duration")
        return JointVelocities(
            self._name, self._names, velocities=self._positions / period
        )

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._differentiate(other)
        return super().__truediv__(other)
