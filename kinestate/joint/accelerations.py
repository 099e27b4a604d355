"""
Joint accelerations.
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


class JointAccelerations(_JointProjection):
    """Joint accelerations; multiplying by a duration gives joint velocities."""

    STATE_TYPE: ClassVar[StateType] = StateType.JOINT_ACCELERATIONS
    DATA_VARIABLE: ClassVar[JointStateVariable] = JointStateVariable.ACCELERATIONS

    def __init__(
        self,
        robot_name: str = "",
        joint_names: JointNames = 0,
        *,
        accelerations: ArrayLike | None = None,
    ):
        super().__init__(robot_name, joint_names)
        if accelerations is not None:
            self.set_accelerations(accelerations)

    def _integrate(self, dt: timedelta) -> JointVelocities:
        from kinestate.joint.velocities import JointVelocities

        self._assert_not_empty()
        period = duration_to_seconds(dt)
        return JointVelocities(
            self._name, self._names, velocities=self._accelerations * period
        )

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__mul__(other)

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return self._integrate(other)
        return super().__rmul__(other)
