"""
Cartesian wrench: force and torque.
"""

from __future__ import annotations

from typing import ClassVar

from numpy.typing import ArrayLike

from kinestate.cartesian._linear_angular import _LinearAngularState
from kinestate.types import CartesianStateVariable, StateType

_V = CartesianStateVariable


class CartesianWrench(_LinearAngularState):
    """Force + torque, ``data()`` is ``[fx, fy, fz, tx, ty, tz]``."""

    STATE_TYPE: ClassVar[StateType] = StateType.CARTESIAN_WRENCH
    DATA_VARIABLE: ClassVar[CartesianStateVariable] = _V.WRENCH
    LINEAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.FORCE
    ANGULAR_VARIABLE: ClassVar[CartesianStateVariable] = _V.TORQUE

    def __init__(
        self,
        name: str = "",
        reference_frame: str | None = None,
        *,
        force: ArrayLike | None = None,
        torque: ArrayLike | None = None,
    ):
        super().__init__(name, reference_frame)
        if force is not None:
            self.set_force(force)
        if torque is not None:
            self.set_torque(torque)

    @classmethod
    def Zero(cls, name: str, reference_frame: str | None = None) -> CartesianWrench:
        return cls.Identity(name, reference_frame)
