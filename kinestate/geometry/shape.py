"""
Base class for geometric shapes placed by a center pose.
"""

from __future__ import annotations

from typing import ClassVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from kinestate.cartesian import CartesianPose, CartesianState
from kinestate.core.state import State
from kinestate.types import StateType


class Shape(State):
    """Shape whose center is a CartesianPose named after the shape."""

    STATE_TYPE: ClassVar[StateType] = StateType.GEOMETRY_SHAPE

    def __init__(self, name: str = "", reference_frame: str | None = None):
        super().__init__(name)
        self._center_state: CartesianPose = CartesianPose.Identity(name, reference_frame)

    def get_reference_frame(self) -> str:
        return self._center_state.get_reference_frame()

    def get_center_state(self) -> CartesianPose:
        return self._center_state.copy(keep_timestamp=True)

    def get_center_pose(self) -> NDArray[np.float64]:
        return self._center_state.get_pose()

    def get_center_position(self) -> NDArray[np.float64]:
        return self._center_state.get_position()

    def get_center_orientation(self) -> NDArray[np.float64]:
        return self._center_state.get_orientation()

    def set_center_state(self, state: CartesianState) -> None:
        """Replace the center; only the pose part of ``state`` is kept."""
        self._center_state = CartesianPose.from_state(state)
        self.set_filled()

    def set_center_pose(self, pose: ArrayLike) -> None:
        self._center_state.set_pose(pose)
        self.set_filled()

    def set_center_position(self, position: ArrayLike) -> None:
        self._center_state.set_position(position)
        self.set_filled()

    def set_center_orientation(self, orientation: ArrayLike) -> None:
        self._center_state.set_orientation(orientation)
        self.set_filled()

    def __repr__(self) -> str:
        if self._empty:
            return f"Empty {type(self).__name__}"
        return f"{type(self).__name__} {self._name} with center:\n{self._center_state!r}"
