"""
States expressed in a named reference frame.
"""

from __future__ import annotations

from typing import ClassVar

from kinestate import config
from kinestate.core.state import State
from kinestate.types import StateType
from kinestate.utils.errors import InvalidCastError


class SpatialState(State):
    """
    State attached to a reference frame.

    Two spatial states are compatible when one is the parent of the other,
    the child of the other, or when both share the same reference frame.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.SPATIAL_STATE

    def __init__(self, name: str = "", reference_frame: str | None = None):
        super().__init__(name)
        self._reference_frame: str = (
            reference_frame
            if reference_frame is not None
            else config.DEFAULT_REFERENCE_FRAME
        )

    def get_reference_frame(self) -> str:
        return self._reference_frame

    def set_reference_frame(self, reference_frame: str) -> None:
        self._reference_frame = reference_frame

    @property
    def reference_frame(self) -> str:
        return self._reference_frame

    @reference_frame.setter
    def reference_frame(self, reference_frame: str) -> None:
        self.set_reference_frame(reference_frame)

    @staticmethod
    def _as_spatial(other: State) -> SpatialState:
        if not isinstance(other, SpatialState):
            raise InvalidCastError(
                f"Could not cast {type(other).__name__} '{other.get_name()}' to a SpatialState"
            )
        return other

    def is_frame_compatible(self, other: State) -> bool:
        """
        Three-way frame relation between self and other.

        1) self name is other's reference frame (self is the parent)
        2) self reference frame is other's name (self is the child)
        3) both share the reference frame (siblings)
        """
        spatial = self._as_spatial(other)
        return (
            self._name == spatial._reference_frame
            or self._reference_frame == spatial._name
            or self._reference_frame == spatial._reference_frame
        )

    def is_compatible(self, other: State) -> bool:
        spatial = self._as_spatial(other)
        return self._is_type_compatible(spatial) and self.is_frame_compatible(spatial)

    def is_incompatible(self, other: State) -> bool:
        return not self.is_compatible(other)

    def __repr__(self) -> str:
        prefix = "Empty " if self._empty else ""
        return (
            f"{prefix}{type(self).__name__}: {self._name} "
            f"expressed in {self._reference_frame} frame"
        )
