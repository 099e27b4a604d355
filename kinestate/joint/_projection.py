"""Shared behavior of the single-field joint states."""

from __future__ import annotations

from typing import TypeVar

from numpy.typing import ArrayLike

from kinestate.joint.state import JointState

P = TypeVar("P", bound="_JointProjection")


class _JointProjection(JointState):
    """Joint state exposing a single field through ``data()``."""

    def clamp(
        self, max_absolute_value: float | ArrayLike, noise_ratio: float | ArrayLike = 0.0
    ) -> None:
        """Clamp the exposed field element by element, in place."""
        self.clamp_state_variable(max_absolute_value, self.DATA_VARIABLE, noise_ratio)

    def clamped(
        self: P, max_absolute_value: float | ArrayLike, noise_ratio: float | ArrayLike = 0.0
    ) -> P:
        result = self.copy()
        result.clamp(max_absolute_value, noise_ratio)
        return result
