"""Shared behavior of the 6D linear + angular Cartesian quantities."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

import numpy as np

from kinestate.cartesian.state import CartesianState
from kinestate.types import CartesianStateVariable
from kinestate.utils.errors import IncompatibleSizeError

L = TypeVar("L", bound="_LinearAngularState")


class _LinearAngularState(CartesianState):
    """Base for twist, acceleration and wrench: a linear and an angular 3-vector."""

    LINEAR_VARIABLE: ClassVar[CartesianStateVariable]
    ANGULAR_VARIABLE: ClassVar[CartesianStateVariable]

    def _gained(self: L, gain: np.ndarray) -> L:
        """
        Apply a gain matrix to the linear and angular parts.

        A 6x6 gain uses its two 3x3 diagonal blocks, a 3x3 gain is applied
        to both parts.
        """
        self._assert_not_empty()
        gain = np.asarray(gain, dtype=np.float64)
        if gain.shape == (6, 6):
            linear_gain, angular_gain = gain[:3, :3], gain[3:, 3:]
        elif gain.shape == (3, 3):
            linear_gain = angular_gain = gain
        else:
            raise IncompatibleSizeError(
                f"Gain matrix is of incorrect size: expected 6x6 or 3x3, given "
                f"{'x'.join(str(d) for d in gain.shape)}"
            )
        result = self.copy()
        result.set_state_variable(
            linear_gain @ self.get_state_variable(self.LINEAR_VARIABLE),
            self.LINEAR_VARIABLE,
        )
        result.set_state_variable(
            angular_gain @ self.get_state_variable(self.ANGULAR_VARIABLE),
            self.ANGULAR_VARIABLE,
        )
        return result

    def clamp(
        self,
        max_linear: float,
        max_angular: float,
        linear_noise_ratio: float = 0.0,
        angular_noise_ratio: float = 0.0,
    ) -> None:
        """Clamp the linear and angular parts independently, in place."""
        self.clamp_state_variable(max_linear, self.LINEAR_VARIABLE, linear_noise_ratio)
        self.clamp_state_variable(max_angular, self.ANGULAR_VARIABLE, angular_noise_ratio)

    def clamped(
        self: L,
        max_linear: float,
        max_angular: float,
        linear_noise_ratio: float = 0.0,
        angular_noise_ratio: float = 0.0,
    ) -> L:
        result = self.copy()
        result.clamp(max_linear, max_angular, linear_noise_ratio, angular_noise_ratio)
        return result

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._gained(other)
        return super().__mul__(other)

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._gained(other)
        return super().__rmul__(other)
