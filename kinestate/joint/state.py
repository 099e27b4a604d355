"""
Joint-space state: positions, velocities, accelerations and torques of a
named set of joints.

Joint states carry no reference frame. Two joint states are compatible
only when their joint name lists are identical, in size and in order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from numbers import Real
from typing import Any, ClassVar, TypeVar, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from kinestate import config
from kinestate.core.state import State
from kinestate.types import JointStateVariable, StateType
from kinestate.utils.errors import (
    IncompatibleSizeError,
    IncompatibleStatesError,
    JointNotFoundError,
)

logger = logging.getLogger(__name__)

J = TypeVar("J", bound="JointState")

_V = JointStateVariable

_VARIABLE_FIELDS: dict[JointStateVariable, tuple[str, ...]] = {
    _V.POSITIONS: ("_positions",),
    _V.VELOCITIES: ("_velocities",),
    _V.ACCELERATIONS: ("_accelerations",),
    _V.TORQUES: ("_torques",),
    _V.ALL: ("_positions", "_velocities", "_accelerations", "_torques"),
}

JointNames = Union[int, Sequence[str]]


def _make_names(joint_names: JointNames) -> list[str]:
    if isinstance(joint_names, (int, np.integer)):
        return [f"{config.DEFAULT_JOINT_PREFIX}{i}" for i in range(int(joint_names))]
    names = [str(n) for n in joint_names]
    if len(set(names)) != len(names):
        duplicates = sorted({n for n in names if names.count(n) > 1})
        raise ValueError(f"Joint names must be unique, got duplicates: {duplicates}")
    return names


def _as_array(value: ArrayLike | float, size: int, label: str) -> NDArray[np.float64]:
    """Broadcast a scalar, or size-check an array, to ``size`` elements."""
    if isinstance(value, Real):
        return np.full(size, float(value))
    arr = np.asarray(value, dtype=np.float64).reshape(-1)
    if arr.size != size:
        raise IncompatibleSizeError(
            f"{label} is of incorrect size: expected {size}, given {arr.size}"
        )
    return arr.copy()


class JointState(State):
    """
    Positions, velocities, accelerations and torques of N named joints.

    A joint count generates the names ``joint0 .. jointN-1``.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.JOINT_STATE
    # State variable exposed by data() / set_data() and touched by scaling
    DATA_VARIABLE: ClassVar[JointStateVariable] = _V.ALL

    def __init__(self, robot_name: str = "", joint_names: JointNames = 0):
        super().__init__(robot_name)
        self._names: list[str] = _make_names(joint_names)
        self.initialize()

    def initialize(self) -> None:
        super().initialize()
        size = len(self._names)
        self._positions = np.zeros(size)
        self._velocities = np.zeros(size)
        self._accelerations = np.zeros(size)
        self._torques = np.zeros(size)

    # ----- factories -----

    @classmethod
    def Zero(cls: type[J], robot_name: str, joint_names: JointNames) -> J:
        """Filled state with every field at zero."""
        state = cls(robot_name, joint_names)
        state.set_filled()
        return state

    @classmethod
    def Random(
        cls: type[J],
        robot_name: str,
        joint_names: JointNames,
        rng: np.random.Generator | None = None,
    ) -> J:
        """State whose data variable is filled with random values in [-1, 1]."""
        rng = rng if rng is not None else np.random.default_rng()
        state = cls(robot_name, joint_names)
        size = len(_VARIABLE_FIELDS[cls.DATA_VARIABLE]) * state.get_size()
        state.set_state_variable(rng.uniform(-1.0, 1.0, size), cls.DATA_VARIABLE)
        return state

    @classmethod
    def from_state(cls: type[J], state: JointState) -> J:
        """
        Project any joint state onto this class.

        Fields outside the class data variable are zero, the empty flag is
        preserved.
        """
        result = cls(state.get_name(), state.get_names())
        for field in _VARIABLE_FIELDS[cls.DATA_VARIABLE]:
            setattr(result, field, getattr(state, field).copy())
        result.set_empty(state.is_empty())
        return result

    # ----- names and indices -----

    def get_size(self) -> int:
        return len(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def get_names(self) -> list[str]:
        return list(self._names)

    @property
    def names(self) -> list[str]:
        return self.get_names()

    def set_names(self, joint_names: JointNames) -> None:
        """Rename the joints; the number of joints cannot change."""
        count = int(joint_names) if isinstance(joint_names, (int, np.integer)) else len(joint_names)
        if count != self.get_size():
            raise IncompatibleSizeError(
                f"Input number of joints is of incorrect size, expected "
                f"{self.get_size()} got {count}"
            )
        self._names = _make_names(joint_names)

    def get_joint_index(self, joint_name: str) -> int:
        try:
            return self._names.index(joint_name)
        except ValueError:
            raise JointNotFoundError(
                f"The joint with name '{joint_name}' could not be found in the joint state.",
                joint_name,
            ) from None

    def _resolve_index(self, joint: str | int) -> int:
        if isinstance(joint, str):
            return self.get_joint_index(joint)
        index = int(joint)
        if index < 0 or index >= self.get_size():
            raise JointNotFoundError(
                f"Index '{index}' is out of range for joint state with size {self.get_size()}",
                index,
            )
        return index

    # ----- compatibility -----

    def _is_type_compatible(self, other: State) -> bool:
        if not isinstance(other, JointState):
            return False
        generic = StateType.JOINT_STATE
        return (
            self._type == other.get_type()
            or self._type == generic
            or other.get_type() == generic
        )

    def is_compatible(self, other: State) -> bool:
        """Same joint-state family and identical joint names (size and order)."""
        return self._is_type_compatible(other) and self._names == other._names  # type: ignore[attr-defined]

    def _assert_operable(self, other: JointState) -> None:
        self._assert_not_empty()
        other._assert_not_empty()
        if not self.is_compatible(other):
            raise IncompatibleStatesError(
                "The two joint states are incompatible, check name, joint names and order or size"
            )

    # ----- field access -----

    def _get(self, field: str) -> NDArray[np.float64]:
        self._assert_not_empty()
        return getattr(self, field).copy()

    def _get_joint(self, field: str, joint: str | int) -> float:
        index = self._resolve_index(joint)
        self._assert_not_empty()
        return float(getattr(self, field)[index])

    def _set(self, field: str, value: ArrayLike) -> None:
        setattr(self, field, _as_array(value, self.get_size(), f"Input {field.lstrip('_')}"))
        self.set_filled()

    def _set_joint(self, field: str, value: float, joint: str | int) -> None:
        index = self._resolve_index(joint)
        getattr(self, field)[index] = float(value)
        self.set_filled()

    def get_positions(self) -> NDArray[np.float64]:
        return self._get("_positions")

    def get_position(self, joint: str | int) -> float:
        return self._get_joint("_positions", joint)

    def set_positions(self, positions: ArrayLike) -> None:
        self._set("_positions", positions)

    def set_position(self, position: float, joint: str | int) -> None:
        self._set_joint("_positions", position, joint)

    def get_velocities(self) -> NDArray[np.float64]:
        return self._get("_velocities")

    def get_velocity(self, joint: str | int) -> float:
        return self._get_joint("_velocities", joint)

    def set_velocities(self, velocities: ArrayLike) -> None:
        self._set("_velocities", velocities)

    def set_velocity(self, velocity: float, joint: str | int) -> None:
        self._set_joint("_velocities", velocity, joint)

    def get_accelerations(self) -> NDArray[np.float64]:
        return self._get("_accelerations")

    def get_acceleration(self, joint: str | int) -> float:
        return self._get_joint("_accelerations", joint)

    def set_accelerations(self, accelerations: ArrayLike) -> None:
        self._set("_accelerations", accelerations)

    def set_acceleration(self, acceleration: float, joint: str | int) -> None:
        self._set_joint("_accelerations", acceleration, joint)

    def get_torques(self) -> NDArray[np.float64]:
        return self._get("_torques")

    def get_torque(self, joint: str | int) -> float:
        return self._get_joint("_torques", joint)

    def set_torques(self, torques: ArrayLike) -> None:
        self._set("_torques", torques)

    def set_torque(self, torque: float, joint: str | int) -> None:
        self._set_joint("_torques", torque, joint)

    def get_state_variable(self, state_variable: JointStateVariable) -> NDArray[np.float64]:
        self._assert_not_empty()
        return np.concatenate([getattr(self, f) for f in _VARIABLE_FIELDS[state_variable]])

    def set_state_variable(self, value: ArrayLike, state_variable: JointStateVariable) -> None:
        fields = _VARIABLE_FIELDS[state_variable]
        size = self.get_size()
        arr = np.asarray(value, dtype=np.float64).reshape(-1)
        if arr.size != len(fields) * size:
            raise IncompatibleSizeError(
                f"Input is of incorrect size: expected {len(fields) * size}, given {arr.size}"
            )
        for i, field in enumerate(fields):
            setattr(self, field, arr[i * size : (i + 1) * size].copy())
        self.set_filled()

    def get_all_state_variables(self) -> NDArray[np.float64]:
        return self.get_state_variable(_V.ALL)

    def set_all_state_variables(self, value: ArrayLike) -> None:
        self.set_state_variable(value, _V.ALL)

    def set_zero(self) -> None:
        for field in _VARIABLE_FIELDS[_V.ALL]:
            getattr(self, field).fill(0.0)

    def data(self) -> NDArray[np.float64]:
        return self.get_state_variable(self.DATA_VARIABLE)

    def array(self) -> NDArray[np.float64]:
        return self.data()

    def set_data(self, data: ArrayLike) -> None:
        self.set_state_variable(data, self.DATA_VARIABLE)

    def to_list(self) -> list[float]:
        return self.data().tolist()

    # ----- gains and clamping -----

    def multiply_state_variable(
        self, gain: float | ArrayLike, state_variable: JointStateVariable
    ) -> None:
        """
        Multiply a state variable in place.

        ``gain`` may be a scalar, an array (elementwise) or a square matrix.
        """
        value = self.get_state_variable(state_variable)
        expected = value.size
        if isinstance(gain, Real):
            self.set_state_variable(float(gain) * value, state_variable)
            return
        gain_arr = np.asarray(gain, dtype=np.float64)
        if gain_arr.ndim == 1:
            if gain_arr.size != expected:
                raise IncompatibleSizeError(
                    f"Gain matrix is of incorrect size: expected {expected}, given {gain_arr.size}"
                )
            self.set_state_variable(gain_arr * value, state_variable)
        elif gain_arr.ndim == 2:
            if gain_arr.shape != (expected, expected):
                raise IncompatibleSizeError(
                    f"Gain matrix is of incorrect size: expected {expected}x{expected}, "
                    f"given {gain_arr.shape[0]}x{gain_arr.shape[1]}"
                )
            self.set_state_variable(gain_arr @ value, state_variable)
        else:
            raise IncompatibleSizeError(
                f"Gain of dimension {gain_arr.ndim} cannot be applied to a joint state"
            )

    def clamp_state_variable(
        self,
        max_absolute_value: float | ArrayLike,
        state_variable: JointStateVariable,
        noise_ratio: float | ArrayLike = 0.0,
    ) -> None:
        """
        Clamp a state variable element by element, in place.

        An element below ``noise_ratio * max`` (with a non-zero ratio) is set
        to zero; an element above ``max`` is scaled by ``max / |value|``.
        """
        value = self.get_state_variable(state_variable)
        expected = value.size
        max_arr = _as_array(max_absolute_value, expected, "Array of max values")
        noise_arr = _as_array(noise_ratio, expected, "Array of noise ratios")
        magnitude = np.abs(value)
        dead = (noise_arr != 0.0) & (magnitude < noise_arr * max_arr)
        over = ~dead & (magnitude > max_arr)
        if dead.any():
            logger.debug(
                "Dead zone applied to %d element(s) of %s", int(dead.sum()), self._name
            )
        value[dead] = 0.0
        value[over] *= max_arr[over] / magnitude[over]
        self.set_state_variable(value, state_variable)

    def dist(self, other: JointState, state_variable: JointStateVariable = _V.ALL) -> float:
        """Sum of the Euclidean norms of the field differences."""
        self._assert_operable(other)
        return float(
            sum(
                np.linalg.norm(getattr(self, f) - getattr(other, f))
                for f in _VARIABLE_FIELDS[state_variable]
            )
        )

    # ----- arithmetic -----

    def _scaled(self: J, gain: float | ArrayLike) -> J:
        self._assert_not_empty()
        result = self.copy()
        result.multiply_state_variable(gain, self.DATA_VARIABLE)
        return result

    def _combined(self, other: JointState, sign: float) -> JointState:
        self._assert_operable(other)
        result = self.copy() if type(self) is type(other) else JointState.from_state(self)
        for field in _VARIABLE_FIELDS[_V.ALL]:
            setattr(result, field, getattr(self, field) + sign * getattr(other, field))
        result.set_filled()
        return result

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, (Real, np.ndarray)):
            return self._scaled(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, (Real, np.ndarray)):
            return self._scaled(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, Real):
            if other == 0:
                raise ZeroDivisionError(f"Cannot divide {self._name} state by zero")
            return self._scaled(1.0 / float(other))
        return NotImplemented

    def __add__(self, other: Any) -> Any:
        if isinstance(other, JointState):
            return self._combined(other, 1.0)
        return NotImplemented

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, JointState):
            return self._combined(other, -1.0)
        return NotImplemented

    def __neg__(self: J) -> J:
        return self._scaled(-1.0)

    def __repr__(self) -> str:
        if self._empty:
            return f"Empty {self._name} {type(self).__name__}"
        lines = [f"{self._name} {type(self).__name__}", f"names: {self._names}"]
        for field in _VARIABLE_FIELDS[self.DATA_VARIABLE]:
            lines.append(f"{field.lstrip('_')}: {getattr(self, field).tolist()}")
        return "\n".join(lines)


def dist(
    s1: JointState, s2: JointState, state_variable: JointStateVariable = _V.ALL
) -> float:
    return s1.dist(s2, state_variable)
