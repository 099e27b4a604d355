"""
Dense Cartesian state and its arithmetic.

A CartesianState holds every kinematic quantity of a rigid body in task
space: pose, twist, acceleration and wrench. Binary operations are gated
by the reference-frame compatibility protocol of SpatialState.

Quaternions are stored as [w, x, y, z]. The ALL data layout is:
    position(3), orientation(4), linear velocity(3), angular velocity(3),
    linear acceleration(3), angular acceleration(3), force(3), torque(3)
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, ClassVar, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from kinestate.config import TRACE
from kinestate.core.spatial_state import SpatialState
from kinestate.core.state import State
from kinestate.types import CartesianStateVariable, StateType
from kinestate.utils import quaternion as quat
from kinestate.utils import se3_utils
from kinestate.utils.errors import (
    IncompatibleSizeError,
    IncompatibleStatesError,
    NotImplementedStateError,
)

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="CartesianState")

_V = CartesianStateVariable

# Attribute name and size of every elementary field
_FIELD_SIZES: dict[str, int] = {
    "_position": 3,
    "_orientation": 4,
    "_linear_velocity": 3,
    "_angular_velocity": 3,
    "_linear_acceleration": 3,
    "_angular_acceleration": 3,
    "_force": 3,
    "_torque": 3,
}

_VARIABLE_FIELDS: dict[CartesianStateVariable, tuple[str, ...]] = {
    _V.POSITION: ("_position",),
    _V.ORIENTATION: ("_orientation",),
    _V.LINEAR_VELOCITY: ("_linear_velocity",),
    _V.ANGULAR_VELOCITY: ("_angular_velocity",),
    _V.LINEAR_ACCELERATION: ("_linear_acceleration",),
    _V.ANGULAR_ACCELERATION: ("_angular_acceleration",),
    _V.FORCE: ("_force",),
    _V.TORQUE: ("_torque",),
    _V.POSE: ("_position", "_orientation"),
    _V.TWIST: ("_linear_velocity", "_angular_velocity"),
    _V.ACCELERATION: ("_linear_acceleration", "_angular_acceleration"),
    _V.WRENCH: ("_force", "_torque"),
    _V.ALL: tuple(_FIELD_SIZES),
}

# Fields that are plain vectors (everything but the orientation)
_VECTOR_FIELDS: tuple[str, ...] = tuple(f for f in _FIELD_SIZES if f != "_orientation")


def variable_size(state_variable: CartesianStateVariable) -> int:
    """Number of values covered by a state variable selector."""
    return sum(_FIELD_SIZES[f] for f in _VARIABLE_FIELDS[state_variable])


def _as_vector(value: ArrayLike, size: int, label: str) -> NDArray[np.float64]:
    arr = np.asarray(value, dtype=np.float64).reshape(-1)
    if arr.size != size:
        raise IncompatibleSizeError(
            f"Input {label} is of incorrect size: expected {size}, given {arr.size}"
        )
    return arr.copy()


def _is_scalar(value: Any) -> bool:
    return isinstance(value, Real)


class CartesianState(SpatialState):
    """
    Pose, twist, acceleration and wrench of a frame in a reference frame.

    Construction yields an empty state whose fields hold the identity
    (zero vectors and identity orientation). Writing any field fills it.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.CARTESIAN_STATE
    # State variable exposed by data() / set_data()
    DATA_VARIABLE: ClassVar[CartesianStateVariable] = _V.ALL

    def __init__(self, name: str = "", reference_frame: str | None = None):
        super().__init__(name, reference_frame)
        self._position = np.zeros(3)
        self._orientation = quat.IDENTITY.copy()
        self._linear_velocity = np.zeros(3)
        self._angular_velocity = np.zeros(3)
        self._linear_acceleration = np.zeros(3)
        self._angular_acceleration = np.zeros(3)
        self._force = np.zeros(3)
        self._torque = np.zeros(3)

    # ----- factories -----

    @classmethod
    def Identity(cls: type[C], name: str, reference_frame: str | None = None) -> C:
        """Filled state with zero vectors and identity orientation."""
        state = cls(name, reference_frame)
        state.set_filled()
        return state

    @classmethod
    def Random(
        cls: type[C],
        name: str,
        reference_frame: str | None = None,
        rng: np.random.Generator | None = None,
    ) -> C:
        """State whose data variable is filled with random values in [-1, 1]."""
        rng = rng if rng is not None else np.random.default_rng()
        state = cls(name, reference_frame)
        for field in _VARIABLE_FIELDS[cls.DATA_VARIABLE]:
            if field == "_orientation":
                state._orientation = quat.random(rng)
            else:
                setattr(state, field, rng.uniform(-1.0, 1.0, 3))
        state.set_filled()
        return state

    @classmethod
    def from_state(cls: type[C], state: CartesianState) -> C:
        """
        Project any Cartesian state onto this class.

        Fields outside the class data variable are reset to identity, the
        empty flag is preserved.
        """
        result = cls(state.get_name(), state.get_reference_frame())
        for field in _VARIABLE_FIELDS[cls.DATA_VARIABLE]:
            setattr(result, field, getattr(state, field).copy())
        result.set_empty(state.is_empty())
        return result

    # ----- compatibility -----

    def _is_type_compatible(self, other: State) -> bool:
        if not isinstance(other, CartesianState):
            return False
        generic = StateType.CARTESIAN_STATE
        return (
            self._type == other.get_type()
            or self._type == generic
            or other.get_type() == generic
        )

    def _assert_operable(self, other: CartesianState) -> None:
        self._assert_not_empty()
        other._assert_not_empty()
        if not self.is_compatible(other):
            raise IncompatibleStatesError(
                f"{other.get_name()} expressed in {other.get_reference_frame()} is "
                f"incompatible with {self._name} expressed in {self._reference_frame}"
            )

    # ----- field getters -----

    def _get(self, field: str) -> NDArray[np.float64]:
        self._assert_not_empty()
        return getattr(self, field).copy()

    def get_position(self) -> NDArray[np.float64]:
        return self._get("_position")

    def get_orientation(self) -> NDArray[np.float64]:
        """Unit quaternion [w, x, y, z]."""
        return self._get("_orientation")

    def get_orientation_matrix(self) -> NDArray[np.float64]:
        return quat.to_rotation_matrix(self.get_orientation())

    def get_linear_velocity(self) -> NDArray[np.float64]:
        return self._get("_linear_velocity")

    def get_angular_velocity(self) -> NDArray[np.float64]:
        return self._get("_angular_velocity")

    def get_linear_acceleration(self) -> NDArray[np.float64]:
        return self._get("_linear_acceleration")

    def get_angular_acceleration(self) -> NDArray[np.float64]:
        return self._get("_angular_acceleration")

    def get_force(self) -> NDArray[np.float64]:
        return self._get("_force")

    def get_torque(self) -> NDArray[np.float64]:
        return self._get("_torque")

    def get_pose(self) -> NDArray[np.float64]:
        return self.get_state_variable(_V.POSE)

    def get_twist(self) -> NDArray[np.float64]:
        return self.get_state_variable(_V.TWIST)

    def get_acceleration(self) -> NDArray[np.float64]:
        return self.get_state_variable(_V.ACCELERATION)

    def get_wrench(self) -> NDArray[np.float64]:
        return self.get_state_variable(_V.WRENCH)

    def get_transformation_matrix(self) -> NDArray[np.float64]:
        """4x4 homogeneous matrix of the pose."""
        self._assert_not_empty()
        return se3_utils.matrix_from_pose(self._position, self._orientation)

    def get_state_variable(
        self, state_variable: CartesianStateVariable
    ) -> NDArray[np.float64]:
        """Concatenated copy of the fields covered by the selector."""
        self._assert_not_empty()
        return np.concatenate([getattr(self, f) for f in _VARIABLE_FIELDS[state_variable]])

    # ----- field setters -----

    def _set(self, field: str, value: ArrayLike) -> None:
        arr = _as_vector(value, _FIELD_SIZES[field], field.lstrip("_"))
        if field == "_orientation":
            arr = quat.normalize(arr)
        setattr(self, field, arr)
        self.set_filled()

    def set_position(self, position: ArrayLike) -> None:
        self._set("_position", position)

    def set_orientation(self, orientation: ArrayLike) -> None:
        """Set the orientation from a [w, x, y, z] quaternion (normalized)."""
        self._set("_orientation", orientation)

    def set_orientation_matrix(self, rotation_matrix: ArrayLike) -> None:
        self._set("_orientation", quat.from_rotation_matrix(rotation_matrix))

    def set_linear_velocity(self, linear_velocity: ArrayLike) -> None:
        self._set("_linear_velocity", linear_velocity)

    def set_angular_velocity(self, angular_velocity: ArrayLike) -> None:
        self._set("_angular_velocity", angular_velocity)

    def set_linear_acceleration(self, linear_acceleration: ArrayLike) -> None:
        self._set("_linear_acceleration", linear_acceleration)

    def set_angular_acceleration(self, angular_acceleration: ArrayLike) -> None:
        self._set("_angular_acceleration", angular_acceleration)

    def set_force(self, force: ArrayLike) -> None:
        self._set("_force", force)

    def set_torque(self, torque: ArrayLike) -> None:
        self._set("_torque", torque)

    def set_pose(self, pose: ArrayLike) -> None:
        self.set_state_variable(pose, _V.POSE)

    def set_twist(self, twist: ArrayLike) -> None:
        self.set_state_variable(twist, _V.TWIST)

    def set_acceleration(self, acceleration: ArrayLike) -> None:
        self.set_state_variable(acceleration, _V.ACCELERATION)

    def set_wrench(self, wrench: ArrayLike) -> None:
        self.set_state_variable(wrench, _V.WRENCH)

    def set_state_variable(
        self, value: ArrayLike, state_variable: CartesianStateVariable
    ) -> None:
        fields = _VARIABLE_FIELDS[state_variable]
        arr = _as_vector(value, variable_size(state_variable), state_variable.name.lower())
        # Stage every slice first; a rejected write leaves the state untouched.
        staged: list[tuple[str, NDArray[np.float64]]] = []
        offset = 0
        for field in fields:
            size = _FIELD_SIZES[field]
            part = arr[offset : offset + size].copy()
            if field == "_orientation":
                part = quat.normalize(part)
            staged.append((field, part))
            offset += size
        for field, part in staged:
            setattr(self, field, part)
        self.set_filled()

    def set_zero(self) -> None:
        """Reset every field to identity; the empty flag is untouched."""
        for field in _VECTOR_FIELDS:
            getattr(self, field).fill(0.0)
        self._orientation = quat.IDENTITY.copy()

    def data(self) -> NDArray[np.float64]:
        return self.get_state_variable(self.DATA_VARIABLE)

    def set_data(self, data: ArrayLike) -> None:
        expected = variable_size(self.DATA_VARIABLE)
        arr = np.asarray(data, dtype=np.float64).reshape(-1)
        if arr.size != expected:
            raise IncompatibleSizeError(
                f"Input is of incorrect size: expected {expected}, given {arr.size}"
            )
        self.set_state_variable(arr, self.DATA_VARIABLE)

    def to_list(self) -> list[float]:
        return self.data().tolist()

    # ----- clamping and norms -----

    def clamp_state_variable(
        self,
        max_value: float,
        state_variable: CartesianStateVariable,
        noise_ratio: float = 0.0,
    ) -> None:
        """
        Clamp the Euclidean norm of a field to max_value, in place.

        A field whose norm is below ``noise_ratio * max_value`` is snapped
        to zero first. The direction of a clamped field is preserved.
        """
        if state_variable in (_V.ORIENTATION, _V.POSE, _V.ALL):
            raise NotImplementedStateError(
                f"clamp_state_variable is not implemented for {state_variable.name}"
            )
        value = self.get_state_variable(state_variable)
        norm = float(np.linalg.norm(value))
        if noise_ratio != 0.0 and norm < noise_ratio * max_value:
            logger.log(
                TRACE, "Dead zone applied to %s of %s", state_variable.name, self._name
            )
            value = np.zeros_like(value)
        elif norm > max_value:
            value = value * (max_value / norm)
        self.set_state_variable(value, state_variable)

    def norms(
        self, state_variable: CartesianStateVariable = _V.ALL
    ) -> list[float]:
        """Norms of each field covered by the selector, in field order."""
        self._assert_not_empty()
        return [
            float(np.linalg.norm(getattr(self, f)))
            for f in _VARIABLE_FIELDS[state_variable]
        ]

    def normalized(self: C, state_variable: CartesianStateVariable = _V.ALL) -> C:
        """Copy with each selected field scaled to unit norm (zero fields kept)."""
        self._assert_not_empty()
        result = self.copy()
        for field in _VARIABLE_FIELDS[state_variable]:
            value = getattr(result, field)
            norm = float(np.linalg.norm(value))
            if norm > 0.0:
                setattr(result, field, value / norm)
        return result

    def dist(
        self, other: CartesianState, state_variable: CartesianStateVariable = _V.ALL
    ) -> float:
        """
        Sum of the distances between the selected fields of two states.

        Vector fields use the Euclidean norm of the difference, the
        orientation uses ``acos(2 * <q1, q2>^2 - 1)``.
        """
        self._assert_operable(other)
        result = 0.0
        for field in _VARIABLE_FIELDS[state_variable]:
            if field == "_orientation":
                inner = quat.dot(self._orientation, other._orientation)
                result += float(np.arccos(np.clip(2.0 * inner * inner - 1.0, -1.0, 1.0)))
            else:
                result += float(np.linalg.norm(getattr(self, field) - getattr(other, field)))
        return result

    # ----- transforms -----

    def inverse(self: C) -> C:
        """
        Inverse transform: the reference frame expressed in this frame.

        Name and reference frame are swapped, the orientation is conjugated
        and every vector is negated and re-expressed in the inverted frame.
        """
        self._assert_not_empty()
        result = self.copy()
        result._name = self._reference_frame
        result._reference_frame = self._name
        q_inv = quat.conjugate(self._orientation)
        result._orientation = q_inv
        for field in _VECTOR_FIELDS:
            setattr(result, field, quat.rotate(q_inv, -getattr(self, field)))
        return result

    def _composition_class(self, other: CartesianState) -> type[CartesianState]:
        # A pose (or a full state) acts as a transform on any Cartesian quantity
        if type(self) is CartesianState or self._type == StateType.CARTESIAN_POSE:
            return type(other)
        return CartesianState

    def _compose(self, other: CartesianState) -> CartesianState:
        """
        Compose f_S_b (self) with b_S_c (other) into f_S_c.

        Requires other to be expressed in self's frame.
        """
        self._assert_not_empty()
        other._assert_not_empty()
        if self._name != other.get_reference_frame():
            raise IncompatibleStatesError(
                f"Expected {other.get_name()} to be expressed in {self._name}, "
                f"got {other.get_reference_frame()}"
            )
        f_R_b = self._orientation
        f_p_b = self._position
        f_w_b = self._angular_velocity
        f_alpha_b = self._angular_acceleration
        b_R_c = quat.align(f_R_b, other._orientation)

        # vectors of b_S_c rotated into f
        p = quat.rotate(f_R_b, other._position)
        v = quat.rotate(f_R_b, other._linear_velocity)
        w = quat.rotate(f_R_b, other._angular_velocity)
        a = quat.rotate(f_R_b, other._linear_acceleration)
        alpha = quat.rotate(f_R_b, other._angular_acceleration)
        force = quat.rotate(f_R_b, other._force)
        torque = quat.rotate(f_R_b, other._torque)

        result = CartesianState(other.get_name(), self._reference_frame)
        result._position = f_p_b + p
        result._orientation = quat.normalize(quat.multiply(f_R_b, b_R_c))
        result._linear_velocity = self._linear_velocity + v + np.cross(f_w_b, p)
        result._angular_velocity = f_w_b + w
        result._linear_acceleration = (
            self._linear_acceleration
            + a
            + np.cross(f_alpha_b, p)
            + 2.0 * np.cross(f_w_b, v)
            + np.cross(f_w_b, np.cross(f_w_b, p))
        )
        result._angular_acceleration = f_alpha_b + alpha + np.cross(f_w_b, w)
        result._force = self._force + force
        result._torque = self._torque + torque + np.cross(p, force)
        result.set_filled()

        result_cls = self._composition_class(other)
        if result_cls is CartesianState:
            return result
        return result_cls.from_state(result)

    # ----- scaling -----

    def _scaled(self: C, factor: float) -> C:
        self._assert_not_empty()
        result = self.copy()
        for field in _VECTOR_FIELDS:
            setattr(result, field, getattr(self, field) * factor)
        # the orientation is scaled as a displacement from identity
        result._orientation = quat.power(self._orientation, factor)
        return result

    def _divided(self: C, divisor: float) -> C:
        if divisor == 0:
            raise ZeroDivisionError(f"Cannot divide {self._name} state by zero")
        return self._scaled(1.0 / divisor)

    # ----- addition -----

    def _result_class(self, other: CartesianState) -> type[CartesianState]:
        return type(self) if type(self) is type(other) else CartesianState

    def _combined(self, other: CartesianState, sign: float) -> CartesianState:
        self._assert_operable(other)
        result_cls = self._result_class(other)
        result = self.copy() if result_cls is type(self) else CartesianState.from_state(self)
        for field in _VECTOR_FIELDS:
            setattr(result, field, getattr(self, field) + sign * getattr(other, field))
        # orientations combine on the group, not in the vector space
        q_other = quat.align(self._orientation, other._orientation)
        if sign < 0:
            q_other = quat.conjugate(q_other)
        result._orientation = quat.normalize(quat.multiply(self._orientation, q_other))
        return result

    # ----- operators -----

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, CartesianState):
            return self._compose(other)
        if _is_scalar(other):
            return self._scaled(float(other))
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if _is_scalar(other):
            return self._scaled(float(other))
        return NotImplemented

    def __truediv__(self, other: Any) -> Any:
        if _is_scalar(other):
            return self._divided(float(other))
        return NotImplemented

    def __add__(self, other: Any) -> Any:
        if isinstance(other, CartesianState):
            return self._combined(other, 1.0)
        return NotImplemented

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, CartesianState):
            return self._combined(other, -1.0)
        return NotImplemented

    def __neg__(self: C) -> C:
        self._assert_not_empty()
        result = self.copy()
        for field in _VECTOR_FIELDS:
            setattr(result, field, -getattr(self, field))
        result._orientation = quat.conjugate(self._orientation)
        return result

    def __repr__(self) -> str:
        if self._empty:
            return (
                f"Empty {type(self).__name__}: {self._name} "
                f"expressed in {self._reference_frame} frame"
            )
        values = np.array2string(self.data(), precision=4, separator=", ")
        return (
            f"{type(self).__name__}: {self._name} expressed in "
            f"{self._reference_frame} frame, data={values}"
        )


def dist(
    s1: CartesianState,
    s2: CartesianState,
    state_variable: CartesianStateVariable = _V.ALL,
) -> float:
    return s1.dist(s2, state_variable)


__all__ = ["CartesianState", "dist", "variable_size"]
