"""
Named, runtime-typed values.

A Parameter wraps a value together with a ParameterType tag. The tag is
inferred from the value when not given explicitly, and every value written
afterwards is validated against it.
"""

from __future__ import annotations

from collections.abc import Callable
from numbers import Integral, Real
from typing import Any, ClassVar

import numpy as np

from kinestate.cartesian import CartesianPose, CartesianState
from kinestate.core.state import State
from kinestate.joint import JointPositions, JointState
from kinestate.types import ParameterType, StateType
from kinestate.utils.errors import InvalidParameterError

_P = ParameterType


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not _is_bool(value)


def _is_double(value: Any) -> bool:
    return isinstance(value, Real) and not _is_bool(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) or (
        isinstance(value, np.ndarray) and value.ndim == 1
    )


def _coerce_array(value: Any, check: Callable[[Any], bool], cast: Callable[[Any], Any]) -> list:
    if not _is_sequence(value):
        raise TypeError
    items = value.tolist() if isinstance(value, np.ndarray) else list(value)
    if not all(check(v) for v in items):
        raise TypeError
    return [cast(v) for v in items]


def _coerce_state(cls: type) -> Callable[[Any], Any]:
    def coerce(value: Any) -> Any:
        if not isinstance(value, cls):
            raise TypeError
        return value.copy(keep_timestamp=True)

    return coerce


def _coerce_vector(value: Any) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim != 1:
        raise TypeError
    return arr.copy()


def _coerce_matrix(value: Any) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim != 2:
        raise TypeError
    return arr.copy()


def _require(check: Callable[[Any], bool], cast: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def coerce(value: Any) -> Any:
        if not check(value):
            raise TypeError
        return cast(value)

    return coerce


# Validate a value against a type and return the stored form; TypeError on mismatch
_COERCERS: dict[ParameterType, Callable[[Any], Any]] = {
    _P.INT: _require(_is_int, int),
    _P.DOUBLE: _require(_is_double, float),
    _P.BOOL: _require(_is_bool, bool),
    _P.STRING: _require(lambda v: isinstance(v, str), str),
    _P.INT_ARRAY: lambda v: _coerce_array(v, _is_int, int),
    _P.DOUBLE_ARRAY: lambda v: _coerce_array(v, _is_double, float),
    _P.BOOL_ARRAY: lambda v: _coerce_array(v, _is_bool, bool),
    _P.STRING_ARRAY: lambda v: _coerce_array(v, lambda s: isinstance(s, str), str),
    _P.CARTESIAN_STATE: _coerce_state(CartesianState),
    _P.CARTESIAN_POSE: _coerce_state(CartesianPose),
    _P.JOINT_STATE: _coerce_state(JointState),
    _P.JOINT_POSITIONS: _coerce_state(JointPositions),
    _P.VECTOR: _coerce_vector,
    _P.MATRIX: _coerce_matrix,
}


def infer_parameter_type(value: Any) -> ParameterType:
    """Guess the ParameterType of a Python value."""
    # Order matters: bool before int, subclasses before their bases
    if _is_bool(value):
        return _P.BOOL
    if _is_int(value):
        return _P.INT
    if _is_double(value):
        return _P.DOUBLE
    if isinstance(value, str):
        return _P.STRING
    if isinstance(value, CartesianPose):
        return _P.CARTESIAN_POSE
    if isinstance(value, CartesianState):
        return _P.CARTESIAN_STATE
    if isinstance(value, JointPositions):
        return _P.JOINT_POSITIONS
    if isinstance(value, JointState):
        return _P.JOINT_STATE
    if isinstance(value, np.ndarray):
        if value.ndim == 1:
            return _P.VECTOR
        if value.ndim == 2:
            return _P.MATRIX
    if isinstance(value, (list, tuple)) and len(value) > 0:
        items = list(value)
        if all(_is_bool(v) for v in items):
            return _P.BOOL_ARRAY
        if all(_is_int(v) for v in items):
            return _P.INT_ARRAY
        if all(_is_double(v) for v in items):
            return _P.DOUBLE_ARRAY
        if all(isinstance(v, str) for v in items):
            return _P.STRING_ARRAY
    raise InvalidParameterError(
        f"Cannot infer a parameter type for value of type {type(value).__name__}"
    )


class Parameter(State):
    """Named value tagged with a ParameterType."""

    STATE_TYPE: ClassVar[StateType] = StateType.PARAMETER

    def __init__(
        self,
        name: str,
        value: Any = None,
        parameter_type: ParameterType | None = None,
    ):
        super().__init__(name)
        if parameter_type is None:
            if value is None:
                raise InvalidParameterError(
                    f"Parameter '{name}' needs a value or an explicit parameter type"
                )
            parameter_type = infer_parameter_type(value)
        self._parameter_type: ParameterType = parameter_type
        self._value: Any = None
        if value is not None:
            self.set_value(value)

    def get_parameter_type(self) -> ParameterType:
        return self._parameter_type

    @property
    def parameter_type(self) -> ParameterType:
        return self._parameter_type

    def get_value(self) -> Any:
        self._assert_not_empty()
        return self._value

    @property
    def value(self) -> Any:
        return self.get_value()

    def set_value(self, value: Any) -> None:
        try:
            self._value = _COERCERS[self._parameter_type](value)
        except (TypeError, ValueError):
            raise InvalidParameterError(
                f"Value of type {type(value).__name__} is not valid for parameter "
                f"'{self._name}' of type {self._parameter_type.name}"
            ) from None
        self.set_filled()

    def set_data(self, data: Any) -> None:
        self.set_value(data)

    def __repr__(self) -> str:
        if self._empty:
            return f"Parameter '{self._name}' ({self._parameter_type.name}): empty"
        value = self._value
        if isinstance(value, np.ndarray):
            value = value.tolist()
        elif isinstance(value, State):
            value = f"{type(value).__name__} '{value.get_name()}'"
        return f"Parameter '{self._name}' ({self._parameter_type.name}): {value}"
