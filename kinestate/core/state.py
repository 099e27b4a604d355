"""
Base state abstraction shared by every kinematic quantity.

A State carries identity (name and type tag), a flag telling whether any
numeric content was written yet, and a monotonic timestamp used to score
staleness. It holds no numeric content itself.
"""

from __future__ import annotations

import copy as _copy
import logging
import time
from datetime import timedelta
from typing import Any, ClassVar, TypeVar

from kinestate.types import StateType
from kinestate.utils.errors import EmptyStateError, NotImplementedStateError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="State")


class State:
    """
    Named, typed and timestamped value with an empty/filled flag.

    States are values: arithmetic returns new objects and ``copy()``
    produces an independent instance.
    """

    STATE_TYPE: ClassVar[StateType] = StateType.STATE

    # Make numpy defer to our reflected operators (ndarray * state)
    __array_ufunc__ = None

    def __init__(self, name: str = ""):
        self._type: StateType = self.STATE_TYPE
        self._name: str = name
        self._empty: bool = True
        self._timestamp: float = time.monotonic()

    # ----- identity -----

    def get_type(self) -> StateType:
        return self._type

    @property
    def type(self) -> StateType:
        return self._type

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self.set_name(name)

    # ----- empty flag -----

    def is_empty(self) -> bool:
        return self._empty

    def set_empty(self, empty: bool = True) -> None:
        self._empty = empty

    def set_filled(self) -> None:
        self._empty = False

    def initialize(self) -> None:
        """Mark the state as holding no meaningful data."""
        self._empty = True

    def _assert_not_empty(self) -> None:
        if self._empty:
            raise EmptyStateError(f"{self._name} state is empty")

    def __bool__(self) -> bool:
        return not self._empty

    # ----- timestamp -----

    def get_timestamp(self) -> float:
        return self._timestamp

    def reset_timestamp(self) -> None:
        self._timestamp = time.monotonic()

    def get_age(self) -> float:
        """Seconds elapsed since the timestamp was set."""
        return time.monotonic() - self._timestamp

    def is_deprecated(self, threshold: float | timedelta) -> bool:
        """True if the state is at least ``threshold`` old (seconds or timedelta)."""
        if isinstance(threshold, timedelta):
            threshold = threshold.total_seconds()
        return self.get_age() >= threshold

    # ----- compatibility -----

    def _is_type_compatible(self, other: State) -> bool:
        return self._type == other.get_type()

    def is_compatible(self, other: State) -> bool:
        """True if a binary operation between self and other is legal."""
        return self._is_type_compatible(other)

    def is_incompatible(self, other: State) -> bool:
        return not self.is_compatible(other)

    # ----- data -----

    def set_data(self, data: Any) -> None:
        raise NotImplementedStateError(
            f"set_data() is not implemented for {type(self).__name__}"
        )

    # ----- copies -----

    def copy(self: S, keep_timestamp: bool = False) -> S:
        """
        Return an independent copy.

        The copy gets a fresh timestamp unless ``keep_timestamp`` is set.
        """
        result = self.__class__.__new__(self.__class__)
        for key, value in self.__dict__.items():
            result.__dict__[key] = _copy.deepcopy(value)
        if not keep_timestamp:
            result.reset_timestamp()
        return result

    def __copy__(self: S) -> S:
        return self.copy()

    def __deepcopy__(self: S, memo: dict) -> S:
        return self.copy()

    def __repr__(self) -> str:
        prefix = "Empty " if self._empty else ""
        return f"{prefix}{type(self).__name__}: {self._name}"
