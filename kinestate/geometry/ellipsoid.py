"""
Planar ellipse obstacle with a center pose, two axis lengths and a rotation
about the z axis of the center frame.

Ellipses can be built from their algebraic equation
``a x^2 + b xy + c y^2 + d x + e y + f = 0`` or fitted on a set of points
with the direct least-squares method of Fitzgibbon et al. (1999).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import ClassVar

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike

from kinestate import config
from kinestate.cartesian import CartesianPose
from kinestate.geometry.shape import Shape
from kinestate.types import StateType
from kinestate.utils import quaternion as quat
from kinestate.utils.errors import IncompatibleSizeError, InvalidParameterError

logger = logging.getLogger(__name__)

_Z_AXIS = np.array([0.0, 0.0, 1.0])

# Fitzgibbon constraint 4ac - b^2 = 1 written as a^T C a
_FIT_CONSTRAINT = np.zeros((6, 6))
_FIT_CONSTRAINT[0, 2] = _FIT_CONSTRAINT[2, 0] = 2.0
_FIT_CONSTRAINT[1, 1] = -1.0


class Ellipsoid(Shape):
    STATE_TYPE: ClassVar[StateType] = StateType.ELLIPSOID

    def __init__(self, name: str = "", reference_frame: str | None = None):
        super().__init__(name, reference_frame)
        self._axis_lengths: list[float] = [1.0, 1.0]
        self._rotation_angle: float = 0.0

    @classmethod
    def Unit(cls, name: str, reference_frame: str | None = None) -> Ellipsoid:
        """Identity center, unit axis lengths and zero rotation."""
        ellipsoid = cls(name, reference_frame)
        ellipsoid.set_filled()
        return ellipsoid

    # ----- accessors -----

    def get_axis_lengths(self) -> list[float]:
        return list(self._axis_lengths)

    def get_axis_length(self, index: int) -> float:
        return self._axis_lengths[index]

    def set_axis_lengths(self, axis_lengths: Sequence[float]) -> None:
        if len(axis_lengths) != 2:
            raise IncompatibleSizeError(
                f"Expected 2 axis lengths, given {len(axis_lengths)}"
            )
        self._axis_lengths = [float(a) for a in axis_lengths]
        self.set_filled()

    def set_axis_length(self, index: int, axis_length: float) -> None:
        self._axis_lengths[index] = float(axis_length)
        self.set_filled()

    def get_rotation_angle(self) -> float:
        return self._rotation_angle

    def set_rotation_angle(self, rotation_angle: float) -> None:
        self._rotation_angle = float(rotation_angle)
        self.set_filled()

    def get_rotation(self) -> CartesianPose:
        """Rotation about z as a pose expressed in the center frame."""
        self._assert_not_empty()
        center_name = self._center_state.get_name()
        return CartesianPose(
            f"{center_name}_rotated",
            center_name,
            position=np.zeros(3),
            orientation=quat.from_axis_angle(_Z_AXIS, self._rotation_angle),
        )

    # ----- sampling -----

    def sample_from_parameterization(self, nb_samples: int) -> list[CartesianPose]:
        """Evenly spaced points of the contour, expressed in the shape's reference frame."""
        self._assert_not_empty()
        rotation = self.get_rotation()
        # Chain center -> rotation once, then append each contour point
        frame = self._center_state * rotation
        a, b = self._axis_lengths
        points = []
        for i in range(nb_samples):
            alpha = 2.0 * math.pi * i / nb_samples
            point = CartesianPose(
                f"{self._name}_point{i}",
                rotation.get_name(),
                position=[a * math.cos(alpha), b * math.sin(alpha), 0.0],
                orientation=quat.IDENTITY,
            )
            points.append(frame * point)
        return points

    # ----- construction from data -----

    @classmethod
    def from_algebraic_equation(
        cls,
        name: str,
        coefficients: Sequence[float],
        reference_frame: str | None = None,
    ) -> Ellipsoid:
        """
        Geometric form of ``a x^2 + b xy + c y^2 + d x + e y + f = 0``.

        Coefficients are normalized so that ``a > 0``. Raises
        InvalidParameterError when they do not describe a real ellipse.
        """
        if len(coefficients) != 6:
            raise IncompatibleSizeError(
                f"Expected 6 coefficients, given {len(coefficients)}"
            )
        A, B, C, D, E, F = (float(c) for c in coefficients)
        if A < 0.0:
            A, B, C, D, E, F = -A, -B, -C, -D, -E, -F

        discriminant = B * B - 4.0 * A * C
        if discriminant >= 0.0:
            raise InvalidParameterError(
                f"Coefficients do not describe an ellipse (b^2 - 4ac = {discriminant})"
            )
        x0 = (2.0 * C * D - B * E) / discriminant
        y0 = (2.0 * A * E - B * D) / discriminant

        numerator = 2.0 * (A * E * E + C * D * D - B * D * E + discriminant * F)
        root = math.hypot(A - C, B)
        major_sq = numerator * (A + C + root)
        minor_sq = numerator * (A + C - root)
        if major_sq < 0.0 or minor_sq < 0.0:
            raise InvalidParameterError("Coefficients describe an imaginary ellipse")
        major = -math.sqrt(major_sq) / discriminant
        minor = -math.sqrt(minor_sq) / discriminant

        if B != 0.0:
            angle = math.atan((C - A - root) / B)
        else:
            angle = 0.0 if A < C else math.pi / 2.0

        ellipsoid = cls(name, reference_frame)
        ellipsoid.set_center_position([x0, y0, 0.0])
        ellipsoid.set_axis_lengths([major, minor])
        ellipsoid.set_rotation_angle(angle)
        return ellipsoid

    @classmethod
    def fit(
        cls,
        name: str,
        points: Sequence[CartesianPose],
        reference_frame: str | None = None,
        noise_level: float = config.ELLIPSOID_FIT_NOISE,
        rng: np.random.Generator | None = None,
    ) -> Ellipsoid:
        """
        Fit an ellipse on the x/y positions of ``points``.

        Gaussian noise of standard deviation ``noise_level`` is added to the
        points so that the scatter matrix stays invertible on exact data.
        """
        if len(points) < 5:
            raise InvalidParameterError(
                f"At least 5 points are needed to fit an ellipse, given {len(points)}"
            )
        rng = rng if rng is not None else np.random.default_rng()
        xy = np.array([p.get_position()[:2] for p in points])
        if noise_level > 0.0:
            xy = xy + rng.normal(0.0, noise_level, xy.shape)
        x, y = xy[:, 0], xy[:, 1]

        design = np.column_stack([x * x, x * y, y * y, x, y, np.ones_like(x)])
        scatter = design.T @ design
        eigenvalues, eigenvectors = scipy.linalg.eig(
            scipy.linalg.solve(scatter, _FIT_CONSTRAINT)
        )
        # The ellipse solution is the single positive finite eigenvalue
        real = np.real(eigenvalues)
        candidates = np.flatnonzero(np.isfinite(real) & (real > 0.0))
        if candidates.size == 0:
            raise InvalidParameterError("No ellipse solution found for the given points")
        index = candidates[np.argmax(real[candidates])]
        coefficients = np.real(eigenvectors[:, index])
        logger.debug("Ellipse fit on %d points, coefficients %s", len(points), coefficients)
        return cls.from_algebraic_equation(name, coefficients.tolist(), reference_frame)

    # ----- vector form -----

    def to_list(self) -> list[float]:
        """``[cx, cy, cz, rotation_angle, axis_x, axis_y]``."""
        self._assert_not_empty()
        return [
            *self.get_center_position().tolist(),
            self._rotation_angle,
            *self._axis_lengths,
        ]

    def set_data(self, data: ArrayLike) -> None:
        values = np.asarray(data, dtype=np.float64).reshape(-1)
        if values.size != 6:
            raise IncompatibleSizeError(
                f"Input is of incorrect size: expected 6, given {values.size}"
            )
        self.set_center_position(values[:3])
        self.set_rotation_angle(values[3])
        self.set_axis_lengths(values[4:].tolist())

    def __repr__(self) -> str:
        if self._empty:
            return "Empty Ellipsoid"
        return (
            f"Ellipsoid {self._name} of axis lengths {self._axis_lengths} "
            f"and rotation angle {self._rotation_angle} around {self._center_state.get_name()}"
        )
