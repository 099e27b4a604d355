"""Quaternion helpers for the Cartesian state algebra.

Quaternions are stored as ``[w, x, y, z]`` float64 arrays. The logarithm
and exponential maps follow the half-angle convention: ``log(q)`` is the
pure quaternion ``(0, u * theta / 2)`` for a rotation of ``theta`` about
unit axis ``u``.

scipy's ``Rotation`` uses scalar-last quaternions, so conversions go
through ``to_xyzw`` / ``from_xyzw``.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation

from kinestate import config
from kinestate.utils import quaternion_numba as qn

__all__ = [
    "IDENTITY",
    "normalize",
    "multiply",
    "conjugate",
    "rotate",
    "dot",
    "align",
    "log",
    "exp",
    "power",
    "random",
    "to_xyzw",
    "from_xyzw",
    "to_rotation_matrix",
    "from_rotation_matrix",
    "from_axis_angle",
]

IDENTITY: NDArray[np.float64] = np.array([1.0, 0.0, 0.0, 0.0])


def _as_quat(q: ArrayLike) -> NDArray[np.float64]:
    return np.ascontiguousarray(q, dtype=np.float64).reshape(4)


def normalize(q: ArrayLike) -> NDArray[np.float64]:
    """Return q scaled to unit norm.

    Raises:
        ValueError: If q has (numerically) zero norm
    """
    arr = _as_quat(q)
    n = float(np.linalg.norm(arr))
    if n < config.QUATERNION_MIN_NORM:
        raise ValueError("Cannot normalize a zero-norm quaternion")
    return arr / n


def multiply(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Hamilton product a * b."""
    qa = _as_quat(a)
    qb = _as_quat(b)
    out = np.empty(4, dtype=np.float64)
    if config.USE_NUMBA:
        qn.quat_mul(qa, qb, out)
    else:
        out[0] = qa[0] * qb[0] - np.dot(qa[1:], qb[1:])
        out[1:] = qa[0] * qb[1:] + qb[0] * qa[1:] + np.cross(qa[1:], qb[1:])
    return out


def conjugate(q: ArrayLike) -> NDArray[np.float64]:
    arr = _as_quat(q)
    out = np.empty(4, dtype=np.float64)
    if config.USE_NUMBA:
        qn.quat_conj(arr, out)
    else:
        out[0] = arr[0]
        out[1:] = -arr[1:]
    return out


def rotate(q: ArrayLike, v: ArrayLike) -> NDArray[np.float64]:
    """Rotate a 3-vector by a unit quaternion."""
    qa = _as_quat(q)
    va = np.ascontiguousarray(v, dtype=np.float64).reshape(3)
    out = np.empty(3, dtype=np.float64)
    if config.USE_NUMBA:
        qn.quat_rotate(qa, va, out)
    else:
        t = 2.0 * np.cross(qa[1:], va)
        out[:] = va + qa[0] * t + np.cross(qa[1:], t)
    return out


def dot(a: ArrayLike, b: ArrayLike) -> float:
    """Four-dimensional inner product of two quaternions."""
    return float(np.dot(_as_quat(a), _as_quat(b)))


def align(reference: ArrayLike, q: ArrayLike) -> NDArray[np.float64]:
    """Return q or -q, whichever lies in the same hemisphere as reference."""
    arr = _as_quat(q)
    return arr if dot(reference, arr) > 0 else -arr


def log(q: ArrayLike) -> NDArray[np.float64]:
    """Quaternion logarithm of a unit quaternion, as a pure quaternion."""
    arr = _as_quat(q)
    out = np.zeros(4, dtype=np.float64)
    vec_norm = float(np.linalg.norm(arr[1:]))
    if vec_norm > config.QUATERNION_EPS:
        out[1:] = arr[1:] / vec_norm * np.arccos(np.clip(arr[0], -1.0, 1.0))
    return out


def exp(v: ArrayLike, scale: float = 1.0) -> NDArray[np.float64]:
    """Unit quaternion ``exp(scale * v)`` for a pure quaternion or 3-vector v."""
    arr = np.asarray(v, dtype=np.float64).reshape(-1)
    vec = arr[1:] if arr.size == 4 else arr.reshape(3)
    out = IDENTITY.copy()
    vec_norm = float(np.linalg.norm(vec))
    if vec_norm > config.QUATERNION_EPS:
        out[0] = np.cos(vec_norm * scale)
        out[1:] = vec / vec_norm * np.sin(vec_norm * scale)
    return out


def power(q: ArrayLike, k: float) -> NDArray[np.float64]:
    """Scale a rotation on the group: ``exp(k * log(q))``."""
    return exp(log(q), k)


def random(rng: np.random.Generator | None = None) -> NDArray[np.float64]:
    """Uniformly distributed unit quaternion."""
    if rng is None:
        return from_xyzw(Rotation.random().as_quat())
    # a normalized 4D gaussian sample is uniform on the unit sphere
    return normalize(rng.standard_normal(4))


def to_xyzw(q: ArrayLike) -> NDArray[np.float64]:
    arr = _as_quat(q)
    return np.array([arr[1], arr[2], arr[3], arr[0]])


def from_xyzw(q: ArrayLike) -> NDArray[np.float64]:
    arr = _as_quat(q)
    return np.array([arr[3], arr[0], arr[1], arr[2]])


def to_rotation_matrix(q: ArrayLike) -> NDArray[np.float64]:
    return Rotation.from_quat(to_xyzw(q)).as_matrix()


def from_rotation_matrix(matrix: ArrayLike) -> NDArray[np.float64]:
    return from_xyzw(Rotation.from_matrix(np.asarray(matrix, dtype=np.float64)).as_quat())


def from_axis_angle(axis: ArrayLike, angle: float) -> NDArray[np.float64]:
    """Quaternion for a rotation of ``angle`` radians about ``axis``."""
    axis_arr = np.asarray(axis, dtype=np.float64).reshape(3)
    axis_arr = axis_arr / np.linalg.norm(axis_arr)
    return from_xyzw(Rotation.from_rotvec(axis_arr * angle).as_quat())
