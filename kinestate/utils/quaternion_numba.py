"""Numba-compatible quaternion kernels.

Quaternions are 4-element float64 arrays in [w, x, y, z] order and
vectors are 3-element float64 arrays. Results are written into a
preallocated ``out`` array, as the callers reuse buffers.
"""

import numpy as np
from numba import njit  # type: ignore[import-untyped]


@njit(cache=True)
def quat_mul(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    """Hamilton product: out = a * b."""
    aw = a[0]
    ax = a[1]
    ay = a[2]
    az = a[3]
    bw = b[0]
    bx = b[1]
    by = b[2]
    bz = b[3]
    out[0] = aw * bw - ax * bx - ay * by - az * bz
    out[1] = aw * bx + ax * bw + ay * bz - az * by
    out[2] = aw * by - ax * bz + ay * bw + az * bx
    out[3] = aw * bz + ax * by - ay * bx + az * bw


@njit(cache=True)
def quat_rotate(q: np.ndarray, v: np.ndarray, out: np.ndarray) -> None:
    """Rotate vector v by unit quaternion q: out = q * v * conj(q)."""
    w = q[0]
    ux = q[1]
    uy = q[2]
    uz = q[3]
    # t = 2 * (u x v)
    tx = 2.0 * (uy * v[2] - uz * v[1])
    ty = 2.0 * (uz * v[0] - ux * v[2])
    tz = 2.0 * (ux * v[1] - uy * v[0])
    # out = v + w * t + u x t
    out[0] = v[0] + w * tx + (uy * tz - uz * ty)
    out[1] = v[1] + w * ty + (uz * tx - ux * tz)
    out[2] = v[2] + w * tz + (ux * ty - uy * tx)


@njit(cache=True)
def quat_conj(q: np.ndarray, out: np.ndarray) -> None:
    """Quaternion conjugate."""
    out[0] = q[0]
    out[1] = -q[1]
    out[2] = -q[2]
    out[3] = -q[3]
