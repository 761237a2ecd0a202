"""Vector and 4x4 matrix helpers for a right-handed OpenGL-style pipeline.

Matrices are row-major numpy arrays acting on column vectors (``m @ v``).
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

Vector = NDArray[np.float64]
Matrix = NDArray[np.float64]


def _as(value: ArrayLike, shape: tuple[int, ...]) -> NDArray[np.float64]:
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape != shape:
        raise ValueError(f"expected shape {shape}, got {arr.shape}")
    return arr


def normalize(v: ArrayLike) -> Vector:
    """Return ``v`` scaled to unit length."""
    arr = np.asarray(v, dtype=np.float64)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def cross(a: ArrayLike, b: ArrayLike) -> Vector:
    """Cross product of two 3-vectors."""
    return np.cross(_as(a, (3,)), _as(b, (3,)))


def perspective(fovy: float, aspect: float, near: float, far: float) -> Matrix:
    """Perspective projection; ``fovy`` in radians, depth mapped to [-1, 1]."""
    if aspect == 0 or near == far:
        raise ValueError("aspect must be non-zero and near must differ from far")
    f = 1.0 / math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike) -> Matrix:
    """View matrix looking from ``eye`` towards ``center``."""
    eye_v = _as(eye, (3,))
    f = normalize(_as(center, (3,)) - eye_v)
    s = normalize(cross(f, up))
    u = cross(s, f)
    m = np.identity(4)
    m[:3, :3] = [s, u, -f]
    m[:3, 3] = [-s @ eye_v, -u @ eye_v, f @ eye_v]
    return m


def translate(m: ArrayLike, v: ArrayLike) -> Matrix:
    """Post-multiply ``m`` by a translation by ``v``."""
    t = np.identity(4)
    t[:3, 3] = _as(v, (3,))
    return _as(m, (4, 4)) @ t


def scale(m: ArrayLike, v: ArrayLike) -> Matrix:
    """Post-multiply ``m`` by a scale by ``v``."""
    return _as(m, (4, 4)) @ np.diag([*_as(v, (3,)), 1.0])


def rotate(m: ArrayLike, angle: float, axis: ArrayLike) -> Matrix:
    """Post-multiply ``m`` by a rotation of ``angle`` radians about ``axis``."""
    x, y, z = a = normalize(_as(axis, (3,)))
    c, s = math.cos(angle), math.sin(angle)
    skew = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    r = np.identity(4)
    r[:3, :3] = c * np.identity(3) + (1.0 - c) * np.outer(a, a) + s * skew
    return _as(m, (4, 4)) @ r