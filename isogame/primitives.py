"""Vertex data for the unit cube used by the scene."""

from __future__ import annotations

from collections.abc import Sequence

# Each vertex: position (3), normal (3), texture coordinates (2).
CUBE_NORMALS_TEX: tuple[float, ...] = (
    -0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 0.0,
    0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 0.0,
    0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 1.0,
    0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 1.0,
    -0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 1.0,
    -0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 0.0,

    -0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0,
    0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 0.0,
    0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 1.0,
    0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 1.0,
    -0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 1.0,
    -0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0,

    -0.5, 0.5, 0.5, -1.0, 0.0, 0.0, 1.0, 0.0,
    -0.5, 0.5, -0.5, -1.0, 0.0, 0.0, 1.0, 1.0,
    -0.5, -0.5, -0.5, -1.0, 0.0, 0.0, 0.0, 1.0,
    -0.5, -0.5, -0.5, -1.0, 0.0, 0.0, 0.0, 1.0,
    -0.5, -0.5, 0.5, -1.0, 0.0, 0.0, 0.0, 0.0,
    -0.5, 0.5, 0.5, -1.0, 0.0, 0.0, 1.0, 0.0,

    0.5, 0.5, 0.5, 1.0, 0.0, 0.0, 1.0, 0.0,
    0.5, 0.5, -0.5, 1.0, 0.0, 0.0, 1.0, 1.0,
    0.5, -0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 1.0,
    0.5, -0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 1.0,
    0.5, -0.5, 0.5, 1.0, 0.0, 0.0, 0.0, 0.0,
    0.5, 0.5, 0.5, 1.0, 0.0, 0.0, 1.0, 0.0,

    -0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 0.0, 1.0,
    0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 1.0, 1.0,
    0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 1.0, 0.0,
    0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 1.0, 0.0,
    -0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 0.0, 0.0,
    -0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 0.0, 1.0,

    -0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 0.0, 1.0,
    0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 1.0, 1.0,
    0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 1.0, 0.0,
    0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 1.0, 0.0,
    -0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 0.0, 0.0,
    -0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 0.0, 1.0,
)

_FULL_STRIDE = 8


def vertices(data: Sequence[float], stride: int) -> list[tuple[float, ...]]:
    """Split flat vertex data into tuples of ``stride`` components."""
    if stride <= 0:
        raise ValueError(f"stride must be positive, got {stride}")
    if len(data) % stride:
        raise ValueError(
            f"data length {len(data)} is not a multiple of stride {stride}"
        )
    it = iter(data)
    return [tuple(chunk) for chunk in zip(*[it] * stride)]


def _leading(data: Sequence[float], stride: int, keep: int) -> tuple[float, ...]:
    return tuple(value for vertex in vertices(data, stride) for value in vertex[:keep])


# Positions only.
CUBE: tuple[float, ...] = _leading(CUBE_NORMALS_TEX, _FULL_STRIDE, 3)

# Positions followed by normals.
CUBE_WITH_NORMALS: tuple[float, ...] = _leading(CUBE_NORMALS_TEX, _FULL_STRIDE, 6)