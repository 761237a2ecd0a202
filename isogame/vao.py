"""Vertex array objects built from flat float data and a layout string."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import accumulate
from typing import Any

FLOAT_SIZE = 4


class _PygletVertexGL:
    """Vertex array and buffer calls on the current OpenGL context."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl: Any = gl

    def gen_vertex_array(self) -> int:
        vao_id = self._gl.GLuint()
        self._gl.glGenVertexArrays(1, vao_id)
        return vao_id.value

    def bind_vertex_array(self, vao_id: int) -> None:
        self._gl.glBindVertexArray(vao_id)

    def _upload(self, target: int, ctype: Any, values: list) -> int:
        gl = self._gl
        buffer_id = gl.GLuint()
        gl.glGenBuffers(1, buffer_id)
        gl.glBindBuffer(target, buffer_id.value)
        gl.glBufferData(target, 4 * len(values), (ctype * len(values))(*values),
                        gl.GL_STATIC_DRAW)
        return buffer_id.value

    def upload_vertices(self, values: list[float]) -> int:
        return self._upload(self._gl.GL_ARRAY_BUFFER, self._gl.GLfloat, values)

    def upload_indices(self, values: list[int]) -> int:
        return self._upload(self._gl.GL_ELEMENT_ARRAY_BUFFER, self._gl.GLuint, values)

    def vertex_attrib_pointer(self, index: int, size: int, stride: int, offset: int) -> None:
        gl = self._gl
        gl.glVertexAttribPointer(index, size, gl.GL_FLOAT, gl.GL_FALSE, stride, offset)

    def enable_vertex_attrib_array(self, index: int) -> None:
        self._gl.glEnableVertexAttribArray(index)


@dataclass(frozen=True)
class AttributeLayout:
    """Component counts of the interleaved vertex attributes, in order."""

    sizes: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.sizes:
            raise ValueError("a layout needs at least one attribute")
        if any(not 1 <= size <= 4 for size in self.sizes):
            raise ValueError(f"attribute sizes must be between 1 and 4: {self.sizes}")

    @property
    def stride(self) -> int:
        """Number of floats in one vertex."""
        return sum(self.sizes)

    @property
    def offsets(self) -> tuple[int, ...]:
        """Offset, in floats, of each attribute within a vertex."""
        return tuple(accumulate(self.sizes[:-1], initial=0))

    def __iter__(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(index, size, offset)`` for each attribute."""
        for index, (size, offset) in enumerate(zip(self.sizes, self.offsets)):
            yield index, size, offset


def parse_layout(config: str) -> AttributeLayout:
    """Parse a layout such as ``"332"``: one digit per attribute's component count."""
    bad = [char for char in config if char not in "0123456789"]
    if bad:
        raise ValueError(f"invalid character {bad[0]!r} in layout {config!r}")
    return AttributeLayout(tuple(int(char) for char in config))


class VertexArray:
    """A vertex array object with its vertex buffer and attribute pointers."""

    def __init__(self, config: str | AttributeLayout, data: Iterable[float],
                 gl: Any = None) -> None:
        self._gl = gl if gl is not None else _PygletVertexGL()
        self.layout = config if isinstance(config, AttributeLayout) else parse_layout(config)
        values = [float(value) for value in data]
        stride = self.layout.stride
        if len(values) % stride:
            raise ValueError(f"data length {len(values)} is not a multiple of {stride}")
        self.vertex_count = len(values) // stride
        self.element_buffer: int | None = None

        self.id = self._gl.gen_vertex_array()
        self._gl.bind_vertex_array(self.id)
        self.vertex_buffer = self._gl.upload_vertices(values)
        for index, size, offset in self.layout:
            self._gl.vertex_attrib_pointer(index, size, stride * FLOAT_SIZE,
                                           offset * FLOAT_SIZE)
            self._gl.enable_vertex_attrib_array(index)

    def ebo(self, data: Iterable[int]) -> int:
        """Upload an element (index) buffer and return its id."""
        indices = [int(value) for value in data]
        if any(index < 0 for index in indices):
            raise ValueError("element indices must be non-negative")
        self.element_buffer = self._gl.upload_indices(indices)
        return self.element_buffer

    def bind(self) -> None:
        """Make this vertex array current."""
        self._gl.bind_vertex_array(self.id)