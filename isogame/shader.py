"""Shader programs compiled from vertex and fragment source files."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import count
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from .texture import RGB, TextureSet

DEFAULT_SHADERS_ROOT = Path(__file__).resolve().parent / "shaders"


class ShaderError(RuntimeError):
    """A shader failed to compile or a program failed to link."""


class _PygletShaderGL:
    """Shader and uniform calls on the current OpenGL context, via pyglet's shader objects."""

    def __init__(self) -> None:
        from pyglet import gl
        from pyglet.graphics import shader as pyglet_shader

        self._gl: Any = gl
        self._ps: Any = pyglet_shader
        self._handles = count(1)
        self._stages: dict[int, str] = {}
        self._shaders: dict[int, Any] = {}
        self._attached: dict[int, list[int]] = {}
        self._programs: dict[int, Any] = {}

    def create_shader(self, stage: str) -> int:
        handle = next(self._handles)
        self._stages[handle] = stage
        return handle

    def compile_shader(self, shader_id: int, source: str) -> tuple[bool, str]:
        try:
            self._shaders[shader_id] = self._ps.Shader(source, self._stages[shader_id])
        except self._ps.ShaderException as exc:
            return False, str(exc)
        return True, ""

    def create_program(self) -> int:
        handle = next(self._handles)
        self._attached[handle] = []
        return handle

    def attach_shader(self, program_id: int, shader_id: int) -> None:
        self._attached[program_id].append(shader_id)

    def link_program(self, program_id: int) -> tuple[bool, str]:
        shaders = [self._shaders[sid] for sid in self._attached[program_id]]
        try:
            self._programs[program_id] = self._ps.ShaderProgram(*shaders)
        except self._ps.ShaderException as exc:
            return False, str(exc)
        return True, ""

    def use_program(self, program_id: int) -> None:
        self._gl.glUseProgram(self._programs[program_id].id)

    def uniform_location(self, program_id: int, name: str) -> int:
        return self._gl.glGetUniformLocation(self._programs[program_id].id,
                                             name.encode("utf-8"))

    def uniform1f(self, location: int, value: float) -> None:
        self._gl.glUniform1f(location, value)

    def uniform1i(self, location: int, value: int) -> None:
        self._gl.glUniform1i(location, value)

    def uniform3f(self, location: int, x: float, y: float, z: float) -> None:
        self._gl.glUniform3f(location, x, y, z)

    def uniform_matrix4fv(self, location: int, values: Sequence[float]) -> None:
        gl = self._gl
        gl.glUniformMatrix4fv(location, 1, gl.GL_FALSE, (gl.GLfloat * 16)(*values))


class Shader:
    """A linked vertex + fragment program together with the textures it samples."""

    def __init__(self, vertex: str, fragment: str, *,
                 root: str | Path = DEFAULT_SHADERS_ROOT,
                 textures: TextureSet | None = None, gl: Any = None) -> None:
        self._gl = gl if gl is not None else _PygletShaderGL()
        self.textures = textures if textures is not None else TextureSet()

        paths = (Path(root) / vertex, Path(root) / fragment)
        missing = [str(p) for p in paths if not p.exists()]
        if missing:
            raise FileNotFoundError(f"shader source not found: {', '.join(missing)}")

        shader_ids = [self._compile(stage, path.read_text(encoding="utf-8"))
                      for stage, path in zip(("vertex", "fragment"), paths)]

        self.id = self._gl.create_program()
        for shader_id in shader_ids:
            self._gl.attach_shader(self.id, shader_id)
        linked, log = self._gl.link_program(self.id)
        if not linked:
            raise ShaderError(f"shader program linking failed:\n{log}")
        self._gl.use_program(self.id)

    def _compile(self, stage: str, source: str) -> int:
        shader_id = self._gl.create_shader(stage)
        compiled, log = self._gl.compile_shader(shader_id, source)
        if not compiled:
            raise ShaderError(f"{stage} shader compilation failed:\n{log}")
        return shader_id

    def _location(self, name: str) -> int:
        return self._gl.uniform_location(self.id, name)

    def bind(self) -> None:
        """Bind the program's textures and make the program current."""
        self.textures.bind()
        self._gl.use_program(self.id)

    def sampler_to_texture(self, sampler_name: str, texture_name: str,
                           fmt: int = RGB) -> None:
        """Load a texture and point the sampler uniform at its unit."""
        self.textures.add(texture_name, fmt)
        self.set_int(sampler_name, self.textures.texture_unit(texture_name))

    def set_float(self, name: str, value: float) -> None:
        self._gl.uniform1f(self._location(name), float(value))

    def set_int(self, name: str, value: int) -> None:
        self._gl.uniform1i(self._location(name), int(value))

    def set_mat(self, name: str, value: ArrayLike) -> None:
        """Set a 4x4 matrix uniform; ``value`` is row-major, sent column-major."""
        matrix = np.asarray(value, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        self._gl.uniform_matrix4fv(self._location(name),
                                   tuple(float(x) for x in matrix.T.ravel()))

    def set_vec3(self, name: str, *args: Any) -> None:
        """Set a vec3 uniform from one 3-vector, one scalar or three numbers."""
        if len(args) == 1:
            vector = np.asarray(args[0], dtype=np.float64)
            if vector.shape == ():
                vector = np.full(3, float(vector))
        elif len(args) == 3:
            vector = np.asarray(args, dtype=np.float64)
        else:
            raise TypeError(f"set_vec3 takes a vector or three components, got {len(args)}")
        if vector.shape != (3,):
            raise ValueError(f"expected a 3-component vector, got shape {vector.shape}")
        x, y, z = (float(c) for c in vector)
        self._gl.uniform3f(self._location(name), x, y, z)