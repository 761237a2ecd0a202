"""A set of 2D textures, each bound to its own texture unit."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

RGB = 0x1907
RGBA = 0x1908

DEFAULT_TEXTURES_ROOT = Path(__file__).resolve().parent / "textures"

ImageLoader = Callable[[Path, int], "tuple[int, int, bytes]"]


class _PygletTextureGL:
    """Texture calls on the current OpenGL context."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl: Any = gl

    def active_texture(self, unit: int) -> None:
        self._gl.glActiveTexture(self._gl.GL_TEXTURE0 + unit)

    def gen_texture(self) -> int:
        texture_id = self._gl.GLuint()
        self._gl.glGenTextures(1, texture_id)
        return texture_id.value

    def bind_texture(self, texture_id: int) -> None:
        self._gl.glBindTexture(self._gl.GL_TEXTURE_2D, texture_id)

    def set_default_parameters(self) -> None:
        gl = self._gl
        for name, value in ((gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT),
                            (gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT),
                            (gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR),
                            (gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)):
            gl.glTexParameteri(gl.GL_TEXTURE_2D, name, value)

    def tex_image_2d(self, fmt: int, width: int, height: int, pixels: bytes) -> None:
        gl = self._gl
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, fmt, width, height, 0, fmt,
                        gl.GL_UNSIGNED_BYTE, pixels)

    def generate_mipmap(self) -> None:
        self._gl.glGenerateMipmap(self._gl.GL_TEXTURE_2D)


def _load_image(path: Path, fmt: int) -> tuple[int, int, bytes]:
    """Decode an image with its bottom row first, as OpenGL expects."""
    import pyglet

    channels = "RGBA" if fmt == RGBA else "RGB"
    try:
        image = pyglet.image.load(str(path)).get_image_data()
    except Exception as exc:
        raise ValueError(f"cannot decode image {path}: {exc}") from exc
    pixels = image.get_data(channels, image.width * len(channels))
    return image.width, image.height, bytes(pixels)


class TextureSet:
    """Textures loaded from ``root``; the n-th texture added uses unit n."""

    def __init__(self, root: str | Path = DEFAULT_TEXTURES_ROOT, gl: Any = None,
                 loader: ImageLoader | None = None) -> None:
        self.root = Path(root)
        self._gl = gl
        self._loader = loader if loader is not None else _load_image
        self._textures: list[tuple[str, int]] = []

    @property
    def _backend(self) -> Any:
        if self._gl is None:
            self._gl = _PygletTextureGL()
        return self._gl

    @property
    def names(self) -> list[str]:
        """Names of the loaded textures, in unit order."""
        return [name for name, _ in self._textures]

    def __len__(self) -> int:
        return len(self._textures)

    def add(self, name: str, fmt: int = RGB) -> TextureSet:
        """Load ``name`` from the root directory into the next free texture unit."""
        path = self.root / name
        if not path.exists():
            raise FileNotFoundError(f"cannot find texture {path}")

        gl = self._backend
        gl.active_texture(len(self._textures))
        texture_id = gl.gen_texture()
        self._textures.append((name, texture_id))
        gl.bind_texture(texture_id)
        gl.set_default_parameters()

        try:
            width, height, pixels = self._loader(path, fmt)
        except (OSError, ValueError) as exc:
            raise RuntimeError(f"failed to load texture {path}") from exc

        gl.tex_image_2d(fmt, width, height, pixels)
        gl.generate_mipmap()
        return self

    def bind(self) -> None:
        """Bind every texture to its unit."""
        for unit, (_, texture_id) in enumerate(self._textures):
            self._backend.active_texture(unit)
            self._backend.bind_texture(texture_id)

    def texture_unit(self, name: str) -> int:
        """Texture unit of the first texture called ``name``."""
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(name) from None