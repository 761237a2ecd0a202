"""OpenGL scene of lit, textured cubes with a first-person camera and matrix helpers."""

__version__ = "0.1.0"