[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isogame"
version = "0.1.0"
description = "A small OpenGL scene: textured, lit cubes, a light source marker and a first-person fly camera"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pyglet",
]
keywords = ["opengl", "3d", "camera", "rendering", "shaders", "pyglet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
isogame = "isogame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["isogame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
