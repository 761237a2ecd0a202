# isogame

A small 3D scene drawn with OpenGL through pyglet. Ten textured cubes are lit
by a directional light and by a spotlight that follows the camera. A small cube
marks the position of a light source. You look around with a first-person fly
camera.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install .[test]
pytest
```

## Running

```
isogame
```

Options:

- `--shaders DIR` – directory holding the shader sources
  (default: `isogame/shaders` inside the installed package)
- `--textures DIR` – directory holding the texture images
  (default: `isogame/textures` inside the installed package)
- `--light-pos X Y Z` – position of the light marker (default `5 0 -5`)
- `--light-color R G B` – colour passed to the light shader (default `1 1 1`)

The shader directory must hold `light.vert`, `light.frag`, `object.vert` and
`object.frag`. The texture directory must hold `container_diff.png` and
`container_spec.png`. The object shader is given the uniforms `projection`,
`view`, `model`, `view_pos`, `mat.diffuse`, `mat.specular`, `mat.shininess`,
`directional_light.*` and `spot_light.*`; the light shader is given
`projection`, `view`, `model` and `light_color`.

Controls:

- `W` / `S` move forward and back, `A` / `D` move sideways
- `Space` moves up, `Left Ctrl` moves down
- moving the mouse turns the camera; pitch is held between -89 and 89 degrees
- `G` releases the mouse, so it no longer turns the camera; `I` captures it
  again

Errors:

- a missing shader source or texture file raises `FileNotFoundError`
- a shader that fails to compile or a program that fails to link raises
  `isogame.shader.ShaderError`
- a texture image that cannot be read raises `RuntimeError`

## What the package does not do

- It does not ship any shader sources or texture images; supply them with
  `--shaders` and `--textures` or place them in the default directories.
- It has no on-screen settings panel. The light's position and colour are set
  once from the command line; `G` and `I` only switch mouse capture.

## Library use

The camera and the matrix helpers need no window:

```python
from isogame.camera import Camera, Movement
from isogame.transforms import perspective, translate

cam = Camera()
cam.reset_last_xy(0.0, 0.0)
cam.process_mouse(10.0, -5.0)
cam.process_keyboard({Movement.FORWARD}, 0.016)
view = cam.view()
```

- `isogame.transforms` has `normalize`, `cross`, `perspective`, `look_at`,
  `translate`, `scale` and `rotate`, working on row-major 4x4 numpy arrays
  that act on column vectors.
- `isogame.primitives` holds the cube vertex data (`CUBE`,
  `CUBE_WITH_NORMALS`, `CUBE_NORMALS_TEX`); `vertices(data, stride)` splits
  flat data into tuples of `stride` values.
- `isogame.vao.parse_layout` turns a layout string such as `"332"` into an
  `AttributeLayout` with attribute sizes, offsets and stride.
  `VertexArray`, `TextureSet` and `Shader` accept a `gl` object, so they can
  be driven without a live OpenGL context.
- `isogame.app` has `SceneState`, `light_model_matrix` and
  `cube_model_matrices`, and `main`, which the `isogame` command runs.