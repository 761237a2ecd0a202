"""The demo scene: textured cubes lit by a movable light, seen through a fly camera."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from .camera import Camera, Movement
from .primitives import CUBE, CUBE_NORMALS_TEX
from .shader import DEFAULT_SHADERS_ROOT, Shader
from .texture import DEFAULT_TEXTURES_ROOT, RGBA, TextureSet
from .transforms import Matrix, Vector, perspective, rotate, scale, translate
from .vao import VertexArray

SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
VERTICES_PER_CUBE = 36
LIGHT_SCALE = 0.2
CUBE_ROTATION_STEP = 20.0
CUBE_ROTATION_AXIS = (1.0, 0.3, 0.5)

PROJECTION: Matrix = perspective(
    math.radians(45.0), SCREEN_WIDTH / SCREEN_HEIGHT, 0.1, 1000.0
)

CUBE_POSITIONS: tuple[tuple[float, float, float], ...] = (
    (0.0, 0.0, 0.0),
    (2.0, 5.0, -15.0),
    (-1.5, -2.2, -2.5),
    (-3.8, -2.0, -12.3),
    (2.4, -0.4, -3.5),
    (-1.7, 3.0, -7.5),
    (1.3, -2.0, -2.5),
    (1.5, 2.0, -2.5),
    (1.5, 0.2, -1.5),
    (-1.3, 1.0, -1.5),
)


@dataclass
class SceneState:
    """Mutable state of the running scene."""

    camera: Camera = field(default_factory=Camera)
    light_pos: Vector = field(default_factory=lambda: np.array([5.0, 0.0, -5.0]))
    light_color: Vector = field(default_factory=lambda: np.ones(3))
    focus_gui: bool = False
    cursor: tuple[float, float] = (0.0, 0.0)

    def focus_gui_on(self) -> None:
        """Release the mouse: cursor movement no longer turns the camera."""
        self.focus_gui = True

    def focus_gui_off(self) -> None:
        """Capture the mouse again without a jump in the view direction."""
        self.camera.reset_last_xy(*self.cursor)
        self.focus_gui = False


def light_model_matrix(light_pos: Sequence[float]) -> Matrix:
    """Model matrix of the small cube that marks the light source."""
    model = translate(np.identity(4), light_pos)
    return scale(model, (LIGHT_SCALE, LIGHT_SCALE, LIGHT_SCALE))


def cube_model_matrices() -> list[Matrix]:
    """Model matrices of the scene's cubes, each turned a little further."""
    return [
        rotate(
            translate(np.identity(4), position),
            math.radians(CUBE_ROTATION_STEP * index),
            CUBE_ROTATION_AXIS,
        )
        for index, position in enumerate(CUBE_POSITIONS)
    ]


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="isogame", description="Render lit, textured cubes with a fly camera."
    )
    parser.add_argument("--shaders", default=str(DEFAULT_SHADERS_ROOT),
                        help="directory holding the shader sources")
    parser.add_argument("--textures", default=str(DEFAULT_TEXTURES_ROOT),
                        help="directory holding the texture images")
    parser.add_argument("--light-pos", nargs=3, type=float, metavar=("X", "Y", "Z"),
                        default=[5.0, 0.0, -5.0], help="position of the light")
    parser.add_argument("--light-color", nargs=3, type=float, metavar=("R", "G", "B"),
                        default=[1.0, 1.0, 1.0], help="colour of the light")
    return parser.parse_args(argv)


def _object_shader(shaders_root: str, textures_root: str) -> Shader:
    shader = Shader("object.vert", "object.frag", root=shaders_root,
                    textures=TextureSet(textures_root))
    shader.set_mat("projection", PROJECTION)

    shader.sampler_to_texture("mat.diffuse", "container_diff.png", RGBA)
    shader.sampler_to_texture("mat.specular", "container_spec.png", RGBA)
    shader.set_float("mat.shininess", 32)

    shader.set_vec3("directional_light.ambient", 0.1)
    shader.set_vec3("directional_light.diffuse", 0.3)
    shader.set_vec3("directional_light.specular", 1.0)
    shader.set_vec3("directional_light.direction", -0.3, -1.0, 0.0)

    shader.set_vec3("spot_light.ambient", 0.2)
    shader.set_vec3("spot_light.diffuse", 0.5)
    shader.set_vec3("spot_light.specular", 1.0)
    shader.set_float("spot_light.cut_off", math.cos(math.radians(12.5)))
    shader.set_float("spot_light.outer_cutoff", math.cos(math.radians(15.5)))
    return shader


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window and run the scene until it is closed."""
    args = _parse_args(argv)

    import pyglet
    from pyglet import gl
    from pyglet.window import key

    config = gl.Config(major_version=3, minor_version=3, forward_compatible=True,
                       depth_size=24, double_buffer=True)
    window = pyglet.window.Window(SCREEN_WIDTH, SCREEN_HEIGHT, "isogame",
                                  config=config, resizable=True)
    window.set_exclusive_mouse(True)
    gl.glEnable(gl.GL_DEPTH_TEST)

    keys = key.KeyStateHandler()
    window.push_handlers(keys)

    state = SceneState(
        light_pos=np.array(args.light_pos, dtype=np.float64),
        light_color=np.array(args.light_color, dtype=np.float64),
    )

    light_vao = VertexArray("3", CUBE)
    object_vao = VertexArray("332", CUBE_NORMALS_TEX)
    light_shader = Shader("light.vert", "light.frag", root=args.shaders,
                          textures=TextureSet(args.textures))
    object_shader = _object_shader(args.shaders, args.textures)
    cube_models = cube_model_matrices()

    movement_keys = {
        key.W: Movement.FORWARD,
        key.S: Movement.BACKWARD,
        key.D: Movement.RIGHT,
        key.A: Movement.LEFT,
        key.SPACE: Movement.UP,
        key.LCTRL: Movement.DOWN,
    }

    @window.event
    def on_resize(width: int, height: int):
        gl.glViewport(0, 0, *window.get_framebuffer_size())
        return pyglet.event.EVENT_HANDLED

    @window.event
    def on_mouse_motion(x: int, y: int, dx: int, dy: int) -> None:
        # Screen y grows upwards here, the camera expects it to grow downwards.
        cursor_x, cursor_y = state.cursor
        state.cursor = (cursor_x + dx, cursor_y - dy)
        if not state.focus_gui:
            state.camera.process_mouse(*state.cursor)

    def update(delta: float) -> None:
        if keys[key.G]:
            window.set_exclusive_mouse(False)
            state.focus_gui_on()
        if keys[key.I]:
            window.set_exclusive_mouse(True)
            state.focus_gui_off()
        pressed = [movement for k, movement in movement_keys.items() if keys[k]]
        state.camera.process_keyboard(pressed, delta)

    @window.event
    def on_draw() -> None:
        gl.glClearColor(0.0, 0.0, 0.0, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        view = state.camera.view()

        light_shader.bind()
        light_vao.bind()
        light_shader.set_vec3("light_color", state.light_color)
        light_shader.set_mat("view", view)
        light_shader.set_mat("projection", PROJECTION)
        light_shader.set_mat("model", light_model_matrix(state.light_pos))
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, VERTICES_PER_CUBE)

        object_vao.bind()
        object_shader.bind()
        object_shader.set_mat("view", view)
        object_shader.set_vec3("view_pos", state.camera.position)
        object_shader.set_vec3("spot_light.position", state.camera.position)
        object_shader.set_vec3("spot_light.direction", state.camera.front)
        for model in cube_models:
            object_shader.set_mat("model", model)
            gl.glDrawArrays(gl.GL_TRIANGLES, 0, VERTICES_PER_CUBE)

    state.camera.reset_last_xy(*state.cursor)
    pyglet.clock.schedule_interval(update, 1 / 120)
    pyglet.app.run()
    return 0