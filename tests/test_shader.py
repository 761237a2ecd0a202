import numpy as np
import pytest

from isogame.shader import Shader, ShaderError
from isogame.texture import RGBA, TextureSet
from isogame.transforms import translate


class FakeShaderGL:
    def __init__(self, fail_stage=None, fail_link=False):
        self.fail_stage = fail_stage
        self.fail_link = fail_link
        self.calls = []
        self.sources = {}
        self.stages = {}
        self.locations = {}
        self._next_id = 0

    def _new_id(self):
        self._next_id += 1
        return self._next_id

    def create_shader(self, stage):
        shader_id = self._new_id()
        self.stages[shader_id] = stage
        return shader_id

    def compile_shader(self, shader_id, source):
        self.sources[self.stages[shader_id]] = source
        if self.stages[shader_id] == self.fail_stage:
            return False, "syntax error near main"
        return True, ""

    def create_program(self):
        program_id = self._new_id()
        self.calls.append(("create_program", program_id))
        return program_id

    def attach_shader(self, program_id, shader_id):
        self.calls.append(("attach", program_id, shader_id))

    def link_program(self, program_id):
        if self.fail_link:
            return False, "unresolved symbol"
        return True, ""

    def use_program(self, program_id):
        self.calls.append(("use", program_id))

    def uniform_location(self, program_id, name):
        return self.locations.setdefault(name, len(self.locations))

    def uniform1f(self, location, value):
        self.calls.append(("1f", location, value))

    def uniform1i(self, location, value):
        self.calls.append(("1i", location, value))

    def uniform3f(self, location, x, y, z):
        self.calls.append(("3f", location, x, y, z))

    def uniform_matrix4fv(self, location, values):
        self.calls.append(("mat4", location, tuple(values)))

    def of(self, name):
        return [call for call in self.calls if call[0] == name]


class FakeTextureGL:
    def __init__(self):
        self.calls = []
        self._next_id = 50

    def active_texture(self, unit):
        self.calls.append(("active", unit))

    def gen_texture(self):
        self._next_id += 1
        return self._next_id

    def bind_texture(self, texture_id):
        self.calls.append(("bind", texture_id))

    def set_default_parameters(self):
        pass

    def tex_image_2d(self, fmt, width, height, pixels):
        pass

    def generate_mipmap(self):
        pass


VERTEX_SOURCE = "void main() { gl_Position = vec4(0.0); }\n"
FRAGMENT_SOURCE = "out vec4 color; void main() { color = vec4(1.0); }\n"


@pytest.fixture
def root(tmp_path):
    (tmp_path / "object.vert").write_text(VERTEX_SOURCE)
    (tmp_path / "object.frag").write_text(FRAGMENT_SOURCE)
    (tmp_path / "diffuse.png").write_bytes(b"image")
    (tmp_path / "specular.png").write_bytes(b"image")
    return tmp_path


def make_shader(root, **gl_options):
    gl = FakeShaderGL(**gl_options)
    tex_gl = FakeTextureGL()
    textures = TextureSet(root, gl=tex_gl, loader=lambda path, fmt: (1, 1, b"\0\0\0"))
    shader = Shader("object.vert", "object.frag", root=root, textures=textures, gl=gl)
    return shader, gl, tex_gl


def test_sources_are_read_from_files(root):
    _, gl, _ = make_shader(root)
    assert gl.sources == {"vertex": VERTEX_SOURCE, "fragment": FRAGMENT_SOURCE}


def test_program_is_linked_and_used(root):
    shader, gl, _ = make_shader(root)
    attached = [call[2] for call in gl.of("attach")]
    assert sorted(gl.stages[s] for s in attached) == ["fragment", "vertex"]
    assert all(call[1] == shader.id for call in gl.of("attach"))
    assert gl.calls[-1] == ("use", shader.id)


def test_missing_source_raises(root):
    (root / "object.frag").unlink()
    with pytest.raises(FileNotFoundError):
        make_shader(root)


@pytest.mark.parametrize("stage", ["vertex", "fragment"])
def test_compile_failure_raises_with_log(root, stage):
    with pytest.raises(ShaderError, match="syntax error near main") as info:
        make_shader(root, fail_stage=stage)
    assert stage in str(info.value)


def test_link_failure_raises(root):
    with pytest.raises(ShaderError, match="unresolved symbol"):
        make_shader(root, fail_link=True)


def test_set_float_and_int(root):
    shader, gl, _ = make_shader(root)
    shader.set_float("mat.shininess", 32)
    shader.set_int("mat.diffuse", 1)
    location_f = gl.locations["mat.shininess"]
    location_i = gl.locations["mat.diffuse"]
    assert gl.of("1f") == [("1f", location_f, 32.0)]
    assert gl.of("1i") == [("1i", location_i, 1)]


def test_set_mat_sends_column_major(root):
    shader, gl, _ = make_shader(root)
    shader.set_mat("model", translate(np.identity(4), (1.0, 2.0, 3.0)))
    (_, _, values), = gl.of("mat4")
    assert len(values) == 16
    assert values[12:15] == (1.0, 2.0, 3.0)


def test_set_mat_rejects_wrong_shape(root):
    shader, _, _ = make_shader(root)
    with pytest.raises(ValueError):
        shader.set_mat("model", np.identity(3))


def test_set_vec3_vector_and_components_agree(root):
    shader, gl, _ = make_shader(root)
    shader.set_vec3("light", np.array([-0.3, -1.0, 0.0]))
    shader.set_vec3("light", -0.3, -1.0, 0.0)
    first, second = gl.of("3f")
    assert first == second
    assert first[2:] == (-0.3, -1.0, 0.0)


def test_set_vec3_scalar_fills_all_components(root):
    shader, gl, _ = make_shader(root)
    shader.set_vec3("ambient", 0.5)
    assert gl.of("3f")[0][2:] == (0.5, 0.5, 0.5)


def test_set_vec3_rejects_bad_arguments(root):
    shader, _, _ = make_shader(root)
    with pytest.raises(TypeError):
        shader.set_vec3("light", 1.0, 2.0)
    with pytest.raises(ValueError):
        shader.set_vec3("light", [1.0, 2.0])


def test_sampler_to_texture_assigns_units(root):
    shader, gl, _ = make_shader(root)
    shader.sampler_to_texture("mat.diffuse", "diffuse.png", RGBA)
    shader.sampler_to_texture("mat.specular", "specular.png", RGBA)
    sent = {
        name: value
        for name, location in gl.locations.items()
        for _, loc, value in gl.of("1i")
        if loc == location
    }
    assert sent == {
        "mat.diffuse": shader.textures.texture_unit("diffuse.png"),
        "mat.specular": shader.textures.texture_unit("specular.png"),
    }
    assert sent["mat.diffuse"] != sent["mat.specular"]


def test_sampler_to_missing_texture_raises(root):
    shader, _, _ = make_shader(root)
    with pytest.raises(FileNotFoundError):
        shader.sampler_to_texture("mat.diffuse", "absent.png")


def test_bind_binds_textures_then_program(root):
    shader, gl, tex_gl = make_shader(root)
    shader.sampler_to_texture("mat.diffuse", "diffuse.png")
    tex_gl.calls.clear()
    gl.calls.clear()
    shader.bind()
    assert [call[0] for call in tex_gl.calls] == ["active", "bind"]
    assert gl.calls == [("use", shader.id)]