import math

import pytest

from isogame.primitives import (
    CUBE,
    CUBE_NORMALS_TEX,
    CUBE_WITH_NORMALS,
    vertices,
)


def test_cube_has_36_vertices():
    assert len(vertices(CUBE, 3)) == 36
    assert len(vertices(CUBE_WITH_NORMALS, 6)) == 36
    assert len(vertices(CUBE_NORMALS_TEX, 8)) == 36


def test_vertices_have_stride_components():
    assert all(len(v) == 8 for v in vertices(CUBE_NORMALS_TEX, 8))


def test_positions_agree_between_layouts():
    plain = vertices(CUBE, 3)
    with_normals = [v[:3] for v in vertices(CUBE_WITH_NORMALS, 6)]
    full = [v[:3] for v in vertices(CUBE_NORMALS_TEX, 8)]
    assert plain == with_normals == full


def test_normals_agree_between_layouts():
    a = [v[3:] for v in vertices(CUBE_WITH_NORMALS, 6)]
    b = [v[3:6] for v in vertices(CUBE_NORMALS_TEX, 8)]
    assert a == b


def test_positions_are_cube_corners():
    components = {c for vertex in vertices(CUBE, 3) for c in vertex}
    assert components == {-0.5, 0.5}
    corners = {tuple(vertex) for vertex in vertices(CUBE, 3)}
    assert len(corners) == 8


def test_normals_are_unit_and_face_aligned():
    for vertex in vertices(CUBE_WITH_NORMALS, 6):
        pos, normal = vertex[:3], vertex[3:]
        assert math.isclose(math.hypot(*normal), 1.0)
        assert math.isclose(sum(p * n for p, n in zip(pos, normal)), 0.5)


def test_texture_coordinates_in_unit_range():
    coords = {c for v in vertices(CUBE_NORMALS_TEX, 8) for c in v[6:]}
    assert coords == {0.0, 1.0}


def test_vertices_round_trip():
    flat = [c for v in vertices(CUBE_NORMALS_TEX, 8) for c in v]
    assert tuple(flat) == CUBE_NORMALS_TEX


@pytest.mark.parametrize("stride", [0, -3])
def test_non_positive_stride_rejected(stride):
    with pytest.raises(ValueError):
        vertices(CUBE, stride)


def test_uneven_data_rejected():
    with pytest.raises(ValueError):
        vertices(CUBE, 5)