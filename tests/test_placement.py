import numpy as np
import pytest

from dactyl_shell.errors import ConfigurationError
from dactyl_shell.layout import key_addresses
from dactyl_shell.parameters import ShapeParameters
from dactyl_shell.placement import (
    KeyPlacement, apply_key_geometry, key_place, key_pose, key_position, left_key_position, POINTS,
)
from dactyl_shell.posts import post_z
from dactyl_shell.predicates import PINKY_15U_SHIFT

STYLES = ("standard", "orthographic", "fixed")


def _sample_points(params):
    half_w = params.mount_width / 2
    half_h = params.mount_height / 2
    z = post_z(params)
    return np.array([
        [0, 0, 0],
        [half_w, half_h, z],
        [-half_w, half_h, z],
        [half_w, -half_h, z],
        [-half_w, -half_h, z],
    ])


@pytest.mark.parametrize("column_style", STYLES)
def test_shape_and_point_paths_agree(engine, column_style):
    params = ShapeParameters(column_style=column_style)
    samples = _sample_points(params)
    for column, row in key_addresses(params):
        placed = key_place(samples, column, row, params, engine)
        pose = key_pose(params, column, row)
        for sample, point in zip(samples, placed):
            assert np.allclose(point, pose.apply(sample), atol=1e-6)
            assert np.allclose(point, key_position(sample, column, row, params), atol=1e-6)


def test_pose_is_rigid(params):
    for column, row in key_addresses(params):
        rotation = key_pose(params, column, row).rotation
        assert np.allclose(rotation @ rotation.T, np.eye(3), atol=1e-9)
        assert np.linalg.det(rotation) == pytest.approx(1.0)


def test_placement_is_deterministic(params):
    first = [key_position([1, 2, 3], column, row, params) for column, row in key_addresses(params)]
    second = [key_position([1, 2, 3], column, row, params) for column, row in key_addresses(params)]
    assert all(np.array_equal(a, b) for a, b in zip(first, second))


def test_orthographic_matches_standard_at_center_column(params):
    column = params.centercol
    for row in range(params.nrows):
        standard = apply_key_geometry(np.array([1.0, 2.0, 3.0]), POINTS, column, row, params, "standard")
        orthographic = apply_key_geometry(np.array([1.0, 2.0, 3.0]), POINTS, column, row, params, "orthographic")
        assert np.allclose(standard, orthographic, atol=1e-9)


def test_center_key_sits_on_the_tented_axis(params):
    column_offset = np.array(params.column_offset(params.centercol), dtype=float)
    point = key_position([0, 0, 0], params.centercol, params.centerrow, params)
    cos, sin = np.cos(params.tenting_angle), np.sin(params.tenting_angle)
    tented = np.array([
        cos * column_offset[0] + sin * column_offset[2],
        column_offset[1],
        -sin * column_offset[0] + cos * column_offset[2],
    ])
    assert np.allclose(point, tented + [0, 0, params.keyboard_z_offset], atol=1e-9)


def test_wide_keys_are_shifted():
    wide = ShapeParameters()
    narrow = ShapeParameters(pinky_15u=False)
    column = wide.lastcol

    shifted = key_pose(wide, column, 0)
    plain = key_pose(narrow, column, 0)
    assert np.allclose(shifted.rotation, plain.rotation)
    assert np.linalg.norm(shifted.translation - plain.translation) == pytest.approx(PINKY_15U_SHIFT)


def test_fixed_style_uses_tables():
    params = ShapeParameters(column_style="fixed", fixed_tenting=0.0)
    pose = key_pose(params, 2, params.centerrow)
    # column 2 has no angle, no x and no z in the default tables
    expected = np.array([0, params.column_offset(2)[1], 0])
    cos, sin = np.cos(params.tenting_angle), np.sin(params.tenting_angle)
    expected = np.array([cos * expected[0] + sin * expected[2], expected[1], -sin * expected[0] + cos * expected[2]])
    assert np.allclose(pose.translation, expected + [0, 0, params.keyboard_z_offset], atol=1e-9)


def test_fixed_style_column_outside_tables():
    params = ShapeParameters(column_style="fixed", ncols=8)
    with pytest.raises(ConfigurationError, match="fixed"):
        key_position([0, 0, 0], 7, 0, params)


def test_unknown_style_in_pipeline(params):
    with pytest.raises(ConfigurationError, match="column_style"):
        apply_key_geometry(np.zeros(3), POINTS, 0, 0, params, "bowl")


def test_key_placement_values_compare_equal(params):
    assert KeyPlacement(params, 2, 1) == KeyPlacement(params, 2, 1)
    assert KeyPlacement(params, 2, 1) != KeyPlacement(params, 2, 2)


def test_left_key_position_applies_wall_offsets():
    params = ShapeParameters(left_wall_x_offset=3, left_wall_z_offset=1)
    edge = key_position([-params.mount_width / 2, params.mount_height / 2, 0], 0, 1, params)
    assert np.allclose(left_key_position(1, 1, params), edge - [3, 0, 1])


def test_fixed_style_ignores_column_radius():
    params = ShapeParameters(column_style="fixed")
    wider = ShapeParameters(column_style="fixed", extra_width=10)
    assert wider.column_radius != params.column_radius
    for column, row in key_addresses(params):
        assert np.allclose(key_pose(params, column, row).translation, key_pose(wider, column, row).translation)
        assert np.allclose(key_pose(params, column, row).rotation, key_pose(wider, column, row).rotation)
