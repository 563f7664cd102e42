import numpy as np
import pytest

from dactyl_shell.assembly import case_shell, mirror_to_left, model_right, plate_right
from dactyl_shell.engines.engine import FLOOR_Z
from dactyl_shell.layout import key_addresses
from dactyl_shell.parameters import ShapeParameters
from dactyl_shell.placement import key_position
from dactyl_shell.thumb import THUMB_KEYS, thumb_1x_layout, thumb_2x_layout, thumb_place


def test_model_right(params, engine):
    shape = model_right(params, engine)
    # the test engine ignores subtraction, so the wall hulls still reach the floor
    assert shape[:, 2].min() == pytest.approx(FLOOR_Z)
    assert shape[:, 2].max() > params.keyboard_z_offset


def test_model_right_logs_degraded_pinky_range(engine, caplog):
    params = ShapeParameters(first_15u_row=3, last_15u_row=1)
    model_right(params, engine)
    assert "1.5u rows 3..1" in caplog.text


def test_case_shell_includes_screw_inserts(params, engine):
    shell = case_shell(params, engine)
    assert shell[:, 2].min() == pytest.approx(FLOOR_Z)


def test_plate_right(params, engine):
    plate = plate_right(params, engine)
    assert plate[:, 2].min() == pytest.approx(0)
    # the controller holder stands on top of the plate
    assert plate[:, 2].max() > params.base_thickness


def test_left_is_mirrored(params, engine):
    shape = engine.box(1, 2, 3) + np.array([5, 0, 0])
    left = mirror_to_left(shape, engine)
    assert np.allclose(left[:, 0], -shape[:, 0])
    assert np.allclose(left[:, 1:], shape[:, 1:])


def test_default_model_spans_the_matrix(params, engine):
    shape = model_right(params, engine)
    width = shape[:, 0].max() - shape[:, 0].min()
    assert width > params.ncols * params.mount_width


# key centers of the default configuration, worked out by hand from the
# curvature formulas
DEFAULT_KEY_CENTERS = {
    (0, 0): (-70.337504, 40.538540, 55.184338),
    (0, 2): (-76.875224, -2.000000, 45.847506),
    (1, 0): (-53.206093, 40.538540, 44.270426),
    (3, 4): (-17.587023, -39.718540, 22.771212),
    (4, 2): (0.0, 0.0, 10.0),
    (4, 4): (2.950063, -42.538540, 21.009784),
    (6, 0): (49.123966, 30.538540, 18.994775),
    (6, 3): (48.383209, -34.019569, 10.527881),
}
DEFAULT_THUMB_CENTERS = {
    "t0": (-32.996835, -49.157494, 35.498258),
    "t2": (-76.308802, -59.706320, 36.925135),
}


def test_default_configuration_golden(params, engine):
    assert len(key_addresses(params)) == 29
    plate = engine.box(1, 1, 1)
    assert len(thumb_1x_layout(plate, params, engine)) == 2
    assert len(thumb_2x_layout(plate, params, engine)) == 2
    assert sorted(key.usize for key in THUMB_KEYS) == [1, 1, 2, 2]

    for (column, row), center in DEFAULT_KEY_CENTERS.items():
        assert key_position([0, 0, 0], column, row, params) == pytest.approx(center, abs=1e-3)
    thumb_keys = {key.name: key for key in THUMB_KEYS}
    for name, center in DEFAULT_THUMB_CENTERS.items():
        assert thumb_place(params, thumb_keys[name]).position([0, 0, 0]) == pytest.approx(center, abs=1e-3)

    shape = model_right(params, engine)
    low, high = shape.min(axis=0), shape.max(axis=0)
    assert low[2] == pytest.approx(FLOOR_Z)
    for center in (*DEFAULT_KEY_CENTERS.values(), *DEFAULT_THUMB_CENTERS.values()):
        assert np.all(low < center) and np.all(center < high)
