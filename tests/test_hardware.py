import math

import numpy as np
import pytest

from dactyl_shell.hardware import ControlSwitches, NiceNanoHolder, PalmRest, ScrewInserts, corner_box
from dactyl_shell.placement import key_position, left_key_position
from dactyl_shell.walls import wall_locate2, wall_locate3


def test_corner_box(engine):
    box = corner_box((2, 3, 4), engine)
    assert np.allclose(box.min(axis=0), [0, 0, 0])
    assert np.allclose(box.max(axis=0), [2, 3, 4])


def test_screw_insert_positions(params, engine):
    inserts = ScrewInserts(params, engine)
    positions = inserts.positions()
    assert len(positions) == 5

    # (lastcol, 0) is on the right wall
    anchor = key_position(
        np.array(wall_locate2(1, 0, params)) + [params.mount_width / 2, 0, 0], params.lastcol, 0, params,
    )
    assert positions[0] == pytest.approx((anchor[0] + 4.5, anchor[1] + 5))

    # (0, 0) is on the left wall
    anchor = left_key_position(0, 0, params) + np.array(wall_locate3(-1, 0, params))
    assert positions[4] == pytest.approx((anchor[0] + 7, anchor[1] + 5))


def test_screw_insert_anchor_on_back_wall(params, engine):
    inserts = ScrewInserts(params, engine)
    anchor = inserts.anchor(2, 0)
    expected = key_position(
        np.array(wall_locate2(0, 1, params)) + [0, params.mount_height / 2, 0], 2, 0, params,
    )
    assert np.allclose(anchor, expected)


def test_screw_insert_shapes_stand_on_floor(params, engine):
    inserts = ScrewInserts(params, engine)
    holes = inserts.holes()
    outers = inserts.outers()
    assert holes[:, 2].min() == pytest.approx(0)
    assert holes[:, 2].max() == pytest.approx(params.screw_insert_height)
    assert outers[:, 2].max() == pytest.approx(params.screw_insert_height + 1)
    assert len(inserts.plate_holes(params.base_thickness)) == 10


def test_nice_nano_position(params, engine):
    holder = NiceNanoHolder(params, engine)
    key = key_position([0, 0, 0], 1, 0, params)
    expected = [key[0] - 2, key[1] + params.mount_height / 2 + params.post_adj - 1.7375, 0]
    assert np.allclose(holder.position(), expected)


def test_nice_nano_holder_on_plate(params, engine):
    holder = NiceNanoHolder(params, engine)
    shape = holder.holder()
    assert shape[:, 2].min() == pytest.approx(0)
    assert shape[:, 2].max() == pytest.approx(holder.bounding_box[2])
    # turned around, the holder reaches forward from the opening
    assert shape[:, 1].max() == pytest.approx(holder.position()[1], abs=1e-6)
    assert holder.usb_cutout().shape[1] == 3
    assert holder.usb_retainer().shape[1] == 3


def test_control_switches(params, engine):
    switches = ControlSwitches(params, engine)
    positions = switches.positions()
    assert len(positions) == 2
    assert all(z == 8.75 for _, _, z in positions)
    assert switches.holes().shape[1] == 3


def test_palm_rest_outline(params, engine):
    rest = PalmRest(params, engine)
    outline = rest.outline()
    assert len(outline) == 7

    x, y = PalmRest.OUTSIDE_CASE_CONTACT
    assert outline[3] == pytest.approx((x, y - params.palm_rest_length))
    assert outline[2] == pytest.approx((x - 25.4 * math.sqrt(0.1), y - params.palm_rest_length - 50.8 * math.sqrt(0.1)))

    shape = rest.rest()
    assert shape[:, 2].max() == pytest.approx(params.base_thickness)
    assert len(rest.screw_holes()) == 6
