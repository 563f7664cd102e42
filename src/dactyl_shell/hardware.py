"""
Case hardware: screw inserts, the nice!nano holder and its USB opening,
control switch holes and the palm rest.
"""
import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .engines.engine import GeometryEngine
from .parameters import ShapeParameters
from .placement import key_position, left_key_position
from .walls import wall_locate2, wall_locate3


def corner_box(dimensions: Sequence[float], engine: GeometryEngine):
    """
    A box with one corner on the origin, extending into positive x, y and z.
    """
    width, height, depth = dimensions
    return engine.translate(engine.box(width, height, depth), (width / 2, height / 2, depth / 2))


def standing_cone(radius_bottom: float, radius_top: float, height: float, engine: GeometryEngine):
    """
    A cone along Z with its base on z=0.
    """
    if radius_bottom == radius_top:
        shape = engine.cylinder(radius_bottom, height)
    else:
        shape = engine.cone(radius_bottom, radius_top, height)
    return engine.translate(shape, (0, 0, height / 2))


class ScrewInserts:
    """
    Heat set insert bosses along the walls.
    """

    # (column, row, offset); the columns and rows are resolved against the parameters
    SHIFTS = (
        ("lastcol", 0, (4.5, 5, 0)),
        ("lastcol", "lastrow", (7.5, 14.5, 0)),
        (0, "lastrow", (3, -42, 0)),
        (0, 2, (4, -7, 0)),
        (0, 0, (7, 5, 0)),
    )

    # countersunk screws through the base plate
    HEAD_RADIUS = 5.7 / 2
    HEAD_BASE_RADIUS = 3.2 / 2
    HEAD_HEIGHT = 2.3

    def __init__(self, params: ShapeParameters, engine: GeometryEngine):
        self.params = params
        self.engine = engine

    def _resolve(self, value) -> int:
        if isinstance(value, str):
            return getattr(self.params, value)
        return value

    def anchor(self, column: int, row: int) -> np.ndarray:
        """
        The point on the wall an insert at (column, row) hangs off.
        """
        params = self.params
        shift_right = column == params.lastcol
        shift_left = column == 0
        shift_up = not (shift_right or shift_left) and row == 0
        shift_down = not (shift_right or shift_left) and row >= params.lastrow

        if shift_up:
            local = np.array(wall_locate2(0, 1, params)) + np.array([0, params.mount_height / 2, 0])
            return key_position(local, column, row, params)
        if shift_down:
            local = np.array(wall_locate2(0, -2.5, params)) - np.array([0, params.mount_height / 2, 0])
            return key_position(local, column, row, params)
        if shift_left:
            return left_key_position(row, 0, params) + np.array(wall_locate3(-1, 0, params))
        local = np.array(wall_locate2(1, 0, params)) + np.array([params.mount_width / 2, 0, 0])
        return key_position(local, column, row, params)

    def positions(self) -> List[Tuple[float, float]]:
        """
        XY centers of every insert.
        """
        centers = []
        for column, row, offset in self.SHIFTS:
            anchor = self.anchor(self._resolve(column), self._resolve(row))
            centers.append((float(anchor[0] + offset[0]), float(anchor[1] + offset[1])))
        return centers

    def shapes(self, radius_bottom: float, radius_top: float, height: float) -> list:
        return [
            self.engine.translate(standing_cone(radius_bottom, radius_top, height, self.engine), (x, y, 0))
            for x, y in self.positions()
        ]

    def holes(self):
        params = self.params
        return self.engine.union(self.shapes(
            params.screw_insert_bottom_radius, params.screw_insert_top_radius, params.screw_insert_height,
        ))

    def outers(self):
        params = self.params
        return self.engine.union(self.shapes(
            params.screw_insert_bottom_radius + params.screw_insert_wall,
            params.screw_insert_top_radius + params.screw_insert_wall,
            params.screw_insert_height + 1,
        ))

    def plate_holes(self, plate_thickness: float) -> list:
        """
        Countersunk holes through a base plate of the given thickness.
        """
        return [
            *self.shapes(self.HEAD_RADIUS, self.HEAD_BASE_RADIUS, self.HEAD_HEIGHT),
            *self.shapes(self.HEAD_BASE_RADIUS, self.HEAD_BASE_RADIUS, plate_thickness),
        ]


class NiceNanoHolder:
    """
    A cradle for a nice!nano controller on the base plate, with the USB-C
    opening through the back wall.

    position is the middle of the USB-C opening in XY, orientation the
    rotation about Z in degrees.
    """

    BOARD = (18.4, 33.7, 2)
    PIN_CLEARANCE = (4, 33.7, 2.5)
    SUPPORT_EXTENT = 25
    RETAINER_EXTENT = 1
    WALL_THICKNESS = 2
    WALL_HEIGHT = 2.1  # above the board

    JACK_WIDTH = 9.525
    JACK_HEIGHT = 3.5
    JACK_WALL_THICKNESS = 1
    CLEARANCE_BUFFER = 2.75

    ORIENTATION = 180
    # from the back edge of the second column to the opening
    REFERENCE_OFFSET = (-2, -1.7375, 0)

    def __init__(self, params: ShapeParameters, engine: GeometryEngine):
        self.params = params
        self.engine = engine
        self.bounding_box = (
            self.BOARD[0] + self.WALL_THICKNESS * 2,
            self.BOARD[1] + self.WALL_THICKNESS,
            self.BOARD[2] + self.PIN_CLEARANCE[2] + self.WALL_HEIGHT,
        )

    def position(self) -> np.ndarray:
        params = self.params
        key = key_position([0, 0, 0], 1, 0, params)
        reference = np.array([key[0], key[1] + params.mount_height / 2 + params.post_adj, 0])
        return reference + np.array(self.REFERENCE_OFFSET)

    def _transform(self, shape):
        engine = self.engine
        width, depth, height = self.bounding_box
        shape = engine.translate(shape, (-width / 2, -depth / 2, -height / 2))
        shape = engine.rotate(shape, (0, 0, self.ORIENTATION))
        shape = engine.translate(shape, (0, -depth / 2, height / 2))
        return engine.translate(shape, self.position())

    def holder(self):
        logging.debug("NiceNanoHolder.holder()")
        engine = self.engine
        board = self.BOARD
        clearance = self.PIN_CLEARANCE
        support_width = board[0] - 2 * clearance[0]

        shell = engine.difference(
            corner_box(self.bounding_box, engine),
            [engine.translate(
                corner_box((board[0], board[1], board[2] + self.bounding_box[2]), engine),
                (self.WALL_THICKNESS, 0, 0),
            )],
        )
        support = engine.translate(
            corner_box((support_width, self.SUPPORT_EXTENT, clearance[2]), engine),
            (self.WALL_THICKNESS + clearance[0], 0, 0),
        )
        retainer = engine.translate(
            corner_box((support_width, self.RETAINER_EXTENT, self.RETAINER_EXTENT), engine),
            (self.WALL_THICKNESS + clearance[0], board[1] - self.RETAINER_EXTENT, clearance[2] + board[2]),
        )
        return self._transform(engine.union([shell, support, retainer]))

    def _jack_round(self, x: float):
        engine = self.engine
        radius = self.JACK_HEIGHT / 2
        round_side = engine.rotate(engine.cylinder(radius, 2 * self.WALL_THICKNESS), (90, 0, 0))
        return engine.translate(round_side, (x, self.WALL_THICKNESS, radius))

    def usb_cutout(self):
        logging.debug("NiceNanoHolder.usb_cutout()")
        engine = self.engine
        radius = self.JACK_HEIGHT / 2
        clearance_width = self.JACK_WIDTH + 2 * self.CLEARANCE_BUFFER
        clearance_height = self.JACK_HEIGHT + 2 * self.CLEARANCE_BUFFER
        pin_z = self.PIN_CLEARANCE[2]

        jack = engine.union([
            self._jack_round(radius),
            self._jack_round(self.JACK_WIDTH - radius),
            engine.translate(
                corner_box((self.JACK_WIDTH - 2 * radius, 2 * self.WALL_THICKNESS, self.JACK_HEIGHT), engine),
                (radius, 0, 0),
            ),
        ])
        jack = engine.translate(jack, ((self.bounding_box[0] - self.JACK_WIDTH) / 2, -0.1, pin_z))

        plug_clearance = engine.translate(
            corner_box((clearance_width, 2 * self.WALL_THICKNESS, clearance_height), engine),
            (
                (self.bounding_box[0] - clearance_width) / 2,
                self.JACK_WALL_THICKNESS,
                pin_z + self.JACK_HEIGHT / 2 - clearance_height / 2,
            ),
        )
        return self._transform(engine.union([
            engine.mirror(jack, (0, 1, 0)),
            engine.mirror(plug_clearance, (0, 1, 0)),
        ]))

    def usb_retainer(self):
        engine = self.engine
        retainer = engine.translate(
            corner_box((self.JACK_WIDTH, self.RETAINER_EXTENT, self.RETAINER_EXTENT), engine),
            ((self.bounding_box[0] - self.JACK_WIDTH) / 2, 0, self.PIN_CLEARANCE[2] + self.JACK_HEIGHT),
        )
        return self._transform(retainer)


class ControlSwitches:
    """
    Round holes through the back wall for a power switch and a reset button.
    """

    COLUMNS = (2, 3)
    HEIGHT = 20
    CENTER_Z = 8.75

    def __init__(self, params: ShapeParameters, engine: GeometryEngine):
        self.params = params
        self.engine = engine

    def positions(self) -> List[Tuple[float, float, float]]:
        params = self.params
        centers = []
        for column in self.COLUMNS:
            x = key_position([1.75, 0, 0], column, 0, params)[0]
            y = key_position([0, 2, 0], column, 0, params)[1]
            centers.append((float(x), float(y), self.CENTER_Z))
        return centers

    def holes(self):
        engine = self.engine
        hole = engine.rotate(engine.cylinder(self.params.control_switch_radius, self.HEIGHT), (90, 0, 0))
        return engine.union([engine.translate(hole, center) for center in self.positions()])


class PalmRest:
    """
    A flat palm rest joined to the front of the base plate.

    The contact points are measured off the default case.
    """

    OUTSIDE_CASE_CONTACT = (61.5737, -51.3762)
    THUMB_CASE_CONTACT = (-51.5458, -103.431)
    INTERNAL_CORNER = (-51.5458, -46.3762)

    SCREW_OFFSETS = ((-15, -25.4), (-83, -53), (-34.1, -67.15))
    SCREW_HOLE_HEIGHT = 10

    def __init__(self, params: ShapeParameters, engine: GeometryEngine):
        self.params = params
        self.engine = engine

    def outline(self) -> List[Tuple[float, float]]:
        length = self.params.palm_rest_length
        outside = np.array(self.OUTSIDE_CASE_CONTACT)
        thumb = np.array(self.THUMB_CASE_CONTACT)

        lower_right_one = outside + (0, -length)
        lower_right_two = lower_right_one + (25.4 * -math.sqrt(0.1), 25.4 * -2 * math.sqrt(0.1))
        diagonal = math.sqrt(length * length / 2)
        lower_left_one = thumb + (diagonal, -diagonal) + (7.5, 10)
        angle = math.pi / 4 - math.atan(0.5)
        lower_left_two = lower_left_one + (
            25.4 * math.sqrt(0.5) * math.cos(angle),
            -25.4 * math.sqrt(0.5) * math.sin(angle),
        )
        points = [
            lower_left_one,
            lower_left_two,
            lower_right_two,
            lower_right_one,
            outside + (4.0963, 9.8962),
            np.array(self.INTERNAL_CORNER),
            thumb + (-30.8642, 14.441),
        ]
        return [(float(x), float(y)) for x, y in points]

    def rest(self):
        logging.debug("PalmRest.rest()")
        engine = self.engine
        return engine.extrude(engine.polygon(self.outline()), self.params.base_thickness)

    def screw_positions(self) -> List[Tuple[float, float]]:
        x, y = self.OUTSIDE_CASE_CONTACT
        return [(x + dx, y + dy) for dx, dy in self.SCREW_OFFSETS]

    def screw_holes(self) -> list:
        engine = self.engine
        holes = []
        for x, y in self.screw_positions():
            holes.append(engine.translate(
                standing_cone(ScrewInserts.HEAD_BASE_RADIUS, ScrewInserts.HEAD_BASE_RADIUS, self.SCREW_HOLE_HEIGHT, engine),
                (x, y, 0),
            ))
            holes.append(engine.translate(
                standing_cone(ScrewInserts.HEAD_RADIUS, ScrewInserts.HEAD_BASE_RADIUS, ScrewInserts.HEAD_HEIGHT, engine),
                (x, y, 0),
            ))
        return holes
