"""
Curvature model and placement pipeline.

The transform sequence for a key is written once, in apply_key_geometry, over
a small Transformer capability. ShapeTransformer runs it through the geometry
engine to place solids; PointTransformer runs it through numpy matrices to
place bare coordinates. Both follow the same code path, so a post placed as a
solid and the same post placed as a point always coincide.
"""
import dataclasses
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import numpy as np

from .engines.engine import GeometryEngine
from .errors import ConfigurationError
from .parameters import ShapeParameters
from .predicates import wide_key_shift


def rotate_around_x(position, angle):
    t_matrix = np.array(
        [
            [1, 0, 0],
            [0, math.cos(angle), -math.sin(angle)],
            [0, math.sin(angle), math.cos(angle)],
        ]
    )
    return np.matmul(t_matrix, position)


def rotate_around_y(position, angle):
    t_matrix = np.array(
        [
            [math.cos(angle), 0, math.sin(angle)],
            [0, 1, 0],
            [-math.sin(angle), 0, math.cos(angle)],
        ]
    )
    return np.matmul(t_matrix, position)


def rotate_around_z(position, angle):
    t_matrix = np.array(
        [
            [math.cos(angle), -math.sin(angle), 0],
            [math.sin(angle), math.cos(angle), 0],
            [0, 0, 1],
        ]
    )
    return np.matmul(t_matrix, position)


class Transformer(ABC):
    """
    The operations the placement pipeline needs from whatever it is placing.

    Angles are in radians.
    """

    @abstractmethod
    def translate(self, item, vector: Sequence[float]):
        raise NotImplementedError

    @abstractmethod
    def rotate_x(self, item, angle: float):
        raise NotImplementedError

    @abstractmethod
    def rotate_y(self, item, angle: float):
        raise NotImplementedError

    @abstractmethod
    def rotate_z(self, item, angle: float):
        raise NotImplementedError

    def rotate(self, item, euler_degrees: Sequence[float]):
        """
        Rotate about X, then Y, then Z, matching GeometryEngine.rotate.
        """
        item = self.rotate_x(item, math.radians(euler_degrees[0]))
        item = self.rotate_y(item, math.radians(euler_degrees[1]))
        return self.rotate_z(item, math.radians(euler_degrees[2]))


class ShapeTransformer(Transformer):

    def __init__(self, engine: GeometryEngine):
        self.engine = engine

    def translate(self, item, vector):
        return self.engine.translate(item, vector)

    def rotate_x(self, item, angle):
        return self.engine.rotate(item, [math.degrees(angle), 0, 0])

    def rotate_y(self, item, angle):
        return self.engine.rotate(item, [0, math.degrees(angle), 0])

    def rotate_z(self, item, angle):
        return self.engine.rotate(item, [0, 0, math.degrees(angle)])


class PointTransformer(Transformer):

    def translate(self, item, vector):
        return np.asarray(item, dtype=float) + np.asarray(vector, dtype=float)

    def rotate_x(self, item, angle):
        return rotate_around_x(item, angle)

    def rotate_y(self, item, angle):
        return rotate_around_y(item, angle)

    def rotate_z(self, item, angle):
        return rotate_around_z(item, angle)


POINTS = PointTransformer()


def _fixed_lookup(table: Sequence[float], name: str, column: int) -> float:
    if not 0 <= column < len(table):
        raise ConfigurationError(
            "curvature model: {} has no entry for column {} ({} declared)".format(name, column, len(table))
        )
    return table[column]


def apply_key_geometry(
        item,
        transformer: Transformer,
        column: int,
        row: int,
        params: ShapeParameters,
        column_style: Optional[str] = None,
):
    """
    Move item from a key's local frame to its place on the keyboard.
    """
    if column_style is None:
        column_style = params.column_style

    alpha = params.alpha
    row_radius = params.row_radius
    column_radius = params.column_radius
    centerrow = params.centerrow
    centercol = params.centercol

    column_angle = params.beta * (centercol - column)

    if column_style == "orthographic":
        column_z_delta = column_radius * (1 - math.cos(column_angle))
        item = transformer.translate(item, [0, 0, -row_radius])
        item = transformer.rotate_x(item, alpha * (centerrow - row))
        item = transformer.translate(item, [0, 0, row_radius])
        item = transformer.rotate_y(item, column_angle)
        item = transformer.translate(
            item, [-(column - centercol) * params.column_x_delta, 0, column_z_delta]
        )
        item = transformer.translate(item, params.column_offset(column))

    elif column_style == "fixed":
        # hand-tuned Maltron-like profile; it does not quite line the columns up
        fixed_z = _fixed_lookup(params.fixed_z, "fixed_z", column)
        item = transformer.rotate_y(item, _fixed_lookup(params.fixed_angles, "fixed_angles", column))
        item = transformer.translate(item, [_fixed_lookup(params.fixed_x, "fixed_x", column), 0, fixed_z])
        item = transformer.translate(item, [0, 0, -(row_radius + fixed_z)])
        item = transformer.rotate_x(item, alpha * (centerrow - row))
        item = transformer.translate(item, [0, 0, row_radius + fixed_z])
        item = transformer.rotate_y(item, params.fixed_tenting)
        item = transformer.translate(item, [0, params.column_offset(column)[1], 0])

    elif column_style == "standard":
        item = transformer.translate(item, [wide_key_shift(params, column, row), 0, -row_radius])
        item = transformer.rotate_x(item, alpha * (centerrow - row))
        item = transformer.translate(item, [0, 0, row_radius])
        item = transformer.translate(item, [0, 0, -column_radius])
        item = transformer.rotate_y(item, column_angle)
        item = transformer.translate(item, [0, 0, column_radius])
        item = transformer.translate(item, params.column_offset(column))

    else:
        raise ConfigurationError("curvature model: unknown column_style {!r}".format(column_style))

    item = transformer.rotate_y(item, params.tenting_angle)
    item = transformer.translate(item, [0, 0, params.keyboard_z_offset])

    return item


def key_place(shape, column: int, row: int, params: ShapeParameters, engine: GeometryEngine):
    return apply_key_geometry(shape, ShapeTransformer(engine), column, row, params)


def key_position(position, column: int, row: int, params: ShapeParameters) -> np.ndarray:
    return apply_key_geometry(np.asarray(position, dtype=float), POINTS, column, row, params)


@dataclasses.dataclass(frozen=True, eq=False)
class Pose:
    """
    A rigid transform: p' = rotation @ p + translation.
    """
    rotation: np.ndarray
    translation: np.ndarray

    def apply(self, point) -> np.ndarray:
        return self.rotation @ np.asarray(point, dtype=float) + self.translation


def key_pose(params: ShapeParameters, column: int, row: int, column_style: Optional[str] = None) -> Pose:
    """
    The pose of a key, read back off the point path of the pipeline.
    """
    def place(point):
        return apply_key_geometry(np.asarray(point, dtype=float), POINTS, column, row, params, column_style)

    translation = place([0, 0, 0])
    rotation = np.column_stack([place(axis) - translation for axis in np.eye(3)])
    return Pose(rotation=rotation, translation=translation)


class Placement(ABC):
    """
    Where a local frame sits on the keyboard.

    Placements are values: two placements that compare equal put things in
    the same place.
    """

    @abstractmethod
    def apply(self, item, transformer: Transformer) -> Any:
        raise NotImplementedError

    def place(self, shape, engine: GeometryEngine):
        return self.apply(shape, ShapeTransformer(engine))

    def position(self, point) -> np.ndarray:
        return self.apply(np.asarray(point, dtype=float), POINTS)


@dataclasses.dataclass(frozen=True)
class KeyPlacement(Placement):
    params: ShapeParameters
    column: int
    row: int

    def apply(self, item, transformer):
        return apply_key_geometry(item, transformer, self.column, self.row, self.params)


def left_key_position(row: int, direction: int, params: ShapeParameters) -> np.ndarray:
    """
    The left edge of the first column at the top (1), middle (0) or bottom (-1) of a row.
    """
    logging.debug("left_key_position()")
    pos = key_position(
        [params.mount_width * -0.5, direction * params.mount_height * 0.5, 0], 0, row, params
    )
    return pos - np.array([params.left_wall_x_offset, 0, params.left_wall_z_offset])
