"""
The thumb cluster: four hand-tuned mounts placed as a rigid group relative
to the thumb origin, and the webbing that ties them to each other and to the
matrix.
"""
import dataclasses
import functools
import logging
from typing import List, Tuple

import numpy as np

from .engines.engine import GeometryEngine
from .mesh import PostGroup, PostRef, mesh, union_all
from .parameters import ShapeParameters
from .placement import KeyPlacement, Placement, key_position
from .plates import double_plate, single_plate
from .posts import (
    thumb_post_bl, thumb_post_br, thumb_post_tl, thumb_post_tr,
    web_post_bl, web_post_br, web_post_tl, web_post_tr,
)


@dataclasses.dataclass(frozen=True)
class ThumbKey:
    name: str
    pre_translate: Tuple[float, float, float]
    rotation: Tuple[float, float, float]  # euler degrees, X then Y then Z
    offset: Tuple[float, float, float]  # from the thumb origin
    usize: int


# clockwise from the key nearest the matrix
THUMB_KEYS = (
    ThumbKey("t0", (0, 0, 0), (10, -23, 10), (-9, -16, 3), 2),
    ThumbKey("t1", (0, 0, 0), (10, -2, 12.5), (-30.5, -25, -2), 2),
    ThumbKey("t2", (0, 0, 1.5), (10, 15, 15.5), (-52.75, -26.4, 3), 1),
    ThumbKey("t3", (0, 0, -1.5), (10, 15, 15.5), (-48.7, -45.25, -1.5), 1),
)
T0, T1, T2, T3 = THUMB_KEYS


@functools.lru_cache(maxsize=16)
def thumborigin(params: ShapeParameters) -> Tuple[float, float, float]:
    """
    The outer bottom corner of the second main column, moved by thumb_offsets.
    """
    logging.debug("thumborigin()")
    origin = key_position(
        [params.mount_width / 2, -(params.mount_height / 2), 0],
        params.innercol_offset + 1,
        params.cornerrow,
        params,
    )
    return tuple(float(v) for v in origin + np.array(params.thumb_offsets, dtype=float))


@dataclasses.dataclass(frozen=True)
class ThumbPlacement(Placement):
    params: ShapeParameters
    key: ThumbKey

    def apply(self, item, transformer):
        item = transformer.translate(item, self.key.pre_translate)
        item = transformer.rotate(item, self.key.rotation)
        item = transformer.translate(item, thumborigin(self.params))
        item = transformer.translate(item, self.key.offset)
        return item


def thumb_place(params: ShapeParameters, key: ThumbKey) -> ThumbPlacement:
    return ThumbPlacement(params, key)


def thumb_1x_layout(shape, params: ShapeParameters, engine: GeometryEngine) -> list:
    return [thumb_place(params, key).place(shape, engine) for key in THUMB_KEYS if key.usize == 1]


def thumb_2x_layout(shape, params: ShapeParameters, engine: GeometryEngine) -> list:
    return [thumb_place(params, key).place(shape, engine) for key in THUMB_KEYS if key.usize == 2]


def thumb(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("thumb()")
    return engine.union([
        *thumb_1x_layout(single_plate(params, engine), params, engine),
        *thumb_2x_layout(double_plate(params, engine), params, engine),
    ])


def thumb_connector_groups(params: ShapeParameters) -> List[PostGroup]:
    logging.debug("thumb_connector_groups()")
    offset = params.innercol_offset
    cornerrow = params.cornerrow
    lastrow = params.lastrow

    def t(key, post):
        return PostRef(thumb_place(params, key), post)

    def k(column, row, post):
        return PostRef(KeyPlacement(params, column, row), post)

    groups = [
        # first two
        PostGroup("thumb connectors", (
            t(T1, thumb_post_tr()), t(T1, thumb_post_br()),
            t(T0, thumb_post_tl()), t(T0, thumb_post_bl()),
        )),
        # end two
        PostGroup("thumb connectors", (
            t(T3, web_post_tr()), t(T3, web_post_tl()),
            t(T2, web_post_br()), t(T2, web_post_bl()),
        )),
    ]

    # second thumb to the end two, one triangle at a time
    for triangle in (
            (t(T3, web_post_br()), t(T3, web_post_tr()), t(T1, thumb_post_bl())),
            (t(T1, thumb_post_bl()), t(T1, thumb_post_tl()), t(T3, web_post_tr())),
            (t(T1, thumb_post_tl()), t(T2, web_post_br()), t(T3, web_post_tr())),
            (t(T3, web_post_tr()), t(T2, web_post_br()), t(T2, web_post_tr())),
            (t(T2, web_post_br()), t(T2, web_post_tr()), t(T1, thumb_post_tl())),
            (t(T1, thumb_post_tl()), t(T2, web_post_tr()), t(T3, web_post_tr())),
    ):
        groups.append(PostGroup("thumb connectors", triangle))

    # top two to the main keyboard, starting on the left
    groups.append(PostGroup("thumb to matrix connectors", (
        t(T1, thumb_post_tl()),
        k(offset, cornerrow, web_post_bl()),
        t(T1, thumb_post_tr()),
        k(offset, cornerrow, web_post_br()),
        t(T0, thumb_post_tl()),
        k(offset + 1, cornerrow, web_post_bl()),
        t(T0, thumb_post_tr()),
        k(offset + 1, cornerrow, web_post_br()),
        k(offset + 2, lastrow, web_post_tl()),
        k(offset + 2, lastrow, web_post_bl()),
        t(T0, thumb_post_tr()),
    )))
    groups.append(PostGroup("thumb to matrix connectors", (
        t(T0, thumb_post_tr()),
        k(offset + 2, lastrow, web_post_bl()),
        t(T0, thumb_post_br()),
        k(offset + 2, lastrow, web_post_br()),
        k(offset + 3, lastrow, web_post_bl()),
        k(offset + 2, lastrow, web_post_tr()),
        k(offset + 3, lastrow, web_post_tl()),
        k(offset + 3, cornerrow, web_post_bl()),
        k(offset + 3, lastrow, web_post_tr()),
        k(offset + 3, cornerrow, web_post_br()),
    )))
    groups.append(PostGroup("thumb to matrix connectors", (
        k(offset + 1, cornerrow, web_post_br()),
        k(offset + 2, lastrow, web_post_tl()),
        k(offset + 2, cornerrow, web_post_bl()),
        k(offset + 2, lastrow, web_post_tr()),
        k(offset + 2, cornerrow, web_post_br()),
        k(offset + 3, cornerrow, web_post_bl()),
    )))

    if params.extra_row:
        groups.append(PostGroup("thumb to matrix connectors", (
            k(offset + 3, lastrow, web_post_tr()),
            k(offset + 3, lastrow, web_post_br()),
            k(offset + 4, lastrow, web_post_tl()),
            k(offset + 4, lastrow, web_post_bl()),
        )))
        groups.append(PostGroup("thumb to matrix connectors", (
            k(offset + 3, lastrow, web_post_tr()),
            k(offset + 3, cornerrow, web_post_br()),
            k(offset + 4, lastrow, web_post_tl()),
            k(offset + 4, cornerrow, web_post_bl()),
        )))
    else:
        groups.append(PostGroup("thumb to matrix connectors", (
            k(offset + 3, lastrow, web_post_tr()),
            k(offset + 3, lastrow, web_post_br()),
            k(offset + 4, cornerrow, web_post_bl()),
        )))
        groups.append(PostGroup("thumb to matrix connectors", (
            k(offset + 3, lastrow, web_post_tr()),
            k(offset + 3, cornerrow, web_post_br()),
            k(offset + 4, cornerrow, web_post_bl()),
        )))

    return groups


def inner_column_thumb_groups(params: ShapeParameters, wall_shift: Tuple[float, float, float]) -> List[PostGroup]:
    """
    Hulls filling the gap below the inner column, between it, the second
    column and the thumb cluster.

    wall_shift is the first wall offset pointing left, so the web meets the
    left wall.
    """
    if not params.inner_column:
        return []

    cornerrow = params.cornerrow

    def k(column, row, post, shift=(0.0, 0.0, 0.0)):
        return PostRef(KeyPlacement(params, column, row), post, shift)

    return [
        PostGroup("inner column to thumb", (
            k(0, cornerrow - 1, web_post_bl()),
            k(0, cornerrow - 1, web_post_br()),
            k(0, cornerrow, web_post_tr()),
        ), sliding=False),
        PostGroup("inner column to thumb", (
            k(0, cornerrow, web_post_tr()),
            k(1, cornerrow, web_post_tl()),
            k(1, cornerrow, web_post_bl()),
        ), sliding=False),
        PostGroup("inner column to thumb", (
            k(0, cornerrow - 1, web_post_bl()),
            k(0, cornerrow, web_post_tr()),
            k(1, cornerrow, web_post_bl()),
        ), sliding=False),
        PostGroup("inner column to thumb", (
            k(0, params.lastrow - params.innercol_offset - 1, web_post_bl(), wall_shift),
            k(0, cornerrow - 1, web_post_bl()),
            k(1, cornerrow, web_post_bl()),
            PostRef(thumb_place(params, T1), thumb_post_tl()),
        ), sliding=False),
    ]


def thumb_connectors(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("thumb_connectors()")
    return mesh(thumb_connector_groups(params), params, engine)


def thumb_stabilizer_cutouts(cutout, params: ShapeParameters, engine: GeometryEngine):
    return union_all(thumb_2x_layout(cutout, params, engine), engine)
