"""
Corner posts: the thin reference posts at the corners of a key mount that
connectors and walls are hulled between.
"""
import dataclasses
import enum
import logging

import numpy as np

from .engines.engine import GeometryEngine
from .parameters import ShapeParameters

STANDARD_DIVISOR = 2.0
# 1.5u mounts on the outer column
WIDE_DIVISOR = 1.2
# the long side of 2u thumb mounts
THUMB_DIVISOR = 0.9


class Corner(enum.Enum):
    TL = (-1, 1)
    TR = (1, 1)
    BL = (-1, -1)
    BR = (1, -1)

    @property
    def sx(self) -> int:
        return self.value[0]

    @property
    def sy(self) -> int:
        return self.value[1]


@dataclasses.dataclass(frozen=True)
class CornerPost:
    corner: Corner
    width_divisor: float = STANDARD_DIVISOR
    height_divisor: float = STANDARD_DIVISOR

    def offset(self, params: ShapeParameters) -> np.ndarray:
        """
        Offset of the post from the key's local origin.
        """
        post_adj = params.post_adj
        return np.array([
            self.corner.sx * (params.mount_width / self.width_divisor - post_adj),
            self.corner.sy * (params.mount_height / self.height_divisor - post_adj),
            0.0,
        ])

    def center(self, params: ShapeParameters) -> np.ndarray:
        """
        The post's center in the key's local frame.
        """
        return self.offset(params) + np.array([0, 0, post_z(params)])

    def shape(self, params: ShapeParameters, engine: GeometryEngine):
        return engine.translate(web_post(params, engine), self.offset(params))


def post_z(params: ShapeParameters) -> float:
    return params.plate_thickness - (params.web_thickness / 2)


def web_post(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("web_post()")
    post = engine.box(params.post_size, params.post_size, params.web_thickness)
    post = engine.translate(post, (0, 0, post_z(params)))
    return post


def web_post_tr(wide=False) -> CornerPost:
    return CornerPost(Corner.TR, WIDE_DIVISOR if wide else STANDARD_DIVISOR)


def web_post_tl(wide=False) -> CornerPost:
    return CornerPost(Corner.TL, WIDE_DIVISOR if wide else STANDARD_DIVISOR)


def web_post_bl(wide=False) -> CornerPost:
    return CornerPost(Corner.BL, WIDE_DIVISOR if wide else STANDARD_DIVISOR)


def web_post_br(wide=False) -> CornerPost:
    return CornerPost(Corner.BR, WIDE_DIVISOR if wide else STANDARD_DIVISOR)


def thumb_post_tr() -> CornerPost:
    return CornerPost(Corner.TR, STANDARD_DIVISOR, THUMB_DIVISOR)


def thumb_post_tl() -> CornerPost:
    return CornerPost(Corner.TL, STANDARD_DIVISOR, THUMB_DIVISOR)


def thumb_post_bl() -> CornerPost:
    return CornerPost(Corner.BL, STANDARD_DIVISOR, THUMB_DIVISOR)


def thumb_post_br() -> CornerPost:
    return CornerPost(Corner.BR, STANDARD_DIVISOR, THUMB_DIVISOR)
