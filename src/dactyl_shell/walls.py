"""
Wall tracing.

The case wall is an explicit loop of WallSegments, walked clockwise seen from
above: back wall left to right, right wall top to bottom, front wall right to
left, around the thumb cluster, then up the left wall back to the start.
Every corner between sides is its own segment. wall_brace turns a segment into
a sloped panel that reaches down to the floor.
"""
import dataclasses
import logging
from typing import List, Sequence, Tuple

import numpy as np

from .engines.engine import GeometryEngine
from .errors import ConfigurationError
from .mesh import TOLERANCE, PostRef, check_hull_points, mesh, union_all
from .parameters import ShapeParameters
from .placement import KeyPlacement, Placement
from .posts import (
    CornerPost, thumb_post_bl, thumb_post_br, thumb_post_tl,
    web_post_bl, web_post_br, web_post_tl, web_post_tr,
)
from .predicates import pinky_15u_active
from .thumb import T0, T1, T2, T3, inner_column_thumb_groups, thumb_place

BRACE = "brace"
# hull from one end down to the floor, joining a side that braces cannot reach
BRIDGE = "bridge"


def wall_locate1(dx: float, dy: float, params: ShapeParameters) -> Tuple[float, float, float]:
    return (dx * params.wall_thickness, dy * params.wall_thickness, 0.0)


def wall_locate2(dx: float, dy: float, params: ShapeParameters) -> Tuple[float, float, float]:
    return (dx * params.wall_xy_offset, dy * params.wall_xy_offset, params.wall_z_offset)


def wall_locate3(dx: float, dy: float, params: ShapeParameters) -> Tuple[float, float, float]:
    return (
        dx * (params.wall_xy_offset + params.wall_thickness),
        dy * (params.wall_xy_offset + params.wall_thickness),
        params.wall_z_offset,
    )


@dataclasses.dataclass(frozen=True)
class WallEnd:
    """
    One end of a wall segment: a post, and the outward direction the wall leaves it in.
    """
    placement: Placement
    dx: float
    dy: float
    post: CornerPost

    def post_ref(self, shift=(0.0, 0.0, 0.0)) -> PostRef:
        return PostRef(self.placement, self.post, tuple(float(v) for v in shift))

    def lips(self, params: ShapeParameters) -> List[PostRef]:
        """
        The inward lip, the tapered lip and the full thickness lip.
        """
        return [
            self.post_ref(wall_locate1(self.dx, self.dy, params)),
            self.post_ref(wall_locate2(self.dx, self.dy, params)),
            self.post_ref(wall_locate3(self.dx, self.dy, params)),
        ]

    def position(self, params: ShapeParameters) -> np.ndarray:
        return self.post_ref().position(params)


@dataclasses.dataclass(frozen=True)
class WallSegment:
    side: str
    start: WallEnd
    end: WallEnd
    kind: str = BRACE

    def hull_refs(self, params: ShapeParameters) -> List[PostRef]:
        if self.kind == BRIDGE:
            return [self.start.post_ref(), *self.start.lips(params), *self.end.lips(params)]
        return [self.start.post_ref(), *self.start.lips(params), self.end.post_ref(), *self.end.lips(params)]

    def floor_refs(self, params: ShapeParameters) -> List[PostRef]:
        return [*self.start.lips(params)[1:], *self.end.lips(params)[1:]]


def wall_brace(segment: WallSegment, params: ShapeParameters, engine: GeometryEngine):
    """
    A sloped wall panel between the two ends of segment, closed down to the floor.
    """
    logging.debug("wall_brace()")
    component = "wall tracer ({} wall)".format(segment.side)
    hull_refs = segment.hull_refs(params)
    check_hull_points([ref.position(params) for ref in hull_refs], component)

    if segment.kind == BRIDGE:
        return engine.bottom_hull([ref.shape(params, engine) for ref in hull_refs])

    panel = engine.convex_hull([ref.shape(params, engine) for ref in hull_refs])
    floor = engine.bottom_hull([ref.shape(params, engine) for ref in segment.floor_refs(params)])
    return engine.union([panel, floor])


def _key_end(params: ShapeParameters, column: int, row: int, dx: float, dy: float, post: CornerPost) -> WallEnd:
    return WallEnd(KeyPlacement(params, column, row), dx, dy, post)


def _thumb_end(params: ShapeParameters, key, dx: float, dy: float, post: CornerPost) -> WallEnd:
    return WallEnd(thumb_place(params, key), dx, dy, post)


def back_wall(params: ShapeParameters) -> List[WallSegment]:
    logging.debug("back_wall()")
    segments = []
    for x in range(params.ncols):
        if x > 0:
            segments.append(WallSegment(
                "back",
                _key_end(params, x - 1, 0, 0, 1, web_post_tr()),
                _key_end(params, x, 0, 0, 1, web_post_tl()),
            ))
        segments.append(WallSegment(
            "back",
            _key_end(params, x, 0, 0, 1, web_post_tl()),
            _key_end(params, x, 0, 0, 1, web_post_tr()),
        ))
    return segments


def _uniform_right_wall(params: ShapeParameters) -> List[WallSegment]:
    lastcol = params.lastcol
    corner = params.extra_cornerrow

    def k(row, dx, dy, post):
        return _key_end(params, lastcol, row, dx, dy, post)

    segments = [WallSegment("back right corner", k(0, 0, 1, web_post_tr()), k(0, 1, 0, web_post_tr()))]
    for y in range(0, corner + 1):
        if y > 0:
            segments.append(WallSegment("right", k(y - 1, 1, 0, web_post_br()), k(y, 1, 0, web_post_tr())))
        segments.append(WallSegment("right", k(y, 1, 0, web_post_tr()), k(y, 1, 0, web_post_br())))
    segments.append(WallSegment("front right corner", k(corner, 1, 0, web_post_br()), k(corner, 0, -1, web_post_br())))
    return segments


def _pinky_right_wall(params: ShapeParameters) -> List[WallSegment]:
    lastcol = params.lastcol
    corner = params.extra_cornerrow
    first = params.first_15u_row
    last = params.last_15u_row

    def k(row, dx, dy, post):
        return _key_end(params, lastcol, row, dx, dy, post)

    wide_tr = web_post_tr(wide=True)
    wide_br = web_post_br(wide=True)

    segments = []
    if first > 0:
        segments.append(WallSegment("back right corner", k(0, 0, 1, web_post_tr()), k(0, 1, 0, web_post_tr())))
    else:
        segments.append(WallSegment("back right corner", k(0, 0, 1, web_post_tr()), k(0, 0, 1, wide_tr)))
        segments.append(WallSegment("back right corner", k(0, 0, 1, wide_tr), k(0, 1, 0, wide_tr)))

    # 1u keys above the 1.5u range
    for y in range(0, first - 1):
        segments.append(WallSegment("right", k(y, 1, 0, web_post_tr()), k(y, 1, 0, web_post_br())))
        segments.append(WallSegment("right", k(y, 1, 0, web_post_br()), k(y + 1, 1, 0, web_post_tr())))
    if first >= 1:
        segments.append(WallSegment("right", k(first - 1, 1, 0, web_post_tr()), k(first, 1, 0, wide_tr)))

    for y in range(first, last + 1):
        segments.append(WallSegment("right", k(y, 1, 0, wide_tr), k(y, 1, 0, wide_br)))
        if y < last:
            segments.append(WallSegment("right", k(y, 1, 0, wide_br), k(y + 1, 1, 0, wide_tr)))

    # 1u keys below the 1.5u range
    if last < corner:
        segments.append(WallSegment("right", k(last, 1, 0, wide_br), k(last + 1, 1, 0, web_post_br())))
    for y in range(last + 1, corner):
        segments.append(WallSegment("right", k(y, 1, 0, web_post_br()), k(y + 1, 1, 0, web_post_tr())))
        segments.append(WallSegment("right", k(y + 1, 1, 0, web_post_tr()), k(y + 1, 1, 0, web_post_br())))

    if last == corner:
        segments.append(WallSegment("front right corner", k(corner, 1, 0, wide_br), k(corner, 0, -1, wide_br)))
        segments.append(WallSegment("front right corner", k(corner, 0, -1, wide_br), k(corner, 0, -1, web_post_br())))
    else:
        segments.append(WallSegment("front right corner", k(corner, 1, 0, web_post_br()), k(corner, 0, -1, web_post_br())))

    return segments


def right_wall(params: ShapeParameters) -> List[WallSegment]:
    """
    The right wall, including its corners with the back and front walls.
    """
    logging.debug("right_wall()")
    if pinky_15u_active(params):
        return _pinky_right_wall(params)
    return _uniform_right_wall(params)


def front_wall(params: ShapeParameters) -> List[WallSegment]:
    logging.debug("front_wall()")
    offset = params.innercol_offset
    corner = params.extra_cornerrow
    lastrow = params.lastrow

    if params.lastcol < offset + 4:
        raise ConfigurationError(
            "wall tracer: empty perimeter range between sides front and thumb "
            "(needs at least {} columns, got {})".format(offset + 5, params.ncols)
        )

    segments = []
    for x in range(params.lastcol, offset + 3, -1):
        segments.append(WallSegment(
            "front",
            _key_end(params, x, corner, 0, -1, web_post_br()),
            _key_end(params, x, corner, 0, -1, web_post_bl()),
        ))
        if x > offset + 4:
            segments.append(WallSegment(
                "front",
                _key_end(params, x, corner, 0, -1, web_post_bl()),
                _key_end(params, x - 1, corner, 0, -1, web_post_br()),
            ))

    segments.append(WallSegment(
        "front",
        _key_end(params, offset + 4, corner, 0, -1, web_post_bl()),
        _key_end(params, offset + 3, lastrow, 0, -1, web_post_br()),
    ))
    segments.append(WallSegment(
        "front",
        _key_end(params, offset + 3, lastrow, 0, -1, web_post_br()),
        _key_end(params, offset + 3, lastrow, 0, -1, web_post_bl()),
    ))
    return segments


def thumb_wall(params: ShapeParameters) -> List[WallSegment]:
    """
    Around the thumb cluster clockwise, from the front wall to the left wall.
    """
    logging.debug("thumb_wall()")

    def t(key, dx, dy, post):
        return _thumb_end(params, key, dx, dy, post)

    offset = params.innercol_offset
    return [
        WallSegment("thumb", _key_end(params, offset + 3, params.lastrow, 0, -1, web_post_bl()), t(T0, 0, -1, thumb_post_br())),
        WallSegment("thumb", t(T0, 0, -1, thumb_post_br()), t(T0, 0, -1, thumb_post_bl())),
        WallSegment("thumb", t(T0, 0, -1, thumb_post_bl()), t(T1, 0, -1, thumb_post_br())),
        WallSegment("thumb", t(T1, 0, -1, thumb_post_br()), t(T1, 0, -1, thumb_post_bl())),
        WallSegment("thumb", t(T1, 0, -1, thumb_post_bl()), t(T3, 0, -1, web_post_br())),
        WallSegment("thumb", t(T3, 0, -1, web_post_br()), t(T3, 0, -1, web_post_bl())),
        WallSegment("thumb corner", t(T3, 0, -1, web_post_bl()), t(T3, -1, 0, web_post_bl())),
        WallSegment("thumb", t(T3, -1, 0, web_post_bl()), t(T3, -1, 0, web_post_tl())),
        WallSegment("thumb", t(T3, -1, 0, web_post_tl()), t(T2, -1, 0, web_post_bl())),
        WallSegment("thumb", t(T2, -1, 0, web_post_bl()), t(T2, -1, 0, web_post_tl())),
        WallSegment("thumb corner", t(T2, -1, 0, web_post_tl()), t(T2, 0, 1, web_post_tl())),
        WallSegment("thumb", t(T2, 0, 1, web_post_tl()), t(T2, 0, 1, web_post_tr())),
        WallSegment("thumb", t(T2, 0, 1, web_post_tr()), t(T1, -1, 0, thumb_post_tl())),
        WallSegment(
            "thumb to left",
            t(T1, -1, 0, thumb_post_tl()),
            _key_end(params, 0, left_wall_lastrow(params), -1, 0, web_post_bl()),
            kind=BRIDGE,
        ),
    ]


def left_wall_lastrow(params: ShapeParameters) -> int:
    """
    The lowest row the left wall reaches; shorter when the inner column is present.
    """
    return params.lastrow - params.innercol_offset - 1


def left_wall(params: ShapeParameters) -> List[WallSegment]:
    logging.debug("left_wall()")
    segments = []
    for y in range(left_wall_lastrow(params), -1, -1):
        segments.append(WallSegment(
            "left",
            _key_end(params, 0, y, -1, 0, web_post_bl()),
            _key_end(params, 0, y, -1, 0, web_post_tl()),
        ))
        if y > 0:
            segments.append(WallSegment(
                "left",
                _key_end(params, 0, y, -1, 0, web_post_tl()),
                _key_end(params, 0, y - 1, -1, 0, web_post_bl()),
            ))
    segments.append(WallSegment(
        "back left corner",
        _key_end(params, 0, 0, -1, 0, web_post_tl()),
        _key_end(params, 0, 0, 0, 1, web_post_tl()),
    ))
    return segments


def perimeter(params: ShapeParameters) -> List[WallSegment]:
    """
    The whole wall loop, in order.
    """
    return back_wall(params) + right_wall(params) + front_wall(params) + thumb_wall(params) + left_wall(params)


def perimeter_gaps(segments: Sequence[WallSegment], params: ShapeParameters, tolerance: float = TOLERANCE) -> List[int]:
    """
    Indices of segments whose end is not where the next segment starts.
    """
    gaps = []
    for i, segment in enumerate(segments):
        following = segments[(i + 1) % len(segments)]
        same_post = np.allclose(segment.end.position(params), following.start.position(params), atol=tolerance)
        same_direction = (segment.end.dx, segment.end.dy) == (following.start.dx, following.start.dy)
        if not (same_post and same_direction):
            gaps.append(i)
    return gaps


def perimeter_closed(segments: Sequence[WallSegment], params: ShapeParameters, tolerance: float = TOLERANCE) -> bool:
    return bool(segments) and not perimeter_gaps(segments, params, tolerance)


def case_walls(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("case_walls()")
    segments = perimeter(params)
    gaps = perimeter_gaps(segments, params)
    if gaps:
        first = segments[gaps[0]]
        raise ConfigurationError(
            "wall tracer: perimeter is open between sides {} and {}".format(
                first.side, segments[(gaps[0] + 1) % len(segments)].side
            )
        )

    braces = [wall_brace(segment, params, engine) for segment in segments]
    inner = mesh(inner_column_thumb_groups(params, wall_locate1(-1, 0, params)), params, engine)
    return union_all([*braces, inner], engine)
