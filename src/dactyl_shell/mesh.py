"""
Hull meshing over placed corner posts.

Connectors and thumb webbing are described as PostGroups first and only then
turned into solids, so the point sets going into every hull can be checked
(and tested) without building any geometry.
"""
import dataclasses
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional, Tuple

import numpy as np

from .engines.engine import GeometryEngine
from .errors import ConfigurationError
from .parameters import ShapeParameters
from .placement import Placement
from .posts import CornerPost

# points closer than this are the same point
TOLERANCE = 1e-6


@dataclasses.dataclass(frozen=True)
class PostRef:
    """
    A corner post of a particular mount.
    """
    placement: Placement
    post: CornerPost
    # moves the post in the mount's local frame before it is placed
    shift: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def position(self, params: ShapeParameters) -> np.ndarray:
        return self.placement.position(self.post.center(params) + np.asarray(self.shift, dtype=float))

    def shape(self, params: ShapeParameters, engine: GeometryEngine):
        post = self.post.shape(params, engine)
        if any(self.shift):
            post = engine.translate(post, self.shift)
        return self.placement.place(post, engine)


@dataclasses.dataclass(frozen=True)
class PostGroup:
    """
    Posts to be hulled together.

    A sliding group hulls every run of three consecutive posts, the way a
    triangle strip is built; otherwise all posts go into one hull.
    """
    component: str
    refs: Tuple[PostRef, ...]
    sliding: bool = True

    def windows(self) -> Iterator[Tuple[PostRef, ...]]:
        if not self.sliding:
            yield self.refs
            return
        for i in range(len(self.refs) - 2):
            yield self.refs[i: i + 3]


def check_hull_points(points: Sequence[np.ndarray], component: str):
    """
    Raise ConfigurationError unless points span at least a triangle.
    """
    if len(points) < 3:
        raise ConfigurationError("{}: hull needs at least 3 points, got {}".format(component, len(points)))

    spread = np.asarray(points, dtype=float) - points[0]
    if np.linalg.matrix_rank(spread, tol=TOLERANCE) < 2:
        raise ConfigurationError("{}: hull points are collinear".format(component))


def hull_posts(refs: Sequence[PostRef], component: str, params: ShapeParameters, engine: GeometryEngine):
    check_hull_points([ref.position(params) for ref in refs], component)
    return engine.convex_hull([ref.shape(params, engine) for ref in refs])


def mesh(groups: Iterable[PostGroup], params: ShapeParameters, engine: GeometryEngine):
    """
    Solid webbing for the groups, or None when there is nothing to build.
    """
    logging.debug("mesh()")
    hulls = []
    for group in groups:
        for window in group.windows():
            hulls.append(hull_posts(window, group.component, params, engine))

    return union_all(hulls, engine)


def union_all(shapes: Iterable, engine: GeometryEngine) -> Optional[object]:
    """
    Union of the shapes that exist; None if there are none.
    """
    shapes = [shape for shape in shapes if shape is not None]
    if not shapes:
        return None
    return engine.union(shapes)
