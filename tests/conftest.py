from collections.abc import Iterable, Sequence
from pathlib import Path

import numpy as np
import pytest
from scipy.spatial import ConvexHull

from dactyl_shell.engines.engine import FLOOR_Z, GeometryEngine, GeometryExporter
from dactyl_shell.parameters import ShapeParameters
from dactyl_shell.placement import rotate_around_x, rotate_around_y, rotate_around_z


def _points(shape) -> np.ndarray:
    return np.asarray(shape, dtype=float).reshape(-1, 3)


class _PointCloudExporter(GeometryExporter[np.ndarray]):

    @staticmethod
    def file_type() -> str:
        return ".xyz"

    @staticmethod
    def export_geometry(shape: np.ndarray, path: Path):
        np.savetxt(path, _points(shape))


class VertexEngine(GeometryEngine[np.ndarray]):
    """
    A stand-in engine where a shape is just its (N, 3) vertex cloud.

    Placement, hulls and bounds behave like a real engine; boolean
    subtraction is ignored.
    """

    @staticmethod
    def box(width: float, height: float, depth: float) -> np.ndarray:
        return np.array([
            [sx * width / 2, sy * height / 2, sz * depth / 2]
            for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)
        ])

    @staticmethod
    def cylinder(radius: float, height: float, segments: int = 30) -> np.ndarray:
        return VertexEngine.cone(radius, radius, height, segments)

    @staticmethod
    def cone(radius_bottom: float, radius_top: float, height: float, segments: int = 30) -> np.ndarray:
        angles = np.linspace(0, 2 * np.pi, segments, endpoint=False)
        rings = []
        for radius, z in ((radius_bottom, -height / 2), (radius_top, height / 2)):
            rings.append(np.column_stack([radius * np.cos(angles), radius * np.sin(angles), np.full(segments, z)]))
        return np.vstack(rings)

    @staticmethod
    def rotate(shape, euler_degrees) -> np.ndarray:
        points = _points(shape).T
        points = rotate_around_x(points, np.radians(euler_degrees[0]))
        points = rotate_around_y(points, np.radians(euler_degrees[1]))
        points = rotate_around_z(points, np.radians(euler_degrees[2]))
        return points.T

    @staticmethod
    def translate(shape, vector) -> np.ndarray:
        return _points(shape) + np.asarray(vector, dtype=float)

    @staticmethod
    def mirror(shape, normal) -> np.ndarray:
        points = _points(shape)
        normal = np.asarray(normal, dtype=float)
        normal = normal / np.linalg.norm(normal)
        return points - 2 * np.outer(points @ normal, normal)

    @staticmethod
    def union(shapes: Sequence) -> np.ndarray:
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")
        return np.vstack([_points(shape) for shape in shapes])

    @staticmethod
    def difference(initial_shape, subtractions: Sequence) -> np.ndarray:
        return _points(initial_shape).copy()

    @staticmethod
    def intersect(shapes: Sequence) -> np.ndarray:
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")
        return _points(shapes[0]).copy()

    @staticmethod
    def convex_hull(shapes: Sequence) -> np.ndarray:
        points = VertexEngine.union(shapes)
        return points[ConvexHull(points).vertices]

    @staticmethod
    def bottom_hull(shapes: Sequence) -> np.ndarray:
        points = VertexEngine.union(shapes)
        floor = points.copy()
        floor[:, 2] = FLOOR_Z
        points = np.vstack([points, floor])
        return points[ConvexHull(points).vertices]

    @staticmethod
    def polygon(points) -> np.ndarray:
        points = np.asarray(points, dtype=float)
        return np.column_stack([points, np.zeros(len(points))])

    @staticmethod
    def project(shape) -> np.ndarray:
        flat = _points(shape)[:, :2]
        return VertexEngine.polygon(flat[ConvexHull(flat).vertices])

    @staticmethod
    def extrude(profile, height: float) -> np.ndarray:
        profile = _points(profile)
        return np.vstack([profile, profile + np.array([0, 0, height])])

    @staticmethod
    def exporters() -> Iterable[GeometryExporter[np.ndarray]]:
        return [_PointCloudExporter()]


@pytest.fixture
def engine():
    return VertexEngine()


@pytest.fixture
def params():
    return ShapeParameters()
