from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from numpy import ndarray

TGeometry = TypeVar("TGeometry")
TProfile = TypeVar("TProfile")

# z of the slab that bottom hulls reach down to; trimmed away at assembly
FLOOR_Z = -10.0


class GeometryExporter(ABC, Generic[TGeometry]):
    """
    A class that encapsulates the ability to export geometry.
    """

    @staticmethod
    @abstractmethod
    def file_type() -> str:
        """
        The file extension this exporter supports
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def export_geometry(shape: TGeometry, path: Path):
        """
        Export the given shape to path.
        """
        raise NotImplementedError


class GeometryEngine(ABC, Generic[TGeometry]):
    """
    Engine base class.

    Dimensions are in millimeters, rotations in degrees.
    Primitives are centered on the origin.
    All operations that manipulate shapes return copies; no in-place manipulation is performed.
    """

    @staticmethod
    @abstractmethod
    def box(width: float, height: float, depth: float) -> TGeometry:
        """
        Create a box with the given dimensions.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def cylinder(radius: float, height: float, segments: int = 30) -> TGeometry:
        """
        Create a cylinder along Z with the given dimensions.

        The number of segments may be provided, but this may be ignored on some engines.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def cone(radius_bottom: float, radius_top: float, height: float, segments: int = 30) -> TGeometry:
        """
        Create a cone along Z with the given radii and height.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def rotate(shape: TGeometry, euler_degrees: ndarray) -> TGeometry:
        """
        Rotate the shape about the origin by the given euler angles in degrees,
        X first, then Y, then Z, and return a copy.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def translate(shape: TGeometry, vector: ndarray) -> TGeometry:
        """
        Translate the given shape, and return a copy.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def mirror(shape: TGeometry, normal: ndarray) -> TGeometry:
        """
        Mirror the shape about the plane through the origin with the given normal, and return a copy
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def union(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        Create a new shape from the union of multiple other shapes
        It is an error to pass an empty collection.
        If `shapes` contains a single element, a copy is returned.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def difference(initial_shape: TGeometry, subtractions: Sequence[TGeometry]) -> TGeometry:
        """
        Create a new shape from the subtraction of multiple shapes from a starting shape.
        If `subtractions` is empty, a copy of `initial_shape` is returned.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def intersect(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        Create a new shape from the intersection of multiple shapes.
        It is an error to pass an empty collection.
        If `shapes` contains a single element, a copy is returned.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def convex_hull(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        Construct a convex hull from the collection of multiple shapes.
        It is an error to pass an empty collection.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def bottom_hull(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        Convex hull of the shapes together with their projection onto the floor at FLOOR_Z.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def polygon(points: Sequence[Sequence[float]]) -> TProfile:
        """
        A closed 2D profile in the XY plane through the given points.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def project(shape: TGeometry) -> TProfile:
        """
        The outline of the shape's footprint on the XY plane, filled.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def extrude(profile: TProfile, height: float) -> TGeometry:
        """
        Extrude a 2D profile from z=0 up to z=height.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def exporters() -> Iterable[GeometryExporter[TGeometry]]:
        """
        Get the exporters this engine supports.
        """
        raise NotImplementedError
