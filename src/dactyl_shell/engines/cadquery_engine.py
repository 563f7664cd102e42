from functools import reduce
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from cadquery import Edge, Face, Shape, Shell, Solid, Vector, Wire, Workplane, exporters
from scipy.spatial import ConvexHull as sphull
from numpy import ndarray

from .engine import FLOOR_Z, GeometryEngine, GeometryExporter

# height of the slice taken through the walls to find the footprint
PROJECTION_HEIGHT = 0.5


class _CadQueryStepExporter(GeometryExporter[Shape]):
    """
    Exporter for cadquery that can export STEP files
    """

    @staticmethod
    def file_type() -> str:
        return ".step"

    @staticmethod
    def export_geometry(shape: Shape, path: Path):
        logging.info("Exporting to %s", path)
        exporters.export(shape, str(path), exportType=exporters.ExportTypes.STEP)


class _CadQueryStlExporter(GeometryExporter[Shape]):
    """
    Exporter for cadquery that can export STL meshes
    """

    @staticmethod
    def file_type() -> str:
        return ".stl"

    @staticmethod
    def export_geometry(shape: Shape, path: Path):
        logging.info("Exporting to %s", path)
        exporters.export(shape, str(path), exportType=exporters.ExportTypes.STL)


class CadQueryEngine(GeometryEngine[Shape]):
    """
    CadQuery geometry engine
    """

    @staticmethod
    def box(width: float, height: float, depth: float) -> Shape:
        return Solid.makeBox(width, height, depth, pnt=Vector(-width / 2, -height / 2, -depth / 2))

    @staticmethod
    def cylinder(radius: float, height: float, _segments: int = 30) -> Shape:
        return Solid.makeCylinder(radius, height, pnt=Vector(0, 0, -height / 2))

    @staticmethod
    def cone(radius_bottom: float, radius_top: float, height: float, _segments: int = 30) -> Shape:
        return Solid.makeCone(radius_bottom, radius_top, height, pnt=Vector(0, 0, -height / 2))

    @staticmethod
    def rotate(shape: Shape, euler_degrees: ndarray) -> Shape:
        origin = (0, 0, 0)
        shape = shape.rotate(startVector=origin, endVector=(1, 0, 0), angleDegrees=euler_degrees[0])
        shape = shape.rotate(startVector=origin, endVector=(0, 1, 0), angleDegrees=euler_degrees[1])
        shape = shape.rotate(startVector=origin, endVector=(0, 0, 1), angleDegrees=euler_degrees[2])
        return shape

    @staticmethod
    def translate(shape: Shape, vector: ndarray) -> Shape:
        return shape.translate(Vector(*(float(v) for v in vector)))

    @staticmethod
    def mirror(shape: Shape, normal: ndarray) -> Shape:
        return shape.mirror(tuple(float(v) for v in normal))

    @staticmethod
    def union(shapes: Sequence[Shape]) -> Shape:
        logging.debug("union()")
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")

        if len(shapes) == 1:
            return shapes[0].copy()
        return reduce(lambda x, y: x.fuse(y), shapes)

    @staticmethod
    def difference(initial_shape: Shape, subtractions: Sequence[Shape]) -> Shape:
        logging.debug("difference()")
        subtractions = list(subtractions)
        if not subtractions:
            return initial_shape.copy()
        return reduce(lambda initial, to_remove: initial.cut(to_remove), subtractions, initial_shape)

    @staticmethod
    def intersect(shapes: Sequence[Shape]) -> Shape:
        logging.debug("intersect()")
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")

        if len(shapes) == 1:
            return shapes[0].copy()
        return reduce(lambda x, y: x.intersect(y), shapes)

    @staticmethod
    def convex_hull(shapes: Sequence[Shape]) -> Shape:
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")

        vertices = []
        for shape in shapes:
            vertices.extend(v.toTuple() for v in shape.Vertices())

        return CadQueryEngine._hull_from_points(vertices)

    @staticmethod
    def bottom_hull(shapes: Sequence[Shape]) -> Shape:
        logging.debug("bottom_hull()")
        shapes = list(shapes)
        if not shapes:
            raise ValueError("shapes cannot be empty")

        vertices = []
        for shape in shapes:
            for vert in shape.Vertices():
                x, y, z = vert.toTuple()
                vertices.append((x, y, z))
                vertices.append((x, y, FLOOR_Z))

        return CadQueryEngine._hull_from_points(vertices)

    @staticmethod
    def _face_from_points(points):
        edges = []
        num_pnts = len(points)
        for i in range(len(points)):
            p1 = points[i]
            p2 = points[(i + 1) % num_pnts]
            edges.append(Edge.makeLine(Vector(*p1), Vector(*p2)))

        return Face.makeFromWires(Wire.assembleEdges(edges))

    @staticmethod
    def _hull_from_points(points):
        hull_calc = sphull(points)

        faces = []
        for face_items in hull_calc.simplices:
            faces.append(CadQueryEngine._face_from_points([points[item] for item in face_items]))

        return Solid.makeSolid(Shell.makeShell(faces))

    @staticmethod
    def polygon(points: Sequence[Sequence[float]]) -> Face:
        vectors = [Vector(float(x), float(y), 0) for x, y in points]
        return Face.makeFromWires(Wire.makePolygon(vectors + [vectors[0]]))

    @staticmethod
    def project(shape: Shape) -> Face:
        logging.debug("project()")
        section = Workplane("XY").add(shape).section(PROJECTION_HEIGHT)
        faces = section.faces().vals()
        if not faces:
            raise ValueError("shape does not reach the floor")

        # the largest outline is the outside of the walls; anything inside it is filled
        outline = max(faces, key=lambda face: face.Area())
        face = Face.makeFromWires(outline.outerWire())
        return face.translate(Vector(0, 0, -PROJECTION_HEIGHT))

    @staticmethod
    def extrude(profile: Face, height: float) -> Shape:
        return Solid.extrudeLinear(profile.outerWire(), profile.innerWires(), Vector(0, 0, height))

    @staticmethod
    def exporters() -> Iterable[GeometryExporter[Shape]]:
        return [_CadQueryStepExporter(), _CadQueryStlExporter()]
