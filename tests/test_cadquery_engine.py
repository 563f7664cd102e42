import pytest

cadquery = pytest.importorskip("cadquery")

from dactyl_shell.engines.cadquery_engine import CadQueryEngine  # noqa: E402
from dactyl_shell.engines.engine import FLOOR_Z  # noqa: E402


@pytest.fixture
def cq_engine():
    return CadQueryEngine()


def _bounds(shape):
    box = shape.BoundingBox()
    return (box.xmin, box.ymin, box.zmin), (box.xmax, box.ymax, box.zmax)


def test_primitives_are_centered(cq_engine):
    low, high = _bounds(cq_engine.box(2, 4, 6))
    assert low == pytest.approx((-1, -2, -3), abs=1e-6)
    assert high == pytest.approx((1, 2, 3), abs=1e-6)

    low, high = _bounds(cq_engine.cylinder(1, 4))
    assert low[2] == pytest.approx(-2, abs=1e-6)
    assert high[2] == pytest.approx(2, abs=1e-6)


def test_rotate_and_translate(cq_engine):
    shape = cq_engine.rotate(cq_engine.box(2, 4, 6), (0, 0, 90))
    shape = cq_engine.translate(shape, (10, 0, 0))
    low, high = _bounds(shape)
    assert low == pytest.approx((8, -1, -3), abs=1e-6)
    assert high == pytest.approx((12, 1, 3), abs=1e-6)


def test_convex_hull(cq_engine):
    first = cq_engine.box(1, 1, 1)
    second = cq_engine.translate(cq_engine.box(1, 1, 1), (4, 0, 0))
    hull = cq_engine.convex_hull([first, second])
    assert abs(hull.Volume()) == pytest.approx(5.0)


def test_bottom_hull_reaches_floor(cq_engine):
    shape = cq_engine.translate(cq_engine.box(1, 1, 1), (0, 0, 5))
    low, high = _bounds(cq_engine.bottom_hull([shape]))
    assert low[2] == pytest.approx(FLOOR_Z, abs=1e-6)
    assert high[2] == pytest.approx(5.5, abs=1e-6)


def test_difference(cq_engine):
    shape = cq_engine.difference(cq_engine.box(4, 4, 4), [cq_engine.box(2, 2, 10)])
    assert shape.Volume() == pytest.approx(64 - 16)


def test_project_and_extrude(cq_engine):
    shape = cq_engine.translate(cq_engine.box(10, 6, 2), (0, 0, 1))
    plate = cq_engine.extrude(cq_engine.project(shape), 3)
    low, high = _bounds(plate)
    assert low == pytest.approx((-5, -3, 0), abs=1e-6)
    assert high == pytest.approx((5, 3, 3), abs=1e-6)


def test_polygon_extrusion(cq_engine):
    profile = cq_engine.polygon([(0, 0), (4, 0), (4, 3)])
    assert cq_engine.extrude(profile, 2).Volume() == pytest.approx(12)


def test_exporters(cq_engine, tmp_path):
    shape = cq_engine.box(1, 1, 1)
    for exporter in cq_engine.exporters():
        path = tmp_path / ("box" + exporter.file_type())
        exporter.export_geometry(shape, path)
        assert path.stat().st_size > 0


def test_intersect(cq_engine):
    moved = cq_engine.translate(cq_engine.box(4, 4, 4), (2, 0, 0))
    shape = cq_engine.intersect([cq_engine.box(4, 4, 4), moved])
    assert shape.Volume() == pytest.approx(32)
