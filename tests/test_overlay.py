# Copyright (c) 2022 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Test overlay engines and shapely conversion."""

from types import SimpleNamespace

import pytest
import shapely
from shapely import geometry as sg

from featuregrid.geo import (
    NullOverlayEngine,
    OverlayError,
    ShapelyOverlayEngine,
    default_overlay_engine,
    from_shapely,
    rectangle,
    to_shapely
)
from featuregrid.geometry import Bounds, Geometry, LineString, MultiGeometry, Point, Polygon, Ring


def test_rectangle():
    """Test the closed four-vertex rectangle of some bounds."""
    rect = rectangle(Bounds(0, 1, 2, 3))
    assert isinstance(rect, Polygon)
    assert rect.vertices.tolist() == [[0, 1], [2, 1], [2, 3], [0, 3]]
    assert rect.is_valid()
    assert to_shapely(rect).area == 4


def test_to_shapely_types():
    """Test conversion of each native geometry type to shapely."""
    assert isinstance(to_shapely(Point([(1, 2)])), sg.Point)
    assert isinstance(to_shapely(Point([(1, 2), (3, 4)])), sg.MultiPoint)
    assert isinstance(to_shapely(LineString([(0, 0), (1, 1)])), sg.LineString)
    assert isinstance(to_shapely(Ring([(0, 0), (1, 0), (1, 1)])), sg.LinearRing)
    poly = to_shapely(Polygon(
        [(0, 0), (4, 0), (4, 4), (0, 4)],
        holes=[[(1, 1), (2, 1), (2, 2), (1, 2)]]
    ))
    assert isinstance(poly, sg.Polygon)
    assert poly.area == 15
    multi = to_shapely(MultiGeometry([
        Polygon([(0, 0), (1, 0), (1, 1)]),
        Polygon([(2, 2), (3, 2), (3, 3)])
    ]))
    assert isinstance(multi, sg.MultiPolygon)


def test_from_shapely_types():
    """Test conversion of shapely geometries back to native form."""
    assert from_shapely(sg.Polygon()) is None
    assert from_shapely(None) is None
    poly = from_shapely(sg.box(0, 0, 2, 2).difference(sg.box(0.5, 0.5, 1, 1)))
    assert isinstance(poly, Polygon)
    assert len(poly.holes) == 1
    assert poly.bounds() == Bounds(0, 0, 2, 2)
    multi = from_shapely(sg.MultiLineString([[(0, 0), (1, 1)], [(2, 2), (3, 3)]]))
    assert isinstance(multi, MultiGeometry)
    assert all(isinstance(part, LineString) for part in multi.parts)
    single = from_shapely(sg.MultiPoint([(1, 1)]))
    assert isinstance(single, Point)


def test_from_shapely_keeps_z():
    """Test that z values survive conversion."""
    line = from_shapely(sg.LineString([(0, 0, 5), (1, 1, 6)]))
    assert line.vertices.shape == (2, 3)
    assert line.vertices[:, 2].tolist() == [5, 6]


def test_shapely_engine_intersection():
    """Test a full import, intersect, export cycle."""
    engine = default_overlay_engine()
    assert isinstance(engine, ShapelyOverlayEngine)
    assert engine.available
    assert engine.version == shapely.geos_version_string
    a = engine.import_geometry(Polygon([(0, 0), (10, 0), (10, 10), (0, 10)]))
    b = engine.import_geometry(rectangle(Bounds(5, 5, 20, 20)))
    result = engine.export_geometry(engine.intersection(a, b))
    assert isinstance(result, Polygon)
    assert result.bounds() == Bounds(5, 5, 10, 10)
    engine.dispose(a, b)


def test_shapely_engine_disjoint_is_empty():
    """Test that disjoint inputs export to nothing."""
    engine = ShapelyOverlayEngine()
    a = engine.import_geometry(rectangle(Bounds(0, 0, 1, 1)))
    b = engine.import_geometry(rectangle(Bounds(2, 2, 3, 3)))
    assert engine.export_geometry(engine.intersection(a, b)) is None


def test_shapely_engine_import_error():
    """Test that unusable vertices raise OverlayError."""
    engine = ShapelyOverlayEngine()
    with pytest.raises(OverlayError):
        engine.import_geometry(LineString([(0, 0)]))


def test_shapely_engine_unsupported_types():
    """Test that geometry types without a counterpart raise OverlayError on either side."""
    engine = ShapelyOverlayEngine()
    with pytest.raises(OverlayError, match="Cannot import Geometry"):
        engine.import_geometry(Geometry([(0, 0), (1, 1)]))
    with pytest.raises(OverlayError, match="Cannot export"):
        engine.export_geometry(SimpleNamespace(is_empty=False, geom_type='CircularString'))


def test_null_engine():
    """Test that the null engine is unavailable and refuses all overlays."""
    engine = NullOverlayEngine()
    assert not engine.available
    with pytest.raises(OverlayError):
        engine.import_geometry(Point([(0, 0)]))
    with pytest.raises(OverlayError):
        engine.intersection(None, None)
    with pytest.raises(OverlayError):
        engine.export_geometry(None)
    engine.dispose()
