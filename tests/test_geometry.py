# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Test the native geometry model."""

import numpy as np
import pytest

from featuregrid.geometry import Bounds, LineString, MultiGeometry, Point, Polygon, Ring


def test_bounds_derived_values():
    """Test width, height and center of bounds."""
    b = Bounds(1, 2, 5, 10)
    assert b.width == 4
    assert b.height == 8
    assert b.center == (3, 6)


def test_bounds_rejects_inverted():
    """Test that a minimum greater than its maximum is rejected."""
    with pytest.raises(ValueError):
        Bounds(5, 0, 1, 1)
    with pytest.raises(ValueError):
        Bounds(0, 5, 1, 1)


def test_bounds_degenerate_allowed():
    """Test that zero-area bounds are allowed."""
    b = Bounds(1, 1, 1, 1)
    assert b.width == 0
    assert b.contains(1, 1)


def test_bounds_immutable():
    """Test that bounds cannot be changed after construction."""
    b = Bounds(0, 0, 1, 1)
    with pytest.raises(AttributeError):
        b.x_min = 3


def test_bounds_contains_is_inclusive():
    """Test containment on every edge and corner."""
    b = Bounds(0, 0, 5, 5)
    assert b.contains(0, 0)
    assert b.contains(5, 5)
    assert b.contains(5, 2.5)
    assert b.contains(2.5, 0)
    assert not b.contains(5.0001, 2)
    assert not b.contains(2, -0.0001)


def test_bounds_union_and_coerce():
    """Test union of bounds and coercion from tuples."""
    b = Bounds(0, 0, 1, 1).union(Bounds.coerce((-1, 0.5, 0.5, 3)))
    assert b == Bounds(-1, 0, 1, 3)
    assert tuple(b) == (-1.0, 0.0, 1.0, 3.0)
    assert Bounds.coerce(b) is b


def test_bounds_from_points_ignores_z():
    """Test bounds of 3D vertices only use x and y."""
    b = Bounds.from_points([(0, 0, 100), (2, 3, -50)])
    assert b == Bounds(0, 0, 2, 3)


def test_geometry_bounds():
    """Test geometry bounding boxes."""
    line = LineString([(0, 0), (4, 2), (1, 5)])
    assert line.bounds() == Bounds(0, 0, 4, 5)
    assert Point().bounds() is None


@pytest.mark.parametrize('geom, valid', [
    (Point([(1, 1)]), True),
    (Point(), False),
    (LineString([(0, 0)]), False),
    (LineString([(0, 0), (1, 1)]), True),
    (Ring([(0, 0), (1, 0), (0, 0)]), False),
    (Ring([(0, 0), (1, 0), (1, 1)]), True),
    (Polygon([(0, 0), (1, 0), (1, 1), (0, 0)]), True),
    (Polygon([(0, 0), (1, 0), (0, 0)]), False),
    (MultiGeometry(), False),
    (MultiGeometry([Point([(0, 0)]), LineString([(0, 0), (1, 1)])]), True),
    (MultiGeometry([Point([(0, 0)]), LineString([(0, 0)])]), False),
])
def test_geometry_validity(geom, valid):
    """Test validity rules for each geometry type."""
    assert geom.is_valid() is valid


def test_ring_open_vertices():
    """Test that an explicit closing vertex is dropped."""
    ring = Ring([(0, 0), (1, 0), (1, 1), (0, 0)])
    assert ring.open_vertices().shape == (3, 2)
    assert Ring([(0, 0), (1, 0), (1, 1)]).open_vertices().shape == (3, 2)


def test_multigeometry_bounds():
    """Test bounds of a multi-part geometry span all parts."""
    multi = MultiGeometry([
        Polygon([(0, 0), (1, 0), (1, 1)]),
        Point([(5, -2)])
    ])
    assert multi.bounds() == Bounds(0, -2, 5, 1)
    assert len(multi) == 4


def test_vertices_shape_checked():
    """Test that vertices need two or three components."""
    with pytest.raises(ValueError):
        LineString([(0, 0, 0, 0), (1, 1, 1, 1)])


def test_copy_is_independent():
    """Test that copies do not share vertex arrays."""
    poly = Polygon([(0, 0), (1, 0), (1, 1)], holes=[[(0.1, 0.1), (0.2, 0.1), (0.2, 0.2)]])
    dup = poly.copy()
    assert dup == poly
    dup.vertices[0, 0] = 99
    assert poly.vertices[0, 0] == 0
    assert np.array_equal(dup.holes[0].vertices, poly.holes[0].vertices)
