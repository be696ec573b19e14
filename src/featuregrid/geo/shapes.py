# Copyright (c) 2022 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Conversion between native geometries and shapely geometries."""

import shapely
from shapely import geometry as sg
from shapely.geometry.base import BaseMultipartGeometry

from ..geometry import LineString, MultiGeometry, Point, Polygon, Ring


def to_shapely(geom):
    """Convert a native geometry to its shapely equivalent.

    Parameters
    ----------
    geom : featuregrid.geometry.Geometry
        Native geometry. Point sets with more than one vertex become MultiPoints.

    Returns
    -------
    shapely.geometry.base.BaseGeometry

    """
    if isinstance(geom, MultiGeometry):
        parts = [to_shapely(part) for part in geom.parts]
        if parts and all(isinstance(p, sg.Polygon) for p in parts):
            return sg.MultiPolygon(parts)
        if parts and all(isinstance(p, sg.LineString) for p in parts):
            return sg.MultiLineString(parts)
        if parts and all(isinstance(p, sg.Point) for p in parts):
            return sg.MultiPoint(parts)
        return sg.GeometryCollection(parts)
    if isinstance(geom, Polygon):
        if geom.is_empty:
            return sg.Polygon()
        return sg.Polygon(
            geom.open_vertices(),
            [hole.open_vertices() for hole in geom.holes if not hole.is_empty]
        )
    if isinstance(geom, Ring):
        if geom.is_empty:
            return sg.LinearRing()
        return sg.LinearRing(geom.open_vertices())
    if isinstance(geom, LineString):
        if geom.is_empty:
            return sg.LineString()
        return sg.LineString(geom.vertices)
    if isinstance(geom, Point):
        if geom.is_empty:
            return sg.Point()
        if len(geom) == 1:
            return sg.Point(geom.vertices[0])
        return sg.MultiPoint(geom.vertices)
    raise TypeError(f"Unsupported geometry type {type(geom).__name__}")


def _coords(geom):
    return shapely.get_coordinates(geom, include_z=geom.has_z)


def from_shapely(geom):
    """Convert a shapely geometry to native form.

    Empty geometries (and collections whose every part is empty) convert to None. Single
    part multi-geometries are unwrapped.
    """
    if geom is None or geom.is_empty:
        return None
    if isinstance(geom, sg.Point):
        return Point(_coords(geom))
    if isinstance(geom, sg.LinearRing):
        return Ring(_coords(geom))
    if isinstance(geom, sg.LineString):
        return LineString(_coords(geom))
    if isinstance(geom, sg.Polygon):
        return Polygon(
            _coords(geom.exterior),
            [Ring(_coords(interior)) for interior in geom.interiors]
        )
    if isinstance(geom, BaseMultipartGeometry):
        parts = [part for part in (from_shapely(g) for g in geom.geoms) if part is not None]
        if not parts:
            return None
        if len(parts) == 1:
            return parts[0]
        return MultiGeometry(parts)
    raise TypeError(f"Unsupported shapely geometry type {geom.geom_type}")
