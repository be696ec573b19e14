# Copyright (c) 2022 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Geometry overlay engine capability used for cropping features to grid cells.

A Gridder talks to the overlay engine only through the `OverlayEngine` interface:

- ``import_geometry`` converts a native geometry into engine form
- ``intersection`` runs the binary intersection overlay
- ``export_geometry`` converts an engine result back to native form
- ``dispose`` releases engine-owned geometries

`ShapelyOverlayEngine` backs this with shapely/GEOS. `NullOverlayEngine` stands in where no
overlay engine is wanted; Gridders built with it fall back to centroid culling.
"""

import shapely
from shapely.errors import GEOSException

from ..geometry import Polygon
from .shapes import from_shapely, to_shapely


class OverlayError(RuntimeError):
    """Raised when an overlay engine cannot complete an operation."""


class OverlayEngine:
    """Interface for geometry overlay engines."""

    #: Whether this engine can actually perform overlays
    available = False
    name = 'abstract'

    def import_geometry(self, geom):
        raise NotImplementedError

    def intersection(self, a, b):
        raise NotImplementedError

    def export_geometry(self, geom):
        raise NotImplementedError

    def dispose(self, *geoms):
        """Release engine geometries. The default engine owns nothing."""

    def __repr__(self):
        return f"{type(self).__name__}(available={self.available})"


class ShapelyOverlayEngine(OverlayEngine):
    """Overlay engine backed by shapely (GEOS)."""

    available = True
    name = 'shapely'

    def import_geometry(self, geom):
        """Convert native geometry to a shapely geometry.

        Parameters
        ----------
        geom : featuregrid.geometry.Geometry

        Returns
        -------
        shapely.geometry.base.BaseGeometry

        Raises
        ------
        OverlayError
            If shapely rejects the vertices (e.g. a ring with too few points) or the
            geometry type has no shapely equivalent

        """
        try:
            return to_shapely(geom)
        except (GEOSException, TypeError, ValueError) as exc:
            raise OverlayError(f"Cannot import {type(geom).__name__}: {exc}") from exc

    def intersection(self, a, b):
        try:
            return shapely.intersection(a, b)
        except GEOSException as exc:
            raise OverlayError(f"Intersection failed: {exc}") from exc

    def export_geometry(self, geom):
        """Convert a shapely result back to native form; None when the result is empty."""
        try:
            return from_shapely(geom)
        except (GEOSException, TypeError, ValueError) as exc:
            raise OverlayError(f"Cannot export {type(geom).__name__}: {exc}") from exc

    @property
    def version(self):
        return shapely.geos_version_string


class NullOverlayEngine(OverlayEngine):
    """Placeholder engine for environments without overlay support."""

    name = 'none'

    def _unavailable(self, *args):
        raise OverlayError("No geometry overlay engine is available.")

    import_geometry = _unavailable
    intersection = _unavailable
    export_geometry = _unavailable


def default_overlay_engine():
    """Return the overlay engine Gridders use when none is given."""
    return ShapelyOverlayEngine()


def rectangle(bounds):
    """Closed four-vertex native polygon covering ``bounds``."""
    return Polygon([
        (bounds.x_min, bounds.y_min),
        (bounds.x_max, bounds.y_min),
        (bounds.x_max, bounds.y_max),
        (bounds.x_min, bounds.y_max)
    ])
