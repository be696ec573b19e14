# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""
Gridder class for partitioning vector features covering an extent into a regular grid of
rectangular cells.

Features are assigned to cells either whole, by the center of their bounding box, or by
cropping their geometry to the cell rectangle with a geometry overlay engine.

"""

import logging

import geopandas as gpd
import shapely

from ..geo.overlay import OverlayError, default_overlay_engine, rectangle
from ..geometry import Bounds
from .grid_utils import cell_edges, cell_xy, generate_cell_grid, grid_dimensions
from .policy import CullingTechnique, GriddingPolicy


log = logging.getLogger(__name__)


class Gridder:
    """Partition features into the cells of a regular grid over an extent.

    Cells are numbered row-major from the lower-left corner of the extent: cell ``i`` sits
    in column ``i % cells_x`` and row ``i // cells_x``.

    """

    def __init__(self, extent, policy=None, overlay_engine=None):
        """Set up Gridder by sizing the grid and settling the culling technique.

        Parameters
        ----------
        extent : featuregrid.geometry.Bounds or sequence
            Rectangle ``(x_min, y_min, x_max, y_max)`` covered by the grid
        policy : featuregrid.gridding.GriddingPolicy, optional
            Grid sizing and culling policy. Defaults to a single cell with centroid culling.
        overlay_engine : featuregrid.geo.OverlayEngine, optional
            Engine used to crop features. Defaults to the shapely engine. When the engine is
            not available, a cropping policy falls back to centroid culling.

        """
        self.extent = Bounds.coerce(extent)
        self.overlay_engine = (
            default_overlay_engine() if overlay_engine is None else overlay_engine
        )
        policy = GriddingPolicy() if policy is None else policy

        self.cells_x, self.cells_y = grid_dimensions(self.extent, policy.effective_cell_size)

        if (
            policy.effective_culling_technique is CullingTechnique.BY_CROPPING
            and not self.overlay_engine.available
        ):
            log.warning(
                f"Gridding policy 'cull by cropping' requires a geometry overlay engine, but "
                f"the '{self.overlay_engine.name}' engine cannot perform overlays. Falling back "
                f"on 'cull by centroid'."
            )
            policy = policy.with_culling_technique(CullingTechnique.BY_CENTROID)

        self.policy = policy

    @property
    def cell_size(self):
        return self.policy.effective_cell_size

    @property
    def culling_technique(self):
        """Culling technique in effect after any fallback."""
        return self.policy.effective_culling_technique

    def cell_count(self):
        return self.cells_x * self.cells_y

    def cell_bounds(self, i):
        """Return the bounds of cell ``i``, or None if there is no such cell.

        The last row and column are clamped to the extent and may be smaller than the others.
        """
        if not 0 <= i < self.cell_count():
            return None
        if self.cell_size is None:
            return self.extent

        x, y = cell_xy(i, self.cells_x)
        return Bounds(
            self.extent.x_min + self.cell_size * x,
            self.extent.y_min + self.cell_size * y,
            min(self.extent.x_min + self.cell_size * (x + 1), self.extent.x_max),
            min(self.extent.y_min + self.cell_size * (y + 1), self.extent.y_max)
        )

    def iter_cells(self):
        """Yield ``(index, bounds)`` for every cell."""
        for i in range(self.cell_count()):
            yield i, self.cell_bounds(i)

    def cull_to_cell(self, i, features):
        """Return the features that belong to cell ``i``.

        Neither ``features`` nor the features in it are modified. When cropping, features
        that are kept are copies carrying the clipped geometry.

        Parameters
        ----------
        i : int
            Cell index. Out-of-range indexes leave the features as they are.
        features : iterable of featuregrid.features.Feature
            Candidate features

        Returns
        -------
        list of featuregrid.features.Feature
            Features belonging to the cell, in input order

        """
        features = list(features)
        bounds = self.cell_bounds(i)
        if bounds is None:
            # Per-cell summaries are routine detail, so DEBUG rather than INFO
            log.debug(
                f"Grid cell {i}: no such cell in {self.cells_x}x{self.cells_y} grid; "
                f"in={len(features)}; out={len(features)}"
            )
            return features

        if self.culling_technique is CullingTechnique.BY_CROPPING:
            output = self._crop_to_cell(bounds, features)
        else:
            output = self._cull_by_centroid(bounds, features)

        # Per-cell summaries are routine detail, so DEBUG rather than INFO
        log.debug(
            f"Grid cell {i}: bounds={bounds.x_min},{bounds.y_min} => "
            f"{bounds.x_max},{bounds.y_max}; in={len(features)}; out={len(output)}"
        )
        return output

    @staticmethod
    def _cull_by_centroid(bounds, features):
        output = []
        for feature in features:
            geom_bounds = None if feature.geometry is None else feature.geometry.bounds()
            if geom_bounds is not None and bounds.contains(*geom_bounds.center):
                output.append(feature)
        return output

    def _crop_to_cell(self, bounds, features):
        engine = self.overlay_engine
        crop_geom = engine.import_geometry(rectangle(bounds))
        temporaries = [crop_geom]
        output = []
        try:
            for feature in features:
                if feature.geometry is None:
                    continue
                try:
                    in_geom = engine.import_geometry(feature.geometry)
                    temporaries.append(in_geom)
                    out_geom = engine.intersection(in_geom, crop_geom)
                    temporaries.append(out_geom)
                    clipped = engine.export_geometry(out_geom)
                except OverlayError as exc:
                    log.info(f"Feature gridder overlay failed, skipping feature {feature.fid!r}: {exc}")
                    continue
                if clipped is not None and clipped.is_valid():
                    output.append(feature.with_geometry(clipped))
        finally:
            engine.dispose(*temporaries)
        return output

    def cells_to_geodataframe(self, crs=None):
        """Return the cell rectangles as a GeoDataFrame indexed by cell index."""
        edges = cell_edges(self.extent, self.cell_size, self.cells_x, self.cells_y)
        records = []
        for i in range(self.cell_count()):
            x, y = cell_xy(i, self.cells_x)
            records.append({
                'cell_index': i,
                'x_min': edges['x_min'][x],
                'y_min': edges['y_min'][y],
                'x_max': edges['x_max'][x],
                'y_max': edges['y_max'][y],
            })
        gdf = gpd.GeoDataFrame(
            records,
            columns=['cell_index', 'x_min', 'y_min', 'x_max', 'y_max'],
            geometry=[
                shapely.box(r['x_min'], r['y_min'], r['x_max'], r['y_max']) for r in records
            ],
            crs=crs
        )
        return gdf.set_index('cell_index')

    def to_xarray(self):
        """Return a CF-style xarray Dataset describing the grid cells."""
        ds = generate_cell_grid(self.extent, self.cell_size, self.cells_x, self.cells_y)
        ds.attrs['culling_technique'] = self.culling_technique.value
        return ds

    def __repr__(self):
        return (
            f"Gridder(extent={self.extent!r}, cells_x={self.cells_x}, cells_y={self.cells_y}, "
            f"culling_technique={self.culling_technique.name})"
        )
