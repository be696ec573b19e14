# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Batch gridding of feature collections and related processing utils."""

import logging

from tqdm import tqdm

from .gridding import Gridder


log = logging.getLogger(__name__)


def extent_of(features):
    """Return the bounds enclosing every feature that has geometry.

    Parameters
    ----------
    features : iterable of featuregrid.features.Feature

    Returns
    -------
    featuregrid.geometry.Bounds

    Raises
    ------
    ValueError
        If no feature has non-empty geometry

    """
    extent = None
    for feature in features:
        bounds = feature.bounds()
        if bounds is None:
            continue
        extent = bounds if extent is None else extent.union(bounds)
    if extent is None:
        raise ValueError("Cannot determine extent: no feature has geometry.")
    return extent


def grid_features(
    features,
    policy=None,
    extent=None,
    overlay_engine=None,
    skip_empty=False,
    progress=False
):
    """Partition features into the cells of a grid.

    Parameters
    ----------
    features : iterable of featuregrid.features.Feature
        Master feature collection. It is left unmodified.
    policy : featuregrid.gridding.GriddingPolicy, optional
        Gridding policy. Defaults to a single cell with centroid culling.
    extent : featuregrid.geometry.Bounds or sequence, optional
        Extent to grid. Defaults to None, which uses the extent of the features.
    overlay_engine : featuregrid.geo.OverlayEngine, optional
        Overlay engine passed on to the Gridder
    skip_empty : bool, optional
        Leave cells with no features out of the result. Defaults to False.
    progress : bool, optional
        Show a progress bar over cells. Defaults to False.

    Returns
    -------
    dict
        Mapping of cell index to the list of features for that cell, in cell order

    """
    features = list(features)
    if extent is None:
        extent = extent_of(features)
    gridder = Gridder(extent, policy, overlay_engine=overlay_engine)
    log.info(
        f"Gridding {len(features)} features into {gridder.cells_x}x{gridder.cells_y} cells "
        f"by {gridder.culling_technique.value}"
    )

    cells = {}
    for i in tqdm(range(gridder.cell_count()), disable=not progress, unit='cell'):
        cell_features = gridder.cull_to_cell(i, features)
        if cell_features or not skip_empty:
            cells[i] = cell_features
    return cells
