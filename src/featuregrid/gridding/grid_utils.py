# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Grid dimension and cell-bounds arithmetic, along with grid description utils."""

import math

import numpy as np
import xarray as xr


def grid_dimensions(extent, cell_size):
    """Return the number of cells along x and y needed to cover an extent.

    Parameters
    ----------
    extent : featuregrid.geometry.Bounds
        Extent to be covered
    cell_size : float or None
        Cell edge length in the same units as the extent. None (or a non-positive value)
        means a single cell spanning the extent.

    Returns
    -------
    tuple of int
        ``(cells_x, cells_y)``, each at least 1
    """
    if cell_size is not None and cell_size > 0:
        cells_x = int(math.ceil(extent.width / cell_size))
        cells_y = int(math.ceil(extent.height / cell_size))
    else:
        cells_x = cells_y = 1
    return max(cells_x, 1), max(cells_y, 1)


def cell_xy(i, cells_x):
    """Row-major column/row of cell ``i``."""
    return i % cells_x, i // cells_x


def cell_edges(extent, cell_size, cells_x, cells_y):
    """Return the cell edge coordinates along each axis.

    Upper edges are clamped to the extent so that a final partial row or column never
    extends past it.

    Parameters
    ----------
    extent : featuregrid.geometry.Bounds
    cell_size : float or None
        None gives the single-cell edges of the full extent.
    cells_x, cells_y : int

    Returns
    -------
    dict
        ``x_min``, ``x_max`` (length ``cells_x``) and ``y_min``, ``y_max`` (length
        ``cells_y``) numpy arrays
    """
    if cell_size is None:
        return {
            'x_min': np.array([extent.x_min]),
            'x_max': np.array([extent.x_max]),
            'y_min': np.array([extent.y_min]),
            'y_max': np.array([extent.y_max]),
        }
    x = np.arange(cells_x, dtype='float64')
    y = np.arange(cells_y, dtype='float64')
    return {
        'x_min': extent.x_min + cell_size * x,
        'x_max': np.minimum(extent.x_min + cell_size * (x + 1), extent.x_max),
        'y_min': extent.y_min + cell_size * y,
        'y_max': np.minimum(extent.y_min + cell_size * (y + 1), extent.y_max),
    }


def generate_cell_grid(extent, cell_size, cells_x, cells_y):
    """Generate an xarray Dataset describing the cells of a regular grid.

    Parameters
    ----------
    extent : featuregrid.geometry.Bounds
        Extent covered by the grid
    cell_size : float or None
        Cell edge length, or None for a single cell
    cells_x : int
        Number of cells in x direction
    cells_y : int
        Number of cells in y direction

    Returns
    -------
    xarray.Dataset
        Dataset with cell center coordinates ``x`` and ``y``, CF-style ``x_bounds`` and
        ``y_bounds``, and the row-major ``cell_index`` of each cell
    """
    edges = cell_edges(extent, cell_size, cells_x, cells_y)
    x = (edges['x_min'] + edges['x_max']) / 2
    y = (edges['y_min'] + edges['y_max']) / 2

    ds = xr.Dataset(
        {
            'x_bounds': (['x', 'nv'], np.stack([edges['x_min'], edges['x_max']], axis=1)),
            'y_bounds': (['y', 'nv'], np.stack([edges['y_min'], edges['y_max']], axis=1)),
            'cell_index': (
                ['y', 'x'],
                np.arange(cells_x * cells_y, dtype='int64').reshape(cells_y, cells_x)
            ),
        },
        coords={
            'y': y,
            'x': x
        }
    )
    ds['x'].attrs = {
        'standard_name': 'projection_x_coordinate',
        'bounds': 'x_bounds'
    }
    ds['y'].attrs = {
        'standard_name': 'projection_y_coordinate',
        'bounds': 'y_bounds'
    }
    ds['cell_index'].attrs = {
        'long_name': 'Row-major grid cell index'
    }
    ds.attrs['cell_size'] = np.nan if cell_size is None else cell_size

    return ds
