# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Feature records and conversion to and from GeoDataFrames."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, Optional

import geopandas as gpd
import pandas as pd

from .geo.shapes import from_shapely, to_shapely
from .geometry import Geometry


@dataclass
class Feature:
    """A vector feature: identifier, attributes and (optional) native geometry."""

    fid: Hashable
    attributes: Dict[str, Any] = field(default_factory=dict)
    geometry: Optional[Geometry] = None

    def with_geometry(self, geometry):
        """Copy of this feature carrying ``geometry`` and a copy of the attributes."""
        return replace(self, attributes=dict(self.attributes), geometry=geometry)

    def bounds(self):
        if self.geometry is None:
            return None
        return self.geometry.bounds()


def features_from_geodataframe(gdf, id_column=None):
    """Build features from the rows of a GeoDataFrame.

    Parameters
    ----------
    gdf : geopandas.GeoDataFrame
        Input rows. Missing or empty geometries give features without geometry.
    id_column : str, optional
        Column holding feature ids. Defaults to None, which uses the frame index.

    Returns
    -------
    list of Feature

    """
    geometry_name = gdf.geometry.name
    attribute_columns = [c for c in gdf.columns if c not in (geometry_name, id_column)]
    features = []
    for index, row in gdf.iterrows():
        fid = index if id_column is None else row[id_column]
        features.append(Feature(
            fid=fid,
            attributes={c: row[c] for c in attribute_columns},
            geometry=from_shapely(row[geometry_name])
        ))
    return features


def features_to_geodataframe(features, crs=None):
    """Collect features into a GeoDataFrame indexed by feature id.

    Parameters
    ----------
    features : iterable of Feature
    crs : optional
        Passed through to the GeoDataFrame; featuregrid itself never reprojects.

    Returns
    -------
    geopandas.GeoDataFrame

    """
    features = list(features)
    df = pd.DataFrame(
        [f.attributes for f in features],
        index=pd.Index([f.fid for f in features], name='fid')
    )
    return gpd.GeoDataFrame(
        df,
        geometry=[None if f.geometry is None else to_shapely(f.geometry) for f in features],
        crs=crs
    )


def read_features(path, id_column=None, **kwargs):
    """Read features from any vector file format geopandas can open."""
    return features_from_geodataframe(gpd.read_file(path, **kwargs), id_column=id_column)
