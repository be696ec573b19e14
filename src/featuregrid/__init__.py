# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Partition vector features into regular grid cells."""

from .config import Config, ConfigError
from .features import Feature, features_from_geodataframe, features_to_geodataframe, read_features
from .geometry import Bounds, LineString, MultiGeometry, Point, Polygon, Ring
from .gridding import CullingTechnique, Gridder, GriddingPolicy
from .processing import extent_of, grid_features

__version__ = '0.1.0'
