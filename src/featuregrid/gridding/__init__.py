# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Gridding policy, grid arithmetic and the Gridder that culls features to cells."""

from .grid_utils import cell_edges, generate_cell_grid, grid_dimensions
from .gridder import Gridder
from .policy import CullingTechnique, GriddingPolicy
