# Copyright (c) 2022 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Geometry overlay support and shapely interoperability."""

from .overlay import (
    NullOverlayEngine,
    OverlayEngine,
    OverlayError,
    ShapelyOverlayEngine,
    default_overlay_engine,
    rectangle
)
from .shapes import from_shapely, to_shapely
