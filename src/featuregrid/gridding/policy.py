# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Gridding policy: how a grid is sized and how features are culled to each cell."""

from __future__ import annotations

import enum
import math
import numbers
from dataclasses import dataclass, replace
from typing import Optional

from ..config import Config, ConfigError, parse_bool, parse_float

CELL_SIZE = 'cell_size'
CULLING_TECHNIQUE = 'culling_technique'
SPATIALIZE_GROUPS = 'spatialize_groups'
CLUSTER_CULLING = 'cluster_culling'


class CullingTechnique(enum.Enum):
    """Rule deciding which features belong to a grid cell."""

    #: Keep whole features whose bounding-box center lies in the cell
    BY_CENTROID = 'centroid'
    #: Clip feature geometry to the cell rectangle
    BY_CROPPING = 'crop'

    @classmethod
    def parse(cls, value):
        """Return the technique for an enum member or config literal, else None."""
        if isinstance(value, cls):
            return value
        for technique in cls:
            if value == technique.value:
                return technique
        return None


@dataclass(frozen=True)
class GriddingPolicy:
    """Grid sizing and culling settings.

    Every field is optional; None means "not set" and the corresponding property reports the
    default. Only set fields are written by `to_config`.

    Parameters
    ----------
    cell_size : float, optional
        Edge length of the square grid cells, in feature coordinate units. Unset or
        non-positive sizes give a single cell covering the whole extent.
    culling_technique : CullingTechnique or str, optional
        Defaults to ``CullingTechnique.BY_CENTROID``. The config literals ``'centroid'`` and
        ``'crop'`` are accepted.
    spatialize_groups : bool, optional
        Defaults to True. Carried for downstream consumers; not used by grid arithmetic.
    cluster_culling : bool, optional
        Defaults to False. Carried for downstream consumers.

    """

    cell_size: Optional[float] = None
    culling_technique: Optional[CullingTechnique] = None
    spatialize_groups: Optional[bool] = None
    cluster_culling: Optional[bool] = None

    def __post_init__(self):
        if self.cell_size is not None:
            if isinstance(self.cell_size, bool) or not isinstance(self.cell_size, numbers.Real):
                raise TypeError(f"cell_size must be a real number, got {self.cell_size!r}")
            object.__setattr__(self, 'cell_size', float(self.cell_size))
        if self.culling_technique is not None:
            technique = CullingTechnique.parse(self.culling_technique)
            if technique is None:
                raise ValueError(f"Unknown culling technique {self.culling_technique!r}")
            object.__setattr__(self, 'culling_technique', technique)
        for name in (SPATIALIZE_GROUPS, CLUSTER_CULLING):
            value = getattr(self, name)
            if value is not None and not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {value!r}")

    @property
    def effective_cell_size(self):
        """Cell size to grid with, or None for a single-cell grid.

        Non-positive and non-finite sizes do not subdivide the extent.
        """
        if self.cell_size is not None and math.isfinite(self.cell_size) and self.cell_size > 0:
            return self.cell_size
        return None

    @property
    def effective_culling_technique(self):
        return self.culling_technique or CullingTechnique.BY_CENTROID

    @property
    def effective_spatialize_groups(self):
        return True if self.spatialize_groups is None else self.spatialize_groups

    @property
    def effective_cluster_culling(self):
        return False if self.cluster_culling is None else self.cluster_culling

    def with_culling_technique(self, technique):
        """Copy of this policy with a different culling technique."""
        return replace(self, culling_technique=technique)

    @classmethod
    def from_config(cls, conf, strict=False):
        """Build a policy from settings.

        Parameters
        ----------
        conf : featuregrid.config.Config or mapping
            Settings holding any of ``cell_size``, ``culling_technique``,
            ``spatialize_groups`` and ``cluster_culling``.
        strict : bool, optional
            When False (default), malformed or unrecognized values, including a
            non-finite ``cell_size``, are ignored and the field is left unset. When True,
            they raise `ConfigError`.

        Returns
        -------
        GriddingPolicy

        """
        if not isinstance(conf, Config):
            conf = Config(conf)

        def reject(key):
            if strict:
                raise ConfigError(f"Invalid value {conf.value(key)!r} for setting {key!r}")

        cell_size = None
        if conf.has_value(CELL_SIZE):
            cell_size = parse_float(conf.value(CELL_SIZE))
            if cell_size is not None and not math.isfinite(cell_size):
                cell_size = None
            if cell_size is None:
                reject(CELL_SIZE)

        culling_technique = None
        if conf.has_value(CULLING_TECHNIQUE):
            culling_technique = CullingTechnique.parse(conf.value(CULLING_TECHNIQUE))
            if culling_technique is None:
                reject(CULLING_TECHNIQUE)

        flags = {}
        for key in (SPATIALIZE_GROUPS, CLUSTER_CULLING):
            if conf.has_value(key):
                flags[key] = parse_bool(conf.value(key))
                if flags[key] is None:
                    reject(key)

        return cls(
            cell_size=cell_size,
            culling_technique=culling_technique,
            spatialize_groups=flags.get(SPATIALIZE_GROUPS),
            cluster_culling=flags.get(CLUSTER_CULLING)
        )

    def to_config(self):
        """Settings for every field that is set."""
        conf = Config()
        conf.add_optional(CELL_SIZE, self.cell_size)
        if self.culling_technique is not None:
            conf.add(CULLING_TECHNIQUE, self.culling_technique.value)
        conf.add_optional(SPATIALIZE_GROUPS, self.spatialize_groups)
        conf.add_optional(CLUSTER_CULLING, self.cluster_culling)
        return conf
