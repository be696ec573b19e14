# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Native vector geometry model and axis-aligned bounds.

Geometries hold their vertices as ``float64`` numpy arrays of shape ``(N, 2)`` (or
``(N, 3)`` when z values are carried along). Only the x/y columns take part in bounds and
containment tests.
"""

import numpy as np


class Bounds:
    """Axis-aligned rectangle in feature coordinate space.

    Parameters
    ----------
    x_min, y_min, x_max, y_max : float
        Rectangle edges. Each minimum must not exceed its maximum.

    """

    __slots__ = ('x_min', 'y_min', 'x_max', 'y_max')

    def __init__(self, x_min, y_min, x_max, y_max):
        x_min, y_min, x_max, y_max = (float(v) for v in (x_min, y_min, x_max, y_max))
        if x_min > x_max or y_min > y_max:
            raise ValueError(
                f"Invalid bounds ({x_min}, {y_min}, {x_max}, {y_max}): minimum exceeds maximum."
            )
        object.__setattr__(self, 'x_min', x_min)
        object.__setattr__(self, 'y_min', y_min)
        object.__setattr__(self, 'x_max', x_max)
        object.__setattr__(self, 'y_max', y_max)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def coerce(cls, value):
        """Return ``value`` as Bounds, accepting any ``(x_min, y_min, x_max, y_max)`` sequence."""
        if isinstance(value, cls):
            return value
        return cls(*value)

    @classmethod
    def from_points(cls, points):
        """Bounds enclosing an ``(N, 2+)`` array of vertices."""
        points = np.asarray(points, dtype='float64')
        if points.ndim != 2 or points.shape[0] == 0:
            raise ValueError("Cannot compute bounds of an empty vertex array.")
        x_min, y_min = points[:, :2].min(axis=0)
        x_max, y_max = points[:, :2].max(axis=0)
        return cls(x_min, y_min, x_max, y_max)

    @property
    def width(self):
        return self.x_max - self.x_min

    @property
    def height(self):
        return self.y_max - self.y_min

    @property
    def center(self):
        return ((self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2)

    def contains(self, x, y):
        """Check whether a point lies inside, inclusive on every edge."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def union(self, other):
        """Smallest bounds enclosing both ``self`` and ``other``."""
        return Bounds(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max)
        )

    def as_tuple(self):
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def __iter__(self):
        return iter(self.as_tuple())

    def __eq__(self, other):
        if not isinstance(other, Bounds):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Bounds({self.x_min!r}, {self.y_min!r}, {self.x_max!r}, {self.y_max!r})"


def _as_vertices(vertices):
    arr = np.array(vertices, dtype='float64')
    if arr.size == 0:
        return np.empty((0, 2), dtype='float64')
    arr = np.atleast_2d(arr)
    if arr.shape[1] not in (2, 3):
        raise ValueError(f"Vertices must have 2 or 3 components, got shape {arr.shape}.")
    return arr


class Geometry:
    """Base class for native geometries made of a single vertex sequence."""

    min_vertices = 1

    def __init__(self, vertices=()):
        self.vertices = _as_vertices(vertices)

    def __len__(self):
        return len(self.vertices)

    @property
    def is_empty(self):
        return len(self.vertices) == 0

    def bounds(self):
        """Bounding box of all vertices, or None for an empty geometry."""
        if self.is_empty:
            return None
        return Bounds.from_points(self.vertices)

    def is_valid(self):
        return len(self.vertices) >= self.min_vertices

    def copy(self):
        return type(self)(self.vertices.copy())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return np.array_equal(self.vertices, other.vertices)

    def __repr__(self):
        return f"{type(self).__name__}({self.vertices.tolist()!r})"


class Point(Geometry):
    """Point set; one or more vertices."""


class LineString(Geometry):
    min_vertices = 2


class Ring(Geometry):
    """Closed line. The closing vertex is implied and may be omitted."""

    min_vertices = 3

    def open_vertices(self):
        """Vertices with any explicit closing vertex removed."""
        if len(self.vertices) > 1 and np.array_equal(self.vertices[0], self.vertices[-1]):
            return self.vertices[:-1]
        return self.vertices

    def is_valid(self):
        return len(self.open_vertices()) >= self.min_vertices


class Polygon(Ring):
    """Polygon given by an exterior ring and optional hole rings."""

    def __init__(self, vertices=(), holes=()):
        super().__init__(vertices)
        self.holes = [hole if isinstance(hole, Ring) else Ring(hole) for hole in holes]

    def copy(self):
        return Polygon(self.vertices.copy(), [hole.copy() for hole in self.holes])

    def __eq__(self, other):
        if type(other) is not Polygon:
            return NotImplemented
        return (
            np.array_equal(self.vertices, other.vertices)
            and len(self.holes) == len(other.holes)
            and all(a == b for a, b in zip(self.holes, other.holes))
        )

    def __repr__(self):
        return f"Polygon({self.vertices.tolist()!r}, holes={len(self.holes)})"


class MultiGeometry(Geometry):
    """Collection of geometry parts."""

    def __init__(self, parts=()):
        self.parts = list(parts)

    @property
    def vertices(self):
        arrays = [part.vertices[:, :2] for part in self.parts if not part.is_empty]
        if not arrays:
            return np.empty((0, 2), dtype='float64')
        return np.concatenate(arrays)

    def __len__(self):
        return sum(len(part) for part in self.parts)

    @property
    def is_empty(self):
        return all(part.is_empty for part in self.parts)

    def is_valid(self):
        return bool(self.parts) and all(part.is_valid() for part in self.parts)

    def copy(self):
        return MultiGeometry([part.copy() for part in self.parts])

    def __eq__(self, other):
        if type(other) is not MultiGeometry:
            return NotImplemented
        return len(self.parts) == len(other.parts) and all(
            a == b for a, b in zip(self.parts, other.parts)
        )

    def __repr__(self):
        return f"MultiGeometry({self.parts!r})"
