"""
Copyright 2026 lens-ray-tracer authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from dataclasses import dataclass
from typing import Dict, Any

from shapely.geometry import LineString

from .constants import ORIENTATIONS
from .errors import DegenerateGeometryError
from .geometry import Vector2


@dataclass(frozen=True)
class Surface:
    """
    A finite, straight optical interface between the ambient medium and a
    refractive medium.

    The interface is the set of points ``start + t * direction`` for
    ``t`` in ``[0, length]``.

    Attributes:
        start (Vector2): First endpoint.
        direction (Vector2): Unit vector from start towards the second endpoint.
        length (float): Distance between the two endpoints.
        orientation (int): +1 or -1. Tells which side of the infinite line the
            medium occupies. With +1 the medium is on the left of `direction`
            (counter-clockwise), with -1 it is on the right.
        refractive_index (float): Index of the medium behind the surface.

    Notes:
        Surfaces are immutable; build them with `Surface.from_points` (or the
        `new_surface` alias) so that direction and length stay consistent.
    """
    start: Vector2
    direction: Vector2
    length: float
    orientation: int
    refractive_index: float

    def __post_init__(self):
        if self.orientation not in ORIENTATIONS:
            raise ValueError(f"orientation must be +1 or -1, got {self.orientation!r}")
        if not self.refractive_index > 0:
            raise ValueError(f"refractive_index must be > 0, got {self.refractive_index!r}")
        if self.length < 0:
            raise ValueError(f"length must be >= 0, got {self.length!r}")
        if not math.isclose(self.direction.length(), 1.0, rel_tol=1e-9):
            raise DegenerateGeometryError(
                f"direction must be a unit vector, got {self.direction} "
                f"(length {self.direction.length()})"
            )

    @classmethod
    def from_points(
        cls,
        start: Vector2,
        end: Vector2,
        orientation: int,
        refractive_index: float
    ) -> 'Surface':
        """
        Build a surface from its two endpoints.

        Args:
            start: First endpoint
            end: Second endpoint
            orientation: +1 or -1 (see class docstring)
            refractive_index: Index of the medium

        Returns:
            Surface

        Raises:
            DegenerateGeometryError: If start and end coincide.
        """
        diff = end - start
        if diff.length() == 0:
            raise DegenerateGeometryError(f"Surface endpoints coincide at {start}")
        return cls(
            start=start,
            direction=diff.normalize(),
            length=diff.length(),
            orientation=orientation,
            refractive_index=refractive_index,
        )

    @property
    def end(self) -> Vector2:
        """Second endpoint."""
        return self.start + self.direction * self.length

    def implicit_value(self, point: Vector2) -> float:
        """
        Signed side value of `point` with respect to the infinite line.

        Positive on the left of `direction`, negative on the right, zero on
        the line. Equals ``k - s`` where ``d.y*x - d.x*y = k`` is the line
        through `start` and ``s`` is the same expression evaluated at `point`.
        """
        return self.direction.cross(point - self.start)

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([self.start.to_tuple(), self.end.to_tuple()])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'orientation': self.orientation,
            'refractive_index': self.refractive_index,
        }

    def __repr__(self) -> str:
        return (f"Surface(start={self.start}, end={self.end}, "
                f"orientation={self.orientation:+d}, n={self.refractive_index})")


def new_surface(start: Vector2, end: Vector2, orientation: int, refractive_index: float) -> Surface:
    """Alias of `Surface.from_points`."""
    return Surface.from_points(start, end, orientation, refractive_index)


def is_ambient_side(point: Vector2, surface: Surface) -> bool:
    """
    Test whether `point` lies on the ambient (non-medium) side of `surface`.

    A point is inside the medium when its side value has the same sign as the
    surface orientation. Points exactly on the line count as ambient.

    Args:
        point: Point to classify
        surface: Reference surface

    Returns:
        True if the point is on the ambient side
    """
    return surface.implicit_value(point) * surface.orientation <= 0
