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

from dataclasses import dataclass
from typing import Dict, Any

from shapely.geometry import LineString

from .errors import DegenerateGeometryError
from .geometry import Vector2


@dataclass(frozen=True)
class Ray:
    """
    Representation of an unbounded light ray.

    The ray is the half-line ``start + t * direction`` for ``t >= 0``.

    Attributes:
        start (Vector2): Origin of the ray
        direction (Vector2): Propagation direction. Must be non-zero but does
            not have to be unit length.
    """
    start: Vector2
    direction: Vector2

    def __post_init__(self):
        if self.direction.length() == 0:
            raise DegenerateGeometryError(f"Ray direction must be non-zero (start={self.start})")

    def point_at(self, distance: float) -> Vector2:
        """
        Point reached after travelling `distance` (Euclidean) along the ray.

        Args:
            distance: Distance from the origin

        Returns:
            Vector2
        """
        return self.start + self.direction.normalize() * distance

    def to_segment(self, length: float) -> 'Segment':
        """Truncate the ray to a segment of the given length (used for display)."""
        return Segment(self.start, self.direction.normalize(), length)

    def to_dict(self) -> Dict[str, Any]:
        return {'start': self.start.to_dict(), 'direction': self.direction.to_dict()}

    def __repr__(self) -> str:
        return f"Ray(start={self.start}, direction={self.direction})"


@dataclass(frozen=True)
class Segment:
    """
    A bounded piece of a traced ray, from one event to the next.

    Attributes:
        start (Vector2): Where the ray piece begins
        direction (Vector2): Unit propagation direction
        length (float): Euclidean length, so ``end = start + direction * length``
    """
    start: Vector2
    direction: Vector2
    length: float

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Segment length must be >= 0, got {self.length!r}")

    @property
    def end(self) -> Vector2:
        return self.start + self.direction * self.length

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([self.start.to_tuple(), self.end.to_tuple()])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'direction': self.direction.to_dict(),
            'length': self.length,
        }

    def __repr__(self) -> str:
        return f"Segment(start={self.start}, end={self.end}, length={self.length:.6f})"
