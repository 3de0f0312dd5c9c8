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
from typing import Dict, Tuple

from shapely.geometry import Point as ShapelyPoint

from .errors import DegenerateGeometryError


@dataclass(frozen=True)
class Vector2:
    """
    An immutable 2D vector, also used for points.
    Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def add(self, other: 'Vector2') -> 'Vector2':
        """Component-wise sum."""
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: 'Vector2') -> 'Vector2':
        """Component-wise difference (self - other)."""
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> 'Vector2':
        """Multiply both components by s."""
        return Vector2(self.x * s, self.y * s)

    def dot(self, other: 'Vector2') -> float:
        """
        Calculate the dot product.

        Args:
            other: Second vector

        Returns:
            Dot product
        """
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2') -> float:
        """
        Calculate the cross product.

        Args:
            other: Second vector

        Returns:
            Cross product (z-component in 2D)
        """
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> 'Vector2':
        """
        Return the unit vector pointing the same way.

        Raises:
            DegenerateGeometryError: If the vector has zero length.
        """
        len_val = self.length()
        if len_val == 0:
            raise DegenerateGeometryError(f"Cannot normalize zero-length vector {self}")
        return self.scale(1 / len_val)

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return self.add(other)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return self.sub(other)

    def __mul__(self, s: float) -> 'Vector2':
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Vector2':
        """Create Vector2 from Shapely Point."""
        return cls(sp.x, sp.y)

    def __repr__(self) -> str:
        return f"Vector2(x={self.x}, y={self.y})"


def vec(x: float, y: float) -> Vector2:
    """Shorthand constructor used when building scenes."""
    return Vector2(float(x), float(y))
