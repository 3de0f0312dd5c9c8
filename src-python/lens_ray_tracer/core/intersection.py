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
from typing import Optional, Sequence, Tuple

from .constants import PARALLEL_TOLERANCE
from .geometry import Vector2
from .ray import Ray
from .surface import Surface


@dataclass(frozen=True)
class Intersection:
    """
    Where a ray meets a surface.

    Attributes:
        point (Vector2): The intersection point
        distance (float): Euclidean distance from the ray origin to `point`
        ray_param (float): Parameter t with point = ray.start + t * ray.direction
        surface_param (float): Parameter u with point = surface.start + u * surface.direction
    """
    point: Vector2
    distance: float
    ray_param: float
    surface_param: float


def intersect(ray: Ray, surface: Surface) -> Optional[Intersection]:
    """
    Intersect a ray with a finite surface.

    Solves ``ray.start + t * ray.direction = surface.start + u * surface.direction``
    with Cramer's rule. The hit is valid when ``0 <= u <= surface.length`` and
    ``t >= 0``.

    Args:
        ray: The ray
        surface: The surface

    Returns:
        Intersection, or None if the ray misses the surface or runs parallel to it.
    """
    denominator = ray.direction.cross(surface.direction)

    # Parallel (or coincident) lines have no single solution
    if abs(denominator) < PARALLEL_TOLERANCE:
        return None

    w = surface.start - ray.start
    t = w.cross(surface.direction) / denominator
    u = w.cross(ray.direction) / denominator

    if u < 0 or u > surface.length or t < 0:
        return None

    point = surface.start + surface.direction * u
    return Intersection(
        point=point,
        distance=(point - ray.start).length(),
        ray_param=t,
        surface_param=u,
    )


def find_nearest(
    ray: Ray,
    surfaces: Sequence[Surface],
    exclude: Optional[int] = None,
    min_distance: float = 0.0
) -> Optional[Tuple[int, Intersection]]:
    """
    Find the surface hit first by `ray`.

    Args:
        ray: The ray
        surfaces: Surfaces to test, in a stable order
        exclude: Index of a surface to skip (the one the ray just left)
        min_distance: Hits closer than this are ignored

    Returns:
        (index, Intersection) of the nearest hit, or None. On equal distances
        the surface that comes first in `surfaces` wins.
    """
    nearest = None
    nearest_distance = math.inf

    for i, surface in enumerate(surfaces):
        if i == exclude:
            continue
        hit = intersect(ray, surface)
        if hit is None or hit.distance < min_distance:
            continue
        if hit.distance < nearest_distance:
            nearest = (i, hit)
            nearest_distance = hit.distance

    return nearest
