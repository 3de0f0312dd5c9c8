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

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import AMBIENT_REFRACTIVE_INDEX
from .geometry import Vector2
from .intersection import Intersection, intersect
from .ray import Ray, Segment
from .surface import Surface, is_ambient_side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Refraction:
    """
    Outcome of a ray meeting a surface.

    Attributes:
        segment (Segment): Ray path from the ray origin up to the hit point
        continuation (Ray): New ray leaving the hit point
        intersection (Intersection): The hit itself
        total_internal_reflection (bool): True if the ray was reflected
        n1 (float): Index of the medium the ray came from
        n2 (float): Index of the medium on the other side of the surface
        sin_ratio (float): (n1 / n2) * sin(incidence angle), signed. TIR when |sin_ratio| > 1.
    """
    segment: Segment
    continuation: Ray
    intersection: Intersection
    total_internal_reflection: bool
    n1: float
    n2: float
    sin_ratio: float


def incident_indices(ray: Ray, surface: Surface, ambient_index: float) -> Tuple[float, float]:
    """
    Work out (n1, n2) for a ray arriving at `surface`.

    The ray's origin decides which side it comes from: on the ambient side it
    travels from `ambient_index` into the surface medium, otherwise the other
    way round.
    """
    if is_ambient_side(ray.start, surface):
        return ambient_index, surface.refractive_index
    return surface.refractive_index, ambient_index


def to_local(v: Vector2, tangent: Vector2) -> Vector2:
    """
    Express `v` in the surface frame: x is the normal component, y the
    tangential one.

    The basis matrix [[-t.y, t.x], [t.x, t.y]] is symmetric and orthogonal,
    so the same product also maps local coordinates back (see `to_global`).
    """
    return Vector2(
        -tangent.y * v.x + tangent.x * v.y,
        tangent.x * v.x + tangent.y * v.y,
    )


to_global = to_local


def refract(
    ray: Ray,
    surface: Surface,
    ambient_index: float = AMBIENT_REFRACTIVE_INDEX,
    intersection: Optional[Intersection] = None
) -> Optional[Refraction]:
    """
    Apply Snell's law where `ray` meets `surface`.

    Args:
        ray: The incident ray
        surface: The surface it hits
        ambient_index: Index of the medium outside the surface
        intersection: Precomputed hit of `ray` on `surface`, if the caller has one

    Returns:
        Refraction, or None if the ray does not hit the surface.

    Note:
        There is no Fresnel split: a ray is either fully transmitted or, past
        the critical angle, fully reflected.
    """
    hit = intersection if intersection is not None else intersect(ray, surface)
    if hit is None:
        return None

    n1, n2 = incident_indices(ray, surface, ambient_index)

    local_in = to_local(ray.direction, surface.direction)
    normal, tangential = local_in.x, local_in.y

    # normal != 0 here: a ray parallel to the surface never produces a hit
    ratio = tangential / normal
    sin_ratio = (n1 / n2) * (ratio / math.sqrt(1 + ratio * ratio))

    tir = sin_ratio > 1 or sin_ratio < -1
    if tir:
        logger.debug("TIR at %s (n1=%.4f, n2=%.4f, X=%.4f)", hit.point, n1, n2, sin_ratio)
        local_out = Vector2(-normal, tangential)
    else:
        theta = abs(math.asin(sin_ratio))
        local_out = Vector2(
            math.copysign(math.cos(theta), normal),
            math.copysign(math.sin(theta), tangential),
        )

    segment = Segment(ray.start, ray.direction.normalize(), hit.distance)
    continuation = Ray(hit.point, to_global(local_out, surface.direction))

    return Refraction(
        segment=segment,
        continuation=continuation,
        intersection=hit,
        total_internal_reflection=tir,
        n1=n1,
        n2=n2,
        sin_ratio=sin_ratio,
    )
