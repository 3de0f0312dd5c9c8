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

===============================================================================
Lens Geometry Analysis
===============================================================================
Shapely views of a sampled lens, for checks the tracer itself does not need:

- The surfaces as one merged outline
- The lens cross-section as a polygon (area, containment)
- How much of a traced path runs inside the lens
===============================================================================
"""

from typing import Iterable, List

from shapely.geometry import MultiLineString, Polygon
from shapely.ops import linemerge

from ..core.geometry import Vector2
from ..core.lens_profile import LensProfile
from ..core.projector import Trace
from ..core.surface import Surface


def lens_outline(surfaces: Iterable[Surface]):
    """
    Merge surfaces into as few polylines as possible.

    Args:
        surfaces: Lens surfaces

    Returns:
        A Shapely LineString if the surfaces form one chain, otherwise a
        MultiLineString.
    """
    return linemerge(MultiLineString([s.to_shapely() for s in surfaces]))


def lens_polygon(profile: LensProfile) -> Polygon:
    """
    Cross-section of the lens as a polygon.

    The outline follows the sampled profile around all four quadrants. If the
    profile stops before the top and bottom halves meet, the rim is closed
    with a straight vertical edge on each side.

    Args:
        profile: Lens description

    Returns:
        Polygon (empty if the profile has fewer than two samples)
    """
    points = profile.samples()
    if len(points) < 2:
        return Polygon()

    top_right = [profile.place(r, h, 1, 1) for r, h in points]
    bottom_right = [profile.place(r, h, 1, -1) for r, h in reversed(points)]
    # The bottom vertex is already the last point of bottom_right
    bottom_left = [profile.place(r, h, -1, -1) for r, h in points[1:]]
    top_left = [profile.place(r, h, -1, 1) for r, h in reversed(points)]

    ring: List[Vector2] = top_right + bottom_right + bottom_left + top_left
    return Polygon([p.to_tuple() for p in ring])


def lens_area(profile: LensProfile) -> float:
    """Area of the lens cross-section in scene units."""
    return lens_polygon(profile).area


def rim_gap(profile: LensProfile) -> float:
    """
    Vertical distance between the top and bottom surfaces at the last
    sampled radius. Zero means the surfaces meet; anything larger is an
    opening in the surface set that rays can pass through untouched.
    """
    points = profile.samples()
    if not points:
        return 0.0
    return 2 * points[-1][1] * profile.scale_y


def point_in_lens(point: Vector2, profile: LensProfile) -> bool:
    """True if `point` lies strictly inside the lens cross-section."""
    return lens_polygon(profile).contains(point.to_shapely())


def path_length_inside(trace: Trace, profile: LensProfile) -> float:
    """
    Length of the bounded part of a trace that runs inside the lens.

    Args:
        trace: A traced ray
        profile: The lens it was traced through

    Returns:
        Sum over segments of the length of their overlap with the lens polygon
    """
    polygon = lens_polygon(profile)
    if polygon.is_empty:
        return 0.0
    return sum(polygon.intersection(segment.to_shapely()).length for segment in trace.segments)
