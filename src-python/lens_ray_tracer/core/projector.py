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
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .constants import (
    AMBIENT_REFRACTIVE_INDEX,
    DEFAULT_MAX_BOUNCES,
    DEFAULT_MIN_HIT_DISTANCE,
)
from .intersection import find_nearest
from .ray import Ray, Segment
from .refraction import refract
from .surface import Surface

logger = logging.getLogger(__name__)


@dataclass
class Trace:
    """
    Result of projecting one ray through a set of surfaces.

    Attributes:
        segments: Bounded pieces of the path, in travel order
        final_ray: The unbounded ray left after the last event
        tir_count: How many of the bounces were total internal reflections
        exhausted: True if tracing stopped because the bounce limit was reached
            rather than because the ray escaped
    """
    segments: List[Segment] = field(default_factory=list)
    final_ray: Optional[Ray] = None
    tir_count: int = 0
    exhausted: bool = False

    @property
    def bounce_count(self) -> int:
        return len(self.segments)


class RayProjector:
    """
    Multi-bounce tracer over a fixed set of surfaces.

    Each step finds the nearest surface along the current ray, refracts (or
    totally reflects) there, records the segment and carries on from the
    continuation ray. Tracing ends when nothing is hit or after `max_bounces`
    steps, whichever comes first.

    Two guards keep a ray from re-hitting the surface it is leaving:

    - `exclude_previous`: skip the surface hit in the previous step.
    - `min_distance`: ignore hits closer than this to the ray origin.

    Both are on by default. A ray leaving a polyline vertex sits on the
    neighbouring surface as well, which only the distance guard catches.
    Turning `exclude_previous` off lets a ray legitimately hit the same
    surface again later in its path.

    Attributes:
        surfaces (list): Surfaces to trace through; read-only during tracing
        max_bounces (int): Maximum number of intersection events per ray
        ambient_index (float): Index of the medium outside every surface
        exclude_previous (bool): Enable the previous-surface guard
        min_distance (float): Distance guard, 0.0 disables it (default: 1e-6)
    """

    def __init__(
        self,
        surfaces: Sequence[Surface],
        max_bounces: int = DEFAULT_MAX_BOUNCES,
        ambient_index: float = AMBIENT_REFRACTIVE_INDEX,
        exclude_previous: bool = True,
        min_distance: float = DEFAULT_MIN_HIT_DISTANCE
    ) -> None:
        if max_bounces < 0:
            raise ValueError(f"max_bounces must be >= 0, got {max_bounces}")
        if not ambient_index > 0:
            raise ValueError(f"ambient_index must be > 0, got {ambient_index}")
        if min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {min_distance}")
        self.surfaces: List[Surface] = list(surfaces)
        self.max_bounces: int = max_bounces
        self.ambient_index: float = ambient_index
        self.exclude_previous: bool = exclude_previous
        self.min_distance: float = min_distance

    def project(self, ray: Ray) -> Trace:
        """
        Trace a single ray.

        Args:
            ray: Entry ray

        Returns:
            Trace with the segments in order and the final unbounded ray.
        """
        trace = Trace(final_ray=ray)
        ignore = None

        for count in range(self.max_bounces):
            nearest = find_nearest(
                trace.final_ray,
                self.surfaces,
                exclude=ignore if self.exclude_previous else None,
                min_distance=self.min_distance,
            )
            if nearest is None:
                break

            index, hit = nearest
            ignore = index

            result = refract(trace.final_ray, self.surfaces[index], self.ambient_index, hit)
            logger.debug("bounce %d: surface %d at %s, distance=%.6f%s",
                         count, index, hit.point, hit.distance,
                         " (TIR)" if result.total_internal_reflection else "")

            trace.segments.append(result.segment)
            trace.final_ray = result.continuation
            if result.total_internal_reflection:
                trace.tir_count += 1
        else:
            # Loop ran to the limit without the ray escaping
            trace.exhausted = self.max_bounces > 0
            if trace.exhausted:
                logger.debug("bounce limit (%d) reached for ray starting at %s",
                             self.max_bounces, ray.start)

        return trace

    def project_all(self, rays: Iterable[Ray]) -> List[Trace]:
        """
        Trace several rays independently.

        Returns:
            One Trace per ray, in input order.
        """
        traces = [self.project(ray) for ray in rays]
        logger.info("traced %d rays through %d surfaces", len(traces), len(self.surfaces))
        return traces


def project(ray: Ray, surfaces: Sequence[Surface], max_bounces: int = DEFAULT_MAX_BOUNCES) -> Trace:
    """
    Trace `ray` through `surfaces` with the default guards and air as the
    ambient medium.

    Args:
        ray: Entry ray
        surfaces: Surfaces to trace through
        max_bounces: Maximum number of intersection events

    Returns:
        Trace
    """
    return RayProjector(surfaces, max_bounces=max_bounces).project(ray)
