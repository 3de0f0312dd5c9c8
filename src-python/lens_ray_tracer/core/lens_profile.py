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

"""
Conic-section lens profiles sampled into straight surfaces.

A lens cross-section is described by the sag function

    sag(r) = k + c * r^2 / (1 + sqrt(1 - (K + 1) * c^2 * r^2))

with curvature c, vertex offset k and conic constant K. The profile is sampled
from the axis outwards and each pair of neighbouring samples becomes four
surfaces, one per quadrant, so that the result is a closed polyline around
the lens interior.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .geometry import Vector2
from .surface import Surface

logger = logging.getLogger(__name__)

# (x sign, y sign, orientation) per quadrant, in emission order:
# top-right, top-left, bottom-right, bottom-left.
# The orientations put the medium side of every surface inside the lens.
QUADRANTS = (
    (1, 1, -1),
    (-1, 1, 1),
    (1, -1, 1),
    (-1, -1, -1),
)


def sag(r: float, c: float, k: float, K: float) -> Optional[float]:
    """
    Evaluate the conic sag at radius r.

    Args:
        r: Radial distance from the lens axis
        c: Curvature (1 / radius of curvature)
        k: Vertex offset
        K: Conic constant

    Returns:
        The sag, or None where the square root has no real value (beyond the
        aperture edge of the conic).
    """
    radicand = 1 - (K + 1) * c * c * r * r
    if radicand < 0:
        return None
    return k + (c * r * r) / (1 + math.sqrt(radicand))


@dataclass
class LensProfile:
    """
    Parameters of a symmetric conic lens and its placement in the scene.

    Attributes:
        resolution: Radial sampling step
        scale_x, scale_y: Scale applied to (r, sag) samples
        translate_x, translate_y: Offset applied after scaling and mirroring
        refractive_index: Index of the lens material
        c: Curvature
        k: Vertex offset (half the centre thickness before scaling)
        K: Conic constant
        max_radius: Optional cap on the sampled radius (unscaled). Required
            when the profile never reaches its rim on its own, e.g. a flat
            slab (c = 0) or a paraboloid bulging outwards.
    """
    resolution: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    refractive_index: float = 1.5
    c: float = 0.0
    k: float = 1.0
    K: float = 0.0
    max_radius: Optional[float] = None

    def __post_init__(self):
        if not self.resolution > 0:
            raise ValueError(f"resolution must be > 0, got {self.resolution}")
        if not (self.scale_x > 0 and self.scale_y > 0):
            raise ValueError(f"scale factors must be > 0, got ({self.scale_x}, {self.scale_y})")
        if not self.refractive_index > 0:
            raise ValueError(f"refractive_index must be > 0, got {self.refractive_index}")
        if self.max_radius is None and self.is_unbounded():
            raise ValueError(
                f"profile c={self.c}, k={self.k}, K={self.K} has no rim; set max_radius"
            )

    def is_unbounded(self) -> bool:
        """True if the sag stays defined and positive for every radius."""
        return (self.K + 1) * self.c * self.c <= 0 and self.c >= 0 and self.k > 0

    def sag(self, r: float) -> Optional[float]:
        return sag(r, self.c, self.k, self.K)

    def samples(self) -> List[Tuple[float, float]]:
        """
        Sample the profile from r = 0 outwards.

        Sampling stops at the first radius where the sag is undefined or no
        longer positive, i.e. where the top and bottom halves of the lens
        would meet or cross, or beyond `max_radius` if one is set.

        Returns:
            List of (r, sag) pairs in increasing r
        """
        points = []
        i = 0
        while True:
            r = i * self.resolution
            if self.max_radius is not None and r > self.max_radius:
                break
            value = self.sag(r)
            if value is None or value <= 0:
                break
            points.append((r, value))
            i += 1
        return points

    @property
    def aperture_radius(self) -> float:
        """Largest sampled radius (unscaled), 0.0 if nothing was sampled."""
        points = self.samples()
        return points[-1][0] if points else 0.0

    def place(self, r: float, h: float, sign_x: int, sign_y: int) -> Vector2:
        """Mirror a profile sample into a quadrant, scale it and translate it."""
        return Vector2(
            sign_x * r * self.scale_x + self.translate_x,
            sign_y * h * self.scale_y + self.translate_y,
        )


def build_lens(profile: LensProfile) -> List[Surface]:
    """
    Turn a lens profile into surfaces.

    Args:
        profile: Lens description

    Returns:
        List of surfaces, four per sampling step (see QUADRANTS for the order).
        Empty if the profile has fewer than two samples.
    """
    surfaces: List[Surface] = []
    points = profile.samples()

    for (r_prev, h_prev), (r, h) in zip(points, points[1:]):
        for sign_x, sign_y, orientation in QUADRANTS:
            surfaces.append(Surface.from_points(
                profile.place(r_prev, h_prev, sign_x, sign_y),
                profile.place(r, h, sign_x, sign_y),
                orientation,
                profile.refractive_index,
            ))

    logger.info("built %d lens surfaces from %d profile samples", len(surfaces), len(points))
    return surfaces


def make_lens(
    resolution: float,
    sx: float,
    sy: float,
    tx: float,
    ty: float,
    index: float,
    c: float,
    k: float,
    K: float,
    max_radius: Optional[float] = None
) -> List[Surface]:
    """Positional shorthand for ``build_lens(LensProfile(...))``."""
    return build_lens(LensProfile(
        resolution=resolution,
        scale_x=sx,
        scale_y=sy,
        translate_x=tx,
        translate_y=ty,
        refractive_index=index,
        c=c,
        k=k,
        K=K,
        max_radius=max_radius,
    ))
