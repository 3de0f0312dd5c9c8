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
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from .constants import DEFAULT_DISPLAY_LENGTH, DEFAULT_MAX_BOUNCES
from .geometry import Vector2
from .lens_profile import LensProfile, build_lens
from .projector import RayProjector, Trace
from .ray import Ray, Segment
from .surface import Surface

logger = logging.getLogger(__name__)


class DrawingSink(Protocol):
    """
    What a renderer must provide to draw a traced scene.

    The tracer only hands over geometry; pixel mapping, colours and file
    formats are the sink's business.
    """

    def draw_surface(self, surface: Surface) -> None:
        ...

    def draw_segment(self, segment: Segment) -> None:
        ...

    def draw_unbounded_ray(self, ray: Ray, display_length: float) -> None:
        ...


def render_scene(
    sink: DrawingSink,
    surfaces: Iterable[Surface],
    traces: Iterable[Trace],
    display_length: float = DEFAULT_DISPLAY_LENGTH
) -> None:
    """
    Feed surfaces and traces to a drawing sink.

    Rays are drawn first and surfaces last so that the surfaces stay visible
    on top of the ray paths.
    """
    for trace in traces:
        for segment in trace.segments:
            sink.draw_segment(segment)
        if trace.final_ray is not None:
            sink.draw_unbounded_ray(trace.final_ray, display_length)

    for surface in surfaces:
        sink.draw_surface(surface)


class LensScene:
    """
    Configuration of a single-lens scene and the fan of rays sent through it.

    The defaults reproduce the reference scene: a strongly refracting
    (n = 4.4) conic lens centred at (0, -40), hit by thirteen vertical rays
    from y = -100.

    Attributes:
        resolution (float): Radial sampling step of the lens profile
        scale_x, scale_y (float): Lens scale factors
        translate_x, translate_y (float): Lens position
        refractive_index (float): Lens material index
        c, k, K (float): Conic profile (curvature, vertex offset, conic constant)
        max_radius (float or None): Optional cap on the sampled radius
        max_bounces (int): Trace depth limit per ray
        ray_x_min, ray_x_max, ray_x_step (float): Entry ray positions along x
        ray_y (float): Entry ray start height
        ray_direction (Vector2): Direction of every entry ray
        display_length (float): Length used to draw each final unbounded ray
        name (str or None): Optional name for the scene (used in exports)
    """

    # Keys accepted by from_dict / produced by to_dict
    CONFIG_KEYS = (
        'resolution', 'scale_x', 'scale_y', 'translate_x', 'translate_y',
        'refractive_index', 'c', 'k', 'K', 'max_radius', 'max_bounces',
        'ray_x_min', 'ray_x_max', 'ray_x_step', 'ray_y', 'ray_direction',
        'display_length', 'name',
    )

    def __init__(self):
        """Initialize the reference scene."""
        self._resolution = 0.05
        self.scale_x = 4.0
        self.scale_y = 1.0
        self.translate_x = 0.0
        self.translate_y = -40.0
        self._refractive_index = 4.4
        self.c = -0.04
        self.k = 8.2
        self.K = 1.9
        self.max_radius: Optional[float] = None
        self._max_bounces = DEFAULT_MAX_BOUNCES
        self.ray_x_min = -30.0
        self.ray_x_max = 30.0
        self._ray_x_step = 5.0
        self.ray_y = -100.0
        self._ray_direction = Vector2(0.0, 1.0)
        self._display_length = DEFAULT_DISPLAY_LENGTH
        self.name: Optional[str] = None

    @property
    def resolution(self) -> float:
        return self._resolution

    @resolution.setter
    def resolution(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"Invalid resolution {value!r}: must be > 0")
        self._resolution = value

    @property
    def refractive_index(self) -> float:
        return self._refractive_index

    @refractive_index.setter
    def refractive_index(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"Invalid refractive_index {value!r}: must be > 0")
        self._refractive_index = value

    @property
    def max_bounces(self) -> int:
        return self._max_bounces

    @max_bounces.setter
    def max_bounces(self, value: int) -> None:
        if int(value) != value or value < 0:
            raise ValueError(f"Invalid max_bounces {value!r}: must be a non-negative integer")
        self._max_bounces = int(value)

    @property
    def ray_x_step(self) -> float:
        return self._ray_x_step

    @ray_x_step.setter
    def ray_x_step(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"Invalid ray_x_step {value!r}: must be > 0")
        self._ray_x_step = value

    @property
    def ray_direction(self) -> Vector2:
        return self._ray_direction

    @ray_direction.setter
    def ray_direction(self, value) -> None:
        if isinstance(value, dict):
            value = Vector2(float(value['x']), float(value['y']))
        elif not isinstance(value, Vector2):
            value = Vector2(float(value[0]), float(value[1]))
        if value.length() == 0:
            raise ValueError("Invalid ray_direction: must be non-zero")
        self._ray_direction = value

    @property
    def display_length(self) -> float:
        return self._display_length

    @display_length.setter
    def display_length(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"Invalid display_length {value!r}: must be >= 0")
        self._display_length = value

    def lens_profile(self) -> LensProfile:
        """The lens description for the current settings."""
        return LensProfile(
            resolution=self.resolution,
            scale_x=self.scale_x,
            scale_y=self.scale_y,
            translate_x=self.translate_x,
            translate_y=self.translate_y,
            refractive_index=self.refractive_index,
            c=self.c,
            k=self.k,
            K=self.K,
            max_radius=self.max_radius,
        )

    def build_surfaces(self) -> List[Surface]:
        return build_lens(self.lens_profile())

    def entry_rays(self) -> List[Ray]:
        """
        The fan of entry rays: one per x in [ray_x_min, ray_x_max] (inclusive)
        spaced by ray_x_step, all starting at ray_y.
        """
        count = int(np.floor((self.ray_x_max - self.ray_x_min) / self.ray_x_step + 1e-9)) + 1
        xs = self.ray_x_min + self.ray_x_step * np.arange(max(count, 0))
        return [Ray(Vector2(float(x), self.ray_y), self.ray_direction) for x in xs]

    def trace(self, surfaces: Optional[Sequence[Surface]] = None) -> List[Trace]:
        """
        Trace every entry ray.

        Args:
            surfaces: Surfaces to use; built from the lens settings if None

        Returns:
            One Trace per entry ray, in order of increasing x
        """
        if surfaces is None:
            surfaces = self.build_surfaces()
        projector = RayProjector(surfaces, max_bounces=self.max_bounces)
        traces = projector.project_all(self.entry_rays())
        exhausted = sum(1 for t in traces if t.exhausted)
        if exhausted:
            logger.info("%d of %d rays hit the bounce limit (%d)",
                        exhausted, len(traces), self.max_bounces)
        return traces

    def to_dict(self) -> Dict[str, Any]:
        data = {key: getattr(self, key) for key in self.CONFIG_KEYS}
        data['ray_direction'] = self.ray_direction.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LensScene':
        """
        Build a scene from a settings dictionary. Missing keys keep their
        defaults.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        unknown = set(data) - set(cls.CONFIG_KEYS)
        if unknown:
            raise ValueError(
                f"Unknown scene settings {sorted(unknown)}. "
                f"Valid options: {cls.CONFIG_KEYS}"
            )
        scene = cls()
        for key, value in data.items():
            setattr(scene, key, value)
        return scene

    def __repr__(self) -> str:
        return (f"LensScene(name={self.name!r}, n={self.refractive_index}, "
                f"c={self.c}, k={self.k}, K={self.K}, max_bounces={self.max_bounces})")
