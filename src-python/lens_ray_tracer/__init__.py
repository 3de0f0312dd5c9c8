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

Lens Ray Tracer
===============

A 2D geometric-optics tracer for lenses approximated by straight surfaces.

Main modules:
- core: Vector algebra, surfaces, lens profiles, intersection, refraction,
  multi-bounce projection and the SVG drawing sink
- analysis: Export and lens outline utilities
- examples: Example scenes

Quick start:
    from lens_ray_tracer import LensScene, SVGRenderer, render_scene
    scene = LensScene()
    surfaces = scene.build_surfaces()
    traces = scene.trace(surfaces)
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import Vector2
from .core.surface import Surface
from .core.ray import Ray, Segment
from .core.projector import RayProjector, Trace
from .core.lens_profile import LensProfile, build_lens
from .core.scene import LensScene, render_scene
from .core.svg_renderer import SVGRenderer

__all__ = [
    'Vector2',
    'Surface',
    'Ray',
    'Segment',
    'RayProjector',
    'Trace',
    'LensProfile',
    'build_lens',
    'LensScene',
    'render_scene',
    'SVGRenderer',
    '__version__',
]
