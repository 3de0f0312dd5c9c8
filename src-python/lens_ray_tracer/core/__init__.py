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

from .geometry import Vector2, vec
from . import constants
from .errors import LensTraceError, DegenerateGeometryError
from .surface import Surface, new_surface, is_ambient_side
from .ray import Ray, Segment
from .intersection import Intersection, intersect, find_nearest
from .refraction import Refraction, refract
from .projector import RayProjector, Trace, project
from .lens_profile import LensProfile, sag, build_lens, make_lens
from .scene import LensScene, DrawingSink, render_scene
from .svg_renderer import SVGRenderer

__all__ = [
    'Vector2', 'vec',
    'constants',
    'LensTraceError', 'DegenerateGeometryError',
    'Surface', 'new_surface', 'is_ambient_side',
    'Ray', 'Segment',
    'Intersection', 'intersect', 'find_nearest',
    'Refraction', 'refract',
    'RayProjector', 'Trace', 'project',
    'LensProfile', 'sag', 'build_lens', 'make_lens',
    'LensScene', 'DrawingSink', 'render_scene',
    'SVGRenderer',
]
