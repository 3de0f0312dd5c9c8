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
Constants used throughout the lens ray tracer.

Kept in their own module so that the intersection, refraction and projection
modules can share them without circular imports.
"""

# Refractive index of the ambient medium (air) for every top-level trace
AMBIENT_REFRACTIVE_INDEX = 1.0

# Below this |cross(ray.direction, surface.direction)| the ray and the
# surface are treated as parallel (no intersection)
PARALLEL_TOLERANCE = 1e-12

# Default depth cap for a single ray trace
DEFAULT_MAX_BOUNCES = 32

# Hits closer than this to the ray origin are ignored by the projector.
# Stops a ray that leaves a polyline vertex from re-hitting the neighbouring
# surface at zero distance.
DEFAULT_MIN_HIT_DISTANCE = 1e-6

# Length used to draw the final unbounded ray of each trace
DEFAULT_DISPLAY_LENGTH = 500.0

# Orientation values a surface may carry
ORIENTATIONS = (1, -1)
