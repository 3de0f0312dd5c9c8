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
Analysis Utilities
===============================================================================
Helpers that sit outside the tracing core:

- Trace export (CSV) and scene settings (JSON)
- Trace statistics
- Lens outline, polygon and containment checks (Shapely)
===============================================================================
"""

from .saving import (
    save_traces_csv,
    get_trace_statistics,
    save_scene_json,
    load_scene_json,
)
from .lens_geometry import (
    lens_outline,
    lens_polygon,
    lens_area,
    rim_gap,
    point_in_lens,
    path_length_inside,
)

__all__ = [
    'save_traces_csv',
    'get_trace_statistics',
    'save_scene_json',
    'load_scene_json',
    'lens_outline',
    'lens_polygon',
    'lens_area',
    'rim_gap',
    'point_in_lens',
    'path_length_inside',
]
