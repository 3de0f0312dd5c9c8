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

"""Exceptions raised by the lens ray tracer."""


class LensTraceError(Exception):
    """Base class for errors raised by lens_ray_tracer."""


class DegenerateGeometryError(LensTraceError, ValueError):
    """
    Raised when geometry that the tracer cannot work with is constructed.

    This covers normalizing a zero-length vector and building a surface whose
    two endpoints coincide. Both are caller errors and are rejected at
    construction time rather than recovered from during a trace.
    """
