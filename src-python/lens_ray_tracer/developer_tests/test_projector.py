"""
===============================================================================
RAY PROJECTOR TESTS - Multi-bounce Tracing
===============================================================================

1. SINGLE SURFACE
   - One refraction, one segment, final ray from the hit point
   - Rays that hit nothing

2. BOUNCE LIMIT
   - A ray trapped between two parallel surfaces by total internal reflection
     produces exactly max_bounces segments and is flagged as exhausted

3. SELF-HIT GUARDS
   - Without any guard a ray re-hits the surface it is leaving
   - The distance guard alone is enough to keep tracing correct

4. SLAB
   - Entry and exit through a flat slab built by the lens builder
   - Exit direction parallel to the entry direction

Run with:
    pytest developer_tests/test_projector.py -v
===============================================================================
"""

import math
import sys
from pathlib import Path

import pytest

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from lens_ray_tracer.core.geometry import Vector2
from lens_ray_tracer.core.lens_profile import LensProfile, build_lens
from lens_ray_tracer.core.projector import RayProjector, Trace, project
from lens_ray_tracer.core.ray import Ray
from lens_ray_tracer.core.surface import Surface


def cavity(n=1.5, width=1000.0):
    """
    Two horizontal surfaces at y = 0 and y = 1 with the medium between them.

    Bottom surface: along +x, medium on the left (above) -> orientation +1.
    Top surface: along +x, medium on the right (below) -> orientation -1.
    """
    return [
        Surface.from_points(Vector2(-width, 0.0), Vector2(width, 0.0), 1, n),
        Surface.from_points(Vector2(-width, 1.0), Vector2(width, 1.0), -1, n),
    ]


def trapped_ray():
    # 60 degrees from the normal, past the critical angle for n = 1.5
    a = math.radians(60.0)
    return Ray(Vector2(0.0, 0.5), Vector2(math.sin(a), math.cos(a)))


# =============================================================================
# SINGLE SURFACE
# =============================================================================

def test_single_surface_end_to_end():
    surface = Surface.from_points(Vector2(-10.0, 0.0), Vector2(10.0, 0.0), 1, 1.5)
    trace = project(Ray(Vector2(0.0, -5.0), Vector2(0.0, 1.0)), [surface])

    assert isinstance(trace, Trace)
    assert trace.bounce_count == 1
    assert not trace.exhausted
    assert trace.tir_count == 0

    seg = trace.segments[0]
    assert seg.start == Vector2(0.0, -5.0)
    assert seg.length == pytest.approx(5.0)
    assert seg.end.y == pytest.approx(0.0)

    assert trace.final_ray.start == Vector2(0.0, 0.0)
    assert trace.final_ray.direction.x == pytest.approx(0.0, abs=1e-12)
    assert trace.final_ray.direction.y == pytest.approx(1.0)


def test_no_surfaces():
    ray = Ray(Vector2(1.0, 2.0), Vector2(0.0, 1.0))
    trace = project(ray, [])

    assert trace.segments == []
    assert trace.final_ray == ray
    assert not trace.exhausted


def test_ray_missing_everything():
    ray = Ray(Vector2(0.0, -5.0), Vector2(0.0, -1.0))
    trace = project(ray, cavity())

    assert trace.bounce_count == 0
    assert trace.final_ray == ray


def test_zero_bounces():
    ray = trapped_ray()
    trace = RayProjector(cavity(), max_bounces=0).project(ray)

    assert trace.segments == []
    assert trace.final_ray == ray
    assert not trace.exhausted


def test_invalid_projector_settings():
    with pytest.raises(ValueError):
        RayProjector([], max_bounces=-1)
    with pytest.raises(ValueError):
        RayProjector([], ambient_index=0.0)
    with pytest.raises(ValueError):
        RayProjector([], min_distance=-1.0)


# =============================================================================
# BOUNCE LIMIT
# =============================================================================

@pytest.mark.parametrize("max_bounces", [1, 5, 10, 32])
def test_trapped_ray_hits_bounce_limit(max_bounces):
    trace = project(trapped_ray(), cavity(), max_bounces=max_bounces)

    assert trace.bounce_count == max_bounces
    assert trace.exhausted
    assert trace.tir_count == max_bounces

    # Every bounce stays inside the slab and alternates between the surfaces
    for i, seg in enumerate(trace.segments):
        assert seg.length > 0
        expected_y = 1.0 if i % 2 == 0 else 0.0
        assert seg.end.y == pytest.approx(expected_y, abs=1e-9)


def test_trapped_ray_zigzag_lengths():
    trace = project(trapped_ray(), cavity(), max_bounces=6)
    lengths = [seg.length for seg in trace.segments]

    # First leg crosses half the slab, the rest cross all of it
    assert lengths[0] == pytest.approx(0.5 / math.cos(math.radians(60.0)))
    for length in lengths[1:]:
        assert length == pytest.approx(1.0 / math.cos(math.radians(60.0)))


def test_escaping_ray_not_exhausted():
    # 30 degrees is below the critical angle: the ray leaves through the top
    a = math.radians(30.0)
    ray = Ray(Vector2(0.0, 0.5), Vector2(math.sin(a), math.cos(a)))
    trace = project(ray, cavity(), max_bounces=32)

    assert trace.bounce_count == 1
    assert not trace.exhausted
    assert trace.final_ray.direction.y > 0
    assert trace.final_ray.start.y == pytest.approx(1.0)


# =============================================================================
# SELF-HIT GUARDS
# =============================================================================

def test_without_guards_ray_rehits_surface():
    projector = RayProjector(cavity(), max_bounces=4, exclude_previous=False, min_distance=0.0)
    trace = projector.project(trapped_ray())

    # After the first reflection the continuation starts on the surface it
    # just left and hits it again immediately
    assert trace.segments[1].length < 1e-9


def test_distance_guard_alone():
    projector = RayProjector(cavity(), max_bounces=8, exclude_previous=False, min_distance=1e-6)
    trace = projector.project(trapped_ray())

    assert trace.bounce_count == 8
    assert all(seg.length > 1e-6 for seg in trace.segments)
    assert trace.tir_count == 8


def test_project_all_keeps_order():
    surface = Surface.from_points(Vector2(-10.0, 0.0), Vector2(10.0, 0.0), 1, 1.5)
    rays = [Ray(Vector2(x, -1.0), Vector2(0.0, 1.0)) for x in (-20.0, 0.0, 5.0)]
    traces = RayProjector([surface]).project_all(rays)

    assert [t.bounce_count for t in traces] == [0, 1, 1]
    assert traces[2].final_ray.start.x == pytest.approx(5.0)


# =============================================================================
# SLAB
# =============================================================================

def slab_profile(n=1.5):
    # c = 0 gives a flat 4 x 2 slab: sag is k = 1 everywhere up to max_radius
    return LensProfile(resolution=0.5, refractive_index=n, c=0.0, k=1.0, max_radius=2.0)


def test_slab_vertical_ray():
    surfaces = build_lens(slab_profile())
    trace = project(Ray(Vector2(0.25, -5.0), Vector2(0.0, 1.0)), surfaces)

    assert trace.bounce_count == 2
    assert trace.segments[0].length == pytest.approx(4.0)
    assert trace.segments[1].length == pytest.approx(2.0)
    assert trace.final_ray.start.y == pytest.approx(1.0)
    assert trace.final_ray.direction.x == pytest.approx(0.0, abs=1e-12)


def test_slab_oblique_ray_exits_parallel():
    surfaces = build_lens(slab_profile())
    incoming = Vector2(1.0, 2.0).normalize()
    trace = project(Ray(Vector2(-0.9, -5.0), incoming), surfaces)

    assert trace.bounce_count == 2
    # Bent towards the normal inside the slab
    inside = trace.segments[1].direction
    sin_in = incoming.x
    assert inside.x == pytest.approx(sin_in / 1.5)

    out = trace.final_ray.direction.normalize()
    assert out.cross(incoming) == pytest.approx(0.0, abs=1e-12)
    assert out.dot(incoming) > 0
