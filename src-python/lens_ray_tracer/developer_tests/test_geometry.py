"""
===============================================================================
GEOMETRY PRIMITIVES TESTS
===============================================================================

Tests for Vector2, Surface, Ray and Segment:

1. VECTOR ARITHMETIC
   - dot / cross / length
   - normalize() yields unit vectors, rejects the zero vector

2. SURFACES
   - from_points() keeps direction and length consistent
   - Validation of orientation, refractive index, coincident endpoints
   - Side classification (is_ambient_side)

3. RAYS AND SEGMENTS
   - point_at() uses Euclidean distance
   - Segment end points

Run with:
    pytest developer_tests/test_geometry.py -v
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

from lens_ray_tracer.core.errors import DegenerateGeometryError, LensTraceError
from lens_ray_tracer.core.geometry import Vector2, vec
from lens_ray_tracer.core.ray import Ray, Segment
from lens_ray_tracer.core.surface import Surface, is_ambient_side, new_surface


TOLERANCE = 1e-12


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# VECTOR ARITHMETIC
# =============================================================================

def test_vector_products():
    a = Vector2(3.0, 4.0)
    b = Vector2(-2.0, 1.0)

    assert a.dot(b) == -2.0
    assert a.cross(b) == 11.0
    assert b.cross(a) == -11.0
    assert a.length() == 5.0
    assert a + b == Vector2(1.0, 5.0)
    assert a - b == Vector2(5.0, 3.0)
    assert 2 * a == a * 2 == Vector2(6.0, 8.0)
    assert -a == Vector2(-3.0, -4.0)


@pytest.mark.parametrize("x, y", [
    (1.0, 0.0),
    (3.0, 4.0),
    (-1e-8, 2e-8),
    (1e8, -3e8),
])
def test_normalize_is_unit(x, y):
    n = Vector2(x, y).normalize()
    assert_close(n.length(), 1.0, 1e-12, "normalized length")
    # Same direction: parallel and pointing the same way
    assert_close(n.cross(Vector2(x, y)), 0.0, 1e-12 * Vector2(x, y).length(), "cross with input")
    assert n.dot(Vector2(x, y)) > 0


def test_normalize_zero_vector_raises():
    with pytest.raises(DegenerateGeometryError):
        Vector2(0.0, 0.0).normalize()

    # Usable both as a library error and as a plain ValueError
    with pytest.raises(ValueError):
        Vector2(0.0, 0.0).normalize()
    assert issubclass(DegenerateGeometryError, LensTraceError)


def test_shapely_conversion():
    v = vec(1, -2)
    assert isinstance(v.x, float)
    p = v.to_shapely()
    assert (p.x, p.y) == (1.0, -2.0)
    assert Vector2.from_shapely(p) == v
    assert v.to_dict() == {'x': 1.0, 'y': -2.0}


# =============================================================================
# SURFACES
# =============================================================================

def test_surface_from_points():
    s = Surface.from_points(Vector2(1.0, 1.0), Vector2(4.0, 5.0), 1, 1.5)

    assert_close(s.length, 5.0, msg="length")
    assert_close(s.direction.x, 0.6, msg="direction.x")
    assert_close(s.direction.y, 0.8, msg="direction.y")
    assert_close(s.end.x, 4.0, 1e-12, "end.x")
    assert_close(s.end.y, 5.0, 1e-12, "end.y")
    assert s.orientation == 1
    assert s.refractive_index == 1.5

    line = s.to_shapely()
    assert_close(line.length, 5.0, 1e-12, "shapely length")


def test_new_surface_matches_from_points():
    a = new_surface(Vector2(0.0, 0.0), Vector2(0.0, 2.0), -1, 2.0)
    b = Surface.from_points(Vector2(0.0, 0.0), Vector2(0.0, 2.0), -1, 2.0)
    assert a == b


def test_surface_coincident_endpoints_raise():
    with pytest.raises(DegenerateGeometryError):
        Surface.from_points(Vector2(2.0, 3.0), Vector2(2.0, 3.0), 1, 1.5)


@pytest.mark.parametrize("orientation, index", [
    (0, 1.5),
    (2, 1.5),
    (1, 0.0),
    (-1, -1.2),
])
def test_surface_invalid_parameters(orientation, index):
    with pytest.raises(ValueError):
        Surface.from_points(Vector2(0.0, 0.0), Vector2(1.0, 0.0), orientation, index)


def test_surface_requires_unit_direction():
    with pytest.raises(DegenerateGeometryError):
        Surface(Vector2(0.0, 0.0), Vector2(2.0, 0.0), 1.0, 1, 1.5)


def test_ambient_side_positive_orientation():
    # Surface along +x; orientation +1 puts the medium on the left, i.e. above
    s = Surface.from_points(Vector2(-10.0, 0.0), Vector2(10.0, 0.0), 1, 1.5)

    assert not is_ambient_side(Vector2(0.0, 5.0), s), "above is medium"
    assert is_ambient_side(Vector2(0.0, -5.0), s), "below is ambient"
    assert is_ambient_side(Vector2(3.0, 0.0), s), "on the line counts as ambient"
    # The infinite line decides, not the finite extent
    assert not is_ambient_side(Vector2(100.0, 1.0), s)


def test_ambient_side_negative_orientation():
    s = Surface.from_points(Vector2(-10.0, 0.0), Vector2(10.0, 0.0), -1, 1.5)

    assert is_ambient_side(Vector2(0.0, 5.0), s)
    assert not is_ambient_side(Vector2(0.0, -5.0), s)


def test_implicit_value_sign():
    s = Surface.from_points(Vector2(0.0, 0.0), Vector2(0.0, 1.0), 1, 1.5)
    # Direction +y: left of it is -x
    assert s.implicit_value(Vector2(-2.0, 0.5)) > 0
    assert s.implicit_value(Vector2(2.0, 0.5)) < 0
    assert s.implicit_value(Vector2(0.0, 7.0)) == 0


# =============================================================================
# RAYS AND SEGMENTS
# =============================================================================

def test_ray_zero_direction_raises():
    with pytest.raises(DegenerateGeometryError):
        Ray(Vector2(0.0, 0.0), Vector2(0.0, 0.0))


def test_ray_point_at_uses_distance():
    # Non-unit direction: point_at still moves by Euclidean distance
    ray = Ray(Vector2(1.0, 1.0), Vector2(0.0, 3.0))
    p = ray.point_at(2.0)
    assert_close(p.x, 1.0, msg="x")
    assert_close(p.y, 3.0, msg="y")


def test_ray_to_segment():
    ray = Ray(Vector2(0.0, 0.0), Vector2(3.0, 4.0))
    seg = ray.to_segment(10.0)
    assert_close(seg.direction.length(), 1.0, msg="unit direction")
    assert_close(seg.end.x, 6.0, 1e-12, "end.x")
    assert_close(seg.end.y, 8.0, 1e-12, "end.y")


def test_segment_negative_length_raises():
    with pytest.raises(ValueError):
        Segment(Vector2(0.0, 0.0), Vector2(1.0, 0.0), -1.0)


def test_segment_shapely_length():
    seg = Segment(Vector2(1.0, 2.0), Vector2(0.0, -1.0), 4.5)
    assert seg.end == Vector2(1.0, -2.5)
    assert math.isclose(seg.to_shapely().length, 4.5)
    assert seg.to_dict()['length'] == 4.5
