"""
===============================================================================
SURFACE PROFILE TESTS
===============================================================================

Covers the bezel height functions:

1. Range: every profile stays finite and bounded on [0, 1]
2. Endpoints of the convex/concave profiles and of the lip blend
3. Name resolution: closed set, unknown names rejected

Run with:
    python developer_tests/test_surface_profiles.py

Or with pytest:
    pytest developer_tests/test_surface_profiles.py -v
===============================================================================
"""

import math
import os
import sys

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from liquid_glass.core.surface_profiles import (
    SURFACE_FUNCTIONS,
    SurfaceType,
    concave,
    convex_circle,
    convex_squircle,
    lip,
    parse_surface_type,
    resolve_surface_profile,
    smootherstep,
)

TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# RANGE
# =============================================================================

def test_profiles_finite_and_bounded():
    print("\n" + "=" * 60)
    print("TEST: Profiles are finite and bounded on [0, 1]")
    print("=" * 60)

    xs = [i / 200 for i in range(201)]
    for surface_type, fn in SURFACE_FUNCTIONS.items():
        heights = [fn(x) for x in xs]
        assert all(math.isfinite(h) for h in heights), f"{surface_type} not finite"
        assert min(heights) >= -TOLERANCE, f"{surface_type} below 0"
        assert max(heights) <= 1.1 + TOLERANCE, f"{surface_type} above 1.1"
        print(f"  {surface_type.value}: [{min(heights):.4f}, {max(heights):.4f}] - PASS")


# =============================================================================
# ENDPOINTS
# =============================================================================

def test_convex_and_concave_endpoints():
    for fn in (convex_circle, convex_squircle, concave):
        assert_close(fn(0.0), 0.0, msg=f"{fn.__name__}(0)")
        assert_close(fn(1.0), 1.0, msg=f"{fn.__name__}(1)")

    # Convex profiles rise fastest at the rim, concave at the inner edge
    assert convex_circle(0.5) > 0.5
    assert convex_squircle(0.5) > convex_circle(0.5)
    assert concave(0.5) < 0.5
    print("  Convex/concave endpoints - PASS")


def test_lip_blend_endpoints():
    print("\n" + "=" * 60)
    print("TEST: lip blend weight endpoints")
    print("=" * 60)

    assert_close(smootherstep(0.0), 0.0, msg="smootherstep(0)")
    assert_close(smootherstep(0.5), 0.5, msg="smootherstep(0.5)")
    assert_close(smootherstep(1.0), 1.0, msg="smootherstep(1)")

    # Weight 0 at the rim: the boundary value shared by concave and squircle
    assert_close(lip(0.0), concave(0.0), msg="lip(0) vs concave(0)")
    assert_close(lip(0.0), convex_squircle(0.0), msg="lip(0) vs squircle(0)")

    # Weight 1 at the inner edge: only the lifted trough term remains
    assert_close(lip(1.0), 0.1, msg="lip(1)")
    print(f"  lip(0)={lip(0.0):.4f}, lip(1)={lip(1.0):.4f} - PASS")


def test_lip_has_raised_rim():
    # The compressed squircle reaches full height by x = 0.5 before the
    # blend pulls it down into the trough
    peak = max(lip(i / 100) for i in range(101))
    assert peak > 0.5
    assert lip(0.25) > lip(1.0)
    print(f"  lip peak {peak:.4f} - PASS")


# =============================================================================
# RESOLUTION
# =============================================================================

def test_resolve_by_name_and_type():
    assert resolve_surface_profile('convex_circle') is convex_circle
    assert resolve_surface_profile(SurfaceType.LIP) is lip
    assert parse_surface_type('concave') is SurfaceType.CONCAVE
    assert len(SURFACE_FUNCTIONS) == 4
    print("  Name resolution - PASS")


def test_unknown_surface_rejected():
    for bad in ('wavy', '', 'CONVEX_CIRCLE'):
        try:
            parse_surface_type(bad)
        except ValueError as e:
            assert 'Valid options' in str(e)
        else:
            raise AssertionError(f"Expected ValueError for {bad!r}")
    print("  Unknown surface names rejected - PASS")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    tests = [
        ("Profiles finite and bounded", test_profiles_finite_and_bounded),
        ("Convex/concave endpoints", test_convex_and_concave_endpoints),
        ("lip blend endpoints", test_lip_blend_endpoints),
        ("lip raised rim", test_lip_has_raised_rim),
        ("Resolve by name", test_resolve_by_name_and_type),
        ("Unknown surface", test_unknown_surface_rejected),
    ]

    passed = 0
    errors = []
    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}\n    Error: {e}")

    print("\n" + "=" * 60)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 60)
    return not errors


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
