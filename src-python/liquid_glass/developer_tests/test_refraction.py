"""
===============================================================================
REFRACTION SOLVER TESTS
===============================================================================

1. TABLE SHAPE
   - Exact requested length, finite entries, deterministic output
2. TOTAL INTERNAL REFLECTION
   - Entries are 0 exactly where the discriminant k is negative
3. MAXIMUM DISPLACEMENT
   - max |entry|, with 1 substituted for an all-zero table
   - Grows with the refractive index

Run with:
    python developer_tests/test_refraction.py

Or with pytest:
    pytest developer_tests/test_refraction.py -v
===============================================================================
"""

import math
import os
import sys

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from liquid_glass.core.constants import FINITE_DIFFERENCE_STEP
from liquid_glass.core.refraction import (
    RefractionTable,
    compute_refraction_table,
    refract,
    trace_bezel,
)
from liquid_glass.core.surface_profiles import SurfaceType, convex_circle

TOLERANCE = 1e-9


def manual_k(profile, x, refractive_index):
    """Discriminant of the vector refraction, computed by hand."""
    y = profile(x)
    dx = FINITE_DIFFERENCE_STEP if x < 1 else -FINITE_DIFFERENCE_STEP
    slope = (profile(max(0.0, min(1.0, x + dx))) - y) / dx
    normal_y = -1.0 / math.sqrt(slope * slope + 1.0)
    eta = 1.0 / refractive_index
    return 1.0 - eta * eta * (1.0 - normal_y * normal_y)


# =============================================================================
# TABLE SHAPE
# =============================================================================

def test_table_length_and_finiteness():
    print("\n" + "=" * 60)
    print("TEST: Table length and finiteness")
    print("=" * 60)

    for surface_type in SurfaceType:
        for count in (1, 7, 64, 128):
            table = compute_refraction_table(surface_type, 1.5, 30, 150, count)
            assert len(table) == count, f"{surface_type.value}: {len(table)} != {count}"
            assert all(math.isfinite(v) for v in table), f"{surface_type.value}: non-finite"
        print(f"  {surface_type.value} - PASS")


def test_default_sample_count():
    table = compute_refraction_table('convex_squircle', 1.5, 30, 150)
    assert len(table) == 128


def test_pure_and_deterministic():
    a = compute_refraction_table('lip', 1.33, 24, 90)
    b = compute_refraction_table('lip', 1.33, 24, 90)
    assert a == b
    assert a is not b
    c = compute_refraction_table('lip', 1.34, 24, 90)
    assert a != c
    print("  Deterministic output - PASS")


def test_refract_vertical_normal():
    # Normal straight into the glass: the ray goes through undeviated
    k, direction = refract(0.0, -1.0, 1.0 / 1.5)
    assert abs(k - 1.0) < TOLERANCE
    assert abs(direction[0]) < TOLERANCE
    assert abs(direction[1] - 1.0) < TOLERANCE


def test_flat_profile_has_no_displacement():
    table = compute_refraction_table(lambda x: 0.5, 1.5, 30, 150, 16)
    assert all(abs(v) < TOLERANCE for v in table)
    assert table.peak_displacement < TOLERANCE
    assert table.maximum_displacement == 1.0
    print("  Flat profile -> zero table, normalizer 1 - PASS")


# =============================================================================
# TOTAL INTERNAL REFLECTION
# =============================================================================

def test_tir_entries_are_zero_at_n_1_5():
    print("\n" + "=" * 60)
    print("TEST: TIR sentinel for convex_circle at n=1.5")
    print("=" * 60)

    count = 128
    table = compute_refraction_table('convex_circle', 1.5, 30, 150, count)
    for i in (0, 127):
        k = manual_k(convex_circle, i / count, 1.5)
        if k < 0:
            assert table[i] == 0.0, f"sample {i}: k={k} but entry {table[i]}"
        else:
            assert table[i] != 0.0, f"sample {i}: k={k} but entry is 0"
        print(f"  sample {i}: k={k:.6f}, entry={table[i]:.4f} - PASS")


def test_tir_on_rarer_glass():
    # n < 1 makes eta > 1; steep parts of the bezel reflect totally
    count = 128
    samples = trace_bezel('convex_circle', 0.5, 30, 150, count)
    table = compute_refraction_table('convex_circle', 0.5, 30, 150, count)

    for i, s in enumerate(samples):
        k = manual_k(convex_circle, i / count, 0.5)
        assert abs(k - s.k) < 1e-9
        if k < 0:
            assert s.is_tir
            assert table[i] == 0.0
        else:
            assert not s.is_tir

    assert samples[0].is_tir, "steep rim should reflect totally"
    assert not samples[127].is_tir, "nearly flat top should refract"
    tir = sum(1 for s in samples if s.is_tir)
    print(f"  {tir} TIR samples out of {count} - PASS")


# =============================================================================
# MAXIMUM DISPLACEMENT
# =============================================================================

def test_maximum_displacement_is_peak():
    table = compute_refraction_table('convex_squircle', 1.5, 30, 150)
    expected = max(abs(v) for v in table)
    assert table.peak_displacement == expected
    assert table.maximum_displacement == expected
    assert expected > 0


def test_maximum_displacement_grows_with_index():
    print("\n" + "=" * 60)
    print("TEST: Peak displacement vs refractive index")
    print("=" * 60)

    peaks = []
    for n in (1.0, 1.25, 1.5, 1.75, 2.0):
        table = compute_refraction_table('convex_circle', n, 30, 150)
        peaks.append(table.peak_displacement)
        print(f"  n={n}: peak={table.peak_displacement:.4f}")

    assert peaks[0] < TOLERANCE, "n=1 should not bend the rays"
    for lower, higher in zip(peaks, peaks[1:]):
        assert higher > lower, f"not monotonic: {peaks}"
    print("  Monotonic - PASS")


def test_table_sequence_protocol():
    table = RefractionTable([1.0, -3.0, 2.0])
    assert len(table) == 3
    assert table[1] == -3.0
    assert list(table) == [1.0, -3.0, 2.0]
    assert table.peak_displacement == 3.0
    assert RefractionTable([]).maximum_displacement == 1.0


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    tests = [
        ("Table length and finiteness", test_table_length_and_finiteness),
        ("Default sample count", test_default_sample_count),
        ("Pure and deterministic", test_pure_and_deterministic),
        ("refract() vertical normal", test_refract_vertical_normal),
        ("Flat profile", test_flat_profile_has_no_displacement),
        ("TIR at n=1.5", test_tir_entries_are_zero_at_n_1_5),
        ("TIR on rarer glass", test_tir_on_rarer_glass),
        ("Maximum displacement is peak", test_maximum_displacement_is_peak),
        ("Maximum displacement vs index", test_maximum_displacement_grows_with_index),
        ("Sequence protocol", test_table_sequence_protocol),
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
