"""
===============================================================================
LIQUID GLASS INSTANCE TESTS
===============================================================================

1. OPTIONS
   - Defaults, validation, declarative data-lg-* attributes
2. REBUILD POLICY
   - Table recomputed only for solver inputs
   - Render-only options do not touch the maps
   - A rejected change leaves the instance untouched
   - Ticks never rebuild
3. LIFECYCLE
   - Construction settles after one tick
   - Drag callbacks, destroy

Run with:
    python developer_tests/test_glass_effect.py

Or with pytest:
    pytest developer_tests/test_glass_effect.py -v
===============================================================================
"""

import os
import sys

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from liquid_glass.core.animation import AnimationState, PointerSample
from liquid_glass.core.geometry import GlassGeometry
from liquid_glass.core.glass_effect import LiquidGlass
from liquid_glass.core.options import GlassOptions, options_from_attributes, requires_rebuild
from liquid_glass.core.surface_profiles import SurfaceType


def make_glass(**overrides):
    return LiquidGlass(GlassGeometry(160, 100, 140, 80, corner_radius=30), **overrides)


# =============================================================================
# OPTIONS
# =============================================================================

def test_default_options():
    opts = GlassOptions()
    assert opts.surface_type is SurfaceType.CONVEX_SQUIRCLE
    assert opts.bezel_width == 30
    assert opts.glass_thickness == 150
    assert opts.refractive_index == 1.5
    assert opts.refraction_scale == 1.5
    assert opts.specular_opacity == 1.0
    assert opts.blur == 0.5
    assert opts.spring_animation is True
    assert opts.spring_stiffness == 400
    assert opts.spring_damping == 25
    assert opts.to_dict()['surface_type'] == 'convex_squircle'


def test_option_validation():
    print("\n" + "=" * 60)
    print("TEST: Option validation")
    print("=" * 60)

    bad = [
        {'surface_type': 'wavy'},
        {'bezel_width': 0},
        {'refractive_index': -1.0},
        {'glass_thickness': -5},
        {'spring_stiffness': 100},
        {'spring_damping': 6.5},
        {'sample_count': 0},
        {'sample_count': 12.5},
        {'blur': float('nan')},
    ]
    for changes in bad:
        try:
            GlassOptions(**changes)
        except ValueError as e:
            print(f"  {changes}: {e}")
        else:
            raise AssertionError(f"Expected ValueError for {changes}")

    try:
        GlassOptions().replace(bezel=12)
    except ValueError as e:
        assert 'Unknown option' in str(e)
    else:
        raise AssertionError("Expected ValueError for an unknown option name")
    print("  Invalid options rejected - PASS")


def test_options_from_attributes():
    overrides = options_from_attributes({
        'data-lg-surface': 'lip',
        'data-lg-bezel': ' 24 ',
        'data-lg-refraction': '2',
        'data-lg-blur': '',
        'class': 'card',
    })
    assert overrides == {'surface_type': 'lip', 'bezel_width': 24.0, 'refraction_scale': 2.0}
    assert GlassOptions(**overrides).surface_type is SurfaceType.LIP

    try:
        options_from_attributes({'data-lg-thickness': 'thick'})
    except ValueError as e:
        assert 'data-lg-thickness' in str(e)
    else:
        raise AssertionError("Expected ValueError for a non-numeric attribute")

    # Attribute values that arrive already parsed or as other objects
    assert options_from_attributes({'data-lg-bezel': 24, 'data-lg-specular': 0.5}) == {
        'bezel_width': 24.0, 'specular_opacity': 0.5}
    try:
        options_from_attributes({'data-lg-blur': object()})
    except ValueError as e:
        assert 'data-lg-blur' in str(e)
    else:
        raise AssertionError("Expected ValueError for a non-string attribute value")


def test_requires_rebuild():
    assert requires_rebuild({'refractive_index'})
    assert requires_rebuild(['light_angle', 'blur'])
    assert not requires_rebuild({'blur', 'spring_damping'})
    assert not requires_rebuild(set())


# =============================================================================
# REBUILD POLICY
# =============================================================================

def test_construction_builds_maps():
    glass = make_glass()
    displacement, specular = glass.maps
    assert displacement.size == (160, 100)
    assert specular.size == (140, 80)
    assert glass.geometry.bezel_width == 30
    assert glass.rebuild_count == 1
    assert len(glass.refraction_table) == 128
    assert glass.maximum_displacement == glass.refraction_table.maximum_displacement
    assert glass.id.startswith('lg-')
    assert make_glass().id != glass.id


def test_render_scale_change_keeps_table():
    print("\n" + "=" * 60)
    print("TEST: refraction_scale change keeps the table")
    print("=" * 60)

    glass = make_glass()
    table = glass.refraction_table
    assert glass.set_options(refraction_scale=2.5) is True
    assert glass.refraction_table is table
    assert glass.rebuild_count == 2
    assert glass.driver.refraction_scale == 2.5
    print("  Table object reused - PASS")

    assert glass.set_options(refractive_index=1.7) is True
    assert glass.refraction_table is not table
    assert glass.refraction_table.peak_displacement > table.peak_displacement
    assert glass.driver.maximum_displacement == glass.maximum_displacement
    print("  Table recomputed for a new refractive index - PASS")


def test_render_only_change_does_not_rebuild():
    glass = make_glass()
    maps = glass.maps
    assert glass.set_options(blur=2.0) is False
    assert glass.options.blur == 2.0
    assert glass.rebuild_count == 1
    assert glass.maps[0] is maps[0]

    # Setting the current value is not a change
    assert glass.set_options(bezel_width=30.0) is False
    assert glass.rebuild_count == 1


def test_rejected_change_leaves_instance_untouched():
    glass = make_glass()
    options = glass.options
    maps = glass.maps
    for changes in ({'surface_type': 'wavy'}, {'bezel_width': -1}, {'colour': 'red'}):
        try:
            glass.set_options(**changes)
        except ValueError:
            pass
        else:
            raise AssertionError(f"Expected ValueError for {changes}")
    assert glass.options is options
    assert glass.maps[0] is maps[0]
    assert glass.rebuild_count == 1


def test_bezel_change_updates_geometry():
    glass = make_glass()
    assert glass.set_options(bezel_width=12) is True
    assert glass.geometry.bezel_width == 12
    assert glass.geometry.object_size == (140, 80)


def test_spring_options_reconfigure():
    glass = make_glass()
    assert glass.set_options(spring_stiffness=500, spring_damping=30) is False
    assert glass.springs.scale.stiffness == 500
    assert glass.springs.refraction_boost.damping == 23


def test_ticks_never_rebuild():
    glass = make_glass()
    glass.start_drag(PointerSample(20.0, 20.0, 0.0))
    for i in range(30):
        glass.drag(PointerSample(20.0 + 5 * i, 20.0, 0.01 * (i + 1)))
        glass.tick()
    glass.end_drag()
    while glass.tick():
        pass
    assert glass.rebuild_count == 1
    assert glass.state is AnimationState.IDLE


def test_resize_rebuilds():
    glass = make_glass()
    table = glass.refraction_table
    glass.resize(GlassGeometry.for_object(200, 120, corner_radius=40))
    assert glass.maps[0].size == (200, 120)
    assert glass.geometry.bezel_width == 30
    assert glass.refraction_table is table
    assert glass.rebuild_count == 2


# =============================================================================
# LIFECYCLE
# =============================================================================

def test_construction_settles_after_one_tick():
    glass = make_glass()
    assert glass.state is AnimationState.ANIMATING
    assert glass.tick() is False
    assert glass.state is AnimationState.IDLE
    assert glass.driver.last_frame is not None


def test_animation_disabled():
    glass = make_glass(spring_animation=False)
    assert glass.state is AnimationState.IDLE
    glass.start_drag(PointerSample(0.0, 0.0, 0.0))
    assert glass.tick() is False

    glass = make_glass()
    glass.set_options(spring_animation=False)
    assert glass.state is AnimationState.IDLE
    assert glass.driver.enabled is False


def test_scale_published_without_animation():
    print("\n" + "=" * 60)
    print("TEST: Displacement scale with spring_animation=False")
    print("=" * 60)

    glass = make_glass(spring_animation=False)
    boost = glass.springs.refraction_boost.value
    assert glass.driver.last_frame is not None
    assert glass.displacement_scale == glass.maximum_displacement * 1.5 * boost

    frames = []
    glass.add_frame_listener(frames.append)
    assert glass.set_options(refraction_scale=3.0) is True
    assert glass.tick() is False

    assert len(frames) == 1
    expected = glass.maximum_displacement * 3.0 * boost
    assert frames[0].displacement_scale == expected
    assert glass.driver.last_frame is frames[0]
    assert glass.displacement_scale == expected
    print(f"  displacement_scale={expected:.3f} after rebuild - PASS")


def test_drag_callbacks():
    events = []
    glass = LiquidGlass(
        GlassGeometry.for_object(100, 100, corner_radius=20),
        on_drag_start=lambda g: events.append(('start', g.id)),
        on_drag=lambda g, pos: events.append(('drag', pos)),
        on_drag_end=lambda g: events.append(('end', g.id)),
    )
    glass.feed(PointerSample(10.0, 10.0, 0.0))
    glass.feed(PointerSample(20.0, 10.0, 0.05))
    glass.feed(PointerSample(20.0, 10.0, 0.1, dragging=False))
    glass.end_drag()

    assert [kind for kind, _ in events] == ['start', 'drag', 'end']
    assert events[0][1] == glass.id


def test_frame_listener():
    frames = []
    glass = make_glass()
    glass.add_frame_listener(frames.append)
    glass.tick()
    assert len(frames) == 1
    assert frames[0].displacement_scale == (glass.maximum_displacement * 1.5 *
                                            glass.springs.refraction_boost.value)
    glass.remove_frame_listener(frames.append)


def test_destroy_is_idempotent():
    glass = make_glass()
    glass.destroy()
    glass.destroy()
    assert glass.is_destroyed
    assert glass.state is AnimationState.IDLE
    assert glass.tick() is False
    try:
        glass.maps
    except RuntimeError:
        pass
    else:
        raise AssertionError("Expected RuntimeError for maps after destroy()")
    try:
        glass.set_options(blur=1.0)
    except RuntimeError:
        pass
    else:
        raise AssertionError("Expected RuntimeError for set_options() after destroy()")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    tests = [
        ("Default options", test_default_options),
        ("Option validation", test_option_validation),
        ("Options from attributes", test_options_from_attributes),
        ("requires_rebuild", test_requires_rebuild),
        ("Construction builds maps", test_construction_builds_maps),
        ("refraction_scale keeps table", test_render_scale_change_keeps_table),
        ("Render-only change", test_render_only_change_does_not_rebuild),
        ("Rejected change", test_rejected_change_leaves_instance_untouched),
        ("Bezel change", test_bezel_change_updates_geometry),
        ("Spring options", test_spring_options_reconfigure),
        ("Ticks never rebuild", test_ticks_never_rebuild),
        ("Resize", test_resize_rebuilds),
        ("Settles after one tick", test_construction_settles_after_one_tick),
        ("Animation disabled", test_animation_disabled),
        ("Scale without animation", test_scale_published_without_animation),
        ("Drag callbacks", test_drag_callbacks),
        ("Frame listener", test_frame_listener),
        ("Destroy", test_destroy_is_idempotent),
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
