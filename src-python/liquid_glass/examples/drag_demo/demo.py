"""
Copyright 2026 liquid-glass authors and contributors

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
Drag Demo - Glass Card Picked Up, Flicked and Released

This example walks through the whole pipeline of one glass element:

Setup:
- A 240x120 card with 60 px corners on a 280x160 displacement canvas
- Default options (convex_squircle bezel, n=1.5, 30 px bezel)

Steps:
- Solve the bezel and print a summary of the refraction table
- Rasterize the displacement and specular maps, save them as raw RGBA
- Draw the bezel cross-section and plan view to an SVG diagram
- Simulate a pointer drag to the right, release, and tick until IDLE

Expected behavior:
- The card scales up towards 1.0 while held and stretches along x
- After release, scale returns to 0.85 and the driver goes IDLE
"""

import logging
import os
import sys

# Add parent directories to path to import liquid_glass
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from liquid_glass import GlassGeometry, LiquidGlass, PointerSample
from liquid_glass.analysis import BezelDiagram, describe_refraction_table, tir_indices
from liquid_glass.core.refraction import trace_bezel
from liquid_glass.logging_config import setup_logging


def main():
    """Run the drag demonstration."""
    logger = setup_logging(logging.DEBUG if '--debug' in sys.argv else logging.INFO)
    output_dir = os.path.dirname(os.path.abspath(__file__))

    print("Drag Demo - Glass Card")
    print("=" * 60)

    geometry = GlassGeometry(280, 160, 240, 120, corner_radius=60)
    frames = []
    glass = LiquidGlass(
        geometry,
        on_drag_start=lambda g: logger.info("%s picked up", g.id),
        on_drag_end=lambda g: logger.info("%s released", g.id),
    )
    glass.add_frame_listener(frames.append)
    opts = glass.options

    # Refraction table
    samples = trace_bezel(opts.surface_type, opts.refractive_index, opts.bezel_width,
                          opts.glass_thickness, opts.sample_count)
    info = describe_refraction_table(glass.refraction_table, samples)
    print(f"\nSurface: {opts.surface_type.value}, n={opts.refractive_index}")
    print(f"  Samples:              {info['sample_count']}")
    print(f"  Peak displacement:    {info['peak_displacement']:.2f} px "
          f"(sample {info['peak_index']})")
    print(f"  TIR samples:          {len(info['tir_indices'])}")
    print(f"  Steepest incidence:   {info['max_incidence_deg']:.1f} deg")

    # Maps
    displacement, specular = glass.maps
    for name, buffer in (('displacement', displacement), ('specular', specular)):
        path = os.path.join(output_dir, f'{name}_{buffer.width}x{buffer.height}.rgba')
        with open(path, 'wb') as f:
            f.write(buffer.to_bytes())
        print(f"  Wrote {name} map to {path}")

    # Diagram
    diagram = BezelDiagram(800, 500, viewbox=(-20, -20, 800, 500))
    diagram.draw_cross_section(samples, opts.bezel_width, opts.glass_thickness,
                               origin=(0, 0), flat_extension=40)
    diagram.draw_rays(samples, opts.bezel_width, opts.glass_thickness, origin=(0, 0))
    diagram.draw_plan(glass.geometry, origin=(420, 440))
    diagram.draw_summary((0, 460), opts.surface_type.value, opts.refractive_index,
                         glass.maximum_displacement, tir_count=len(tir_indices(samples)))
    svg_path = os.path.join(output_dir, 'bezel_diagram.svg')
    diagram.save(svg_path)
    print(f"  Wrote diagram to {svg_path}")

    # Settle the construction frame
    while glass.tick():
        pass

    # Drag: 12 moves of 15 px every 20 ms (750 px/s)
    print("\nDragging...")
    t = 0.0
    glass.feed(PointerSample(150.0, 80.0, t))
    for _ in range(12):
        t += 0.02
        position = glass.feed(PointerSample(150.0 + 750.0 * t, 80.0, t))
        glass.tick(0.02)
    frame = frames[-1]
    print(f"  Element at ({position[0]:.1f}, {position[1]:.1f})")
    print(f"  scale={frame.scale:.3f}  transform=({frame.transform[0]:.3f}, "
          f"{frame.transform[1]:.3f})  displacement_scale={frame.displacement_scale:.2f}")

    print("\nReleased...")
    glass.feed(PointerSample(position[0], 80.0, t + 0.02, dragging=False))
    ticks = 0
    while glass.tick(1 / 60):
        ticks += 1
    frame = glass.driver.last_frame
    print(f"  IDLE after {ticks} ticks: scale={frame.scale:.3f}, "
          f"shadow_blur={frame.shadow_blur:.2f}, "
          f"inset_shadow_alpha={frame.inset_shadow_alpha:.3f}")

    glass.destroy()
    print("\n" + "=" * 60)
    print(f"Frames published: {len(frames)}, rebuilds: {glass.rebuild_count}")


if __name__ == "__main__":
    main()
