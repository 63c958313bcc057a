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

Liquid Glass
============

Numeric engine of an interactive glass distortion effect: a Snell's law
solver across a rounded bezel, rasterizers producing displacement and
specular RGBA maps, and a spring system animating the glass on drag.

Main modules:
- core: Solver, rasterizers, springs, animation driver, LiquidGlass
- analysis: Optics diagnostics and SVG bezel diagrams
- examples: Demonstrations

Quick start:
    from liquid_glass import LiquidGlass, GlassGeometry

    glass = LiquidGlass(GlassGeometry.for_object(240, 120, corner_radius=60))
    displacement, specular = glass.maps
    while glass.tick():
        pass
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import GlassGeometry
from .core.options import GlassOptions
from .core.glass_effect import LiquidGlass
from .core.animation import PointerSample

__all__ = [
    'GlassGeometry',
    'GlassOptions',
    'LiquidGlass',
    'PointerSample',
    '__version__',
]
