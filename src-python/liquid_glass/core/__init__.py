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

from . import constants
from .surface_profiles import SurfaceType, resolve_surface_profile, parse_surface_type
from .refraction import BezelSample, RefractionTable, compute_refraction_table, refract, trace_bezel
from .geometry import GlassGeometry, corner_offsets, fold_to_corner
from .raster import RasterBuffer
from .displacement_map import rasterize_displacement
from .specular_map import rasterize_specular
from .spring import Spring, SpringSet
from .animation import (
    AnimationDriver,
    AnimationState,
    FrameParameters,
    InteractionState,
    PointerSample,
)
from .options import GlassOptions, options_from_attributes, requires_rebuild
from .glass_effect import LiquidGlass

__all__ = [
    'constants',
    'SurfaceType', 'resolve_surface_profile', 'parse_surface_type',
    'BezelSample', 'RefractionTable', 'compute_refraction_table', 'refract', 'trace_bezel',
    'GlassGeometry', 'corner_offsets', 'fold_to_corner',
    'RasterBuffer',
    'rasterize_displacement',
    'rasterize_specular',
    'Spring', 'SpringSet',
    'AnimationDriver', 'AnimationState', 'FrameParameters', 'InteractionState', 'PointerSample',
    'GlassOptions', 'options_from_attributes', 'requires_rebuild',
    'LiquidGlass',
]
