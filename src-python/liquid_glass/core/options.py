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

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Union

from .constants import DEFAULT_LIGHT_ANGLE, DEFAULT_SAMPLE_COUNT
from .surface_profiles import SurfaceFunction, SurfaceType, parse_surface_type, SURFACE_FUNCTIONS

# Changing any of these invalidates the raster buffers
REBUILD_FIELDS: FrozenSet[str] = frozenset({
    'surface_type',
    'bezel_width',
    'glass_thickness',
    'refractive_index',
    'refraction_scale',
    'specular_opacity',
    'sample_count',
    'light_angle',
})

# Changing any of these invalidates the refraction table as well
TABLE_FIELDS: FrozenSet[str] = frozenset({
    'surface_type',
    'bezel_width',
    'glass_thickness',
    'refractive_index',
    'sample_count',
})

# data-* attribute -> (option name, parser)
ATTRIBUTE_OPTIONS = {
    'data-lg-surface': ('surface_type', str),
    'data-lg-bezel': ('bezel_width', float),
    'data-lg-thickness': ('glass_thickness', float),
    'data-lg-refraction': ('refraction_scale', float),
    'data-lg-specular': ('specular_opacity', float),
    'data-lg-blur': ('blur', float),
}


@dataclass(frozen=True)
class GlassOptions:
    """
    Complete, validated option set of a glass effect.

    Instances are immutable; replace() validates a whole new set before
    anything observes it.

    Attributes:
        surface_type (SurfaceType): Bezel height profile
        bezel_width (float): Width of the refracting rim in pixels
        glass_thickness (float): Thickness of the glass below the bezel
        refractive_index (float): Refractive index of the glass
        refraction_scale (float): Multiplier of the displacement filter scale
        specular_opacity (float): Opacity slope of the highlight layer
        blur (float): Standard deviation of the backdrop blur
        spring_animation (bool): Enable the spring animation loop
        spring_stiffness (float): Base stiffness of the SpringSet
        spring_damping (float): Base damping of the SpringSet
        light_angle (float): Highlight light direction in degrees
        sample_count (int): Entries in the refraction table
    """
    surface_type: SurfaceType = SurfaceType.CONVEX_SQUIRCLE
    bezel_width: float = 30.0
    glass_thickness: float = 150.0
    refractive_index: float = 1.5
    refraction_scale: float = 1.5
    specular_opacity: float = 1.0
    blur: float = 0.5
    spring_animation: bool = True
    spring_stiffness: float = 400.0
    spring_damping: float = 25.0
    light_angle: float = DEFAULT_LIGHT_ANGLE
    sample_count: int = DEFAULT_SAMPLE_COUNT

    def __post_init__(self):
        # Resolve the profile name once; unknown names fail here
        object.__setattr__(self, 'surface_type', parse_surface_type(self.surface_type))

        for name in ('bezel_width', 'glass_thickness', 'refractive_index', 'refraction_scale',
                     'specular_opacity', 'blur', 'spring_stiffness', 'spring_damping',
                     'light_angle'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")

        if self.bezel_width <= 0:
            raise ValueError(f"bezel_width must be positive, got {self.bezel_width}")
        if self.refractive_index <= 0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")
        for name in ('glass_thickness', 'refraction_scale', 'specular_opacity', 'blur'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.spring_stiffness <= 100:
            raise ValueError(
                f"spring_stiffness must exceed 100 (softest spring is stiffness - 100), "
                f"got {self.spring_stiffness}"
            )
        if self.spring_damping < 7:
            raise ValueError(
                f"spring_damping must be at least 7 (softest spring is damping - 7), "
                f"got {self.spring_damping}"
            )
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, int) \
                or self.sample_count < 1:
            raise ValueError(f"sample_count must be a positive integer, got {self.sample_count!r}")

    @property
    def surface_function(self) -> SurfaceFunction:
        return SURFACE_FUNCTIONS[self.surface_type]

    def replace(self, **changes: Any) -> 'GlassOptions':
        """
        Return a validated copy with some fields changed.

        Raises:
            ValueError: If a field name is unknown or a value is invalid.
        """
        unknown = set(changes) - set(field_names())
        if unknown:
            raise ValueError(
                f"Unknown option(s) {sorted(unknown)}. Valid options: {field_names()}"
            )
        return dataclasses.replace(self, **changes)

    def changed_fields(self, other: 'GlassOptions') -> FrozenSet[str]:
        """Names of the fields whose value differs from other."""
        return frozenset(
            name for name in field_names() if getattr(self, name) != getattr(other, name)
        )

    def table_key(self):
        """Inputs of the refraction solver, for cache invalidation."""
        return (self.surface_type, self.bezel_width, self.glass_thickness,
                self.refractive_index, self.sample_count)

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data['surface_type'] = self.surface_type.value
        return data


def field_names():
    return tuple(f.name for f in dataclasses.fields(GlassOptions))


def requires_rebuild(changed: Iterable[str]) -> bool:
    """True if changing these option names invalidates the raster buffers."""
    return any(name in REBUILD_FIELDS for name in changed)


def options_from_attributes(attributes: Mapping[str, str]) -> Dict[str, Union[str, float]]:
    """
    Parse declarative data-lg-* attributes into option overrides.

    Unrelated attributes are ignored.

    Args:
        attributes: Element attributes, e.g. {'data-lg-bezel': '24'}.

    Returns:
        Dict of option name -> parsed value, suitable for GlassOptions(**d).

    Raises:
        ValueError: If a numeric attribute cannot be parsed.
    """
    overrides = {}
    for attribute, (name, parser) in ATTRIBUTE_OPTIONS.items():
        raw = attributes.get(attribute)
        if raw is None or raw == '':
            continue
        try:
            overrides[name] = parser(str(raw).strip())
        except ValueError:
            raise ValueError(
                f"Attribute {attribute}={raw!r} is not a valid {name}"
            ) from None
    return overrides
