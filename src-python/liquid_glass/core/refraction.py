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

Refraction Solver

Approximates Snell's law across the bezel height profile. A vertical ray
coming from the viewer hits the curved bezel surface, bends according to
the refractive index of the glass, and travels down through the remaining
height of the bezel plus the glass slab. The horizontal distance it covers
before reaching the background is the displacement of that sample.

The result is a 1D lookup table indexed by the normalized depth into the
bezel, consumed by the displacement rasterizer.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .constants import DEFAULT_SAMPLE_COUNT, FINITE_DIFFERENCE_STEP
from .surface_profiles import SurfaceFunction, SurfaceType, resolve_surface_profile


@dataclass(frozen=True)
class BezelSample:
    """
    Full record of one solver sample.

    Attributes:
        x: Normalized position across the bezel (0 = rim).
        height: Profile height at x.
        slope: Finite-difference estimate of dheight/dx.
        normal: Unit surface normal (x, y), pointing into the glass.
        k: Discriminant of the vector refraction; negative means TIR.
        refracted: Refracted direction, or None on total internal reflection.
        displacement: Signed horizontal offset; 0 on TIR.
    """
    x: float
    height: float
    slope: float
    normal: Tuple[float, float]
    k: float
    refracted: Optional[Tuple[float, float]]
    displacement: float

    @property
    def is_tir(self) -> bool:
        return self.refracted is None


class RefractionTable(Sequence[float]):
    """
    Immutable 1D displacement lookup table.

    Entries are signed displacements ordered by normalized bezel depth.
    Samples that hit total internal reflection hold 0.
    """

    def __init__(self, values: Sequence[float]):
        self._values: Tuple[float, ...] = tuple(float(v) for v in values)

    def __getitem__(self, index):
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, RefractionTable):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return (f"RefractionTable(samples={len(self)}, "
                f"maximum_displacement={self.maximum_displacement:.4f})")

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    @property
    def peak_displacement(self) -> float:
        """Largest absolute entry, 0 for an empty or all-zero table."""
        return max((abs(v) for v in self._values), default=0.0)

    @property
    def maximum_displacement(self) -> float:
        """
        Normalizer for the rasterizer.

        Same as peak_displacement, except that 1 is returned when the peak
        is 0 so callers can divide by it unconditionally.
        """
        peak = self.peak_displacement
        return peak if peak > 0 else 1.0


def refract(normal_x: float, normal_y: float,
            eta: float) -> Tuple[float, Optional[Tuple[float, float]]]:
    """
    Refract a vertical incident ray (0, 1) through a surface.

    Args:
        normal_x: X component of the unit surface normal.
        normal_y: Y component of the unit surface normal.
        eta: Ratio of refractive indices n_outside / n_glass.

    Returns:
        Tuple (k, direction) where k is the discriminant
        1 - eta^2 (1 - dot^2) and direction is the refracted unit vector,
        or None when k < 0 (total internal reflection).
    """
    dot = normal_y
    k = 1.0 - eta * eta * (1.0 - dot * dot)
    if k < 0:
        return k, None
    factor = eta * dot + math.sqrt(k)
    return k, (-factor * normal_x, eta - factor * normal_y)


def _surface_slope(surface_fn: SurfaceFunction, x: float, height: float) -> float:
    # One-sided difference; at x = 1 step backwards to stay in [0, 1]
    dx = FINITE_DIFFERENCE_STEP if x < 1 else -FINITE_DIFFERENCE_STEP
    neighbour = surface_fn(max(0.0, min(1.0, x + dx)))
    return (neighbour - height) / dx


def trace_bezel(
    profile: Union[str, SurfaceType, SurfaceFunction],
    refractive_index: float,
    bezel_width: float,
    glass_thickness: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT
) -> List[BezelSample]:
    """
    Trace one vertical ray per sample across the bezel.

    Args:
        profile: Surface name, SurfaceType or a height function.
        refractive_index: Refractive index of the glass (> 0).
        bezel_width: Width of the bezel in pixels; scales the profile height.
        glass_thickness: Thickness of the flat glass below the bezel.
        sample_count: Number of samples, x = i / sample_count.

    Returns:
        List of BezelSample, one per sample, in order.
    """
    if callable(profile):
        surface_fn = profile
    else:
        surface_fn = resolve_surface_profile(profile)

    eta = 1.0 / refractive_index
    samples = []
    for i in range(sample_count):
        x = i / sample_count
        y = surface_fn(x)
        slope = _surface_slope(surface_fn, x, y)
        magnitude = math.sqrt(slope * slope + 1.0)
        normal = (-slope / magnitude, -1.0 / magnitude)

        k, refracted = refract(normal[0], normal[1], eta)
        if refracted is None:
            displacement = 0.0
        else:
            remaining_height = y * bezel_width + glass_thickness
            displacement = refracted[0] * (remaining_height / refracted[1])

        samples.append(BezelSample(
            x=x,
            height=y,
            slope=slope,
            normal=normal,
            k=k,
            refracted=refracted,
            displacement=displacement,
        ))
    return samples


def compute_refraction_table(
    profile: Union[str, SurfaceType, SurfaceFunction],
    refractive_index: float,
    bezel_width: float,
    glass_thickness: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT
) -> RefractionTable:
    """
    Build the 1D displacement lookup table for a bezel.

    Pure function of its inputs. Samples that undergo total internal
    reflection record 0 instead of failing.

    Args:
        profile: Surface name, SurfaceType or a height function.
        refractive_index: Refractive index of the glass (> 0).
        bezel_width: Width of the bezel in pixels.
        glass_thickness: Thickness of the flat glass below the bezel.
        sample_count: Number of table entries.

    Returns:
        RefractionTable with exactly sample_count entries.
    """
    samples = trace_bezel(profile, refractive_index, bezel_width,
                          glass_thickness, sample_count)
    return RefractionTable(s.displacement for s in samples)
