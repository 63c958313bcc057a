"""
Copyright 2026 liquid-glass authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Optics Diagnostics
===============================================================================
Standalone helpers for reasoning about a bezel before rasterizing it: the
critical angle of an interface, the incidence angle of each solver sample,
and a summary of a refraction table (peak, TIR samples).

All functions return values; no print() side effects.
===============================================================================
"""

from __future__ import annotations
import math
from typing import Any, Dict, List, Optional, Sequence

from ..core.refraction import BezelSample, RefractionTable


def critical_angle(n1: float, n2: float) -> float:
    """
    Compute the critical angle for total internal reflection.

    TIR occurs when light travels from a denser to a rarer medium
    (n1 > n2) at an angle exceeding this value.

    Args:
        n1: Refractive index of the incident medium (must be > n2).
        n2: Refractive index of the transmitting medium.

    Returns:
        Critical angle in degrees.

    Raises:
        ValueError: If n1 <= n2 (no TIR possible).
    """
    if n1 <= n2:
        raise ValueError(
            f"No TIR possible: n1={n1} must be greater than n2={n2}."
        )
    return math.degrees(math.asin(n2 / n1))


def incidence_angle(sample: BezelSample) -> float:
    """
    Angle between the vertical view ray and the surface normal, in degrees.

    0 on a flat top, approaching 90 on the steep outer rim.
    """
    return math.degrees(math.acos(min(1.0, abs(sample.normal[1]))))


def tir_indices(samples: Sequence[BezelSample]) -> List[int]:
    """Indices of the samples that undergo total internal reflection."""
    return [i for i, s in enumerate(samples) if s.is_tir]


def describe_refraction_table(
    table: RefractionTable,
    samples: Optional[Sequence[BezelSample]] = None,
) -> Dict[str, Any]:
    """
    Summarize a refraction table.

    Args:
        table: The table to describe.
        samples: The BezelSample records it was built from (optional). When
            given, TIR samples are reported from the discriminant rather
            than guessed from zero entries.

    Returns:
        Dict with keys:
        - 'sample_count': number of entries
        - 'peak_displacement': largest |entry|
        - 'maximum_displacement': normalizer used by the rasterizer
        - 'peak_index': index of the largest |entry| (None if empty)
        - 'zero_indices': indices whose entry is exactly 0
        - 'tir_indices': indices that hit TIR (only with samples)
        - 'max_incidence_deg': steepest incidence angle (only with samples)
    """
    values = table.values
    peak_index = None
    if values:
        peak_index = max(range(len(values)), key=lambda i: abs(values[i]))

    description: Dict[str, Any] = {
        'sample_count': len(values),
        'peak_displacement': table.peak_displacement,
        'maximum_displacement': table.maximum_displacement,
        'peak_index': peak_index,
        'zero_indices': [i for i, v in enumerate(values) if v == 0.0],
    }
    if samples is not None:
        description['tir_indices'] = tir_indices(samples)
        description['max_incidence_deg'] = max(
            (incidence_angle(s) for s in samples), default=0.0
        )
    return description
