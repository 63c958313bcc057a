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

Surface Profiles

Height functions of the glass bezel. Each profile maps a normalized
distance into the bezel, x in [0, 1] (0 = outer rim, 1 = inner edge of the
bezel), to a normalized height. The set of profiles is closed: callers pick
one through SurfaceType and resolve it once, when options are validated.
"""

import math
from enum import Enum
from typing import Callable, Dict, Union

SurfaceFunction = Callable[[float], float]


class SurfaceType(str, Enum):
    """Closed set of bezel height profiles."""
    CONVEX_CIRCLE = 'convex_circle'
    CONVEX_SQUIRCLE = 'convex_squircle'
    CONCAVE = 'concave'
    LIP = 'lip'


def convex_circle(x: float) -> float:
    """Quarter circle rising from the rim: sqrt(1 - (1 - x)^2)."""
    return math.sqrt(1.0 - (1.0 - x) ** 2)


def convex_squircle(x: float) -> float:
    """Superellipse of exponent 4: (1 - (1 - x)^4)^(1/4)."""
    return (1.0 - (1.0 - x) ** 4) ** 0.25


def concave(x: float) -> float:
    """Bowl-shaped bezel: 1 - sqrt(1 - x^2)."""
    return 1.0 - math.sqrt(1.0 - x * x)


def smootherstep(x: float) -> float:
    """Perlin's smootherstep, 6x^5 - 15x^4 + 10x^3."""
    return 6.0 * x ** 5 - 15.0 * x ** 4 + 10.0 * x ** 3


def lip(x: float) -> float:
    """
    Raised rim that falls into a shallow trough.

    A squircle compressed into the first half of the bezel is blended into
    a mirrored concave curve lifted by 0.1, weighted by smootherstep(x).
    lip(0) is 0 and lip(1) is 0.1.
    """
    convex = (1.0 - (1.0 - min(x * 2.0, 1.0)) ** 4) ** 0.25
    trough = 1.0 - math.sqrt(1.0 - (1.0 - x) ** 2) + 0.1
    weight = smootherstep(x)
    return convex * (1.0 - weight) + trough * weight


SURFACE_FUNCTIONS: Dict[SurfaceType, SurfaceFunction] = {
    SurfaceType.CONVEX_CIRCLE: convex_circle,
    SurfaceType.CONVEX_SQUIRCLE: convex_squircle,
    SurfaceType.CONCAVE: concave,
    SurfaceType.LIP: lip,
}


def parse_surface_type(value: Union[str, SurfaceType]) -> SurfaceType:
    """
    Convert a surface name to a SurfaceType.

    Args:
        value: A SurfaceType or one of its string values.

    Returns:
        The matching SurfaceType.

    Raises:
        ValueError: If the name is not one of the known profiles.
    """
    if isinstance(value, SurfaceType):
        return value
    try:
        return SurfaceType(value)
    except ValueError:
        valid = tuple(t.value for t in SurfaceType)
        raise ValueError(
            f"Invalid surface_type '{value}'. Valid options: {valid}"
        ) from None


def resolve_surface_profile(value: Union[str, SurfaceType]) -> SurfaceFunction:
    """Return the height function for a surface name or SurfaceType."""
    return SURFACE_FUNCTIONS[parse_surface_type(value)]
