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

Specular Highlight Rasterizer

Synthesizes the thin bright rim that simulates a directional light glancing
off the glass edge. Only geometry is involved; the refraction table plays
no part. Edges facing the light (or facing directly away from it) are
brightest, edges parallel to it stay dark.
"""

import logging
import math
from typing import Tuple

import numpy as np

from .constants import DEFAULT_LIGHT_ANGLE, SPECULAR_THICKNESS
from .displacement_map import edge_opacity, radial_directions
from .geometry import corner_offsets
from .raster import RasterBuffer, encode_channel

logger = logging.getLogger(__name__)


def light_vector(light_angle: float) -> Tuple[float, float]:
    """Unit light direction for an angle in degrees (y up)."""
    angle = math.radians(light_angle)
    return (math.cos(angle), math.sin(angle))


def rasterize_specular(
    object_size: Tuple[int, int],
    corner_radius: float,
    bezel_width: float,
    light_angle: float = DEFAULT_LIGHT_ANGLE
) -> RasterBuffer:
    """
    Synthesize the specular highlight of a rounded glass object.

    The highlight lives in a fixed SPECULAR_THICKNESS band along the edge,
    whatever the bezel width.

    Args:
        object_size: (width, height) of the object; also the buffer size.
        corner_radius: Corner radius of the object.
        bezel_width: Width of the refracting rim. Accepted for signature
            symmetry with rasterize_displacement; the band is fixed.
        light_angle: Direction of the light in degrees, measured
            counter-clockwise from +x with y pointing up.

    Returns:
        A new RasterBuffer of object_size with R = G = B = brightness and
        A = opacity. Pixels off the rim are transparent black.
    """
    width, height = object_size
    buffer = RasterBuffer.filled(width, height, (0, 0, 0, 0))
    if width == 0 or height == 0:
        return buffer

    light_x, light_y = light_vector(light_angle)
    radius = float(corner_radius)
    x, y = corner_offsets(width, height, radius)
    distance_squared = x * x + y * y

    inner_squared = (radius - SPECULAR_THICKNESS) ** 2
    near_edge = (distance_squared <= (radius + 1.0) ** 2) & (distance_squared >= inner_squared)

    distance = np.sqrt(distance_squared)
    opacity = edge_opacity(distance, radius)
    # Screen y grows downwards, the light vector is y-up
    cos, sin = radial_directions(x, -y, distance)

    dot_product = np.abs(cos * light_x + sin * light_y)
    edge_ratio = np.clip((radius - distance) / SPECULAR_THICKNESS, 0.0, 1.0)
    sharp_falloff = np.sqrt(1.0 - (1.0 - edge_ratio) ** 2)
    coefficient = dot_product * sharp_falloff

    brightness = np.minimum(255.0, 255.0 * coefficient)
    alpha = np.minimum(255.0, brightness * coefficient * opacity)

    color = encode_channel(brightness)
    pixels = buffer.pixels
    for channel in range(3):
        pixels[..., channel] = np.where(near_edge, color, 0)
    pixels[..., 3] = np.where(near_edge, encode_channel(alpha), 0)

    logger.debug("Rasterized specular map %dx%d (light %.1f deg)", width, height, light_angle)
    return buffer
