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

Displacement Map Rasterizer

Spreads the 1D refraction table around the rounded outline of the glass
object and produces a displacement map: R and G hold the X and Y resampling
offsets around a 128 midpoint, B is unused and A is always opaque.

Every pixel of the object is first folded into a corner-local offset (see
geometry.fold_to_corner). Along a straight edge that offset points straight
out of the edge; near a corner it points out of the corner centre. The
distance from that reference gives the depth into the bezel, which selects
the table entry, and the direction gives the axis split of the
displacement.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from .constants import DISPLACEMENT_HALF_RANGE, DISPLACEMENT_MIDPOINT, NEUTRAL_DISPLACEMENT
from .geometry import corner_offsets
from .raster import RasterBuffer, encode_channel

logger = logging.getLogger(__name__)


def edge_opacity(distance: np.ndarray, radius: float) -> np.ndarray:
    """
    Anti-aliasing factor of the rounded edge.

    1 inside the radius, fading linearly to 0 one pixel outside it.
    """
    return np.where(distance < radius, 1.0, 1.0 - (distance - radius))


def radial_directions(x: np.ndarray, y: np.ndarray,
                      distance: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Unit vectors (cos, sin) of the offsets; (0, 0) at the reference point."""
    safe = np.where(distance > 0, distance, 1.0)
    cos = np.where(distance > 0, x / safe, 0.0)
    sin = np.where(distance > 0, y / safe, 0.0)
    return cos, sin


def rasterize_displacement(
    canvas_size: Tuple[int, int],
    object_size: Tuple[int, int],
    corner_radius: float,
    bezel_width: float,
    maximum_displacement: float,
    refraction_table: Sequence[float]
) -> RasterBuffer:
    """
    Synthesize the 2D displacement map of a rounded glass object.

    Args:
        canvas_size: (width, height) of the output buffer.
        object_size: (width, height) of the object, centred on the canvas.
        corner_radius: Corner radius of the object.
        bezel_width: Width of the refracting rim.
        maximum_displacement: Normalizer of the table entries; 0 is treated
            as 1.
        refraction_table: 1D displacement lookup table.

    Returns:
        A new RasterBuffer of canvas_size. Pixels outside the bezel keep the
        neutral value (128, 128, 0, 255).
    """
    canvas_width, canvas_height = canvas_size
    object_width, object_height = object_size
    if object_width > canvas_width or object_height > canvas_height:
        raise ValueError(
            f"Object {object_size} does not fit in canvas {canvas_size}"
        )

    buffer = RasterBuffer.filled(canvas_width, canvas_height, NEUTRAL_DISPLACEMENT)
    table = np.asarray(refraction_table, dtype=np.float64)
    if object_width == 0 or object_height == 0 or table.size == 0:
        return buffer
    if not maximum_displacement:
        maximum_displacement = 1.0

    radius = float(corner_radius)
    x, y = corner_offsets(object_width, object_height, radius)
    distance_squared = x * x + y * y

    # Squared, not clamped: a bezel wider than the radius leaves a neutral
    # disc of radius bezel_width - radius around each corner reference
    inner_squared = (radius - bezel_width) ** 2
    in_bezel = (distance_squared <= (radius + 1.0) ** 2) & (distance_squared >= inner_squared)

    distance = np.sqrt(distance_squared)
    opacity = edge_opacity(distance, radius)
    cos, sin = radial_directions(x, y, distance)

    if bezel_width > 0:
        depth_ratio = np.clip((radius - distance) / bezel_width, 0.0, 1.0)
    else:
        depth_ratio = np.zeros_like(distance)
    index = np.clip(np.floor(depth_ratio * table.size).astype(np.intp), 0, table.size - 1)
    sampled = table[index]

    dx = -cos * sampled / maximum_displacement
    dy = -sin * sampled / maximum_displacement
    scale = DISPLACEMENT_HALF_RANGE * opacity

    origin_x = (canvas_width - object_width) // 2
    origin_y = (canvas_height - object_height) // 2
    region = buffer.pixels[origin_y:origin_y + object_height,
                           origin_x:origin_x + object_width]
    region[..., 0] = np.where(in_bezel, encode_channel(DISPLACEMENT_MIDPOINT + dx * scale),
                              region[..., 0])
    region[..., 1] = np.where(in_bezel, encode_channel(DISPLACEMENT_MIDPOINT + dy * scale),
                              region[..., 1])
    region[..., 2] = np.where(in_bezel, 0, region[..., 2])
    region[..., 3] = np.where(in_bezel, 255, region[..., 3])

    logger.debug("Rasterized displacement map %dx%d (object %dx%d, %d bezel pixels)",
                 canvas_width, canvas_height, object_width, object_height,
                 int(np.count_nonzero(in_bezel)))
    return buffer
