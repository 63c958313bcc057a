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

import math
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np
from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class GlassGeometry:
    """
    Snapshot of the canvas and the rounded glass object drawn on it.

    The object is a rounded rectangle centred on the canvas. Pixel sizes are
    integers; the corner radius and bezel width may be fractional.

    Attributes:
        canvas_width (int): Width of the displacement canvas in pixels
        canvas_height (int): Height of the displacement canvas in pixels
        object_width (int): Width of the glass object in pixels
        object_height (int): Height of the glass object in pixels
        corner_radius (float): Radius of the rounded corners
        bezel_width (float): Width of the refracting rim
    """
    canvas_width: int
    canvas_height: int
    object_width: int
    object_height: int
    corner_radius: float = 0.0
    bezel_width: float = 0.0

    def __post_init__(self):
        for name in ('canvas_width', 'canvas_height', 'object_width', 'object_height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer pixel count, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        for name in ('corner_radius', 'bezel_width'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        if self.object_width > self.canvas_width or self.object_height > self.canvas_height:
            raise ValueError(
                f"Object ({self.object_width}x{self.object_height}) does not fit "
                f"in canvas ({self.canvas_width}x{self.canvas_height})"
            )

    @classmethod
    def for_object(cls, width: int, height: int, corner_radius: float = 0.0,
                   bezel_width: float = 0.0) -> 'GlassGeometry':
        """Geometry whose canvas is exactly the object."""
        return cls(width, height, width, height, corner_radius, bezel_width)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.canvas_width, self.canvas_height)

    @property
    def object_size(self) -> Tuple[int, int]:
        return (self.object_width, self.object_height)

    @property
    def object_origin(self) -> Tuple[int, int]:
        """Top-left pixel of the object on the canvas."""
        return ((self.canvas_width - self.object_width) // 2,
                (self.canvas_height - self.object_height) // 2)

    def with_bezel(self, bezel_width: float) -> 'GlassGeometry':
        return replace(self, bezel_width=bezel_width)

    def outline_polygon(self) -> Polygon:
        """
        Rounded-rectangle outline of the object in canvas coordinates.

        The radius is limited to half the shorter side, which is how a
        browser draws an oversized border radius.
        """
        x0, y0 = self.object_origin
        w, h = self.object_width, self.object_height
        r = min(self.corner_radius, w / 2.0, h / 2.0)
        if r <= 0:
            return box(x0, y0, x0 + w, y0 + h)
        return box(x0 + r, y0 + r, x0 + w - r, y0 + h - r).buffer(r, quad_segs=16)

    def bezel_inner_polygon(self) -> Polygon:
        """
        Inner edge of the bezel ring, i.e. the outline shrunk by bezel_width.

        Empty when the bezel covers the whole object.
        """
        return self.outline_polygon().buffer(-self.bezel_width, quad_segs=16)


def fold_to_corner(length: int, radius: float) -> np.ndarray:
    """
    Corner-local offsets along one axis of the object.

    Pixels inside the leading radius get their offset from the leading
    corner centre, pixels inside the trailing radius their offset from the
    trailing corner centre, and pixels along the straight stretch between
    the corners get 0.

    Args:
        length: Number of pixels along the axis.
        radius: Corner radius.

    Returns:
        Float array of shape (length,).
    """
    coords = np.arange(length, dtype=np.float64)
    between = length - radius * 2.0
    return np.where(
        coords < radius,
        coords - radius,
        np.where(coords >= length - radius, coords - radius - between, 0.0),
    )


def corner_offsets(width: int, height: int,
                   radius: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-pixel corner-local (x, y) offsets for a width x height object.

    Returns:
        Tuple (x, y) of float arrays shaped (height, width).
    """
    return np.meshgrid(fold_to_corner(width, radius), fold_to_corner(height, radius))
