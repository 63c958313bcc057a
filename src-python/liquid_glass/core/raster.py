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

from typing import Sequence, Tuple

import numpy as np


class RasterBuffer:
    """
    2D grid of RGBA samples, stored as a (height, width, 4) uint8 array.

    Layout matches a browser ImageData: rows top to bottom, pixels left to
    right, channels R, G, B, A. Turning the buffer into an image is left
    to the caller (see to_bytes()).

    Attributes:
        pixels (np.ndarray): The underlying uint8 array
    """

    CHANNELS = 4

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != self.CHANNELS:
            raise ValueError(
                f"RasterBuffer needs a (height, width, 4) array, got shape {pixels.shape}"
            )
        self.pixels = pixels.astype(np.uint8, copy=False)

    @classmethod
    def filled(cls, width: int, height: int,
               rgba: Sequence[int] = (0, 0, 0, 0)) -> 'RasterBuffer':
        """Create a buffer with every pixel set to rgba."""
        pixels = np.empty((height, width, cls.CHANNELS), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """RGBA value at column x, row y."""
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def channel(self, index: int) -> np.ndarray:
        """View of a single channel, shaped (height, width)."""
        return self.pixels[:, :, index]

    def to_bytes(self) -> bytes:
        """Row-major RGBA bytes, ready for an image encoder."""
        return self.pixels.tobytes()

    def copy(self) -> 'RasterBuffer':
        return RasterBuffer(self.pixels.copy())

    def __eq__(self, other) -> bool:
        if isinstance(other, RasterBuffer):
            return np.array_equal(self.pixels, other.pixels)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"RasterBuffer(width={self.width}, height={self.height})"


def encode_channel(values: np.ndarray) -> np.ndarray:
    """
    Round and clamp float channel values into uint8.

    Rounds half to even, as a Uint8ClampedArray store does.
    """
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)
