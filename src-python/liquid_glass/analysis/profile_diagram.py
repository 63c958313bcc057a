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
from typing import Optional, Sequence, Tuple

import svgwrite
from shapely.geometry import Polygon

from ..core.geometry import GlassGeometry
from ..core.refraction import BezelSample


class BezelDiagram:
    """
    SVG diagram of a bezel and the rays the solver traced through it.

    Two views can be drawn side by side:
    - cross-section: glass slab, bezel profile, incoming and refracted rays
    - plan view: rounded outline of the object and the inner bezel edge

    Coordinate System:
        The diagram uses a Y-up coordinate system (positive Y points
        upward). Layers carry a vertical flip transform; the viewbox is
        flipped to match.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG (Y-down) viewBox actually written
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_glass (svgwrite.Group): Glass cross-section and plan outline
        layer_rays (svgwrite.Group): Traced rays
        layer_labels (svgwrite.Group): Text annotations
    """

    def __init__(self, width=800, height=400, viewbox=None):
        """
        Initialize the diagram.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 400)
            viewbox (tuple or None): (min_x, min_y, width, height) in Y-up
                coordinates. If None, uses (0, 0, width, height).
        """
        self.width = width
        self.height = height
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # Y-up viewbox -> SVG's Y-down viewbox
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # debug=False: svgwrite's validator rejects data-* attributes
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_glass = self.dwg.add(self.dwg.g(id='layer-glass', transform='scale(1, -1)'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', transform='scale(1, -1)'))
        self.layer_labels = self.dwg.add(self.dwg.g(id='layer-labels'))

    @staticmethod
    def _finite(*values):
        return all(math.isfinite(v) for v in values)

    def draw_label(self, position: Tuple[float, float], text: str,
                   font_size: str = '10px', color: str = 'black') -> None:
        # Labels are not flipped, otherwise the text would be mirrored
        self.layer_labels.add(self.dwg.text(
            text, insert=(position[0], -position[1]), font_size=font_size, fill=color
        ))

    def draw_cross_section(
        self,
        samples: Sequence[BezelSample],
        bezel_width: float,
        glass_thickness: float,
        origin: Tuple[float, float] = (0.0, 0.0),
        flat_extension: float = 0.0,
        fill: str = 'lightblue',
        stroke: str = 'navy'
    ) -> None:
        """
        Draw the glass slab with the bezel profile on top.

        The rim sits at origin.x; the profile rises towards +x over
        bezel_width, then continues flat for flat_extension.

        Args:
            samples: Solver samples, in order.
            bezel_width: Bezel width (horizontal and vertical scale).
            glass_thickness: Height of the slab below the bezel.
            origin: Y-up position of the rim at background level.
            flat_extension: Length of flat glass drawn past the bezel.
            fill: Fill color of the glass.
            stroke: Outline color.
        """
        ox, oy = origin
        points = [(ox, oy)]
        for s in samples:
            points.append((ox + s.x * bezel_width,
                           oy + glass_thickness + s.height * bezel_width))
        top = points[-1][1] if samples else oy + glass_thickness
        end_x = ox + bezel_width + flat_extension
        points.append((end_x, top))
        points.append((end_x, oy))

        self.layer_glass.add(self.dwg.polygon(
            points=[(x, y) for x, y in points if self._finite(x, y)],
            fill=fill, fill_opacity=0.4, stroke=stroke, stroke_width=1,
            **{'class': 'bezel-cross-section'}
        ))
        self.layer_glass.add(self.dwg.line(
            start=(ox - 10, oy), end=(end_x + 10, oy),
            stroke='gray', stroke_width=1, stroke_dasharray='4, 2',
            **{'class': 'background-plane'}
        ))

    def draw_rays(
        self,
        samples: Sequence[BezelSample],
        bezel_width: float,
        glass_thickness: float,
        origin: Tuple[float, float] = (0.0, 0.0),
        every: int = 8,
        incoming_length: float = 40.0,
        color: str = 'red',
        tir_color: str = 'black'
    ) -> int:
        """
        Draw the view ray and its refracted continuation for some samples.

        Returns:
            Number of rays drawn.
        """
        ox, oy = origin
        drawn = 0
        for index in range(0, len(samples), max(1, every)):
            s = samples[index]
            x = ox + s.x * bezel_width
            surface_y = oy + glass_thickness + s.height * bezel_width
            if not self._finite(x, surface_y):
                continue

            self.layer_rays.add(self.dwg.line(
                start=(x, surface_y + incoming_length), end=(x, surface_y),
                stroke=color, stroke_width=0.75, stroke_opacity=0.5,
                **{'class': 'incident-ray', 'data-sample': str(index)}
            ))
            if s.is_tir:
                self.layer_rays.add(self.dwg.circle(
                    center=(x, surface_y), r=2, fill=tir_color,
                    **{'class': 'tir-marker', 'data-sample': str(index)}
                ))
            else:
                end_x = x + s.displacement
                if self._finite(end_x):
                    self.layer_rays.add(self.dwg.line(
                        start=(x, surface_y), end=(end_x, oy),
                        stroke=color, stroke_width=0.75,
                        **{'class': 'refracted-ray', 'data-sample': str(index),
                           'data-displacement': f'{s.displacement:.4f}'}
                    ))
            drawn += 1
        return drawn

    def _add_polygon(self, polygon: Polygon, origin: Tuple[float, float],
                     css_class: str, fill: str, stroke: str) -> bool:
        if polygon.is_empty:
            return False
        ox, oy = origin
        # Plan coordinates grow downwards; mirror them into the Y-up layer
        points = [(ox + x, oy - y) for x, y in polygon.exterior.coords]
        self.layer_glass.add(self.dwg.polygon(
            points=points, fill=fill, fill_opacity=0.3, stroke=stroke, stroke_width=1,
            **{'class': css_class}
        ))
        return True

    def draw_plan(self, geometry: GlassGeometry,
                  origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        """
        Draw the object outline and the inner edge of the bezel ring.

        Args:
            geometry: Geometry snapshot; its canvas is drawn as a frame.
            origin: Y-up position of the canvas top-left corner.
        """
        ox, oy = origin
        self.layer_glass.add(self.dwg.rect(
            insert=(ox, oy - geometry.canvas_height),
            size=(geometry.canvas_width, geometry.canvas_height),
            fill='none', stroke='gray', stroke_width=0.5,
            **{'class': 'canvas-frame'}
        ))
        self._add_polygon(geometry.outline_polygon(), origin, 'object-outline',
                          fill='lightblue', stroke='navy')
        self._add_polygon(geometry.bezel_inner_polygon(), origin, 'bezel-inner-edge',
                          fill='white', stroke='steelblue')

    def draw_summary(self, position: Tuple[float, float], surface_name: str,
                     refractive_index: float, maximum_displacement: float,
                     tir_count: Optional[int] = None) -> None:
        text = (f"{surface_name}  n={refractive_index:g}  "
                f"max displacement={maximum_displacement:.2f}px")
        if tir_count is not None:
            text += f"  TIR samples={tir_count}"
        self.draw_label(position, text)

    def save(self, filename: str) -> None:
        """Save the SVG to a file."""
        self.dwg.saveas(filename)

    def to_string(self) -> str:
        """Return the SVG document as a string."""
        return self.dwg.tostring()
