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

import itertools
import logging
from typing import Any, Callable, Optional, Tuple

from .animation import (
    AnimationDriver,
    AnimationState,
    FrameListener,
    PointerSample,
    dispatch_pointer,
)
from .displacement_map import rasterize_displacement
from .geometry import GlassGeometry
from .options import GlassOptions, TABLE_FIELDS, requires_rebuild
from .raster import RasterBuffer
from .refraction import RefractionTable, compute_refraction_table
from .specular_map import rasterize_specular
from .spring import SpringSet

logger = logging.getLogger(__name__)

_instance_ids = itertools.count(1)


class LiquidGlass:
    """
    One glass effect instance.

    Owns the option set, the geometry snapshot, the refraction table, the
    two raster buffers, the SpringSet and the AnimationDriver. Nothing here
    is shared with other instances.

    Rebuild policy:
        - The refraction table is recomputed only when an option feeding
          the solver changes.
        - The raster buffers are regenerated on construction, on a
          rebuild-triggering option change and on resize.
        - Animation ticks only change the published displacement scale.
        - Every rebuild publishes the current frame to the listeners.

    The bezel width of the geometry always follows the options.

    Attributes:
        id (str): Unique id of the instance, e.g. 'lg-3'
        geometry (GlassGeometry): Current geometry snapshot
        springs (SpringSet): The animated parameters
        driver (AnimationDriver): State machine stepping the springs
        on_drag_start, on_drag, on_drag_end: Optional drag callbacks
    """

    def __init__(
        self,
        geometry: GlassGeometry,
        options: Optional[GlassOptions] = None,
        on_drag_start: Optional[Callable[['LiquidGlass'], None]] = None,
        on_drag: Optional[Callable[['LiquidGlass', Tuple[float, float]], None]] = None,
        on_drag_end: Optional[Callable[['LiquidGlass'], None]] = None,
        **overrides: Any
    ):
        base = options if options is not None else GlassOptions()
        self._options: GlassOptions = base.replace(**overrides) if overrides else base
        self.id = f"lg-{next(_instance_ids)}"
        self.geometry = geometry.with_bezel(self._options.bezel_width)

        self.on_drag_start = on_drag_start
        self.on_drag = on_drag
        self.on_drag_end = on_drag_end

        self.springs = SpringSet(self._options.spring_stiffness, self._options.spring_damping)
        self.driver = AnimationDriver(
            self.springs,
            refraction_scale=self._options.refraction_scale,
            enabled=self._options.spring_animation,
        )

        self._table: Optional[RefractionTable] = None
        self._table_key = None
        self._displacement: Optional[RasterBuffer] = None
        self._specular: Optional[RasterBuffer] = None
        self._rebuilding = False
        self._destroyed = False
        self.rebuild_count = 0

        self._rebuild()
        self.driver.request_frames()
        logger.info("%s created (%dx%d, %s)", self.id, geometry.object_width,
                    geometry.object_height, self._options.surface_type.value)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def options(self) -> GlassOptions:
        return self._options

    @property
    def refraction_table(self) -> RefractionTable:
        self._check_alive()
        return self._table

    @property
    def maximum_displacement(self) -> float:
        self._check_alive()
        return self._table.maximum_displacement

    @property
    def displacement_scale(self) -> float:
        """
        Current scale of the displacement filter: maximum displacement
        times refraction_scale times the live refraction boost.
        """
        self._check_alive()
        return self.driver.current_frame().displacement_scale

    @property
    def maps(self) -> Tuple[RasterBuffer, RasterBuffer]:
        """Current (displacement, specular) buffers."""
        self._check_alive()
        return (self._displacement, self._specular)

    @property
    def state(self) -> AnimationState:
        return self.driver.state

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError(f"{self.id} has been destroyed")

    # ------------------------------------------------------------------
    # Rebuilds
    # ------------------------------------------------------------------

    def _refresh_table(self) -> None:
        key = self._options.table_key()
        if key == self._table_key:
            return
        opts = self._options
        self._table = compute_refraction_table(
            opts.surface_function,
            opts.refractive_index,
            opts.bezel_width,
            opts.glass_thickness,
            opts.sample_count,
        )
        self._table_key = key
        logger.debug("%s refraction table recomputed: %r", self.id, self._table)

    def _rebuild(self) -> None:
        self._check_alive()
        if self._rebuilding:
            raise RuntimeError(f"{self.id} is already rebuilding its maps")
        self._rebuilding = True
        try:
            self._refresh_table()
            geometry = self.geometry
            self._displacement = rasterize_displacement(
                geometry.canvas_size,
                geometry.object_size,
                geometry.corner_radius,
                geometry.bezel_width,
                self._table.maximum_displacement,
                self._table,
            )
            self._specular = rasterize_specular(
                geometry.object_size,
                geometry.corner_radius,
                geometry.bezel_width,
                self._options.light_angle,
            )
            self.driver.maximum_displacement = self._table.maximum_displacement
            self.driver.refraction_scale = self._options.refraction_scale
            self.rebuild_count += 1
        finally:
            self._rebuilding = False
        # The filter scale reaches listeners even when no tick will follow
        self.driver.publish()

    def build_maps(self) -> Tuple[RasterBuffer, RasterBuffer]:
        """
        Rasterize both maps for the current options and geometry.

        Returns:
            Tuple (displacement, specular) of freshly generated buffers.
        """
        self._rebuild()
        return self.maps

    def set_options(self, **changes: Any) -> bool:
        """
        Replace some options.

        The whole new option set is validated before it replaces the old
        one, so a bad value leaves the instance untouched.

        Returns:
            True if the change triggered a rebuild of the maps.

        Raises:
            ValueError: On an unknown option name or an invalid value.
        """
        self._check_alive()
        new_options = self._options.replace(**changes)
        changed = new_options.changed_fields(self._options)
        if not changed:
            return False

        self._options = new_options
        logger.debug("%s options changed: %s", self.id, sorted(changed))

        if changed & {'spring_stiffness', 'spring_damping'}:
            self.springs.reconfigure(new_options.spring_stiffness, new_options.spring_damping)
        if 'spring_animation' in changed:
            self.driver.enabled = new_options.spring_animation
            if not new_options.spring_animation:
                self.driver.stop()
        if 'bezel_width' in changed:
            self.geometry = self.geometry.with_bezel(new_options.bezel_width)

        if not requires_rebuild(changed):
            return False

        if changed & TABLE_FIELDS:
            logger.info("%s rebuilding maps after change to %s", self.id,
                        sorted(changed & TABLE_FIELDS))
        self._rebuild()
        self.driver.request_frames()
        return True

    def resize(self, geometry: GlassGeometry) -> None:
        """Adopt a new geometry snapshot and re-rasterize the maps."""
        self._check_alive()
        self.geometry = geometry.with_bezel(self._options.bezel_width)
        self._rebuild()

    # ------------------------------------------------------------------
    # Interaction and animation
    # ------------------------------------------------------------------

    def add_frame_listener(self, listener: FrameListener) -> None:
        self.driver.add_listener(listener)

    def remove_frame_listener(self, listener: FrameListener) -> None:
        self.driver.remove_listener(listener)

    def start_drag(self, sample: PointerSample,
                   origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        self._check_alive()
        self.driver.start_drag(sample, origin)
        if self.on_drag_start:
            self.on_drag_start(self)

    def drag(self, sample: PointerSample) -> Tuple[float, float]:
        self._check_alive()
        position = self.driver.drag(sample)
        if self.on_drag:
            self.on_drag(self, position)
        return position

    def end_drag(self) -> None:
        self._check_alive()
        if self.driver.end_drag() and self.on_drag_end:
            self.on_drag_end(self)

    def feed(self, sample: PointerSample) -> Optional[Tuple[float, float]]:
        """Route a normalized pointer sample to start_drag/drag/end_drag."""
        # Own handlers rather than driver.feed(), so the drag callbacks fire
        return dispatch_pointer(sample, self.driver.interaction.is_dragging,
                                self.start_drag, self.drag, self.end_drag)

    def tick(self, elapsed: Optional[float] = None) -> bool:
        """Advance the animation one frame; True while still animating."""
        if self._destroyed:
            return False
        return self.driver.tick(elapsed)

    def destroy(self) -> None:
        """Stop animating and release the buffers. Safe to call twice."""
        if self._destroyed:
            return
        self.driver.stop()
        self._displacement = None
        self._specular = None
        self._table = None
        self._table_key = None
        self._destroyed = True
        logger.info("%s destroyed", self.id)

    def __repr__(self) -> str:
        return (f"LiquidGlass(id={self.id!r}, surface={self._options.surface_type.value!r}, "
                f"state={self.driver.state.value!r})")
