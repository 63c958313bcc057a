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

Animation Driver

Two-state scheduler that turns pointer interaction into spring motion.

IDLE       nothing to do; tick() returns False without touching the springs
ANIMATING  every tick() sets the spring targets for the current mode,
           steps the SpringSet and publishes a FrameParameters payload

The driver never schedules itself. An external loop (requestAnimationFrame,
a Qt timer, a test) calls tick() once per frame for as long as it returns
True.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from .constants import (
    DRAGGING_TARGETS,
    IDLE_TARGETS,
    INSET_SHADOW_RATIO,
    MAX_FRAME_DT,
    MIN_POINTER_DT,
    SQUISH_MAX,
    SQUISH_VELOCITY_RANGE,
    SQUISH_VELOCITY_THRESHOLD,
    VELOCITY_DECAY,
    VELOCITY_REST_THRESHOLD,
)
from .spring import SpringSet

logger = logging.getLogger(__name__)


class AnimationState(str, Enum):
    IDLE = 'idle'
    ANIMATING = 'animating'


@dataclass(frozen=True)
class PointerSample:
    """
    Normalized pointer input.

    Attributes:
        x: Pointer x in page pixels.
        y: Pointer y in page pixels.
        timestamp: Sample time in seconds.
        dragging: True while the pointer button / touch is down.
    """
    x: float
    y: float
    timestamp: float
    dragging: bool = True


@dataclass
class InteractionState:
    """Drag bookkeeping. Velocities are in pixels per second."""
    is_dragging: bool = False
    pointer_offset: Tuple[float, float] = (0.0, 0.0)
    last_pointer: Tuple[float, float] = (0.0, 0.0)
    last_timestamp: float = 0.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0

    @property
    def speed(self) -> float:
        return math.hypot(self.velocity_x, self.velocity_y)


@dataclass(frozen=True)
class FrameParameters:
    """
    Per-tick payload for the rendering collaborator.

    displacement_scale is the live scale of the displacement filter; the
    displacement buffer itself does not change between frames.
    """
    scale: float
    scale_x: float
    scale_y: float
    shadow_offset_x: float
    shadow_offset_y: float
    shadow_blur: float
    shadow_alpha: float
    displacement_scale: float

    @property
    def transform(self) -> Tuple[float, float]:
        """Composed (x, y) scale factors of the element transform."""
        return (self.scale * self.scale_x, self.scale * self.scale_y)

    @property
    def inset_shadow_alpha(self) -> float:
        return self.shadow_alpha * INSET_SHADOW_RATIO

    def to_dict(self):
        return {
            'scale': self.scale,
            'scale_x': self.scale_x,
            'scale_y': self.scale_y,
            'shadow_offset_x': self.shadow_offset_x,
            'shadow_offset_y': self.shadow_offset_y,
            'shadow_blur': self.shadow_blur,
            'shadow_alpha': self.shadow_alpha,
            'displacement_scale': self.displacement_scale,
        }


FrameListener = Callable[[FrameParameters], None]


def squish_targets(velocity_x: float, velocity_y: float) -> Tuple[float, float]:
    """
    Anisotropic scale targets for a pointer velocity.

    The element stretches along the direction of motion and contracts
    across it, by up to SQUISH_MAX. Slow motion leaves both at 1.
    """
    speed = math.hypot(velocity_x, velocity_y)
    if speed <= SQUISH_VELOCITY_THRESHOLD:
        return (1.0, 1.0)
    squish = min(SQUISH_MAX, speed / SQUISH_VELOCITY_RANGE)
    vx_norm = abs(velocity_x / speed)
    vy_norm = abs(velocity_y / speed)
    return (1.0 + squish * vx_norm - squish * 0.5 * vy_norm,
            1.0 + squish * vy_norm - squish * 0.5 * vx_norm)


def dispatch_pointer(
    sample: PointerSample,
    drag_active: bool,
    start_drag: Callable[[PointerSample], Any],
    drag: Callable[[PointerSample], Tuple[float, float]],
    end_drag: Callable[[], Any]
) -> Optional[Tuple[float, float]]:
    """
    Route a pointer sample to the matching drag handler.

    A pressed sample starts a drag when none is active and moves it
    otherwise; a released sample ends it.

    Returns:
        The element position returned by drag(), None for the other two.
    """
    if sample.dragging:
        if not drag_active:
            start_drag(sample)
            return None
        return drag(sample)
    end_drag()
    return None


class AnimationDriver:
    """
    Steps a SpringSet in response to interaction.

    Attributes:
        springs (SpringSet): The springs this driver owns the targets of
        interaction (InteractionState): Current drag state
        maximum_displacement (float): Peak of the current refraction table
        refraction_scale (float): Configured refraction strength
        enabled (bool): When False, request_frames() never starts the loop
    """

    def __init__(self, springs: Optional[SpringSet] = None,
                 maximum_displacement: float = 1.0,
                 refraction_scale: float = 1.0,
                 enabled: bool = True):
        self.springs = springs if springs is not None else SpringSet()
        self.interaction = InteractionState()
        self.maximum_displacement = maximum_displacement
        self.refraction_scale = refraction_scale
        self.enabled = enabled
        self.tick_count = 0
        self._state = AnimationState.IDLE
        self._listeners: List[FrameListener] = []
        self._last_frame: Optional[FrameParameters] = None

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_animating(self) -> bool:
        return self._state is AnimationState.ANIMATING

    @property
    def last_frame(self) -> Optional[FrameParameters]:
        """Most recently published payload, if any."""
        return self._last_frame

    def add_listener(self, listener: FrameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: FrameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def request_frames(self) -> bool:
        """
        Enter ANIMATING if the driver is enabled.

        Returns:
            True if the driver is animating afterwards.
        """
        if self.enabled and self._state is AnimationState.IDLE:
            self._state = AnimationState.ANIMATING
            logger.debug("Animation started")
        return self.is_animating

    def stop(self) -> None:
        """Return to IDLE. Stopping an idle driver does nothing."""
        if self._state is AnimationState.ANIMATING:
            self._state = AnimationState.IDLE
            logger.debug("Animation stopped after %d ticks", self.tick_count)

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def start_drag(self, sample: PointerSample,
                   origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        """
        Begin a drag.

        Args:
            sample: Pointer sample at press time.
            origin: Top-left corner of the element in the same coordinate
                space as the sample; the pointer offset is measured from it
                in unscaled element pixels.
        """
        state = self.interaction
        current_scale = self.springs.scale.value or 1.0
        state.is_dragging = True
        state.pointer_offset = ((sample.x - origin[0]) / current_scale,
                                (sample.y - origin[1]) / current_scale)
        state.last_pointer = (sample.x, sample.y)
        state.last_timestamp = sample.timestamp
        state.velocity_x = 0.0
        state.velocity_y = 0.0
        self.request_frames()

    def drag(self, sample: PointerSample) -> Tuple[float, float]:
        """
        Record a pointer move during a drag.

        Returns:
            Unclamped element position (pointer minus pointer offset). Edge
            clamping is left to the caller.
        """
        state = self.interaction
        if not state.is_dragging:
            raise RuntimeError("drag() called without an active drag")
        dt = max(MIN_POINTER_DT, sample.timestamp - state.last_timestamp)
        state.velocity_x = (sample.x - state.last_pointer[0]) / dt
        state.velocity_y = (sample.y - state.last_pointer[1]) / dt
        state.last_pointer = (sample.x, sample.y)
        state.last_timestamp = sample.timestamp
        return (sample.x - state.pointer_offset[0], sample.y - state.pointer_offset[1])

    def end_drag(self) -> bool:
        """
        Release the drag; the residual velocity keeps decaying in tick().

        Returns:
            False if no drag was active.
        """
        if not self.interaction.is_dragging:
            return False
        self.interaction.is_dragging = False
        self.request_frames()
        return True

    def feed(self, sample: PointerSample) -> Optional[Tuple[float, float]]:
        """
        Dispatch a pointer sample to start_drag, drag or end_drag.

        Returns:
            The element position for drag moves, None otherwise.
        """
        return dispatch_pointer(sample, self.interaction.is_dragging,
                                self.start_drag, self.drag, self.end_drag)

    # ------------------------------------------------------------------
    # Frame stepping
    # ------------------------------------------------------------------

    def _mode_targets(self):
        targets = dict(DRAGGING_TARGETS if self.interaction.is_dragging else IDLE_TARGETS)
        scale_x, scale_y = squish_targets(self.interaction.velocity_x,
                                          self.interaction.velocity_y)
        targets['scale_x'] = scale_x
        targets['scale_y'] = scale_y
        return targets

    def is_at_rest(self) -> bool:
        state = self.interaction
        return (self.springs.all_settled() and
                abs(state.velocity_x) < VELOCITY_REST_THRESHOLD and
                abs(state.velocity_y) < VELOCITY_REST_THRESHOLD)

    def current_frame(self) -> FrameParameters:
        """FrameParameters for the present spring values, without stepping."""
        values = self.springs.values()
        return FrameParameters(
            scale=values['scale'],
            scale_x=values['scale_x'],
            scale_y=values['scale_y'],
            shadow_offset_x=values['shadow_offset_x'],
            shadow_offset_y=values['shadow_offset_y'],
            shadow_blur=values['shadow_blur'],
            shadow_alpha=values['shadow_alpha'],
            displacement_scale=(self.maximum_displacement * self.refraction_scale *
                                values['refraction_boost']),
        )

    def publish(self) -> FrameParameters:
        """Send the current frame to every listener and remember it."""
        frame = self.current_frame()
        self._last_frame = frame
        for listener in list(self._listeners):
            listener(frame)
        return frame

    def tick(self, elapsed: Optional[float] = None) -> bool:
        """
        Advance the animation by one frame.

        Args:
            elapsed: Wall time since the previous frame in seconds. It is
                clamped to MAX_FRAME_DT so a stalled loop (background tab,
                debugger) cannot blow up the integration. None means one
                nominal frame.

        Returns:
            True while the driver is still animating.
        """
        if self._state is AnimationState.IDLE:
            return False

        dt = MAX_FRAME_DT if elapsed is None else min(max(elapsed, 0.0), MAX_FRAME_DT)

        self.springs.set_targets(self._mode_targets())
        self.springs.step(dt)
        self.tick_count += 1

        state = self.interaction
        if not state.is_dragging:
            state.velocity_x *= VELOCITY_DECAY
            state.velocity_y *= VELOCITY_DECAY

        self.publish()

        if self.is_at_rest():
            self.stop()
        return self.is_animating
