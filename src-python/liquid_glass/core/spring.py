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

from typing import Dict, Iterator, Mapping, Tuple

from .constants import SPRING_SETTLE_EPSILON


class Spring:
    """
    Damped spring with unit mass, integrated with semi-implicit Euler.

    Attributes:
        value (float): Current position
        target (float): Rest position the spring is pulled towards
        velocity (float): Current velocity
        stiffness (float): Spring constant
        damping (float): Velocity damping coefficient
    """

    def __init__(self, value: float, stiffness: float = 300.0, damping: float = 20.0):
        self.value = float(value)
        self.target = float(value)
        self.velocity = 0.0
        self.stiffness = float(stiffness)
        self.damping = float(damping)

    def set_target(self, target: float) -> None:
        self.target = float(target)

    def update(self, dt: float) -> float:
        """
        Advance the spring by dt seconds.

        Velocity is updated first and the new velocity moves the value.

        Returns:
            The new value.
        """
        force = self.stiffness * (self.target - self.value) - self.damping * self.velocity
        self.velocity += force * dt
        self.value += self.velocity * dt
        return self.value

    def is_settled(self) -> bool:
        return (abs(self.target - self.value) < SPRING_SETTLE_EPSILON and
                abs(self.velocity) < SPRING_SETTLE_EPSILON)

    def __repr__(self) -> str:
        return (f"Spring(value={self.value:.4f}, target={self.target:.4f}, "
                f"velocity={self.velocity:.4f})")


class SpringSet:
    """
    The eight springs that animate the visual parameters of the glass.

    Springs are reachable as attributes (springs.scale) or by name
    (springs['scale']) and iterate in a fixed order. Stiffness and damping
    of each spring are offsets of one base configuration.
    """

    NAMES: Tuple[str, ...] = (
        'scale',
        'scale_x',
        'scale_y',
        'shadow_offset_x',
        'shadow_offset_y',
        'shadow_blur',
        'shadow_alpha',
        'refraction_boost',
    )

    # name -> (initial value, stiffness offset, damping offset)
    LAYOUT: Dict[str, Tuple[float, float, float]] = {
        'scale': (0.85, 0.0, 0.0),
        'scale_x': (1.0, 0.0, 5.0),
        'scale_y': (1.0, 0.0, 5.0),
        'shadow_offset_x': (0.0, 0.0, 5.0),
        'shadow_offset_y': (4.0, 0.0, 5.0),
        'shadow_blur': (12.0, 0.0, 5.0),
        'shadow_alpha': (0.15, -100.0, 0.0),
        'refraction_boost': (0.8, -100.0, -7.0),
    }

    def __init__(self, stiffness: float = 400.0, damping: float = 25.0):
        self._springs: Dict[str, Spring] = {}
        for name in self.NAMES:
            initial, stiffness_offset, damping_offset = self.LAYOUT[name]
            self._springs[name] = Spring(initial, stiffness + stiffness_offset,
                                         damping + damping_offset)

    def __getattr__(self, name: str) -> Spring:
        springs = self.__dict__.get('_springs')
        if springs is not None and name in springs:
            return springs[name]
        raise AttributeError(f"SpringSet has no spring named '{name}'")

    def __getitem__(self, name: str) -> Spring:
        return self._springs[name]

    def __iter__(self) -> Iterator[Spring]:
        return iter(self._springs.values())

    def __len__(self) -> int:
        return len(self._springs)

    def items(self):
        return self._springs.items()

    def reconfigure(self, stiffness: float, damping: float) -> None:
        """Apply a new base stiffness/damping, keeping positions and velocities."""
        for name, spring in self._springs.items():
            _, stiffness_offset, damping_offset = self.LAYOUT[name]
            spring.stiffness = stiffness + stiffness_offset
            spring.damping = damping + damping_offset

    def set_targets(self, targets: Mapping[str, float]) -> None:
        for name, target in targets.items():
            self._springs[name].set_target(target)

    def step(self, dt: float) -> Dict[str, float]:
        """Advance every spring by dt; returns the new values by name."""
        return {name: spring.update(dt) for name, spring in self._springs.items()}

    def values(self) -> Dict[str, float]:
        return {name: spring.value for name, spring in self._springs.items()}

    def all_settled(self) -> bool:
        return all(spring.is_settled() for spring in self._springs.values())
