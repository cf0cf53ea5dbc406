"""Kinematic state of a body in the simulated space."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class SpaceObject:
    """A round body with a position, a velocity, a heading and a spin.

    ``size`` is the radius, ``pos`` integer (x, y) coordinates, ``direction``
    the heading in radians and ``angular_velocity`` in radians per step.
    """

    size: int = 0
    pos: tuple[int, int] = (0, 0)
    speed: tuple[float, float] = (0.0, 0.0)
    direction: float = 0.0
    angular_velocity: float = 0.0

    def dir_degree(self) -> float:
        """Return the heading scaled by pi * 180."""
        return self.direction * math.pi * 180.0

    def check_collision(self, other: SpaceObject) -> bool:
        """Return True if the integer distance is below the sum of both radii."""
        dx = abs(self.pos[0] - other.pos[0])
        dy = abs(self.pos[1] - other.pos[1])
        distance = math.isqrt(dx * dx + dy * dy)
        return distance < self.size + other.size