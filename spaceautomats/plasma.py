"""Plasma projectiles fired by ships."""

from __future__ import annotations

from dataclasses import dataclass, field

from spaceautomats.spaceobject import SpaceObject

PLASMA_SIZE = 5


def _plasma_object() -> SpaceObject:
    return SpaceObject(size=PLASMA_SIZE)


@dataclass
class Plasma:
    """A projectile that remembers which automat fired it."""

    source_id: int
    object: SpaceObject = field(default_factory=_plasma_object)

    def is_on_boundary(self, width: int, height: int) -> bool:
        """Return True if the projectile touches the edge of the field."""
        x, y = self.object.pos
        r = self.object.size
        return x <= r or y <= r or x >= width - r or y >= height - r