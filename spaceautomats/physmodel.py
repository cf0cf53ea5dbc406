"""Physics of the playing field: movement, devices, projectiles."""

from __future__ import annotations

import math
import random
from collections.abc import MutableSequence, Sequence

from spaceautomats.automat import SpaceAutomat
from spaceautomats.plasma import Plasma
from spaceautomats.spaceobject import SpaceObject

_U32_MASK = 0xFFFFFFFF
_PLASMA_SPEED = 10000.0
_PLASMA_SPREAD = 0.2
_SHOT_COOLDOWN = 3
_PLASMA_DAMAGE = 100


def _to_u32(x: float) -> int:
    if math.isnan(x) or x <= 0:
        return 0
    if x >= _U32_MASK:
        return _U32_MASK
    return int(x)


class PhysModel:
    """Moves ships and plasma on a bounded field, one step at a time."""

    def __init__(self, width: int, height: int, seed: int) -> None:
        self.step_count = 0
        self.width = width
        self.height = height
        self.t = 1.0
        self.m = 1.0
        self.i = 1.0
        self._rng = random.Random(seed)

    def dimensions(self) -> tuple[int, int]:
        """Return (width, height) of the field."""
        return self.width, self.height

    def init(self, automats: Sequence[SpaceAutomat]) -> None:
        """Place each ship at a random spot with a random heading."""
        for automat in automats:
            x = self._rng.randrange(self.width // 4) + self.width // 2
            y = self._rng.randrange(self.height // 4) + self.height // 2
            direction = self._rng.uniform(-math.pi, math.pi)
            ship = automat.ship
            ship.object.pos = (x, y)
            ship.object.direction = direction
            ship.propulsion.set_velocity((0.0, 0.0), direction)

    def update(self, automats: Sequence[SpaceAutomat], plasmas: MutableSequence[Plasma]) -> None:
        """Advance ships and plasma by one step; ``plasmas`` is updated in place."""
        all_positions = [a.ship.object.pos for a in automats if a.ship.health != 0]

        for automat in automats:
            ship = automat.ship
            if ship.health == 0:
                continue
            fuel = ship.propulsion.fuel

            if ship.scanner.enabled:
                fuel = (fuel - 1) & _U32_MASK
                ship.scanner.detections = ship.scanner.check(ship, all_positions)

            propulsion_enabled = ship.propulsion.enabled
            thrust = 0.0
            if propulsion_enabled:
                fuel = (fuel - 1) & _U32_MASK
                raw_thrust = ship.propulsion.thrust
                if raw_thrust > 0 and fuel >= raw_thrust:
                    fuel -= raw_thrust
                    ship.propulsion.fuel = fuel
                    thrust = float(raw_thrust) if ship.propulsion.forward else -float(raw_thrust)

            wheel_enabled = ship.reaction_wheel.enabled
            torque = 0.0
            if wheel_enabled:
                fuel = (fuel - 1) & _U32_MASK
                ship.propulsion.fuel = fuel
                torque = ship.reaction_wheel.torque() / 1000.0

            cannon = ship.plasma_cannon
            if cannon.enabled and cannon.last_shot + _SHOT_COOLDOWN < self.step_count:
                cannon.last_shot = self.step_count
                plasma = Plasma(automat.id)
                d = ship.object.direction + self._rng.uniform(-_PLASMA_SPREAD, _PLASMA_SPREAD)
                sx, sy = ship.object.speed
                plasma.object.pos = ship.object.pos
                plasma.object.speed = (sx + _PLASMA_SPEED * math.cos(d), sy + _PLASMA_SPEED * math.sin(d))
                plasma.object.direction = d
                plasmas.append(plasma)

            angular_velocity, direction, velocity = self._kinematics(ship.object, thrust, torque)

            if wheel_enabled:
                ship.reaction_wheel.set_angular_velocity(angular_velocity)
            if propulsion_enabled:
                ship.propulsion.set_velocity(velocity, direction)

        survivors: list[Plasma] = []
        for plasma in plasmas:
            if plasma.is_on_boundary(self.width, self.height):
                continue
            hit = next(
                (
                    a
                    for a in automats
                    if a.id != plasma.source_id and a.ship.object.check_collision(plasma.object)
                ),
                None,
            )
            if hit is not None:
                hit.ship.apply_damage(_PLASMA_DAMAGE)
                continue
            self._kinematics(plasma.object, 0.0, 0.0)
            survivors.append(plasma)
        plasmas[:] = survivors

        self.step_count += 1

    def _kinematics(
        self, obj: SpaceObject, thrust: float, torque: float
    ) -> tuple[float, float, tuple[float, float]]:
        t = self.t
        alpha = torque / self.i
        angular_velocity = obj.angular_velocity + alpha * t
        direction = angular_velocity * t + obj.direction

        sx, sy = float(obj.pos[0]), float(obj.pos[1])
        vx, vy = obj.speed
        ax = thrust / self.m * math.cos(direction)
        ay = thrust / self.m * math.sin(direction)
        nx = sx + vx * t + ax * t * t
        ny = sy + vy * t + ay * t * t

        r = float(obj.size)
        nx = min(nx, self.width - r)
        nx = max(nx, r)
        ny = min(ny, self.height - r)
        ny = max(ny, r)

        # position difference, with the old position scaled by the time step
        velocity = (nx - sx / t, ny - sy / t)

        obj.angular_velocity = angular_velocity
        obj.direction = direction
        obj.speed = velocity
        obj.pos = (_to_u32(nx), _to_u32(ny))
        return angular_velocity, direction, velocity