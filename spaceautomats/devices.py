"""Ship devices addressed through a slot and byte-wide registers."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable

TWO_PI = 2.0 * math.pi
U8_MAX = 255


def _clamp(x: float, lo: float, hi: float) -> float:
    if math.isnan(x):
        return x
    return min(max(x, lo), hi)


def _as_uint(x: float, bits: int) -> int:
    """Saturating float-to-unsigned conversion; NaN becomes 0."""
    if math.isnan(x) or x <= 0:
        return 0
    top = (1 << bits) - 1
    if x >= top:
        return top
    return int(x)


def _as_int(x: float, bits: int) -> int:
    """Saturating float-to-signed conversion; NaN becomes 0."""
    if math.isnan(x):
        return 0
    top = (1 << (bits - 1)) - 1
    bottom = -(1 << (bits - 1))
    if x >= top:
        return top
    if x <= bottom:
        return bottom
    return int(x)


def _rem_euclid(a: float, b: float) -> float:
    if not math.isfinite(a):
        return math.nan
    r = math.fmod(a, b)
    return r + abs(b) if r < 0 else r


def _fdiv(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _f32(x: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def _u32_bytes(value: int) -> bytes:
    return value.to_bytes(4, "little")


@dataclass
class Device:
    """A device mounted in a ship slot; slot 0 means not mounted."""

    name: ClassVar[str] = ""
    slot_id: int = 0

    @property
    def active(self) -> bool:
        return self.slot_id != 0

    def activate(self, slot_id: int) -> None:
        """Mount the device in the given slot."""
        self.slot_id = slot_id

    def write(self, addr: int, value: int) -> None:
        """Write a register byte; ignored while not mounted."""
        if self.active:
            self._write(addr, value)

    def read(self, addr: int) -> int:
        """Read a register byte; 0 while not mounted or for unknown addresses."""
        if not self.active:
            return 0
        return self._read(addr)

    def _write(self, addr: int, value: int) -> None:
        pass

    def _read(self, addr: int) -> int:
        return 0


@dataclass
class PlasmaCannon(Device):
    """Fires plasma while enabled."""

    name: ClassVar[str] = "plasma cannon"
    enabled: bool = False
    last_shot: int = 0

    def _write(self, addr: int, value: int) -> None:
        if addr == 0:
            self.enabled = (value & 0x01) == 1


@dataclass
class Propulsion(Device):
    """Main engine with fuel tank and velocity telemetry."""

    name: ClassVar[str] = "propulsion"
    enabled: bool = False
    forward: bool = True
    fuel: int = 0
    thrust: int = 0
    velocity_abs: bytes = bytes(2)
    velocity_dir: bytes = bytes(4)
    heading: bytes = bytes(4)

    def activate(self, slot_id: int) -> None:
        super().activate(slot_id)
        self.fuel = 0xFFFFFFFF if self.active else 0

    def _write(self, addr: int, value: int) -> None:
        if addr == 0:
            self.enabled = (value & 0x01) == 1
            self.forward = (value & 0x02) == 2
        elif addr == 1:
            self.thrust = value

    def _read(self, addr: int) -> int:
        if 2 <= addr <= 5:
            # every fuel register reports the lowest byte of the tank level
            return self.fuel & 0xFF
        if 6 <= addr <= 7:
            return self.velocity_abs[addr - 6]
        if 8 <= addr <= 11:
            return self.velocity_dir[addr - 8]
        if 12 <= addr <= 15:
            return self.heading[addr - 12]
        return 0

    def set_velocity(self, velocity: tuple[float, float], direction: float) -> None:
        """Update the telemetry registers from a velocity vector and heading."""
        vx, vy = velocity
        angle = _clamp(math.atan2(vx, vy) * 1_000_000.0, 0.0, TWO_PI * 1_000_000.0)
        self.velocity_dir = _u32_bytes(_as_uint(angle, 32))
        magnitude = math.sqrt(vx * vx + vy * vy)
        self.velocity_abs = _as_int(magnitude, 16).to_bytes(2, "little", signed=True)
        heading = _rem_euclid(direction, TWO_PI) * 1_000_000.0
        self.heading = _u32_bytes(_as_uint(heading, 32))


@dataclass
class ReactionWheel(Device):
    """Turns the ship by applying torque."""

    name: ClassVar[str] = "reaction wheel"
    enabled: bool = False
    counterclockwise: bool = True
    raw_torque: int = 0
    angular_velocity: bytes = bytes(4)
    angular_velocity_counterclockwise: bool = False

    def _write(self, addr: int, value: int) -> None:
        if addr == 0:
            self.enabled = (value & 0x01) == 1
            self.counterclockwise = (value & 0x02) == 2
        elif addr == 1:
            self.raw_torque = (self.raw_torque & 0xFF00) | (value & 0x00FF)
        elif addr == 2:
            self.raw_torque = (self.raw_torque & 0x00FF) | ((value << 8) & 0xFF00)

    def _read(self, addr: int) -> int:
        if addr == 2:
            return int(self.angular_velocity_counterclockwise)
        if 3 <= addr <= 6:
            return self.angular_velocity[addr - 3]
        return 0

    def torque(self) -> float:
        """Signed torque; positive is counter-clockwise."""
        value = float(self.raw_torque)
        return value if self.counterclockwise else -value

    def set_angular_velocity(self, angular_velocity: float) -> None:
        """Update the telemetry registers, in microradians per step."""
        self.angular_velocity_counterclockwise = angular_velocity >= 0.0
        scaled = _f32(abs(_f32(angular_velocity)) * 1_000_000.0)
        self.angular_velocity = _u32_bytes(_as_uint(_clamp(scaled, 0.0, 1_000_000.0), 32))


@dataclass(frozen=True)
class Detection:
    """A contact seen by the scanner."""

    angle_relative: float
    angle_absolute: float
    distance: float


def _norm_rad(v: float) -> float:
    v = _rem_euclid(v + math.pi, TWO_PI)
    if v < 0.0:
        return v + math.pi
    return v - math.pi


@dataclass
class Scanner(Device):
    """Detects other ships inside an aperture around a heading."""

    name: ClassVar[str] = "scanner"
    enabled: bool = False
    aperture_angle: float = 0.0
    max_detection_distance: float = 0.0
    heading: float = 0.0
    sensitivity: float = 0.0
    detections: list[Detection] = field(default_factory=list)

    def _write(self, addr: int, value: int) -> None:
        if addr == 0:
            self.enabled = (value & 0x01) == 1
        elif addr == 1:
            self.aperture_angle = value * 2.0 * math.pi / U8_MAX
        elif addr == 2:
            self.max_detection_distance = 1000.0 * value
        elif addr == 3:
            self.heading = value * 2.0 * math.pi / U8_MAX
        elif addr == 4:
            self.sensitivity = float(value)

    def _read(self, addr: int) -> int:
        detections = self.detections
        if addr == 1:
            return _as_uint(self.aperture_angle / 2.0 / math.pi * U8_MAX, 8)
        if addr == 3:
            return _as_uint(self.heading / 2.0 / math.pi * U8_MAX, 8)
        if addr == 5:
            return len(detections) & 0xFF
        if addr in (6, 8, 10, 12, 14):
            idx = (addr - 4) // 2
            if len(detections) < idx:
                return 0
            ratio = _fdiv(detections[idx - 1].distance, self.max_detection_distance)
            return _as_uint(ratio * 255.0, 8)
        if addr in (7, 9, 11, 13, 15):
            idx = (addr - 5) // 2
            if len(detections) < idx:
                return 0
            norm = 0.5 + _fdiv(detections[idx - 1].angle_relative, self.aperture_angle)
            scaled = norm * 255.0
            if math.isfinite(scaled):
                scaled = float(math.ceil(scaled))
            return _as_uint(scaled, 8)
        return 0

    def check(self, ship: Any, all_positions: Iterable[tuple[int, int]]) -> list[Detection]:
        """Return up to five contacts seen from the ship, nearest one first."""
        ego_x, ego_y = ship.object.pos
        ego_dir = ship.object.direction
        aperture_heading = TWO_PI + self.heading
        first = _norm_rad(aperture_heading - self.aperture_angle / 2.0)
        last = _norm_rad(first + self.aperture_angle)

        result: list[Detection] = []
        nearest = math.inf
        for x, y in all_positions:
            if x == ego_x and y == ego_y:
                continue
            dx = float(x) - float(ego_x)
            dy = float(y) - float(ego_y)
            absolute = math.fmod(math.atan2(dy, dx) + TWO_PI, TWO_PI)
            relative = _norm_rad(ego_dir - absolute)
            distance = math.sqrt(dx * dx + dy * dy)

            if distance > self.max_detection_distance:
                continue
            if not first <= relative <= last:
                continue

            detection = Detection(relative, absolute, distance)
            if distance < nearest:
                nearest = distance
                result.insert(0, detection)
            else:
                result.append(detection)

        return result[:5]