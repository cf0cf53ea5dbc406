import math
from types import SimpleNamespace

import pytest

from spaceautomats.devices import (
    Detection,
    Device,
    PlasmaCannon,
    Propulsion,
    ReactionWheel,
    Scanner,
)
from spaceautomats.spaceobject import SpaceObject


def _u32(data):
    return int.from_bytes(data, "little")


def _ship(pos=(1000, 1000), direction=0.0):
    return SimpleNamespace(object=SpaceObject(size=10, pos=pos, direction=direction))


def _scanner(aperture=128, max_distance=10, heading=0):
    s = Scanner()
    s.activate(1)
    s.write(0, 1)
    s.write(1, aperture)
    s.write(2, max_distance)
    s.write(3, heading)
    return s


@pytest.mark.parametrize(
    "cls, name",
    [
        (Propulsion, "propulsion"),
        (ReactionWheel, "reaction wheel"),
        (Scanner, "scanner"),
        (PlasmaCannon, "plasma cannon"),
    ],
)
def test_device_names(cls, name):
    assert cls.name == name
    assert issubclass(cls, Device)


@pytest.mark.parametrize("cls", [Propulsion, ReactionWheel, Scanner, PlasmaCannon])
def test_unmounted_device_ignores_writes_and_reads_zero(cls):
    dev = cls()
    dev.write(0, 1)
    assert dev.enabled is False
    assert all(dev.read(addr) == 0 for addr in range(16))


def test_plasma_cannon_enable():
    cannon = PlasmaCannon()
    cannon.activate(3)
    cannon.write(0, 1)
    assert cannon.enabled is True
    assert cannon.read(0) == 0
    cannon.write(0, 2)
    assert cannon.enabled is False


def test_propulsion_activation_fills_tank():
    p = Propulsion()
    p.activate(2)
    assert p.fuel == 0xFFFFFFFF
    assert p.read(2) == 0xFF
    p.activate(0)
    assert p.fuel == 0


def test_propulsion_control_register():
    p = Propulsion()
    p.activate(1)
    p.write(0, 0x03)
    assert p.enabled and p.forward
    p.write(0, 0x01)
    assert p.enabled and not p.forward
    p.write(1, 200)
    assert p.thrust == 200


def test_propulsion_fuel_registers_report_low_byte():
    p = Propulsion()
    p.activate(1)
    p.fuel = 0x42
    assert [p.read(a) for a in range(2, 6)] == [0x42] * 4
    p.fuel = 0x4200
    assert [p.read(a) for a in range(2, 6)] == [0] * 4


def test_propulsion_velocity_at_rest():
    p = Propulsion()
    p.activate(1)
    p.set_velocity((0.0, 0.0), 0.0)
    assert p.velocity_abs == bytes(2)
    assert p.velocity_dir == bytes(4)
    assert p.heading == bytes(4)


def test_propulsion_velocity_magnitude():
    p = Propulsion()
    p.activate(1)
    p.set_velocity((3.0, 4.0), 0.0)
    assert p.velocity_abs == (5).to_bytes(2, "little", signed=True)
    assert [p.read(6), p.read(7)] == list(p.velocity_abs)


def test_propulsion_velocity_magnitude_saturates():
    p = Propulsion()
    p.activate(1)
    p.set_velocity((1e9, 0.0), 0.0)
    assert int.from_bytes(p.velocity_abs, "little", signed=True) == 32767


def test_propulsion_velocity_direction():
    p = Propulsion()
    p.activate(1)
    p.set_velocity((1.0, 0.0), 0.0)
    assert _u32(p.velocity_dir) == pytest.approx(math.pi / 2 * 1e6, abs=1)
    assert [p.read(a) for a in range(8, 12)] == list(p.velocity_dir)
    p.set_velocity((-1.0, 0.0), 0.0)
    assert p.velocity_dir == bytes(4)


def test_propulsion_heading_wraps_negative():
    p = Propulsion()
    p.activate(1)
    p.set_velocity((0.0, 0.0), -1.0)
    assert _u32(p.heading) / 1e6 == pytest.approx(2 * math.pi - 1.0, abs=1e-5)
    assert [p.read(a) for a in range(12, 16)] == list(p.heading)


def test_reaction_wheel_torque_registers():
    w = ReactionWheel()
    w.activate(1)
    w.write(1, 0x34)
    w.write(2, 0x12)
    w.write(0, 0x03)
    assert w.enabled
    assert w.torque() == float(0x1234)
    w.write(0, 0x01)
    assert w.torque() == -float(0x1234)


def test_reaction_wheel_low_byte_keeps_high_byte():
    w = ReactionWheel()
    w.activate(1)
    w.write(2, 0xAB)
    w.write(1, 0xCD)
    w.write(1, 0x01)
    assert w.raw_torque == 0xAB01


def test_reaction_wheel_angular_velocity():
    w = ReactionWheel()
    w.activate(1)
    w.set_angular_velocity(0.5)
    assert w.read(2) == 1
    assert _u32(w.angular_velocity) == pytest.approx(500000, abs=1)
    assert [w.read(a) for a in range(3, 7)] == list(w.angular_velocity)


def test_reaction_wheel_angular_velocity_clamped_and_signed():
    w = ReactionWheel()
    w.activate(1)
    w.set_angular_velocity(-2.0)
    assert w.read(2) == 0
    assert _u32(w.angular_velocity) == 1000000


def test_scanner_register_writes():
    s = _scanner(aperture=255, max_distance=3, heading=0)
    assert s.aperture_angle == pytest.approx(2 * math.pi)
    assert s.max_detection_distance == pytest.approx(3 * 1000.0)
    s.write(4, 9)
    assert s.sensitivity == 9.0
    assert s.read(3) == 0


def test_scanner_detects_target_ahead():
    s = _scanner()
    found = s.check(_ship(), [(1000, 1000), (2000, 1000)])
    assert len(found) == 1
    assert found[0].distance == pytest.approx(1000.0)
    assert found[0].angle_relative == pytest.approx(0.0)


def test_scanner_ignores_target_behind_and_out_of_range():
    s = _scanner()
    assert s.check(_ship(), [(0, 1000)]) == []
    assert s.check(_ship(), [(21000, 1000)]) == []


def test_scanner_puts_nearest_first():
    s = _scanner()
    found = s.check(_ship(), [(4000, 1000), (2000, 1000), (3000, 1000)])
    assert [d.distance for d in found] == pytest.approx([1000.0, 3000.0, 2000.0])


def test_scanner_keeps_at_most_five():
    s = _scanner()
    targets = [(1000 + 500 * k, 1000) for k in range(1, 8)]
    found = s.check(_ship(), targets)
    assert len(found) == 5


def test_scanner_detection_registers():
    s = _scanner()
    s.detections = s.check(_ship(), [(11000, 1000)])
    assert s.read(5) == 1
    assert s.read(6) == 255
    assert s.read(7) == 128
    assert s.read(8) == 0
    assert s.read(9) == 0


def test_detection_is_immutable():
    d = Detection(0.1, 0.2, 3.0)
    with pytest.raises(AttributeError):
        d.distance = 4.0
    assert d == Detection(0.1, 0.2, 3.0)