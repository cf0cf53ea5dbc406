"""The ship hull that an automat program controls through device slots."""

from __future__ import annotations

from dataclasses import dataclass, field

from spaceautomats.devices import Device, PlasmaCannon, Propulsion, ReactionWheel, Scanner
from spaceautomats.spaceobject import SpaceObject

SHIP_SIZE = 50000
MAX_HEALTH = 0xFFFF
DEFAULT_NAME = "MyShip"


def _ship_object() -> SpaceObject:
    return SpaceObject(size=SHIP_SIZE)


def _byte(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be an integer in 0..255, got {value!r}")
    return value


@dataclass
class Ship:
    """Hull, health, log and the devices an automat can mount in slots.

    The methods ``name``, ``slot``, ``write``, ``read`` and ``log`` form the
    interface offered to automat programs.
    """

    object: SpaceObject = field(default_factory=_ship_object)
    propulsion: Propulsion = field(default_factory=Propulsion)
    reaction_wheel: ReactionWheel = field(default_factory=ReactionWheel)
    scanner: Scanner = field(default_factory=Scanner)
    plasma_cannon: PlasmaCannon = field(default_factory=PlasmaCannon)
    ship_name: str = DEFAULT_NAME
    health: int = MAX_HEALTH
    log_text: str = ""
    slots: dict[int, Device] = field(default_factory=dict, repr=False)

    @property
    def devices(self) -> tuple[Device, ...]:
        """All devices the ship carries, mounted or not."""
        return (self.propulsion, self.reaction_wheel, self.scanner, self.plasma_cannon)

    def name(self, name: str) -> None:
        """Set the ship's name."""
        self.ship_name = str(name)

    def slot(self, slot_id: int, device_name: str) -> None:
        """Mount the named device in a slot; slot 0 and unknown names are ignored."""
        slot_id = _byte(slot_id, "slot id")
        if slot_id == 0:
            return
        for device in self.devices:
            if device.name == device_name:
                device.activate(slot_id)
                self.slots[slot_id] = device

    def write(self, slot_id: int, addr: int, value: int) -> None:
        """Write a register of the device in a slot; empty slots ignore it."""
        slot_id = _byte(slot_id, "slot id")
        addr = _byte(addr, "address")
        value = _byte(value, "value")
        device = self.slots.get(slot_id)
        if device is not None:
            device.write(addr, value)

    def read(self, slot_id: int, addr: int) -> int:
        """Read a register of the device in a slot; empty slots read 0."""
        slot_id = _byte(slot_id, "slot id")
        addr = _byte(addr, "address")
        device = self.slots.get(slot_id)
        if device is None:
            return 0
        return device.read(addr)

    def log(self, msg: str) -> None:
        """Append a message to the ship's log."""
        self.log_text += str(msg)

    def apply_damage(self, value: int) -> None:
        """Reduce health, never below zero."""
        self.health = max(self.health - value, 0)