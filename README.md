# spaceautomats

A small, deterministic 2D space simulation. Each participant is a
*space automat*: a program with an `init` and a `run` function that
controls a ship by reading and writing byte registers of the devices
mounted in its slots. The physics model moves the ships, spawns plasma
shots and applies damage on hits. Random placement and shot spread come
from a generator seeded per simulation, so the same seed and the same
programs give the same run.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Writing an automat

A program is either an object with callable attributes `init` and `run`,
or a mapping holding them under the keys `"init"` and `"run"`. Both are
called with the ship; their return values are ignored.

- `init(ship)` is called once by `Simulation.init()`. Use it to name the
  ship and to mount devices in slots.
- `run(ship)` is called once per simulation step. Use it to read sensor
  registers and write control registers.

The ship (`spaceautomats.ship.Ship`) offers:

- `ship.name(name)` – set the ship's name (kept in `ship.ship_name`).
- `ship.slot(slot_id, device_name)` – mount a device in a slot. Slot 0
  and unknown names are ignored. Device names are `"propulsion"`,
  `"reaction wheel"`, `"scanner"` and `"plasma cannon"`.
- `ship.write(slot_id, addr, value)` – write a byte to a device register;
  writes to empty slots are ignored.
- `ship.read(slot_id, addr)` – read a byte from a device register
  (0 for empty slots and unknown registers).
- `ship.log(msg)` – append text to the ship's log (`ship.log_text`).

Slot ids, addresses and values must be integers in 0..255; anything else
raises `ValueError`.

### Device registers

| Device         | Write                                                                   | Read                                                               |
|----------------|-------------------------------------------------------------------------|--------------------------------------------------------------------|
| propulsion     | 0: bit 0 enable, bit 1 forward; 1: thrust                               | 2–5: lowest byte of the fuel level; 6–7: speed; 8–11: velocity direction (µrad); 12–15: heading (µrad) |
| reaction wheel | 0: bit 0 enable, bit 1 counter-clockwise; 1–2: torque (low, high byte)  | 2: counter-clockwise flag; 3–6: angular velocity (µrad/step)       |
| scanner        | 0: bit 0 enable; 1: aperture; 2: range (×1000); 3: heading; 4: sensitivity | 1: aperture; 3: heading; 5: detection count; 6–15: distance/angle pairs |
| plasma cannon  | 0: bit 0 fire                                                            | –                                                                  |

Multi-byte values are little-endian. The scanner reports up to five
contacts, the nearest first. Mounting the propulsion fills its tank; the
enabled scanner, propulsion and reaction wheel draw fuel, and thrust draws
its value on top. An enabled plasma cannon fires when more than three
steps have passed since its last shot; a hit on another ship takes 100
from that ship's `health`, and ships at health 0 no longer move.

## Running a simulation

```python
from spaceautomats.simulation import Simulation


def init(ship):
    ship.name("Scout")
    ship.slot(1, "propulsion")
    ship.slot(2, "scanner")


def run(ship):
    ship.write(1, 0, 0b11)   # enable, forward
    ship.write(1, 1, 10)     # thrust
    ship.log(f"contacts: {ship.read(2, 5)}\n")


program = {"init": init, "run": run}

sim = Simulation(5000, 5000, 1)   # width, height, seed
sim.load_automat(program)         # True; programs without init/run give False
sim.load_automat(program)
print(sim.count_automats())       # 2

sim.init()                        # places ships and calls init() of each
print(sim.count_initialized())    # 2

for _ in range(3):
    sim.step()                    # moves the world, then calls run() of each

print(sim.count_steps())          # [3, 3]
```

`Simulation` keeps its automats in `automats`, the flying shots in
`plasmas` and the physics in `physmodel` (`physmodel.dimensions()` gives
the field size).

Each automat (`spaceautomats.automat.SpaceAutomat`) has a `state`: a
`State` with a `kind` of `StateKind.INIT`, `RUN` or `ERROR` and a
`message`. After each successful step the message holds the ship's log.
An automat whose `run` raises is put into the error state with its log
and the error text, and takes no further part in the steps. If an `init`
raises, `Simulation.init()` raises `AutomatError`.

## What this package does not do

It is a library only: there is no command-line tool, no viewer or
graphical display, and no saving or loading of simulation runs. Automat
programs are Python callables; the package does not read program files
or run any other scripting language.