from spaceautomats.automat import StateKind
from spaceautomats.simulation import Simulation


class DemoAutomat:
    def init(self, ship):
        ship.name("Demo")
        ship.slot(1, "propulsion")
        ship.slot(2, "reaction wheel")
        ship.slot(3, "scanner")
        ship.slot(4, "plasma cannon")
        return True

    def run(self, ship):
        ship.write(1, 0, 3)
        ship.write(1, 1, 10)
        ship.write(2, 0, 1)
        ship.write(2, 1, 100)
        ship.write(3, 0, 1)
        ship.write(3, 1, 64)
        ship.write(3, 2, 10)
        ship.write(4, 0, 1)
        ship.log(f"fuel {ship.read(1, 2)}\n")
        return True


class BrokenAutomat:
    def init(self, ship):
        return True

    def run(self, ship):
        raise RuntimeError("broken")


def test_load_and_release():
    sim = Simulation(5000, 5000, 1)
    sim.load_automat("print('hello world!')")
    sim.load_automat("print('hello world!')")
    sim.load_automat(DemoAutomat())
    assert sim.count_automats() == 1


def test_load_reports_success():
    sim = Simulation(5000, 5000, 1)
    assert sim.load_automat("print('hello world!')") is False
    assert sim.load_automat(DemoAutomat()) is True


def test_load_10_space_automats_and_initialize():
    sim = Simulation(5000, 5000, 1)
    for _ in range(1, 11):
        sim.load_automat(DemoAutomat())
    assert sim.count_automats() == 10
    sim.init()
    assert sim.count_initialized() == 10
    assert [a.id for a in sim.automats] == list(range(10))


def test_load_space_automats_initialize_and_run_simulation():
    sim = Simulation(5000, 5000, 1)
    sim.load_automat(DemoAutomat())
    sim.load_automat(DemoAutomat())
    sim.load_automat(DemoAutomat())
    assert sim.count_automats() == 3
    sim.init()
    assert sim.count_initialized() == 3
    sim.step()
    sim.step()
    sim.step()
    step_counts = sim.count_steps()
    assert step_counts[0] == 3
    assert step_counts[1] == 3
    assert step_counts[2] == 3


def test_step():
    sim = Simulation(5000, 5000, 1)
    sim.load_automat(DemoAutomat())
    sim.init()
    sim.step()
    assert sim.count_steps() == [1]
    assert sim.physmodel.step_count == 1


def test_uninitialized_automats_are_not_stepped():
    sim = Simulation(5000, 5000, 1)
    sim.load_automat(DemoAutomat())
    sim.step()
    assert sim.count_steps() == [0]


def test_failing_automat_stops_running():
    sim = Simulation(5000, 5000, 1)
    sim.load_automat(BrokenAutomat())
    sim.load_automat(DemoAutomat())
    sim.init()
    sim.step()
    sim.step()
    assert sim.count_steps() == [0, 2]
    assert sim.count_initialized() == 1
    assert sim.automats[0].state.kind is StateKind.ERROR