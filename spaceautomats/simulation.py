"""A simulation run: automats, their plasma and the physics model."""

from __future__ import annotations

from typing import Any

from spaceautomats.automat import AutomatError, SpaceAutomat
from spaceautomats.physmodel import PhysModel
from spaceautomats.plasma import Plasma


class Simulation:
    """Holds automats on a field of the given size and steps them together."""

    def __init__(self, width: int, height: int, seed: int) -> None:
        self.automats: list[SpaceAutomat] = []
        self.plasmas: list[Plasma] = []
        self.physmodel = PhysModel(width, height, seed)

    def load_automat(self, program: Any) -> bool:
        """Add an automat running the program; unusable programs are skipped.

        Returns True if the automat was added.
        """
        automat = SpaceAutomat()
        try:
            automat.load(program)
        except AutomatError:
            return False
        self.automats.append(automat)
        return True

    def count_automats(self) -> int:
        """Number of loaded automats."""
        return len(self.automats)

    def init(self) -> None:
        """Place the ships, run every program's init and number the automats."""
        self.physmodel.init(self.automats)
        for index, automat in enumerate(self.automats):
            automat.init()
            automat.id = index

    def count_initialized(self) -> int:
        """Number of automats that are running."""
        return sum(1 for automat in self.automats if automat.is_initialized())

    def step(self) -> None:
        """Advance the physics, then run every running automat once."""
        self.physmodel.update(self.automats, self.plasmas)
        for automat in self.automats:
            if automat.is_initialized():
                automat.step()

    def count_steps(self) -> list[int]:
        """Steps performed by each automat, in load order."""
        return [automat.step_count for automat in self.automats]