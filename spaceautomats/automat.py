"""An automat: a control program bound to a ship."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from spaceautomats.ship import Ship

LOG_HEADER = "--- Log ---\n"
ERROR_HEADER = "\n\n--- Program error ---\n"


class AutomatError(Exception):
    """Raised when an automat program cannot be used."""


class InitFunctionMissing(AutomatError):
    """The program has no callable init."""


class RunFunctionMissing(AutomatError):
    """The program has no callable run."""


class StateKind(Enum):
    INIT = "init"
    RUN = "run"
    ERROR = "error"


@dataclass(frozen=True)
class State:
    """Lifecycle state of an automat with its latest log or error text."""

    kind: StateKind
    message: str = ""


def _entry(program: Any, name: str) -> Callable[[Ship], Any] | None:
    if isinstance(program, Mapping):
        candidate = program.get(name)
    else:
        candidate = getattr(program, name, None)
    return candidate if callable(candidate) else None


class SpaceAutomat:
    """A ship driven by a program that provides ``init(ship)`` and ``run(ship)``.

    A program is any object with those two callables as attributes, or a
    mapping holding them under the keys ``"init"`` and ``"run"``.
    """

    def __init__(self, program: Any = None) -> None:
        self.id = 0
        self.step_count = 0
        self.ship = Ship()
        self.state = State(StateKind.INIT)
        self._init: Callable[[Ship], Any] | None = None
        self._run: Callable[[Ship], Any] | None = None
        if program is not None:
            self.load(program)

    def load(self, program: Any) -> None:
        """Take a program; raise if init or run is missing."""
        init_fn = _entry(program, "init")
        run_fn = _entry(program, "run")
        if init_fn is None:
            raise InitFunctionMissing("program has no init function")
        if run_fn is None:
            raise RunFunctionMissing("program has no run function")
        self._init = init_fn
        self._run = run_fn

    def init(self) -> None:
        """Call the program's init to configure the ship."""
        if self._init is None:
            raise AutomatError("no program loaded")
        try:
            self._init(self.ship)
        except Exception as exc:
            raise AutomatError(f"init failed: {exc}") from exc
        self.state = State(StateKind.RUN)

    def is_initialized(self) -> bool:
        """Return True while the automat is running."""
        return self.state.kind is StateKind.RUN

    def step(self) -> None:
        """Call the program's run once; a failure puts the automat in error state."""
        if self._run is None:
            raise AutomatError("no program loaded")
        try:
            self._run(self.ship)
        except Exception as exc:
            self.set_error(LOG_HEADER + self.ship.log_text + ERROR_HEADER + str(exc))
            return
        self.step_count += 1
        self.state = State(StateKind.RUN, LOG_HEADER + self.ship.log_text)

    def set_error(self, info: str) -> None:
        """Put the automat into error state with the given text."""
        self.state = State(StateKind.ERROR, info)