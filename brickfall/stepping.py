"""Step-by-step execution control for game schedules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum, auto

logger = logging.getLogger(__name__)

_STEPPING_HINT = "Press ` to toggle stepping mode (S: step system, Space: step frame)"
_NO_STEPPING_HINT = (
    "Bevy was compiled without stepping support. "
    "Run with `--features=bevy_debug_stepping` to enable stepping."
)

CURSOR_MARK = "-> "
BLANK_MARK = "   "


class Key(Enum):
    """Keys the stepping controls react to."""

    SLASH = "slash"
    BACKQUOTE = "backquote"
    SPACE = "space"
    S = "s"


class _Action(Enum):
    WAIT = auto()
    STEP = auto()
    CONTINUE = auto()


class Stepping:
    """Tracks which systems of the stepped schedules may run this frame."""

    def __init__(self) -> None:
        self._labels: list[str] = []
        self._order: list[tuple[str, str]] = []
        self._index: dict[tuple[str, str], int] = {}
        self._always_run: set[tuple[str, str]] = set()
        self._cursor = 0
        self._enabled = False
        self._action = _Action.WAIT

    def __repr__(self) -> str:
        return (
            f"Stepping(enabled={self._enabled}, action={self._action.name}, "
            f"cursor={self.cursor()}, schedules={self._labels})"
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def schedules(self) -> list[str]:
        return list(self._labels)

    @property
    def systems(self) -> list[tuple[str, str]]:
        """Steppable (schedule, system) pairs in execution order."""
        return list(self._order)

    def add_schedule(self, label: str, systems: Iterable[str]) -> Stepping:
        """Register a schedule; systems named ``bevy...`` always run."""
        if label in self._labels:
            raise ValueError(f"schedule {label!r} already added")
        entries = list(systems)
        if len(set(entries)) != len(entries):
            raise ValueError(f"schedule {label!r} lists a system twice")
        self._labels.append(label)
        for system in entries:
            key = (label, system)
            if system.startswith("bevy"):
                self._always_run.add(key)
            else:
                self._index[key] = len(self._order)
                self._order.append(key)
        return self

    def enable(self) -> None:
        self._enabled = True
        self._action = _Action.WAIT

    def disable(self) -> None:
        self._enabled = False
        self._action = _Action.WAIT

    def step_frame(self) -> None:
        """Run only the system under the cursor in the next frame."""
        self._action = _Action.STEP

    def continue_frame(self) -> None:
        """Run from the cursor to the end of the frame."""
        self._action = _Action.CONTINUE

    def cursor(self) -> tuple[str, str] | None:
        """The system that will run next, or None when not stepping."""
        if not self._enabled or not self._order:
            return None
        return self._order[self._cursor]

    def should_run(self, label: str, system: str) -> bool:
        """Whether ``system`` of schedule ``label`` runs in the current frame."""
        if not self._enabled:
            return True
        key = (label, system)
        if key in self._always_run or key not in self._index:
            return True
        position = self._index[key]
        if self._action is _Action.STEP:
            return position == self._cursor
        if self._action is _Action.CONTINUE:
            return position >= self._cursor
        return False

    def advance(self) -> None:
        """Finish the frame: move the cursor according to the pending action."""
        if not self._enabled:
            return
        if self._action is _Action.STEP and self._order:
            self._cursor = (self._cursor + 1) % len(self._order)
        elif self._action is _Action.CONTINUE:
            self._cursor = 0
        self._action = _Action.WAIT


def hint_text(stepping_supported: bool) -> str:
    """The help line shown at the bottom of the screen."""
    return _STEPPING_HINT if stepping_supported else _NO_STEPPING_HINT


def handle_input(stepping: Stepping, just_pressed: Iterable[Key]) -> None:
    """Apply the keys pressed this frame to ``stepping``."""
    keys = set(just_pressed)
    if Key.SLASH in keys:
        logger.info("%r", stepping)
    if Key.BACKQUOTE in keys:
        if stepping.enabled:
            stepping.disable()
            logger.debug("disabled stepping")
        else:
            stepping.enable()
            logger.debug("enabled stepping")
    if not stepping.enabled:
        return
    if Key.SPACE in keys:
        logger.debug("continue")
        stepping.continue_frame()
    elif Key.S in keys:
        logger.debug("stepping frame")
        stepping.step_frame()


def cursor_marks(stepping: Stepping) -> list[tuple[str, str, str]]:
    """Each steppable system with the mark drawn beside it; empty when not stepping."""
    current = stepping.cursor()
    if current is None:
        return []
    return [
        (label, system, CURSOR_MARK if (label, system) == current else BLANK_MARK)
        for label, system in stepping.systems
    ]