"""Key chords, action identifiers and the per-mode key tables."""

from __future__ import annotations

from enum import Enum, auto
from typing import NamedTuple

from vimlet.modes import EditorMode

_NO_MODS: frozenset[str] = frozenset()
# Modifiers that turn a printable key into a control chord.
_CONTROL_MODS = frozenset({"ctrl", "alt", "meta", "super", "hyper"})


class KeyChord(NamedTuple):
    """A key code plus the set of modifiers held with it."""

    code: str
    modifiers: frozenset[str] = _NO_MODS

    @property
    def is_printable(self) -> bool:
        return (
            len(self.code) == 1
            and self.code.isprintable()
            and not (self.modifiers & _CONTROL_MODS)
        )

    def __str__(self) -> str:
        return "+".join([*sorted(self.modifiers), self.code])


def chord(spec: str) -> KeyChord:
    """Build a chord from ``"ctrl+z"`` style notation."""
    if len(spec) == 1:
        return KeyChord(spec)
    *mods, code = spec.split("+")
    return KeyChord(code, frozenset(mods))


def chord_from_key(key: str, character: str | None = None) -> KeyChord:
    """Normalise a Textual key event (``key`` name + ``character``) into a chord.

    Printable keys are keyed by the character they produce, so ``colon`` and
    ``shift+a`` become ``:`` and ``A``.
    """
    *mods, code = key.split("+") if len(key) > 1 else [key]
    modifiers = frozenset(mods)
    if (
        character
        and len(character) == 1
        and character.isprintable()
        and not modifiers & _CONTROL_MODS
    ):
        return KeyChord(character)
    return KeyChord(code, modifiers)


class Action(Enum):
    KILL = auto()
    # NORMAL
    ENTER_COMMAND = auto()
    INSERT_BEFORE = auto()
    INSERT_AFTER = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    MOVE_DOWN = auto()
    MOVE_UP = auto()
    # COMMAND
    COMMAND_BACKSPACE = auto()
    COMMAND_CANCEL = auto()
    COMMAND_EXECUTE = auto()
    # INSERT
    LEAVE_INSERT = auto()
    SPLIT_LINE = auto()
    DELETE_BACKWARD = auto()
    # printable fallback in COMMAND / INSERT
    TYPE_TEXT = auto()


GLOBAL_MAP: dict[KeyChord, Action] = {
    chord("ctrl+z"): Action.KILL,
}

NORMAL_MAP: dict[KeyChord, Action] = {
    chord(":"): Action.ENTER_COMMAND,
    chord("i"): Action.INSERT_BEFORE,
    chord("a"): Action.INSERT_AFTER,
    chord("h"): Action.MOVE_LEFT,
    chord("l"): Action.MOVE_RIGHT,
    chord("j"): Action.MOVE_DOWN,
    chord("k"): Action.MOVE_UP,
}

COMMAND_MAP: dict[KeyChord, Action] = {
    chord("backspace"): Action.COMMAND_BACKSPACE,
    chord("ctrl+c"): Action.COMMAND_CANCEL,
    chord("escape"): Action.COMMAND_CANCEL,
    chord("enter"): Action.COMMAND_EXECUTE,
}

INSERT_MAP: dict[KeyChord, Action] = {
    chord("escape"): Action.LEAVE_INSERT,
    chord("enter"): Action.SPLIT_LINE,
    chord("backspace"): Action.DELETE_BACKWARD,
}

MODE_MAPS: dict[EditorMode, dict[KeyChord, Action]] = {
    EditorMode.NORMAL: NORMAL_MAP,
    EditorMode.COMMAND: COMMAND_MAP,
    EditorMode.INSERT: INSERT_MAP,
}

# Modes where an unmapped printable key is typed as text.
_TEXT_MODES = frozenset({EditorMode.COMMAND, EditorMode.INSERT})


def resolve(mode: EditorMode, key: KeyChord) -> Action | None:
    """Resolve *key* in *mode*: global map, then mode map, then text fallback."""
    action = GLOBAL_MAP.get(key)
    if action is not None:
        return action
    action = MODE_MAPS[mode].get(key)
    if action is not None:
        return action
    if mode in _TEXT_MODES and key.is_printable:
        return Action.TYPE_TEXT
    return None
