"""Mode state machine and key dispatch for the modal editor.

All editor state lives on :class:`EditorState`. :func:`dispatch` resolves one
key chord against the keymaps and runs exactly one action handler, which
mutates the state in place and returns an :class:`Outcome`.
"""

from __future__ import annotations

from typing import Callable, Iterable, NamedTuple, Union

from textual import log

from vimlet._buffer import TextBuffer
from vimlet._cursor import CursorSet
from vimlet.keymap import Action, KeyChord, resolve
from vimlet.modes import EditorMode, Outcome

QUIT_COMMAND = ":q"
UNKNOWN_COMMAND = "Unknown command."

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


class Resize(NamedTuple):
    width: int
    height: int


Event = Union[KeyChord, Resize]


class EditorState:
    """Buffer, cursors, mode and command line of one editing session."""

    def __init__(
        self,
        initial_content: str = "",
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self.buffer: TextBuffer = TextBuffer(initial_content)
        self.cursors: CursorSet = CursorSet()
        self.mode: EditorMode = EditorMode.NORMAL
        self.command: str = ""
        self.width: int = width
        self.height: int = height
        self.cursors.command.row = max(0, height - 1)
        # Column j/k try to return to on lines long enough to hold it.
        self.goal_col: int = 0

    @property
    def status_label(self) -> str:
        return self.mode.label

    @property
    def lines(self) -> list[str]:
        return self.buffer.lines

    def switch_mode(self, target: EditorMode, *, append: bool = False) -> None:
        source = self.mode
        self.cursors.reconcile(
            self.buffer, source, target, append=append, command_text=self.command
        )
        self.mode = target
        if source != target:
            log.debug(f"mode {source.label} -> {target.label}")

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cursors.command.row = max(0, height - 1)
        log.debug(f"resize {width}x{height}")


# -- NORMAL ------------------------------------------------------------------


def _kill(state: EditorState, key: KeyChord) -> Outcome:
    log.info("kill requested")
    return Outcome.TERMINATE


def _enter_command(state: EditorState, key: KeyChord) -> Outcome:
    state.command = ":"
    state.switch_mode(EditorMode.COMMAND)
    return Outcome.CONTINUE


def _insert_before(state: EditorState, key: KeyChord) -> Outcome:
    state.switch_mode(EditorMode.INSERT)
    return Outcome.CONTINUE


def _insert_after(state: EditorState, key: KeyChord) -> Outcome:
    state.switch_mode(EditorMode.INSERT, append=True)
    return Outcome.CONTINUE


def _move_left(state: EditorState, key: KeyChord) -> Outcome:
    cur = state.cursors.normal
    cur.col = max(0, cur.col - 1)
    state.goal_col = cur.col
    return Outcome.CONTINUE


def _move_right(state: EditorState, key: KeyChord) -> Outcome:
    cur = state.cursors.normal
    # Stop on the last character; only Insert may sit past the end.
    if cur.col < state.buffer.line_length(cur.row) - 1:
        cur.col += 1
    state.goal_col = cur.col
    return Outcome.CONTINUE


def _move_vertical(state: EditorState, delta: int) -> None:
    cur = state.cursors.normal
    cur.row = max(0, min(cur.row + delta, state.buffer.last_row()))
    line_len = state.buffer.line_length(cur.row)
    cur.col = min(state.goal_col, max(0, line_len - 1))


def _move_down(state: EditorState, key: KeyChord) -> Outcome:
    _move_vertical(state, 1)
    return Outcome.CONTINUE


def _move_up(state: EditorState, key: KeyChord) -> Outcome:
    _move_vertical(state, -1)
    return Outcome.CONTINUE


# -- COMMAND -----------------------------------------------------------------


def _leave_command(state: EditorState) -> None:
    state.switch_mode(EditorMode.NORMAL)


def _command_backspace(state: EditorState, key: KeyChord) -> Outcome:
    state.command = state.command[:-1]
    state.cursors.command.col = max(0, state.cursors.command.col - 1)
    if not state.command:
        _leave_command(state)
    return Outcome.CONTINUE


def _command_cancel(state: EditorState, key: KeyChord) -> Outcome:
    state.command = ""
    _leave_command(state)
    return Outcome.CONTINUE


def _command_execute(state: EditorState, key: KeyChord) -> Outcome:
    cmd = state.command
    if cmd == QUIT_COMMAND:
        log.info("quit command")
        return Outcome.TERMINATE
    log.info(f"unknown command {cmd!r}")
    state.command = UNKNOWN_COMMAND
    _leave_command(state)
    return Outcome.CONTINUE


# -- INSERT ------------------------------------------------------------------


def _leave_insert(state: EditorState, key: KeyChord) -> Outcome:
    state.switch_mode(EditorMode.NORMAL)
    state.goal_col = state.cursors.normal.col
    return Outcome.CONTINUE


def _split_line(state: EditorState, key: KeyChord) -> Outcome:
    cur = state.cursors.insert
    state.buffer.split_line(cur.row, cur.col)
    cur.move_to(0, cur.row + 1)
    return Outcome.CONTINUE


def _delete_backward(state: EditorState, key: KeyChord) -> Outcome:
    cur = state.cursors.insert
    if cur.col > 0:
        state.buffer.delete_before(cur.row, cur.col)
        cur.col -= 1
    elif cur.row > 0:
        prev_len = state.buffer.merge_with_previous(cur.row)
        cur.move_to(prev_len, cur.row - 1)
    return Outcome.CONTINUE


# -- Text fallback -----------------------------------------------------------


def _type_text(state: EditorState, key: KeyChord) -> Outcome:
    if state.mode == EditorMode.COMMAND:
        state.command += key.code
        state.cursors.command.col += 1
    elif state.mode == EditorMode.INSERT:
        cur = state.cursors.insert
        state.buffer.insert_char(cur.row, cur.col, key.code)
        cur.col += 1
    return Outcome.CONTINUE


_HANDLERS: dict[Action, Callable[[EditorState, KeyChord], Outcome]] = {
    Action.KILL: _kill,
    Action.ENTER_COMMAND: _enter_command,
    Action.INSERT_BEFORE: _insert_before,
    Action.INSERT_AFTER: _insert_after,
    Action.MOVE_LEFT: _move_left,
    Action.MOVE_RIGHT: _move_right,
    Action.MOVE_DOWN: _move_down,
    Action.MOVE_UP: _move_up,
    Action.COMMAND_BACKSPACE: _command_backspace,
    Action.COMMAND_CANCEL: _command_cancel,
    Action.COMMAND_EXECUTE: _command_execute,
    Action.LEAVE_INSERT: _leave_insert,
    Action.SPLIT_LINE: _split_line,
    Action.DELETE_BACKWARD: _delete_backward,
    Action.TYPE_TEXT: _type_text,
}


def dispatch(state: EditorState, key: KeyChord) -> Outcome:
    """Run the action bound to *key* in the current mode.

    Unbound keys leave the state untouched. After the action the active
    mode's cursor is re-derived so Normal and Insert stay in step.
    """
    action = resolve(state.mode, key)
    if action is None:
        return Outcome.CONTINUE
    outcome = _HANDLERS[action](state, key)
    state.switch_mode(state.mode)
    return outcome


def run_events(state: EditorState, events: Iterable[Event]) -> Outcome:
    """Feed *events* through the editor until one of them terminates it."""
    for event in events:
        if isinstance(event, Resize):
            state.resize(event.width, event.height)
            continue
        if dispatch(state, event) is Outcome.TERMINATE:
            return Outcome.TERMINATE
    return Outcome.CONTINUE
