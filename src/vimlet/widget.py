"""Textual widget that drives the modal editor and paints its state."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from vimlet._cursor import Cursor
from vimlet.editor import EditorState, dispatch
from vimlet.keymap import chord_from_key
from vimlet.modes import EditorMode, Outcome


class ModalEditor(Widget, can_focus=True):
    """A vi-style editor over a single in-memory buffer.

    NORMAL:  h j k l  i a  :
    INSERT:  typing / Backspace / Enter / Escape
    COMMAND: :q
    Ctrl+Z quits from any mode.
    """

    DEFAULT_CSS = """
    ModalEditor {
        height: 1fr;
        background: $surface;
    }
    """

    STATUS_BAR_STYLE = "white on #1d293d"
    LABEL_STYLE = "bold white on #1d293d"
    _CURSOR_STYLE = {
        "block": "reverse",
        "bar": "underline bold",
    }

    @dataclass
    class Quit(Message):
        pass

    def __init__(
        self,
        initial_content: str = "",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.state: EditorState = EditorState(initial_content)
        self._scroll_top: int = 0
        self._char_width_cache: dict[str, int] = {}

    # -- Helpers -----------------------------------------------------------

    def _char_width(self, ch: str) -> int:
        """Return display width of a character (2 for fullwidth/wide)."""
        if ch < "\u0100":
            return 1
        w = self._char_width_cache.get(ch)
        if w is None:
            w = 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
            self._char_width_cache[ch] = w
        return w

    def _edit_cursor(self) -> Cursor:
        """Cursor shown in the text area (Command mode keeps the normal one)."""
        if self.state.mode == EditorMode.INSERT:
            return self.state.cursors.insert
        return self.state.cursors.normal

    def _ensure_cursor_visible(self, content_height: int) -> None:
        row = self._edit_cursor().row
        if row < self._scroll_top:
            self._scroll_top = row
        elif row >= self._scroll_top + content_height:
            self._scroll_top = row - content_height + 1
        self._scroll_top = max(0, min(self._scroll_top, self.state.buffer.last_row()))

    # =====================================================================
    # Rendering
    # =====================================================================

    def render(self) -> Text:
        return self._compose_frame()

    def _append_line(
        self,
        result: Text,
        line: str,
        width: int,
        cursor_col: int | None,
        cursor_style: str,
    ) -> None:
        used = 0
        for col, ch in enumerate(line):
            w = self._char_width(ch)
            if used + w > width:
                return
            result.append(ch, style=cursor_style if col == cursor_col else "")
            used += w
        if cursor_col is not None and cursor_col >= len(line) and used < width:
            result.append(" ", style=cursor_style)

    def _compose_frame(self) -> Text:
        state = self.state
        width, height = state.width, state.height
        if height < 3 or width < 10:
            return Text("(too small)")

        content_height = height - 2
        self._ensure_cursor_visible(content_height)

        mode = state.mode
        cursor = self._edit_cursor()
        cursor_style = self._CURSOR_STYLE[mode.cursor_shape]
        lines = state.lines

        result = Text()
        for screen_row in range(content_height):
            line_idx = self._scroll_top + screen_row
            if line_idx < len(lines):
                show_cursor = mode != EditorMode.COMMAND and line_idx == cursor.row
                self._append_line(
                    result,
                    lines[line_idx],
                    width,
                    cursor.col if show_cursor else None,
                    cursor_style,
                )
            else:
                result.append("~", style="dim blue")
            result.append("\n")

        # status bar
        label = f" {state.status_label} "
        pos = f" Ln {cursor.row + 1}/{len(lines)}, Col {cursor.col + 1} "
        result.append(label, style=self.LABEL_STYLE)
        spacer = max(0, width - len(label) - len(pos))
        result.append(" " * spacer, style=self.STATUS_BAR_STYLE)
        if width >= len(label) + len(pos):
            result.append(pos, style=self.STATUS_BAR_STYLE)
        result.append("\n")

        # command line
        if mode == EditorMode.COMMAND:
            self._append_line(
                result,
                state.command,
                width,
                state.cursors.command.col,
                self._CURSOR_STYLE["block"],
            )
        else:
            result.append(state.command[:width])
        return result

    # =====================================================================
    # Events
    # =====================================================================

    def _handle_key(self, event) -> Outcome:
        return dispatch(self.state, chord_from_key(event.key, event.character))

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        if self._handle_key(event) is Outcome.TERMINATE:
            self.post_message(self.Quit())
        self.refresh()

    def on_resize(self, event: events.Resize) -> None:
        self.state.resize(event.size.width, event.size.height)
        self.refresh()
