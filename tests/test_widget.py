"""Tests for the ModalEditor widget."""

from types import SimpleNamespace

from vimlet.editor import UNKNOWN_COMMAND
from vimlet.modes import EditorMode, Outcome
from vimlet.widget import ModalEditor


def _key(char, key=None):
    return SimpleNamespace(key=key or char, character=char)


def _frame_lines(editor):
    return editor._compose_frame().plain.split("\n")


class TestWidgetKeys:
    def test_init(self):
        editor = ModalEditor("abc")
        assert editor.state.lines == ["abc"]
        assert editor.state.mode == EditorMode.NORMAL

    def test_colon_key_name(self):
        editor = ModalEditor()
        editor._handle_key(_key(":", "colon"))
        assert editor.state.mode == EditorMode.COMMAND
        assert editor.state.command == ":"

    def test_insert_and_escape(self):
        editor = ModalEditor()
        editor._handle_key(_key("i"))
        editor._handle_key(_key("h"))
        editor._handle_key(_key("i"))
        editor._handle_key(SimpleNamespace(key="escape", character="\x1b"))
        assert editor.state.lines == ["hi"]
        assert editor.state.cursors.normal.col == 1

    def test_quit_outcome(self):
        editor = ModalEditor()
        editor._handle_key(_key(":", "colon"))
        editor._handle_key(_key("q"))
        outcome = editor._handle_key(SimpleNamespace(key="enter", character="\r"))
        assert outcome is Outcome.TERMINATE

    def test_ctrl_z(self):
        editor = ModalEditor()
        outcome = editor._handle_key(SimpleNamespace(key="ctrl+z", character="\x1a"))
        assert outcome is Outcome.TERMINATE


class TestWidgetRender:
    def test_too_small(self):
        editor = ModalEditor()
        editor.state.resize(5, 2)
        assert editor._compose_frame().plain == "(too small)"

    def test_layout(self):
        editor = ModalEditor("hello\nworld")
        editor.state.resize(40, 6)
        lines = _frame_lines(editor)
        assert len(lines) == 6
        assert lines[0] == "hello"
        assert lines[1] == "world"
        assert lines[2] == "~"
        assert lines[3] == "~"
        assert lines[4].startswith(" NORMAL ")
        assert "Ln 1/2, Col 1" in lines[4]
        assert len(lines[4]) == 40
        assert lines[5] == ""

    def test_insert_cursor_after_line_end(self):
        editor = ModalEditor("ab")
        editor.state.resize(40, 6)
        editor._handle_key(_key("l"))
        editor._handle_key(_key("a"))
        lines = _frame_lines(editor)
        # a trailing cell is drawn for the cursor past the last character
        assert lines[0] == "ab "
        assert lines[4].startswith(" INSERT ")

    def test_command_line(self):
        editor = ModalEditor()
        editor.state.resize(40, 6)
        editor._handle_key(_key(":", "colon"))
        editor._handle_key(_key("w"))
        lines = _frame_lines(editor)
        assert lines[4].startswith(" COMMAND ")
        assert lines[5] == ":w "

    def test_unknown_command_message(self):
        editor = ModalEditor()
        editor.state.resize(40, 6)
        for k in (_key(":", "colon"), _key("z"), SimpleNamespace(key="enter", character="\r")):
            editor._handle_key(k)
        assert _frame_lines(editor)[5] == UNKNOWN_COMMAND

    def test_scrolls_to_cursor(self):
        editor = ModalEditor("\n".join(str(i) for i in range(20)))
        editor.state.resize(40, 6)
        for _ in range(10):
            editor._handle_key(_key("j"))
        lines = _frame_lines(editor)
        assert lines[3] == "10"
        assert lines[0] == "7"

    def test_long_line_is_truncated(self):
        editor = ModalEditor("x" * 100)
        editor.state.resize(20, 5)
        assert _frame_lines(editor)[0] == "x" * 20

    def test_wide_characters_use_two_cells(self):
        editor = ModalEditor("한" * 20)
        editor.state.resize(20, 5)
        assert _frame_lines(editor)[0] == "한" * 10

    def test_status_bar_background_is_the_same_in_every_mode(self):
        editor = ModalEditor()
        editor.state.resize(40, 6)
        escape = SimpleNamespace(key="escape", character="\x1b")
        for k in (None, _key("i"), escape, _key(":", "colon")):
            if k is not None:
                editor._handle_key(k)
            frame = editor._compose_frame()
            status_start = frame.plain.index(f" {editor.state.status_label} ")
            styles = {
                str(span.style)
                for span in frame.spans
                if span.start >= status_start and span.end <= status_start + 40
            }
            assert styles <= {ModalEditor.LABEL_STYLE, ModalEditor.STATUS_BAR_STYLE}
            assert all("#1d293d" in style for style in styles)
