"""Tests for TextBuffer."""

import pytest

from vimlet._buffer import TextBuffer


class TestBufferBasic:
    def test_init_empty(self):
        buf = TextBuffer()
        assert buf.lines == [""]
        assert buf.line_count() == 1
        assert buf.last_row() == 0

    def test_init_multiline(self):
        buf = TextBuffer("one\ntwo\n")
        assert buf.lines == ["one", "two", ""]
        assert buf.line_length(1) == 3

    def test_lines_is_a_copy(self):
        buf = TextBuffer("abc")
        buf.lines.append("zzz")
        assert buf.line_count() == 1

    def test_get_content(self):
        assert TextBuffer("a\nb").get_content() == "a\nb"


class TestBufferEdits:
    def test_insert_char_middle(self):
        buf = TextBuffer("ac")
        assert buf.insert_char(0, 1, "b") == 1
        assert buf.line(0) == "abc"

    def test_insert_char_clamps_past_end(self):
        buf = TextBuffer("ab")
        assert buf.insert_char(0, 10, "c") == 2
        assert buf.line(0) == "abc"

    def test_delete_before(self):
        buf = TextBuffer("abc")
        assert buf.delete_before(0, 2) is True
        assert buf.line(0) == "ac"

    def test_delete_before_at_column_zero_is_noop(self):
        buf = TextBuffer("abc")
        assert buf.delete_before(0, 0) is False
        assert buf.line(0) == "abc"

    def test_delete_before_out_of_range_is_noop(self):
        buf = TextBuffer("ab")
        assert buf.delete_before(0, 5) is False
        assert buf.line(0) == "ab"

    def test_split_line(self):
        buf = TextBuffer("hello")
        buf.split_line(0, 2)
        assert buf.lines == ["he", "llo"]

    def test_split_line_at_end(self):
        buf = TextBuffer("hello")
        buf.split_line(0, 5)
        assert buf.lines == ["hello", ""]

    def test_merge_with_previous(self):
        buf = TextBuffer("x\nab\ny")
        assert buf.merge_with_previous(1) == 1
        assert buf.lines == ["xab", "y"]

    def test_merge_first_line_raises(self):
        buf = TextBuffer("x")
        with pytest.raises(IndexError):
            buf.merge_with_previous(0)
        assert buf.lines == ["x"]
