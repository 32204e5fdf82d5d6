"""Tests for quire.buffer.GraphemeBuffer."""

from __future__ import annotations

import pytest

from quire.buffer import GraphemeBuffer


class TestBufferBasics:
    """Construction, length and byte offsets."""

    def test_empty(self) -> None:
        buf = GraphemeBuffer()
        assert len(buf) == 0
        assert str(buf) == ""
        assert buf.byte_length == 0

    def test_length_counts_clusters(self) -> None:
        buf = GraphemeBuffer("e\u0301a")
        assert buf.length() == 2
        assert buf.texts() == ["e\u0301", "a"]

    def test_offsets_are_utf8_bytes(self) -> None:
        buf = GraphemeBuffer("h\u00e9llo")
        assert [g.offset for g in buf] == [0, 1, 3, 4, 5]
        assert buf.byte_length == 6

    def test_equality_by_text(self) -> None:
        assert GraphemeBuffer("abc") == GraphemeBuffer("abc")
        assert GraphemeBuffer("abc") != GraphemeBuffer("abd")


class TestBufferInsert:
    """Insertion with and without line breaks."""

    def test_insert_single_line(self) -> None:
        buf = GraphemeBuffer("abc")
        result = buf.insert(1, "XY")
        assert str(buf) == "aXYbc"
        assert result.new_line_count == 0
        assert result.cursor == 3
        assert result.new_lines == []

    def test_insert_at_end(self) -> None:
        buf = GraphemeBuffer("ab")
        result = buf.insert(2, "c")
        assert str(buf) == "abc"
        assert result.cursor == 3

    def test_insert_recomputes_offsets(self) -> None:
        buf = GraphemeBuffer("ab")
        buf.insert(0, "好")
        assert [g.offset for g in buf] == [0, 3, 4]

    def test_insert_multiline_moves_tail_to_last_line(self) -> None:
        buf = GraphemeBuffer("abc")
        result = buf.insert(1, "X\nY\nZ")
        assert str(buf) == "aX"
        assert [str(line) for line in result.new_lines] == ["Y", "Zbc"]
        assert result.new_line_count == 2
        assert result.cursor == 1

    def test_insert_crlf_is_one_break(self) -> None:
        buf = GraphemeBuffer("ab")
        result = buf.insert(1, "\r\n")
        assert str(buf) == "a"
        assert [str(line) for line in result.new_lines] == ["b"]
        assert result.cursor == 0

    @pytest.mark.parametrize("position", [-1, 4])
    def test_insert_out_of_range(self, position: int) -> None:
        buf = GraphemeBuffer("abc")
        with pytest.raises(IndexError):
            buf.insert(position, "x")
        assert str(buf) == "abc"


class TestBufferRemove:
    """Backward and forward deletion."""

    def test_remove_before(self) -> None:
        buf = GraphemeBuffer("abc")
        assert buf.remove_before(2)
        assert str(buf) == "ac"

    def test_remove_before_at_start_is_noop(self) -> None:
        buf = GraphemeBuffer("abc")
        assert not buf.remove_before(0)
        assert str(buf) == "abc"

    def test_remove_before_takes_whole_cluster(self) -> None:
        buf = GraphemeBuffer("xe\u0301")
        assert buf.remove_before(2)
        assert str(buf) == "x"

    def test_remove_at(self) -> None:
        buf = GraphemeBuffer("abc")
        assert buf.remove_at(0)
        assert str(buf) == "bc"
        assert not buf.remove_at(2)

    def test_insert_then_remove_round_trip(self) -> None:
        original = "a好\U0001f1ef\U0001f1f5e\u0301z"
        for position in range(len(GraphemeBuffer(original)) + 1):
            buf = GraphemeBuffer(original)
            result = buf.insert(position, "x\u0301y")
            for _ in range(result.cursor - position):
                buf.remove_before(position + 1)
            assert str(buf) == original
            assert buf == GraphemeBuffer(original)


class TestBufferSplitAndJoin:
    """split_off / extend used when lines are joined or broken."""

    def test_split_off(self) -> None:
        buf = GraphemeBuffer("abcd")
        tail = buf.split_off(1)
        assert str(buf) == "a"
        assert str(tail) == "bcd"
        assert [g.offset for g in tail] == [0, 1, 2]

    def test_extend_moves_graphemes(self) -> None:
        top = GraphemeBuffer("好")
        bottom = GraphemeBuffer("ab")
        top.extend(bottom)
        assert str(top) == "好ab"
        assert [g.offset for g in top] == [0, 3, 4]
        assert len(bottom) == 0


class TestNormalizedColumns:
    """Index to column and back."""

    def test_column_of_wide(self) -> None:
        buf = GraphemeBuffer("好h")
        assert buf.column_of(0) == 0
        assert buf.column_of(1) == 2
        assert buf.column_of(2) == 3

    def test_column_of_with_cap(self) -> None:
        buf = GraphemeBuffer("好h")
        assert buf.column_of(1, cap=1) == 1

    def test_index_of_column(self) -> None:
        buf = GraphemeBuffer("好h")
        assert buf.index_of_column(0) == 0
        # Column 1 falls inside the wide grapheme.
        assert buf.index_of_column(1) == 0
        assert buf.index_of_column(2) == 1
        assert buf.index_of_column(3) == 2

    def test_index_of_column_past_end(self) -> None:
        assert GraphemeBuffer("ab").index_of_column(10) == 2

    def test_single_width_is_identity(self) -> None:
        buf = GraphemeBuffer("abcdef")
        for i in range(len(buf) + 1):
            assert buf.index_of_column(buf.column_of(i)) == i
