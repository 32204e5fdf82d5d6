"""Tests for quire.commands -- command values and helpers."""

from __future__ import annotations

import pytest

from quire.commands import (
    DOWN,
    LEAVE,
    LEFT,
    RIGHT,
    UP,
    CursorEnterHorizontal,
    CursorEnterVertical,
    Delete,
    Insert,
    Motion,
    entry_for,
    is_backward,
    is_directional,
    is_mutating,
)


class TestInsert:
    def test_from_text_segments_graphemes(self) -> None:
        cmd = Insert.from_text("e\u0301\U0001f1ef\U0001f1f5")
        assert cmd.graphemes == ("e\u0301", "\U0001f1ef\U0001f1f5")
        assert cmd.text == "e\u0301\U0001f1ef\U0001f1f5"

    def test_line_break_detection(self) -> None:
        assert Insert.from_text("a\r\nb").has_line_break
        assert not Insert.from_text("ab").has_line_break

    def test_line_break_inside_a_grapheme(self) -> None:
        assert Insert(("x\ny",)).has_line_break
        assert Insert(("a", "b\r")).has_line_break

    def test_commands_are_values(self) -> None:
        assert Insert.from_text("a") == Insert(("a",))
        assert Delete(Motion.LEFT) == Delete(Motion.LEFT)


class TestClassification:
    def test_directional(self) -> None:
        assert all(is_directional(cmd) for cmd in (UP, LEFT, DOWN, RIGHT))
        assert not is_directional(LEAVE)
        assert not is_directional(Delete(Motion.LEFT))

    def test_backward(self) -> None:
        assert is_backward(UP)
        assert is_backward(LEFT)
        assert not is_backward(DOWN)
        assert not is_backward(RIGHT)

    def test_mutating(self) -> None:
        assert is_mutating(Insert.from_text("x"))
        assert is_mutating(Delete(Motion.RIGHT))
        assert not is_mutating(RIGHT)


class TestEntryFor:
    """The enter command a neighbor receives."""

    def test_horizontal(self) -> None:
        assert entry_for(LEFT, 5) == CursorEnterHorizontal(from_right=True)
        assert entry_for(RIGHT, 5) == CursorEnterHorizontal(from_right=False)

    def test_vertical_carries_column(self) -> None:
        assert entry_for(UP, 3) == CursorEnterVertical(3, from_bottom=True)
        assert entry_for(DOWN, 3) == CursorEnterVertical(3, from_bottom=False)

    def test_non_directional(self) -> None:
        with pytest.raises(ValueError):
            entry_for(LEAVE, 0)
