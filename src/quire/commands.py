"""Editing command vocabulary routed through the document hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quire.utils import has_line_break, segment


class Motion(Enum):
    UP = "up"
    LEFT = "left"
    DOWN = "down"
    RIGHT = "right"


@dataclass(frozen=True)
class Up:
    pass


@dataclass(frozen=True)
class Left:
    pass


@dataclass(frozen=True)
class Down:
    pass


@dataclass(frozen=True)
class Right:
    pass


@dataclass(frozen=True)
class CursorEnterHorizontal:
    """Focus enters a region from its left edge, or its right edge if ``from_right``."""

    from_right: bool


@dataclass(frozen=True)
class CursorEnterVertical:
    """Focus enters a region from above (or below if ``from_bottom``) at a normalized column."""

    column: int
    from_bottom: bool


@dataclass(frozen=True)
class CursorLeave:
    pass


@dataclass(frozen=True)
class Insert:
    graphemes: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> Insert:
        return cls(tuple(segment(text)))

    @property
    def text(self) -> str:
        return "".join(self.graphemes)

    @property
    def has_line_break(self) -> bool:
        return has_line_break(self.text)


@dataclass(frozen=True)
class Delete:
    motion: Motion


Command = (
    Up
    | Left
    | Down
    | Right
    | CursorEnterHorizontal
    | CursorEnterVertical
    | CursorLeave
    | Insert
    | Delete
)

UP = Up()
LEFT = Left()
DOWN = Down()
RIGHT = Right()
LEAVE = CursorLeave()


def is_directional(command: Command) -> bool:
    return isinstance(command, (Up, Left, Down, Right))


def is_backward(command: Command) -> bool:
    """``Up`` and ``Left`` move towards the start of a container."""
    return isinstance(command, (Up, Left))


def is_mutating(command: Command) -> bool:
    return isinstance(command, (Insert, Delete))


def entry_for(command: Command, column: int) -> Command:
    """The enter command a neighbor receives when focus leaves via *command*.

    Moving left enters the neighbor from its right edge; moving up enters it
    from the bottom at the normalized *column* of the region just left.
    """
    match command:
        case Left():
            return CursorEnterHorizontal(from_right=True)
        case Right():
            return CursorEnterHorizontal(from_right=False)
        case Up():
            return CursorEnterVertical(column, from_bottom=True)
        case Down():
            return CursorEnterVertical(column, from_bottom=False)
    raise ValueError(f"not a directional command: {command!r}")
