"""Grapheme buffer: one line of text as a sequence of grapheme clusters."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from quire.utils import MAX_COLUMN_WIDTH, capped_width, grapheme_width, segment, split_lines, utf8_length

if TYPE_CHECKING:
    from quire.styles import StyleKind


@dataclass
class Grapheme:
    """A user-perceived character with its byte offset and current styles."""

    text: str
    offset: int = 0
    styles: frozenset[StyleKind] = field(default_factory=frozenset)

    @property
    def width(self) -> int:
        return grapheme_width(self.text)

    @property
    def byte_length(self) -> int:
        return utf8_length(self.text)


@dataclass
class InsertResult:
    """Outcome of :meth:`GraphemeBuffer.insert`.

    ``cursor`` is the index of the insertion point inside the line that owns it
    afterwards: this buffer when ``new_lines`` is empty, otherwise the last of
    ``new_lines``.
    """

    new_line_count: int
    cursor: int
    new_lines: list[GraphemeBuffer] = field(default_factory=list)


class GraphemeBuffer:
    """Ordered grapheme clusters of a single line.

    Byte offsets are recomputed by :meth:`reflow` after every structural
    change, so they always equal the offsets a fresh parse of ``str(buffer)``
    would give.
    """

    def __init__(self, text: str = "") -> None:
        self._graphemes: list[Grapheme] = [Grapheme(g) for g in segment(text)]
        self.reflow()

    # -- sequence protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self._graphemes)

    def __iter__(self) -> Iterator[Grapheme]:
        return iter(self._graphemes)

    def __getitem__(self, index: int) -> Grapheme:
        return self._graphemes[index]

    def __str__(self) -> str:
        return "".join(g.text for g in self._graphemes)

    def __repr__(self) -> str:
        return f"GraphemeBuffer({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphemeBuffer):
            return NotImplemented
        return self.texts() == other.texts()

    def length(self) -> int:
        return len(self._graphemes)

    def texts(self) -> list[str]:
        return [g.text for g in self._graphemes]

    @property
    def byte_length(self) -> int:
        return sum(g.byte_length for g in self._graphemes)

    # -- offsets -------------------------------------------------------------

    def reflow(self) -> None:
        """Recompute every grapheme's byte offset within this line."""
        offset = 0
        for g in self._graphemes:
            g.offset = offset
            offset += g.byte_length

    # -- mutation ------------------------------------------------------------

    def insert(self, position: int, text: str) -> InsertResult:
        """Insert *text* before grapheme *position*, splitting on line breaks.

        The first line of *text* goes into this buffer. Every further line
        becomes a new buffer, and whatever followed *position* is moved to the
        end of the last one.
        """
        if not 0 <= position <= len(self._graphemes):
            raise IndexError(f"insert position {position} outside 0..{len(self._graphemes)}")

        segments = split_lines(text)
        tail = self.split_off(position)
        self._graphemes.extend(Grapheme(g) for g in segment(segments[0]))
        self.reflow()

        new_lines = [GraphemeBuffer(s) for s in segments[1:]]
        owner = new_lines[-1] if new_lines else self
        cursor = len(owner)
        owner.extend(tail)
        return InsertResult(new_line_count=len(new_lines), cursor=cursor, new_lines=new_lines)

    def remove_before(self, position: int) -> bool:
        """Delete the grapheme just before *position*; ``False`` at the line start."""
        if position <= 0 or position > len(self._graphemes):
            return False
        del self._graphemes[position - 1]
        self.reflow()
        return True

    def remove_at(self, position: int) -> bool:
        """Delete the grapheme at *position*; ``False`` at the line end."""
        if position < 0 or position >= len(self._graphemes):
            return False
        del self._graphemes[position]
        self.reflow()
        return True

    def split_off(self, position: int) -> GraphemeBuffer:
        """Detach everything from *position* on into a new buffer."""
        tail = GraphemeBuffer()
        tail._graphemes = self._graphemes[position:]
        tail.reflow()
        self._graphemes = self._graphemes[:position]
        return tail

    def extend(self, other: GraphemeBuffer) -> None:
        """Append the graphemes of *other* (used when joining lines)."""
        self._graphemes.extend(other._graphemes)
        other._graphemes = []
        self.reflow()

    # -- normalized columns --------------------------------------------------

    def column_of(self, index: int, cap: int = MAX_COLUMN_WIDTH) -> int:
        """Sum of capped widths of the graphemes before *index*."""
        return sum(capped_width(g.text, cap) for g in self._graphemes[:index])

    def index_of_column(self, column: int, cap: int = MAX_COLUMN_WIDTH) -> int:
        """Grapheme index whose left edge best matches the normalized *column*."""
        index = 0
        remaining = column
        for g in self._graphemes:
            if remaining <= 0:
                break
            width = capped_width(g.text, cap)
            if remaining < width:
                break
            remaining -= width
            index += 1
        return index
