"""Style annotator -- derives per-grapheme styles from a markdown subset.

Uses ``markdown-it-py`` (commonmark preset plus GFM tables). markdown-it
tokens carry line maps but no character offsets, so every inline rule is
wrapped to record the source span of the tokens it pushes
(``token.meta["quire_span"]``). Inline spans are relative to the inline
token's content, which is then located in the document text.

Key markdown-it details relied upon:
- emphasis delimiters are pushed as one ``text`` token per marker character and
  later rewritten in place to ``em_open`` / ``strong_open`` etc., so their
  ``meta`` survives post-processing;
- for ``**``/``__`` the rewritten token is the inner marker character, hence
  the ``len(markup) - 1`` widening when building ranges.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from itertools import accumulate

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from quire.buffer import Grapheme, GraphemeBuffer
from quire.utils import LINE_SEPARATOR, utf8_length

logger = logging.getLogger(__name__)

_SPAN_KEY = "quire_span"


class StyleKind(Enum):
    EMPHASIS = "emphasis"
    STRONG = "strong"
    CODE = "code"
    TABLE_BLOCK = "table_block"
    TABLE_HEADER = "table_header"
    TABLE_CELL_BOUNDARY = "table_cell_boundary"


class EdgePosition(Enum):
    """Where a styled grapheme sits inside its run of same-styled graphemes."""

    FIRST = "first"
    LAST = "last"
    SANDWICHED = "sandwiched"
    SINGLE = "single"


@dataclass(frozen=True)
class StyleAnnotation:
    """A style over the half-open UTF-8 byte range ``[start, end)``."""

    kind: StyleKind
    start: int
    end: int

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end


# ---------------------------------------------------------------------------
# markdown-it with span tracking
# ---------------------------------------------------------------------------

InlineRule = Callable[[StateInline, bool], bool]


def _track_spans(rule: InlineRule) -> InlineRule:
    def tracked(state: StateInline, silent: bool) -> bool:
        start = state.pos
        count = len(state.tokens)
        had_pending = bool(state.pending)
        ok = rule(state, silent)
        if not ok or silent:
            return ok

        pushed = state.tokens[count:]
        # The first push flushes pending text collected by earlier rules.
        if had_pending and pushed:
            pushed = pushed[1:]
        end = state.pos
        per_char = len(pushed) == end - start and all(
            t.type == "text" and len(t.content) == 1 for t in pushed
        )
        for i, token in enumerate(pushed):
            span = (start + i, start + i + 1) if per_char else (start, end)
            token.meta.setdefault(_SPAN_KEY, span)
        return ok

    return tracked


def create_parser() -> MarkdownIt:
    """Commonmark parser with tables and span-tracking inline rules."""
    md = MarkdownIt("commonmark").enable("table")
    ruler = md.inline.ruler
    for name, rule in zip(ruler.get_active_rules(), ruler.getRules("")):
        ruler.at(name, _track_spans(rule))
    return md


class _SourceMap:
    """Line and byte bookkeeping for one parsed text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.line_starts = [0] + [i + 1 for i, ch in enumerate(text) if ch == LINE_SEPARATOR]
        self._bytes = list(accumulate((utf8_length(ch) for ch in text), initial=0))

    def to_bytes(self, index: int) -> int:
        return self._bytes[index]

    def line_range(self, first: int, last: int) -> tuple[int, int]:
        """Character range of lines ``first`` .. ``last - 1`` without the final separator."""
        start = self.line_starts[first]
        if last < len(self.line_starts):
            return start, self.line_starts[last] - 1
        return start, len(self.text)

    def locate(self, token: Token, search_from: int) -> list[int] | None:
        """Source index of every position in ``token.content``, plus its end.

        Each content line is looked up in its own source line, so container
        prefixes stripped by the parser (``> ``, list indentation) are skipped.
        """
        if not token.content:
            return None
        positions: list[int] = []
        lo_bound = search_from
        for i, line in enumerate(token.content.split(LINE_SEPARATOR)):
            lo, hi = 0, len(self.text)
            if token.map:
                row = token.map[0] + i
                if row >= len(self.line_starts):
                    return None
                lo, hi = self.line_range(row, row + 1)
            at = self.text.find(line, max(lo, lo_bound), hi)
            if at < 0:
                return None
            positions.extend(range(at, at + len(line) + 1))
            lo_bound = at + len(line)
        return positions


def _inline_spans(children: Sequence[Token], positions: Sequence[int]) -> list[tuple[StyleKind, int, int]]:
    spans: list[tuple[StyleKind, int, int]] = []
    opened: list[tuple[str, int]] = []

    for child in children:
        span = child.meta.get(_SPAN_KEY) if child.meta else None
        if span is None:
            continue
        start, end = span
        widen = max(len(child.markup) - 1, 0)

        if child.type in ("em_open", "strong_open"):
            opened.append((child.type, positions[start - widen]))
        elif child.type in ("em_close", "strong_close"):
            opener = child.type.replace("_close", "_open")
            for i in range(len(opened) - 1, -1, -1):
                if opened[i][0] == opener:
                    _, range_start = opened.pop(i)
                    kind = StyleKind.EMPHASIS if opener == "em_open" else StyleKind.STRONG
                    spans.append((kind, range_start, positions[end + widen]))
                    break
        elif child.type == "code_inline":
            spans.append((StyleKind.CODE, positions[start], positions[end]))

    return spans


# ---------------------------------------------------------------------------
# StyleAnnotator
# ---------------------------------------------------------------------------


class StyleAnnotator:
    """Parses document text and assigns style sets to graphemes."""

    def __init__(self, md: MarkdownIt | None = None) -> None:
        self._md = md or create_parser()

    def annotate(self, text: str) -> list[StyleAnnotation]:
        """Return the style annotations of *text*, in document order."""
        tokens = self._md.parse(text)
        source = _SourceMap(text)
        spans: list[tuple[StyleKind, int, int]] = []
        cell: str | None = None
        search_from = 0

        for token in tokens:
            t = token.type

            if t == "table_open" and token.map:
                spans.append((StyleKind.TABLE_BLOCK, *source.line_range(*token.map)))
                continue

            if t == "thead_open" and token.map:
                spans.append((StyleKind.TABLE_HEADER, *source.line_range(*token.map)))
                continue

            if t in ("th_open", "td_open"):
                cell = t
                continue
            if t in ("th_close", "td_close"):
                cell = None
                continue

            if t != "inline":
                continue

            positions = source.locate(token, search_from)
            if positions is None:
                if token.content:
                    logger.debug("inline content not found in source: %r", token.content)
                continue
            start, end = positions[0], positions[-1]
            search_from = end

            if cell is not None:
                spans.append((StyleKind.TABLE_CELL_BOUNDARY, start, end))
                if cell == "th_open":
                    spans.append((StyleKind.STRONG, start, end))

            spans.extend(_inline_spans(token.children or [], positions))

        return [
            StyleAnnotation(kind, source.to_bytes(start), source.to_bytes(end))
            for kind, start, end in spans
        ]

    def restyle(self, lines: Sequence[GraphemeBuffer]) -> list[StyleAnnotation]:
        """Annotate the joined *lines* and write style sets onto their graphemes."""
        text = LINE_SEPARATOR.join(str(line) for line in lines)
        annotations = self.annotate(text)
        apply_styles(lines, annotations)
        return annotations


def apply_styles(lines: Sequence[GraphemeBuffer], annotations: Sequence[StyleAnnotation]) -> None:
    """Give each grapheme the kinds of every annotation covering its absolute offset."""
    line_offset = 0
    for line in lines:
        for g in line:
            absolute = g.offset + line_offset
            g.styles = frozenset(a.kind for a in annotations if a.covers(absolute))
        # +1 for the separator
        line_offset += line.byte_length + 1


def edge_position(graphemes: Sequence[Grapheme], index: int, kind: StyleKind) -> EdgePosition | None:
    """Classify grapheme *index* within its run of *kind*; ``None`` if unstyled."""
    if kind not in graphemes[index].styles:
        return None
    before = index > 0 and kind in graphemes[index - 1].styles
    after = index + 1 < len(graphemes) and kind in graphemes[index + 1].styles
    if before and after:
        return EdgePosition.SANDWICHED
    if after:
        return EdgePosition.FIRST
    if before:
        return EdgePosition.LAST
    return EdgePosition.SINGLE
