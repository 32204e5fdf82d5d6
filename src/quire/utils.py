"""Unicode text utilities: grapheme segmentation, display width, line splitting.

Provides the primitives every editable region is built on: splitting text into
user-perceived characters, measuring how many monospace columns each one
occupies, and breaking inserted text on line boundaries.
"""

from __future__ import annotations

import wcwidth as _wcwidth

# Widest cell a grapheme may claim in column arithmetic.
MAX_COLUMN_WIDTH = 2

LINE_SEPARATOR = "\n"

_LINE_BREAKS = frozenset("\r\n")


# ---------------------------------------------------------------------------
# Grapheme segmentation
# ---------------------------------------------------------------------------


def segment(text: str) -> list[str]:
    """Split *text* into extended grapheme clusters (UAX #29)."""
    if not text:
        return []
    return list(_wcwidth.iter_graphemes(text))


def has_line_break(text: str) -> bool:
    """True if *text* contains a ``\\n`` or ``\\r`` anywhere, not only as a whole cluster."""
    return any(ch in _LINE_BREAKS for ch in text)


def split_lines(text: str) -> list[str]:
    """Split on ``\\r\\n``, ``\\r`` and ``\\n``; always returns at least one segment."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def utf8_length(text: str) -> int:
    return len(text.encode("utf-8"))


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the monospace display width of a single grapheme cluster.

    Control characters measure 0. Everything else is measured by
    ``wcwidth.wcswidth``, which understands ZWJ sequences, VS16, skin tone
    modifiers and flags.
    """
    if not g:
        return 0

    # ASCII fast path
    if len(g) == 1 and g.isascii():
        return 1 if g.isprintable() else 0

    cached = _width_cache.get(g)
    if cached is not None:
        return cached
    return _cache_width(g, max(_wcwidth.wcswidth(g), 0))


def capped_width(g: str, cap: int = MAX_COLUMN_WIDTH) -> int:
    """Width of *g* clamped to *cap*, as used for normalized columns."""
    return min(grapheme_width(g), cap)
