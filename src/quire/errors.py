"""Exception types raised by the editing engine."""

from __future__ import annotations


class QuireError(Exception):
    """Base class for engine errors."""


class MultilineInsertError(QuireError, NotImplementedError):
    """A line break was inserted into a region that holds a single line."""

    def __init__(self, text: str) -> None:
        super().__init__(f"cannot insert a line break into a single-line region: {text!r}")
        self.text = text


class SettingsError(QuireError, ValueError):
    """An engine setting has an invalid value."""
