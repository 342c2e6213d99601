"""Failure conditions raised while preparing a surround toggle."""

from __future__ import annotations

from .model import Position


class SurroundError(RuntimeError):
    """Base class; every subclass aborts the toggle before any mutation."""

    status = "error"

    def __init__(
        self,
        message: str,
        *,
        first: Position | None = None,
        last: Position | None = None,
    ) -> None:
        super().__init__(message)
        self.first = first
        self.last = last


class NoSelection(SurroundError):
    """A selection mark (or block capture) is absent."""

    status = "no_selection"


class InvalidRange(SurroundError):
    """Start lies after end in a mode that does not normalize corners."""

    status = "invalid_range"


class PromptCancelled(SurroundError):
    """The href prompt was dismissed without input."""

    status = "cancelled"


__all__ = ["SurroundError", "NoSelection", "InvalidRange", "PromptCancelled"]
