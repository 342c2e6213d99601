"""Protocols for the editor services the surround engine talks to."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Sequence

from markdowny.selection.model import BlockBoundaries, Position, SelectionMode


class TextBufferService(Protocol):
    """Line storage addressed by 1-indexed lines and 1-indexed byte columns.

    Ranges passed to ``get_text``/``set_text`` are end-exclusive: ``end``
    points one byte past the last byte covered.
    """

    def line_count(self) -> int: ...

    def get_line(self, line: int) -> str: ...

    def set_lines(self, start: int, end: int, replacement: Sequence[str]) -> None:
        """Replace lines ``start`` up to (not including) ``end``."""
        ...

    def insert_text(self, position: Position, text: Sequence[str]) -> None: ...

    def delete_line(self, line: int) -> None: ...

    def get_text(self, start: Position, end: Position) -> List[str]: ...

    def set_text(
        self, start: Position, end: Position, replacement: Sequence[str]
    ) -> None: ...


class SelectionService(Protocol):
    """Marks, cursor and visual-mode state of the host editor."""

    def get_mark(self, name: str) -> Optional[Position]: ...

    def set_mark(self, name: str, position: Position) -> None: ...

    def get_selection_mode(self) -> SelectionMode: ...

    def capture_block_boundaries(self) -> Optional[BlockBoundaries]:
        """Raw block bounds; only meaningful while the selection is live."""
        ...

    def set_cursor(self, position: Position) -> None: ...


class HrefPrompt(Protocol):
    """Asks the user for a link target.

    ``on_done`` must be called exactly once, with ``None`` on cancellation.
    """

    def request(self, prompt: str, on_done: Callable[[Optional[str]], None]) -> None: ...


__all__ = ["TextBufferService", "SelectionService", "HrefPrompt"]
