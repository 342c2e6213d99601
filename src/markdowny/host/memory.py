"""In-memory editor host implementing the buffer and selection services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from markdowny.selection.model import (
    MAXCOL,
    BlockBoundaries,
    Position,
    SelectionMode,
)
from markdowny.selection.utf8 import is_char_boundary


class BufferValidationError(RuntimeError):
    """Raised for out-of-range positions or slices that split a character."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


@dataclass(slots=True)
class MemoryDocument:
    """List-of-lines text storage; every edit returns a new version."""

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "MemoryDocument":
        lines = text.split("\n")
        return cls(_lines=lines, version=0)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "MemoryDocument":
        """Return a document with ``[start:end]`` (0-indexed) replaced."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        if not lines:
            lines = [""]
        return MemoryDocument(_lines=lines, version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]


class MemoryBuffer:
    """Text Buffer Service over a ``MemoryDocument``.

    Lines are 1-indexed; columns are 1-indexed byte offsets into the UTF-8
    encoding of a line.
    """

    def __init__(
        self, *, name: str = "default", document: Optional[MemoryDocument] = None
    ) -> None:
        self.name = name
        self.document = document or MemoryDocument()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "MemoryBuffer":
        return cls(name=name, document=MemoryDocument.from_text(text))

    @property
    def text(self) -> str:
        return "\n".join(self.document.snapshot())

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def version(self) -> int:
        return self.document.version

    def line_count(self) -> int:
        return self.document.line_count

    def get_line(self, line: int) -> str:
        self._ensure_line(line)
        return self.document.get_line(line - 1)

    def set_lines(self, start: int, end: int, replacement: Sequence[str]) -> None:
        if start < 1 or end < start or end > self.document.line_count + 1:
            raise BufferValidationError(
                f"Line range {start}:{end} out of range", position=Position(start, 1)
            )
        self.document = self.document.update_lines(start - 1, end - 1, replacement)

    def delete_line(self, line: int) -> None:
        self._ensure_line(line)
        self.set_lines(line, line + 1, [])

    def insert_text(self, position: Position, text: Sequence[str]) -> None:
        self.set_text(position, position, text)

    def get_text(self, start: Position, end: Position) -> List[str]:
        first = self._raw(start)
        last = self._raw(end)
        self._ensure_order(start, end)
        if start.line == end.line:
            chunks = [first[start.col - 1 : end.col - 1]]
        else:
            middle = [
                self.get_line(line).encode("utf-8")
                for line in range(start.line + 1, end.line)
            ]
            chunks = [first[start.col - 1 :], *middle, last[: end.col - 1]]
        return [chunk.decode("utf-8") for chunk in chunks]

    def set_text(
        self, start: Position, end: Position, replacement: Sequence[str]
    ) -> None:
        head = self._raw(start)[: start.col - 1]
        tail = self._raw(end)[end.col - 1 :]
        self._ensure_order(start, end)
        new_lines = list(replacement) or [""]
        new_lines[0] = head.decode("utf-8") + new_lines[0]
        new_lines[-1] = new_lines[-1] + tail.decode("utf-8")
        self.document = self.document.update_lines(
            start.line - 1, end.line, new_lines
        )

    def _ensure_line(self, line: int) -> None:
        if line < 1 or line > self.document.line_count:
            raise BufferValidationError(
                f"Line {line} out of range", position=Position(line, 1)
            )

    def _raw(self, position: Position) -> bytes:
        raw = self.get_line(position.line).encode("utf-8")
        if not is_char_boundary(raw, position.col):
            raise BufferValidationError(
                "Column out of range or inside a multi-byte character",
                position=position,
            )
        return raw

    @staticmethod
    def _ensure_order(start: Position, end: Position) -> None:
        if start > end:
            raise BufferValidationError("Range start after end", position=start)


class MemorySelection:
    """Selection Service that mimics how a modal editor stores visual marks.

    Linewise selections report ``MAXCOL`` for the end column and block
    selections clamp their marks to each line's length, so the engine has
    to recompute both. Raw block bounds stay available only until
    ``exit_visual`` is called.
    """

    def __init__(self, buffer: MemoryBuffer) -> None:
        self.buffer = buffer
        self.marks: Dict[str, Position] = {}
        self.mode = SelectionMode.INLINE
        self.cursor = Position(1, 1)
        self.visual_active = False
        self._block: Optional[BlockBoundaries] = None

    def select(
        self,
        first: Position,
        last: Position,
        *,
        mode: SelectionMode = SelectionMode.INLINE,
    ) -> None:
        if mode is SelectionMode.BLOCK:
            self.select_block(first, last)
            return
        if mode is SelectionMode.LINEWISE:
            first = Position(first.line, 1)
            last = Position(last.line, MAXCOL)
        self.marks["<"] = first
        self.marks[">"] = last
        self.mode = mode
        self.cursor = last
        self.visual_active = True
        self._block = None

    def select_block(
        self,
        anchor: Position,
        cursor: Position,
        *,
        desired_col: Optional[int] = None,
    ) -> None:
        bounds = BlockBoundaries.from_cursor_state(anchor, cursor, desired_col)
        self._block = bounds
        self.mode = SelectionMode.BLOCK
        self.cursor = cursor
        self.visual_active = True
        ordered = bounds.normalized()
        self.marks["<"] = self._clamped(ordered.start_line, ordered.left_col)
        self.marks[">"] = self._clamped(ordered.end_line, ordered.right_col)

    def reselect(self) -> None:
        """Restore the last selection from the ``<``/``>`` marks."""

        first, last = self.marks["<"], self.marks[">"]
        if self.mode is SelectionMode.BLOCK:
            self.select_block(first, last)
        else:
            self.select(first, last, mode=self.mode)

    def exit_visual(self) -> None:
        self.visual_active = False
        self._block = None

    def get_mark(self, name: str) -> Optional[Position]:
        return self.marks.get(name)

    def set_mark(self, name: str, position: Position) -> None:
        self.marks[name] = position

    def get_selection_mode(self) -> SelectionMode:
        return self.mode

    def capture_block_boundaries(self) -> Optional[BlockBoundaries]:
        if not self.visual_active:
            return None
        return self._block

    def set_cursor(self, position: Position) -> None:
        self.cursor = position

    def _clamped(self, line: int, col: int) -> Position:
        length = len(self.buffer.get_line(line).encode("utf-8"))
        return Position(line, max(1, min(col, length)))


__all__ = [
    "BufferValidationError",
    "MemoryDocument",
    "MemoryBuffer",
    "MemorySelection",
]
