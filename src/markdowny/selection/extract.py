"""Turn visual-mode marks into byte-exact line spans and their text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from markdowny.host.services import SelectionService, TextBufferService

from .errors import InvalidRange, NoSelection
from .model import Position, Selection, SelectionMode
from .utf8 import char_end, first_byte_of


@dataclass(frozen=True, slots=True)
class LineSpan:
    """Inclusive byte range ``start..end`` on one line; empty when end < start."""

    line: int
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def head(self) -> Position:
        return Position(self.line, self.start)

    @property
    def stop(self) -> Position:
        """End-exclusive position, as the buffer's text ranges expect."""

        return Position(self.line, self.end + 1)


@dataclass(frozen=True, slots=True)
class Extraction:
    mode: SelectionMode
    spans: Tuple[LineSpan, ...]
    lines: Tuple[str, ...]
    # Requested left edge of a block rectangle.
    left_col: int = 1

    @property
    def first(self) -> Position:
        return self.spans[0].head

    @property
    def last(self) -> Position:
        return Position(self.spans[-1].line, self.spans[-1].end)

    @property
    def positions(self) -> Tuple[Position, Position]:
        return self.first, self.last

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def single_line(self) -> bool:
        return len(self.spans) == 1


def capture(selection: SelectionService) -> Selection:
    """Read the live selection.

    Block bounds come from the out-of-band capture because the ``<``/``>``
    marks are clamped per line; this must run before the host leaves
    visual mode.
    """

    mode = selection.get_selection_mode()
    if mode is SelectionMode.BLOCK:
        bounds = selection.capture_block_boundaries()
        if bounds is None:
            raise NoSelection("Block selection is no longer live")
        bounds = bounds.normalized()
        return Selection(
            mode,
            Position(bounds.start_line, bounds.left_col),
            Position(bounds.end_line, bounds.right_col),
        )

    first = selection.get_mark("<")
    last = selection.get_mark(">")
    if first is None or last is None:
        raise NoSelection("Selection marks are not set", first=first, last=last)
    return Selection(mode, first, last)


def extract(buffer: TextBufferService, selection: Selection) -> Extraction:
    if selection.mode is SelectionMode.BLOCK:
        return _extract_block(buffer, selection)

    first, last = selection.first, selection.last
    if selection.mode is SelectionMode.LINEWISE:
        reversed_range = first.line > last.line
    else:
        reversed_range = first > last
    if reversed_range:
        raise InvalidRange(
            f"Selection starts at {first.line}:{first.col} "
            f"after it ends at {last.line}:{last.col}",
            first=first,
            last=last,
        )

    if selection.mode is SelectionMode.LINEWISE:
        # The reported end column may be a MAXCOL sentinel; recount it.
        first = Position(first.line, 1)
        last = Position(last.line, len(_raw(buffer, last.line)))

    spans = _inline_spans(buffer, first, last)
    lines = buffer.get_text(spans[0].head, spans[-1].stop)
    return Extraction(selection.mode, tuple(spans), tuple(lines))


def _inline_spans(
    buffer: TextBufferService, first: Position, last: Position
) -> List[LineSpan]:
    head_raw = _raw(buffer, first.line)
    start = min(first_byte_of(head_raw, first).col, len(head_raw) + 1)

    if first.line == last.line:
        end = min(char_end(head_raw, last).col, len(head_raw))
        return [LineSpan(first.line, start, max(end, start - 1))]

    spans = [LineSpan(first.line, start, len(head_raw))]
    for line in range(first.line + 1, last.line):
        spans.append(LineSpan(line, 1, len(_raw(buffer, line))))
    tail_raw = _raw(buffer, last.line)
    spans.append(LineSpan(last.line, 1, min(char_end(tail_raw, last).col, len(tail_raw))))
    return spans


def _extract_block(buffer: TextBufferService, selection: Selection) -> Extraction:
    left, right = selection.first.col, selection.last.col
    spans: List[LineSpan] = []
    lines: List[str] = []
    for line in range(selection.first.line, selection.last.line + 1):
        raw = _raw(buffer, line)
        length = len(raw)
        if length < left:
            span = LineSpan(line, length + 1, length)
        else:
            start = first_byte_of(raw, Position(line, left)).col
            end = char_end(raw, Position(line, min(right, length))).col
            span = LineSpan(line, start, end)
        spans.append(span)
        lines.extend(buffer.get_text(span.head, span.stop))
    return Extraction(SelectionMode.BLOCK, tuple(spans), tuple(lines), left_col=left)


def _raw(buffer: TextBufferService, line: int) -> bytes:
    return buffer.get_line(line).encode("utf-8")


__all__ = ["LineSpan", "Extraction", "capture", "extract"]
