"""Write marker insertions and removals back to the buffer.

Every function re-reads the lines it edits, writes them, and returns the
``Edit`` describing where the selection now sits. Mark columns are derived
from the marker lengths, then the end mark is snapped to the leading byte of
the character it lands on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from markdowny.host.services import TextBufferService
from markdowny.selection.extract import Extraction, LineSpan
from markdowny.selection.model import MarkerPair, Position, Selection, SelectionMode
from markdowny.selection.utf8 import first_byte_of


@dataclass(frozen=True, slots=True)
class Edit:
    selection: Selection
    cursor: Optional[Position] = None


def apply(
    buffer: TextBufferService,
    extraction: Extraction,
    markers: MarkerPair,
    *,
    removing: bool,
    fenced: bool = False,
) -> Edit:
    if fenced:
        if removing:
            return unfence(buffer, extraction)
        return fence(buffer, extraction, markers)
    if extraction.mode is SelectionMode.BLOCK:
        return surround_block(buffer, extraction, markers, removing=removing)
    if extraction.single_line:
        return surround_span(buffer, extraction, markers, removing=removing)
    return surround_lines(buffer, extraction, markers, removing=removing)


def surround_span(
    buffer: TextBufferService,
    extraction: Extraction,
    markers: MarkerPair,
    *,
    removing: bool,
) -> Edit:
    span = extraction.spans[0]
    before, after = markers.before_bytes, markers.after_bytes
    segment = _segment(buffer, span)
    if removing:
        replaced = segment[len(before) : len(segment) - len(after)]
        delta = -(len(before) + len(after))
    else:
        replaced = before + segment + after
        delta = len(before) + len(after)

    buffer.set_text(span.head, span.stop, [replaced.decode("utf-8")])
    last = _closing_char(buffer, Position(span.line, max(1, span.end + delta)))
    return Edit(Selection(extraction.mode, span.head, last))


def surround_lines(
    buffer: TextBufferService,
    extraction: Extraction,
    markers: MarkerPair,
    *,
    removing: bool,
) -> Edit:
    """Edit the tail of the first line and the head of the last one.

    The opening marker sits on a different line than the end mark, so only
    ``after`` shifts the end column.
    """

    top, bottom = extraction.spans[0], extraction.spans[-1]
    before, after = markers.before_bytes, markers.after_bytes

    top_raw = _line(buffer, top.line)
    prefix, opening = top_raw[: top.start - 1], top_raw[top.start - 1 :]
    bottom_raw = _line(buffer, bottom.line)
    closing, suffix = bottom_raw[: bottom.end], bottom_raw[bottom.end :]

    if removing:
        indent, body, _ = _split_ws(opening)
        opening = indent + body[len(before) :] + opening[len(indent) + len(body) :]
        _, body, trailing = _split_ws(closing)
        leading = closing[: len(closing) - len(body) - len(trailing)]
        closing = leading + body[: len(body) - len(after)] + trailing
        end = bottom.end - len(after)
    else:
        opening = before + opening
        closing = closing + after
        end = bottom.end + len(after)

    buffer.set_lines(top.line, top.line + 1, [(prefix + opening).decode("utf-8")])
    buffer.set_lines(
        bottom.line, bottom.line + 1, [(closing + suffix).decode("utf-8")]
    )
    last = _closing_char(buffer, Position(bottom.line, max(1, end)))
    return Edit(Selection(extraction.mode, top.head, last))


def surround_block(
    buffer: TextBufferService,
    extraction: Extraction,
    markers: MarkerPair,
    *,
    removing: bool,
) -> Edit:
    """Wrap or unwrap the trimmed content of every non-blank row."""

    before, after = markers.before_bytes, markers.after_bytes
    delta = len(before) + len(after)
    right = extraction.spans[-1].end
    edited_ends = []
    for span in extraction.spans:
        if span.is_empty:
            continue
        leading, body, trailing = _split_ws(_segment(buffer, span))
        if not body:
            continue
        if removing:
            body = body[len(before) : len(body) - len(after)]
            new_end = span.end - delta
        else:
            body = before + body + after
            new_end = span.end + delta
        buffer.set_text(
            span.head, span.stop, [(leading + body + trailing).decode("utf-8")]
        )
        edited_ends.append(new_end)

    if edited_ends:
        right = max(edited_ends)
    # Rows shorter than the left column carry a placeholder start past their end.
    starts = [span.start for span in extraction.spans if not span.is_empty]
    left = min(starts) if starts else extraction.left_col
    first = Position(extraction.spans[0].line, left)
    last = Position(extraction.spans[-1].line, max(1, right))
    return Edit(Selection(SelectionMode.BLOCK, first, last))


def fence(
    buffer: TextBufferService, extraction: Extraction, markers: MarkerPair
) -> Edit:
    """Put ``before`` on its own line above the selection and ``after`` below."""

    top = extraction.spans[0].line
    bottom = extraction.spans[-1].line
    buffer.insert_text(Position(top, 1), [markers.before, ""])
    bottom += 1
    end_col = len(_line(buffer, bottom)) + 1
    buffer.insert_text(Position(bottom, end_col), ["", markers.after])
    closing = bottom + 1
    selection = Selection(
        SelectionMode.LINEWISE,
        Position(top, 1),
        Position(closing, max(1, len(markers.after_bytes))),
    )
    return Edit(selection, cursor=Position(top, 1))


def unfence(buffer: TextBufferService, extraction: Extraction) -> Edit:
    """Delete the opening and closing fence lines of the selection."""

    top = extraction.spans[0].line
    bottom = extraction.spans[-1].line
    buffer.delete_line(top)
    buffer.delete_line(bottom - 1)

    content_end = bottom - 2
    if content_end >= top:
        last = Position(content_end, max(1, len(_line(buffer, content_end))))
        first = Position(top, 1)
    else:
        first = last = Position(min(top, buffer.line_count()), 1)
    return Edit(Selection(SelectionMode.LINEWISE, first, last), cursor=first)


def _line(buffer: TextBufferService, line: int) -> bytes:
    return buffer.get_line(line).encode("utf-8")


def _segment(buffer: TextBufferService, span: LineSpan) -> bytes:
    return _line(buffer, span.line)[span.start - 1 : span.end]


def _closing_char(buffer: TextBufferService, pos: Position) -> Position:
    """Leading byte of the character the new span ends on."""

    return first_byte_of(_line(buffer, pos.line), pos)


def _split_ws(segment: bytes) -> Tuple[bytes, bytes, bytes]:
    text = segment.decode("utf-8")
    body = text.strip()
    if not body:
        return segment, b"", b""
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return leading.encode("utf-8"), body.encode("utf-8"), trailing.encode("utf-8")


__all__ = [
    "Edit",
    "apply",
    "surround_span",
    "surround_lines",
    "surround_block",
    "fence",
    "unfence",
]
