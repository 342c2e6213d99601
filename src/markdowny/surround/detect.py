"""Decide whether a toggle adds or removes its markers."""

from __future__ import annotations

from typing import Sequence

from markdowny.selection.extract import Extraction
from markdowny.selection.model import MarkerPair, SelectionMode


def wraps_inline(text: str, markers: MarkerPair) -> bool:
    # A selection of exactly ``before + after`` counts as wrapped.
    return (
        text.startswith(markers.before)
        and text.endswith(markers.after)
        and len(text) >= len(markers.before) + len(markers.after)
    )


def wraps_lines(lines: Sequence[str], markers: MarkerPair) -> bool:
    return lines[0].lstrip().startswith(markers.before) and lines[-1].rstrip().endswith(
        markers.after
    )


def is_fenced(lines: Sequence[str], markers: MarkerPair) -> bool:
    return len(lines) >= 2 and lines[0] == markers.before and lines[-1] == markers.after


def wraps_block(lines: Sequence[str], markers: MarkerPair) -> bool:
    """Every non-blank row must be wrapped; blank rows are ignored."""

    rows = [line.strip() for line in lines if line.strip()]
    return bool(rows) and all(wraps_inline(row, markers) for row in rows)


def should_remove(
    extraction: Extraction,
    markers: MarkerPair,
    *,
    allow_remove: bool = True,
    fenced: bool = False,
) -> bool:
    if not allow_remove:
        return False
    lines = extraction.lines
    if fenced:
        return is_fenced(lines, markers)
    if extraction.mode is SelectionMode.BLOCK:
        return wraps_block(lines, markers)
    if extraction.single_line:
        return wraps_inline(lines[0], markers)
    return wraps_lines(lines, markers)


__all__ = ["wraps_inline", "wraps_lines", "is_fenced", "wraps_block", "should_remove"]
