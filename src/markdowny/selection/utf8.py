"""Snap byte columns to UTF-8 character boundaries."""

from __future__ import annotations

from .model import Position


def _is_continuation(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


def _trailing_bytes(lead: int) -> int:
    if lead >= 0xF0:
        return 3
    if lead >= 0xE0:
        return 2
    if lead >= 0xC0:
        return 1
    return 0


def is_char_boundary(line: bytes, col: int) -> bool:
    """True when byte ``col`` starts a character or sits just past the end."""

    if col == len(line) + 1:
        return True
    return 1 <= col <= len(line) and not _is_continuation(line[col - 1])


def first_byte_of(line: bytes, pos: Position) -> Position:
    """Walk back from ``pos`` to the leading byte of its character."""

    col = pos.col
    if col > len(line):
        return pos
    while col > 1 and _is_continuation(line[col - 1]):
        col -= 1
    return Position(pos.line, col)


def last_byte_of(line: bytes, pos: Position) -> Position:
    """Advance from a leading byte to the last byte of its character.

    Positions past the end of the line are returned unchanged.
    """

    if pos.col < 1 or pos.col > len(line):
        return pos
    col = pos.col + _trailing_bytes(line[pos.col - 1])
    return Position(pos.line, min(col, len(line)))


def char_end(line: bytes, pos: Position) -> Position:
    """Last byte of the character ``pos`` falls inside of."""

    return last_byte_of(line, first_byte_of(line, pos))


__all__ = ["is_char_boundary", "first_byte_of", "last_byte_of", "char_end"]
