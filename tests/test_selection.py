from __future__ import annotations

import pytest

from markdowny.host import MemoryBuffer, MemorySelection
from markdowny.selection import (
    MAXCOL,
    BlockBoundaries,
    InvalidRange,
    NoSelection,
    Position,
    Selection,
    SelectionMode,
    capture,
    char_end,
    extract,
    first_byte_of,
    is_char_boundary,
    last_byte_of,
)

CAFE = "café".encode("utf-8")


def make_host(text: str) -> tuple[MemoryBuffer, MemorySelection]:
    buffer = MemoryBuffer.from_text(text)
    return buffer, MemorySelection(buffer)


def test_first_byte_walks_back_over_continuation_bytes() -> None:
    assert first_byte_of(CAFE, Position(1, 5)) == Position(1, 4)
    assert first_byte_of(CAFE, Position(1, 3)) == Position(1, 3)


def test_last_byte_advances_by_leader_width() -> None:
    assert last_byte_of(CAFE, Position(1, 4)) == Position(1, 5)
    emoji = "a😀b".encode("utf-8")
    assert last_byte_of(emoji, Position(1, 2)) == Position(1, 5)
    euro = "€".encode("utf-8")
    assert last_byte_of(euro, Position(1, 1)) == Position(1, 3)


def test_positions_past_line_end_are_returned_unchanged() -> None:
    assert last_byte_of(CAFE, Position(1, 6)) == Position(1, 6)
    assert first_byte_of(CAFE, Position(1, 6)) == Position(1, 6)


def test_char_end_from_inside_a_character() -> None:
    emoji = "a😀b".encode("utf-8")
    assert char_end(emoji, Position(1, 4)) == Position(1, 5)
    assert is_char_boundary(CAFE, 6)
    assert not is_char_boundary(CAFE, 5)


def test_extract_inline_single_line() -> None:
    buffer, selection = make_host("hello world")
    selection.select(Position(1, 1), Position(1, 5))

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("hello",)
    assert extraction.positions == (Position(1, 1), Position(1, 5))


def test_extract_inline_ending_on_multibyte_character() -> None:
    buffer, selection = make_host("café au lait")
    selection.select(Position(1, 1), Position(1, 4))

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("café",)
    assert extraction.last == Position(1, 5)


def test_extract_inline_multi_line() -> None:
    buffer, selection = make_host("alpha\nbeta\ngamma")
    selection.select(Position(1, 3), Position(3, 2))

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("pha", "beta", "ga")
    assert [span.line for span in extraction.spans] == [1, 2, 3]


def test_extract_linewise_recomputes_end_column() -> None:
    buffer, selection = make_host("alpha\nbeta\ngamma")
    selection.select(Position(1, 4), Position(2, 1), mode=SelectionMode.LINEWISE)
    assert selection.get_mark(">") == Position(2, MAXCOL)

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("alpha", "beta")
    assert extraction.last == Position(2, 4)


def test_extract_block_clamps_each_line() -> None:
    buffer, selection = make_host("abcdef\nab\nabcdefgh")
    selection.select_block(Position(1, 2), Position(3, 4))

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("bcd", "b", "bcd")


def test_extract_block_short_line_contributes_empty_slice() -> None:
    buffer, selection = make_host("abcdef\nab\nabcdef")
    selection.select_block(Position(3, 4), Position(1, 3))

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("cd", "", "cd")
    assert extraction.spans[1].is_empty


def test_extract_block_to_end_of_lines() -> None:
    buffer, selection = make_host("abcdef\nab\nabcdefgh")
    selection.select_block(Position(1, 2), Position(3, 2), desired_col=MAXCOL)

    extraction = extract(buffer, capture(selection))

    assert extraction.lines == ("bcdef", "b", "bcdefgh")


def test_block_marks_are_clamped_but_capture_is_not() -> None:
    buffer, selection = make_host("abcdef\nab")
    selection.select_block(Position(1, 5), Position(2, 6))

    assert selection.get_mark(">") == Position(2, 2)
    assert selection.capture_block_boundaries() == BlockBoundaries(1, 2, 5, 6)


def test_capture_after_block_teardown_fails() -> None:
    _, selection = make_host("abc\nabc")
    selection.select_block(Position(1, 1), Position(2, 2))
    selection.exit_visual()

    with pytest.raises(NoSelection):
        capture(selection)


def test_capture_without_marks_fails() -> None:
    _, selection = make_host("abc")

    with pytest.raises(NoSelection):
        capture(selection)


def test_extract_rejects_reversed_inline_range() -> None:
    buffer, _ = make_host("hello")
    reversed_selection = Selection(SelectionMode.INLINE, Position(1, 5), Position(1, 1))

    with pytest.raises(InvalidRange) as excinfo:
        extract(buffer, reversed_selection)

    assert excinfo.value.first == Position(1, 5)


def test_boundaries_from_cursor_state_widen_with_desired_column() -> None:
    bounds = BlockBoundaries.from_cursor_state(
        Position(4, 6), Position(2, 3), desired_col=9
    )

    assert bounds.normalized() == BlockBoundaries(2, 4, 3, 9)
