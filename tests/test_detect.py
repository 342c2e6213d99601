from __future__ import annotations

from markdowny.selection import (
    BOLD,
    FENCE,
    ITALIC,
    Extraction,
    LineSpan,
    MarkerPair,
    SelectionMode,
)
from markdowny.surround import (
    is_fenced,
    should_remove,
    wraps_block,
    wraps_inline,
    wraps_lines,
)


def make_extraction(*lines: str, mode: SelectionMode = SelectionMode.INLINE) -> Extraction:
    spans = tuple(
        LineSpan(index + 1, 1, len(line.encode("utf-8")))
        for index, line in enumerate(lines)
    )
    return Extraction(mode, spans, tuple(lines))


def test_inline_detection_requires_both_markers() -> None:
    assert wraps_inline("**hi**", BOLD)
    assert not wraps_inline("**hi", BOLD)
    assert not wraps_inline("hi**", BOLD)


def test_inline_detection_rejects_overlapping_markers() -> None:
    assert not wraps_inline("**", BOLD)
    assert not wraps_inline("_", ITALIC)


def test_marker_only_selection_counts_as_wrapped() -> None:
    assert wraps_inline("****", BOLD)
    assert wraps_inline("__", ITALIC)


def test_multi_line_detection_trims_outer_whitespace() -> None:
    assert wraps_lines(["  **alpha", "beta**  "], BOLD)
    assert not wraps_lines(["alpha", "beta**"], BOLD)


def test_fence_detection_is_verbatim() -> None:
    assert is_fenced(["```", "code", "```"], FENCE)
    assert not is_fenced(["``` ", "code", "```"], FENCE)
    assert not is_fenced(["```"], FENCE)


def test_block_detection_is_all_or_nothing() -> None:
    assert wraps_block(["**a**", "  **b**  "], BOLD)
    assert not wraps_block(["**a**", "b"], BOLD)


def test_block_detection_ignores_blank_rows() -> None:
    assert wraps_block(["**a**", "   ", ""], BOLD)
    assert not wraps_block(["", "  "], BOLD)


def test_should_remove_honours_allow_remove() -> None:
    link = MarkerPair.link("http://x")
    extraction = make_extraction("[text](http://x)")

    assert wraps_inline("[text](http://x)", link)
    assert not should_remove(extraction, link, allow_remove=False)


def test_should_remove_routes_by_shape() -> None:
    assert should_remove(make_extraction("**x**"), BOLD)
    assert should_remove(make_extraction("**x", "y**"), BOLD)
    assert should_remove(
        make_extraction("```", "x", "```", mode=SelectionMode.LINEWISE),
        FENCE,
        fenced=True,
    )
    assert not should_remove(
        make_extraction("**x**", "y", mode=SelectionMode.BLOCK), BOLD
    )
