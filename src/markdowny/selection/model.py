"""Positions, selections and marker pairs shared by the surround engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Column the host reports for "end of line" in linewise and ``$`` block selections.
MAXCOL = 2**31 - 1


class SelectionMode(str, Enum):
    """Shape of the active visual selection."""

    INLINE = "inline"
    LINEWISE = "linewise"
    BLOCK = "block"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """1-indexed line and 1-indexed byte column.

    ``col`` addresses a byte of the UTF-8 encoded line, never a character
    index or display column. ``len(line) + 1`` is tolerated as a line-end
    sentinel.
    """

    line: int
    col: int

    def shifted(self, delta: int) -> "Position":
        return Position(self.line, self.col + delta)


@dataclass(frozen=True, slots=True)
class Selection:
    mode: SelectionMode
    first: Position
    last: Position


@dataclass(frozen=True, slots=True)
class BlockBoundaries:
    """Rectangular bounds captured while a block selection is still live.

    Corners may arrive in any order; ``normalized`` orders them.
    ``right_col == MAXCOL`` means "to the end of every line".
    """

    start_line: int
    end_line: int
    left_col: int
    right_col: int

    @classmethod
    def from_cursor_state(
        cls,
        anchor: Position,
        cursor: Position,
        desired_col: Optional[int] = None,
    ) -> "BlockBoundaries":
        """Build bounds from raw anchor/cursor columns.

        ``desired_col`` is the column the last horizontal motion asked for; it
        survives short lines where the cursor column itself got clamped.
        """

        left = min(anchor.col, cursor.col)
        right = max(anchor.col, cursor.col)
        if desired_col is not None:
            if desired_col >= MAXCOL:
                right = MAXCOL
            else:
                left = min(left, desired_col)
                right = max(right, desired_col)
        return cls(anchor.line, cursor.line, left, right)

    def normalized(self) -> "BlockBoundaries":
        return BlockBoundaries(
            start_line=min(self.start_line, self.end_line),
            end_line=max(self.start_line, self.end_line),
            left_col=min(self.left_col, self.right_col),
            right_col=max(self.left_col, self.right_col),
        )


@dataclass(frozen=True, slots=True)
class MarkerPair:
    before: str
    after: str

    @classmethod
    def link(cls, href: str) -> "MarkerPair":
        return cls("[", f"]({href})")

    @property
    def before_bytes(self) -> bytes:
        return self.before.encode("utf-8")

    @property
    def after_bytes(self) -> bytes:
        return self.after.encode("utf-8")


BOLD = MarkerPair("**", "**")
ITALIC = MarkerPair("_", "_")
CODE = MarkerPair("`", "`")
FENCE = MarkerPair("```", "```")


__all__ = [
    "MAXCOL",
    "SelectionMode",
    "Position",
    "Selection",
    "BlockBoundaries",
    "MarkerPair",
    "BOLD",
    "ITALIC",
    "CODE",
    "FENCE",
]
