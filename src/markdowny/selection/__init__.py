"""Selection model, UTF-8 boundary helpers and span extraction."""

from .model import (
    BOLD,
    CODE,
    FENCE,
    ITALIC,
    MAXCOL,
    BlockBoundaries,
    MarkerPair,
    Position,
    Selection,
    SelectionMode,
)
from .errors import InvalidRange, NoSelection, PromptCancelled, SurroundError
from .utf8 import char_end, first_byte_of, is_char_boundary, last_byte_of
from .extract import Extraction, LineSpan, capture, extract

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
    "SurroundError",
    "NoSelection",
    "InvalidRange",
    "PromptCancelled",
    "is_char_boundary",
    "first_byte_of",
    "last_byte_of",
    "char_end",
    "LineSpan",
    "Extraction",
    "capture",
    "extract",
]
