"""Toggle detection, buffer mutation and the operation dispatcher."""

from .detect import is_fenced, should_remove, wraps_block, wraps_inline, wraps_lines
from .mutate import Edit, apply
from .engine import (
    BOLD_TOGGLE,
    CODE_TOGGLE,
    ITALIC_TOGGLE,
    LINK_PROMPT,
    PENDING,
    SurroundEngine,
    SurroundResult,
    ToggleSpec,
    link_toggle,
)

__all__ = [
    "wraps_inline",
    "wraps_lines",
    "is_fenced",
    "wraps_block",
    "should_remove",
    "Edit",
    "apply",
    "ToggleSpec",
    "BOLD_TOGGLE",
    "ITALIC_TOGGLE",
    "CODE_TOGGLE",
    "LINK_PROMPT",
    "PENDING",
    "link_toggle",
    "SurroundResult",
    "SurroundEngine",
]
