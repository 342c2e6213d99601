"""Plugin options: which file types activate the keymaps and which keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from markdowny.runtime.telemetry import env

OPERATIONS = ("bold", "italic", "link", "code")

DEFAULT_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "bold": "ctrl+b",
        "italic": "ctrl+i",
        "link": "ctrl+k",
        "code": "ctrl+e",
    }
)


def _normalize_filetypes(filetypes: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(filetypes, str):
        filetypes = filetypes.split(",")
    values = (item.strip().lower() for item in filetypes)
    return tuple(dict.fromkeys(value for value in values if value))


@dataclass(frozen=True, slots=True)
class SurroundConfig:
    filetypes: tuple[str, ...] = ("markdown",)
    keys: Mapping[str, str] = field(default_factory=lambda: DEFAULT_KEYS)

    def __post_init__(self) -> None:
        filetypes = _normalize_filetypes(self.filetypes)
        if not filetypes:
            raise ValueError("filetypes cannot be empty")
        object.__setattr__(self, "filetypes", filetypes)

        unknown = sorted(set(self.keys) - set(OPERATIONS))
        if unknown:
            raise ValueError(f"Unknown operations in keys: {unknown}")
        merged = {**DEFAULT_KEYS, **{name: key.strip() for name, key in self.keys.items()}}
        object.__setattr__(self, "keys", MappingProxyType(merged))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "SurroundConfig":
        """Build from a ``setup()``-style options mapping."""

        opts = dict(options or {})
        kwargs: dict[str, Any] = {}
        if "filetypes" in opts:
            kwargs["filetypes"] = opts.pop("filetypes")
        if "keys" in opts:
            kwargs["keys"] = dict(opts.pop("keys"))
        if opts:
            raise ValueError(f"Unknown options: {sorted(opts)}")
        return cls(**kwargs)

    @classmethod
    def from_env(cls) -> "SurroundConfig":
        raw = env("FILETYPES")
        if raw is None:
            return cls()
        return cls(filetypes=_normalize_filetypes(raw))

    def applies_to(self, filetype: str) -> bool:
        return filetype.strip().lower() in self.filetypes


__all__ = ["OPERATIONS", "DEFAULT_KEYS", "SurroundConfig"]
