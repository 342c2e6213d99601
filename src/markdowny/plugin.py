"""Entry point hosts call once, then on every file-type change."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from markdowny.runtime import telemetry

from .config import SurroundConfig
from .keymaps import KeymapRegistry, register_surround_keymaps
from .surround.engine import SurroundEngine


class MarkdownyPlugin:
    def __init__(self, config: SurroundConfig) -> None:
        self.config = config

    def on_filetype(
        self,
        filetype: str,
        engine: SurroundEngine,
        *,
        registry: Optional[KeymapRegistry] = None,
    ) -> Optional[KeymapRegistry]:
        """Return the buffer's keymaps, or ``None`` when the file type is inactive."""

        if not self.config.applies_to(filetype):
            return None
        registry = registry or KeymapRegistry(logger_name="markdowny.keymaps")
        register_surround_keymaps(registry, engine, self.config)
        telemetry.record_event(
            "plugin.attached",
            level="debug",
            data={"filetype": filetype, "bindings": registry.stats().binding_count},
        )
        return registry


def setup(options: Optional[Mapping[str, Any]] = None) -> MarkdownyPlugin:
    """Create the plugin from explicit options, falling back to the environment."""

    if options is None:
        config = SurroundConfig.from_env()
    else:
        config = SurroundConfig.from_options(options)
    return MarkdownyPlugin(config)


__all__ = ["MarkdownyPlugin", "setup"]
