from __future__ import annotations

import pytest

from markdowny.config import SurroundConfig
from markdowny.host import MemoryBuffer, MemorySelection
from markdowny.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    register_surround_keymaps,
)
from markdowny.plugin import setup
from markdowny.selection import Position
from markdowny.surround import SurroundEngine


def make_engine(text: str = "hello") -> tuple[SurroundEngine, MemoryBuffer, MemorySelection]:
    buffer = MemoryBuffer.from_text(text)
    selection = MemorySelection(buffer)
    return SurroundEngine(buffer, selection), buffer, selection


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def test_setup_defaults_to_markdown_only() -> None:
    plugin = setup({})
    engine, _, _ = make_engine()

    assert plugin.config.filetypes == ("markdown",)
    assert plugin.on_filetype("python", engine) is None
    assert plugin.on_filetype("Markdown", engine) is not None


def test_filetype_registry_binds_all_visual_modes() -> None:
    plugin = setup({"filetypes": ["markdown", "text"]})
    engine, _, _ = make_engine()

    registry = plugin.on_filetype("text", engine)

    assert registry is not None
    stats = registry.stats()
    assert stats.binding_count == 12
    assert stats.modes == ("visual", "visual_block", "visual_line")


def test_resolved_action_runs_the_operation() -> None:
    plugin = setup({"filetypes": "markdown"})
    engine, buffer, selection = make_engine("hello")
    registry = plugin.on_filetype("markdown", engine)
    assert registry is not None
    selection.select(Position(1, 1), Position(1, 5))

    action = registry.resolve("visual", "CTRL+B")
    assert action is not None
    result = action()

    assert buffer.text == "**hello**"
    assert getattr(result, "status") == "added"


def test_custom_keys_override_defaults() -> None:
    config = SurroundConfig.from_options({"keys": {"code": "shift+ctrl+c"}})
    engine, _, _ = make_engine()

    registry = register_surround_keymaps(KeymapRegistry(), engine, config)

    code = registry.resolve("visual_line", "ctrl+shift+c")
    assert code is not None and code.id == "markdowny.code"
    assert registry.resolve("visual_line", "ctrl+e") is None
    bold = registry.resolve("visual_block", "ctrl+b")
    assert bold is not None and bold.id == "markdowny.bold"


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ValueError):
        setup({"filetype": "markdown"})
    with pytest.raises(ValueError):
        SurroundConfig(keys={"strike": "ctrl+s"})
    with pytest.raises(ValueError):
        SurroundConfig(filetypes=())


def test_filetypes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MARKDOWNY_FILETYPES", "markdown, rst,markdown")

    plugin = setup()

    assert plugin.config.filetypes == ("markdown", "rst")


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(
        Binding(id="visual.one", mode="visual", key="ctrl+b", action_id="test.action")
    )

    with pytest.raises(KeymapConflictError):
        registry.register_binding(
            Binding(id="visual.two", mode="visual", key="CTRL+b", action_id="test.action")
        )

    registry.register_binding(
        Binding(id="visual.two", mode="visual", key="ctrl+b", action_id="test.action"),
        replace=True,
    )
    assert [binding.id for binding in registry.iter_bindings("visual")] == ["visual.two"]


def test_binding_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(
            Binding(id="visual.bold", mode="visual", key="ctrl+b", action_id="missing")
        )
