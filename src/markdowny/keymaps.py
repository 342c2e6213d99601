"""Visual-mode key bindings that route to the surround operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional

from markdowny.runtime.telemetry import span

from .config import OPERATIONS, SurroundConfig
from .surround.engine import SurroundEngine

VISUAL_MODES = ("visual", "visual_line", "visual_block")


def _normalize_key(key: str) -> str:
    parts = [part.strip().lower() for part in key.split("+") if part.strip()]
    if not parts:
        raise ValueError("key cannot be empty")
    *modifiers, name = parts
    return "+".join([*sorted(dict.fromkeys(modifiers)), name])


@dataclass(frozen=True, slots=True)
class ActionRef:
    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    key: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a key is already bound in the same mode."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.mode}:{binding.key}"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Per-buffer table of actions and the keys bound to them."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_key: Dict[tuple[str, str], str] = {}
        self._logger_name = logger_name

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            slot = (binding.mode, binding.key)
            existing_id = self._by_key.get(slot)
            if existing_id is not None and existing_id != binding.id:
                if not replace:
                    raise KeymapConflictError(binding, self._bindings[existing_id])
                self.unregister_binding(existing_id)
            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self.unregister_binding(binding.id)

            self._bindings[binding.id] = binding
            self._by_key[slot] = binding.id
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._by_key.pop((binding.mode, binding.key), None)
        return binding

    def resolve(self, mode: str, key: str) -> Optional[ActionRef]:
        binding_id = self._by_key.get((mode, _normalize_key(key)))
        if binding_id is None:
            return None
        return self._actions[self._bindings[binding_id].action_id]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({binding.mode for binding in self._bindings.values()})),
        )


def surround_actions(engine: SurroundEngine) -> tuple[ActionRef, ...]:
    return (
        ActionRef("markdowny.bold", lambda: engine.bold(), "Toggle **bold**"),
        ActionRef("markdowny.italic", lambda: engine.italic(), "Toggle _italic_"),
        ActionRef("markdowny.link", lambda: engine.link(), "Wrap as [link](href)"),
        ActionRef("markdowny.code", lambda: engine.code(), "Toggle `code` or a fence"),
    )


def register_surround_keymaps(
    registry: KeymapRegistry,
    engine: SurroundEngine,
    config: Optional[SurroundConfig] = None,
    *,
    modes: Iterable[str] = VISUAL_MODES,
) -> KeymapRegistry:
    config = config or SurroundConfig()
    for action in surround_actions(engine):
        registry.register_action(action, replace=True)
    for mode in modes:
        for operation in OPERATIONS:
            registry.register_binding(
                Binding(
                    id=f"{mode}.markdowny.{operation}",
                    mode=mode,
                    key=config.keys[operation],
                    action_id=f"markdowny.{operation}",
                    description=f"markdowny {operation}",
                ),
                replace=True,
            )
    return registry


__all__ = [
    "VISUAL_MODES",
    "ActionRef",
    "Binding",
    "RegistryStats",
    "KeymapConflictError",
    "KeymapRegistry",
    "surround_actions",
    "register_surround_keymaps",
]
