"""Textual modal that answers the engine's href prompt."""

from __future__ import annotations

from typing import Any, Callable, Optional

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.screen import ModalScreen
    from textual.widgets import Input, Label
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use markdowny.adapters.textual"
    ) from exc


class HrefPromptScreen(ModalScreen[Optional[str]]):
    """Single-line input; Enter dismisses with the text, Escape with ``None``."""

    DEFAULT_CSS = """
    HrefPromptScreen {
        align: center middle;
    }

    #href-dialog {
        width: 60;
        height: auto;
        border: round $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, prompt: str = "Href:") -> None:
        super().__init__()
        self._prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="href-dialog"):
            yield Label(self._prompt)
            yield Input(placeholder="https://", id="href-input")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TextualHrefPrompt:
    """``HrefPrompt`` backed by a running Textual app."""

    def __init__(self, app: App[Any]) -> None:
        self.app = app

    def request(self, prompt: str, on_done: Callable[[Optional[str]], None]) -> None:
        self.app.push_screen(HrefPromptScreen(prompt), on_done)


__all__ = ["HrefPromptScreen", "TextualHrefPrompt"]
