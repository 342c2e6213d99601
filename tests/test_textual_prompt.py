from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from textual.app import App
from textual.widgets import Input

from markdowny.adapters.textual import HrefPromptScreen, TextualHrefPrompt
from markdowny.host import MemoryBuffer, MemorySelection
from markdowny.selection import Position
from markdowny.surround import PENDING, SurroundEngine


class RecordingApp:
    def __init__(self) -> None:
        self.pushed: List[tuple[Any, Any]] = []

    def push_screen(self, screen: Any, callback: Any = None) -> None:
        self.pushed.append((screen, callback))


class HostApp(App[None]):
    pass


def test_prompt_pushes_modal_with_callback() -> None:
    app = RecordingApp()
    answers: List[Optional[str]] = []

    TextualHrefPrompt(app).request("Href:", answers.append)  # type: ignore[arg-type]

    screen, callback = app.pushed[0]
    assert isinstance(screen, HrefPromptScreen)
    callback("http://x")
    assert answers == ["http://x"]


def test_engine_link_waits_for_textual_prompt() -> None:
    app = RecordingApp()
    buffer = MemoryBuffer.from_text("text")
    selection = MemorySelection(buffer)
    engine = SurroundEngine(buffer, selection, prompt=TextualHrefPrompt(app))  # type: ignore[arg-type]
    selection.select(Position(1, 1), Position(1, 4))

    assert engine.link() is PENDING
    assert buffer.version == 0

    _, callback = app.pushed[0]
    callback("http://x")

    assert buffer.text == "[text](http://x)"


def test_modal_submits_and_cancels() -> None:
    async def scenario() -> List[Optional[str]]:
        answers: List[Optional[str]] = []
        app = HostApp()
        async with app.run_test() as pilot:
            prompt = TextualHrefPrompt(app)

            prompt.request("Href:", answers.append)
            await pilot.pause()
            app.screen.query_one(Input).value = "http://x"
            await pilot.press("enter")
            await pilot.pause()

            prompt.request("Href:", answers.append)
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
        return answers

    assert asyncio.run(scenario()) == ["http://x", None]
