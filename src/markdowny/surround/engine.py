"""Toggle engine exposing the bold/italic/code/link operations."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional

from markdowny.host.services import HrefPrompt, SelectionService, TextBufferService
from markdowny.runtime import telemetry
from markdowny.selection.errors import (
    InvalidRange,
    PromptCancelled,
    SurroundError,
)
from markdowny.selection.extract import capture, extract
from markdowny.selection.model import (
    BOLD,
    CODE,
    FENCE,
    ITALIC,
    MarkerPair,
    Selection,
    SelectionMode,
)

from .detect import should_remove
from .mutate import Edit, apply

LINK_PROMPT = "Href:"

Notifier = Callable[[str, str], None]


@dataclass(frozen=True, slots=True)
class ToggleSpec:
    """One surround operation: its markers and how it may toggle.

    ``fence`` replaces ``markers`` for linewise selections.
    """

    name: str
    markers: MarkerPair
    allow_remove: bool = True
    fence: Optional[MarkerPair] = None


BOLD_TOGGLE = ToggleSpec("bold", BOLD)
ITALIC_TOGGLE = ToggleSpec("italic", ITALIC)
CODE_TOGGLE = ToggleSpec("code", CODE, fence=FENCE)


def link_toggle(href: str) -> ToggleSpec:
    # The closing marker embeds the href, so a re-run can never match it.
    return ToggleSpec("link", MarkerPair.link(href), allow_remove=False)


@dataclass(frozen=True, slots=True)
class SurroundResult:
    applied: bool
    status: str
    operation: Optional[str] = None
    message: Optional[str] = None
    selection: Optional[Selection] = None


PENDING = SurroundResult(
    applied=False, status="pending", operation="link", message="awaiting_href"
)


def _log_notifier(message: str, level: str) -> None:
    telemetry.record_event(
        "surround.notify",
        level=level,
        data={"message": message},
        logger_name="markdowny.surround",
    )


class SurroundEngine:
    """Applies surround toggles to the host's active selection."""

    def __init__(
        self,
        buffer: TextBufferService,
        selection: SelectionService,
        *,
        prompt: Optional[HrefPrompt] = None,
        notify: Optional[Notifier] = None,
        logger_name: str = "markdowny.surround",
    ) -> None:
        self.buffer = buffer
        self.selection = selection
        self.prompt = prompt
        self.notify = notify or _log_notifier
        self._logger_name = logger_name

    def capture(self) -> Selection:
        """Snapshot the live selection; call before the host leaves visual mode."""

        return capture(self.selection)

    def bold(self, captured: Optional[Selection] = None) -> SurroundResult:
        return self.toggle(BOLD_TOGGLE, captured=captured)

    def italic(self, captured: Optional[Selection] = None) -> SurroundResult:
        return self.toggle(ITALIC_TOGGLE, captured=captured)

    def code(self, captured: Optional[Selection] = None) -> SurroundResult:
        return self.toggle(CODE_TOGGLE, captured=captured)

    def toggle(
        self, spec: ToggleSpec, *, captured: Optional[Selection] = None
    ) -> SurroundResult:
        with telemetry.span(
            f"surround::{spec.name}",
            logger_name=self._logger_name,
            component="surround",
            metadata={"operation": spec.name},
        ) as handle:
            try:
                current = captured or capture(self.selection)
                extraction = extract(self.buffer, current)
            except SurroundError as exc:
                handle.add_metadata("status", exc.status)
                return self._aborted(spec.name, exc)

            fenced = spec.fence is not None and extraction.mode is SelectionMode.LINEWISE
            markers = spec.fence if fenced and spec.fence else spec.markers
            removing = should_remove(
                extraction, markers, allow_remove=spec.allow_remove, fenced=fenced
            )
            edit = apply(
                self.buffer, extraction, markers, removing=removing, fenced=fenced
            )
            self._write_back(edit)

            status = "removed" if removing else "added"
            handle.add_metadata("status", status)
            telemetry.record_event(
                f"surround.{status}",
                level="debug",
                data={
                    "operation": spec.name,
                    "mode": extraction.mode.value,
                    "lines": len(extraction.spans),
                    "fenced": fenced,
                },
                logger_name=self._logger_name,
            )
            return SurroundResult(
                applied=True,
                status=status,
                operation=spec.name,
                selection=edit.selection,
            )

    def link(
        self,
        href: Optional[str] = None,
        *,
        on_complete: Optional[Callable[[SurroundResult], None]] = None,
    ) -> SurroundResult:
        """Wrap the selection as ``[text](href)``.

        Without ``href`` the prompt is asked; the result is returned directly
        when the prompt answers synchronously, otherwise ``PENDING`` is
        returned and ``on_complete`` receives the outcome later.
        """

        if href is not None:
            result = self.toggle(link_toggle(href))
            if on_complete:
                on_complete(result)
            return result

        if self.prompt is None:
            raise RuntimeError("link() without an href requires a prompt")

        # Nothing is written before the prompt resolves; validate up front.
        try:
            captured = capture(self.selection)
            extract(self.buffer, captured)
        except SurroundError as exc:
            result = self._aborted("link", exc)
            if on_complete:
                on_complete(result)
            return result

        outcome: List[SurroundResult] = []

        def on_done(value: Optional[str]) -> None:
            if outcome:
                raise RuntimeError("href prompt resolved more than once")
            if value is None:
                result = self._aborted("link", PromptCancelled("Href prompt dismissed"))
            else:
                result = self.toggle(link_toggle(value), captured=captured)
            outcome.append(result)
            if on_complete:
                on_complete(result)

        self.prompt.request(LINK_PROMPT, on_done)
        return outcome[0] if outcome else PENDING

    async def link_async(self) -> SurroundResult:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[SurroundResult] = loop.create_future()

        def resolve(result: SurroundResult) -> None:
            if not future.done():
                future.set_result(result)

        self.link(on_complete=resolve)
        return await future

    def _write_back(self, edit: Edit) -> None:
        self.selection.set_mark("<", edit.selection.first)
        self.selection.set_mark(">", edit.selection.last)
        if edit.cursor is not None:
            self.selection.set_cursor(edit.cursor)

    def _aborted(self, operation: str, exc: SurroundError) -> SurroundResult:
        if isinstance(exc, InvalidRange):
            self.notify(str(exc), "warning")
        telemetry.record_event(
            f"surround.{exc.status}",
            level="debug",
            data={"operation": operation, "reason": str(exc)},
            logger_name=self._logger_name,
        )
        return SurroundResult(
            applied=False, status=exc.status, operation=operation, message=str(exc)
        )


__all__ = [
    "LINK_PROMPT",
    "ToggleSpec",
    "BOLD_TOGGLE",
    "ITALIC_TOGGLE",
    "CODE_TOGGLE",
    "link_toggle",
    "SurroundResult",
    "PENDING",
    "SurroundEngine",
]
