"""Recognition stream handling: submit the last final transcript after a grace window."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass
from typing import cast

from homestead_voice.commands.errors import RecognitionError
from homestead_voice.config import settings

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[str], Awaitable[None] | None]


@dataclass(frozen=True)
class RecognitionEvent:
    """A partial (interim) or final transcript from the recognizer."""

    transcript: str
    is_final: bool = False


class TranscriptDebouncer:
    """Waits a grace window after each final transcript before submitting it.

    A new final transcript inside the window cancels the pending submission
    and restarts the window, so only the last one is submitted. Once a window
    has elapsed its submission always runs to completion. ``stop()`` cancels
    an open window. Must be used from a running event loop.
    """

    def __init__(self, on_submit: SubmitCallback, delay: float | None = None) -> None:
        self.on_submit = on_submit
        self.delay = settings.auto_submit_delay_seconds if delay is None else delay
        self.latest_transcript = ""
        self._pending: asyncio.Task[None] | None = None
        self._submitting: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while a grace window is open."""
        return self._pending is not None and not self._pending.done()

    def handle(self, event: RecognitionEvent) -> None:
        """Record an event; final events (re)start the grace window."""
        self.latest_transcript = event.transcript
        if not event.is_final:
            return

        self._cancel_pending()
        loop = asyncio.get_running_loop()
        self._pending = loop.create_task(self._submit_later(event.transcript))
        self._pending.add_done_callback(self._log_failure)

    def stop(self) -> None:
        """Cancel an open grace window (the speaker stopped listening)."""
        self._cancel_pending()

    async def wait(self) -> None:
        """Wait for the open window, if any, and every started submission to finish.

        Submission failures are logged, not raised.
        """
        while self._pending is not None and not self._pending.done():
            await asyncio.wait({self._pending})
        while self._submitting:
            await asyncio.wait(set(self._submitting))

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    @staticmethod
    def _log_failure(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Submitting final transcript failed", exc_info=exc)

    async def _submit_later(self, transcript: str) -> None:
        await asyncio.sleep(self.delay)

        # Window elapsed: later final transcripts no longer cancel this task.
        task = cast(asyncio.Task[None], asyncio.current_task())
        if self._pending is task:
            self._pending = None
        self._submitting.add(task)
        try:
            logger.debug("Submitting final transcript %r", transcript)
            if inspect.iscoroutinefunction(self.on_submit):
                await self.on_submit(transcript)
            else:
                await asyncio.to_thread(self.on_submit, transcript)
        finally:
            self._submitting.discard(task)


async def listen(events: AsyncIterable[RecognitionEvent], debouncer: TranscriptDebouncer) -> None:
    """Feed a recognition stream into *debouncer* until the stream ends.

    When the stream ends normally the pending submission (if any) is allowed
    to complete. A RecognitionError from the stream cancels it and propagates.
    """
    try:
        async for event in events:
            debouncer.handle(event)
    except RecognitionError:
        logger.warning("Recognition stream failed; cancelling pending submission")
        debouncer.stop()
        raise
    await debouncer.wait()
