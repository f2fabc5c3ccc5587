"""Debounced analyze-on-edit workflow."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Set

from .debounce import Debouncer, Scheduler
from .editor import TEXT_CHANGE, Editor
from .loader import ModelLoader
from .panel import ResultPanel

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY_S = 0.5


@dataclass(frozen=True)
class ContentChanged:
    pass


@dataclass(frozen=True)
class Shutdown:
    pass


class EditWatcher:
    """Turns editor change notifications into rate-limited sentiment analyses.

    Change notifications clear the panel right away and post a
    ``ContentChanged`` message. A single consumer task (``run``) owns the
    debounce timer; when the editor has been quiet for ``delay`` seconds the
    current text is scored and the panel is updated.

    Scoring calls are never cancelled once started, so analyses may overlap.
    By default the last one to resolve wins. With ``discard_stale`` a result is
    only shown if no edit or newer analysis happened since it was requested.
    """

    def __init__(
        self,
        editor: Editor,
        loader: ModelLoader,
        panel: ResultPanel,
        *,
        delay: float = DEBOUNCE_DELAY_S,
        scheduler: Scheduler | None = None,
        discard_stale: bool = False,
    ) -> None:
        self.editor = editor
        self.loader = loader
        self.panel = panel
        self.discard_stale = discard_stale
        self._debouncer = Debouncer(delay, self._on_quiet, scheduler=scheduler)
        self._inbox: asyncio.Queue = asyncio.Queue()
        self._consumer: asyncio.Task | None = None
        self._in_flight: Set[asyncio.Task] = set()
        self._generation = 0
        self._attached = False

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def attach(self) -> None:
        if not self._attached:
            self.editor.on(TEXT_CHANGE, self.on_content_changed)
            self._attached = True

    def detach(self) -> None:
        if self._attached:
            self.editor.off(TEXT_CHANGE, self.on_content_changed)
            self._attached = False

    def start(self) -> asyncio.Task:
        if self._consumer is None or self._consumer.done():
            self._consumer = asyncio.ensure_future(self.run())
        return self._consumer

    async def stop(self) -> None:
        self.detach()
        if self._consumer is not None and not self._consumer.done():
            self._inbox.put_nowait(Shutdown())
            await self._consumer
        self._debouncer.cancel()

    def on_content_changed(self, *_args, **_kwargs) -> None:
        self._generation += 1
        self.panel.clear_results()
        self._inbox.put_nowait(ContentChanged())

    async def run(self) -> None:
        while True:
            message = await self._inbox.get()
            try:
                if isinstance(message, Shutdown):
                    self._debouncer.cancel()
                    return
                self._debouncer.arm()
            finally:
                self._inbox.task_done()

    def flush(self) -> bool:
        """Run a pending analysis immediately instead of waiting out the delay."""

        return self._debouncer.flush()

    async def settle(self) -> None:
        """Wait until queued changes are handled and no analysis is in flight."""

        await self._inbox.join()
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def _on_quiet(self) -> None:
        task = asyncio.ensure_future(self.analyze())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def analyze(self) -> None:
        text = self.editor.get_text()
        if not text.strip():
            return
        scorer = self.loader.scorer
        if scorer is None:
            logger.warning("Sentiment pipeline is not loaded yet; dropping analysis request")
            return

        self._generation += 1
        generation = self._generation
        self.panel.begin_loading()
        try:
            results = await scorer.score(text)
        except Exception:
            logger.exception("Error analyzing sentiment")
        else:
            if self.discard_stale and generation != self._generation:
                logger.debug("Discarding stale sentiment result (generation %d)", generation)
            else:
                logger.debug("Sentiment results: %s", results)
                self.panel.show_results(results)
        finally:
            self.panel.end_loading()
