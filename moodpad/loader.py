"""Asynchronous acquisition of the sentiment scoring function."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Callable, Generic, TypeVar

from .models import ModelProfile
from .sentiment import HuggingFaceSentimentScorer, SentimentScorer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PipelineNotReady(RuntimeError):
    """Raised when a scorer is requested before the model finished loading."""


class ScorerCell(Generic[T]):
    """Write-once slot holding a ready scorer."""

    def __init__(self) -> None:
        self._value: T | None = None

    @property
    def ready(self) -> bool:
        return self._value is not None

    def publish(self, value: T) -> None:
        if value is None:
            raise ValueError("Cannot publish an empty scorer")
        if self._value is not None:
            raise RuntimeError("Scorer has already been published")
        self._value = value

    def get(self) -> T:
        if self._value is None:
            raise PipelineNotReady("Sentiment pipeline is not loaded yet")
        return self._value


class ModelLoader:
    """Loads a scorer once, off the event loop, and publishes it when ready.

    ``factory`` is a blocking, zero-argument callable returning the scorer. It
    runs in a worker thread so the event loop keeps serving edits while the
    model downloads.
    """

    def __init__(
        self,
        factory: Callable[[], SentimentScorer],
        *,
        model_id: str | None = None,
    ) -> None:
        self._factory = factory
        self.model_id = model_id
        self._cell: ScorerCell[SentimentScorer] = ScorerCell()
        self._task: asyncio.Future | None = None
        self.error: BaseException | None = None

    @classmethod
    def from_profile(
        cls,
        profile: ModelProfile,
        *,
        model_id: str | None = None,
        device: int | str | None = None,
        pipeline_factory=None,
    ) -> "ModelLoader":
        model_id = model_id or profile.sentiment_model
        factory = functools.partial(
            HuggingFaceSentimentScorer,
            model_id,
            tokenizer=profile.sentiment_tokenizer,
            device=device,
            all_scores=profile.all_scores,
            pipeline_factory=pipeline_factory,
        )
        return cls(factory, model_id=model_id)

    def is_ready(self) -> bool:
        return self._cell.ready

    @property
    def scorer(self) -> SentimentScorer | None:
        return self._cell.get() if self._cell.ready else None

    async def load(self) -> SentimentScorer | None:
        if self._task is None:
            self._task = asyncio.ensure_future(self._acquire())
        return await asyncio.shield(self._task)

    async def _acquire(self) -> SentimentScorer | None:
        logger.info("Loading sentiment model %s", self.model_id or "")
        try:
            scorer = await asyncio.to_thread(self._factory)
            self._cell.publish(scorer)
        except Exception as exc:
            self.error = exc
            logger.exception("Error loading the sentiment model")
            return None
        logger.info("Sentiment model loaded")
        return scorer
