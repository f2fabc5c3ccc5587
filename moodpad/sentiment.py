"""Sentiment scoring backends."""

from __future__ import annotations

import asyncio
import re
import threading
from dataclasses import dataclass
from typing import Iterable, List, Protocol

DEFAULT_SENTIMENT_MODEL = "distilbert-base-uncased-finetuned-sst-2-english"


@dataclass(frozen=True)
class ScoreResult:
    label: str
    score: float

    def format(self) -> str:
        return f"Label: {self.label} | Score: {self.score}"


class SentimentScorer(Protocol):
    """Interface for scoring functions handed out by the model loader."""

    async def score(self, text: str) -> List[ScoreResult]:
        ...


def results_from_raw(raw) -> List[ScoreResult]:
    """Map text-classification pipeline output onto ``ScoreResult`` items.

    Depending on ``top_k`` the pipeline returns a single dict, a list of dicts
    or a list holding one list of dicts per input. Order is preserved.
    """

    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = [raw]
    if raw and isinstance(raw[0], list):
        raw = raw[0]
    return [
        ScoreResult(label=str(item.get("label", "")), score=float(item.get("score", 0.0)))
        for item in raw
    ]


class HuggingFaceSentimentScorer:
    """Score text with a Hugging Face sentiment-analysis pipeline."""

    def __init__(
        self,
        model_id: str = DEFAULT_SENTIMENT_MODEL,
        *,
        tokenizer: str | None = None,
        device: int | str | None = None,
        all_scores: bool = False,
        pipeline_factory=None,
    ) -> None:
        """Create the scorer and load the underlying pipeline.

        Parameters
        ----------
        model_id:
            Identifier of a text-classification model on the Hugging Face Hub.
        tokenizer:
            Optional tokenizer identifier; defaults to ``model_id``.
        device:
            Torch device index or string. Defaults to CUDA when available.
        all_scores:
            Return a score for every label instead of only the top one.
        pipeline_factory:
            Dependency injection hook used in tests; defaults to
            :func:`transformers.pipeline`.
        """

        if pipeline_factory is None:
            from transformers import pipeline

            pipeline_factory = pipeline

        if device is None:
            import torch

            device = 0 if torch.cuda.is_available() else "cpu"

        self.model_id = model_id
        self.all_scores = all_scores
        # fast tokenizers are not safe to call from two threads at once
        self._lock = threading.Lock()
        self._pipeline = pipeline_factory(
            "sentiment-analysis",
            model=model_id,
            tokenizer=tokenizer or model_id,
            device=device,
        )

    def score_sync(self, text: str) -> List[ScoreResult]:
        kwargs = {"truncation": True}
        if self.all_scores:
            kwargs["top_k"] = None
        with self._lock:
            raw = self._pipeline(text, **kwargs)
        return results_from_raw(raw)

    async def score(self, text: str) -> List[ScoreResult]:
        return await asyncio.to_thread(self.score_sync, text)


_WORD = re.compile(r"[a-z']+")

POSITIVE_WORDS = frozenset(
    {"good", "great", "love", "happy", "excellent", "wonderful", "nice", "amazing", "best", "like"}
)
NEGATIVE_WORDS = frozenset(
    {"bad", "terrible", "hate", "sad", "awful", "horrible", "worst", "angry", "poor", "dislike"}
)


class KeywordSentimentScorer:
    """Debug scorer that counts positive and negative words."""

    def __init__(
        self,
        positive: Iterable[str] = POSITIVE_WORDS,
        negative: Iterable[str] = NEGATIVE_WORDS,
    ) -> None:
        self.positive = frozenset(word.lower() for word in positive)
        self.negative = frozenset(word.lower() for word in negative)

    def score_sync(self, text: str) -> List[ScoreResult]:
        words = _WORD.findall(text.lower())
        pos = sum(1 for word in words if word in self.positive)
        neg = sum(1 for word in words if word in self.negative)
        if pos + neg == 0:
            return [ScoreResult(label="POSITIVE", score=0.5)]
        if pos >= neg:
            return [ScoreResult(label="POSITIVE", score=round(pos / (pos + neg), 4))]
        return [ScoreResult(label="NEGATIVE", score=round(neg / (pos + neg), 4))]

    async def score(self, text: str) -> List[ScoreResult]:
        return self.score_sync(text)
