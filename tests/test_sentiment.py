from __future__ import annotations

import asyncio
import threading
import time

from moodpad.sentiment import (
    HuggingFaceSentimentScorer,
    KeywordSentimentScorer,
    ScoreResult,
    results_from_raw,
)


class StubSentimentPipeline:
    def __init__(self, output) -> None:
        self.output = output
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, text, **kwargs):
        self.calls.append((text, kwargs))
        return self.output


def _scorer(pipeline, **kwargs) -> tuple[HuggingFaceSentimentScorer, list]:
    factory_calls: list = []

    def factory(*args, **factory_kwargs):
        factory_calls.append((args, factory_kwargs))
        return pipeline

    scorer = HuggingFaceSentimentScorer(
        "fake/model", device="cpu", pipeline_factory=factory, **kwargs
    )
    return scorer, factory_calls


def test_score_result_format_matches_display() -> None:
    assert ScoreResult("POSITIVE", 0.98).format() == "Label: POSITIVE | Score: 0.98"


def test_results_from_raw_accepts_pipeline_shapes() -> None:
    single = {"label": "NEGATIVE", "score": 0.7}
    nested = [[{"label": "positive", "score": 0.6}, {"label": "negative", "score": 0.4}]]

    assert results_from_raw(single) == [ScoreResult("NEGATIVE", 0.7)]
    assert results_from_raw([single]) == [ScoreResult("NEGATIVE", 0.7)]
    assert [r.label for r in results_from_raw(nested)] == ["positive", "negative"]
    assert results_from_raw([]) == []
    assert results_from_raw(None) == []


def test_huggingface_scorer_builds_sentiment_pipeline() -> None:
    pipeline = StubSentimentPipeline([{"label": "POSITIVE", "score": 0.98}])
    _, factory_calls = _scorer(pipeline)

    args, kwargs = factory_calls[0]
    assert args == ("sentiment-analysis",)
    assert kwargs["model"] == "fake/model"
    assert kwargs["tokenizer"] == "fake/model"
    assert kwargs["device"] == "cpu"


def test_huggingface_scorer_passes_full_text() -> None:
    pipeline = StubSentimentPipeline([{"label": "POSITIVE", "score": 0.98}])
    scorer, _ = _scorer(pipeline)
    text = "great " * 400

    results = asyncio.run(scorer.score(text))

    assert results == [ScoreResult("POSITIVE", 0.98)]
    assert pipeline.calls == [(text, {"truncation": True})]


def test_huggingface_scorer_requests_every_label() -> None:
    pipeline = StubSentimentPipeline(
        [
            {"label": "positive", "score": 0.8},
            {"label": "neutral", "score": 0.15},
            {"label": "negative", "score": 0.05},
        ]
    )
    scorer, _ = _scorer(pipeline, all_scores=True)

    results = scorer.score_sync("nice")

    assert [r.label for r in results] == ["positive", "neutral", "negative"]
    assert pipeline.calls[0][1] == {"truncation": True, "top_k": None}


def test_keyword_scorer_labels_text() -> None:
    scorer = KeywordSentimentScorer()

    assert scorer.score_sync("I love this, it is great") == [ScoreResult("POSITIVE", 1.0)]
    assert scorer.score_sync("awful and terrible, but good") == [
        ScoreResult("NEGATIVE", 0.6667)
    ]
    assert asyncio.run(scorer.score("a table")) == [ScoreResult("POSITIVE", 0.5)]


class ExclusivePipeline:
    """Pipeline stub that fails like a fast tokenizer when entered twice."""

    def __init__(self) -> None:
        self.inside = 0
        self.calls = 0
        self._guard = threading.Lock()

    def __call__(self, text, **kwargs):
        with self._guard:
            if self.inside:
                raise RuntimeError("Already borrowed")
            self.inside += 1
        try:
            time.sleep(0.05)
            self.calls += 1
            return [{"label": "POSITIVE", "score": 0.9}]
        finally:
            with self._guard:
                self.inside -= 1


def test_huggingface_scorer_serialises_overlapping_calls() -> None:
    pipeline = ExclusivePipeline()
    scorer, _ = _scorer(pipeline)

    async def scenario():
        return await asyncio.gather(scorer.score("first"), scorer.score("second"))

    first, second = asyncio.run(scenario())

    assert first == second == [ScoreResult("POSITIVE", 0.9)]
    assert pipeline.calls == 2
