"""Core modules for the Moodpad sentiment editor."""

from .debounce import Debouncer
from .editor import EditorOptions, TextChange, TextDocument, html_to_text
from .loader import ModelLoader, PipelineNotReady, ScorerCell
from .models import (
    ModelProfile,
    apply_profile_defaults,
    describe_model_profiles,
    get_model_profile,
    list_model_profiles,
)
from .panel import LOADING_MESSAGE, ResultPanel
from .sentiment import (
    HuggingFaceSentimentScorer,
    KeywordSentimentScorer,
    ScoreResult,
    SentimentScorer,
    results_from_raw,
)
from .watcher import DEBOUNCE_DELAY_S, EditWatcher

__all__ = [
    "Debouncer",
    "EditorOptions",
    "TextChange",
    "TextDocument",
    "html_to_text",
    "ModelLoader",
    "PipelineNotReady",
    "ScorerCell",
    "ModelProfile",
    "list_model_profiles",
    "get_model_profile",
    "describe_model_profiles",
    "apply_profile_defaults",
    "LOADING_MESSAGE",
    "ResultPanel",
    "ScoreResult",
    "SentimentScorer",
    "HuggingFaceSentimentScorer",
    "KeywordSentimentScorer",
    "results_from_raw",
    "DEBOUNCE_DELAY_S",
    "EditWatcher",
]
