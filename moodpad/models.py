"""Model profile utilities for configuring the sentiment pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class ModelProfile:
    """Pre-configured Hugging Face sentiment model."""

    name: str
    description: str
    sentiment_model: str
    sentiment_tokenizer: str | None = None
    all_scores: bool = False


def _default_profiles() -> Dict[str, ModelProfile]:
    """Return the built-in model profile registry."""

    return {
        "sst2": ModelProfile(
            name="sst2",
            description="DistilBERT fine-tuned on SST-2; binary POSITIVE/NEGATIVE labels.",
            sentiment_model="distilbert-base-uncased-finetuned-sst-2-english",
        ),
        "twitter": ModelProfile(
            name="twitter",
            description=(
                "RoBERTa trained on tweets; scores negative, neutral and positive together."
            ),
            sentiment_model="cardiffnlp/twitter-roberta-base-sentiment-latest",
            all_scores=True,
        ),
        "multilingual": ModelProfile(
            name="multilingual",
            description="Multilingual BERT predicting a 1 to 5 star rating.",
            sentiment_model="nlptown/bert-base-multilingual-uncased-sentiment",
        ),
    }


_PROFILES: Dict[str, ModelProfile] = _default_profiles()

DEFAULT_PROFILE_NAME = "sst2"


def list_model_profiles() -> List[str]:
    """Return profile names, the default first and the rest alphabetically."""

    others = sorted(name for name in _PROFILES if name != DEFAULT_PROFILE_NAME)
    return [DEFAULT_PROFILE_NAME, *others]


def get_model_profile(name: str) -> ModelProfile:
    """Fetch a model profile by name, ignoring case and surrounding spaces."""

    key = (name or "").strip().lower()
    if key not in _PROFILES:
        choices = ", ".join(list_model_profiles())
        raise ValueError(f"Unknown model profile: {name!r} (choose from {choices})")
    return _PROFILES[key]


def describe_model_profiles() -> List[str]:
    """Return human-readable lines describing each profile."""

    lines: List[str] = []
    for name in list_model_profiles():
        profile = _PROFILES[name]
        lines.append(f"{name}: {profile.description}")
        lines.append(f"  Model: {profile.sentiment_model}")
        if profile.sentiment_tokenizer:
            lines.append(f"  Tokenizer: {profile.sentiment_tokenizer}")
        if profile.all_scores:
            lines.append("  Scores: all labels")
    return lines


PROFILE_FIELDS = ("sentiment_model", "sentiment_tokenizer", "all_scores")


def apply_profile_defaults(
    namespace, profile: ModelProfile, fields: Iterable[str] = PROFILE_FIELDS
) -> None:
    """Fill profile settings the command line left unset.

    An attribute counts as unset when it is absent (``argparse.SUPPRESS``) or
    ``None``; explicit overrides such as ``--sentiment-model`` are kept.
    """

    for field in fields:
        if getattr(namespace, field, None) is None:
            setattr(namespace, field, getattr(profile, field))
