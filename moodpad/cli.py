"""Command line entry point for the sentiment editor."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import List

from .app import EDITOR_THEMES, run_ui
from .editor import EditorOptions, TextDocument
from .loader import ModelLoader
from .models import (
    DEFAULT_PROFILE_NAME,
    apply_profile_defaults,
    describe_model_profiles,
    get_model_profile,
    list_model_profiles,
)
from .panel import ResultPanel
from .sentiment import KeywordSentimentScorer
from .watcher import DEBOUNCE_DELAY_S, EditWatcher

logger = logging.getLogger(__name__)


def build_loader(args: argparse.Namespace) -> ModelLoader:
    if args.debug:
        return ModelLoader(KeywordSentimentScorer, model_id="keyword-debug")
    profile = get_model_profile(args.profile)
    return ModelLoader.from_profile(
        profile,
        model_id=args.sentiment_model,
        device=args.device,
    )


async def analyze_once(
    text: str,
    loader: ModelLoader,
    *,
    delay: float = DEBOUNCE_DELAY_S,
    discard_stale: bool = False,
) -> List[str]:
    """Type ``text`` into a headless editor and return the rendered panel."""

    if await loader.load() is None:
        raise SystemExit("Sentiment model failed to load; see the log for details")

    document = TextDocument()
    panel = ResultPanel()
    watcher = EditWatcher(
        document, loader, panel, delay=delay, discard_stale=discard_stale
    )
    watcher.attach()
    watcher.start()
    try:
        document.set_text(text)
        await watcher.settle()
        watcher.flush()
        await watcher.settle()
    finally:
        await watcher.stop()
    return panel.render_lines()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rich-text editor with live sentiment analysis")
    parser.add_argument("text", nargs="?", help="Text to analyze once without starting the UI")
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Serve the browser editor instead of analyzing a single text",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host interface for the editor UI")
    parser.add_argument("--port", type=int, default=8080, help="Port for the editor UI")
    parser.add_argument(
        "--profile",
        choices=list_model_profiles(),
        default=DEFAULT_PROFILE_NAME,
        help="Preconfigured Hugging Face sentiment model to use",
    )
    parser.add_argument(
        "--list-model-profiles",
        action="store_true",
        help="Print the available model profiles and exit",
    )
    parser.add_argument(
        "--sentiment-model",
        default=argparse.SUPPRESS,
        help="Hugging Face sentiment model identifier overriding the profile",
    )
    parser.add_argument(
        "--device",
        default=None,
        help="Device for sentiment inference (e.g. cpu or cuda:0)",
    )
    parser.add_argument(
        "--debounce-ms",
        dest="debounce_ms",
        type=int,
        default=int(DEBOUNCE_DELAY_S * 1000),
        help="Quiet period in milliseconds before the text is analyzed",
    )
    parser.add_argument(
        "--discard-stale",
        action="store_true",
        help="Drop results of analyses superseded by a newer edit or analysis",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(EDITOR_THEMES),
        default=EditorOptions.theme,
        help="Visual theme of the browser editor",
    )
    parser.add_argument(
        "--placeholder",
        default=EditorOptions.placeholder,
        help="Placeholder text shown in the empty editor",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Use a keyword scorer instead of downloading a Hugging Face model",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.list_model_profiles:
        for line in describe_model_profiles():
            print(line)
        return

    if not hasattr(args, "sentiment_model") and os.environ.get("MOODPAD_SENTIMENT_MODEL"):
        args.sentiment_model = os.environ["MOODPAD_SENTIMENT_MODEL"]
    apply_profile_defaults(args, get_model_profile(args.profile), ("sentiment_model",))

    if args.debounce_ms < 0:
        parser.error("--debounce-ms must be non-negative")
    delay = args.debounce_ms / 1000.0
    loader = build_loader(args)

    if args.ui:
        run_ui(
            loader,
            host=args.host,
            port=args.port,
            options=EditorOptions(theme=args.theme, placeholder=args.placeholder),
            delay=delay,
            discard_stale=args.discard_stale,
        )
        return

    if not args.text or not args.text.strip():
        parser.error("Provide text to analyze or --ui")

    lines = asyncio.run(
        analyze_once(args.text, loader, delay=delay, discard_stale=args.discard_stale)
    )
    if not lines:
        print("No sentiment returned")
        return
    for line in lines:
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
