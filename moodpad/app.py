"""NiceGUI front-end: a rich-text editor with live sentiment results."""

from __future__ import annotations

import logging

from .editor import EditorOptions, TextDocument
from .loader import ModelLoader
from .panel import LOADING_MESSAGE, ResultPanel
from .watcher import DEBOUNCE_DELAY_S, EditWatcher

logger = logging.getLogger(__name__)

EDITOR_STYLE = (
    "height: 300px; margin-bottom: 10px; border-radius: 10px; border: 1px solid #ccc;"
    " background-color: #f7f7f7; box-shadow: 0 4px 8px rgba(0,0,0,0.1); padding: 10px;"
    " font-family: 'Open Sans', sans-serif;"
)
RESULTS_STYLE = (
    "margin-top: 20px; padding: 15px; border-radius: 8px; background: #FFEFD5;"
    " box-shadow: 0 3px 6px rgba(0, 0, 0, 0.1);"
)

# Quasar QEditor props per theme: "snow" shows an outlined toolbar above the
# text, "bubble" keeps a flat, borderless surface with a minimal toolbar.
EDITOR_THEMES = {
    "snow": "toolbar-outline toolbar-bg=grey-2 toolbar-text-color=grey-9",
    "bubble": "flat dense toolbar-bg=transparent toolbar-text-color=grey-7",
}


def editor_props(theme: str) -> str:
    """Return the QEditor props for a theme name."""

    try:
        return EDITOR_THEMES[theme]
    except KeyError as exc:
        raise ValueError(f"Unknown editor theme: {theme}") from exc


def bind_watcher_to_client(watcher: EditWatcher, client) -> None:
    """Keep ``watcher`` alive across reconnects and stop it with the client.

    NiceGUI fires disconnect handlers for every dropped socket, including
    short drops the browser recovers from, so the watcher is only stopped
    once the client itself is deleted.
    """

    def on_disconnect() -> None:
        logger.debug("Client %s disconnected; editor stays active", client.id)

    client.on_disconnect(on_disconnect)
    client.on_delete(watcher.stop)


def build_editor_page(
    loader: ModelLoader,
    *,
    options: EditorOptions | None = None,
    delay: float = DEBOUNCE_DELAY_S,
    discard_stale: bool = False,
) -> EditWatcher:
    """Render one editor instance for the current client and start watching it."""

    from nicegui import ui

    options = options or EditorOptions()
    props = editor_props(options.theme)
    document = TextDocument(options=options)
    panel = ResultPanel()
    watcher = EditWatcher(
        document, loader, panel, delay=delay, discard_stale=discard_stale
    )

    with ui.column().classes("w-full").style(
        "position: relative; padding: 20px; font-family: 'Roboto', sans-serif;"
    ):
        ui.editor(
            placeholder=options.placeholder,
            on_change=lambda e: document.set_html(e.value or ""),
        ).props(props).classes("w-full").style(EDITOR_STYLE)

        with ui.column().classes("w-full items-center").style("margin-top: 20px;"):
            ui.label(LOADING_MESSAGE).style(
                "color: #007BFF; font-weight: bold;"
            ).bind_visibility_from(panel, "loading")

            @ui.refreshable
            def results() -> None:
                with ui.column().classes("w-full").style(RESULTS_STYLE):
                    for result in panel.results:
                        ui.label(result.format()).style(
                            "color: #D9534F; font-weight: bold; margin: 8px 0;"
                        )

            results()

    panel.subscribe(results.refresh)
    watcher.attach()
    watcher.start()
    bind_watcher_to_client(watcher, ui.context.client)
    return watcher


def run_ui(
    loader: ModelLoader,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    options: EditorOptions | None = None,
    delay: float = DEBOUNCE_DELAY_S,
    discard_stale: bool = False,
) -> None:  # pragma: no cover - starts a web server
    from nicegui import app, background_tasks, ui

    def start_loading() -> None:
        background_tasks.create(loader.load(), name="load-sentiment-model")

    app.on_startup(start_loading)

    @ui.page("/")
    def index() -> None:
        build_editor_page(
            loader, options=options, delay=delay, discard_stale=discard_stale
        )

    logger.info("Serving editor on http://%s:%d", host, port)
    ui.run(host=host, port=port, title="Moodpad", reload=False, show=False)
