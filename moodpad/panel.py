"""Result list and loading indicator shown below the editor."""

from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

from .sentiment import ScoreResult

LOADING_MESSAGE = "Analyzing sentiment..."


class ResultPanel:
    """Holds the displayed results and notifies renderers when they change.

    The loading flag counts in-flight analyses, so it stays on until every
    overlapping scoring call has resolved.
    """

    def __init__(self) -> None:
        self._results: List[ScoreResult] = []
        self._in_flight = 0
        self._listeners: List[Callable[[], None]] = []

    @property
    def results(self) -> Tuple[ScoreResult, ...]:
        return tuple(self._results)

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_results(self) -> None:
        if not self._results:
            return
        self._results = []
        self._notify()

    def show_results(self, results: Iterable[ScoreResult]) -> None:
        self._results = list(results)
        self._notify()

    def begin_loading(self) -> None:
        self._in_flight += 1
        self._notify()

    def end_loading(self) -> None:
        self._in_flight = max(0, self._in_flight - 1)
        self._notify()

    def render_lines(self) -> List[str]:
        lines: List[str] = []
        if self.loading:
            lines.append(LOADING_MESSAGE)
        lines.extend(result.format() for result in self._results)
        return lines

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
