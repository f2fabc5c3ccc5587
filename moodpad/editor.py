"""Editing surfaces the watcher can observe."""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import unescape
from typing import Callable, Dict, List, Protocol

import bleach

TEXT_CHANGE = "text-change"

_BLOCK_BREAK = re.compile(
    r"<br\s*/?>|</(?:p|div|h[1-6]|li|blockquote|pre)\s*>", re.IGNORECASE
)


@dataclass(frozen=True)
class EditorOptions:
    theme: str = "snow"
    placeholder: str = "Type here..."


@dataclass(frozen=True)
class TextChange:
    old_text: str
    new_text: str
    source: str = "user"


class Editor(Protocol):
    """Interface for editors that report content changes."""

    def on(self, event: str, callback: Callable[..., None]) -> None:
        ...

    def off(self, event: str, callback: Callable[..., None]) -> None:
        ...

    def get_text(self) -> str:
        ...


def html_to_text(html: str) -> str:
    """Flatten rich editor HTML to plain text, breaking lines at blocks."""

    if not html:
        return ""
    marked = _BLOCK_BREAK.sub("\n", html)
    return unescape(bleach.clean(marked, tags=set(), strip=True))


class TextDocument:
    """In-memory document that notifies listeners on every content change."""

    def __init__(self, text: str = "", *, options: EditorOptions | None = None) -> None:
        self.options = options or EditorOptions()
        self._text = text
        self._listeners: Dict[str, List[Callable[..., None]]] = {TEXT_CHANGE: []}

    def on(self, event: str, callback: Callable[..., None]) -> None:
        self._listeners_for(event).append(callback)

    def off(self, event: str, callback: Callable[..., None]) -> None:
        listeners = self._listeners_for(event)
        if callback in listeners:
            listeners.remove(callback)

    def get_text(self) -> str:
        return self._text

    def get_length(self) -> int:
        return len(self._text)

    def set_text(self, text: str, *, source: str = "user") -> None:
        self._apply(text, source)

    def set_html(self, html: str, *, source: str = "user") -> None:
        self._apply(html_to_text(html), source)

    def insert_text(self, index: int, text: str, *, source: str = "user") -> None:
        index = max(0, min(index, len(self._text)))
        self._apply(self._text[:index] + text + self._text[index:], source)

    def delete_text(self, index: int, length: int, *, source: str = "user") -> None:
        index = max(0, min(index, len(self._text)))
        end = max(index, min(index + length, len(self._text)))
        self._apply(self._text[:index] + self._text[end:], source)

    def _listeners_for(self, event: str) -> List[Callable[..., None]]:
        try:
            return self._listeners[event]
        except KeyError as exc:
            raise ValueError(f"Unsupported editor event: {event}") from exc

    def _apply(self, text: str, source: str) -> None:
        if text == self._text:
            return
        change = TextChange(old_text=self._text, new_text=text, source=source)
        self._text = text
        for callback in list(self._listeners[TEXT_CHANGE]):
            callback(change)
