"""Per-request queue of stylesheets and inline styles."""
from __future__ import annotations

from dataclasses import dataclass, field

from flask import g
from markupsafe import Markup, escape


@dataclass
class Style:
    handle: str
    src: str | None = None
    version: str | None = None
    inline: list[str] = field(default_factory=list)


class StyleQueue:
    """Collects styles enqueued by plugins while a page is being built."""

    def __init__(self) -> None:
        self._styles: dict[str, Style] = {}

    def enqueue_style(self, handle: str, src: str | None = None, version: str | None = None) -> None:
        style = self._styles.get(handle)
        if style is None:
            self._styles[handle] = Style(handle=handle, src=src, version=version)
        elif src is not None:
            style.src = src
            style.version = version

    def add_inline_style(self, handle: str, css: str) -> None:
        """Attach inline CSS to ``handle``, enqueueing the handle if needed."""

        self.enqueue_style(handle)
        self._styles[handle].inline.append(css)

    def render(self) -> Markup:
        parts: list[str] = []
        for style in self._styles.values():
            if style.src:
                href = style.src
                if style.version:
                    href = f"{href}?ver={style.version}"
                parts.append(
                    f'<link rel="stylesheet" id="{escape(style.handle)}-css" href="{escape(href)}">'
                )
            if style.inline:
                css = "\n".join(style.inline)
                parts.append(f'<style id="{escape(style.handle)}-inline-css">{css}</style>')
        return Markup("\n".join(parts))


def get_style_queue() -> StyleQueue:
    """Return the style queue bound to the current request."""

    queue = getattr(g, "_style_queue", None)
    if queue is None:
        queue = StyleQueue()
        g._style_queue = queue
    return queue
