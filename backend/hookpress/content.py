"""Runs post titles and bodies through the registered content filters."""
from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup, escape

from .extensions import host


@dataclass(frozen=True)
class RenderContext:
    """Where in the page a title or body is being rendered."""

    is_admin: bool = False
    in_the_loop: bool = True
    is_main_query: bool = True

    @classmethod
    def from_mapping(cls, data: dict[str, object] | None) -> "RenderContext":
        data = data or {}
        return cls(
            is_admin=bool(data.get("is_admin", False)),
            in_the_loop=bool(data.get("in_the_loop", True)),
            is_main_query=bool(data.get("is_main_query", True)),
        )


@dataclass(frozen=True)
class RenderedPost:
    title: Markup
    content: Markup


def render_post(title: str, content: str, context: RenderContext | None = None) -> RenderedPost:
    """Apply ``the_title`` and ``the_content`` filters.

    Plain-string titles are treated as text and escaped; plain-string content
    is treated as stored HTML. Pass ``Markup`` to opt out of either rule.
    """

    context = context or RenderContext()
    title_html = title if isinstance(title, Markup) else escape(title)
    content_html = content if isinstance(content, Markup) else Markup(content)

    hooks = host.hooks
    rendered_title = hooks.apply_filters("the_title", title_html, context)
    rendered_content = hooks.apply_filters("the_content", content_html, context)
    return RenderedPost(title=Markup(rendered_title), content=Markup(rendered_content))
