"""Gradient animated titles and a word count above the content."""
from __future__ import annotations

import html
import itertools
import re

from markupsafe import Markup

from ..assets import get_style_queue
from ..hooks import action_hook, filter_hook

SLUG = "gradient_title"
NAME = "Gradient Animated Titles"
DESCRIPTION = "Adds gradient animation to post titles and a word count to post content."

TITLE_CLASS = "gat-gradient-title"
CONTENT_CLASS = "gat-gradient-content"
STYLE_HANDLE = "gat-gradient"

_TAG_RE = re.compile(r"<[^>]*>")
_TITLE_OPEN = f'<span class="{TITLE_CLASS}">'
_CONTENT_OPEN = f'<p class="{CONTENT_CLASS}">'

GRADIENT_CSS = """
.gat-gradient-title {
    background: linear-gradient(90deg, #ff0080, #7928ca, #2afadf, #ff00cc, #ffff00);
    background-size: 600% 600%;
    -webkit-background-clip: text;
    -webkit-text-fill-color: transparent;
    animation: gatGradient 6s ease infinite;
}

@keyframes gatGradient {
    0% { background-position: 0% 50%; }
    50% { background-position: 100% 50%; }
    100% { background-position: 0% 50%; }
}

.gat-gradient-content {
    padding: 10px;
    border: 1px solid #ccc;
    border-radius: 5px;
    background-color: #f9f9f9;
    font-size: 16px;
    color: #333;
    text-align: center;
    margin-top: 10px;
}
"""


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def utf8_word_count(text: str) -> int:
    """Count maximal runs of Unicode letters; digits and punctuation split runs."""

    return sum(1 for is_letter, _ in itertools.groupby(text, str.isalpha) if is_letter)


def gradient_title(title: str, context=None) -> str:
    """Wrap the main title of the main loop in the gradient span."""

    if context is None or context.is_admin:
        return title
    if not context.in_the_loop or not context.is_main_query:
        return title
    if str(title).startswith(_TITLE_OPEN):
        return title
    return Markup(_TITLE_OPEN + "{}</span>").format(title)


def gradient_content(content: str, context=None) -> Markup:
    content = content if isinstance(content, Markup) else Markup(content)
    if str(content).startswith(_CONTENT_OPEN):
        return content
    words = utf8_word_count(html.unescape(strip_tags(str(content))))
    summary = Markup(_CONTENT_OPEN + "This article contains {} words.  </p><hr>").format(words)
    return summary + content


def enqueue_styles() -> None:
    get_style_queue().add_inline_style(STYLE_HANDLE, GRADIENT_CSS)


HOOKS = [
    filter_hook("the_title", gradient_title),
    filter_hook("the_content", gradient_content),
    action_hook("enqueue_scripts", enqueue_styles),
]
