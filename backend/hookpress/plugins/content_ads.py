"""Random content ads."""
from __future__ import annotations

import pathlib
import random
from urllib.parse import quote

from flask import current_app
from markupsafe import Markup

from ..hooks import filter_hook

SLUG = "content_ads"
NAME = "Random Content Ads"
DESCRIPTION = "Randomly displays an ad image after the post content."

AD_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})

_AD_TEMPLATE = Markup(
    '<div class="ads"><img style="display: block; margin: 0 auto;" width="100%" '
    'height="auto" src="{}" alt="Advertisement" /></div>'
)


def find_ad_images(directory: str | pathlib.Path) -> list[str]:
    """Return the names of ad images in ``directory``, sorted."""

    path = pathlib.Path(directory)
    if not path.is_dir():
        return []
    return sorted(
        item.name
        for item in path.iterdir()
        if item.is_file() and item.suffix.lower() in AD_EXTENSIONS
    )


def ad_markup(url: str) -> Markup:
    return _AD_TEMPLATE.format(url)


def append_random_ad(
    content: str,
    directory: str | pathlib.Path,
    url_path: str,
    rng: random.Random | None = None,
) -> Markup:
    """Append one uniformly chosen ad image to ``content``.

    The directory is read on every call. Without any image the content is
    returned unchanged.
    """

    content = content if isinstance(content, Markup) else Markup(content)
    images = find_ad_images(directory)
    if not images:
        current_app.logger.warning("Content Ads: No ad images found in %s", directory)
        return content

    chooser = rng or random
    image = chooser.choice(images)
    url = f"{url_path.rstrip('/')}/{quote(image)}"
    return content + ad_markup(url)


def display_ads(content: str, context=None) -> Markup:
    return append_random_ad(
        content,
        current_app.config["ADS_DIR"],
        current_app.config["ADS_URL_PATH"],
    )


HOOKS = [filter_hook("the_content", display_ads)]
