"""Notice types and post moods."""
from __future__ import annotations

from ..extensions import host
from ..hooks import action_hook

SLUG = "taxonomies"
NAME = "Post Taxonomies"
DESCRIPTION = "Registers the 'type' taxonomy for notices and the 'mood' taxonomy for posts."


def register_taxonomies() -> None:
    registry = host.taxonomies
    registry.register_taxonomy(
        "type",
        "notice",
        hierarchical=True,
        label="Type",
        query_var=True,
        rewrite=True,
    )
    registry.register_taxonomy(
        "mood",
        "post",
        hierarchical=True,
        label="Mood",
        query_var=True,
        rewrite=True,
        show_ui=True,
        show_in_menu=True,
        show_in_rest=True,
    )


HOOKS = [action_hook("init", register_taxonomies)]
