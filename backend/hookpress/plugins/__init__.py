"""Plugins shipped with the host and the helpers that wire them in."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from flask import Flask

from ..hooks import Hook, HookRegistry, register_hooks
from . import content_ads, entries_crud, gradient_title, taxonomies


@dataclass(frozen=True)
class BuiltinPlugin:
    """Metadata and hook list of a built-in plugin."""

    slug: str
    name: str
    description: str
    hooks: tuple[Hook, ...]

    @property
    def activation_event(self) -> str:
        return f"activate_{self.slug}"


_BUILTINS: list[BuiltinPlugin] = [
    BuiltinPlugin(
        slug=module.SLUG,
        name=module.NAME,
        description=module.DESCRIPTION,
        hooks=tuple(module.HOOKS),
    )
    for module in (content_ads, gradient_title, entries_crud, taxonomies)
]


def get_builtin_plugins() -> list[BuiltinPlugin]:
    """Return a copy of the available built-in plugins."""

    return list(_BUILTINS)


def iter_builtin_plugins() -> Iterator[BuiltinPlugin]:
    """Yield the built-in plugins in load order."""

    yield from _BUILTINS


def find_plugin(slug: str) -> BuiltinPlugin | None:
    for plugin in iter_builtin_plugins():
        if plugin.slug == slug:
            return plugin
    return None


def parse_plugin_slugs(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    slugs: list[str] = []
    for item in items:
        slug = item.strip()
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


def load_plugins(app: Flask, registry: HookRegistry, slugs: Iterable[str]) -> list[BuiltinPlugin]:
    """Register the hooks of every known plugin in ``slugs``."""

    loaded: list[BuiltinPlugin] = []
    for slug in slugs:
        plugin = find_plugin(slug)
        if plugin is None:
            app.logger.warning("Unknown plugin %r in ENABLED_PLUGINS, skipping", slug)
            continue
        count = register_hooks(registry, plugin.hooks)
        app.logger.debug("Plugin %s registered %s hooks", plugin.slug, count)
        loaded.append(plugin)
    return loaded


def activate_plugins(app: Flask, registry: HookRegistry, plugins: Iterable[BuiltinPlugin]) -> None:
    """Fire the install-time activation event of each plugin."""

    for plugin in plugins:
        registry.do_action(plugin.activation_event)
        app.logger.info("Activated plugin %s", plugin.slug)
