"""Extensions used by the Flask application."""
from __future__ import annotations

from dataclasses import dataclass, field

from flask import Flask, current_app, g
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy

from .admin.menu import AdminMenu
from .hooks import HookRegistry
from .taxonomy import TaxonomyRegistry


def _limiter_key_func() -> str:
    token = getattr(g, "api_token", None)
    if token is not None:
        return f"token:{token.id}"
    return get_remote_address()


@dataclass
class HostState:
    """Services the host offers to plugins for one application instance."""

    hooks: HookRegistry = field(default_factory=HookRegistry)
    menu: AdminMenu = field(default_factory=AdminMenu)
    taxonomies: TaxonomyRegistry = field(default_factory=TaxonomyRegistry)
    active_plugins: list[str] = field(default_factory=list)


class Host:
    """Flask extension holding the hook dispatcher and host registries."""

    extension_name = "hookpress"

    def init_app(self, app: Flask) -> HostState:
        state = HostState()
        app.extensions[self.extension_name] = state
        return state

    def state(self, app: Flask | None = None) -> HostState:
        app = app or current_app
        return app.extensions[self.extension_name]

    @property
    def hooks(self) -> HookRegistry:
        return self.state().hooks

    @property
    def menu(self) -> AdminMenu:
        return self.state().menu

    @property
    def taxonomies(self) -> TaxonomyRegistry:
        return self.state().taxonomies


db = SQLAlchemy()
cors = CORS()
limiter = Limiter(key_func=_limiter_key_func, default_limits=[])
host = Host()

__all__ = ["db", "cors", "limiter", "host"]
