"""Registry of admin settings pages."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AdminPage:
    """A settings page reachable at ``/admin/options?page=<slug>``."""

    page_title: str
    menu_title: str
    capability: str
    slug: str
    callback: Callable[[], Any]

    @property
    def hook_suffix(self) -> str:
        return f"settings_page_{self.slug}"


class AdminMenu:
    def __init__(self) -> None:
        self._pages: dict[str, AdminPage] = {}

    def add_options_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        slug: str,
        callback: Callable[[], Any],
    ) -> AdminPage:
        if slug in self._pages:
            raise ValueError(f"admin page {slug!r} is already registered")
        page = AdminPage(page_title, menu_title, capability, slug, callback)
        self._pages[slug] = page
        return page

    def get(self, slug: str) -> AdminPage | None:
        return self._pages.get(slug)

    def pages(self) -> list[AdminPage]:
        return sorted(self._pages.values(), key=lambda page: page.menu_title.lower())
