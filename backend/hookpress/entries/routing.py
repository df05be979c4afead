"""Maps the console's query string onto an explicit route."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class ListRoute:
    pass


@dataclass(frozen=True)
class AddFormRoute:
    pass


@dataclass(frozen=True)
class EditFormRoute:
    entry_id: int


@dataclass(frozen=True)
class DeleteRoute:
    entry_id: int


Route = ListRoute | AddFormRoute | EditFormRoute | DeleteRoute


def _parse_id(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def parse_route(args: Mapping[str, str]) -> Route:
    """Build the route for ``action``/``id`` query parameters.

    This is the only place that reads raw query parameters. Anything that
    does not name a known action with a usable id renders the list.
    """

    action = (args.get("action") or "").strip().lower()
    if action == "add":
        return AddFormRoute()

    entry_id = _parse_id(args.get("id"))
    if entry_id is None:
        return ListRoute()
    if action == "edit":
        return EditFormRoute(entry_id)
    if action == "delete":
        return DeleteRoute(entry_id)
    return ListRoute()
