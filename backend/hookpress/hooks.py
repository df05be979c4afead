"""Named lifecycle events and the dispatcher plugins register against."""
from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

DEFAULT_PRIORITY = 10

FILTER = "filter"
ACTION = "action"


@dataclass(frozen=True)
class Hook:
    """A single (event, handler) pair exported by a plugin."""

    event: str
    callback: Callable[..., Any]
    priority: int = DEFAULT_PRIORITY
    kind: str = FILTER


def filter_hook(event: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> Hook:
    return Hook(event=event, callback=callback, priority=priority, kind=FILTER)


def action_hook(event: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> Hook:
    return Hook(event=event, callback=callback, priority=priority, kind=ACTION)


class HookRegistry:
    """Keeps callbacks per event and runs them ordered by priority.

    Callbacks with the same priority run in registration order. Filters and
    actions share one table; the difference is only whether the return value
    is threaded through to the next callback.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, list[tuple[int, int, Callable[..., Any]]]] = {}
        self._sequence = itertools.count()

    def add_filter(
        self, event: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        entries = self._callbacks.setdefault(event, [])
        entries.append((priority, next(self._sequence), callback))
        entries.sort(key=lambda entry: (entry[0], entry[1]))

    def add_action(
        self, event: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        self.add_filter(event, callback, priority)

    def remove_hook(self, event: str, callback: Callable[..., Any]) -> bool:
        """Remove every registration of ``callback`` for ``event``."""

        entries = self._callbacks.get(event)
        if not entries:
            return False
        remaining = [entry for entry in entries if entry[2] is not callback]
        removed = len(remaining) != len(entries)
        if remaining:
            self._callbacks[event] = remaining
        else:
            del self._callbacks[event]
        return removed

    def has_hook(self, event: str) -> bool:
        return bool(self._callbacks.get(event))

    def callbacks(self, event: str) -> list[Callable[..., Any]]:
        return [entry[2] for entry in self._callbacks.get(event, [])]

    def apply_filters(self, event: str, value: Any, *args: Any) -> Any:
        """Thread ``value`` through every filter registered for ``event``."""

        for callback in self.callbacks(event):
            value = callback(value, *args)
        return value

    def do_action(self, event: str, *args: Any) -> None:
        """Run every callback registered for ``event`` for its side effects."""

        for callback in self.callbacks(event):
            callback(*args)


def register_hooks(registry: HookRegistry, hooks: Iterable[Hook]) -> int:
    """Wire declarative hook pairs into ``registry`` and return how many."""

    count = 0
    for hook in hooks:
        if hook.kind == ACTION:
            registry.add_action(hook.event, hook.callback, hook.priority)
        elif hook.kind == FILTER:
            registry.add_filter(hook.event, hook.callback, hook.priority)
        else:
            raise ValueError(f"Unknown hook kind: {hook.kind}")
        count += 1
    return count
