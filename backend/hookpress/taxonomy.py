"""Declarative registry of classification hierarchies for content types."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Taxonomy:
    """A named classification scoped to one content type."""

    name: str
    object_type: str
    label: str
    hierarchical: bool = False
    query_var: bool = True
    rewrite: bool = True
    show_ui: bool = True
    show_in_menu: bool = True
    show_in_rest: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TaxonomyRegistry:
    """Keeps registered taxonomies by name."""

    def __init__(self) -> None:
        self._taxonomies: dict[str, Taxonomy] = {}

    def register_taxonomy(self, name: str, object_type: str, **args: Any) -> Taxonomy:
        """Register (or replace) the taxonomy ``name`` for ``object_type``."""

        name = name.strip()
        if not name:
            raise ValueError("taxonomy name is required")
        label = args.pop("label", None) or name.title()
        taxonomy = Taxonomy(name=name, object_type=object_type, label=label, **args)
        self._taxonomies[name] = taxonomy
        return taxonomy

    def get(self, name: str) -> Taxonomy | None:
        return self._taxonomies.get(name)

    def get_taxonomies(
        self, object_type: str | None = None, *, show_in_rest: bool | None = None
    ) -> list[Taxonomy]:
        taxonomies = sorted(self._taxonomies.values(), key=lambda item: item.name)
        if object_type is not None:
            taxonomies = [item for item in taxonomies if item.object_type == object_type]
        if show_in_rest is not None:
            taxonomies = [item for item in taxonomies if item.show_in_rest is show_in_rest]
        return taxonomies
