"""Entry storage, validation and console routing."""

from .routing import AddFormRoute, DeleteRoute, EditFormRoute, ListRoute, Route, parse_route
from .service import EntryService, sanitize_text_field, validate_entry
from .store import (
    EntryRecord,
    EntryStore,
    InMemoryEntryStore,
    SqlAlchemyEntryStore,
    get_entry_store,
)

__all__ = [
    "AddFormRoute",
    "DeleteRoute",
    "EditFormRoute",
    "EntryRecord",
    "EntryService",
    "EntryStore",
    "InMemoryEntryStore",
    "ListRoute",
    "Route",
    "SqlAlchemyEntryStore",
    "get_entry_store",
    "parse_route",
    "sanitize_text_field",
    "validate_entry",
]
