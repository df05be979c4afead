"""Create/read/update/delete operations over the entry store."""
from __future__ import annotations

import re
from collections.abc import Callable

from flask import current_app

from ..errors import PermissionDenied, ValidationError
from ..models.entry import FK_MAX_LENGTH, FV_MAX_LENGTH
from .store import EntryRecord, EntryStore

_TAG_RE = re.compile(r"<[^>]*>")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text_field(value: object) -> str:
    """Reduce user input to a single trimmed line of plain text."""

    if value is None:
        return ""
    text = str(value)
    text = _TAG_RE.sub("", text)
    text = _OCTET_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def validate_entry(fk: object, fv: object) -> tuple[str, str]:
    """Sanitize both fields, raising ``ValidationError`` when unusable."""

    clean_fk = sanitize_text_field(fk)
    clean_fv = sanitize_text_field(fv)
    if not clean_fk or not clean_fv:
        raise ValidationError("FK and FV fields cannot be empty.")
    if len(clean_fk) > FK_MAX_LENGTH:
        raise ValidationError(f"FK must be at most {FK_MAX_LENGTH} characters.")
    if len(clean_fv) > FV_MAX_LENGTH:
        raise ValidationError(f"FV must be at most {FV_MAX_LENGTH} characters.")
    return clean_fk, clean_fv


class EntryService:
    """Console logic that only knows the ``EntryStore`` protocol."""

    def __init__(self, store: EntryStore) -> None:
        self.store = store

    def list_entries(self) -> list[EntryRecord]:
        return self.store.list()

    def get_entry(self, entry_id: int) -> EntryRecord | None:
        return self.store.get_by_id(entry_id)

    def create_entry(self, fk: object, fv: object) -> int:
        clean_fk, clean_fv = validate_entry(fk, fv)
        entry_id = self.store.insert(clean_fk, clean_fv)
        current_app.logger.info("Entry %s added", entry_id)
        return entry_id

    def update_entry(self, entry_id: int, fk: object, fv: object) -> int:
        """Overwrite an entry in place; returns the number of rows changed.

        Zero rows means the id does not exist, which is not treated as an error.
        """

        clean_fk, clean_fv = validate_entry(fk, fv)
        affected = self.store.update(entry_id, clean_fk, clean_fv)
        if affected:
            current_app.logger.info("Entry %s updated", entry_id)
        else:
            current_app.logger.warning("Update of entry %s matched no rows", entry_id)
        return affected

    def delete_entry(self, entry_id: int, can_delete: Callable[[], bool]) -> int:
        if not can_delete():
            raise PermissionDenied("You do not have sufficient permissions to delete entries.")
        affected = self.store.delete(entry_id)
        current_app.logger.info("Entry %s deleted (%s rows)", entry_id, affected)
        return affected
