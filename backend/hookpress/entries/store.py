"""Storage port for entries and its implementations."""
from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Protocol

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from ..extensions import db
from ..models.entry import Entry


@dataclass(frozen=True)
class EntryRecord:
    """Detached snapshot of one entry row."""

    id: int
    fk: str
    fv: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "fk": self.fk, "fv": self.fv}


class EntryStore(Protocol):
    """Operations the console needs from whatever holds the entry table."""

    def list(self) -> list[EntryRecord]:
        ...

    def get_by_id(self, entry_id: int) -> EntryRecord | None:
        ...

    def insert(self, fk: str, fv: str) -> int:
        ...

    def update(self, entry_id: int, fk: str, fv: str) -> int:
        ...

    def delete(self, entry_id: int) -> int:
        ...


def _to_record(entry: Entry) -> EntryRecord:
    return EntryRecord(id=entry.id, fk=entry.fk, fv=entry.fv)


class SqlAlchemyEntryStore:
    """Entry store backed by the application's Flask-SQLAlchemy session."""

    def list(self) -> list[EntryRecord]:
        entries = Entry.query.order_by(Entry.id.desc()).all()
        return [_to_record(entry) for entry in entries]

    def get_by_id(self, entry_id: int) -> EntryRecord | None:
        entry = db.session.get(Entry, entry_id)
        return _to_record(entry) if entry is not None else None

    def insert(self, fk: str, fv: str) -> int:
        entry = Entry(fk=fk, fv=fv)
        try:
            db.session.add(entry)
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("Error adding new entry.", exc)
        return entry.id

    def update(self, entry_id: int, fk: str, fv: str) -> int:
        try:
            affected = Entry.query.filter_by(id=entry_id).update({"fk": fk, "fv": fv})
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("Error updating entry.", exc)
        return affected

    def delete(self, entry_id: int) -> int:
        try:
            affected = Entry.query.filter_by(id=entry_id).delete()
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail("Error deleting entry.", exc)
        return affected

    @staticmethod
    def _fail(message: str, exc: SQLAlchemyError) -> None:
        db.session.rollback()
        current_app.logger.warning("%s %s", message, exc)
        raise StorageError(message) from exc


class InMemoryEntryStore:
    """Dictionary-backed store with the same semantics as the database one."""

    def __init__(self) -> None:
        self._rows: dict[int, EntryRecord] = {}
        self._ids = itertools.count(1)

    def list(self) -> list[EntryRecord]:
        return [self._rows[entry_id] for entry_id in sorted(self._rows, reverse=True)]

    def get_by_id(self, entry_id: int) -> EntryRecord | None:
        return self._rows.get(entry_id)

    def insert(self, fk: str, fv: str) -> int:
        entry_id = next(self._ids)
        self._rows[entry_id] = EntryRecord(id=entry_id, fk=fk, fv=fv)
        return entry_id

    def update(self, entry_id: int, fk: str, fv: str) -> int:
        if entry_id not in self._rows:
            return 0
        self._rows[entry_id] = EntryRecord(id=entry_id, fk=fk, fv=fv)
        return 1

    def delete(self, entry_id: int) -> int:
        return 1 if self._rows.pop(entry_id, None) is not None else 0


def get_entry_store() -> EntryStore:
    """Return the configured store, defaulting to the database one."""

    store = current_app.config.get("ENTRY_STORE")
    return store if store is not None else SqlAlchemyEntryStore()
