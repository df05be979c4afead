"""Entry model definition."""

from __future__ import annotations

from ..extensions import db

FK_MAX_LENGTH = 64
FV_MAX_LENGTH = 512


class Entry(db.Model):
    """A single key/value row managed through the admin console."""

    __tablename__ = "test_entries"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    fk = db.Column(db.String(FK_MAX_LENGTH), nullable=False)
    fv = db.Column(db.String(FV_MAX_LENGTH), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - repr not critical for tests
        return f"<Entry {self.id} {self.fk!r}>"
