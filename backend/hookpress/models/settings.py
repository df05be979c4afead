"""Host options stored in the database."""

from __future__ import annotations

from ..extensions import db


class AppSetting(db.Model):
    """Key/value row for a single host option."""

    __tablename__ = "app_settings"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.String(255), nullable=False)

    @classmethod
    def get_value(cls, key: str, default: str | None = None) -> str | None:
        setting = db.session.get(cls, key)
        return setting.value if setting is not None else default

    @classmethod
    def set_value(cls, key: str, value: str) -> None:
        """Insert or overwrite ``key``; the caller commits."""

        setting = db.session.get(cls, key)
        if setting is None:
            db.session.add(cls(key=key, value=value))
        else:
            setting.value = value

    def __repr__(self) -> str:
        return f"<AppSetting {self.key}={self.value}>"
