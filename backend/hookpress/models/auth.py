"""Authentication related database models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db

ROLE_CAPABILITIES: dict[str, frozenset[str]] = {
    "readonly": frozenset({"read"}),
    "admin": frozenset({"read", "manage_options"}),
}


class ApiToken(db.Model):
    """Bearer token that grants the capabilities of its role."""

    __tablename__ = "api_tokens"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    token_hash = db.Column(db.String(64), unique=True, nullable=False)
    role = db.Column(db.String(20), nullable=False, default="readonly")
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    revoked_at = db.Column(db.DateTime, nullable=True)

    def is_active(self) -> bool:
        return self.revoked_at is None

    def can(self, capability: str) -> bool:
        """Return whether the token's role grants ``capability``."""

        return capability in ROLE_CAPABILITIES.get(self.role, frozenset())
