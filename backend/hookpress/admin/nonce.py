"""One-time anti-forgery tokens kept in the signed session."""
from __future__ import annotations

import hmac
import secrets

from flask import session

_SESSION_KEY = "_nonces"
# Forms open in other tabs keep working until this many newer tokens exist.
MAX_TOKENS_PER_ACTION = 5


def create_nonce(action: str) -> str:
    """Issue a fresh token for ``action``."""

    token = secrets.token_urlsafe(24)
    nonces = dict(session.get(_SESSION_KEY) or {})
    tokens = list(nonces.get(action) or [])
    tokens.append(token)
    nonces[action] = tokens[-MAX_TOKENS_PER_ACTION:]
    session[_SESSION_KEY] = nonces
    return token


def verify_nonce(action: str, value: str | None) -> bool:
    """Check ``value`` against the tokens issued for ``action``.

    A matching token is consumed. A mismatch leaves the issued tokens intact.
    """

    if not value:
        return False
    nonces = dict(session.get(_SESSION_KEY) or {})
    tokens = list(nonces.get(action) or [])
    for token in tokens:
        if hmac.compare_digest(token.encode(), value.encode()):
            tokens.remove(token)
            nonces[action] = tokens
            session[_SESSION_KEY] = nonces
            return True
    return False
