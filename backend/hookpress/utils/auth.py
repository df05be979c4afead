"""Capability checks backed by API bearer tokens."""

from __future__ import annotations

import functools
import hashlib
import hmac
import secrets
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar, cast

from flask import g, jsonify, request

from ..extensions import db
from ..models.auth import ApiToken
from ..models.settings import AppSetting

TCallable = TypeVar("TCallable", bound=Callable[..., Any])

_API_PROTECTION_SETTING_KEY = "api_auth_protection"
_MISSING = object()


def _normalize_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(value, (int, float)):
        return value != 0
    return False


def normalize_token_protection_value(value: object) -> bool:
    """Normalize arbitrary payload to a boolean flag."""

    return _normalize_bool(value)


def is_token_protection_enabled() -> bool:
    """Return whether capability checks are currently enforced."""

    cached = getattr(g, "_api_protection_enabled", None)
    if isinstance(cached, bool):
        return cached

    enabled = _normalize_bool(AppSetting.get_value(_API_PROTECTION_SETTING_KEY, "false"))
    g._api_protection_enabled = enabled
    return enabled


def set_token_protection_enabled(enabled: bool) -> None:
    """Persist whether capability checks should be enforced."""

    AppSetting.set_value(_API_PROTECTION_SETTING_KEY, "true" if enabled else "false")
    db.session.commit()
    g._api_protection_enabled = enabled


def hash_token(token: str) -> str:
    """Return a SHA-256 hash for the given token."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def _extract_bearer_token() -> str | None:
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value:
        return None
    return value.strip()


def _lookup_request_token() -> tuple[ApiToken | None, str | None]:
    """Resolve the bearer token of the current request.

    Returns the active token, or ``None`` with the reason it was rejected.
    """

    token_value = _extract_bearer_token()
    if not token_value:
        return None, "missing bearer token"

    token_hash = hash_token(token_value)
    api_token = ApiToken.query.filter_by(token_hash=token_hash).first()
    if api_token is None or not hmac.compare_digest(token_hash, api_token.token_hash):
        return None, "invalid token"
    if not api_token.is_active():
        return None, "token revoked"
    return api_token, None


def current_token() -> tuple[ApiToken | None, str | None]:
    cached = getattr(g, "_request_token", _MISSING)
    if cached is _MISSING:
        cached = _lookup_request_token()
        g._request_token = cached
        if cached[0] is not None:
            g.api_token = cached[0]
    return cached


def current_user_can(capability: str) -> bool:
    """Return whether the caller holds ``capability``.

    Every caller is trusted while token protection is switched off.
    """

    if not is_token_protection_enabled():
        return True
    api_token, _ = current_token()
    return api_token is not None and api_token.can(capability)


def _unauthorized(message: str):
    response = jsonify({"error": message})
    response.status_code = HTTPStatus.UNAUTHORIZED
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


def _forbidden(message: str):
    return jsonify({"error": message}), HTTPStatus.FORBIDDEN


def require_capability(capability: str = "read") -> Callable[[TCallable], TCallable]:
    """Decorator enforcing bearer-token authentication for JSON endpoints."""

    def decorator(func: TCallable) -> TCallable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not is_token_protection_enabled():
                return func(*args, **kwargs)

            api_token, reason = current_token()
            if api_token is None:
                return _unauthorized(reason or "invalid token")

            if not api_token.can(capability):
                return _forbidden("insufficient capability")

            return func(*args, **kwargs)

        return cast(TCallable, wrapper)

    return decorator
