"""Exceptions that halt a request and the handlers that render them."""
from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, render_template, request


class HookpressError(Exception):
    """Base class for errors raised by the host and its plugins."""


class TerminalError(HookpressError):
    """Stops the current request and shows ``message`` to the user."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = HTTPStatus(status)


class ValidationError(TerminalError):
    status = HTTPStatus.BAD_REQUEST


class StorageError(TerminalError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class PermissionDenied(TerminalError):
    status = HTTPStatus.FORBIDDEN


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TerminalError)
    def handle_terminal_error(exc: TerminalError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            app.logger.error("Request halted: %s", exc.message)
        else:
            app.logger.info("Request halted (%s): %s", int(exc.status), exc.message)

        if _wants_json():
            return jsonify({"error": exc.message}), exc.status
        return render_template("die.html", message=exc.message), exc.status
