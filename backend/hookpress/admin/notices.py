"""Notices shown at the top of an admin page."""
from __future__ import annotations

from dataclasses import dataclass

from flask import g

NOTICE_LEVELS = {"success", "error", "warning", "info"}


@dataclass(frozen=True)
class AdminNotice:
    message: str
    level: str = "success"
    dismissible: bool = True


def add_admin_notice(message: str, level: str = "success", dismissible: bool = True) -> None:
    if level not in NOTICE_LEVELS:
        raise ValueError(f"Unknown notice level: {level}")
    notices = g.setdefault("_admin_notices", [])
    notices.append(AdminNotice(message=message, level=level, dismissible=dismissible))


def get_admin_notices() -> list[AdminNotice]:
    return list(g.get("_admin_notices", []))
