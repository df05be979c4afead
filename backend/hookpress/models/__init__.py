"""Database models for the hookpress backend."""

from .auth import ApiToken
from .entry import Entry
from .settings import AppSetting

__all__ = ["ApiToken", "Entry", "AppSetting"]
