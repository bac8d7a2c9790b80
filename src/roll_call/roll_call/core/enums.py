from __future__ import annotations

from enum import Enum


class SaveState(str, Enum):
    """Whether the active roster has changes not yet persisted."""

    CLEAN = "CLEAN"
    DIRTY = "DIRTY"


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class SortField(str, Enum):
    """Column a student listing can be ordered by."""

    FAMILY_NAME = "family_name"
    GIVEN_NAME = "given_name"
