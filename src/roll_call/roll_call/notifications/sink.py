from __future__ import annotations

from typing import Protocol

from ..core.enums import NotificationLevel


class NotificationSink(Protocol):
    def notify(self, level: NotificationLevel, message: str) -> None:
        raise NotImplementedError
