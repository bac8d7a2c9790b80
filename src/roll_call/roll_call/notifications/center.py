from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import now_local
from ..core.enums import NotificationLevel
from .model import Notification

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class NotificationCenter:
    """In-memory notification queue the UI polls and dismisses from."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or now_local
        self._items: List[Notification] = []
        self._seq = itertools.count(1)

    def notify(self, level: NotificationLevel, message: str) -> None:
        item = Notification(
            notification_id=str(next(self._seq)),
            level=NotificationLevel(level),
            message=message,
            timestamp=self._clock(),
        )
        self._items.append(item)
        logger.log(_LOG_LEVELS[item.level], "[%s] %s", item.level.value, message)

    def pending(self) -> List[Notification]:
        return list(self._items)

    def dismiss(self, notification_id: str) -> bool:
        before = len(self._items)
        self._items = [n for n in self._items if n.notification_id != notification_id]
        return len(self._items) != before

    def clear(self) -> None:
        self._items.clear()
