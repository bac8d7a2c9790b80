from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import NotificationLevel


@dataclass(frozen=True)
class Notification:
    notification_id: str
    level: NotificationLevel
    message: str
    timestamp: datetime
