from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..core.constants import IMPORT_ID_PREFIX, MANUAL_ID_PREFIX
from .datetime_utils import now_local, to_millis


class IdFactory:
    """Timestamp based ids.

    Each namespace hands out strictly increasing millisecond stamps, so two
    ids minted in the same millisecond still differ.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or now_local
        self._last: dict[str, int] = {}

    def _stamp(self, namespace: str) -> int:
        stamp = to_millis(self._clock())
        last = self._last.get(namespace)
        if last is not None and stamp <= last:
            stamp = last + 1
        self._last[namespace] = stamp
        return stamp

    def roster_id(self) -> str:
        return str(self._stamp("roster"))

    def manual_student_id(self) -> str:
        return f"{MANUAL_ID_PREFIX}_{self._stamp(MANUAL_ID_PREFIX)}"

    def import_batch_ids(self, count: int) -> list[str]:
        stamp = self._stamp(IMPORT_ID_PREFIX)
        return [f"{IMPORT_ID_PREFIX}_{stamp}_{index}" for index in range(count)]
