from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.ids import IdFactory
from ..core.constants import MAX_UPLOAD_BYTES
from ..roster.model import Roster
from .dedup.factory import DedupPolicyFactory
from .model import ImportResult
from .normalizer import normalize_rows
from .reader import read_rows
from .validation import validate_upload

logger = logging.getLogger(__name__)


class ImportService:
    """Use case: spreadsheet upload -> students ready to append to a roster."""

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        ids: Optional[IdFactory] = None,
        policy_factory: Optional[DedupPolicyFactory] = None,
        max_bytes: int = MAX_UPLOAD_BYTES,
        cross_roster: bool = False,
    ):
        self._clock = clock or now_local
        self._ids = ids or IdFactory(self._clock)
        self._factory = policy_factory or DedupPolicyFactory()
        self._max_bytes = int(max_bytes)
        self._cross_roster = bool(cross_roster)

    def validate(self, *, file_name: str, media_type: Optional[str], size: int) -> None:
        validate_upload(file_name, media_type, size, max_bytes=self._max_bytes)

    def import_file(
        self,
        content: bytes,
        *,
        file_name: str,
        media_type: Optional[str] = None,
        roster: Optional[Roster] = None,
        cross_roster: Optional[bool] = None,
    ) -> ImportResult:
        self.validate(file_name=file_name, media_type=media_type, size=len(content))
        rows = read_rows(content, file_name, media_type)
        return self._normalize(rows, file_name=file_name, roster=roster, cross_roster=cross_roster)

    async def import_file_async(
        self,
        content: bytes,
        *,
        file_name: str,
        media_type: Optional[str] = None,
        roster: Optional[Roster] = None,
        cross_roster: Optional[bool] = None,
    ) -> ImportResult:
        """Same as ``import_file`` with the parse running off the event loop."""

        self.validate(file_name=file_name, media_type=media_type, size=len(content))
        rows = await asyncio.to_thread(read_rows, content, file_name, media_type)
        return self._normalize(rows, file_name=file_name, roster=roster, cross_roster=cross_roster)

    def _normalize(self, rows, *, file_name: str, roster: Optional[Roster], cross_roster: Optional[bool]) -> ImportResult:
        strict = self._cross_roster if cross_roster is None else bool(cross_roster)
        policy = self._factory.for_import(roster=roster, cross_roster=strict)
        result = normalize_rows(rows, now=self._clock(), ids=self._ids, dedup_policy=policy)
        logger.info(
            "%s: imported=%d duplicates=%d skipped=%d",
            file_name,
            len(result.students),
            result.duplicates_found,
            result.skipped_rows,
        )
        return result
