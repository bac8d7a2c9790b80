from __future__ import annotations

from typing import Optional

from ..core.constants import ACCEPTED_EXTENSIONS, ACCEPTED_MEDIA_TYPES, MAX_UPLOAD_BYTES
from ..core.exceptions import UnsupportedFileError


def validate_upload(
    file_name: str,
    media_type: Optional[str],
    size: int,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    """Reject files that are not spreadsheets or exceed the size ceiling.

    Either the declared media type or the file extension is enough to accept
    the format. Nothing is read here.
    """

    known_type = (media_type or "").split(";")[0].strip().lower() in ACCEPTED_MEDIA_TYPES
    known_ext = (file_name or "").lower().endswith(ACCEPTED_EXTENSIONS)
    if not known_type and not known_ext:
        raise UnsupportedFileError("Invalid file format. Only .xlsx, .xls or .csv files are allowed")

    if size > max_bytes:
        raise UnsupportedFileError(f"The file is too large. Maximum {max_bytes // (1024 * 1024)}MB allowed")
