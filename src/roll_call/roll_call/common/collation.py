"""Name comparison helpers.

Ordering follows Spanish collation at base strength: case and accents are
ignored, but ``ñ`` is its own letter between ``n`` and ``o``.
"""
from __future__ import annotations

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")

# Placeholder sorting right after "n" and before "o" once accents are stripped.
_ENYE = "n\x7f"


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value)


def normalization_key(given_name: str, family_name: str) -> str:
    """Duplicate-detection key: ``given|family`` lower-cased, whitespace collapsed."""
    return f"{collapse_whitespace(given_name.lower())}|{collapse_whitespace(family_name.lower())}"


def collation_key(value: str) -> str:
    folded = unicodedata.normalize("NFC", value).casefold().replace("ñ", _ENYE)
    decomposed = unicodedata.normalize("NFKD", folded)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def compare(a: str, b: str) -> int:
    ka, kb = collation_key(a), collation_key(b)
    return (ka > kb) - (ka < kb)


def name_sort_key(family_name: str, given_name: str) -> tuple[str, str]:
    return collation_key(family_name), collation_key(given_name)
