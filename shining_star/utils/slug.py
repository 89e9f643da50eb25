"""
Slug derivation and id assignment for catalog records.

Ids are derived from the English display name so that URLs stay readable.
"""

import re
import time
import unicodedata
from typing import Iterable, Optional

MAX_SLUG_LENGTH = 80

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def slugify(text: Optional[str], max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Turn a display name into a URL-safe slug.

    Example:
        slugify("Deep Clean & Shine!") -> "deep-clean-shine"
    """
    if not text:
        return ''

    # Strip diacritics: decompose, then drop combining marks
    normalized = unicodedata.normalize('NFKD', str(text))
    ascii_text = ''.join(ch for ch in normalized if not unicodedata.combining(ch))

    slug = _NON_ALNUM.sub('-', ascii_text.lower()).strip('-')
    if len(slug) > max_length:
        slug = slug[:max_length].rstrip('-')
    return slug


def _dedupe(base: str, taken: set) -> str:
    if base not in taken:
        return base
    suffix = 1
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def assign_id(name: Optional[str], existing_ids: Iterable[str]) -> str:
    """
    Derive a unique id for a new record.

    Collisions get "-1", "-2", ... appended. A name that slugifies to
    nothing falls back to a millisecond timestamp.
    """
    taken = set(existing_ids)
    base = slugify(name)
    if not base:
        base = str(int(time.time() * 1000))
    return _dedupe(base, taken)
