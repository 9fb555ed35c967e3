"""Slug generation for post identifiers"""

import re
import unicodedata


_NON_SLUG_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """Fold to ASCII, lowercase, and collapse every other run of characters to one hyphen."""
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    return _NON_SLUG_RE.sub('-', text.lower()).strip('-')
