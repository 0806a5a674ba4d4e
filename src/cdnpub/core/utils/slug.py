"""Slug generation for heading anchors"""

import unicodedata
from itertools import groupby


MAX_SLUG_LENGTH = 60


def _is_word_char(ch: str) -> bool:
    """True for Unicode letters and numbers (categories L* and N*)."""
    return unicodedata.category(ch)[0] in 'LN'


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Convert text to a lowercase, hyphen-separated slug of at most max_length chars.

    Text is NFKD-decomposed, so combining accents split words ("café" -> "cafe").
    """
    text = unicodedata.normalize('NFKD', str(text).lower())
    parts = [
        ''.join(run) if is_word else '-'
        for is_word, run in groupby(text, key=_is_word_char)
    ]
    return ''.join(parts).strip('-')[:max_length].strip('-')
