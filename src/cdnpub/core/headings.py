"""Heading outline extraction from rendered HTML"""

import re

from cdnpub.core.models import Heading
from cdnpub.core.utils.slug import slugify


HEADING_RE = re.compile(r'<(h[1-6])[^>]*>(.*?)</\1>', re.IGNORECASE)
TAG_RE = re.compile(r'<[^>]*>')


def strip_tags(html: str) -> str:
    """Replace every tag with a space; entities are left untouched."""
    return TAG_RE.sub(' ', str(html))


def extract_headings(html: str) -> list[Heading]:
    """Return h1-h6 headings in document order with slug ids.

    An empty slug becomes h-<n>, n being the heading's 1-based position.
    Identical non-empty slugs are not deduplicated.
    """
    headings: list[Heading] = []
    for m in HEADING_RE.finditer(html):
        text = strip_tags(m.group(2)).strip()
        headings.append(Heading(
            id=slugify(text) or f"h-{len(headings) + 1}",
            text=text,
            level=int(m.group(1)[1:]),
        ))
    return headings
