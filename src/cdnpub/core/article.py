"""Curated article -> published article transformation"""

import math
from pathlib import Path
from typing import Any

from cdnpub.core.blocks import escape_html, render_blocks
from cdnpub.core.headings import extract_headings, strip_tags
from cdnpub.core.models import CuratedArticle, PublishedArticle
from cdnpub.core.utils.fs import read_json
from cdnpub.core.utils.hashing import canonical_json, sha256


WORDS_PER_MINUTE = 180


def estimate_reading_time(html: str) -> int:
    """Minutes to read the tag-stripped text at 180 wpm, rounded half up, at least 1."""
    words = len(strip_tags(html).split())
    return max(1, math.floor(words / WORDS_PER_MINUTE + 0.5))


def render_body(article: CuratedArticle) -> str:
    """Pick the body source by precedence (blocks, body_html, body_mdx, body) and render it."""
    if article.blocks is not None:
        return render_blocks(article.blocks)
    if article.body_html is not None:
        return article.body_html
    if article.body_mdx is not None:
        return f'<pre class="mdx">{escape_html(article.body_mdx)}</pre>'
    if article.body is not None:
        return f"<p>{escape_html(article.body)}</p>"
    return ""


def build_meta(curated: dict[str, Any], body_html: str) -> dict[str, Any]:
    """Curated meta with reading_time_min and keywords filled in where absent."""
    meta = dict(curated)
    if meta.get("reading_time_min") is None:
        meta["reading_time_min"] = estimate_reading_time(body_html)
    if meta.get("keywords") is None:
        meta["keywords"] = []
    return meta


def transform_article(
    article: CuratedArticle | dict,
    chapter_id: str,
    section_id: str,
    with_hash: bool = False,
    ) -> PublishedArticle:
    """Convert a curated article into the published schema.

    With with_hash, sha256 is the digest of the canonical JSON of the article
    as assembled without it.
    """
    if not isinstance(article, CuratedArticle):
        article = CuratedArticle.model_validate(article)

    body_html = render_body(article)
    published = PublishedArticle(
        chapterId=chapter_id,
        sectionId=section_id,
        title=article.title or section_id,
        body_html=body_html,
        headings=extract_headings(body_html),
        meta=build_meta(article.meta, body_html),
    )
    if with_hash:
        published.sha256 = article_checksum(published)
    return published


def article_checksum(published: PublishedArticle) -> str:
    """SHA-256 of the canonical JSON of an article, ignoring any attached checksum."""
    data = published.model_dump(mode="json", exclude={"sha256"})
    return sha256(canonical_json(data))


def load_article(path: Path, label: str) -> CuratedArticle:
    """Read and parse a curated article file; BuildError on unreadable/invalid JSON."""
    return CuratedArticle.model_validate(read_json(path, label))
