"""Namespace builders: textbook (transforming) and pass-through (exercises, exams)"""

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from cdnpub.config import Settings
from cdnpub.core.article import load_article, transform_article
from cdnpub.core.errors import BuildError, ConfigError
from cdnpub.core.models import (
    ChapterIndexEntry,
    ChapterManifest,
    ChapterRef,
    CuratedChapter,
    CuratedIndex,
    CuratedSection,
    RootManifest,
    SectionEntry,
)
from cdnpub.core.publish import INDEX_FILE, VersionTarget
from cdnpub.core.utils.fs import list_dirs, list_json_files, read_json, write_bytes, write_json
from cdnpub.core.utils.hashing import sha256


logger = logging.getLogger(__name__)

TEXTBOOK = "textbook"
PASSTHROUGH_NAMESPACES = ("exercises", "exams")

LEADING_PATH_RE = re.compile(r'^\.?/*')


def load_index(textbook_dir: Path) -> CuratedIndex:
    """Read {textbook}/index.json; ConfigError if missing or without a non-empty chapters array."""
    path = textbook_dir / INDEX_FILE
    if not path.is_file():
        raise ConfigError(f"Missing textbook root index at {path}")
    data = read_json(path, "textbook root index")
    if not isinstance(data, dict) or not isinstance(data.get("chapters"), list) or not data["chapters"]:
        raise ConfigError(f"Textbook root index at {path} has no 'chapters' array")
    try:
        return CuratedIndex.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Malformed textbook root index at {path}: {e}") from e


def scan_sections(textbook_dir: Path, chapter_id: str) -> list[CuratedSection]:
    """Sections of a chapter without an explicit list: its article files, sorted by name."""
    return [
        CuratedSection(id=Path(name).stem, file=f"articles/{chapter_id}/{name}")
        for name in list_json_files(textbook_dir / "articles" / chapter_id)
    ]


def resolve_source(textbook_dir: Path, chapter_id: str, section: CuratedSection) -> Path:
    """Explicit file (leading './' and '/' stripped) or articles/{chapter}/{section}.json."""
    if section.file:
        rel = LEADING_PATH_RE.sub('', section.file, count=1)
    else:
        rel = f"articles/{chapter_id}/{section.section_id or 'section'}.json"
    return textbook_dir / rel


def build_chapter(
    settings: Settings,
    chapter: CuratedChapter,
    textbook_dir: Path,
    version_dir: Path,
    ) -> ChapterManifest:
    """Transform and write every article of one chapter, then its manifest."""
    chapter_id = chapter.chapter_id
    sections = chapter.sections if chapter.sections is not None else scan_sections(textbook_dir, chapter_id)

    entries = []
    for section in sections:
        section_id = section.section_id
        source = resolve_source(textbook_dir, chapter_id, section)
        article = transform_article(
            load_article(source, f"article {section_id}"),
            chapter_id,
            section_id,
            settings.checksum,
        )
        rel = f"{chapter_id}/articles/{section_id}.json"
        write_json(version_dir / rel, article.to_json_data())
        logger.debug("  %s -> %s", source, rel)

        entries.append(SectionEntry(
            id=section_id,
            slug=section.slug or None,
            title=article.title or section.title or section_id,
            file=rel,
            sha256=article.sha256,
        ))

    manifest = ChapterManifest(
        chapter=ChapterRef(id=chapter_id, slug=chapter.chapter_slug, title=chapter.chapter_title),
        sections=entries,
    )
    write_json(version_dir / chapter_id / INDEX_FILE, manifest.to_json_data())
    return manifest


def build_textbook(settings: Settings, target: VersionTarget) -> tuple[RootManifest, list[ChapterManifest]]:
    """Build the textbook namespace into target.version_dir, in curated chapter order.

    Returns the root manifest (not yet written) and the chapter manifests.
    """
    textbook_dir = settings.input_path / TEXTBOOK
    index = load_index(textbook_dir)

    root = RootManifest(version=target.version)
    manifests = []
    for chapter in index.chapters:
        manifest = build_chapter(settings, chapter, textbook_dir, target.version_dir)
        manifests.append(manifest)
        root.chapters.append(ChapterIndexEntry(
            id=manifest.chapter.id,
            title=manifest.chapter.title,
            index=f"{manifest.chapter.id}/{INDEX_FILE}",
        ))
    return root, manifests


def copy_section(source: Path, dest: Path, with_hash: bool) -> str | None:
    """Copy a section file byte-for-byte; return the sha256 of its text when requested."""
    try:
        raw = source.read_bytes()
    except (OSError, ValueError) as e:
        raise BuildError(f"Cannot read section at {source}: {e}") from e
    write_bytes(dest, raw)
    return sha256(raw.decode("utf-8", errors="replace")) if with_hash else None


def build_passthrough(
    settings: Settings,
    namespace: str,
    target: VersionTarget,
    ) -> tuple[RootManifest, list[ChapterManifest]]:
    """Copy a {namespace}/{chapter}/*.json tree through unchanged, with manifests."""
    base_in = settings.input_path / namespace
    root = RootManifest(version=target.version)
    manifests = []
    for chapter_id in list_dirs(base_in):
        chapter_in = base_in / chapter_id
        entries = []
        for name in list_json_files(chapter_in):
            section_id = Path(name).stem
            rel = f"{chapter_id}/{section_id}.json"
            digest = copy_section(chapter_in / name, target.version_dir / rel, settings.checksum)
            entries.append(SectionEntry(id=section_id, file=rel, sha256=digest))

        manifest = ChapterManifest(
            chapter=ChapterRef(id=chapter_id, slug=chapter_id.lower(), title=chapter_id),
            sections=entries,
        )
        write_json(target.version_dir / chapter_id / INDEX_FILE, manifest.to_json_data())
        manifests.append(manifest)
        root.chapters.append(ChapterIndexEntry(id=chapter_id, title=chapter_id, index=f"{chapter_id}/{INDEX_FILE}"))
    return root, manifests
