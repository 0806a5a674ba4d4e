"""Data models: content blocks, curated input, published output, manifests"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


# --- content blocks ---

class _Block(BaseModel):
    """Base for typed content blocks. Null fields fall back to their defaults."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class HeadingBlock(_Block):
    type: Literal["heading"] = "heading"
    level: int = 2
    text: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, v: Any) -> int:
        """Absent, zero or unparseable levels become 2; others clamp to 1..6."""
        try:
            level = int(v)
        except (TypeError, ValueError):
            return 2
        if level == 0:
            return 2
        return max(1, min(6, level))


class ParagraphBlock(_Block):
    type: Literal["paragraph"] = "paragraph"
    text: str = ""


class ListBlock(_Block):
    type: Literal["list"] = "list"
    ordered: bool = False
    items: list[Any] = []

    @field_validator("ordered", mode="before")
    @classmethod
    def _truthy(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("items", mode="before")
    @classmethod
    def _items_or_empty(cls, v: Any) -> list:
        return v if isinstance(v, list) else []


class ExampleBlock(_Block):
    type: Literal["example"] = "example"
    text: str = ""


class NoteBlock(_Block):
    type: Literal["note"] = "note"
    text: str = ""


class FormulaBlock(_Block):
    type: Literal["formula"] = "formula"
    latex: str = ""
    tex: str = ""

    @property
    def source(self) -> str:
        return self.latex or self.tex


class CodeBlock(_Block):
    type: Literal["code"] = "code"
    code: str = ""


class StepBlock(_Block):
    type: Literal["step"] = "step"
    title: str = ""
    text: str = ""


class RawBlock(BaseModel):
    """Unrecognized block, kept verbatim so no curated content disappears."""
    model_config = ConfigDict(frozen=True)
    type: Literal["raw"] = "raw"
    data: dict[str, Any]


ContentBlock = Union[
    HeadingBlock, ParagraphBlock, ListBlock, ExampleBlock, NoteBlock,
    FormulaBlock, CodeBlock, StepBlock, RawBlock,
]

BLOCK_TYPES: dict[str, type[_Block]] = {
    "heading":   HeadingBlock,
    "paragraph": ParagraphBlock,
    "list":      ListBlock,
    "example":   ExampleBlock,
    "note":      NoteBlock,
    "formula":   FormulaBlock,
    "code":      CodeBlock,
    "step":      StepBlock,
}


def parse_block(obj: Any) -> Optional[ContentBlock]:
    """Map a raw block to its typed variant; None for non-mapping entries.

    Unknown tags, and known tags whose fields don't fit the variant, become RawBlock.
    """
    if isinstance(obj, (_Block, RawBlock)):
        return obj
    if not isinstance(obj, dict):
        return None
    tag = obj.get("type")
    model = BLOCK_TYPES.get(tag) if isinstance(tag, str) else None
    if model is None:
        return RawBlock(data=obj)
    try:
        return model.model_validate(obj)
    except ValidationError:
        return RawBlock(data=obj)


# --- curated input ---

def _keep_if(data: dict, key: str, kinds: tuple) -> None:
    """Drop data[key] when its JSON shape isn't one of kinds (treated as absent)."""
    if key not in data:
        return
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kinds):
        del data[key]


class CuratedSection(BaseModel):
    """Section entry in a curated chapter (explicit or scanned from disk)."""
    id: Optional[str] = None
    slug: Optional[str] = None
    title: Optional[str] = None
    file: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"id": data}
        if isinstance(data, dict):
            data = dict(data)
            for key in ("id", "slug", "title", "file"):
                _keep_if(data, key, (str, int, float))
        return data

    @property
    def section_id(self) -> str:
        return self.id or self.slug or self.file or self.title or ""


class CuratedChapter(BaseModel):
    id: Optional[str] = None
    slug: Optional[str] = None
    title: Optional[str] = None
    sections: Optional[list[CuratedSection]] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _shape(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("id", "slug", "title"):
                _keep_if(data, key, (str, int, float))
            _keep_if(data, "sections", (list,))
        return data

    @property
    def chapter_id(self) -> str:
        return self.id or self.slug or self.title or "CH"

    @property
    def chapter_slug(self) -> str:
        return self.slug or self.chapter_id.lower()

    @property
    def chapter_title(self) -> str:
        return self.title or f"Kapitel {self.chapter_id}"


class CuratedIndex(BaseModel):
    """Curated textbook root index; requires a non-empty chapters array."""
    chapters: list[CuratedChapter] = Field(..., min_length=1)


class CuratedArticle(BaseModel):
    """Curated article source. Body precedence: blocks > body_html > body_mdx > body."""
    title: Optional[str] = None
    blocks: Optional[list[Any]] = None
    body_html: Optional[str] = None
    body_mdx: Optional[str] = None
    body: Optional[str] = None
    meta: dict[str, Any] = {}

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return {}
        data = dict(data)
        _keep_if(data, "title", (str, int, float))
        _keep_if(data, "blocks", (list,))
        for key in ("body_html", "body_mdx", "body"):
            _keep_if(data, key, (str,))
        _keep_if(data, "meta", (dict,))
        return data


# --- published output ---

class Heading(BaseModel):
    id: str
    text: str
    level: int = Field(..., ge=1, le=6)


class PublishedArticle(BaseModel):
    chapterId: str
    sectionId: str
    title: str
    body_html: str
    headings: list[Heading]
    meta: dict[str, Any]
    sha256: Optional[str] = None

    def to_json_data(self) -> dict[str, Any]:
        """Plain dict in output key order; sha256 omitted when unset."""
        return self.model_dump(mode="json", exclude={"sha256"} if self.sha256 is None else None)


class ChapterRef(BaseModel):
    id: str
    slug: str
    title: str


class SectionEntry(BaseModel):
    """Chapter manifest entry; slug/title/sha256 are omitted when not set."""
    id: str
    slug: Optional[str] = None
    title: Optional[str] = None
    file: str
    sha256: Optional[str] = None


class ChapterManifest(BaseModel):
    chapter: ChapterRef
    sections: list[SectionEntry] = []

    def to_json_data(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ChapterIndexEntry(BaseModel):
    id: str
    title: str
    index: str


class RootManifest(BaseModel):
    version: str
    chapters: list[ChapterIndexEntry] = []


class Locator(BaseModel):
    version: str
    index: str
