"""Block-to-HTML rendering for curated content blocks"""

import html
from typing import Any, Iterable

from cdnpub.core.models import (
    CodeBlock,
    ContentBlock,
    ExampleBlock,
    FormulaBlock,
    HeadingBlock,
    ListBlock,
    NoteBlock,
    ParagraphBlock,
    RawBlock,
    StepBlock,
    parse_block,
)
from cdnpub.core.utils.hashing import canonical_json


def escape_html(text: Any) -> str:
    """Escape &, < and > only. Safe for element content, not for attribute values."""
    return html.escape(str(text), quote=False)


def _item_text(item: Any) -> str:
    return "" if item is None else escape_html(item)


def render_block(block: ContentBlock) -> str:
    """Render one typed block to a single HTML element."""
    if isinstance(block, HeadingBlock):
        return f"<h{block.level}>{escape_html(block.text)}</h{block.level}>"
    if isinstance(block, ParagraphBlock):
        return f"<p>{escape_html(block.text)}</p>"
    if isinstance(block, ListBlock):
        tag = "ol" if block.ordered else "ul"
        items = "".join(f"<li>{_item_text(it)}</li>" for it in block.items)
        return f"<{tag}>{items}</{tag}>"
    if isinstance(block, ExampleBlock):
        return f'<div class="example"><strong>Beispiel:</strong> {escape_html(block.text)}</div>'
    if isinstance(block, NoteBlock):
        return f'<div class="note">{escape_html(block.text)}</div>'
    if isinstance(block, FormulaBlock):
        return f'<pre class="formula"><code>{escape_html(block.source)}</code></pre>'
    if isinstance(block, CodeBlock):
        return f"<pre><code>{escape_html(block.code)}</code></pre>"
    if isinstance(block, StepBlock):
        title = f"<strong>{escape_html(block.title)}.</strong> " if block.title else ""
        return f"<p>{title}{escape_html(block.text)}</p>"
    if isinstance(block, RawBlock):
        return f'<pre class="raw">{escape_html(canonical_json(block.data))}</pre>'
    raise TypeError(f"Unsupported block: {type(block).__name__}")


def render_blocks(blocks: Iterable[Any]) -> str:
    """Render blocks in order, one element per line. Non-mapping entries are skipped."""
    parts = []
    for obj in blocks:
        block = parse_block(obj)
        if block is None:
            continue
        parts.append(render_block(block))
    return "\n".join(parts)
