"""Document clean-up passes: style resolution, heading promotion, text merging, blank collapsing."""

from __future__ import annotations

import copy
from dataclasses import fields
from typing import Iterator, Mapping, Optional

from cdmkit.model import (
    Block,
    BlockQuote,
    CustomBlock,
    Document,
    Heading,
    Inline,
    InlineCode,
    InlineContainer,
    ListBlock,
    Paragraph,
    ParagraphStyle,
    StyleDefinition,
    StyleId,
    Table,
    Text,
    TextStyle,
)

StyleMap = Mapping[str, StyleDefinition]


# ---------------------------------------------------------------------------
# Style merging
# ---------------------------------------------------------------------------


def _overlay(dst, src) -> None:
    """Copy every set field of ``src`` onto ``dst`` (src wins)."""
    for f in fields(src):
        value = getattr(src, f.name)
        if value is not None:
            setattr(dst, f.name, value)


def _inherit(dst, src) -> None:
    """Fill only the unset fields of ``dst`` from ``src`` (dst wins)."""
    for f in fields(src):
        value = getattr(src, f.name)
        if value is not None and getattr(dst, f.name) is None:
            setattr(dst, f.name, value)


def resolve_style(
    style_id: StyleId, style_map: StyleMap
) -> tuple[TextStyle, ParagraphStyle, str]:
    """Flatten a style and its ``based_on`` ancestors; derived styles win.

    Returns the merged text style, the merged paragraph style and the name of
    the leaf style (empty when the id is unknown). Cycles are tolerated.
    """
    chain: list[StyleDefinition] = []
    seen: set[str] = set()
    current: Optional[str] = style_id
    while current and current not in seen:
        seen.add(current)
        definition = style_map.get(current)
        if definition is None:
            break
        chain.append(definition)
        current = definition.based_on

    text = TextStyle()
    paragraph = ParagraphStyle()
    for definition in reversed(chain):
        _overlay(text, definition.text)
        _overlay(paragraph, definition.paragraph)
    name = chain[0].name if chain else ""
    return text, paragraph, name


# ---------------------------------------------------------------------------
# Tree walking
# ---------------------------------------------------------------------------


def _child_block_lists(block: Block) -> Iterator[list[Block]]:
    """Yield the block lists nested directly inside a container block."""
    if isinstance(block, (BlockQuote, CustomBlock)):
        yield block.blocks
    elif isinstance(block, ListBlock):
        for item in block.items:
            yield item.blocks
    elif isinstance(block, Table):
        for row in block.rows:
            for cell in row.cells:
                yield cell.blocks


# ---------------------------------------------------------------------------
# Stage 1: resolve style references
# ---------------------------------------------------------------------------


def _resolve_inlines(inlines: list[Inline], inherited: TextStyle, style_map: StyleMap) -> None:
    for inline in inlines:
        if isinstance(inline, (Text, InlineCode)):
            if inline.style_ref:
                resolved_text, _, _ = resolve_style(inline.style_ref, style_map)
                _inherit(inline.direct_style, resolved_text)
            _inherit(inline.direct_style, inherited)
        elif isinstance(inline, InlineContainer):
            cascade = copy.copy(inherited)
            if inline.style_ref:
                resolved_text, _, _ = resolve_style(inline.style_ref, style_map)
                _inherit(inline.direct_style, resolved_text)
                _overlay(cascade, resolved_text)
            _overlay(cascade, inline.direct_style)
            _resolve_inlines(inline.children, cascade, style_map)


def _resolve_blocks(blocks: list[Block], style_map: StyleMap) -> None:
    for block in blocks:
        if isinstance(block, (Paragraph, Heading)):
            inherited = TextStyle()
            if block.style_ref:
                resolved_text, resolved_para, _ = resolve_style(block.style_ref, style_map)
                _inherit(block.direct_style, resolved_para)
                inherited = resolved_text
            _resolve_inlines(block.inlines, inherited, style_map)
        else:
            for child in _child_block_lists(block):
                _resolve_blocks(child, style_map)


# ---------------------------------------------------------------------------
# Stage 2: promote heading-styled paragraphs
# ---------------------------------------------------------------------------


def _norm_name(name: str) -> str:
    return "".join(
        ch.lower() if ch.isascii() else ch for ch in name if ch not in " _-"
    )


def match_heading_level(name: str) -> int:
    """Heading level 1-6 for a heading-like style name, 0 otherwise.

    Matches ``Heading1`` .. ``Heading6`` ignoring case, spaces, underscores and
    hyphens; ``Title`` maps to 1 and ``Subtitle`` to 2.
    """
    normalized = _norm_name(name)
    if normalized == "title":
        return 1
    if normalized == "subtitle":
        return 2
    if len(normalized) == 8 and normalized.startswith("heading"):
        digit = normalized[7]
        if "1" <= digit <= "6":
            return int(digit)
    return 0


def _heading_level_from_ref(style_ref: Optional[StyleId], style_map: StyleMap) -> int:
    if style_ref is None:
        return 0
    level = match_heading_level(style_ref)
    if level > 0:
        return level
    definition = style_map.get(style_ref)
    if definition is not None and definition.name:
        return match_heading_level(definition.name)
    return 0


def _promote_headings(blocks: list[Block], style_map: StyleMap) -> None:
    for position, block in enumerate(blocks):
        if isinstance(block, Paragraph):
            level = _heading_level_from_ref(block.style_ref, style_map)
            if level > 0:
                block = Heading(
                    id=block.id,
                    source=block.source,
                    metadata=block.metadata,
                    extensions=block.extensions,
                    level=level,
                    inlines=block.inlines,
                    style_ref=block.style_ref,
                    direct_style=block.direct_style,
                )
                blocks[position] = block
        for child in _child_block_lists(block):
            _promote_headings(child, style_map)


# ---------------------------------------------------------------------------
# Stage 3: merge adjacent text
# ---------------------------------------------------------------------------


def _merge_adjacent_text(inlines: list[Inline]) -> None:
    if len(inlines) < 2:
        return
    merged: list[Inline] = []
    for inline in inlines:
        if merged:
            previous = merged[-1]
            if (
                isinstance(previous, Text)
                and isinstance(inline, Text)
                and previous.style_ref == inline.style_ref
                and previous.direct_style == inline.direct_style
            ):
                previous.text += inline.text
                continue
        merged.append(inline)
    inlines[:] = merged


def _normalize_inlines(inlines: list[Inline]) -> None:
    for inline in inlines:
        if isinstance(inline, InlineContainer):
            _normalize_inlines(inline.children)
    _merge_adjacent_text(inlines)


def _normalize_blocks(blocks: list[Block]) -> None:
    for block in blocks:
        if isinstance(block, (Paragraph, Heading)):
            _normalize_inlines(block.inlines)
        else:
            for child in _child_block_lists(block):
                _normalize_blocks(child)


# ---------------------------------------------------------------------------
# Stage 4: collapse runs of empty paragraphs
# ---------------------------------------------------------------------------


def _is_empty_paragraph(block: Block) -> bool:
    if not isinstance(block, Paragraph):
        return False
    return all(isinstance(inline, Text) and not inline.text for inline in block.inlines)


def _collapse_empty_paragraphs(blocks: list[Block]) -> None:
    kept: list[Block] = []
    previous_empty = False
    for block in blocks:
        empty = _is_empty_paragraph(block)
        if empty and previous_empty:
            continue
        kept.append(block)
        previous_empty = empty
    blocks[:] = kept

    for block in blocks:
        for child in _child_block_lists(block):
            _collapse_empty_paragraphs(child)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def normalize(doc: Document) -> None:
    """Clean up ``doc`` in place.

    Resolves style references into direct styles (direct formatting wins),
    turns heading-styled paragraphs into headings, merges adjacent text runs
    with equal styling and drops consecutive empty paragraphs.
    """
    style_map = {style.id: style for style in doc.styles}
    for section in doc.sections:
        _resolve_blocks(section.blocks, style_map)
        _promote_headings(section.blocks, style_map)
        _normalize_blocks(section.blocks)
        _collapse_empty_paragraphs(section.blocks)