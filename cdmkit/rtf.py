"""Render a Document as RTF text for loading into a rich-text control."""

from __future__ import annotations

from typing import Optional

from cdmkit.model import (
    Alignment,
    Block,
    BlockQuote,
    Break,
    BreakType,
    CodeBlock,
    Color,
    Document,
    Emphasis,
    Heading,
    HorizontalRule,
    Hyperlink,
    Image,
    Inline,
    InlineCode,
    InlineContainer,
    Length,
    ListBlock,
    ListType,
    Paragraph,
    SectionBreakBlock,
    Span,
    Strong,
    Tab,
    Table,
    Text,
    TextStyle,
    Underline,
    UnderlineStyle,
    Unit,
)

# Heading sizes in half-points: H1=36pt .. H6=16pt.
_HEADING_SIZES = (72, 56, 48, 40, 36, 32)
_INDENT_STEP = 720
_COLUMN_WIDTH = 1440

_ALIGNMENT_CODES = {
    Alignment.CENTER: "\\qc",
    Alignment.RIGHT: "\\qr",
    Alignment.JUSTIFY: "\\qj",
}


def escape_rtf(text: str) -> str:
    """Escape text for an RTF body; non-ASCII characters become ``\\uN?``."""
    parts: list[str] = []
    for ch in text:
        code = ord(ch)
        if ch == "\\":
            parts.append("\\\\")
        elif ch == "{":
            parts.append("\\{")
        elif ch == "}":
            parts.append("\\}")
        elif code < 128:
            parts.append(ch)
        elif code < 0x10000:
            signed = code - 0x10000 if code >= 0x8000 else code
            parts.append(f"\\u{signed}?")
        else:
            parts.append(f"\\u{code}?")
    return "".join(parts)


def _half_points(size: Length) -> int:
    if size.unit is Unit.PT:
        return int(size.value * 2.0)
    if size.unit is Unit.PX:
        return int(size.value * 1.5)
    return 0


def _is_underlined(style: TextStyle) -> bool:
    return style.underline is not None and style.underline is not UnderlineStyle.NONE


class RtfRenderer:
    """Turns a Document into an RTF string, collecting fonts and colours as it goes."""

    def __init__(self) -> None:
        self._out: list[str] = []
        self._colors: list[int] = []
        self._fonts: list[str] = []
        self._indent_left = 0

    # ---- tables ----

    def _color_index(self, color: Color) -> int:
        packed = (color.r << 16) | (color.g << 8) | color.b
        if packed in self._colors:
            return self._colors.index(packed) + 1
        self._colors.append(packed)
        return len(self._colors)

    def _font_index(self, family: str) -> int:
        if family in self._fonts:
            return self._fonts.index(family)
        self._fonts.append(family)
        return len(self._fonts) - 1

    # ---- entry point ----

    def render(self, doc: Document) -> str:
        """Return the complete RTF document for ``doc``."""
        self._colors = []
        self._fonts = []
        self._indent_left = 0
        self._font_index("Malgun Gothic")
        self._font_index("Courier New")

        self._out = []
        for section in doc.sections:
            for block in section.blocks:
                self._write_block(block)
        body = "".join(self._out)

        self._out = []
        self._write_header()
        self._out.append(body)
        self._out.append("}")
        return "".join(self._out)

    def _write_header(self) -> None:
        out = self._out
        out.append("{\\rtf1\\ansi\\ansicpg1252\\uc1\\deff0")
        out.append("{\\fonttbl")
        for index, family in enumerate(self._fonts):
            out.append(f"{{\\f{index}\\fswiss\\fcharset0 {family};}}")
        out.append("}")
        if self._colors:
            out.append("{\\colortbl;")
            for packed in self._colors:
                out.append(
                    f"\\red{(packed >> 16) & 0xFF}"
                    f"\\green{(packed >> 8) & 0xFF}"
                    f"\\blue{packed & 0xFF};"
                )
            out.append("}")
        out.append("\\f0\\fs22\\pard ")

    # ---- blocks ----

    def _write_block(self, block: Block) -> None:
        if isinstance(block, Paragraph):
            self._write_paragraph(block)
        elif isinstance(block, Heading):
            self._write_heading(block)
        elif isinstance(block, CodeBlock):
            self._out.append("\\pard\\f1\\fs20 ")
            self._out.append(escape_rtf(block.code))
            self._out.append("\\f0\\fs22\\par\n")
        elif isinstance(block, HorizontalRule):
            self._out.append("\\pard\\brdrb\\brdrs\\brdrw10\\brsp20 \\par\n")
        elif isinstance(block, Table):
            self._write_table(block)
        elif isinstance(block, BlockQuote):
            self._indent_left += _INDENT_STEP
            for child in block.blocks:
                self._write_block(child)
            self._indent_left -= _INDENT_STEP
        elif isinstance(block, ListBlock):
            self._write_list(block)
        elif isinstance(block, SectionBreakBlock):
            self._out.append("\\page\n")

    def _write_paragraph(self, paragraph: Paragraph) -> None:
        self._out.append("\\pard")
        if self._indent_left > 0:
            self._out.append(f"\\li{self._indent_left}")
        alignment: Optional[Alignment] = paragraph.direct_style.alignment
        if alignment in _ALIGNMENT_CODES:
            self._out.append(_ALIGNMENT_CODES[alignment])
        self._out.append(" ")
        self._write_inlines(paragraph.inlines)
        self._out.append("\\par\n")

    def _write_heading(self, heading: Heading) -> None:
        level = max(1, min(heading.level, 6))
        self._out.append(f"\\pard\\fs{_HEADING_SIZES[level - 1]}\\b ")
        self._write_inlines(heading.inlines)
        self._out.append("\\b0\\fs22\\par\n")

    def _write_paragraph_inlines(self, blocks: list[Block]) -> None:
        for block in blocks:
            if isinstance(block, Paragraph):
                self._write_inlines(block.inlines)

    def _write_table(self, table: Table) -> None:
        if not table.rows:
            return
        cols = max(len(row.cells) for row in table.rows)
        if cols == 0:
            return
        for row_index, row in enumerate(table.rows):
            self._out.append("\\trowd\\trgaph108\\trleft0")
            for col in range(1, cols + 1):
                self._out.append(
                    "\\clbrdrt\\brdrs\\brdrw10"
                    "\\clbrdrl\\brdrs\\brdrw10"
                    "\\clbrdrb\\brdrs\\brdrw10"
                    "\\clbrdrr\\brdrs\\brdrw10"
                    f"\\cellx{col * _COLUMN_WIDTH}"
                )
            for col in range(cols):
                self._out.append("\\pard\\intbl")
                if row_index == 0:
                    self._out.append("\\b")
                self._out.append(" ")
                if col < len(row.cells):
                    self._write_paragraph_inlines(row.cells[col].blocks)
                self._out.append("\\cell\n")
            self._out.append("\\row\n")
        self._out.append("\\pard\\par\n")

    def _write_list(self, list_block: ListBlock) -> None:
        number = list_block.start
        for item in list_block.items:
            self._out.append("\\pard\\li720 ")
            if list_block.type is ListType.BULLET:
                self._out.append("\\bullet  ")
            else:
                self._out.append(f"{number}. ")
                number += 1
            self._write_paragraph_inlines(item.blocks)
            self._out.append("\\par\n")

    # ---- inlines ----

    def _write_inlines(self, inlines: list[Inline]) -> None:
        for inline in inlines:
            self._write_inline(inline)

    def _write_inline(self, inline: Inline) -> None:
        if isinstance(inline, Text):
            self._write_text(inline)
        elif isinstance(inline, Tab):
            self._out.append("\\tab ")
        elif isinstance(inline, Break):
            if inline.type in (BreakType.LINE_BREAK, BreakType.SOFT_BREAK):
                self._out.append("\\line ")
            else:
                self._out.append("\\page ")
        elif isinstance(inline, InlineCode):
            self._out.append("\\f1\\fs18 ")
            self._out.append(escape_rtf(inline.text))
            self._out.append("\\f0\\fs22 ")
        elif isinstance(inline, Strong):
            self._write_container(inline, "\\b ", "\\b0 ")
        elif isinstance(inline, Emphasis):
            self._write_container(inline, "\\i ", "\\i0 ")
        elif isinstance(inline, Underline):
            self._write_container(inline, "\\ul ", "\\ulnone ")
        elif isinstance(inline, Span):
            self._write_span(inline)
        elif isinstance(inline, Hyperlink):
            pass  # display text is a sibling Text node
        elif isinstance(inline, Image):
            self._out.append("[image]")

    def _write_container(self, container: InlineContainer, on: str, off: str) -> None:
        self._out.append(on)
        self._write_inlines(container.children)
        self._out.append(off)

    def _style_codes(self, style: TextStyle) -> str:
        codes: list[str] = []
        if style.bold:
            codes.append("\\b")
        if style.italic:
            codes.append("\\i")
        if _is_underlined(style):
            codes.append("\\ul")
        if style.strike:
            codes.append("\\strike")
        if style.color is not None:
            codes.append(f"\\cf{self._color_index(style.color)}")
        if style.background_color is not None:
            codes.append(f"\\highlight{self._color_index(style.background_color)}")
        if style.font_size is not None:
            half_points = _half_points(style.font_size)
            if half_points > 0:
                codes.append(f"\\fs{half_points}")
        if style.font_family is not None:
            codes.append(f"\\f{self._font_index(style.font_family)}")
        return "".join(codes)

    def _write_span(self, span: Span) -> None:
        style = span.direct_style
        if style.font_family is not None or style.font_size is not None:
            self._out.append("{" + self._style_codes(style) + " ")
            self._write_inlines(span.children)
            self._out.append("}")
            return
        on: list[str] = []
        off: list[str] = []
        if style.bold:
            on.append("\\b ")
            off.append("\\b0 ")
        if style.italic:
            on.append("\\i ")
            off.append("\\i0 ")
        if _is_underlined(style):
            on.append("\\ul ")
            off.append("\\ulnone ")
        if style.color is not None:
            on.append(f"\\cf{self._color_index(style.color)} ")
            off.append("\\cf0 ")
        self._out.extend(on)
        self._write_inlines(span.children)
        self._out.extend(off)

    def _write_text(self, text: Text) -> None:
        style = text.direct_style
        has_style = any(
            value is not None
            for value in (
                style.bold,
                style.italic,
                style.underline,
                style.color,
                style.font_family,
                style.font_size,
                style.strike,
            )
        )
        if not has_style:
            self._out.append(escape_rtf(text.text))
            return

        out = self._out
        if style.bold:
            out.append("\\b")
        if style.italic:
            out.append("\\i")
        if _is_underlined(style):
            out.append("\\ul")
        if style.strike:
            out.append("\\strike")
        if style.color is not None:
            out.append(f"\\cf{self._color_index(style.color)}")
        if style.font_size is not None:
            half_points = _half_points(style.font_size)
            if half_points > 0:
                out.append(f"\\fs{half_points}")
        if style.font_family is not None:
            out.append(f"\\f{self._font_index(style.font_family)}")
        out.append(" ")
        out.append(escape_rtf(text.text))
        if style.bold:
            out.append("\\b0")
        if style.italic:
            out.append("\\i0")
        if _is_underlined(style):
            out.append("\\ulnone")
        if style.strike:
            out.append("\\strike0")
        if style.color is not None:
            out.append("\\cf0")
        if style.font_size is not None:
            out.append("\\fs22")
        if style.font_family is not None:
            out.append("\\f0")
        out.append(" ")