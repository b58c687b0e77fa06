# cdmkit

A small toolkit for a common document model (CDM) of the kind a word
processor keeps internally: a `Document` holds sections, sections hold
blocks (paragraphs, headings, lists, tables, block quotes, code blocks,
rules), and paragraph-like blocks hold inline content (text runs, strong,
emphasis, underline and span containers, links, images, tabs and breaks).

## Modules

- `cdmkit.model`: the model as dataclasses and enums (`Document`,
  `Section`, `Paragraph`, `Heading`, `Text`, `TextStyle`, `ParagraphStyle`,
  `StyleDefinition`, `Length`, `Color`, ...), plus `NodeIdGenerator`,
  `make_node` and `has_unicode_encoding`.
- `cdmkit.builder`: `DocumentBuilder`, a fluent builder whose methods
  return the builder. Calls that do not fit the open structure (text with no
  open paragraph, a second open paragraph, a list item with no open list,
  a mismatched `end_strong`, ...) raise `BuilderError`. `build()` returns a
  copy of the document built so far.
- `cdmkit.normalizer`: `normalize(doc)` works in place. It resolves named
  styles through their `based_on` chains into the nodes' direct styles
  (direct formatting wins), turns paragraphs styled "Heading 1" to
  "Heading 6", "Title" or "Subtitle" into `Heading` blocks, merges adjacent
  text runs with the same style, and drops consecutive empty paragraphs.
  `resolve_style` and `match_heading_level` are available on their own.
- `cdmkit.rtf`: `RtfRenderer().render(doc)` returns an RTF string with a
  font table and colour table built from what the document uses;
  `escape_rtf` escapes text, writing non-ASCII characters as `\uN?`.
- `cdmkit.datetime_format`: `format_date_time(fmt, moment)` replaces the
  tokens `yyyy`, `MM`, `dd`, `HH`, `mm`, `ss` and `d` in that order;
  `preview_formats(moment)` expands every pattern in `DATE_TIME_FORMATS`.
  `DateTimeOptions` holds the chosen text and an auto-update flag.
- `cdmkit.insert_options`: `TableOptions` (rows, columns, auto-fit, header
  row, width percentage; `normalized()` guarantees at least one row and
  column) and `HyperlinkOptions` (display text, URL, tooltip).

## Installation

```
pip install cdmkit
```

## Example

```python
from cdmkit.builder import DocumentBuilder
from cdmkit.model import ListType
from cdmkit.normalizer import normalize
from cdmkit.rtf import RtfRenderer

builder = DocumentBuilder()
builder.set_title("Report")
builder.add_heading(1, "Summary")
builder.begin_paragraph()
builder.add_text("Plain and ")
builder.begin_strong()
builder.add_text("bold")
builder.end_strong()
builder.end_paragraph()
builder.begin_list(ListType.NUMBERED, 1, 0)
builder.add_list_item("first")
builder.add_list_item("second")
builder.end_list()

doc = builder.build()
normalize(doc)
rtf = RtfRenderer().render(doc)
print(rtf)
```

Date and time patterns:

```python
from datetime import datetime
from cdmkit.datetime_format import format_date_time

format_date_time("yyyy-MM-dd HH:mm", datetime(2024, 3, 5, 9, 7))
# '2024-03-05 09:07'
```

## What it does not do

cdmkit is a library only. It has no editor window or dialogs, no command
line program, and it does not read or write DOCX, HWP, HWPX, HTML or
Markdown files; documents are built in memory with `DocumentBuilder` or the
model classes, and the only output format is RTF text.

## Running the tests

```
pip install cdmkit[test]
pytest
```