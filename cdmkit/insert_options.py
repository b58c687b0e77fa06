"""Options gathered when inserting a table or a hyperlink."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass
class TableOptions:
    """Shape and layout of a table to insert."""

    rows: int = 3
    cols: int = 3
    auto_fit: bool = True
    has_header: bool = True
    width_pct: int = 100

    def normalized(self) -> "TableOptions":
        """A copy with at least one row and one column."""
        return dataclasses.replace(self, rows=max(self.rows, 1), cols=max(self.cols, 1))


@dataclass
class HyperlinkOptions:
    """Display text, target and tooltip of a hyperlink to insert."""

    display_text: str = ""
    url: str = ""
    tooltip: str = ""