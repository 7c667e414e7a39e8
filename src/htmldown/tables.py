#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/tables.py
"""Table row collection and column layout.

Rows are gathered from ``thead``/``tbody``/``tfoot`` sections and from
``tr`` elements directly under ``table`` (an implicit body), in document
order. Cell contents are rendered by the traversal engine; this module only
lays the rendered strings out as a pipe table whose columns are padded to the
widest cell (in terminal cells, so wide characters line up).
"""

from __future__ import annotations

import logging
from typing import TextIO

from bs4 import Tag

from htmldown.constants import TABLE_CELL_TAGS, TABLE_SECTION_TAGS
from htmldown.utils.html_utils import tag_name
from htmldown.utils.text import display_width

logger = logging.getLogger(__name__)


def collect_rows(table: Tag) -> list[Tag]:
    """Return the ``tr`` elements of ``table``, flattening section wrappers.

    Nested tables are not descended into.
    """
    rows: list[Tag] = []
    for child in table.children:
        name = tag_name(child)
        if name == "tr":
            rows.append(child)
        elif name in TABLE_SECTION_TAGS:
            rows.extend(tr for tr in child.children if tag_name(tr) == "tr")
    return rows


def row_cells(row: Tag) -> list[Tag]:
    """Return the ``td``/``th`` children of a row in document order."""
    return [cell for cell in row.children if tag_name(cell) in TABLE_CELL_TAGS]


def normalize_cell(text: str) -> str:
    """Fold line breaks in rendered cell content so the row stays on one line."""
    return " ".join(line for line in text.split("\n") if line) if "\n" in text else text


def render_table(rows: list[list[str]], sink: TextIO) -> None:
    """Write rendered rows as a pipe table.

    The first row is followed by the separator row. Every cell is right-padded
    with spaces to its column's width; missing cells in short rows render as
    blank padding.

    Parameters
    ----------
    rows : list of list of str
        Rendered cell contents, one list per row
    sink : TextIO
        Output to append to

    Examples
    --------
        >>> import io
        >>> out = io.StringIO()
        >>> render_table([["a", "bb"], ["ccc"]], out)
        >>> print(out.getvalue(), end="")
        |a  |bb|
        |---|--|
        |ccc|  |

    """
    column_count = max((len(cells) for cells in rows), default=0)
    widths = [0] * column_count
    for cells in rows:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], display_width(cell))

    logger.debug("Laying out table: %d rows x %d columns", len(rows), column_count)

    for index, cells in enumerate(rows):
        for column, width in enumerate(widths):
            sink.write("|")
            if column < len(cells):
                sink.write(cells[column])
                sink.write(" " * (width - display_width(cells[column])))
            else:
                sink.write(" " * width)
        sink.write("|\n")

        if index == 0:
            for width in widths:
                sink.write("|")
                sink.write("-" * width)
            sink.write("|\n")
