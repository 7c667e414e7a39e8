"""Unit tests for table row collection and layout."""

import io

import pytest
from bs4 import BeautifulSoup

from htmldown.tables import collect_rows, normalize_cell, render_table, row_cells


def parse_table(html):
    return BeautifulSoup(html, "html.parser").table


@pytest.mark.unit
class TestRowCollection:
    """Finding rows and cells."""

    def test_rows_from_sections_and_direct_children(self):
        table = parse_table(
            "<table><thead><tr><th>h</th></tr></thead><tr><td>a</td></tr>"
            "<tbody><tr><td>b</td></tr></tbody><tfoot><tr><td>f</td></tr></tfoot></table>"
        )
        rows = collect_rows(table)
        assert [row.get_text() for row in rows] == ["h", "a", "b", "f"]

    def test_nested_tables_are_not_descended(self):
        table = parse_table("<table><tr><td><table><tr><td>inner</td></tr></table></td></tr></table>")
        assert len(collect_rows(table)) == 1

    def test_row_cells_skip_other_children(self):
        table = parse_table("<table><tr> <th>a</th><td>b</td><span>c</span></tr></table>")
        cells = row_cells(collect_rows(table)[0])
        assert [cell.name for cell in cells] == ["th", "td"]


@pytest.mark.unit
class TestNormalizeCell:
    """Folding rendered cell content onto one line."""

    def test_single_line_unchanged(self):
        assert normalize_cell(" a b ") == " a b "

    def test_newlines_fold_to_spaces(self):
        assert normalize_cell("a\n\nb\n") == "a b"


@pytest.mark.unit
class TestRenderTable:
    """Pipe table layout."""

    def render(self, rows):
        out = io.StringIO()
        render_table(rows, out)
        return out.getvalue()

    def test_columns_padded_to_widest_cell(self):
        assert self.render([["a", "bb"], ["ccc", "d"]]) == "|a  |bb|\n|---|--|\n|ccc|d |\n"

    def test_missing_cells_are_blank(self):
        assert self.render([["a", "bb"], ["ccc"]]) == "|a  |bb|\n|---|--|\n|ccc|  |\n"

    def test_single_row_gets_separator(self):
        assert self.render([["only"]]) == "|only|\n|----|\n"

    def test_wide_characters_use_display_width(self):
        assert self.render([["日本", "x"], ["a", "y"]]) == "|日本|x|\n|----|-|\n|a   |y|\n"

    def test_empty_cells(self):
        assert self.render([["", ""]]) == "|||\n|||\n"

    def test_no_rows(self):
        assert self.render([]) == ""
