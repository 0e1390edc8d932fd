"""Tests for cell borders and table layout."""
from unittest.mock import patch

import pytest

from docflow.document_builder import FontVariant
from docflow.document_builder.coordinate_utils import CellGeometry, Range
from docflow.exceptions import InvalidOptionError


def test_cell_with_top_and_bottom_border_draws_two_lines(table_layout, page):
    with patch.object(page, "draw_line", wraps=page.draw_line) as draw_line:
        geometry = table_layout.draw_cell(page, "X", 0, 100, 50, border="tb", height=20)

    assert draw_line.call_count == 2
    starts = [call.args[0] for call in draw_line.call_args_list]
    assert starts == [(-4, 112), (-4, 92)]
    assert geometry == CellGeometry(left=-4, right=50, top=112, bottom=92)


@pytest.mark.parametrize("border,expected", [(True, 4), (False, 0), ("l", 1), ("TRBL", 4)])
def test_cell_border_count(table_layout, page, border, expected):
    with patch.object(page, "draw_line", wraps=page.draw_line) as draw_line:
        table_layout.draw_cell(page, "X", 0, 100, 50, border=border)

    assert draw_line.call_count == expected


def test_cell_rejects_unsupported_border(table_layout, page):
    with pytest.raises(InvalidOptionError):
        table_layout.draw_cell(page, "X", 0, 100, 50, border=3)


def test_cell_without_height_fits_content(table_layout, page):
    single = table_layout.draw_cell(page, "one", 0, 500, 200)
    wrapped = table_layout.draw_cell(page, "one two three four five six", 0, 500, 40)

    assert single.bottom == 500 + 12 - 12 - 4
    assert wrapped.bottom < single.bottom


def test_cell_new_line_moves_below_cell(table_layout, page):
    geometry = table_layout.draw_cell(page, "X", 100, 400, 50, height=30)

    assert page.get_cursor() == (25, geometry.bottom - 12)


def test_cell_without_new_line_continues_to_the_right(table_layout, page):
    table_layout.draw_cell(page, "X", 100, 400, 50, new_line=False)

    assert page.get_cursor() == (154, 400)


def test_table_starts_new_line_only_after_last_cell(table_layout, page):
    header = ["Name", "Qty", "Price"]
    data = [["Paper", "2", "9.90"], ["Toner", "1", "54.00"]]

    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, header, data)

    flags = [call.kwargs["new_line"] for call in draw_cell.call_args_list]
    assert flags == [False, False, True] * 3


def test_table_rows_flow_downwards(table_layout, page):
    data = [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]]

    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, None, data)

    row_ys = [call.args[3] for call in draw_cell.call_args_list[::3]]
    assert row_ys == sorted(row_ys, reverse=True)
    assert len(set(row_ys)) == 3


def test_table_divides_range_into_columns(table_layout, page):
    bounds = Range(50, 450)

    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, ["A", "B", "C", "D"], [["1", "2", "3", "4"]], text_range=bounds)

    widths = {call.args[4] for call in draw_cell.call_args_list}
    first_row_xs = [call.args[2] for call in draw_cell.call_args_list[:4]]
    assert widths == {100}
    assert first_row_xs == [50, 154, 258, 362]


def test_table_column_count_follows_widest_row_without_header(table_layout, page):
    bounds = Range(0, 400)

    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, None, [["1", "2"], ["1", "2", "3", "4"]], text_range=bounds)

    assert {call.args[4] for call in draw_cell.call_args_list} == {100}


def test_table_column_count_covers_rows_wider_than_header(table_layout, page):
    bounds = Range(0, 400)

    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, ["A", "B"], [["1", "2", "3", "4"]], text_range=bounds)

    assert {call.args[4] for call in draw_cell.call_args_list} == {100}
    assert [call.args[2] for call in draw_cell.call_args_list[2:]] == [0, 104, 208, 312]


def test_table_explicit_columns(table_layout, page):
    with patch.object(table_layout, "draw_cell", wraps=table_layout.draw_cell) as draw_cell:
        table_layout.draw_table(page, ["A", "B"], [], text_range=(0, 300), columns=3)

    assert {call.args[4] for call in draw_cell.call_args_list} == {100}


@pytest.mark.parametrize("columns", [0, -1, 2.5, True])
def test_table_rejects_invalid_column_count(table_layout, page, columns):
    with pytest.raises(InvalidOptionError):
        table_layout.draw_table(page, ["A"], [["1"]], columns=columns)


def test_table_header_bold_and_data_regular(table_layout, page, text_calls):
    table_layout.draw_table(page, ["Head"], [["body"]])

    fonts = {call.text: call.font_name for call in text_calls}
    assert fonts == {"Head": "Helvetica-Bold", "body": "Helvetica"}


def test_table_restores_previous_font_variant(table_layout, page, style):
    style.set_font(FontVariant.ITALIC)

    table_layout.draw_table(page, ["Head"], [["body"]])

    assert style.font_variant is FontVariant.ITALIC


def test_header_difference_changes_cell_size(table_layout, page, text_calls):
    table_layout.draw_table(page, ["Head"], [["body"]], header_difference=4)

    assert {call.size for call in text_calls} == {16}
