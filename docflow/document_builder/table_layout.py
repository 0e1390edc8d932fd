"""Table Layout Module

Bordered cells and simple grid tables built on top of paragraph layout.
"""
from typing import List, Optional, Sequence

from reportlab.lib import colors

from ..config import CELL_BORDER_OPACITY, CELL_LINE_THICKNESS, CELL_PADDING
from ..exceptions import InvalidOptionError
from . import coordinate_utils
from .coordinate_utils import CellGeometry, Range
from .font_manager import FontVariant
from .page import Page
from .text_layout import Align, TextLayout


class TableLayout:
    """Draws cells and tables through a TextLayout."""

    def __init__(self, text_layout: TextLayout):
        self.text_layout = text_layout
        self.style = text_layout.style

    def draw_cell(self, page: Page, text: str, x: float, y: float, width: float,
                  height: Optional[float] = None, border=False, align: Align = "left",
                  new_line: bool = True, size: Optional[float] = None,
                  color: Optional[colors.Color] = None,
                  line_thickness: float = CELL_LINE_THICKNESS, padding: float = CELL_PADDING,
                  border_opacity: float = CELL_BORDER_OPACITY, text_range=None) -> CellGeometry:
        """
        Draw wrapped text in a cell anchored at (x, y) and stroke its borders.

        The cell's top edge sits one text size above the first baseline. Its
        bottom edge is either `height` below the top or, without a height,
        one padding below the space the paragraph actually consumed.

        Args:
            page: Active page
            text: Cell text
            x, y: Baseline origin of the first line
            width: Wrapping width of the cell
            height: Fixed cell height; None to size to the content
            border: True/False for all/no edges, or letters from "trbl"
            align: Text alignment inside the cell
            new_line: If True, continue on the next row at range.left;
                      otherwise continue to the right of this cell
            size: Font size
            color: Text and border color
            line_thickness: Border thickness
            padding: Horizontal gap between cells (and left of the text)
            border_opacity: Border stroke alpha
            text_range: Row range whose left edge new rows start from

        Returns:
            CellGeometry of the cell outline
        """
        size = self.style.text_size if size is None else size
        color = self.style.color if color is None else color
        edges = coordinate_utils.parse_border_spec(border)

        page.move_to(x, y)
        start_y = page.y
        self.text_layout.draw_paragraph(page, text, align=align, text_range=(x, x + width),
                                        size=size, color=color)
        consumed = start_y - page.y + size

        top = y + size
        bottom = coordinate_utils.cell_bottom(top, consumed, padding, height)

        segments = coordinate_utils.cell_border_segments(
            x, width, top, bottom, padding, line_thickness, edges
        )
        for start, end in segments.values():
            page.draw_line(start, end, thickness=line_thickness, color=color, opacity=border_opacity)

        if new_line:
            row_left = self.text_layout.resolve_range(page, text_range).left
            page.move_to(row_left, bottom - size)
        else:
            page.move_to(x + width + padding, y)

        return CellGeometry(left=x - padding, right=x + width, top=top, bottom=bottom)

    def draw_table(self, page: Page, header: Optional[Sequence[str]] = None,
                   data: Optional[Sequence[Sequence[str]]] = None, text_range=None,
                   header_difference: float = 0, align: Align = "center", border=True,
                   size: Optional[float] = None, color: Optional[colors.Color] = None,
                   columns: Optional[int] = None):
        """
        Draw a header row and data rows as a grid of bordered cells.

        Args:
            page: Active page
            header: Header cell strings, drawn in the bold variant
            data: Rows of cell strings, drawn in the regular variant
            text_range: Table range; when given, the cursor first moves to its left edge
            header_difference: Added to size for every cell
            align: Text alignment in each cell
            border: Border specifier applied to every cell
            size: Base font size
            color: Text and border color
            columns: Column count used to divide the range width; derived
                     from the header (or the widest row) when omitted

        Raises:
            InvalidOptionError: If columns is not a positive integer
        """
        size = self.style.text_size if size is None else size
        color = self.style.color if color is None else color

        bounds = self.text_layout.resolve_range(page, text_range)
        if text_range is not None:
            page.move_to(bounds.left, page.y)

        column_count = self._column_count(header, data) if columns is None else columns
        if isinstance(column_count, bool) or not isinstance(column_count, int) or column_count < 1:
            raise InvalidOptionError(f"columns must be a positive integer, got {column_count!r}")

        cell_width = bounds.width / column_count
        cell_size = size + header_difference
        previous_variant = self.style.font_variant

        page.move_to(bounds.left, page.y)
        if header:
            self.style.set_font(FontVariant.BOLD)
            self._draw_row(page, header, bounds, cell_width, cell_size, align, border, color)

        if data:
            self.style.set_font(FontVariant.REGULAR)
            page.move_to(bounds.left, page.y + header_difference)
            for row in data:
                page.move_to(bounds.left, page.y)
                self._draw_row(page, row, bounds, cell_width, cell_size, align, border, color)

        self.style.set_font(previous_variant)

    def _draw_row(self, page: Page, row: Sequence[str], bounds: Range, cell_width: float,
                  size: float, align: Align, border, color: colors.Color):
        last_index = len(row) - 1
        for i, value in enumerate(row):
            self.draw_cell(page, str(value), page.x, page.y, cell_width,
                           border=border, align=align, size=size, color=color,
                           new_line=(i == last_index), text_range=bounds)

    @staticmethod
    def _column_count(header: Optional[Sequence[str]], data: Optional[Sequence[Sequence[str]]]) -> int:
        widest: List[int] = [len(row) for row in data or []]
        if header:
            widest.append(len(header))
        return max(widest + [1])
