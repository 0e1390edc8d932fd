"""Text Layout Module

Single-line placement, greedy paragraph wrapping and the circle-with-text
primitive. Every call takes the page it draws on explicitly.
"""
from typing import List, Literal, Optional

from reportlab.lib import colors

from ..config import CIRCLE_BORDER_WIDTH, CIRCLE_TEXT_OFFSET
from . import coordinate_utils
from .coordinate_utils import Range
from .font_manager import FontManager
from .page import Page
from .style_state import StyleState

Align = Literal["left", "center", "right"]


class TextLayout:
    """Lays out text on a page using the shared style state.

    Attributes:
        style: Shared StyleState (font variant, size, color, margins)
        font_manager: FontManager used to resolve font names and measure text
    """

    def __init__(self, style: StyleState, font_manager: FontManager):
        self.style = style
        self.font_manager = font_manager

    @property
    def font_name(self) -> str:
        """Registered font name of the active variant."""
        return self.font_manager.get_font_name(self.style.font_variant)

    def measure(self, text: str, size: float) -> float:
        """Width of text in the active font."""
        return self.font_manager.width_of_text_at_size(text, size, self.style.font_variant)

    def default_range(self, page: Page) -> Range:
        return coordinate_utils.default_range(page.width, self.style.margins)

    def resolve_range(self, page: Page, text_range=None) -> Range:
        if text_range is None:
            return self.default_range(page)
        return Range.coerce(text_range)

    def next_line(self, page: Page, size: Optional[float] = None, left: Optional[float] = None):
        """
        Move the cursor down one line.

        Args:
            page: Active page
            size: Line height; defaults to the state text size
            left: New x position; defaults to the left margin
        """
        line_height = self.style.text_size if size is None else size
        x = self.style.margins.left if left is None else left
        page.move_to(x, page.y - line_height)

    def draw_text(self, page: Page, text: str, align: Align = "left", text_range=None,
                  size: Optional[float] = None, color: Optional[colors.Color] = None,
                  opacity: float = 1.0):
        """
        Draw one line of text aligned within a range.

        Left-aligned text is drawn at the cursor. Centered and right-aligned
        text is drawn at a computed x on the cursor's baseline, after which the
        cursor is put back where it was. Unknown alignments draw nothing.

        Args:
            page: Active page
            text: Line to draw
            align: "left", "center" or "right"
            text_range: Range (or (left, right)) used for center/right alignment
            size: Font size; defaults to the state text size
            color: Fill color; defaults to the state color
            opacity: Fill alpha
        """
        size = self.style.text_size if size is None else size
        color = self.style.color if color is None else color

        if align == "left":
            page.draw_text(text, self.font_name, size, color, opacity)
        elif align in ("center", "right"):
            bounds = self.resolve_range(page, text_range)
            text_width = self.measure(text, size)
            if align == "center":
                x = coordinate_utils.centered_x(bounds, text_width)
            else:
                x = coordinate_utils.right_aligned_x(bounds, text_width)

            saved_cursor = page.get_cursor()
            page.move_to(x, page.y)
            page.draw_text(text, self.font_name, size, color, opacity)
            page.move_to(*saved_cursor)

    def draw_paragraph(self, page: Page, text: str, align: Align = "left", text_range=None,
                       size: Optional[float] = None, color: Optional[colors.Color] = None,
                       opacity: float = 1.0) -> List[str]:
        """
        Draw text that wraps to the next line when it overflows the range.

        Greedy, single pass: words are added to the current line while the
        line (including separating spaces) still fits; otherwise the line is
        drawn and a new one started at range.left, one size lower. A word
        wider than the range on its own is emitted alone. The last line is
        always drawn, even when empty.

        Args:
            page: Active page
            text: Paragraph text (split on whitespace)
            align: Alignment applied to every line
            text_range: Wrapping range; when given, the cursor first moves to its left edge
            size: Font size (also the line height)
            color: Fill color
            opacity: Fill alpha

        Returns:
            The emitted lines, in order
        """
        size = self.style.text_size if size is None else size
        color = self.style.color if color is None else color

        bounds = self.resolve_range(page, text_range)
        if text_range is not None:
            page.move_to(bounds.left, page.y)

        max_width = bounds.width
        space_width = self.measure(" ", size)

        lines = []
        line_words: List[str] = []
        line_width = 0.0

        for word in str(text).split():
            word_width = self.measure(word, size)
            added_width = word_width + (space_width if line_words else 0)

            if line_words and line_width + added_width > max_width:
                lines.append(" ".join(line_words))
                self.draw_text(page, lines[-1], align=align, text_range=bounds,
                               size=size, color=color, opacity=opacity)
                self.next_line(page, size=size, left=bounds.left)
                line_words = []
                line_width = 0.0
                added_width = word_width

            line_words.append(word)
            line_width += added_width

        lines.append(" ".join(line_words))
        self.draw_text(page, lines[-1], align=align, text_range=bounds,
                       size=size, color=color, opacity=opacity)
        return lines

    def draw_circle_text(self, page: Page, x: float, y: float, text, size: Optional[float] = None,
                         color: Optional[colors.Color] = None,
                         border_width: float = CIRCLE_BORDER_WIDTH):
        """
        Draw a circle sized to the text width with the text centred inside it.

        The circle hangs below (x, y). The cursor is not moved.
        """
        size = self.style.text_size if size is None else size
        color = self.style.color if color is None else color
        text = str(text)

        text_width = self.measure(text, size)
        center, text_origin, radius = coordinate_utils.circle_text_layout(
            x, y, text_width, size, CIRCLE_TEXT_OFFSET
        )

        page.draw_ellipse(center[0], center[1], radius, radius,
                          border_width=border_width, border_color=color)
        page.draw_text(text, self.font_name, size, color, x=text_origin[0], y=text_origin[1])
