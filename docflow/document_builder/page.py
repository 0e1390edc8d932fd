"""Page Module

Cursor-bearing adapter over the ReportLab canvas of the active page.

ReportLab draws by absolute coordinates; layout code instead works against a
text cursor that it moves and reads. A Page owns that cursor and forwards
drawing calls to the canvas. A Page is only valid until the next page is
started on the same canvas; serializing the document moves the current page
onto a fresh canvas.
"""
from typing import Tuple

from reportlab.lib import colors
from reportlab.pdfgen.canvas import Canvas

Point = Tuple[float, float]


class Page:
    """The active drawing surface and its cursor.

    Attributes:
        canvas: ReportLab Canvas the page draws on
        width: Page width in points
        height: Page height in points
        x, y: Cursor position in points (origin bottom-left)
        drawn: True once anything was drawn through this page
    """

    def __init__(self, canvas: Canvas, width: float, height: float, index: int = 0):
        self.canvas = canvas
        self.width = width
        self.height = height
        self.index = index
        self.x = 0.0
        self.y = 0.0
        self.drawn = False

    # Cursor

    def move_to(self, x: float, y: float):
        self.x = x
        self.y = y

    def move_right(self, dx: float):
        self.x += dx

    def move_down(self, dy: float):
        self.y -= dy

    def get_cursor(self) -> Point:
        return self.x, self.y

    # Drawing primitives

    def draw_text(self, text: str, font_name: str, size: float, color: colors.Color,
                  opacity: float = 1.0, x: float = None, y: float = None, rotate: float = 0):
        """
        Draw a single line of text. The cursor is not moved.

        Args:
            text: Text to draw
            font_name: Registered ReportLab font name
            size: Font size in points
            color: Fill color
            opacity: Fill alpha (0.0-1.0)
            x, y: Explicit origin; defaults to the cursor
            rotate: Rotation in degrees around the origin (counter-clockwise)
        """
        origin_x = self.x if x is None else x
        origin_y = self.y if y is None else y

        self.canvas.saveState()
        self.canvas.setFont(font_name, size)
        self.canvas.setFillColor(color, alpha=opacity)
        if rotate:
            self.canvas.translate(origin_x, origin_y)
            self.canvas.rotate(rotate)
            self.canvas.drawString(0, 0, text)
        else:
            self.canvas.drawString(origin_x, origin_y, text)
        self.canvas.restoreState()
        self.drawn = True

    def draw_line(self, start: Point, end: Point, thickness: float, color: colors.Color,
                  opacity: float = 1.0):
        self.canvas.saveState()
        self.canvas.setLineWidth(thickness)
        self.canvas.setStrokeColor(color, alpha=opacity)
        self.canvas.line(start[0], start[1], end[0], end[1])
        self.canvas.restoreState()
        self.drawn = True

    def draw_ellipse(self, x: float, y: float, x_scale: float, y_scale: float,
                     border_width: float, border_color: colors.Color):
        """Stroke an unfilled ellipse centred at (x, y) with radii x_scale and y_scale."""
        self.canvas.saveState()
        self.canvas.setLineWidth(border_width)
        self.canvas.setStrokeColor(border_color)
        self.canvas.ellipse(x - x_scale, y - y_scale, x + x_scale, y + y_scale, stroke=1, fill=0)
        self.canvas.restoreState()
        self.drawn = True

    def draw_image(self, image, x: float, y: float, width: float, height: float):
        """Draw an image (path or ImageReader) with its bottom-left corner at (x, y)."""
        self.canvas.drawImage(image, x, y, width=width, height=height, mask='auto')
        self.drawn = True
