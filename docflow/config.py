"""Configuration Constants

Default values for the document-flow layout engine and rendering pipeline.
"""
from reportlab.lib.pagesizes import A4

# Page Setup
DEFAULT_PAGE_SIZE = A4  # (595.27, 841.89) points
DEFAULT_MARGINS = {
    "left": 25,
    "right": 25,
    "top": 25,
    "bottom": 25,
}

# Style State Defaults
DEFAULT_TEXT_SIZE = 12
DEFAULT_CIRCLE_SCALE = 15

# Paragraph / HTML Layout
DEFAULT_PARAGRAPH_GAP = 8  # Extra space above a <p>, in points
BULLET = "• "

# Cell Defaults
CELL_PADDING = 4
CELL_LINE_THICKNESS = 1
CELL_BORDER_OPACITY = 0.3

# Circle Text
CIRCLE_BORDER_WIDTH = 2
CIRCLE_TEXT_OFFSET = 5  # Gap between the anchor point and the circle top

# Watermark
WATERMARK_SIZE = 30
WATERMARK_OPACITY = 0.25
WATERMARK_ROTATION = -45  # Degrees, clockwise
WATERMARK_OFFSET_RATIO = 0.36  # Fraction of text width used to center the rotated text

# Remote Documents
DEFAULT_FETCH_TIMEOUT = 30  # Seconds

# Progress Steps (for UI progress tracking)
PROGRESS_STEPS = {
    "VALIDATE": 0.05,
    "BUILD_DOCUMENT": 0.15,
    "RENDER_HTML": 0.35,
    "WATERMARK": 0.60,
    "MERGE": 0.70,
    "WRITE": 0.90,
    "COMPLETE": 1.0,
}

# Page Size Options (for the UI)
PAGE_SIZES = {
    "A4": A4,
    "Letter": (612.0, 792.0),
    "Legal": (612.0, 1008.0),
}
