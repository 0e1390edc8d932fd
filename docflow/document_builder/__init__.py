"""Document Builder Package

This package provides the document-flow layout engine:

Core Classes:
- DocumentBuilder: Document session and public facade (from builder.py)
- FontManager: Font variants, Unicode fallback and width measurement
- StyleState: Text size, color, margins, font variant and node stack
- Page: Cursor-bearing adapter over the ReportLab canvas
- TextLayout: Single lines, wrapped paragraphs and circled text
- TableLayout: Bordered cells and tables
- HtmlTranslator: Parsed HTML tree to layout calls
- PdfFetcher: Remote PDF download

Utilities:
- coordinate_utils: Ranges, margins and pure geometry functions

Helper Functions:
- create_pdf_from_html: Render an HTML fragment to a PDF file
"""

# Import core classes
from .builder import DocumentBuilder, create_pdf_from_html
from .font_manager import FontManager, FontVariant
from .style_state import StyleState
from .page import Page
from .text_layout import TextLayout
from .table_layout import TableLayout
from .html_translator import HtmlTranslator, NodeKind, classify, extract_table
from .pdf_fetcher import PdfFetcher
from .coordinate_utils import CellGeometry, Margins, Range
from . import coordinate_utils

# Expose public API
__all__ = [
    # Main builder class
    'DocumentBuilder',

    # Helper functions
    'create_pdf_from_html',
    'classify',
    'extract_table',

    # Component classes
    'FontManager',
    'StyleState',
    'Page',
    'TextLayout',
    'TableLayout',
    'HtmlTranslator',
    'PdfFetcher',

    # Value types
    'FontVariant',
    'NodeKind',
    'Range',
    'Margins',
    'CellGeometry',

    # Utilities module
    'coordinate_utils',
]
