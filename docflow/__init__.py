"""docflow - document-flow PDF rendering

Renders strings, wrapped paragraphs, tables, HTML fragments, images and
watermarks onto PDF pages with a flowing text cursor.
"""

from .document_builder import DocumentBuilder, FontVariant, Range, create_pdf_from_html
from .pipeline import RenderPipeline
from .render_options import RenderOptions
from .render_result import RenderResult

__version__ = "0.1.0"

__all__ = [
    'DocumentBuilder',
    'FontVariant',
    'Range',
    'RenderOptions',
    'RenderPipeline',
    'RenderResult',
    'create_pdf_from_html',
]
