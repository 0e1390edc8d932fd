"""Document Builder Module

Orchestrates PDF rendering by coordinating specialized components:
- FontManager: Font variants and width measurement
- StyleState: Text size, color, margins, font variant and node stack
- Page: Cursor-bearing adapter over the ReportLab canvas
- TextLayout / TableLayout: Text, paragraph, cell and table layout
- HtmlTranslator: Parsed HTML tree to layout calls
- PdfFetcher: Remote PDF download for merging

The builder is one document session: it owns the canvas, the active page and
the style state, and forwards layout calls to the components with the active
page passed explicitly.
"""
import base64
import io
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from PIL import Image as PILImage
from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import (
    DEFAULT_PAGE_SIZE,
    WATERMARK_OFFSET_RATIO,
    WATERMARK_OPACITY,
    WATERMARK_ROTATION,
    WATERMARK_SIZE,
)
from ..exceptions import DocumentIOError, ImageEmbedError
from ..utils import decode_base64_image, format_file_size, normalize_urls
from . import coordinate_utils
from .coordinate_utils import CellGeometry, Margins
from .font_manager import FontManager, FontVariant
from .html_translator import HtmlTranslator
from .page import Page
from .pdf_fetcher import PdfFetcher
from .style_state import StyleState
from .table_layout import TableLayout
from .text_layout import TextLayout


@dataclass(frozen=True)
class _Watermark:
    text: str
    size: float
    color: colors.Color
    page_count: int  # Pages that existed when the watermark was requested


def _writer_bytes(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class DocumentBuilder:
    """Build a PDF document page by page with a flowing text cursor.

    Components:
    - font_manager: Font names and text measurement
    - style: Shared StyleState
    - text_layout: draw_text / draw_paragraph / draw_circle_text
    - table_layout: draw_cell / draw_table
    - html_translator: render_html
    - fetcher: Remote PDF loading for merge_pdf

    Serializing the document (to_bytes, finalize, merge_pdf, generate_pdf_url)
    takes a snapshot: drawing continues on the current page, and new pages are
    appended after the serialized ones.
    """

    def __init__(self, output_path: str = None, use_unicode_fonts: bool = False,
                 fetcher: PdfFetcher = None):
        """
        Initialize document builder.

        Args:
            output_path: Where finalize() saves the PDF (optional)
            use_unicode_fonts: If True, register DejaVu Sans for non-Latin scripts
            fetcher: Optional PdfFetcher used by fetch_pdf / merge_pdf
        """
        self.output_path = output_path
        self.font_manager = FontManager(use_unicode_fonts=use_unicode_fonts)
        self.style = StyleState()
        self.text_layout = TextLayout(self.style, self.font_manager)
        self.table_layout = TableLayout(self.text_layout)
        self.html_translator = HtmlTranslator(self.text_layout, self.table_layout)
        self.fetcher = fetcher or PdfFetcher()

        self._current_page: Optional[Page] = None
        self._page_count = 0
        self._pending_watermarks: List[_Watermark] = []
        self._committed: Optional[bytes] = None  # Document as of the last serialization
        self._open_canvas()

    # Pages

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def current_page(self) -> Optional[Page]:
        return self._current_page

    def set_current_page(self, page: Page) -> bool:
        if not page:
            print("Warning: Error in set_current_page: Please supply a valid page")
            return False
        self._current_page = page
        return True

    def add_new_page(self, dimensions: Optional[Tuple[float, float]] = None) -> Page:
        """
        Start a new page and place the cursor at the top-left margin corner.

        Args:
            dimensions: (width, height) in points; defaults to A4

        Returns:
            The new active Page
        """
        if self._segment_pages > 0 or self._reopened_page is not None:
            self._canvas.showPage()

        width, height = dimensions or DEFAULT_PAGE_SIZE
        self._canvas.setPageSize((width, height))

        page = Page(self._canvas, width, height, index=self._page_count)
        self._page_count += 1
        self._segment_pages += 1
        page.move_to(self.style.margins.left, height - self.style.margins.top)
        self.set_current_page(page)
        return page

    # Style state

    @property
    def text_size(self) -> float:
        return self.style.text_size

    @property
    def circle_scale(self) -> float:
        return self.style.circle_scale

    @property
    def margins(self) -> Margins:
        return self.style.margins

    @property
    def color(self) -> colors.Color:
        return self.style.color

    @property
    def current_font(self) -> str:
        return self.text_layout.font_name

    @property
    def current_nodes(self) -> List[str]:
        return self.style.current_nodes

    def set_text_size(self, value) -> bool:
        return self.style.set_text_size(value)

    def set_circle_scale(self, value) -> bool:
        return self.style.set_circle_scale(value)

    def set_margin(self, partial) -> bool:
        return self.style.set_margin(partial)

    def set_color(self, color) -> bool:
        return self.style.set_color(color)

    def set_font(self, variant: Union[FontVariant, str]) -> bool:
        return self.style.set_font(variant)

    def add_node(self, name: str) -> bool:
        return self.style.add_node(name)

    def remove_node(self, name: str) -> bool:
        return self.style.remove_node(name)

    # Layout

    def next_line(self):
        self.text_layout.next_line(self._current_page)

    def draw_text(self, text: str, **options):
        """Draw one aligned line; see TextLayout.draw_text for options."""
        self.text_layout.draw_text(self._current_page, text, **options)

    def draw_paragraph(self, text: str, **options) -> List[str]:
        """Draw wrapped text; see TextLayout.draw_paragraph for options."""
        return self.text_layout.draw_paragraph(self._current_page, text, **options)

    def draw_cell(self, text: str, x: float, y: float, width: float, **options) -> CellGeometry:
        """Draw a bordered cell; see TableLayout.draw_cell for options."""
        return self.table_layout.draw_cell(self._current_page, text, x, y, width, **options)

    def draw_table(self, header: Optional[Sequence[str]] = None,
                   data: Optional[Sequence[Sequence[str]]] = None, **options):
        """Draw a table; see TableLayout.draw_table for options."""
        self.table_layout.draw_table(self._current_page, header, data, **options)

    def draw_dataframe(self, df, **options):
        """
        Draw a pandas DataFrame as a table.

        Column labels become the header row; every value is drawn as text.
        """
        header = [str(column) for column in df.columns]
        rows = df.astype(str).values.tolist()
        self.draw_table(header, rows, **options)

    def render_html(self, html, **options):
        """Render an HTML string or parsed tree; see HtmlTranslator.render for options."""
        self.html_translator.render(self._current_page, html, **options)

    def draw_circle_text(self, x: float, y: float, text, **options):
        """Draw text centred in a circle hanging below (x, y)."""
        self.text_layout.draw_circle_text(self._current_page, x, y, text, **options)

    def add_image(self, x: float, y: float, base64_image: str, image_scale: float = 1.0) -> bool:
        """
        Draw a base64 encoded image with its bottom-left corner at (x, y).

        Args:
            x, y: Position in points
            base64_image: Data URI or raw base64 (PNG, JPEG, or any format Pillow reads)
            image_scale: Factor applied to the image's pixel size

        Returns:
            True if the image was drawn
        """
        try:
            image_bytes = decode_base64_image(base64_image)
            try:
                with PILImage.open(io.BytesIO(image_bytes)) as img:
                    img_width, img_height = img.size
            except (OSError, ValueError) as e:
                raise ImageEmbedError(str(e))

            self._current_page.draw_image(
                ImageReader(io.BytesIO(image_bytes)),
                x, y,
                img_width * image_scale,
                img_height * image_scale,
            )
            return True
        except ImageEmbedError as e:
            print(f"Warning: Error in add_image: {e}")
            return False

    def draw_watermark(self, text: str, size: float = WATERMARK_SIZE) -> bool:
        """
        Mark every page that exists now with diagonal, translucent bold text.

        The text is stamped when the document is next serialized; pages
        added after this call are not marked.

        Returns:
            True if the watermark was recorded
        """
        if not text:
            print("Warning: Error in draw_watermark: The text provided must be a valid value")
            return False

        self._pending_watermarks.append(
            _Watermark(text=str(text), size=size, color=self.style.color, page_count=self._page_count)
        )
        return True

    # Remote documents

    def fetch_pdf(self, url: str) -> Optional[PdfReader]:
        """
        Load a PDF from a URL.

        Returns:
            PdfReader, or None if the download or decode failed
        """
        try:
            return self.fetcher.fetch_pdf(url)
        except DocumentIOError as e:
            print(f"Warning: Error in fetch_pdf: {e}")
            return None

    def merge_pdf(self, urls: Union[str, List[str]]) -> Optional[bytes]:
        """
        Append the pages of remote PDFs after this document's pages.

        URLs are fetched one after another; the merge is committed only when
        every document was fetched and decoded.

        Args:
            urls: One URL or a list of URLs

        Returns:
            Bytes of the merged document, or None on failure
        """
        url_list = normalize_urls(urls)
        if not url_list:
            print("Warning: Error in merge_pdf: A valid URL must be provided")
            return None

        fetched = []
        for url in url_list:
            try:
                fetched.append(self.fetcher.fetch_pdf(url))
            except DocumentIOError as e:
                print(f"Warning: Error in merge_pdf: {e}")
                return None

        writer = PdfWriter()
        writer.append(PdfReader(io.BytesIO(self.to_bytes())))
        for reader in fetched:
            writer.append(reader)

        self._committed = _writer_bytes(writer)
        self._page_count = len(writer.pages)
        return self._committed

    # Output

    def to_bytes(self) -> bytes:
        """
        Serialize the document.

        Drawing may continue afterwards; the next call includes it along with
        any merges and watermarks applied since.
        """
        if self._has_unsaved_drawing():
            self._flush_canvas()

        if self._pending_watermarks:
            self._committed = self._stamp_watermarks(self._committed)
        return self._committed

    def generate_pdf_url(self) -> str:
        """Serialize the document as a data: URI suitable for a download link."""
        encoded = base64.b64encode(self.to_bytes()).decode("ascii")
        return f"data:application/pdf;base64,{encoded}"

    def save(self, output_path: str) -> str:
        pdf_bytes = self.to_bytes()
        with open(output_path, "wb") as f:
            f.write(pdf_bytes)
        print(f"DEBUG: Saved {self._page_count} page(s) to {output_path} ({format_file_size(len(pdf_bytes))})")
        return output_path

    def finalize(self) -> bytes:
        """
        Serialize the document and save it to output_path when one was given.

        Returns:
            PDF bytes
        """
        pdf_bytes = self.to_bytes()
        if self.output_path:
            self.save(self.output_path)
        return pdf_bytes

    # Canvas segments

    def _open_canvas(self):
        """Start a fresh canvas; its first page reopens the current page, if any."""
        page = self._current_page
        self._buffer = io.BytesIO()
        self._canvas = pdfcanvas.Canvas(
            self._buffer, pagesize=(page.width, page.height) if page else DEFAULT_PAGE_SIZE
        )
        self._segment_pages = 0  # Pages started on this canvas
        self._reopened_page = page
        if page is not None:
            page.canvas = self._canvas
            page.drawn = False

    def _has_unsaved_drawing(self) -> bool:
        if self._committed is None or self._segment_pages > 0:
            return True
        return self._reopened_page is not None and self._reopened_page.drawn

    def _flush_canvas(self):
        """Close the open canvas and fold its pages into the committed document."""
        # Emit the open page even when nothing was drawn on it
        self._canvas.showPage()
        self._canvas.save()
        segment = list(PdfReader(io.BytesIO(self._buffer.getvalue())).pages)

        writer = PdfWriter()
        if self._committed is not None:
            writer.append(PdfReader(io.BytesIO(self._committed)))
        if self._reopened_page is not None:
            writer.pages[self._reopened_page.index].merge_page(segment.pop(0))
        for pdf_page in segment:
            writer.add_page(pdf_page)

        self._committed = _writer_bytes(writer)
        self._page_count = len(writer.pages)
        self._open_canvas()

    def _stamp_watermarks(self, pdf_bytes: bytes) -> bytes:
        writer = PdfWriter()
        writer.append(PdfReader(io.BytesIO(pdf_bytes)))

        for index, pdf_page in enumerate(writer.pages):
            width = float(pdf_page.mediabox.width)
            height = float(pdf_page.mediabox.height)
            for mark in self._pending_watermarks:
                if index < mark.page_count:
                    pdf_page.merge_page(self._watermark_overlay(mark, width, height))

        self._pending_watermarks = []
        return _writer_bytes(writer)

    def _watermark_overlay(self, mark: _Watermark, width: float, height: float) -> PageObject:
        buffer = io.BytesIO()
        overlay = pdfcanvas.Canvas(buffer, pagesize=(width, height))
        page = Page(overlay, width, height)

        text_width = self.font_manager.width_of_text_at_size(mark.text, mark.size, FontVariant.BOLD)
        x, y = coordinate_utils.watermark_origin(width, height, text_width, WATERMARK_OFFSET_RATIO)
        page.draw_text(
            mark.text,
            self.font_manager.get_font_name(FontVariant.BOLD),
            mark.size,
            mark.color,
            opacity=WATERMARK_OPACITY,
            x=x,
            y=y,
            rotate=WATERMARK_ROTATION,
        )
        overlay.save()
        return PdfReader(io.BytesIO(buffer.getvalue())).pages[0]


# Helper functions

def create_pdf_from_html(
    output_path: str,
    html: str,
    page_size: Optional[Tuple[float, float]] = None,
    text_size: float = None,
    margins: dict = None,
    use_unicode_fonts: bool = False,
) -> str:
    """
    Helper function to render an HTML fragment onto a single-page PDF.

    Args:
        output_path: Where to save the PDF
        html: HTML source
        page_size: (width, height) in points; defaults to A4
        text_size: Optional default text size
        margins: Optional partial margins mapping
        use_unicode_fonts: If True, use DejaVu Sans instead of Helvetica

    Returns:
        Path to created document
    """
    builder = DocumentBuilder(output_path, use_unicode_fonts=use_unicode_fonts)
    if text_size is not None:
        builder.set_text_size(text_size)
    if margins:
        builder.set_margin(margins)
    builder.add_new_page(page_size)
    builder.render_html(html)
    builder.finalize()
    return output_path
