"""HTML Rendering Pipeline

Main orchestration logic for turning an HTML fragment into a PDF file.
"""
from typing import Callable, Optional

from .config import PROGRESS_STEPS
from .document_builder import DocumentBuilder, PdfFetcher
from .exceptions import DocFlowError, PipelineStepError
from .render_options import RenderOptions
from .render_result import RenderResult
from .utils import format_file_size, normalize_urls


class RenderPipeline:
    """HTML-to-PDF pipeline orchestrator.

    This class runs the complete rendering workflow:
    1. Validation - check the HTML and the merge URLs
    2. Document setup - page size, text size, margins and color
    3. HTML rendering - lay the fragment out on the first page
    4. Watermark - optional diagonal text on the rendered pages
    5. Merge - optional remote PDFs appended after the rendered pages
    6. Write - save the PDF to options.output_path

    Attributes:
        fetcher: PdfFetcher shared by every document this pipeline builds
        progress_callback: Optional callback for progress updates (progress, desc)
    """

    def __init__(
        self,
        fetcher: Optional[PdfFetcher] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None
    ):
        """Initialize pipeline with an optional fetcher and progress callback.

        Args:
            fetcher: PdfFetcher used for merge URLs (a default one is created if None)
            progress_callback: Optional function(progress: float, desc: str) for progress updates
        """
        self.fetcher = fetcher or PdfFetcher()
        self.progress = progress_callback or (lambda p, d: None)

    def process(self, options: RenderOptions) -> RenderResult:
        """Execute the complete rendering pipeline.

        Args:
            options: Rendering configuration options

        Returns:
            RenderResult with output path and status

        Raises:
            Does not raise - all errors are captured in RenderResult.error
        """
        try:
            # Step 1: Validation
            self.progress(PROGRESS_STEPS["VALIDATE"], "Validating input...")
            merge_urls = self._validate(options)

            # Step 2: Document setup
            self.progress(PROGRESS_STEPS["BUILD_DOCUMENT"], "Setting up document...")
            builder = self._build_document(options)

            # Step 3: HTML rendering
            self.progress(PROGRESS_STEPS["RENDER_HTML"], "Rendering HTML...")
            self._run_step("render_html", builder.render_html, options.html)

            # Step 4: Optional watermark
            if options.watermark:
                self.progress(PROGRESS_STEPS["WATERMARK"], "Drawing watermark...")
                if not builder.draw_watermark(options.watermark, size=options.watermark_size):
                    raise PipelineStepError("watermark", ValueError("Watermark could not be drawn"))

            # Step 5: Optional merge
            if merge_urls:
                self.progress(PROGRESS_STEPS["MERGE"], f"Merging {len(merge_urls)} document(s)...")
                if builder.merge_pdf(merge_urls) is None:
                    raise PipelineStepError("merge", ValueError("One or more documents could not be merged"))

            # Step 6: Write output
            self.progress(PROGRESS_STEPS["WRITE"], "Writing PDF...")
            pdf_bytes = self._run_step("write", builder.finalize)

            self.progress(PROGRESS_STEPS["COMPLETE"], "Complete!")

            return RenderResult(
                status="completed",
                status_message=(
                    f"✅ Rendered {builder.page_count} page(s) "
                    f"({format_file_size(len(pdf_bytes))})"
                ),
                output_pdf_path=options.output_path,
                page_count=builder.page_count,
            )

        except Exception as e:
            return RenderResult(
                status="failed",
                status_message=f"Rendering failed: {str(e)}",
                error=str(e),
            )

    def _validate(self, options: RenderOptions) -> list:
        """Check the HTML source and normalize the merge URLs.

        Returns:
            List of merge URLs

        Raises:
            PipelineStepError: If there is no HTML to render
        """
        if not options.html or not options.html.strip():
            raise PipelineStepError("validate", ValueError("No HTML content provided"))

        return normalize_urls(options.merge_urls)

    def _build_document(self, options: RenderOptions) -> DocumentBuilder:
        """Create a builder with the configured style and one blank page.

        Raises:
            PipelineStepError: If a style value is rejected
        """
        builder = DocumentBuilder(
            output_path=options.output_path,
            use_unicode_fonts=options.use_unicode_fonts,
            fetcher=self.fetcher,
        )

        settings = (
            ("text_size", builder.set_text_size, options.text_size),
            ("margins", builder.set_margin, options.margins),
            ("color", builder.set_color, options.color),
        )
        for name, setter, value in settings:
            if not setter(value):
                raise PipelineStepError("build_document", ValueError(f"Invalid {name}: {value!r}"))

        builder.add_new_page(options.page_size)
        return builder

    def _run_step(self, step_name: str, func, *args):
        try:
            return func(*args)
        except DocFlowError as e:
            raise PipelineStepError(step_name, e)
