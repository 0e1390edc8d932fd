"""docflow - Main Application

Gradio application for rendering HTML fragments to PDF.
"""
import sys
import os
import tempfile
from datetime import datetime

# Add current directory to path for imports (for HuggingFace Spaces)
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.getcwd())

import gradio as gr
from dotenv import load_dotenv

# Load environment variables (DOCFLOW_FETCH_TIMEOUT)
load_dotenv()

from docflow.config import DEFAULT_TEXT_SIZE, PAGE_SIZES, WATERMARK_SIZE
from docflow.pipeline import RenderPipeline
from docflow.render_options import RenderOptions
from docflow.utils import normalize_urls

SAMPLE_HTML = """<p>Invoice <strong>#1024</strong></p>
<p>Thank you for your order. The items below ship <i>within two days</i>.</p>
<ul><li>Paper, A4</li><li>Toner <strong>black</strong></li></ul>
<table>
  <thead><tr><th>Item</th><th>Qty</th><th>Price</th></tr></thead>
  <tbody>
    <tr><td>Paper</td><td>2</td><td>9.90</td></tr>
    <tr><td>Toner</td><td>1</td><td>54.00</td></tr>
  </tbody>
</table>"""


def render_pdf(
    html: str,
    text_size: float,
    margin: float,
    page_size: str,
    color: str,
    watermark: str,
    watermark_size: float,
    merge_urls: str,
    use_unicode_fonts: bool,
    progress=gr.Progress()
) -> tuple:
    """
    Render the HTML fragment and return the PDF for download.

    Args:
        html: HTML source
        text_size: Default text size in points
        margin: Margin applied to all four page sides, in points
        page_size: Key of config.PAGE_SIZES
        color: Text color (name or hex)
        watermark: Optional watermark text
        watermark_size: Watermark text size in points
        merge_urls: PDF URLs to append, one per line
        use_unicode_fonts: If True, use DejaVu Sans for non-Latin text
        progress: Gradio progress tracker

    Returns:
        Tuple of (output file update, status message)
    """
    if not html or not html.strip():
        raise gr.Error("Please enter some HTML to render")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(tempfile.gettempdir(), f"docflow_{timestamp}.pdf")

    try:
        options = RenderOptions(
            html=html,
            output_path=output_path,
            page_size=PAGE_SIZES.get(page_size, PAGE_SIZES["A4"]),
            margins={side: margin for side in ("left", "right", "top", "bottom")},
            text_size=text_size,
            color=color or "black",
            use_unicode_fonts=use_unicode_fonts,
            watermark=watermark.strip() if watermark else None,
            watermark_size=watermark_size,
            merge_urls=normalize_urls(merge_urls),
        )
    except ValueError as e:
        raise gr.Error(str(e))

    pipeline = RenderPipeline(progress_callback=lambda p, d: progress(p, desc=d))
    result = pipeline.process(options)
    return result.to_gradio_outputs()


# Create Gradio interface
with gr.Blocks(title="docflow") as app:
    gr.Markdown("# 📄 docflow")

    gr.Markdown("""
    Render HTML fragments (paragraphs, bold/italic text, bulleted lists and tables) to PDF.
    """)

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Setup")
            gr.Markdown("### Page")

            page_size = gr.Dropdown(
                choices=list(PAGE_SIZES),
                value="A4",
                label="Page size"
            )

            margin = gr.Slider(
                minimum=0,
                maximum=100,
                value=25,
                step=1,
                label="Margin (points)",
                info="Applied to all four sides (default: 25)"
            )

            gr.Markdown("---")
            gr.Markdown("### Text")

            text_size = gr.Slider(
                minimum=6,
                maximum=36,
                value=DEFAULT_TEXT_SIZE,
                step=0.5,
                label="Text size (points)"
            )

            color = gr.Textbox(
                label="Text color",
                value="black",
                info="Color name or hex value, e.g. #336699"
            )

            use_unicode_fonts = gr.Checkbox(
                label="Use Unicode fonts (DejaVu Sans)",
                value=False,
                info="Enable for Cyrillic and other non-Latin text"
            )

            gr.Markdown("---")
            gr.Markdown("### ⚙️ Post-processing")

            watermark = gr.Textbox(
                label="Watermark text",
                placeholder="DRAFT"
            )

            watermark_size = gr.Slider(
                minimum=10,
                maximum=120,
                value=WATERMARK_SIZE,
                step=1,
                label="Watermark size (points)",
                interactive=False
            )

            merge_urls = gr.Textbox(
                label="Append PDFs",
                lines=3,
                placeholder="https://example.com/terms.pdf",
                info="One URL per line; pages are appended after the rendered page"
            )

        with gr.Column():
            gr.Markdown("## Document")

            html_input = gr.Code(
                label="HTML",
                language="html",
                value=SAMPLE_HTML,
                lines=18
            )

            render_btn = gr.Button(
                "🖨️ Render PDF",
                variant="primary",
                size="lg"
            )

            main_status = gr.Textbox(
                label="Status",
                interactive=False
            )

            output_file = gr.File(
                label="📥 Download PDF",
                type="filepath",
                visible=False
            )

    # Grey out watermark size until watermark text is entered
    watermark.change(
        fn=lambda text: gr.update(interactive=bool(text and text.strip())),
        inputs=[watermark],
        outputs=[watermark_size]
    )

    # Connect rendering function
    render_btn.click(
        fn=render_pdf,
        inputs=[html_input, text_size, margin, page_size, color, watermark,
                watermark_size, merge_urls, use_unicode_fonts],
        outputs=[output_file, main_status]
    )


if __name__ == "__main__":
    app.launch()
