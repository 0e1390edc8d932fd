"""Render Result Dataclass

Result outputs from the rendering pipeline.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RenderResult:
    """Result from the rendering pipeline.

    Attributes:
        status: Processing status ("completed", "failed")
        status_message: Human-readable status message
        output_pdf_path: Path to the generated PDF (None on failure)
        page_count: Pages in the generated PDF, merged pages included
        error: Error message if rendering failed (None otherwise)
    """

    # Status
    status: str  # "completed", "failed"
    status_message: str

    # Output Files
    output_pdf_path: Optional[str] = None
    page_count: int = 0

    # Error Handling
    error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True if rendering completed and a PDF was written."""
        return self.status == "completed" and self.output_pdf_path is not None

    @property
    def is_failed(self) -> bool:
        """True if rendering failed with an error."""
        return self.status == "failed"

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Returns:
            Tuple of (output_file, status)
        """
        import gradio as gr

        if self.is_failed:
            return gr.update(value=None, visible=False), self.status_message

        return gr.update(value=self.output_pdf_path, visible=True), self.status_message
