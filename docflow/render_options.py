"""Render Options Dataclass

Configuration options for the HTML-to-PDF rendering pipeline.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import DEFAULT_MARGINS, DEFAULT_PAGE_SIZE, DEFAULT_TEXT_SIZE, WATERMARK_SIZE


@dataclass
class RenderOptions:
    """Configuration options for the rendering pipeline.

    Attributes:
        html: HTML source rendered onto the first page
        output_path: Where to save the generated PDF

        # Page Setup
        page_size: (width, height) in points
        margins: Page margins in points (left, right, top, bottom)

        # Text Style
        text_size: Default text size in points
        color: Text color (name or hex string understood by ReportLab)
        use_unicode_fonts: If True, use DejaVu Sans instead of Helvetica

        # Post-processing
        watermark: Watermark text; empty to skip
        watermark_size: Watermark text size in points
        merge_urls: PDF URLs whose pages are appended after the rendered pages
    """

    # Required
    html: str
    output_path: str

    # Page Setup
    page_size: Tuple[float, float] = DEFAULT_PAGE_SIZE
    margins: Dict[str, float] = field(default_factory=lambda: DEFAULT_MARGINS.copy())

    # Text Style
    text_size: float = DEFAULT_TEXT_SIZE
    color: str = "black"
    use_unicode_fonts: bool = False

    # Post-processing
    watermark: Optional[str] = None
    watermark_size: float = WATERMARK_SIZE
    merge_urls: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if not self.output_path:
            raise ValueError("output_path must be provided")

        if self.text_size <= 0:
            raise ValueError(f"text_size must be positive, got {self.text_size}")

        if self.watermark and self.watermark_size <= 0:
            raise ValueError(f"watermark_size must be positive, got {self.watermark_size}")

        width, height = self.page_size
        if width <= 0 or height <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

        unknown = set(self.margins) - set(DEFAULT_MARGINS)
        if unknown:
            raise ValueError(f"Unknown margin keys: {sorted(unknown)}")
        for name, value in self.margins.items():
            if value < 0:
                raise ValueError(f"margin '{name}' must be non-negative, got {value}")

        if self.margins.get("left", 0) + self.margins.get("right", 0) >= width:
            raise ValueError("Left and right margins leave no room for text")
