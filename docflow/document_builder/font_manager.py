"""Font Manager Module

Handles font variant registration, Unicode-capable font fallback chains and
text width measurement.
"""
import os
from enum import Enum
from typing import Dict, List, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..exceptions import FontError


class FontVariant(str, Enum):
    """The four faces a document can switch between."""

    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"


# Built-in PDF base-14 family, always available without embedding
STANDARD_FONTS = {
    FontVariant.REGULAR: "Helvetica",
    FontVariant.BOLD: "Helvetica-Bold",
    FontVariant.ITALIC: "Helvetica-Oblique",
    FontVariant.BOLD_ITALIC: "Helvetica-BoldOblique",
}

# Registered name and file name for each DejaVu face
UNICODE_FONT_FILES = {
    FontVariant.REGULAR: ("DejaVuSans", "DejaVuSans.ttf"),
    FontVariant.BOLD: ("DejaVuSans-Bold", "DejaVuSans-Bold.ttf"),
    FontVariant.ITALIC: ("DejaVuSans-Oblique", "DejaVuSans-Oblique.ttf"),
    FontVariant.BOLD_ITALIC: ("DejaVuSans-BoldOblique", "DejaVuSans-BoldOblique.ttf"),
}

UNICODE_FONT_DIRS = [
    os.path.join(os.path.dirname(__file__), '..', '..', 'fonts'),  # Bundled fonts
    '/usr/share/fonts/truetype/dejavu',
    '/usr/share/fonts/dejavu',
    '/Library/Fonts',  # macOS
    'C:\\Windows\\Fonts',  # Windows
]


class FontManager:
    """Manages the font family used for the four style variants.

    This class handles:
    - Mapping FontVariant values to registered ReportLab font names
    - Optional registration of a Unicode-capable TrueType family (DejaVu Sans)
    - Falling back to the built-in Helvetica family face by face
    - Width measurement, the only metric the layout engine relies on

    Attributes:
        font_names: Dict mapping each FontVariant to a registered font name
    """

    def __init__(self, use_unicode_fonts: bool = False, font_dirs: Optional[List[str]] = None):
        """
        Initialize FontManager.

        Args:
            use_unicode_fonts: If True, try to register DejaVu Sans for every variant
            font_dirs: Optional directories searched before the default locations
        """
        self.font_names: Dict[FontVariant, str] = dict(STANDARD_FONTS)
        if use_unicode_fonts:
            self._setup_unicode_fonts((font_dirs or []) + UNICODE_FONT_DIRS)

    def _setup_unicode_fonts(self, font_dirs: List[str]):
        """
        Register DejaVu Sans faces that support Cyrillic and other scripts.

        Each variant is looked up independently. A variant with no font file
        keeps its Helvetica face, so a missing italic never disables bold.

        WARNING: Helvetica does NOT cover non-Latin scripts!
        """
        print("DEBUG: Setting up Unicode fonts...")
        for variant, (font_name, file_name) in UNICODE_FONT_FILES.items():
            for font_dir in font_dirs:
                font_path = os.path.join(font_dir, file_name)
                if not os.path.exists(font_path):
                    continue
                try:
                    pdfmetrics.registerFont(TTFont(font_name, font_path))
                except Exception as e:
                    print(f"DEBUG: Failed to register font {font_path}: {e}")
                    continue
                self.font_names[variant] = font_name
                print(f"DEBUG: Registered {variant.value} font from: {font_path}")
                break
            else:
                print(f"Warning: No {file_name} found, using {STANDARD_FONTS[variant]} for {variant.value} text")

    def register_family(self, paths: Dict[FontVariant, str], family_name: str):
        """
        Register an explicit TrueType family.

        Args:
            paths: Dict mapping FontVariant to a .ttf path (missing variants keep their current face)
            family_name: Prefix for the registered font names

        Raises:
            FontError: If a file does not exist or cannot be registered
        """
        for variant, font_path in paths.items():
            variant = FontVariant(variant)
            if not os.path.exists(font_path):
                raise FontError(f"Font file not found: {font_path}")

            font_name = f"{family_name}-{variant.value}"
            try:
                pdfmetrics.registerFont(TTFont(font_name, font_path))
            except Exception as e:
                raise FontError(f"Failed to register font {font_path}: {e}")
            self.font_names[variant] = font_name

    def get_font_name(self, variant: FontVariant = FontVariant.REGULAR) -> str:
        """
        Get the registered font name for a variant.

        Args:
            variant: Style variant

        Returns:
            Font name string suitable for use with ReportLab (e.g., 'Helvetica-Bold')
        """
        return self.font_names[FontVariant(variant)]

    def width_of_text_at_size(self, text: str, size: float,
                              variant: FontVariant = FontVariant.REGULAR) -> float:
        """
        Measure the advance width of a string.

        Args:
            text: Text to measure
            size: Font size in points
            variant: Style variant whose font is used

        Returns:
            Width in points
        """
        return pdfmetrics.stringWidth(text, self.get_font_name(variant), size)
