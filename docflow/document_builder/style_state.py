"""Style State Module

Holds the font, size, color, circle scale and margin state shared by every
layout call, together with the stack of currently open markup nodes.

Setters never raise: invalid input is reported and the previous value is kept.
"""
import math
from dataclasses import replace
from typing import List, Mapping

from reportlab.lib import colors

from ..config import DEFAULT_CIRCLE_SCALE, DEFAULT_MARGINS, DEFAULT_TEXT_SIZE
from ..exceptions import ValidationError
from .coordinate_utils import Margins
from .font_manager import FontVariant

STRONG_NODE = "STRONG"
ITALIC_NODE = "I"
LIST_NODE = "UL"


def _to_number(value, label: str) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{label} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValidationError(f"{label} must be finite, got {value!r}")
    return number


def _positive_number(value, label: str) -> float:
    number = _to_number(value, label)
    if number <= 0:
        raise ValidationError(f"{label} must be larger than 0, got {value!r}")
    return number


class StyleState:
    """Mutable style state for one document session.

    Attributes are read through properties and changed only through the
    validating setters below.
    """

    def __init__(self):
        self._text_size = float(DEFAULT_TEXT_SIZE)
        self._circle_scale = float(DEFAULT_CIRCLE_SCALE)
        self._margins = Margins(**DEFAULT_MARGINS)
        self._color = colors.black
        self._font_variant = FontVariant.REGULAR
        self._nodes: List[str] = []

    # Getters

    @property
    def text_size(self) -> float:
        return self._text_size

    @property
    def circle_scale(self) -> float:
        return self._circle_scale

    @property
    def margins(self) -> Margins:
        return self._margins

    @property
    def color(self) -> colors.Color:
        return self._color

    @property
    def font_variant(self) -> FontVariant:
        return self._font_variant

    @property
    def current_nodes(self) -> List[str]:
        return list(self._nodes)

    @property
    def list_depth(self) -> int:
        """Number of open UL nodes, used as the LI indentation level."""
        return self._nodes.count(LIST_NODE)

    # Setters

    def set_text_size(self, value) -> bool:
        """Set the default text size; value must be a number larger than 0."""
        try:
            self._text_size = _positive_number(value, "Text size")
            return True
        except ValidationError as e:
            print(f"Warning: Error in set_text_size: {e}")
            return False

    def set_circle_scale(self, value) -> bool:
        """Set the circle scale; value must be a number larger than 0."""
        try:
            self._circle_scale = _positive_number(value, "Circle scale")
            return True
        except ValidationError as e:
            print(f"Warning: Error in set_circle_scale: {e}")
            return False

    def set_margin(self, partial) -> bool:
        """
        Merge new margin values over the current margins.

        Args:
            partial: Margins instance, or a mapping with any of the keys
                     left, right, top, bottom (non-negative numbers)

        Returns:
            True if the margins were updated
        """
        try:
            if isinstance(partial, Margins):
                partial = {name: getattr(partial, name) for name in Margins.field_names()}
            if not isinstance(partial, Mapping):
                raise ValidationError(f"Margins must be a mapping, got {partial!r}")

            unknown = set(partial) - set(Margins.field_names())
            if unknown:
                raise ValidationError(f"Unknown margin keys: {sorted(unknown)}")

            values = {}
            for key, value in partial.items():
                number = _to_number(value, f"Margin '{key}'")
                if number < 0:
                    raise ValidationError(f"Margin '{key}' must not be negative, got {value!r}")
                values[key] = number

            self._margins = replace(self._margins, **values)
            return True
        except ValidationError as e:
            print(f"Warning: Error in set_margin: {e}")
            return False

    def set_color(self, color) -> bool:
        """
        Set the default text/border color.

        Args:
            color: reportlab Color, hex string ("#336699"), named color or RGB tuple
        """
        try:
            if color is None:
                raise ValidationError("Please supply a valid color")
            try:
                self._color = colors.toColor(color)
            except ValueError as e:
                raise ValidationError(str(e))
            return True
        except ValidationError as e:
            print(f"Warning: Error in set_color: {e}")
            return False

    def set_font(self, variant) -> bool:
        """Select the active font variant (FontVariant or its string value)."""
        try:
            if variant is None:
                raise ValidationError("Please provide a font")
            try:
                self._font_variant = FontVariant(variant)
            except ValueError:
                raise ValidationError(f"Unknown font variant: {variant!r}")
            return True
        except ValidationError as e:
            print(f"Warning: Error in set_font: {e}")
            return False

    # Node stack

    def add_node(self, name: str) -> bool:
        """Push an open node name."""
        if not name:
            print("Warning: Error in add_node: Please enter a valid value")
            return False
        self._nodes.append(name)
        return True

    def remove_node(self, name: str) -> bool:
        """
        Remove the last occurrence of a node name.

        The match is not required to be on top of the stack, so out-of-order
        closes from malformed markup are tolerated.

        Returns:
            True if an occurrence was removed
        """
        if not name:
            print("Warning: Error in remove_node: Please enter a valid value")
            return False
        for index in range(len(self._nodes) - 1, -1, -1):
            if self._nodes[index] == name:
                del self._nodes[index]
                return True
        return False

    def resolve_font_variant(self) -> FontVariant:
        """Font variant implied by the open STRONG and I nodes."""
        bold = STRONG_NODE in self._nodes
        italic = ITALIC_NODE in self._nodes
        if bold and italic:
            return FontVariant.BOLD_ITALIC
        if bold:
            return FontVariant.BOLD
        if italic:
            return FontVariant.ITALIC
        return FontVariant.REGULAR

    def refresh_font(self) -> FontVariant:
        """Apply the variant implied by the node stack and return it."""
        self._font_variant = self.resolve_font_variant()
        return self._font_variant
