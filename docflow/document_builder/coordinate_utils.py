"""Coordinate and Geometry Utilities

This module provides pure value types and functions used by the layout
components:

- Range and Margins value types
- Default range computation from page width and margins
- Horizontal alignment offsets
- Cell border specifier parsing and border segment geometry
- Circle-with-text and watermark placement

All coordinates are PDF points with the origin at the bottom-left of the
page (y grows upward), matching the ReportLab canvas. Every function here is
pure (no side effects) and can be tested in isolation.
"""
from dataclasses import dataclass, fields
from typing import Dict, FrozenSet, Mapping, NamedTuple, Tuple, Union

from ..exceptions import InvalidOptionError, InvalidRangeError

Point = Tuple[float, float]

BORDER_EDGES = ("t", "b", "l", "r")


@dataclass(frozen=True)
class Range:
    """Horizontal bounds [left, right] for laid-out content."""

    left: float
    right: float

    def __post_init__(self):
        if not self.left < self.right:
            raise InvalidRangeError(self.left, self.right)

    @property
    def width(self) -> float:
        return self.right - self.left

    @classmethod
    def coerce(cls, value: Union["Range", Tuple[float, float], Mapping[str, float]]) -> "Range":
        """
        Build a Range from a Range, a (left, right) pair or a {"left", "right"} mapping.

        Raises:
            InvalidRangeError: If left >= right
            InvalidOptionError: If the value has an unsupported shape
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(float(value["left"]), float(value["right"]))
            except KeyError as e:
                raise InvalidOptionError(f"Range mapping is missing {e}")
        try:
            left, right = (float(bound) for bound in value)
        except (TypeError, ValueError):
            raise InvalidOptionError(f"Unsupported range value: {value!r}")
        return cls(left, right)


@dataclass(frozen=True)
class Margins:
    """Page margins in points."""

    left: float = 25
    right: float = 25
    top: float = 25
    bottom: float = 25

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


class CellGeometry(NamedTuple):
    """Resolved outline of a drawn cell."""

    left: float  # x of the left edge (x - padding)
    right: float  # x of the right edge (x + width)
    top: float
    bottom: float


def default_range(page_width: float, margins: Margins) -> Range:
    """
    Compute the default horizontal range of a page.

    Examples:
        >>> default_range(595.0, Margins())
        Range(left=25, right=570.0)
    """
    return Range(margins.left, page_width - margins.right)


def centered_x(bounds: Range, text_width: float) -> float:
    """X position that centers text of the given width inside bounds."""
    return bounds.left + (bounds.width / 2) - (text_width / 2)


def right_aligned_x(bounds: Range, text_width: float) -> float:
    """X position that makes text end exactly at bounds.right."""
    return bounds.right - text_width


def parse_border_spec(border) -> FrozenSet[str]:
    """
    Parse a cell border specifier into the set of edges to stroke.

    Args:
        border: True (all four edges), False/None (no edges), or a string whose
                characters (case-insensitive) select from t, r, b, l

    Returns:
        Frozen set containing a subset of {"t", "r", "b", "l"}

    Raises:
        InvalidOptionError: If the specifier is neither a bool nor a string

    Examples:
        >>> sorted(parse_border_spec("TbX"))
        ['b', 't']
    """
    if border is True:
        return frozenset(BORDER_EDGES)
    if border is False or border is None:
        return frozenset()
    if isinstance(border, str):
        return frozenset(char for char in border.lower() if char in BORDER_EDGES)
    raise InvalidOptionError(f"Unsupported border specifier: {border!r}")


def cell_bottom(top: float, consumed: float, padding: float, height: float = None) -> float:
    """
    Y of a cell's bottom edge.

    An explicit height wins; otherwise the edge sits one padding below the
    vertical space the paragraph actually consumed.
    """
    if height:
        return top - height
    return top - consumed - padding


def cell_border_segments(
    x: float,
    width: float,
    top: float,
    bottom: float,
    padding: float,
    thickness: float,
    edges: FrozenSet[str],
) -> Dict[str, Tuple[Point, Point]]:
    """
    Compute the line segments for the selected edges of a cell.

    The left edge sits one padding left of the text origin. Vertical edges
    overshoot by half the line thickness so the corners close.

    Args:
        x: Text origin of the cell
        width: Cell width (text area)
        top: Y of the top edge
        bottom: Y of the bottom edge
        padding: Horizontal padding on the left of the text
        thickness: Border line thickness
        edges: Subset of {"t", "r", "b", "l"}

    Returns:
        Ordered dict of edge letter -> (start, end), in t, b, l, r order
    """
    left_x = x - padding
    right_x = x + width
    overshoot = thickness / 2

    all_segments = {
        "t": ((left_x, top), (right_x, top)),
        "b": ((left_x, bottom), (right_x, bottom)),
        "l": ((left_x, top + overshoot), (left_x, bottom - overshoot)),
        "r": ((right_x, top + overshoot), (right_x, bottom - overshoot)),
    }
    return {edge: all_segments[edge] for edge in BORDER_EDGES if edge in edges}


def circle_text_layout(x: float, y: float, text_width: float, size: float,
                       offset: float) -> Tuple[Point, Point, float]:
    """
    Place a circle under (x, y) sized to the text width, with the text centred in it.

    Returns:
        Tuple of (circle_center, text_origin, radius)
    """
    center = (x, y - text_width - offset)
    text_origin = (center[0] - text_width / 2, center[1] - size / 3)
    return center, text_origin, text_width


def watermark_origin(page_width: float, page_height: float, text_width: float,
                     ratio: float) -> Point:
    """
    Origin for diagonal watermark text so it crosses the page center.

    Examples:
        >>> watermark_origin(600, 800, 100, 0.36)
        (264.0, 436.0)
    """
    return (page_width / 2) - text_width * ratio, (page_height / 2) + text_width * ratio
