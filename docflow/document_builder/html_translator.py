"""HTML Translator Module

Walks a parsed HTML tree (BeautifulSoup) and turns it into layout calls:
paragraph breaks, bold/italic switches, bulleted list items, tables and
inline word-wrapped text.

Raw tag names are only looked at by classify(); the rest of the module works
on NodeKind values.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
from reportlab.lib import colors

from ..config import BULLET, DEFAULT_PARAGRAPH_GAP
from .coordinate_utils import Range
from .page import Page
from .style_state import ITALIC_NODE, LIST_NODE, STRONG_NODE
from .table_layout import TableLayout
from .text_layout import TextLayout


class NodeKind(Enum):
    PARAGRAPH = "paragraph"
    STRONG = "strong"
    ITALIC = "italic"
    LIST = "list"
    LIST_ITEM = "list_item"
    LINE_BREAK = "line_break"
    TABLE = "table"
    TEXT = "text"
    IGNORED = "ignored"
    OTHER_ELEMENT = "other_element"


TAG_KINDS = {
    "P": NodeKind.PARAGRAPH,
    "STRONG": NodeKind.STRONG,
    "B": NodeKind.STRONG,
    "I": NodeKind.ITALIC,
    "EM": NodeKind.ITALIC,
    "UL": NodeKind.LIST,
    "LI": NodeKind.LIST_ITEM,
    "BR": NodeKind.LINE_BREAK,
    "TABLE": NodeKind.TABLE,
    "SCRIPT": NodeKind.IGNORED,
    "STYLE": NodeKind.IGNORED,
    "HEAD": NodeKind.IGNORED,
}

# Name pushed on the node stack; aliases collapse onto one canonical name
STACK_NAMES = {
    NodeKind.STRONG: STRONG_NODE,
    NodeKind.ITALIC: ITALIC_NODE,
    NodeKind.LIST: LIST_NODE,
}

STYLING_KINDS = (NodeKind.STRONG, NodeKind.ITALIC)

TOKEN_PATTERN = re.compile(r"(\s*)(\S+)(\s*)")


def classify(node: PageElement) -> NodeKind:
    """Map a BeautifulSoup node to its NodeKind."""
    if isinstance(node, Tag):
        return TAG_KINDS.get(node.name.upper(), NodeKind.OTHER_ELEMENT)
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return NodeKind.TEXT
    # Comments, doctype, CDATA, processing instructions
    return NodeKind.IGNORED


def tokenize(data: str) -> List[str]:
    """
    Split text into words, keeping one space where the source had whitespace.

    Examples:
        >>> tokenize("Hello ")
        ['Hello ']
        >>> tokenize("  two   words")
        [' two ', 'words']
    """
    return [
        (" " if lead else "") + word + (" " if trail else "")
        for lead, word, trail in TOKEN_PATTERN.findall(data)
    ]


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def extract_table(node: Tag) -> Tuple[List[str], List[List[str]]]:
    """
    Extract header and body cell text from a <table> element.

    The header comes from `thead th`, or from the th cells of the first row
    when there is no thead. Rows come from `tbody tr`, or from every row with
    td cells when there is no tbody. Inner markup is reduced to plain text.

    Returns:
        Tuple of (header, rows)
    """
    header = [_cell_text(th) for th in node.select("thead th")]
    if not header:
        first_row = node.find("tr")
        if first_row is not None:
            header = [_cell_text(th) for th in first_row.find_all("th")]

    body_rows = node.select("tbody tr")
    if not body_rows:
        body_rows = [row for row in node.find_all("tr") if row.find("td") is not None]

    rows = [[_cell_text(td) for td in row.find_all("td")] for row in body_rows]
    return header, rows


@dataclass(frozen=True)
class _RenderContext:
    bounds: Range
    size: float
    color: colors.Color
    paragraph_gap: float


class HtmlTranslator:
    """Translates a parsed HTML tree into layout calls on a page.

    The node stack in the shared StyleState records the open elements: a name
    is pushed when an element is entered and popped once all of its children
    have been processed, at which point bold/italic are re-resolved.
    """

    def __init__(self, text_layout: TextLayout, table_layout: TableLayout):
        self.text_layout = text_layout
        self.table_layout = table_layout
        self.style = text_layout.style
        self._trailing_space = False
        self._enter_handlers: Dict[NodeKind, Callable[[Page, Tag, _RenderContext], None]] = {
            NodeKind.PARAGRAPH: self._enter_paragraph,
            NodeKind.STRONG: self._enter_styling,
            NodeKind.ITALIC: self._enter_styling,
            NodeKind.LIST_ITEM: self._enter_list_item,
            NodeKind.LINE_BREAK: self._enter_line_break,
            NodeKind.TABLE: self._enter_table,
        }

    def render(self, page: Page, root, paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
               text_range=None, size: Optional[float] = None,
               color: Optional[colors.Color] = None):
        """
        Render the children of a parsed tree (or an HTML string) onto the page.

        Args:
            page: Active page
            root: BeautifulSoup document/Tag whose children are rendered, or raw HTML
            paragraph_gap: Extra space inserted above each <p>
            text_range: Horizontal range for all content
            size: Font size; defaults to the state text size
            color: Text color; defaults to the state color
        """
        if isinstance(root, str):
            root = BeautifulSoup(root, "html.parser")

        context = _RenderContext(
            bounds=self.text_layout.resolve_range(page, text_range),
            size=self.style.text_size if size is None else size,
            color=self.style.color if color is None else color,
            paragraph_gap=paragraph_gap,
        )

        page.move_to(context.bounds.left, page.y)
        self._trailing_space = False
        for child in list(root.contents):
            self._visit(page, child, context)

    def _visit(self, page: Page, node: PageElement, context: _RenderContext):
        kind = classify(node)
        if kind is NodeKind.TEXT:
            self._emit_text(page, str(node), context)
            return
        if kind is NodeKind.IGNORED:
            return

        name = STACK_NAMES.get(kind, node.name.upper())
        self.style.add_node(name)

        handler = self._enter_handlers.get(kind)
        if handler is not None:
            handler(page, node, context)

        # Table content is fully consumed by its handler
        if kind is not NodeKind.TABLE:
            for child in list(node.contents):
                self._visit(page, child, context)

        self.style.remove_node(name)
        if kind in STYLING_KINDS:
            self.style.refresh_font()

    # Element handlers

    def _enter_paragraph(self, page: Page, node: Tag, context: _RenderContext):
        page.move_to(context.bounds.left, page.y - context.paragraph_gap)
        self.text_layout.next_line(page, size=context.size, left=context.bounds.left)

    def _enter_styling(self, page: Page, node: Tag, context: _RenderContext):
        self.style.refresh_font()

    def _enter_list_item(self, page: Page, node: Tag, context: _RenderContext):
        self.text_layout.next_line(page, size=context.size, left=context.bounds.left)
        page.move_right(self.style.list_depth * self.style.margins.left)
        self.text_layout.draw_text(page, BULLET, size=context.size, color=context.color)
        page.move_right(self.text_layout.measure(BULLET, context.size))
        self._trailing_space = False

    def _enter_line_break(self, page: Page, node: Tag, context: _RenderContext):
        self.text_layout.next_line(page, size=context.size, left=context.bounds.left)

    def _enter_table(self, page: Page, node: Tag, context: _RenderContext):
        header, rows = extract_table(node)
        self.text_layout.next_line(page, size=context.size, left=context.bounds.left)
        self.table_layout.draw_table(page, header, rows, text_range=context.bounds,
                                     size=context.size, color=context.color)

    # Text

    def _emit_text(self, page: Page, data: str, context: _RenderContext):
        tokens = tokenize(data)
        if not tokens:
            # Whitespace between inline elements still separates words
            if data and page.x > context.bounds.left and not self._trailing_space:
                page.move_right(self.text_layout.measure(" ", context.size))
                self._trailing_space = True
            return

        for token in tokens:
            if self._trailing_space:
                token = token.lstrip()
            token_width = self.text_layout.measure(token, context.size)
            if page.x > context.bounds.left and page.x + token_width >= context.bounds.right:
                self.text_layout.next_line(page, size=context.size, left=context.bounds.left)
                token = token.lstrip()
                token_width = self.text_layout.measure(token, context.size)

            self.text_layout.draw_text(page, token, size=context.size, color=context.color)
            page.move_right(token_width)
            self._trailing_space = token.endswith(" ")
