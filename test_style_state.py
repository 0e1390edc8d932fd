"""Tests for the style/margin state and the node stack."""
import math

import pytest
from reportlab.lib import colors

from docflow.document_builder import FontVariant, Margins, StyleState


@pytest.mark.parametrize("value", [1, 14, 0.5, "16"])
def test_set_text_size_accepts_positive_numbers(style, value):
    assert style.set_text_size(value) is True
    assert style.text_size == float(value)


@pytest.mark.parametrize("value", [0, -3, "abc", None, True, math.nan, math.inf])
def test_set_text_size_rejects_invalid_and_keeps_previous(style, value, capsys):
    style.set_text_size(20)

    assert style.set_text_size(value) is False
    assert style.text_size == 20
    assert "Warning: Error in set_text_size" in capsys.readouterr().out


def test_set_circle_scale(style):
    assert style.circle_scale == 15
    assert style.set_circle_scale(30) is True
    assert style.set_circle_scale(0) is False
    assert style.circle_scale == 30


def test_set_margin_merges_partial_values(style):
    assert style.set_margin({"left": 40, "top": 10}) is True
    assert style.margins == Margins(left=40, right=25, top=10, bottom=25)


def test_set_margin_accepts_margins_instance(style):
    assert style.set_margin(Margins(left=1, right=2, top=3, bottom=4)) is True
    assert style.margins == Margins(1, 2, 3, 4)


@pytest.mark.parametrize("partial", [
    [10, 10],
    "10",
    None,
    {"middle": 3},
    {"top": -1},
    {"left": "wide"},
])
def test_set_margin_rejects_invalid_and_keeps_previous(style, partial):
    before = style.margins

    assert style.set_margin(partial) is False
    assert style.margins == before


def test_set_color(style):
    assert style.color is colors.black
    assert style.set_color("#336699") is True
    assert style.color.hexval() == colors.HexColor("#336699").hexval()

    assert style.set_color("not-a-color") is False
    assert style.set_color(None) is False
    assert style.color.hexval() == colors.HexColor("#336699").hexval()


def test_set_font_accepts_enum_and_value(style):
    assert style.set_font(FontVariant.BOLD) is True
    assert style.font_variant is FontVariant.BOLD

    assert style.set_font("italic") is True
    assert style.font_variant is FontVariant.ITALIC

    assert style.set_font("heavy") is False
    assert style.set_font(None) is False
    assert style.font_variant is FontVariant.ITALIC


def test_style_composition_follows_node_stack(style):
    style.add_node("STRONG")
    assert style.refresh_font() is FontVariant.BOLD

    style.add_node("I")
    assert style.refresh_font() is FontVariant.BOLD_ITALIC

    style.remove_node("STRONG")
    assert style.refresh_font() is FontVariant.ITALIC

    style.remove_node("I")
    assert style.refresh_font() is FontVariant.REGULAR


def test_remove_node_removes_last_occurrence(style):
    for name in ("UL", "LI", "UL", "LI"):
        style.add_node(name)

    assert style.remove_node("UL") is True
    assert style.current_nodes == ["UL", "LI", "LI"]


def test_remove_missing_node_is_noop(style):
    style.add_node("P")

    assert style.remove_node("STRONG") is False
    assert style.current_nodes == ["P"]


def test_empty_node_names_are_rejected(style):
    assert style.add_node("") is False
    assert style.remove_node(None) is False
    assert style.current_nodes == []


def test_list_depth_counts_open_lists(style):
    style.add_node("UL")
    style.add_node("LI")
    style.add_node("UL")

    assert style.list_depth == 2


def test_current_nodes_returns_copy(style):
    style.add_node("P")
    nodes = style.current_nodes
    nodes.append("STRONG")

    assert style.current_nodes == ["P"]


def test_new_state_has_defaults():
    state = StyleState()

    assert state.text_size == 12
    assert state.margins == Margins()
    assert state.font_variant is FontVariant.REGULAR
    assert state.current_nodes == []
