"""Unit tests for the attributes module."""

import pytest

from minigraphviz.attributes import (
    AttributeValue,
    ValueKind,
    normalize_attributes,
    render_bracketed,
    render_statement_list,
)


class TestAttributeValue:
    """Tests for AttributeValue formatting and equality."""

    def test_number_renders_decimal(self):
        assert str(AttributeValue.number(1)) == "1.0"
        assert str(AttributeValue.number(0.5)) == "0.5"
        assert str(AttributeValue.number(-2.25)) == "-2.25"

    def test_number_shortest_round_trip(self):
        assert str(AttributeValue.number(0.1)) == "0.1"

    def test_string_renders_quoted(self):
        assert str(AttributeValue.string("a value")) == '"a value"'

    def test_string_escapes_quotes_and_backslashes(self):
        value = AttributeValue.string('say "hi" \\ bye')
        assert str(value) == '"say \\"hi\\" \\\\ bye"'

    def test_string_escapes_newlines(self):
        assert str(AttributeValue.string("a\nb")) == '"a\\nb"'

    def test_raw_renders_verbatim(self):
        assert str(AttributeValue.raw("LR")) == "LR"
        assert str(AttributeValue.raw('"pre-quoted"')) == '"pre-quoted"'

    def test_raw_value_has_no_quotes(self):
        assert AttributeValue.string("text").raw_value == "text"
        assert AttributeValue.raw("text").raw_value == "text"
        assert AttributeValue.number(3).raw_value == "3.0"

    def test_equality_is_tag_sensitive(self):
        assert AttributeValue.number(1.0) != AttributeValue.string("1.0")
        assert AttributeValue.string("x") != AttributeValue.raw("x")
        assert AttributeValue.string("x") == AttributeValue.string("x")
        assert AttributeValue.number(1) == AttributeValue.number(1.0)

    def test_values_are_hashable(self):
        values = {AttributeValue.raw("a"), AttributeValue.raw("a")}
        assert len(values) == 1


class TestCoerce:
    """Tests for AttributeValue.coerce and normalize_attributes."""

    def test_numbers_become_number_values(self):
        assert AttributeValue.coerce(2).kind is ValueKind.NUMBER
        assert AttributeValue.coerce(0.5) == AttributeValue.number(0.5)

    def test_strings_become_raw_values(self):
        assert AttributeValue.coerce("box") == AttributeValue.raw("box")

    def test_attribute_values_pass_through(self):
        value = AttributeValue.string("x")
        assert AttributeValue.coerce(value) is value

    def test_booleans_rejected(self):
        with pytest.raises(TypeError):
            AttributeValue.coerce(True)

    def test_unsupported_type_rejected(self):
        with pytest.raises(TypeError, match="list"):
            AttributeValue.coerce([1, 2])

    def test_normalize_attributes(self):
        result = normalize_attributes({"shape": "box", "penwidth": 2})
        assert result == {
            "shape": AttributeValue.raw("box"),
            "penwidth": AttributeValue.number(2),
        }

    def test_normalize_none(self):
        assert normalize_attributes(None) == {}


class TestRenderBracketed:
    """Tests for inline attribute list rendering."""

    def test_empty(self):
        assert render_bracketed({}) == ""

    def test_sorted_keys(self):
        attrs = {
            "label": AttributeValue.string("connection label"),
            "color": AttributeValue.string("red"),
            "penwidth": AttributeValue.number(0.5),
        }
        assert (
            render_bracketed(attrs)
            == '[color="red", label="connection label", penwidth=0.5]'
        )

    def test_default_values_knocked_down(self):
        attrs = {"rankdir": AttributeValue.raw("TB")}
        defaults = {"rankdir": AttributeValue.raw("TB")}
        assert render_bracketed(attrs, defaults) == ""

    def test_non_default_values_kept(self):
        attrs = {"rankdir": AttributeValue.raw("LR")}
        defaults = {"rankdir": AttributeValue.raw("TB")}
        assert render_bracketed(attrs, defaults) == "[rankdir=LR]"

    def test_default_comparison_is_tag_sensitive(self):
        attrs = {"rankdir": AttributeValue.string("TB")}
        defaults = {"rankdir": AttributeValue.raw("TB")}
        assert render_bracketed(attrs, defaults) == '[rankdir="TB"]'

    def test_input_not_modified(self):
        attrs = {"rankdir": AttributeValue.raw("TB")}
        render_bracketed(attrs, {"rankdir": AttributeValue.raw("TB")})
        assert "rankdir" in attrs


class TestRenderStatementList:
    """Tests for block-level attribute statements."""

    def test_single(self):
        attrs = {"label": AttributeValue.string("Subgroup")}
        assert render_statement_list(attrs) == 'label = "Subgroup"'

    def test_multiple_joined_with_semicolons(self):
        attrs = {
            "rank": AttributeValue.string("min"),
            "label": AttributeValue.string("g"),
        }
        assert render_statement_list(attrs) == 'label = "g"; rank = "min"'

    def test_empty(self):
        assert render_statement_list({}) == ""
