"""
Tests for macro helpers.

Tests macro wrapping, split-macro repair, enumeration and replacement.
"""

import pytest

from templatequill.template.macros import (
    ensure_macro,
    ensure_utf8,
    fix_broken_macros,
    replace_macro,
    suffix_macros,
    variables_in,
)


class TestEnsureMacro:
    """Test wrapping of variable names."""

    def test_wraps_bare_name(self):
        assert ensure_macro("name") == "${name}"

    def test_keeps_wrapped_name(self):
        assert ensure_macro("${name}") == "${name}"

    def test_wraps_clone_suffixed_name(self):
        assert ensure_macro("item#2") == "${item#2}"


class TestFixBrokenMacros:
    """Test repair of macros split by run markup."""

    def test_strips_markup_inside_macro(self):
        """Test that tags between the delimiters are removed."""
        xml = '<w:t>${na</w:t></w:r><w:r><w:rPr><w:b/></w:rPr><w:t>me}</w:t>'
        assert fix_broken_macros(xml) == '<w:t>${name}</w:t>'

    def test_self_closing_tag_inside_macro(self):
        assert fix_broken_macros('${na<tag/>me}') == '${name}'

    def test_dollar_split_from_brace(self):
        """Test a '$' left in its own run."""
        xml = '<w:t>$</w:t></w:r><w:r><w:t>{name}</w:t>'
        assert fix_broken_macros(xml) == '<w:t>${name}</w:t>'

    def test_dollar_after_text_not_joined_across_runs(self):
        """Test that a text '$' is not glued to a later braced run."""
        xml = '<w:t>Price $</w:t></w:r><w:r><w:t>{note}</w:t>'
        assert fix_broken_macros(xml) == xml

    def test_dollar_after_text_in_same_run(self):
        xml = '<w:t>Price ${na</w:t></w:r><w:r><w:t>me}</w:t>'
        assert fix_broken_macros(xml) == '<w:t>Price ${name}</w:t>'

    def test_intact_macros_unchanged(self):
        xml = '<w:p><w:r><w:t>${a} and ${b}</w:t></w:r></w:p>'
        assert fix_broken_macros(xml) == xml

    def test_markup_outside_macros_unchanged(self):
        """Test that each macro is repaired on its own."""
        xml = '<w:t>${a</w:t><w:t>}</w:t><w:t>text</w:t><w:t>${b}</w:t>'
        assert fix_broken_macros(xml) == '<w:t>${a}</w:t><w:t>text</w:t><w:t>${b}</w:t>'

    def test_plain_dollar_text_unchanged(self):
        xml = '<w:t>Price: 5$</w:t><w:t>total</w:t>'
        assert fix_broken_macros(xml) == xml


class TestVariablesIn:
    """Test macro enumeration."""

    def test_names_in_document_order(self):
        xml = '<w:t>${first}</w:t><w:t>${second} ${first}</w:t>'
        assert variables_in(xml) == ["first", "second", "first"]

    def test_no_macros(self):
        assert variables_in('<w:t>plain</w:t>') == []


class TestReplaceMacro:
    """Test macro replacement."""

    def test_replaces_all_occurrences(self):
        xml = '${a}-${a}-${b}'
        assert replace_macro(xml, "a", "X") == 'X-X-${b}'

    def test_limit_caps_replacements(self):
        xml = '${a}-${a}-${a}'
        assert replace_macro(xml, "a", "X", limit=2) == 'X-X-${a}'

    def test_negative_limit_means_unlimited(self):
        assert replace_macro('${a}${a}', "a", "X", limit=-1) == 'XX'

    def test_zero_limit_replaces_nothing(self):
        assert replace_macro('${a}', "a", "X", limit=0) == '${a}'

    def test_search_is_literal(self):
        """Test that regex metacharacters in the name are not interpreted."""
        xml = '${a.b} ${aXb}'
        assert replace_macro(xml, "a.b", "1") == '1 ${aXb}'

    def test_replacement_is_literal(self):
        """Test that backreference syntax in the value is kept as text."""
        assert replace_macro('${a}', "a", r"\1 \g<0> $1") == r"\1 \g<0> $1"

    def test_missing_macro_is_noop(self):
        assert replace_macro('<w:t>x</w:t>', "missing", "X") == '<w:t>x</w:t>'

    def test_non_string_value(self):
        assert replace_macro('${n}', "n", 42) == '42'


class TestEnsureUtf8:
    """Test replacement value coercion."""

    def test_text_unchanged(self):
        assert ensure_utf8("zażółć") == "zażółć"

    def test_utf8_bytes_decoded(self):
        assert ensure_utf8("zażółć".encode("utf-8")) == "zażółć"

    def test_latin1_bytes_converted(self):
        assert ensure_utf8("café".encode("latin-1")) == "café"

    def test_none_is_empty(self):
        assert ensure_utf8(None) == ""

    def test_lone_surrogate_replaced(self):
        result = ensure_utf8("a\ud800b")
        result.encode("utf-8")
        assert result.startswith("a") and result.endswith("b")


class TestSuffixMacros:
    """Test clone suffixes."""

    @pytest.mark.parametrize("index", [1, 7])
    def test_every_macro_suffixed(self, index):
        xml = '<w:t>${a}</w:t><w:t>${b}</w:t>'
        assert suffix_macros(xml, index) == f'<w:t>${{a#{index}}}</w:t><w:t>${{b#{index}}}</w:t>'
