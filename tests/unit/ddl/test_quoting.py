"""Tests for identifier and literal quoting."""

import pytest

from schemascope.ddl import qualified_name, quote_ident, quote_literal


class TestQuoteIdent:
    @pytest.mark.parametrize("name", ["users", "_tmp", "order_2024", "a1"])
    def test_plain_lowercase_stays_bare(self, name):
        assert quote_ident(name) == name

    @pytest.mark.parametrize(
        "name, quoted",
        [
            ("Users", '"Users"'),
            ("1st", '"1st"'),
            ("order items", '"order items"'),
            ("naïve", '"naïve"'),
            ("", '""'),
        ],
    )
    def test_other_names_are_quoted(self, name, quoted):
        assert quote_ident(name) == quoted

    @pytest.mark.parametrize("name", ['a"b', '"', 'say "hi"', '""x'])
    def test_embedded_quotes_are_doubled(self, name):
        quoted = quote_ident(name)
        assert quoted == '"' + name.replace('"', '""') + '"'
        assert quoted.startswith('"') and quoted.endswith('"')
        assert quoted[1:-1].replace('""', "").count('"') == 0

    def test_qualified_name(self):
        assert qualified_name("public", "Users") == 'public."Users"'
        assert qualified_name(None, "users") == "users"


class TestQuoteLiteral:
    def test_plain(self):
        assert quote_literal("hello") == "'hello'"

    def test_embedded_single_quote(self):
        assert quote_literal("it's") == "'it''s'"

    def test_empty(self):
        assert quote_literal("") == "''"
