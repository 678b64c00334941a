"""Tests for core SQL completion utilities."""

import pytest

from schemascope.sql_completion import (
    RESERVED_WORDS,
    SQL_FUNCTIONS,
    SQL_KEYWORDS,
    clean_sql,
    current_statement,
    extract_aliases,
    extract_table_names,
    find_current_clause,
    get_all_functions,
    get_all_keywords,
    get_current_word,
    is_inside_comment,
    is_inside_string,
    remove_comments,
    remove_string_literals,
)


class TestExtractTableNames:
    """Tests for table reference extraction."""

    def test_single_table(self):
        assert extract_table_names("SELECT * FROM users") == ["users"]

    def test_comma_separated_with_aliases(self):
        assert extract_table_names("SELECT * FROM users u, orders o WHERE u.id = o.user_id") == [
            "users",
            "orders",
        ]

    def test_schema_qualified_stays_one_token(self):
        sql = "SELECT * FROM public.orders o JOIN billing.invoices i ON i.id = o.id"
        assert extract_table_names(sql) == ["public.orders", "billing.invoices"]

    def test_whitespace_around_dot_is_normalized(self):
        assert extract_table_names("SELECT * FROM public . orders") == ["public.orders"]

    def test_quoted_table_keeps_quotes(self):
        assert extract_table_names('SELECT * FROM "Order Items" oi') == ['"Order Items"']

    def test_duplicates_removed_in_first_appearance_order(self):
        sql = "SELECT * FROM orders JOIN users ON 1=1 JOIN ORDERS o2 ON 1=1"
        assert extract_table_names(sql) == ["orders", "users"]

    def test_no_from(self):
        assert extract_table_names("SELECT 1") == []


class TestExtractAliases:
    """Tests for alias extraction."""

    def test_bare_and_as_aliases(self):
        sql = "SELECT * FROM users AS u JOIN orders o ON o.user_id = u.id"
        assert extract_aliases(sql) == {"u": "users", "o": "orders"}

    def test_alias_at_end_of_text(self):
        assert extract_aliases("SELECT * FROM users u") == {"u": "users"}

    def test_as_is_never_an_alias(self):
        assert extract_aliases("SELECT * FROM users AS") == {}

    def test_reserved_word_is_not_alias(self):
        assert extract_aliases("SELECT * FROM users WHERE id = 1") == {}

    def test_quoted_alias_is_unquoted(self):
        assert extract_aliases('SELECT * FROM public.users "U"') == {"U": "public.users"}


class TestStatementHelpers:
    """Tests for cleaning and splitting partially typed SQL."""

    def test_current_statement_after_semicolon(self):
        assert current_statement("SELECT 1; SELECT * FROM ") == "SELECT * FROM "

    def test_current_statement_ends_with_semicolon(self):
        assert current_statement("SELECT 1;") == ""

    def test_semicolon_inside_literal_does_not_split(self):
        assert current_statement("SELECT ';' FROM ") == "SELECT ';' FROM "

    def test_remove_string_literals(self):
        assert remove_string_literals("WHERE name = 'FROM x'") == "WHERE name = ''"

    def test_remove_comments(self):
        assert remove_comments("SELECT 1 -- note\nFROM /* x */ t") == "SELECT 1 \nFROM  t"

    def test_clean_sql(self):
        assert clean_sql("SELECT 'a -- b' -- c") == "SELECT '' "

    def test_find_current_clause(self):
        assert find_current_clause("SELECT a FROM t WHERE x") == "where"
        assert find_current_clause("SELECT a FROM t JOIN u ON") == "on"
        assert find_current_clause("SELECT a FROM t LEFT JOIN ") == "join"


class TestCursorState:
    """Tests for detecting strings, comments and the current word."""

    def test_inside_string(self):
        assert is_inside_string("SELECT 'abc")
        assert not is_inside_string("SELECT 'it''s' ")

    def test_double_quotes_are_not_strings(self):
        assert not is_inside_string('SELECT "Mixed')

    def test_inside_comment(self):
        assert is_inside_comment("SELECT 1 -- note")
        assert is_inside_comment("SELECT /* open")
        assert not is_inside_comment("SELECT /* closed */ 1")
        assert not is_inside_comment("SELECT '--' ")

    @pytest.mark.parametrize(
        "sql, word",
        [
            ("SELECT * FROM us", "us"),
            ("SELECT * FROM ", ""),
            ("SELECT o.", ""),
            ('SELECT * FROM "Us', "Us"),
            ('SELECT * FROM "Order Items" o', "o"),
        ],
    )
    def test_get_current_word(self, sql, word):
        assert get_current_word(sql) == word


class TestKeywordTables:
    def test_keywords_flat_and_unique(self):
        keywords = get_all_keywords()
        assert "SELECT" in keywords
        assert len(keywords) == len(set(keywords))
        assert keywords[0] == SQL_KEYWORDS["dml"][0]

    def test_functions_flat_and_unique(self):
        functions = get_all_functions()
        assert "COUNT" in functions
        assert len(functions) == len(set(functions))
        assert set(SQL_FUNCTIONS["window"]) <= set(functions)

    def test_reserved_words_are_lowercase(self):
        assert "as" in RESERVED_WORDS
        assert all(word == word.lower() for word in RESERVED_WORDS)

