"""Tests for fuzzy object search."""

import pytest

from schemascope.domains.explorer.domain import Column, Function, MaterializedView, Schema, Table, View
from schemascope.domains.explorer.search import SearchKind, is_subsequence_match, score, search


class TestSubsequenceMatch:
    """Tests for the admission filter."""

    def test_subsequence_matches(self):
        assert is_subsequence_match("user_accounts", "usac")

    def test_out_of_order_does_not_match(self):
        assert not is_subsequence_match("products", "usr")

    def test_case_insensitive(self):
        assert is_subsequence_match("UserAccounts", "usac")

    def test_unicode(self):
        assert is_subsequence_match("café_orders", "éo")
        assert not is_subsequence_match("", "a")


class TestScore:
    """Tests for ranking tiers."""

    def test_scoring_tiers(self):
        exact = score("users", "users")
        prefix = score("users", "user")
        substring = score("all_users", "user")
        subsequence = score("user_accounts", "usac")
        assert exact == 100
        assert prefix == 90
        assert substring == 80
        assert exact > prefix > substring > subsequence

    def test_subsequence_rewards_runs(self):
        """Two runs of two score 1+2+1+2."""
        assert score("user_accounts", "usac") == 6

    def test_contiguous_beats_scattered(self):
        assert score("zabqx", "abx") > score("zaqbqx", "abx")

    def test_subsequence_capped_below_substring(self):
        """A 13 character run would score 91 uncapped."""
        assert score("qabcdefghijklm_z", "abcdefghijklmz") == 79

    def test_non_match_scores_zero(self):
        assert score("products", "usr") == 0

    def test_case_insensitive(self):
        assert score("Users", "USERS") == 100


class TestSearch:
    """Tests for searching a snapshot."""

    def test_empty_query_returns_nothing(self, snapshot):
        assert search(snapshot, "") == []

    def test_result_kinds_and_parent(self, snapshot):
        results = search(snapshot, "email")
        assert results[0].kind == SearchKind.COLUMN
        assert results[0].parent_name == "users"
        assert results[0].qualified_name == "public.users.email"

    def test_iteration_order_for_equal_scores(self):
        schema = Schema(
            name="s",
            tables=(Table("s", "item", columns=(Column("item", "int"),)),),
            views=(View("s", "item"),),
            materialized_views=(MaterializedView("s", "item"),),
            functions=(Function("s", "item"),),
        )
        results = search([schema], "item")
        assert [r.kind for r in results] == [
            SearchKind.TABLE,
            SearchKind.COLUMN,
            SearchKind.VIEW,
            SearchKind.MATERIALIZED_VIEW,
            SearchKind.FUNCTION,
        ]

    def test_sequences_and_types_are_searched(self, snapshot):
        kinds = {r.kind for r in search(snapshot, "order")}
        assert SearchKind.SEQUENCE in kinds
        assert SearchKind.TYPE in kinds

    def test_results_sorted_by_score(self, snapshot):
        results = search(snapshot, "users")
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0].name == "users"

    def test_result_cap(self):
        """200 matching objects are cut to 50."""
        tables = tuple(Table("s", f"tbl_{i:03d}", columns=()) for i in range(200))
        results = search([Schema(name="s", tables=tables)], "tbl")
        assert len(results) == 50
        scores = [r.score for r in results]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    @pytest.mark.parametrize("value", ["5", "abc"])
    def test_environment_does_not_change_the_cap(self, monkeypatch, value):
        """Search depends only on its arguments, even with a malformed variable set."""
        monkeypatch.setenv("SCHEMASCOPE_SEARCH_LIMIT", value)
        tables = tuple(Table("s", f"tbl_{i:03d}") for i in range(200))
        assert len(search([Schema(name="s", tables=tables)], "tbl")) == 50

    @pytest.mark.parametrize("limit", [1, 3])
    def test_explicit_limit(self, snapshot, limit):
        assert len(search(snapshot, "o", limit=limit)) == limit
