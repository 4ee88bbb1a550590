"""query string 옵션 인코딩 테스트."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ghrest.issues import IssueListByRepoOptions, IssueListOptions
from ghrest.query import ListCursorOptions, ListOptions, QueryOptions, add_options
from ghrest.repos_rules import RepositoryListRulesetsOptions
from ghrest.scim import ListSCIMProvisionedIdentitiesOptions


class _RepeatedOptions(QueryOptions):
    repeated_fields = frozenset({"tags"})

    tags: list[str] | None = None


class TestAddOptions:
    def test_none_returns_url_unchanged(self) -> None:
        assert add_options("repos/o/r/issues", None) == "repos/o/r/issues"

    def test_empty_options_returns_url_unchanged(self) -> None:
        assert add_options("repos/o/r/issues", ListOptions()) == "repos/o/r/issues"

    def test_keys_sorted(self) -> None:
        url = add_options("issues", IssueListOptions(state="closed", page=2, per_page=50))
        assert url == "issues?page=2&per_page=50&state=closed"

    def test_list_joined_with_comma(self) -> None:
        url = add_options("issues", IssueListOptions(labels=["bug", "help wanted"]))
        assert url == "issues?labels=bug%2Chelp+wanted"

    def test_repeated_list_field(self) -> None:
        url = add_options("things", _RepeatedOptions(tags=["a", "b"]))
        assert url == "things?tags=a&tags=b"

    def test_bool_lowercase(self) -> None:
        url = add_options("rulesets", RepositoryListRulesetsOptions(includes_parents=False))
        assert url == "rulesets?includes_parents=false"

    def test_datetime_utc_format(self) -> None:
        since = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        url = add_options("issues", IssueListOptions(since=since))
        assert url == "issues?since=2024-01-15T10%3A30%3A00Z"

    def test_datetime_converted_to_utc(self) -> None:
        kst = timezone(timedelta(hours=9))
        url = add_options("issues", IssueListOptions(since=datetime(2024, 1, 15, 19, 30, tzinfo=kst)))
        assert url == "issues?since=2024-01-15T10%3A30%3A00Z"

    def test_merges_existing_query(self) -> None:
        url = add_options("repos/o/r/rulesets/1?includes_parents=true", ListOptions(page=3))
        assert url == "repos/o/r/rulesets/1?includes_parents=true&page=3"

    def test_alias_used_as_key(self) -> None:
        opts = ListSCIMProvisionedIdentitiesOptions(start_index=2, count=10)
        assert add_options("scim", opts) == "scim?count=10&startIndex=2"

    def test_zero_value_is_encoded(self) -> None:
        assert add_options("x", ListOptions(page=0)) == "x?page=0"

    def test_empty_string_skipped(self) -> None:
        assert add_options("x", IssueListByRepoOptions(state="", milestone="*")) == "x?milestone=%2A"


class TestQueryOptionsModel:
    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ListOptions(pages=3)

    def test_cursor_options(self) -> None:
        opts = ListCursorOptions(after="abc", per_page=100)
        assert opts.to_query() == [("per_page", "100"), ("after", "abc")]
