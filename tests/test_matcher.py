"""Tests for junction.routing.matcher — structural path matching."""

import pytest

from junction.routing.matcher import match_path, split_path


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == []
        assert split_path("") == []

    def test_segments(self) -> None:
        assert split_path("/users/42/posts") == ["users", "42", "posts"]

    def test_trailing_slash_ignored(self) -> None:
        assert split_path("/users/42/") == ["users", "42"]

    def test_repeated_slashes_collapse(self) -> None:
        assert split_path("//users///42") == ["users", "42"]

    def test_query_string_dropped(self) -> None:
        assert split_path("/users/42?expand=1&x=/y") == ["users", "42"]


class TestMatchPath:
    def test_static_match_binds_nothing(self) -> None:
        assert match_path("/health", "/health") == {}

    def test_root_matches_root(self) -> None:
        assert match_path("/", "/") == {}

    def test_single_param(self) -> None:
        assert match_path("/users/42", "/users/:id") == {"id": "42"}

    def test_multiple_params(self) -> None:
        params = match_path("/orgs/acme/repos/junction", "/orgs/:org/repos/:repo")
        assert params == {"org": "acme", "repo": "junction"}

    def test_trailing_slash_on_request(self) -> None:
        assert match_path("/users/42/", "/users/:id") == {"id": "42"}

    def test_trailing_slash_on_pattern(self) -> None:
        assert match_path("/users/42", "/users/:id/") == {"id": "42"}

    def test_query_string_ignored(self) -> None:
        assert match_path("/users/42?expand=1", "/users/:id") == {"id": "42"}

    @pytest.mark.parametrize(
        ("path", "pattern"),
        [
            ("/users", "/users/:id"),
            ("/users/42/posts", "/users/:id"),
            ("/accounts/42", "/users/:id"),
            ("/", "/users"),
        ],
    )
    def test_structural_mismatch(self, path: str, pattern: str) -> None:
        assert match_path(path, pattern) is None

    def test_static_segments_are_case_sensitive(self) -> None:
        assert match_path("/Users/42", "/users/:id") is None

    def test_values_are_not_url_decoded(self) -> None:
        assert match_path("/files/a%20b", "/files/:name") == {"name": "a%20b"}

    def test_params_bind_any_segment(self) -> None:
        assert match_path("/users/me", "/users/:id") == {"id": "me"}


class TestBindingCount:
    @pytest.mark.parametrize("k", [0, 1, 2, 5])
    def test_k_dynamic_segments_bind_exactly_k(self, k: int) -> None:
        pattern = "/static" + "".join(f"/:p{i}" for i in range(k))
        path = "/static" + "".join(f"/v{i}" for i in range(k))
        params = match_path(path, pattern)
        assert params is not None
        assert params == {f"p{i}": f"v{i}" for i in range(k)}

    def test_trailing_slash_and_query_are_equivalent(self) -> None:
        assert match_path("/a/1/", "/a/:id") == match_path("/a/1?x=1", "/a/:id") == {"id": "1"}

    def test_extra_pattern_segment_never_matches(self) -> None:
        assert match_path("/a/1", "/a/:id/b") is None
