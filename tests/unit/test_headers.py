"""
Unit tests for apihttp.core.http.headers module.
"""

import pytest

from apihttp.core.http.headers import (
    NO_OVERRIDE,
    Credentials,
    DynamicHeaders,
    StaticHeaders,
    as_header_override,
    merge_headers,
)


class TestHeaderOverride:
    """Tests for the static/dynamic override variants."""

    def test_none_is_empty_override(self):
        override = as_header_override(None)

        assert override is NO_OVERRIDE
        assert override.resolve() == {}

    def test_mapping_becomes_static(self):
        override = as_header_override({"Accept": "application/json"})

        assert isinstance(override, StaticHeaders)
        assert override.resolve() == {"Accept": "application/json"}

    def test_static_resolve_returns_copy(self):
        override = StaticHeaders({"A": "1"})

        resolved = override.resolve()
        resolved["B"] = "2"

        assert override.resolve() == {"A": "1"}

    def test_callable_becomes_dynamic(self):
        override = as_header_override(lambda: {"X-Token": "t"})

        assert isinstance(override, DynamicHeaders)
        assert override.resolve() == {"X-Token": "t"}

    def test_dynamic_producer_returning_none(self):
        assert DynamicHeaders(lambda: None).resolve() == {}

    def test_variant_passes_through(self):
        override = DynamicHeaders(dict)

        assert as_header_override(override) is override

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="mapping or a callable"):
            as_header_override(42)


class TestCredentials:
    """Tests for the Credentials snapshot."""

    def test_empty_credentials_have_no_headers(self):
        assert Credentials().as_headers() == {}

    def test_as_headers(self):
        credentials = Credentials(authorization="Bearer a", x_authorization="key")

        assert credentials.as_headers() == {
            "Authorization": "Bearer a",
            "X-Authorization": "key",
        }

    def test_with_methods_return_new_snapshot(self):
        original = Credentials()

        updated = original.with_authorization("a").with_x_authorization("b")

        assert original == Credentials()
        assert updated == Credentials(authorization="a", x_authorization="b")

    def test_empty_string_is_still_sent(self):
        assert Credentials(authorization="").as_headers() == {"Authorization": ""}


class TestMergeHeaders:
    """Tests for merge_headers."""

    def test_later_sources_win(self):
        merged = merge_headers({"A": "1", "B": "1"}, {"B": "2", "C": "2"}, {"C": "3"})

        assert merged == {"A": "1", "B": "2", "C": "3"}

    def test_skips_none(self):
        assert merge_headers(None, {"A": "1"}, None) == {"A": "1"}

    def test_does_not_mutate_sources(self):
        first = {"A": "1"}

        merge_headers(first, {"A": "2"})

        assert first == {"A": "1"}
