"""
Tests for domain entities and pair-key helpers.
"""

import pytest

from profile_history.domain.default_apps import DEFAULT_APPS
from profile_history.domain.entities import (
    App,
    AppSetting,
    UsageHistoryItem,
    history_pair_key,
    normalize_app,
    normalize_profile,
    strip_handle_prefix,
)


class TestPairKeys:
    """Test normalization and composite keys."""

    def test_normalize_app(self):
        assert normalize_app("  GitHub ") == "github"

    def test_normalize_profile_strips_at_and_lowercases(self):
        assert normalize_profile(" @Alice ") == "alice"

    def test_normalize_profile_only_one_at(self):
        assert normalize_profile("@@bob") == "@bob"

    def test_history_pair_key_format(self):
        assert history_pair_key("@Alice", "GitHub") == "github::alice"

    def test_pair_key_equivalence(self):
        assert history_pair_key("alice", "github") == history_pair_key(" @ALICE", " GITHUB ")

    def test_strip_handle_prefix_keeps_case(self):
        assert strip_handle_prefix("@Alice") == "Alice"
        assert strip_handle_prefix("Alice") == "Alice"


class TestUsageHistoryItem:
    """Test usage history record."""

    def test_to_dict_uses_storage_keys(self):
        item = UsageHistoryItem(profile="alice", app="github", app_name="GitHub", timestamp=42)

        assert item.to_dict() == {
            "profile": "alice",
            "app": "github",
            "appName": "GitHub",
            "timestamp": 42,
        }

    def test_from_dict(self):
        item = UsageHistoryItem.from_dict(
            {"profile": "alice", "app": "github", "appName": "GitHub", "timestamp": 42}
        )

        assert item == UsageHistoryItem("alice", "github", "GitHub", 42)

    def test_from_dict_float_timestamp(self):
        item = UsageHistoryItem.from_dict(
            {"profile": "a", "app": "x", "appName": "X", "timestamp": 1700000000000.0}
        )
        assert item.timestamp == 1700000000000

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            UsageHistoryItem.from_dict({"profile": "alice", "app": "github"})

    def test_from_dict_rejects_string_timestamp(self):
        with pytest.raises(TypeError):
            UsageHistoryItem.from_dict(
                {"profile": "a", "app": "x", "appName": "X", "timestamp": "yesterday"}
            )

    def test_matches_is_exact(self):
        item = UsageHistoryItem("Alice", "github", "GitHub", 1)

        assert item.matches("Alice", "github")
        assert not item.matches("alice", "github")

    def test_pair_key(self):
        item = UsageHistoryItem("@Alice", "GitHub", "GitHub", 1)
        assert item.pair_key == "github::alice"


class TestApp:
    """Test app record."""

    def test_build_profile_url(self):
        app = App(value="github", name="GitHub", url_template="https://github.com/{profile}")

        assert app.build_profile_url("@octocat") == "https://github.com/octocat"

    def test_requires_placeholder(self):
        with pytest.raises(ValueError):
            App(value="site", name="Site", url_template="https://example.com/")

    def test_requires_value(self):
        with pytest.raises(ValueError):
            App(value=" ", name="Site", url_template="https://example.com/{profile}")

    def test_round_trip_keys(self):
        data = {"value": "gh", "name": "GH", "urlTemplate": "https://gh/{profile}"}
        assert App.from_dict(data).to_dict() == data


class TestAppSetting:
    def test_visible_defaults_true(self):
        assert AppSetting.from_dict({"value": "github"}).visible is True


class TestDefaultApps:
    def test_values_unique(self):
        values = [app.value for app in DEFAULT_APPS]
        assert len(values) == len(set(values))

    def test_github_present(self):
        assert any(app.value == "github" for app in DEFAULT_APPS)
