"""
Domain entities for profile usage tracking.

Core records persisted in the key-value store plus the pair-key helpers
used for starring. The JSON layout (camelCase keys, millisecond
timestamps) matches what the launcher extension writes to its local storage.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict

PROFILE_PLACEHOLDER = "{profile}"
PAIR_KEY_SEPARATOR = "::"


def current_timestamp_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def normalize_app(app: str) -> str:
    """Normalize an app value for pair-key comparison."""
    return app.strip().lower()


def normalize_profile(profile: str) -> str:
    """
    Normalize a profile handle for pair-key comparison.

    Strips whitespace, drops a single leading '@' and lowercases.
    """
    trimmed = profile.strip()
    if trimmed.startswith("@"):
        trimmed = trimmed[1:]
    return trimmed.lower()


def history_pair_key(profile: str, app: str) -> str:
    """
    Build the composite key identifying a (profile, app) pair.

    Returns:
        Key in format: {app}::{profile}, both normalized
    """
    return f"{normalize_app(app)}{PAIR_KEY_SEPARATOR}{normalize_profile(profile)}"


def strip_handle_prefix(profile: str) -> str:
    """Remove one leading '@' without changing case."""
    return profile[1:] if profile.startswith("@") else profile


@dataclass(frozen=True)
class UsageHistoryItem:
    """
    A single opened (profile, app) pair.

    Attributes:
        profile: Profile handle as entered by the user
        app: App value/identifier
        app_name: Human-readable app name at the time of opening
        timestamp: Milliseconds since epoch when the pair was opened
    """

    profile: str
    app: str
    app_name: str
    timestamp: int

    @property
    def pair_key(self) -> str:
        return history_pair_key(self.profile, self.app)

    def matches(self, profile: str, app: str) -> bool:
        """Exact (non-normalized) match on profile and app."""
        return self.profile == profile and self.app == app

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "app": self.app,
            "appName": self.app_name,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UsageHistoryItem":
        timestamp = data["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise TypeError(f"timestamp must be a number, got {type(timestamp).__name__}")
        return cls(
            profile=str(data["profile"]),
            app=str(data["app"]),
            app_name=str(data.get("appName", data["app"])),
            timestamp=int(timestamp),
        )


@dataclass(frozen=True)
class AppSetting:
    """Visibility preference for an app."""

    value: str
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "visible": self.visible}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSetting":
        return cls(value=str(data["value"]), visible=bool(data.get("visible", True)))


@dataclass(frozen=True)
class App:
    """
    An application profiles can be opened on.

    Attributes:
        value: Stable identifier (e.g. "github")
        name: Display name (e.g. "GitHub")
        url_template: Profile URL with a {profile} placeholder
    """

    value: str
    name: str
    url_template: str

    def __post_init__(self):
        """Validate app on creation."""
        if not self.value.strip():
            raise ValueError("App value cannot be empty")
        if not self.name.strip():
            raise ValueError("App name cannot be empty")
        if PROFILE_PLACEHOLDER not in self.url_template:
            raise ValueError(f"URL template must contain {PROFILE_PLACEHOLDER}")

    def build_profile_url(self, profile: str) -> str:
        """Substitute the profile handle (without '@') into the URL template."""
        return self.url_template.replace(
            PROFILE_PLACEHOLDER, strip_handle_prefix(profile.strip())
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "name": self.name, "urlTemplate": self.url_template}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "App":
        return cls(
            value=str(data["value"]),
            name=str(data["name"]),
            url_template=str(data["urlTemplate"]),
        )
