"""
Input validation and Pydantic models for the profile history API.

Request models normalize and validate user input; response models convert
domain records into API payloads.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .domain.entities import PROFILE_PLACEHOLDER, App, AppSetting, UsageHistoryItem

MAX_PROFILE_LENGTH = 100
MAX_APP_LENGTH = 50
MAX_URL_TEMPLATE_LENGTH = 500


def _strip_non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Value cannot be empty or only whitespace")
    return value


class UsageHistoryItemModel(BaseModel):
    """Response model for a usage history entry."""

    profile: str
    app: str
    app_name: str
    timestamp: int = Field(..., description="Milliseconds since epoch")

    @classmethod
    def from_entity(cls, item: UsageHistoryItem) -> "UsageHistoryItemModel":
        return cls(
            profile=item.profile,
            app=item.app,
            app_name=item.app_name,
            timestamp=item.timestamp,
        )


class HistoryListResponse(BaseModel):
    """Response model for history and starred listings."""

    success: bool = True
    count: int
    items: List[UsageHistoryItemModel] = Field(default_factory=list)

    @classmethod
    def from_items(cls, items: List[UsageHistoryItem]) -> "HistoryListResponse":
        return cls(
            count=len(items),
            items=[UsageHistoryItemModel.from_entity(item) for item in items],
        )


class RecordOpenRequest(BaseModel):
    """
    Request model for recording an opened profile.

    Attributes:
        profile: Profile handle as typed by the user
        app: App value/identifier
        app_name: Optional display name, looked up when omitted
    """

    profile: str = Field(..., min_length=1, max_length=MAX_PROFILE_LENGTH)
    app: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)
    app_name: Optional[str] = Field(None, max_length=MAX_APP_LENGTH)

    @field_validator("profile", "app")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_non_empty(v)


class RenameProfileRequest(BaseModel):
    """Request model for renaming a profile in history."""

    old_profile: str = Field(..., min_length=1, max_length=MAX_PROFILE_LENGTH)
    app: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)
    new_profile: str = Field(..., min_length=1, max_length=MAX_PROFILE_LENGTH)

    @field_validator("new_profile")
    @classmethod
    def validate_new_profile(cls, v: str) -> str:
        return _strip_non_empty(v)


class StarToggleRequest(BaseModel):
    """Request model for toggling a starred pair."""

    profile: str = Field(..., min_length=1, max_length=MAX_PROFILE_LENGTH)
    app: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)

    @field_validator("profile", "app")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_non_empty(v)


class StarToggleResponse(BaseModel):
    success: bool = True
    profile: str
    app: str
    starred: bool


class AppModel(BaseModel):
    """Request/response model for an app."""

    value: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)
    name: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)
    url_template: str = Field(..., min_length=1, max_length=MAX_URL_TEMPLATE_LENGTH)

    @field_validator("value", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_non_empty(v)

    @field_validator("url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """
        Validate profile URL template.

        Raises:
            ValueError: If the template lacks the placeholder or an http(s) scheme
        """
        v = v.strip()
        if PROFILE_PLACEHOLDER not in v:
            raise ValueError(f"URL template must contain {PROFILE_PLACEHOLDER}")
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError(f"URL template must start with http:// or https://, got: {v}")
        return v

    @classmethod
    def from_entity(cls, app: App) -> "AppModel":
        return cls(value=app.value, name=app.name, url_template=app.url_template)

    def to_entity(self) -> App:
        return App(value=self.value, name=self.name, url_template=self.url_template)


class AppListResponse(BaseModel):
    success: bool = True
    count: int
    apps: List[AppModel] = Field(default_factory=list)


class AppSettingModel(BaseModel):
    """Visibility setting for an app."""

    value: str = Field(..., min_length=1, max_length=MAX_APP_LENGTH)
    visible: bool = True

    @classmethod
    def from_entity(cls, setting: AppSetting) -> "AppSettingModel":
        return cls(value=setting.value, visible=setting.visible)

    def to_entity(self) -> AppSetting:
        return AppSetting(value=self.value, visible=self.visible)


class AppSettingsPayload(BaseModel):
    """Full list of app visibility settings."""

    settings: List[AppSettingModel] = Field(default_factory=list)

    @field_validator("settings")
    @classmethod
    def validate_unique_values(cls, v: List[AppSettingModel]) -> List[AppSettingModel]:
        values = [setting.value for setting in v]
        if len(values) != len(set(values)):
            raise ValueError("Each app may appear only once in settings")
        return v


class HistoryToolResponse(BaseModel):
    """Response model for the history command."""

    success: bool
    message: str
    items: List[UsageHistoryItemModel] = Field(default_factory=list)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
