"""Pydantic schemas for the channel shop."""

import re
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from channel_shop.channel.age import ExpiryWindow, parse_expiry
from channel_shop.channel.duration import parse_duration
from channel_shop.core.exceptions import ConfigurationError


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalize aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ContentMode(str, Enum):
    """Kind of content materialized for each surviving item."""

    METADATA = "metadata"
    THUMBNAIL = "thumbnail"
    TRANSCRIPT = "transcript"
    VIDEO = "video"
    AUDIO = "audio"  # reserved, placeholder content only


class CatalogItem(BaseModel):
    """One video from the channel catalog, as listed by the YouTube Data API."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    title: str | None = None
    published_at: datetime
    duration: str | None = None
    thumbnail_url: str | None = None
    channel_title: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("published_at")
    @classmethod
    def normalize_published_at(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @property
    def duration_seconds(self) -> int:
        """Parsed duration in seconds (0 when missing or malformed)."""
        return parse_duration(self.duration)


class FilterConfig(BaseModel):
    """Filter policy. Every axis is optional; None means no constraint."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title_includes: re.Pattern | None = Field(default=None, alias="titleIncludes")
    duration_more_than: int | None = Field(default=None, alias="durationMoreThan", ge=0)
    duration_less_than: int | None = Field(default=None, alias="durationLessThan", ge=0)
    start_date: datetime | None = Field(default=None, alias="startDate")
    drop_after: ExpiryWindow | None = Field(default=None, alias="dropAfter")

    @field_validator("start_date", mode="before")
    @classmethod
    def date_to_datetime(cls, v: Any) -> Any:
        # YAML loads bare dates (2023-01-01) as datetime.date
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min, tzinfo=timezone.utc)
        return v

    @field_validator("start_date")
    @classmethod
    def normalize_start_date(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v) if v is not None else None

    @field_validator("drop_after", mode="before")
    @classmethod
    def parse_drop_after(cls, v: Any) -> ExpiryWindow | None:
        if v is None or v == "":
            return None
        if isinstance(v, ExpiryWindow):
            return v
        try:
            return parse_expiry(v)
        except ConfigurationError as e:
            # Re-raised as ValueError so pydantic reports the field location
            raise ValueError(str(e)) from e

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.title_includes is None
            and self.duration_more_than is None
            and self.duration_less_than is None
            and self.start_date is None
            and self.drop_after is None
        )


class ShopConfig(FilterConfig):
    """Full option set of a YouTube channel shop."""

    channel_id: str = Field(alias="channelId", min_length=1)
    mode: ContentMode = ContentMode.METADATA
    no_delete: bool = Field(default=False, alias="noDelete")
    include_header: bool = Field(default=True, alias="includeHeader")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ShopConfig":
        """
        Validate a raw option mapping.

        Empty strings are treated as unset, matching how hosts usually
        serialize blank options.

        Args:
            config: Raw options (camelCase or snake_case keys)

        Returns:
            Validated ShopConfig

        Raises:
            ConfigurationError: Naming the first invalid or missing option
        """
        options = {key: value for key, value in config.items() if value not in ("", None)}
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            if error["type"] == "missing":
                message = f"{field} is required in config."
            else:
                message = f"Invalid value for {field}: {error['msg']}"
            raise ConfigurationError(message, field=field) from e


class FileUpdate(BaseModel):
    """One entry of a change set."""

    action: Literal["add", "update", "delete"]
    content: str | None = None


# Tracked identifier -> update
ChangeSet = dict[str, FileUpdate]


def dump_change_set(change_set: ChangeSet) -> dict[str, dict[str, Any]]:
    """Convert a change set to its wire form (no ``content`` key for deletes)."""
    return {
        identifier: update.model_dump(exclude_none=True)
        for identifier, update in change_set.items()
    }


class SyncResult(BaseModel):
    """Summary of one sync pass."""

    channel_id: str
    mode: ContentMode
    items_listed: int
    items_kept: int
    added: int
    deleted: int
    unchanged: int
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_change_set(
        cls,
        channel_id: str,
        mode: ContentMode,
        items_listed: int,
        items_kept: int,
        change_set: ChangeSet,
    ) -> "SyncResult":
        added = sum(1 for update in change_set.values() if update.action == "add")
        deleted = sum(1 for update in change_set.values() if update.action == "delete")
        return cls(
            channel_id=channel_id,
            mode=mode,
            items_listed=items_listed,
            items_kept=items_kept,
            added=added,
            deleted=deleted,
            unchanged=items_kept - added,
        )
