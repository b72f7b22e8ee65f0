"""
Content Data Models

This module defines the records produced by the indexer and consumed by the
page and feed assemblers.

- PostMetadata: the validated metadata document of one post
- Post: metadata plus rendered HTML body
- ContentIndex: every post in publish order plus a route-path lookup
- PostPage: one post with its chronological neighbours

All of them are immutable once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


DATETIME_FORMATS: Tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d",
)


def parse_publish_dt(value: Any) -> datetime:
    """
    Decode a publish timestamp into an aware datetime.

    Text must match one of DATETIME_FORMATS; a bare date is midnight UTC.
    Native TOML dates and date-times are accepted as-is (naive -> UTC).
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if not isinstance(value, str):
        raise ValueError("publish date must be text")

    text = value.strip()
    for fmt in DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    raise ValueError(
        f"publish date {text!r} does not match 'YYYY-MM-DD HH:MM:SS+HHMM' or 'YYYY-MM-DD'"
    )


class PostMetadata(BaseModel):
    """
    Metadata for a single post.

    `path_from_root` is never read from the document; the indexer fills it
    in from the post's directory.
    """

    title: str = Field(
        ...,
        min_length=1,
        strict=True,
        description="Post title shown on the page, in the feed and in navigation.",
    )

    publish_dt: datetime = Field(
        ...,
        validation_alias=AliasChoices("publish_dt", "publish_date"),
        description="Publish timestamp; the only ordering key.",
    )

    # TOML yields native bool/str; "no" or 1 is rejected, not coerced
    show_in_feed: bool = Field(default=True, strict=True)

    feed_summary: str = Field(default="", strict=True)

    path_from_root: str = Field(
        default="",
        description="Route path derived from the post directory.",
    )

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    @field_validator("publish_dt", mode="before")
    @classmethod
    def validate_publish_dt(cls, v: Any) -> datetime:
        return parse_publish_dt(v)


class Post(BaseModel):
    """
    A rendered post.
    """

    meta: PostMetadata
    body: str

    model_config = ConfigDict(frozen=True)

    @property
    def path_from_root(self) -> str:
        return self.meta.path_from_root

    @property
    def publish_dt(self) -> datetime:
        return self.meta.publish_dt


@dataclass(frozen=True)
class ContentIndex:
    """
    Posts in ascending publish order plus a route path -> position mapping.

    `path_index[p]` always points at the post whose path is `p`.
    """

    posts: Tuple[Post, ...] = ()
    path_index: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    root: str = ""
    built_at: Optional[datetime] = None
    elapsed: timedelta = timedelta(0)
    rejected: Tuple[str, ...] = ()

    @classmethod
    def from_posts(cls, posts: Tuple[Post, ...], **kwargs: Any) -> "ContentIndex":
        path_index = {p.path_from_root: i for i, p in enumerate(posts)}
        return cls(posts=posts, path_index=MappingProxyType(path_index), **kwargs)

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)

    def position_of(self, path: str) -> Optional[int]:
        return self.path_index.get(path)


@dataclass(frozen=True)
class PostPage:
    """A post with the metadata of its earlier and later neighbours."""

    post: Post
    previous: Optional[PostMetadata] = None
    next: Optional[PostMetadata] = None
