"""
Post metadata parsing.

A post's metadata document is TOML:

    title = "My post"
    publish_dt = "2023-06-01 09:30:00+0000"   # or publish_date = "2023-06-01"
    show_in_feed = true                       # optional
    feed_summary = "One line for the feed."   # optional
"""

from __future__ import annotations

import tomllib

from pydantic import ValidationError

from .models import PostMetadata


class MetadataParseError(ValueError):
    """Raised when a metadata document is malformed or incomplete."""


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "document"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_metadata(text: str) -> PostMetadata:
    """
    Parse a metadata document into a PostMetadata.

    Raises
    ------
    MetadataParseError
        If the text is not TOML, a required key is missing, or the publish
        date does not match an accepted format.
    """
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise MetadataParseError(f"malformed metadata document: {exc}") from exc

    # Derived by the indexer, never declared
    raw.pop("path_from_root", None)

    try:
        return PostMetadata.model_validate(raw)
    except ValidationError as exc:
        raise MetadataParseError(_describe(exc)) from exc
