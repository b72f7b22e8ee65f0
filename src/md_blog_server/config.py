from typing import Literal, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    site_title: str = "Blog"

    # Content tree
    content_dir: str = "content"
    metadata_filename: str = "metadata.toml"
    body_filename: str = "post.md"

    # Every post is served below this prefix
    route_prefix: str = "/blog"

    # "dark" -> text-white paragraphs, "light" -> text-body paragraphs
    markdown_profile: Literal["dark", "light"] = "dark"

    # Older feeds dropped posts with show_in_feed = false; off by default
    feed_respects_show_in_feed: bool = False

    static_dir: str = "static"
    static_route: str = "/static"

    # Unset disables POST /admin/reindex
    admin_api_key: Optional[SecretStr] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @field_validator("route_prefix", "static_route")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = "/" + v.strip().strip("/")
        if v == "/":
            raise ValueError("prefix must not be the site root")
        return v

settings = Settings()
