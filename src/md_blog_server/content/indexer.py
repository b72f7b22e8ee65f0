"""
Content Indexer

Walks the content tree and builds an immutable ContentIndex.

Layout
------
Every directory under the content root that holds both a metadata document
and a body document is one post:

    content/
        2023/
            hello-world/
                metadata.toml
                post.md

The route path is derived from the directory, e.g. `/blog/2023/hello-world`.

Failure Policy
--------------
- Root missing or unreadable: ContentRootError, nothing to serve.
- Anything wrong with a single post: logged, recorded as rejected, skipped.
- Two directories deriving the same route path: the later one wins.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from .markdown import MarkdownRenderer
from .metadata import MetadataParseError, parse_metadata
from .models import ContentIndex, Post

logger = logging.getLogger("blog.indexer")

DEFAULT_ROUTE_PREFIX = "/blog"
DEFAULT_METADATA_FILENAME = "metadata.toml"
DEFAULT_BODY_FILENAME = "post.md"


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ContentRootError(RuntimeError):
    """Raised when the content root cannot be walked at all."""


class BodyReadError(OSError):
    """Raised when a post body is missing or cannot be decoded."""


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def derive_route_path(
    directory: Union[str, Path],
    root: Union[str, Path],
    prefix: str = DEFAULT_ROUTE_PREFIX,
) -> str:
    """
    Map a post directory to its route path.

    The result depends only on the directory's position below `root` and
    on `prefix`; the root itself maps to the bare prefix.
    """
    relative = Path(directory).relative_to(Path(root)).as_posix()
    prefix = prefix.rstrip("/")
    if relative == ".":
        return prefix
    return f"{prefix}/{relative}"


def read_body(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BodyReadError(f"{path} is not valid UTF-8") from exc
    except OSError as exc:
        raise BodyReadError(f"cannot read {path}: {exc.strerror or exc}") from exc


def _check_root(root: Path) -> None:
    if not root.exists():
        raise ContentRootError(f"Content root does not exist: {root}")
    if not root.is_dir():
        raise ContentRootError(f"Content root is not a directory: {root}")
    try:
        os.listdir(root)
    except OSError as exc:
        raise ContentRootError(f"Content root is not readable: {root}") from exc


# ---------------------------------------------------------------------
# Indexer
# ---------------------------------------------------------------------

class ContentIndexer:
    """
    Builds ContentIndex values from a content directory.

    One indexer may be reused for any number of builds; it holds
    configuration only, never index state.
    """

    def __init__(
        self,
        root: Union[str, Path],
        route_prefix: str = DEFAULT_ROUTE_PREFIX,
        metadata_filename: str = DEFAULT_METADATA_FILENAME,
        body_filename: str = DEFAULT_BODY_FILENAME,
        renderer: Optional[MarkdownRenderer] = None,
    ) -> None:
        self.root = Path(root)
        self.route_prefix = route_prefix
        self.metadata_filename = metadata_filename
        self.body_filename = body_filename
        self.renderer = renderer or MarkdownRenderer()

    def load_post(self, directory: Path) -> Optional[Post]:
        """
        Load one post directory.

        Returns None for a plain container directory (neither file present).

        Raises
        ------
        MetadataParseError
            Metadata missing next to a body, unreadable, or invalid.
        BodyReadError
            Body missing next to metadata, or unreadable.
        """
        metadata_file = directory / self.metadata_filename
        body_file = directory / self.body_filename

        has_meta = metadata_file.is_file()
        has_body = body_file.is_file()

        if not has_meta and not has_body:
            return None
        if not has_meta:
            raise MetadataParseError(f"missing {self.metadata_filename}")
        if not has_body:
            raise BodyReadError(f"missing {self.body_filename}")

        try:
            metadata_text = metadata_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MetadataParseError(f"cannot read {metadata_file}: {exc}") from exc

        logger.debug("metadata for %s: %r", directory, metadata_text)
        meta = parse_metadata(metadata_text)
        body = self.renderer.render(read_body(body_file))

        path = derive_route_path(directory, self.root, self.route_prefix)
        return Post(meta=meta.model_copy(update={"path_from_root": path}), body=body)

    def _walk(self):
        def _on_error(exc: OSError) -> None:
            logger.error("Skipping unreadable directory %s: %s", exc.filename, exc)

        for dirpath, dirnames, _ in os.walk(self.root, onerror=_on_error):
            dirnames.sort()
            yield Path(dirpath)

    def build(self) -> ContentIndex:
        """
        Walk the root and build a fresh index.

        Raises
        ------
        ContentRootError
            If the root is missing, not a directory, or unreadable.
        """
        start = time.perf_counter()
        _check_root(self.root)

        collected: Dict[str, Post] = {}
        rejected: List[str] = []

        for directory in self._walk():
            try:
                post = self.load_post(directory)
            except (MetadataParseError, BodyReadError) as exc:
                logger.error("Skipping %s: %s", directory, exc)
                rejected.append(str(directory))
                continue

            if post is None:
                continue

            path = post.path_from_root
            if path in collected:
                logger.warning("Route %s is defined twice; %s replaces the earlier post", path, directory)
                del collected[path]
            collected[path] = post
            logger.info("loaded post: %s", directory)

        posts = sorted(collected.values(), key=lambda p: p.publish_dt)
        elapsed = timedelta(seconds=time.perf_counter() - start)

        index = ContentIndex.from_posts(
            tuple(posts),
            root=str(self.root),
            built_at=datetime.now(timezone.utc),
            elapsed=elapsed,
            rejected=tuple(rejected),
        )
        logger.info(
            "indexing finished in %.1fms: %d posts, %d rejected",
            elapsed.total_seconds() * 1000,
            len(index),
            len(rejected),
        )
        return index


def build_index(
    root: Union[str, Path],
    route_prefix: str = DEFAULT_ROUTE_PREFIX,
    metadata_filename: str = DEFAULT_METADATA_FILENAME,
    body_filename: str = DEFAULT_BODY_FILENAME,
    profile: str = "dark",
) -> ContentIndex:
    """
    Build a ContentIndex for `root` in one call.
    """
    indexer = ContentIndexer(
        root,
        route_prefix=route_prefix,
        metadata_filename=metadata_filename,
        body_filename=body_filename,
        renderer=MarkdownRenderer(profile),
    )
    return indexer.build()
