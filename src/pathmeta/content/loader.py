"""
Content tree loader.

Walks a site's content directory, builds content identifiers and parses
front matter. Identifiers take the form ``<mount>:<relative/path.ext>``.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import frontmatter
import yaml

from pathmeta.core.config import SiteConfig, load_site_config

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


@dataclass
class ContentRecord:
    """A single file in the content tree."""

    id: str
    path: Path
    meta: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> str:
        return str(self.meta.get("title") or "")

    @property
    def slug(self) -> str:
        return str(self.meta.get("slug") or "")

    @property
    def position(self) -> str:
        return str(self.meta.get("position") or "")

    @property
    def locale(self) -> str | None:
        val = self.meta.get("locale")
        return str(val) if val else None

    @property
    def is_draft(self) -> bool:
        return bool(self.meta.get("draft", False))

    @property
    def is_partial(self) -> bool:
        return bool(self.meta.get("partial", False))

    @property
    def is_markdown(self) -> bool:
        return self.path.suffix.lower() in MARKDOWN_SUFFIXES


def is_ignored(relative_path: str, patterns: tuple[str, ...]) -> bool:
    """Check a relative path against ignore globs.

    A pattern matches when it matches the whole relative path or any single
    component of it.
    """
    parts = PurePosixPath(relative_path).parts
    for pattern in patterns:
        if fnmatch.fnmatch(relative_path, pattern):
            return True
        if any(fnmatch.fnmatch(part, pattern) for part in parts):
            return True
    return False


class ContentLoader:
    """Loads content records from a site's content directory."""

    def __init__(self, config: SiteConfig | None = None):
        """Initialize loader.

        Args:
            config: Site configuration (loaded from the site root if not provided)
        """
        if config is None:
            config = load_site_config()
        self.config = config

    @property
    def content_dir(self) -> Path:
        return self.config.content_dir

    def content_id(self, path: Path) -> str:
        """Build the content identifier for a file under the content directory."""
        relative = path.relative_to(self.content_dir).as_posix()
        return f"{self.config.mount}:{relative}"

    def path_for(self, content_id: str) -> Path | None:
        """Map a content identifier back to a file path.

        Returns:
            Path, or None if the identifier belongs to another mount point
        """
        mount, sep, relative = content_id.partition(":")
        if not sep or mount != self.config.mount or not relative:
            return None
        path = (self.content_dir / relative).resolve()
        if not path.is_relative_to(self.content_dir.resolve()):
            return None
        return path

    def iter_paths(self) -> Iterator[Path]:
        """Yield content files in relative path order, honouring the ignore list."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory not found: %s", self.content_dir)
            return

        for path in sorted(self.content_dir.rglob("*")):
            # Skip symlinks to prevent traversal outside content directory
            if path.is_symlink() or not path.is_file():
                continue
            relative = path.relative_to(self.content_dir).as_posix()
            if is_ignored(relative, self.config.ignore):
                logger.debug("Ignoring %s", relative)
                continue
            yield path

    def iter_records(self) -> Iterator[ContentRecord]:
        """Yield a ContentRecord for every content file."""
        for path in self.iter_paths():
            record = self._read(path)
            if record is not None:
                yield record

    def load(self, content_id: str) -> ContentRecord | None:
        """Load a single record by identifier.

        Returns:
            ContentRecord, or None if no such file exists
        """
        path = self.path_for(content_id)
        if path is None or not path.is_file():
            return None
        return self._read(path)

    def _read(self, path: Path) -> ContentRecord | None:
        """Read one file into a record.

        Unreadable files are skipped; broken front matter yields empty meta.
        """
        content_id = self.content_id(path)
        if path.suffix.lower() not in MARKDOWN_SUFFIXES:
            return ContentRecord(id=content_id, path=path)

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

        meta, body = self._split_content(text, path)
        return ContentRecord(id=content_id, path=path, meta=meta, body=body)

    def _split_content(self, text: str, path: Path) -> tuple[dict[str, Any], str]:
        """Split file text into front matter and body."""
        try:
            post = frontmatter.loads(text)
        except yaml.YAMLError as e:
            logger.warning("YAML error in %s: %s", path, e)
            return {}, text

        meta = post.metadata if isinstance(post.metadata, dict) else {}
        return dict(meta), post.content
