"""
Safe front matter editing.

Writes derived path metadata back into markdown front matter without
corrupting the body.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from pathmeta.content.loader import ContentRecord
from pathmeta.content.path_meta import PATH_META_FIELDS

logger = logging.getLogger(__name__)


class FrontMatterEditor:
    """Safely edit front matter in markdown content files."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._original_content: str = ""
        self._post: frontmatter.Post | None = None

    def load(self) -> bool:
        """Load and parse the file.

        Returns:
            True if successful, False if the file is missing, unreadable or
            unparseable
        """
        if not self.path.is_file():
            logger.warning("File not found: %s", self.path)
            return False

        try:
            self._original_content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return False

        try:
            self._post = frontmatter.loads(self._original_content)
        except yaml.YAMLError as e:
            logger.warning("YAML error in %s: %s", self.path, e)
            return False
        return True

    @property
    def post(self) -> frontmatter.Post:
        if self._post is None:
            raise RuntimeError("File not loaded. Call load() first.")
        return self._post

    @property
    def front_matter(self) -> dict[str, Any]:
        return self.post.metadata

    @property
    def body(self) -> str:
        return self.post.content

    def get(self, key: str, default: Any = None) -> Any:
        return self.post.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.post[key] = value

    def update(self, values: Mapping[str, Any]) -> bool:
        """Set several values.

        Returns:
            True if any value changed
        """
        changed = False
        for key, value in values.items():
            if key not in self.post.metadata or self.post[key] != value:
                self.post[key] = value
                changed = True
        return changed

    def has_changes(self) -> bool:
        return self._generate_content() != self._original_content

    def save(self, dry_run: bool = False) -> bool:
        """Save changes to the file.

        Args:
            dry_run: If True, don't actually write

        Returns:
            True if saved successfully
        """
        new_content = self._generate_content()

        if dry_run:
            logger.info("Would update: %s", self.path)
            return True

        try:
            # Write to a temp file in the same directory then atomically replace,
            # so a crash mid-write cannot corrupt the original.
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, suffix=".tmp", prefix=".pathmeta_"
            )
            try:
                os.write(fd, new_content.encode("utf-8"))
                os.close(fd)
                fd = -1
                os.replace(tmp_path, self.path)
            except Exception:
                if fd >= 0:
                    os.close(fd)
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
                raise
            return True
        except OSError as e:
            logger.error("Error writing %s: %s", self.path, e)
            return False

    def _generate_content(self) -> str:
        """Generate the new file content."""
        text = frontmatter.dumps(self.post, sort_keys=False, allow_unicode=True)
        if not text.endswith("\n"):
            text += "\n"
        return text

    def preview_changes(self) -> str:
        """Get a preview of the new front matter."""
        if self._post is None:
            return "File not loaded"
        if not self.has_changes():
            return "No changes"
        return yaml.dump(
            self.post.metadata,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def write_path_meta(
    record: ContentRecord,
    fields: Iterable[str] = PATH_META_FIELDS,
    dry_run: bool = False,
) -> bool:
    """Write derived fields of a transformed record into its front matter.

    Args:
        record: Record whose meta already carries the derived fields
        fields: Which derived fields to write
        dry_run: Preview only

    Returns:
        True if changes were made (or would be made in dry run)
    """
    if not record.is_markdown:
        return False

    editor = FrontMatterEditor(record.path)
    if not editor.load():
        return False

    values = {key: record.meta[key] for key in fields if key in record.meta}
    if not editor.update(values):
        return False

    return editor.save(dry_run=dry_run)
