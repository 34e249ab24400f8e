"""
Path-derived content metadata.

Maps a content identifier such as ``content:fr/guide/02.setup.md`` to the
metadata a site needs to route and order it: slug, position, locale,
draft/partial flags and a fallback title.

The first identifier segment is always the mount point and is discarded.
``/`` and ``:`` are interchangeable delimiters.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from slugify import slugify

from pathmeta.core.config import LocaleConfig

# Match 1, 1.2, 1.x, 1.2.x, 1.2.3.x
SEMVER_RE = re.compile(r"^(\d+)(\.\d+)*(\.x)?\Z", re.ASCII)

DELIMITER_RE = re.compile(r"[/:]")
EXTENSION_RE = re.compile(r"\.[^./:]+\Z")
HIDDEN_RE = re.compile(r"^[_.-]")
NUMBERING_RE = re.compile(r"^(\d+\.)?(.*)", re.ASCII | re.DOTALL)
INDEX_RE = re.compile(r"^index")
DRAFT_RE = re.compile(r"\.draft")
DRAFT_MARKER_RE = re.compile(r"\.draft(\.|\Z)")
POSITION_RE = re.compile(r"^[_.-]?(\d+)\.", re.ASCII)
TITLE_SPLIT_RE = re.compile(r"[\s-]")
WORD_SPLIT_RE = re.compile(r"[_./]+")

POSITION_WIDTH = 4
POSITION_LENGTH = 12
# Parts without a position go to the bottom
UNORDERED_POSITION = "9999"

# Fields produced by derive_path_meta
PATH_META_FIELDS = ("title", "slug", "position", "draft", "partial", "locale")


@dataclass(frozen=True)
class PathMeta:
    """Metadata derived from a content identifier."""

    title: str
    slug: str
    position: str
    draft: bool
    partial: bool
    locale: str | None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def split_path(path: str) -> list[str]:
    """Split a path on both ``/`` and ``:``."""
    return DELIMITER_RE.split(path)


def without_extension(path: str) -> str:
    """Remove the extension of the last path segment."""
    return EXTENSION_RE.sub("", path)


def refine_url_part(name: str) -> str:
    """Clean up special keywords from a path part.

    Only the last ``/``/``:`` token of ``name`` is considered. Version tokens
    (``1``, ``1.2``, ``1.x``) are returned as-is; anything else loses its
    hidden marker, its ``NN.`` numbering, a leading ``index`` and a
    ``.draft`` marker, in that order.

    Examples:
        "_01.getting-started" -> "getting-started"
        "1.x"                 -> "1.x"
        "index"               -> ""
    """
    name = split_path(name)[-1]
    if SEMVER_RE.match(name):
        return name

    name = HIDDEN_RE.sub("", name, count=1)
    name = NUMBERING_RE.sub(r"\2", name, count=1)
    name = INDEX_RE.sub("", name, count=1)
    name = DRAFT_RE.sub("", name, count=1)
    return name


def generate_slug(path: str) -> str:
    """Generate a URL slug from a ``/``-joined relative path.

    Args:
        path: Relative path with mount point and locale already removed

    Returns:
        Slug with one leading slash and no trailing slash
    """
    slug = "/".join(slugify(refine_url_part(part)) for part in path.split("/"))
    slug = slug.rstrip("/")
    if not slug.startswith("/"):
        slug = "/" + slug
    return slug


def generate_position(path: str) -> str:
    """Generate a fixed-width sort key from a relative path.

    Each segment contributes four characters: its ``NN.`` number zero-padded,
    or ``9999`` when it has none. The concatenation is padded with ``0`` and
    cut to twelve characters, so only the first three levels take part in
    ordering.
    """
    codes = []
    for part in split_path(path):
        if not part:
            continue
        match = POSITION_RE.match(part)
        if match and not SEMVER_RE.match(part):
            codes.append(match.group(1).rjust(POSITION_WIDTH, "0"))
        else:
            codes.append(UNORDERED_POSITION)
    return "".join(codes).ljust(POSITION_LENGTH, "0")[:POSITION_LENGTH]


def is_draft(path: str) -> bool:
    """Whether a path segment carries a ``.draft`` marker."""
    return any(DRAFT_MARKER_RE.search(part) for part in split_path(path))


def is_partial(path: str) -> bool:
    """Files or directories starting with ``_`` are partial content."""
    return any(part.startswith("_") for part in split_path(path))


def _pascal_case(word: str) -> str:
    return "".join(piece[:1].upper() + piece[1:] for piece in WORD_SPLIT_RE.split(word))


def generate_title(name: str) -> str:
    """Generate a human-readable title from a refined file name.

    Examples:
        "getting-started" -> "Getting Started"
        "api reference"   -> "Api Reference"
    """
    return " ".join(_pascal_case(word) for word in TITLE_SPLIT_RE.split(name))


def detect_locale(
    parts: Sequence[str], locale_config: LocaleConfig
) -> tuple[str | None, list[str]]:
    """Consume a leading locale segment.

    Args:
        parts: Path segments with the mount point removed
        locale_config: Recognized locales and default

    Returns:
        Tuple of (locale, remaining parts). The locale is the default one
        when the first segment is not a recognized locale code.
    """
    remaining = list(parts)
    if remaining and remaining[0] in locale_config.locales:
        return remaining.pop(0), remaining
    return locale_config.default_locale, remaining


def derive_path_meta(
    content_id: str,
    locale_config: LocaleConfig,
    *,
    title: str | None = None,
    locale: str | None = None,
) -> PathMeta:
    """Derive path metadata for a content identifier.

    Args:
        content_id: Identifier like ``content:en/guide/01.intro.md``
        locale_config: Recognized locales and default
        title: Existing title; kept when non-empty
        locale: Existing locale; used only when none can be derived

    Returns:
        PathMeta patch
    """
    # First part always represents the mount point
    parts = split_path(without_extension(content_id))[1:]
    derived_locale, parts = detect_locale(parts, locale_config)
    file_path = "/".join(parts)

    if not title:
        title = generate_title(refine_url_part(parts[-1])) if parts else ""

    return PathMeta(
        title=title,
        slug=generate_slug(file_path),
        position=generate_position(file_path),
        draft=is_draft(file_path),
        partial=is_partial(file_path),
        locale=derived_locale or locale,
    )


def apply_path_meta(
    meta: Mapping[str, Any], content_id: str, locale_config: LocaleConfig
) -> dict[str, Any]:
    """Return a copy of ``meta`` with the derived fields merged in.

    Existing ``title`` and ``locale`` values are passed to the deriver so the
    precedence rules of :func:`derive_path_meta` apply. Other keys pass
    through unchanged.
    """
    title = meta.get("title")
    locale = meta.get("locale")
    patch = derive_path_meta(
        content_id,
        locale_config,
        title=str(title) if title else None,
        locale=str(locale) if locale else None,
    )
    merged = dict(meta)
    merged.update(patch.as_dict())
    return merged
