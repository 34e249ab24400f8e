"""
Content pipeline: load records, derive path metadata, filter and sort.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from pathmeta.content.loader import ContentLoader, ContentRecord
from pathmeta.content.path_meta import apply_path_meta
from pathmeta.core.config import LocaleConfig, SiteConfig

logger = logging.getLogger(__name__)


def transform_record(record: ContentRecord, locale_config: LocaleConfig) -> ContentRecord:
    """Return a copy of ``record`` with derived path metadata merged into its meta."""
    meta = apply_path_meta(record.meta, record.id, locale_config)
    logger.debug("Derived %s -> slug=%s position=%s", record.id, meta["slug"], meta["position"])
    return replace(record, meta=meta)


def sort_records(records: Iterable[ContentRecord]) -> list[ContentRecord]:
    """Sort records by position, then slug."""
    return sorted(records, key=lambda r: (r.position, r.slug))


def build_index(
    config: SiteConfig,
    *,
    include_drafts: bool = False,
    include_partials: bool = False,
    locale: str | None = None,
) -> list[ContentRecord]:
    """Load and transform every record of a site.

    Args:
        config: Site configuration
        include_drafts: Include draft content
        include_partials: Include partial content
        locale: Only keep records in this locale

    Returns:
        Transformed records sorted by position
    """
    loader = ContentLoader(config)
    results = []
    for record in loader.iter_records():
        record = transform_record(record, config.locales)
        if record.is_draft and not include_drafts:
            continue
        if record.is_partial and not include_partials:
            continue
        if locale and record.locale != locale:
            continue
        results.append(record)
    return sort_records(results)


def find_by_slug(
    records: Iterable[ContentRecord], slug: str, locale: str | None = None
) -> ContentRecord | None:
    """Find the first record with a slug (and locale, if given)."""
    if not slug.startswith("/"):
        slug = "/" + slug
    for record in records:
        if record.slug != slug:
            continue
        if locale and record.locale != locale:
            continue
        return record
    return None


def summarize(records: Iterable[ContentRecord]) -> dict[str, Any]:
    """Get content statistics."""
    total = 0
    drafts = 0
    partials = 0
    published = 0
    by_locale: dict[str, int] = {}

    for record in records:
        total += 1
        if record.is_draft:
            drafts += 1
        if record.is_partial:
            partials += 1
        if not record.is_draft and not record.is_partial:
            published += 1
        key = record.locale or "-"
        by_locale[key] = by_locale.get(key, 0) + 1

    return {
        "total": total,
        "by_locale": by_locale,
        "drafts": drafts,
        "partials": partials,
        "published": published,
    }
