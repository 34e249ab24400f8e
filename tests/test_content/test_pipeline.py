"""Tests for pathmeta.content.pipeline."""

import pytest

from pathmeta.content.loader import ContentRecord
from pathmeta.content.pipeline import (
    build_index,
    find_by_slug,
    sort_records,
    summarize,
    transform_record,
)
from pathmeta.core.config import load_site_config


@pytest.fixture
def site_config(sample_site):
    return load_site_config(sample_site)


def test_transform_record_returns_new_record(tmp_path, locale_config):
    record = ContentRecord(
        id="content:fr/01.guide/intro.md",
        path=tmp_path / "intro.md",
        meta={"author": "someone"},
    )
    result = transform_record(record, locale_config)

    assert result is not record
    assert record.meta == {"author": "someone"}
    assert result.meta["author"] == "someone"
    assert result.slug == "/guide/intro"
    assert result.locale == "fr"
    assert result.title == "Intro"


def test_build_index_default_filters(site_config):
    records = build_index(site_config)
    assert [(r.slug, r.locale) for r in records] == [
        ("/guide/intro", "en"),
        ("/guide/intro", "fr"),
        ("/guide/setup", "en"),
        ("/api", "en"),
        ("/api/schema", "en"),
        ("/", "en"),
    ]


def test_build_index_positions(site_config):
    positions = {r.id: r.position for r in build_index(site_config)}
    assert positions["content:01.guide/01.intro.md"] == "000100010000"
    assert positions["content:02.api/index.md"] == "000299990000"
    assert positions["content:index.md"] == "999900000000"


def test_build_index_include_drafts_and_partials(site_config):
    records = build_index(site_config, include_drafts=True, include_partials=True)
    assert len(records) == 8

    draft = next(r for r in records if r.is_draft)
    assert draft.slug == "/guide/advanced"
    assert draft.position == "000100030000"

    partial = next(r for r in records if r.is_partial)
    assert partial.slug == "/guide/snippet"


def test_build_index_locale_filter(site_config):
    records = build_index(site_config, locale="fr")
    assert len(records) == 1
    assert records[0].title == "Introduction"


def test_build_index_keeps_front_matter_title(site_config):
    records = build_index(site_config)
    titles = {r.id: r.title for r in records}
    assert titles["content:01.guide/02.setup.md"] == "Setting Up"
    assert titles["content:01.guide/01.intro.md"] == "Intro"
    assert titles["content:index.md"] == "Home"


def test_sort_records_by_position_then_slug(tmp_path):
    def rec(slug, position):
        return ContentRecord(id=slug, path=tmp_path, meta={"slug": slug, "position": position})

    records = [rec("/b", "000100000000"), rec("/z", "000000000000"), rec("/a", "000100000000")]
    assert [r.slug for r in sort_records(records)] == ["/z", "/a", "/b"]


def test_find_by_slug(site_config):
    records = build_index(site_config)
    assert find_by_slug(records, "/guide/setup").title == "Setting Up"
    assert find_by_slug(records, "guide/setup").title == "Setting Up"
    assert find_by_slug(records, "/guide/intro", locale="fr").locale == "fr"
    assert find_by_slug(records, "/missing") is None


def test_summarize(site_config):
    summary = summarize(build_index(site_config, include_drafts=True, include_partials=True))
    assert summary == {
        "total": 8,
        "by_locale": {"en": 7, "fr": 1},
        "drafts": 1,
        "partials": 1,
        "published": 6,
    }


def test_summarize_empty():
    assert summarize([]) == {
        "total": 0,
        "by_locale": {},
        "drafts": 0,
        "partials": 0,
        "published": 0,
    }
