"""Shared test fixtures for pathmeta package."""

import logging

import pytest
import yaml
from pathlib import Path

from pathmeta.core.config import LocaleConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers and level the CLI installs on the root logger."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory."""
    return tmp_path


@pytest.fixture
def locale_config():
    """Two recognized locales with English as default."""
    return LocaleConfig(locales=("en", "fr"), default_locale="en")


@pytest.fixture
def mock_site_root(tmp_path, monkeypatch):
    """Create a mock site structure with .pathmeta/ directory."""
    config_dir = tmp_path / ".pathmeta"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        yaml.dump({"locales": ["en", "fr"], "default_locale": "en"}),
        encoding="utf-8",
    )
    (tmp_path / "content").mkdir()

    # Keep global config out of the way
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("PATHMETA_SITE_ROOT", raising=False)

    # Mock get_site_root to return our tmp_path
    from pathmeta.core import config
    # Clear the lru_cache first
    config.get_site_root.cache_clear()
    monkeypatch.setattr(config, "get_site_root", lambda: tmp_path)

    return tmp_path


@pytest.fixture
def create_content_file(mock_site_root):
    """Factory fixture for creating content files under content/."""
    def _create(
        relative_path: str = "guide/01.intro.md",
        title: str | None = None,
        body: str = "Test content.",
        extra_fm: dict | None = None,
    ) -> Path:
        path = mock_site_root / "content" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)

        fm = {}
        if title:
            fm["title"] = title
        if extra_fm:
            fm.update(extra_fm)

        if fm:
            fm_str = yaml.dump(fm, default_flow_style=False)
            text = f"---\n{fm_str}---\n\n{body}\n"
        else:
            text = f"{body}\n"

        path.write_text(text, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def sample_site(create_content_file, mock_site_root):
    """A small multilingual content tree."""
    create_content_file("index.md", title="Home")
    create_content_file("01.guide/01.intro.md")
    create_content_file("01.guide/02.setup.md", title="Setting Up")
    create_content_file("01.guide/03.advanced.draft.md")
    create_content_file("01.guide/_snippet.md")
    create_content_file("02.api/index.md")
    create_content_file("fr/01.guide/01.intro.md", title="Introduction")
    (mock_site_root / "content" / "02.api" / "schema.json").write_text("{}", encoding="utf-8")
    return mock_site_root
