"""
Configuration and path management.

Provides site root detection and the site configuration used to derive
content metadata. Uses .pathmeta/ directory for pathmeta-specific settings.

Resolution order for site root:
  1. PATHMETA_SITE_ROOT environment variable (highest priority)
  2. Walk up from cwd looking for .pathmeta/ directory
  3. Global config file (~/.config/pathmeta/config.yaml) site_root key
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_NAME = ".pathmeta"
CONFIG_FILE_NAME = "config.yaml"

DEFAULT_CONTENT_DIR = "content"
DEFAULT_MOUNT = "content"
DEFAULT_IGNORE = (".git", "node_modules", ".DS_Store", "*.swp", "*~")


@dataclass(frozen=True)
class LocaleConfig:
    """Recognized locale codes and the default locale."""

    locales: tuple[str, ...] = ()
    default_locale: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LocaleConfig:
        """Build from a mapping with ``locales`` and ``default_locale`` keys.

        Locale entries may be plain codes or mappings with a ``code`` key.
        Without an explicit default, the first locale is the default.
        """
        data = data or {}
        locales = tuple(_locale_codes(data.get("locales") or ()))
        default_locale = data.get("default_locale") or data.get("defaultLocale")
        if not default_locale and locales:
            default_locale = locales[0]
        return cls(locales=locales, default_locale=default_locale or None)


def _locale_codes(entries: Iterable[Any]) -> Iterable[str]:
    if isinstance(entries, str):
        entries = [entries]
    for entry in entries:
        if isinstance(entry, Mapping):
            code = entry.get("code")
        else:
            code = entry
        if code:
            yield str(code)


@dataclass(frozen=True)
class SiteConfig:
    """Resolved configuration for one content site."""

    root: Path
    content_dir: Path
    mount: str = DEFAULT_MOUNT
    locales: LocaleConfig = field(default_factory=LocaleConfig)
    ignore: tuple[str, ...] = DEFAULT_IGNORE

    @property
    def config_file(self) -> Path:
        return self.root / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def get_global_config_path() -> Path:
    """Return the path to the global pathmeta config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/pathmeta/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "pathmeta" / CONFIG_FILE_NAME


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML file that should contain a mapping.

    Returns:
        Parsed dict, or empty dict if file is missing or invalid.
    """
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config() -> dict[str, Any]:
    """Load the global pathmeta configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    return _load_yaml_mapping(get_global_config_path())


def _walk_up_for_config(start_path: Path) -> Path | None:
    """Walk up directory tree looking for .pathmeta/ directory.

    Args:
        start_path: Starting path for search.

    Returns:
        Path to directory containing .pathmeta/, or None if not found.
    """
    current = start_path.resolve()
    while current != current.parent:
        if (current / CONFIG_DIR_NAME).is_dir():
            return current
        current = current.parent
    return None


def find_site_root(start_path: Path | None = None) -> Path:
    """Find site root using 3-tier resolution.

    Args:
        start_path: Starting path for .pathmeta/ directory walk (defaults to cwd)

    Returns:
        Path to site root

    Raises:
        FileNotFoundError: If .pathmeta/ directory not found by any method
    """
    # Tier 1: PATHMETA_SITE_ROOT environment variable
    env_root = os.environ.get("PATHMETA_SITE_ROOT")
    if env_root:
        env_path = Path(env_root).resolve()
        if (env_path / CONFIG_DIR_NAME).is_dir():
            return env_path
        raise FileNotFoundError(
            f"PATHMETA_SITE_ROOT={env_root} does not contain a {CONFIG_DIR_NAME}/ directory."
        )

    # Tier 2: Walk up from start_path
    if start_path is None:
        start_path = Path.cwd()
    result = _walk_up_for_config(Path(start_path))
    if result is not None:
        return result

    # Tier 3: Global config file
    site_root_str = load_global_config().get("site_root")
    if site_root_str:
        global_path = Path(site_root_str).expanduser().resolve()
        if (global_path / CONFIG_DIR_NAME).is_dir():
            return global_path
        raise FileNotFoundError(
            f"Global config site_root={site_root_str} does not contain a "
            f"{CONFIG_DIR_NAME}/ directory."
        )

    raise FileNotFoundError(
        f"Could not find {CONFIG_DIR_NAME}/ directory starting from {start_path}. "
        f"Run 'pathmeta init' to initialize, set PATHMETA_SITE_ROOT, or configure "
        f"site_root in {get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_site_root() -> Path:
    """Get the cached site root path."""
    return find_site_root()


def default_config_data() -> dict[str, Any]:
    """Default contents of .pathmeta/config.yaml."""
    return {
        "content_dir": DEFAULT_CONTENT_DIR,
        "mount": DEFAULT_MOUNT,
        "locales": [],
        "default_locale": None,
        "ignore": list(DEFAULT_IGNORE),
    }


def load_site_config(site_root: Path | None = None) -> SiteConfig:
    """Load the configuration for a site.

    Site settings in .pathmeta/config.yaml override global settings, which
    override the defaults.

    Args:
        site_root: Site root path (uses cached default if not provided)

    Returns:
        SiteConfig for the site
    """
    if site_root is None:
        site_root = get_site_root()
    site_root = Path(site_root)

    data = default_config_data()
    global_config = load_global_config()
    global_config.pop("site_root", None)
    data.update(global_config)
    data.update(_load_yaml_mapping(site_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME))

    ignore = data.get("ignore")
    if isinstance(ignore, str):
        ignore = [ignore]

    return SiteConfig(
        root=site_root,
        content_dir=site_root / str(data.get("content_dir") or DEFAULT_CONTENT_DIR),
        mount=str(data.get("mount") or DEFAULT_MOUNT),
        locales=LocaleConfig.from_dict(data),
        ignore=tuple(str(pattern) for pattern in (ignore or ())),
    )
