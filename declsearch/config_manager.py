"""Read and write the ``[search]`` section of the declsearch TOML config."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import toml

from . import config
from .errors import UnknownCategoryError
from .models import Category

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_CONFIG: Dict[str, Any] = {
    "limit": 10,
    "kind": Category.FUNCTIONS.value,
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not config.CONFIG_FILE.exists():
        return {}
    try:
        with open(config.CONFIG_FILE, "r") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config.CONFIG_FILE, exc)
        return {}


def load_search_config() -> Dict[str, Any]:
    """Return the ``[search]`` settings merged over the defaults.

    Invalid values are reported and replaced by their defaults.
    """
    merged = DEFAULT_SEARCH_CONFIG.copy()
    section = load_full_config().get("search", {})
    if not isinstance(section, dict):
        logger.warning("Config section [search] is not a table; using defaults")
        return merged

    limit = section.get("limit")
    if limit is not None:
        if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0:
            merged["limit"] = limit
        else:
            logger.warning("Invalid search.limit %r; using %d", limit, merged["limit"])

    kind = section.get("kind")
    if kind is not None:
        try:
            merged["kind"] = Category.parse(kind).value
        except UnknownCategoryError:
            logger.warning("Invalid search.kind %r; using %s", kind, merged["kind"])

    return merged


def save_search_config(limit: Optional[int] = None, kind: Optional[str] = None) -> Dict[str, Any]:
    """Update the ``[search]`` section, preserving other sections.

    Returns the settings now in effect.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    full = load_full_config()
    section = full.setdefault("search", {})
    if limit is not None:
        section["limit"] = limit
    if kind is not None:
        section["kind"] = Category.parse(kind).value

    config.BASE_DIR.mkdir(parents=True, exist_ok=True)
    with open(config.CONFIG_FILE, "w") as f:
        toml.dump(full, f)
    logger.debug("Wrote %s", config.CONFIG_FILE)
    return load_search_config()
