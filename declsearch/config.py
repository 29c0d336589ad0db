"""Configuration paths for declsearch."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("DECLSEARCH_HOME", str(Path.home() / ".declsearch"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

BEST_MATCHES_HEADER = "======== Best matches ========"
