"""Locate ``fmdates.toml``.

The search starts in a directory (default: cwd) and climbs towards the
filesystem root, stopping after the first directory that holds ``.git``:
a config file above the site repository never applies to it.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "fmdates.toml"
CONFIG_ENV_VAR = "FMDATES_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start*, or None.

    ``FMDATES_CONFIG`` short-circuits the search; when it names a missing
    file no config is used at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (candidate_dir / ".git").exists():
            break
    return None
