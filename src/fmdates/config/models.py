"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fmdates.toml only contains
overrides. A site needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- fmdates.toml sections ---


class ProcessingConfig(BaseModel):
    """[processing] section."""

    model_config = {"frozen": True}

    extension: str = "md"
    index_filename: str = "_index.md"
    skip_dirs: list[str] = Field(default_factory=lambda: [".git"])
    workers: int = Field(default=4, ge=1)


class GitConfig(BaseModel):
    """[git] section."""

    model_config = {"frozen": True}

    executable: str = "git"

