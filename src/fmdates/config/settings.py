"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FMDATES_*`` prefix
  3. TOML file    — ``fmdates.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from fmdates.config.discovery import find_config
from fmdates.config.models import GitConfig, ProcessingConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``fmdates.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FmSettings(BaseSettings):
    """Unified settings for the fmdates CLI.

    Attributes:
        config_path: The config file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FMDATES_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    git: GitConfig = Field(default_factory=GitConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_from: Path | None = None,
        workers: int | None = None,
        **cli_flags: Any,
    ) -> FmSettings:
        """Construct settings from a CLI invocation.

        Discovers ``fmdates.toml`` by walking up from *search_from* (default:
        cwd) unless *config_path* is given, and merges CLI flags as
        highest-priority overrides. ``--workers`` overrides
        ``[processing] workers`` without discarding the rest of the section.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(search_from)

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

        if workers is not None:
            processing = settings.processing.model_copy(update={"workers": max(1, workers)})
            settings = settings.model_copy(update={"processing": processing})
        return settings
