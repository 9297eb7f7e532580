"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SITEPUB_*`` prefix (``SITEPUB_SOURCE_DIR``,
                    ``SITEPUB_REMOTE__HOST``, ...)
  3. TOML file    — ``sitepub.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`sitepub.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sitepub.config.discovery import ConfigNotFoundError, explicit_config, find_config
from sitepub.config.models import RemoteConfig, SyncConfig

DEFAULT_SOURCE_DIR = "_site"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``sitepub.toml`` file discovered via walk-up."""

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


class SitepubSettings(BaseSettings):
    """Unified settings for the sitepub CLI.

    Built once at startup and handed by value to the deploy service.
    Stored (via :class:`AppContext`) in ``click.Context.obj``.

    Attributes:
        project_root: Directory holding ``sitepub.toml`` (or CWD if none).
        config_path: The TOML file that was loaded, if any.
        source_dir: Local directory to publish. Overridden by
            ``SITEPUB_SOURCE_DIR``; used exactly as given.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SITEPUB_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML — derived from config location) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Publishing ---
    source_dir: str = Field(default=DEFAULT_SOURCE_DIR, min_length=1)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)

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
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> SitepubSettings:
        """Construct settings from CLI invocation.

        Discovers ``sitepub.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.

        Raises:
            click.ClickException: An explicit config file is missing, or the
                TOML file or a merged value is invalid.
        """
        toml_path: Path | None
        try:
            if config_path:
                toml_path = explicit_config(config_path)
            else:
                toml_path = find_config(project_root)
        except ConfigNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
