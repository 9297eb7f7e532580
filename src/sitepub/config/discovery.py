"""Config file discovery.

Walk-up finder locates sitepub.toml, similar to how git finds .git/.
An explicit location (SITEPUB_CONFIG or --config) must exist: a mistyped
path never falls back to the built-in publishing target.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "sitepub.toml"
CONFIG_ENV_VAR = "SITEPUB_CONFIG"


class ConfigNotFoundError(FileNotFoundError):
    """An explicitly named config file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Config file not found: {path}")
        self.path = path


def explicit_config(path: str) -> Path:
    """Return *path* as a config file, or raise if it is not a file."""
    p = Path(path)
    if not p.is_file():
        raise ConfigNotFoundError(p)
    return p


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for sitepub.toml.

    Returns the path to the config file, or None if not found.
    SITEPUB_CONFIG, when set, replaces the walk-up entirely.

    Raises:
        ConfigNotFoundError: SITEPUB_CONFIG names a missing file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return explicit_config(env_path)

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
