"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sitepub.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- sitepub.toml sections ---


class RemoteConfig(BaseModel):
    """[remote] section — where the site is published."""

    model_config = {"frozen": True}

    user: str = "rockwood"
    host: str = "50.56.110.128"
    port: int = Field(default=2222, ge=1, le=65535)
    path: str = "~/domains/rockwood.me/public"

    @property
    def destination(self) -> str:
        """rsync destination spec, ``user@host:path``."""
        return f"{self.user}@{self.host}:{self.path}"


class SyncConfig(BaseModel):
    """[sync] section — mirror semantics handed to the transfer.

    Every flag is pinned on: a deploy is always a compressed, recursive,
    checksum-compared, deleting mirror.
    """

    model_config = {"frozen": True}

    compress: Literal[True] = True
    recursive: Literal[True] = True
    checksum: Literal[True] = True
    delete: Literal[True] = True
