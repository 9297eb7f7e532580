"""Transfer contract: request, outcome, and the mirror protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from sitepub.config.models import SyncConfig


class MirrorRequest(BaseModel):
    """One one-way mirror of *source* onto *destination*."""

    model_config = {"frozen": True}

    source: str
    destination: str
    port: int = Field(ge=1, le=65535)
    options: SyncConfig = Field(default_factory=SyncConfig)
    dry_run: bool = False


class TransferOutcome(BaseModel):
    """What a finished transfer reports back.

    Attributes:
        returncode: Exit status of the transfer; non-zero means failure.
        command: The argv that was executed (empty for in-process fakes).
        changed: Paths the transfer created, updated, or deleted, when it
            knows them. ``None`` means unknown.
    """

    model_config = {"frozen": True}

    returncode: int
    command: list[str] = Field(default_factory=list)
    changed: list[str] | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class TransferError(Exception):
    """The transfer could not be started at all."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@runtime_checkable
class Transfer(Protocol):
    """Anything that can mirror a local tree onto a remote one."""

    def mirror(self, request: MirrorRequest) -> TransferOutcome:
        """Run the mirror to completion and report its outcome.

        Raises:
            TransferError: The transfer could not be launched.
        """
        ...
