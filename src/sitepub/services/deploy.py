"""DeployService — mirror the generated site onto the web host.

One synchronous transfer per call: build the request from settings, hand
it to the :class:`~sitepub.transfer.Transfer`, and turn its exit status
into a :class:`ServiceResult`. No retries and no precondition checks; a
missing source directory is reported by rsync itself.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from sitepub.services.result import ServiceError, ServiceResult
from sitepub.transfer.base import MirrorRequest, Transfer, TransferError

if TYPE_CHECKING:
    from sitepub.config.settings import SitepubSettings

log = structlog.get_logger(__name__)


def contents_path(source_dir: str) -> str:
    """Return *source_dir* with exactly one trailing ``/``.

    rsync copies only the contents of a source ending in ``/``, so the
    site root lands directly in the remote path instead of nesting one
    level deeper.
    """
    if source_dir == "/" or not source_dir.rstrip("/"):
        return "/"
    return source_dir.rstrip("/") + "/"


class DeployService:
    """Publishes ``settings.source_dir`` to ``settings.remote``."""

    def __init__(self, settings: SitepubSettings, transfer: Transfer | None = None) -> None:
        self._settings = settings
        if transfer is None:
            from sitepub.transfer.rsync import RsyncTransfer

            transfer = RsyncTransfer()
        self._transfer = transfer

    def build_request(self, *, dry_run: bool = False) -> MirrorRequest:
        remote = self._settings.remote
        return MirrorRequest(
            source=contents_path(self._settings.source_dir),
            destination=remote.destination,
            port=remote.port,
            options=self._settings.sync,
            dry_run=dry_run,
        )

    def deploy(self, *, dry_run: bool = False) -> ServiceResult:
        """Mirror the site once and report the transfer's exit status."""
        op = "deploy"
        request = self.build_request(dry_run=dry_run)
        bound = log.bind(source=request.source, destination=request.destination)
        bound.debug("deploy_started", port=request.port, dry_run=dry_run)

        started = time.perf_counter()
        try:
            outcome = self._transfer.mirror(request)
        except TransferError as exc:
            bound.error("deploy_unavailable", error=str(exc), exit_code=exc.exit_code)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="TRANSFER_UNAVAILABLE",
                    message=str(exc),
                    exit_code=exc.exit_code,
                ),
            )
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if not outcome.ok:
            bound.error("deploy_failed", exit_code=outcome.returncode)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="TRANSFER_FAILED",
                    message=f"transfer exited with status {outcome.returncode}",
                    detail={"command": outcome.command, "source": request.source},
                    exit_code=outcome.returncode,
                ),
                meta={"duration_ms": duration_ms},
            )

        data: dict[str, object] = {
            "source": request.source,
            "destination": request.destination,
            "dry_run": dry_run,
            "exit_code": 0,
            "command": outcome.command,
        }
        if outcome.changed is not None:
            data["changed"] = len(outcome.changed)
        bound.info("deploy_finished", duration_ms=duration_ms, changed=data.get("changed"))
        return ServiceResult(ok=True, op=op, data=data, meta={"duration_ms": duration_ms})
