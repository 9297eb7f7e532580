"""rsync-over-SSH transfer.

Shells out to the system ``rsync`` once and waits for it. Output is not
captured: rsync's progress and diagnostics go straight to the terminal,
and its exit status is the only signal surfaced back.
"""

from __future__ import annotations

import logging
import shlex
import subprocess

from sitepub.transfer.base import MirrorRequest, TransferError, TransferOutcome

logger = logging.getLogger(__name__)

# Shell conventions for "command not found" / "not executable".
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class RsyncTransfer:
    """Mirror a directory with ``rsync -e "ssh -p PORT"``."""

    def __init__(self, executable: str = "rsync", ssh: str = "ssh") -> None:
        self._executable = executable
        self._ssh = ssh

    def build_command(self, request: MirrorRequest) -> list[str]:
        """Return the rsync argv for *request*."""
        opts = request.options
        cmd = [self._executable, "-e", f"{self._ssh} -p {request.port}"]
        if opts.compress:
            cmd.append("--compress")
        if opts.recursive:
            cmd.append("--recursive")
        if opts.checksum:
            cmd.append("--checksum")
        if opts.delete:
            cmd.append("--delete")
        if request.dry_run:
            cmd.extend(["--dry-run", "--itemize-changes"])
        cmd.extend([request.source, request.destination])
        return cmd

    def mirror(self, request: MirrorRequest) -> TransferOutcome:
        cmd = self.build_command(request)
        logger.debug("Running %s", shlex.join(cmd))
        try:
            proc = subprocess.run(cmd, check=False)
        except FileNotFoundError as exc:
            msg = f"{self._executable} not found: {exc}"
            raise TransferError(msg, exit_code=EXIT_NOT_FOUND) from exc
        except PermissionError as exc:
            msg = f"{self._executable} is not executable: {exc}"
            raise TransferError(msg, exit_code=EXIT_NOT_EXECUTABLE) from exc
        except OSError as exc:
            raise TransferError(f"could not start {self._executable}: {exc}") from exc

        returncode = proc.returncode
        if returncode < 0:
            # Killed by a signal: report it the way a shell would.
            returncode = 128 - returncode
        return TransferOutcome(returncode=returncode, command=cmd)
