"""Shared pytest fixtures and test doubles for sitepub tests."""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from sitepub.config.settings import SitepubSettings
from sitepub.transfer.base import MirrorRequest, TransferOutcome


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip any SITEPUB_* variables from the developer's environment."""
    for name in list(os.environ):
        if name.startswith("SITEPUB_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo logging configuration done by the CLI under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    ours = logging.getLogger("sitepub")
    our_level = ours.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    ours.setLevel(our_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory, made the CWD."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> SitepubSettings:
    """Settings with all code defaults."""
    return SitepubSettings.from_cli(project_root=project_root)


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A small generated site."""
    site = tmp_path / "_site"
    (site / "posts").mkdir(parents=True)
    (site / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    (site / "posts" / "hello.html").write_text("<p>hello</p>", encoding="utf-8")
    return site


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> Callable[[int], list[list[str]]]:
    """Replace ``subprocess.run`` in the rsync transfer with a recorder.

    Call the fixture with the exit status the fake should report; it
    returns the list that collects every argv it was invoked with.
    """

    def install(returncode: int = 0) -> list[list[str]]:
        calls: list[list[str]] = []

        def _run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode)

        monkeypatch.setattr("sitepub.transfer.rsync.subprocess.run", _run)
        return calls

    return install


# ---------------------------------------------------------------------------
# Transfer doubles
# ---------------------------------------------------------------------------


class RecordingTransfer:
    """Records each request and answers with a fixed exit status."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.requests: list[MirrorRequest] = []

    def mirror(self, request: MirrorRequest) -> TransferOutcome:
        self.requests.append(request)
        return TransferOutcome(returncode=self.returncode, command=["fake", request.source])


def _digest(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


class LocalMirrorTransfer:
    """Checksum mirror onto a local directory, recording what changed."""

    def __init__(self, target: Path) -> None:
        self.target = target
        self.runs: list[list[str]] = []

    def mirror(self, request: MirrorRequest) -> TransferOutcome:
        source = Path(request.source)
        changed: list[str] = []
        self.target.mkdir(parents=True, exist_ok=True)

        wanted = {p.relative_to(source) for p in source.rglob("*") if p.is_file()}
        for rel in sorted(wanted):
            src, dst = source / rel, self.target / rel
            if dst.is_file() and _digest(dst) == _digest(src):
                continue
            changed.append(str(rel))
            if not request.dry_run:
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(src, dst)

        if request.options.delete:
            for existing in sorted(self.target.rglob("*"), reverse=True):
                rel = existing.relative_to(self.target)
                if existing.is_file() and rel not in wanted:
                    changed.append(f"deleting {rel}")
                    if not request.dry_run:
                        existing.unlink()

        self.runs.append(changed)
        return TransferOutcome(returncode=0, changed=changed)


@pytest.fixture
def recording_transfer() -> RecordingTransfer:
    return RecordingTransfer()
