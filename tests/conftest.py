from __future__ import annotations

import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

import pytest

from borg_backup.core.backup_config import (
    BackupConfig,
    RepositoryTarget,
    RetentionPolicy,
    SourceSpec,
)
from borg_backup.core.secret_loader import Passphrase


class FixedClock:
    def archive_name(self, fmt: str = "%Y%m%d") -> str:
        return "20260216"


class BorgStub:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[dict[str, object]] = []

    def run(
        self,
        subcommand: str,
        location: str,
        options: Iterable[str] = (),
        *,
        trailing: Sequence[str] = (),
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(
            {
                "subcommand": subcommand,
                "location": location,
                "options": list(options),
                "trailing": list(trailing),
            }
        )
        return subprocess.CompletedProcess(["borg", subcommand], self.returncode)


class SshStub:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[list[str]] = []

    def run(self, remote_args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(remote_args))
        return subprocess.CompletedProcess(["ssh", *remote_args], self.returncode)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def passphrase() -> Passphrase:
    return Passphrase("unit-test-passphrase")


@pytest.fixture
def sample_config(tmp_path: Path) -> BackupConfig:
    project_root = tmp_path / "project"
    (project_root / "config").mkdir(parents=True, exist_ok=True)

    return BackupConfig(
        project_root=project_root,
        env_file=project_root / "config" / "backup.env",
        target=RepositoryTarget(user="alice", host="backup.example", path="myhost"),
        retention=RetentionPolicy(keep_daily=7, keep_weekly=4, keep_monthly=6, keep_yearly=1),
        sources=SourceSpec(
            paths=("/home/alice/docs", "/home/alice/pics", "/home/alice/src"),
            exclude_patterns=("*.pyc", "/home/alice/.cache"),
        ),
        passphrase_file=project_root / "config" / "passphrase.env",
    )
