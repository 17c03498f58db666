from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RepositoryTarget:
    user: str
    host: str
    path: str

    @property
    def connection_string(self) -> str:
        return f"{self.user}@{self.host}:{self.path}"

    @property
    def ssh_destination(self) -> str:
        return f"{self.user}@{self.host}"

    def archive(self, name: str) -> str:
        return f"{self.connection_string}::{name}"


@dataclass(frozen=True)
class RetentionPolicy:
    keep_daily: int
    keep_weekly: int
    keep_monthly: int
    keep_yearly: int

    def as_flags(self) -> list[str]:
        return [
            f"--keep-daily={self.keep_daily}",
            f"--keep-weekly={self.keep_weekly}",
            f"--keep-monthly={self.keep_monthly}",
            f"--keep-yearly={self.keep_yearly}",
        ]


@dataclass(frozen=True)
class SourceSpec:
    paths: tuple[str, ...]
    exclude_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class BackupConfig:
    project_root: Path
    env_file: Path
    target: RepositoryTarget
    retention: RetentionPolicy
    sources: SourceSpec
    passphrase_file: Path
    encryption_method: str = "keyfile"
    compression_algo: str = "zlib"
    compression_level: str = "6"
    remote_path: str | None = "borg1"
    archive_name_format: str = "%Y%m%d"
    borg_executable: str = "borg"
    ssh_executable: str = "ssh"

    @property
    def compression(self) -> str:
        # borg rejects a level for these two
        if self.compression_algo in ("none", "lz4") or not self.compression_level:
            return self.compression_algo
        return f"{self.compression_algo},{self.compression_level}"
