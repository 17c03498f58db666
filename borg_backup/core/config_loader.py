from __future__ import annotations

import os
import socket
from pathlib import Path

from .backup_config import BackupConfig, RepositoryTarget, RetentionPolicy, SourceSpec

ENCRYPTION_METHODS = (
    "none",
    "keyfile",
    "repokey",
    "authenticated",
    "keyfile-blake2",
    "repokey-blake2",
    "authenticated-blake2",
)
COMPRESSION_ALGOS = ("none", "lz4", "zstd", "zlib", "lzma", "auto")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_env_file(env_file: Path, *, expand: bool = True) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in env_file.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        cleaned = _unquote(value.strip())
        values[key.strip()] = os.path.expandvars(cleaned) if expand else cleaned
    return values


class ConfigLoader:
    def __init__(self, project_root: Path) -> None:
        self._project_root = project_root

    @property
    def default_env_file(self) -> Path:
        return self._project_root / "config" / "backup.env"

    @property
    def example_env_file(self) -> Path:
        return self._project_root / "config" / "backup.env.example"

    def load(self, env_path: str | None = None) -> BackupConfig:
        env_file = Path(env_path).expanduser() if env_path else self.default_env_file
        if not env_file.is_file():
            raise SystemExit(
                f"Missing env file: {env_file}\n"
                f"Create it from: {self.example_env_file}"
            )

        env_values = parse_env_file(env_file)
        self._validate_required(env_values)

        target = RepositoryTarget(
            user=env_values["BORG_USER"],
            host=env_values["BORG_HOST"],
            path=env_values.get("BORG_REPO") or socket.gethostname(),
        )
        retention = RetentionPolicy(
            keep_daily=self._non_negative_int(env_values, "KEEP_DAILY", 7),
            keep_weekly=self._non_negative_int(env_values, "KEEP_WEEKLY", 4),
            keep_monthly=self._non_negative_int(env_values, "KEEP_MONTHLY", 6),
            keep_yearly=self._non_negative_int(env_values, "KEEP_YEARLY", 1),
        )
        sources = self._load_sources(env_values, env_file)

        encryption_method = env_values.get("ENCRYPTION_METHOD") or "keyfile"
        if encryption_method not in ENCRYPTION_METHODS:
            raise SystemExit(f"Invalid ENCRYPTION_METHOD: {encryption_method}")
        compression_algo = env_values.get("COMPRESSION_ALGO") or "zlib"
        if compression_algo not in COMPRESSION_ALGOS:
            raise SystemExit(f"Invalid COMPRESSION_ALGO: {compression_algo}")

        return BackupConfig(
            project_root=self._project_root,
            env_file=env_file,
            target=target,
            retention=retention,
            sources=sources,
            passphrase_file=self._resolve_path(env_values["PASSPHRASE_FILE"], env_file),
            encryption_method=encryption_method,
            compression_algo=compression_algo,
            compression_level=env_values.get("COMPRESSION_LEVEL", "6"),
            remote_path=env_values.get("REMOTE_PATH", "borg1") or None,
            archive_name_format=env_values.get("ARCHIVE_NAME_FORMAT") or "%Y%m%d",
            borg_executable=env_values.get("BORG_EXECUTABLE") or "borg",
            ssh_executable=env_values.get("SSH_EXECUTABLE") or "ssh",
        )

    def _validate_required(self, env_values: dict[str, str]) -> None:
        required = [
            "BORG_USER",
            "BORG_HOST",
            "PASSPHRASE_FILE",
        ]
        missing = [name for name in required if not env_values.get(name)]
        if missing:
            missing_str = ", ".join(missing)
            raise SystemExit(f"Missing required config values: {missing_str}")

    def _non_negative_int(self, env_values: dict[str, str], key: str, default: int) -> int:
        raw = env_values.get(key)
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            raise SystemExit(f"Invalid value for {key}: {raw}") from None
        if value < 0:
            raise SystemExit(f"Invalid value for {key}: {raw}")
        return value

    def _load_sources(self, env_values: dict[str, str], env_file: Path) -> SourceSpec:
        paths = [
            str(Path(item).expanduser())
            for item in env_values.get("SOURCE_PATHS", "").split()
        ]
        if env_values.get("SOURCE_INCLUDE_FILE"):
            include_file = self._resolve_path(env_values["SOURCE_INCLUDE_FILE"], env_file)
            paths.extend(str(path) for path in self._read_include_file(include_file))
        if not paths:
            raise SystemExit(
                "No source paths configured: set SOURCE_PATHS or SOURCE_INCLUDE_FILE")

        patterns = env_values.get("EXCLUDE_PATTERNS", "").split()
        if env_values.get("EXCLUDE_FILE"):
            exclude_file = self._resolve_path(env_values["EXCLUDE_FILE"], env_file)
            if not exclude_file.is_file():
                raise SystemExit(f"Missing exclude file: {exclude_file}")
            patterns.extend(self._read_lines(exclude_file))

        return SourceSpec(paths=tuple(paths), exclude_patterns=tuple(patterns))

    def _resolve_path(self, value: str, env_file: Path) -> Path:
        resolved = Path(value).expanduser()
        if not resolved.is_absolute():
            resolved = env_file.parent / resolved
        return resolved

    def _read_lines(self, path: Path) -> list[str]:
        lines: list[str] = []
        for raw_line in path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            lines.append(line)
        return lines

    def _read_include_file(self, include_file: Path) -> list[Path]:
        if not include_file.is_file():
            raise SystemExit(f"Missing source include file: {include_file}")

        paths: list[Path] = []
        for line in self._read_lines(include_file):
            cleaned = os.path.expandvars(_unquote(line))
            candidate = Path(cleaned).expanduser()
            if not candidate.is_absolute():
                candidate = include_file.parent / candidate
            paths.append(candidate)
        return paths
