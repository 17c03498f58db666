from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable, Sequence

from .backup_config import BackupConfig
from .secret_loader import Passphrase


def build_borg_command(
    subcommand: str,
    location: str,
    options: Iterable[str] = (),
    *,
    executable: str = "borg",
    remote_path: str | None = None,
    trailing: Sequence[str] = (),
) -> list[str]:
    cmd = [executable, subcommand]
    if remote_path:
        cmd.append(f"--remote-path={remote_path}")
    cmd.extend(options)
    cmd.append(location)
    cmd.extend(trailing)
    return cmd


class BorgClient:
    def __init__(self, config: BackupConfig, passphrase: Passphrase) -> None:
        self._config = config
        self._passphrase = passphrase

    def run(
        self,
        subcommand: str,
        location: str,
        options: Iterable[str] = (),
        *,
        trailing: Sequence[str] = (),
    ) -> subprocess.CompletedProcess[str]:
        cmd = build_borg_command(
            subcommand,
            location,
            options,
            executable=self._config.borg_executable,
            remote_path=self._config.remote_path,
            trailing=trailing,
        )
        try:
            return subprocess.run(
                cmd,
                env=self._build_env(),
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise SystemExit(f"Executable not found: {cmd[0]}") from exc

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._passphrase.as_env())
        return env
