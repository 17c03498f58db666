from __future__ import annotations

import re
import shlex
import subprocess
from collections.abc import Sequence

from .backup_config import BackupConfig

_TILDE_PREFIX = re.compile(r"^~[A-Za-z0-9._-]*(?=/|$)")


def quote_remote_arg(arg: str) -> str:
    """Shell-quote ``arg`` but leave a leading ``~`` or ``~user`` for the remote shell to expand."""
    match = _TILDE_PREFIX.match(arg)
    if match is None:
        return shlex.quote(arg)
    prefix = match.group(0)
    rest = arg[len(prefix):]
    if rest in ("", "/"):
        return prefix + rest
    return f"{prefix}/{shlex.quote(rest[1:])}"


class SshClient:
    def __init__(self, config: BackupConfig) -> None:
        self._config = config

    def run(self, remote_args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        # ssh joins remote arguments into one shell command line on the server
        remote_command = " ".join(quote_remote_arg(arg) for arg in remote_args)
        cmd = [
            self._config.ssh_executable,
            self._config.target.ssh_destination,
            remote_command,
        ]
        try:
            return subprocess.run(cmd, text=True, check=False)
        except FileNotFoundError as exc:
            raise SystemExit(f"Executable not found: {cmd[0]}") from exc
