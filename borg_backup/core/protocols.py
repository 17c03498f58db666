from __future__ import annotations

import subprocess
from collections.abc import Iterable, Sequence
from typing import Protocol


class BorgClientProtocol(Protocol):
    def run(
        self,
        subcommand: str,
        location: str,
        options: Iterable[str] = (),
        *,
        trailing: Sequence[str] = (),
    ) -> subprocess.CompletedProcess[str]:
        ...


class SshClientProtocol(Protocol):
    def run(self, remote_args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        ...


class ClockProtocol(Protocol):
    def archive_name(self, fmt: str = "%Y%m%d") -> str:
        ...
