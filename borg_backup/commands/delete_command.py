from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..core.backup_config import BackupConfig
from ..core.protocols import SshClientProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


def _read_response(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return ""


class DeleteCommand(Command):
    """Removes the whole repository directory on the backup host.

    This bypasses borg entirely: archives, keys stored in the repository
    and lock files are all gone afterwards.
    """

    def __init__(
        self,
        config: BackupConfig,
        ssh: SshClientProtocol,
        prompt: Callable[[str], str] = _read_response,
    ) -> None:
        self._config = config
        self._ssh = ssh
        self._prompt = prompt

    def run(self) -> int:
        target = self._config.target
        response = self._prompt(
            "Are you sure you want to permanently delete the repository "
            f"'{target.connection_string}'? [y/N] "
        )
        if response[:1] not in ("y", "Y"):
            print("Aborted", file=sys.stderr)
            logger.info("Borg repository deletion aborted: %s", target.connection_string)
            return 1

        logger.info("Starting Borg repository deletion: %s", target.connection_string)
        process = self._ssh.run(["rm", "-rf", "--", target.path])
        raise_for_returncode(process, f"Borg repository deletion {target.connection_string}")

        logger.info("Deleted Borg repository: %s", target.connection_string)
        return 0
