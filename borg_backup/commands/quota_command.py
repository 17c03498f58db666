from __future__ import annotations

import logging

from ..core.backup_config import BackupConfig
from ..core.protocols import SshClientProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


class QuotaCommand(Command):
    def __init__(self, config: BackupConfig, ssh: SshClientProtocol) -> None:
        self._config = config
        self._ssh = ssh

    def run(self) -> int:
        destination = self._config.target.ssh_destination
        logger.info("Starting remote quota check: %s", destination)

        process = self._ssh.run(["quota"])
        raise_for_returncode(process, f"Remote quota check {destination}")

        logger.info("Finished remote quota check: %s", destination)
        return 0
