from __future__ import annotations

import logging

from ..core.backup_config import BackupConfig
from ..core.protocols import BorgClientProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


class InitCommand(Command):
    def __init__(self, config: BackupConfig, borg: BorgClientProtocol) -> None:
        self._config = config
        self._borg = borg

    def run(self) -> int:
        target = self._config.target.connection_string
        logger.info("Starting Borg repository initialization: %s", target)

        process = self._borg.run(
            "init",
            target,
            [f"--encryption={self._config.encryption_method}"],
        )
        raise_for_returncode(process, f"Borg repository initialization {target}")

        logger.info("Finished Borg repository initialization: %s", target)
        return 0
