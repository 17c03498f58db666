from __future__ import annotations

import logging

from ..core.backup_config import BackupConfig
from ..core.protocols import BorgClientProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


class CheckCommand(Command):
    def __init__(self, config: BackupConfig, borg: BorgClientProtocol) -> None:
        self._config = config
        self._borg = borg

    def run(self) -> int:
        target = self._config.target.connection_string
        logger.info("Starting Borg consistency check: %s", target)

        process = self._borg.run("check", target)
        raise_for_returncode(process, f"Borg consistency check {target}")

        logger.info("Finished Borg consistency check: %s", target)
        return 0
