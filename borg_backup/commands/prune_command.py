from __future__ import annotations

import logging

from ..core.backup_config import BackupConfig
from ..core.protocols import BorgClientProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


class PruneCommand(Command):
    def __init__(self, config: BackupConfig, borg: BorgClientProtocol) -> None:
        self._config = config
        self._borg = borg

    def run(self) -> int:
        target = self._config.target.connection_string
        retention = self._config.retention
        logger.info(
            "Starting Borg prune: %s (daily=%d weekly=%d monthly=%d yearly=%d)",
            target,
            retention.keep_daily,
            retention.keep_weekly,
            retention.keep_monthly,
            retention.keep_yearly,
        )

        process = self._borg.run("prune", target, retention.as_flags())
        raise_for_returncode(process, f"Borg prune {target}")

        logger.info("Finished Borg prune: %s", target)
        return 0
