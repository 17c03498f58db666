from __future__ import annotations

import logging

from ..core.backup_config import BackupConfig
from ..core.protocols import BorgClientProtocol, ClockProtocol
from .base import Command, raise_for_returncode

logger = logging.getLogger(__name__)


class CreateCommand(Command):
    def __init__(
        self,
        config: BackupConfig,
        borg: BorgClientProtocol,
        clock: ClockProtocol,
    ) -> None:
        self._config = config
        self._borg = borg
        self._clock = clock

    def run(self) -> int:
        target = self._config.target
        archive_name = self._clock.archive_name(self._config.archive_name_format)
        logger.info(
            "Starting Borg archive creation: %s (archive %s)",
            target.connection_string,
            archive_name,
        )

        options = ["--compression", self._config.compression]
        for pattern in self._config.sources.exclude_patterns:
            options.extend(["--exclude", pattern])

        process = self._borg.run(
            "create",
            target.archive(archive_name),
            options,
            trailing=list(self._config.sources.paths),
        )
        raise_for_returncode(process, f"Borg archive creation {target.connection_string}")

        logger.info("Finished Borg archive creation: %s", target.connection_string)
        return 0
