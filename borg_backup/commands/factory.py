from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..core.backup_config import BackupConfig
from ..core.borg_client import BorgClient
from ..core.clock import Clock
from ..core.config_loader import ConfigLoader
from ..core.protocols import BorgClientProtocol, ClockProtocol, SshClientProtocol
from ..core.secret_loader import Passphrase, SecretLoader
from ..core.ssh_client import SshClient
from .base import Command
from .check_command import CheckCommand
from .create_command import CreateCommand
from .delete_command import DeleteCommand
from .init_command import InitCommand
from .list_command import ListCommand
from .prune_command import PruneCommand
from .quota_command import QuotaCommand

BORG_ACTIONS = ("init", "create", "prune", "verify", "list")
SSH_ACTIONS = ("delete", "quota")


class CommandFactory:
    def __init__(
        self,
        project_root: Path,
        *,
        config_loader: ConfigLoader | None = None,
        secret_loader: SecretLoader | None = None,
        clock: ClockProtocol | None = None,
        borg_client_factory: Callable[[BackupConfig, Passphrase], BorgClientProtocol] | None = None,
        ssh_client_factory: Callable[[BackupConfig], SshClientProtocol] | None = None,
    ) -> None:
        self._config_loader = config_loader or ConfigLoader(project_root)
        self._secret_loader = secret_loader or SecretLoader()
        self._clock = clock or Clock()
        self._borg_client_factory = borg_client_factory or BorgClient
        self._ssh_client_factory = ssh_client_factory or SshClient

    def create(self, action: str, env_file: str | None) -> Command:
        if action not in BORG_ACTIONS and action not in SSH_ACTIONS:
            raise SystemExit(f"Unsupported action: {action}")

        config = self._config_loader.load(env_file)

        if action in SSH_ACTIONS:
            ssh = self._ssh_client_factory(config)
            if action == "delete":
                return DeleteCommand(config, ssh)
            return QuotaCommand(config, ssh)

        # borg cannot open an encrypted repository without the passphrase
        passphrase = self._secret_loader.load(config.passphrase_file)
        borg = self._borg_client_factory(config, passphrase)
        if action == "init":
            return InitCommand(config, borg)
        if action == "create":
            return CreateCommand(config, borg, self._clock)
        if action == "prune":
            return PruneCommand(config, borg)
        if action == "verify":
            return CheckCommand(config, borg)
        return ListCommand(config, borg)
