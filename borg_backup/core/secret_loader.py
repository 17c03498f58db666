from __future__ import annotations

import logging
import stat
from dataclasses import dataclass, field
from pathlib import Path

from .config_loader import parse_env_file

logger = logging.getLogger(__name__)

PASSPHRASE_KEY = "BORG_PASSPHRASE"


@dataclass(frozen=True)
class Passphrase:
    value: str = field(repr=False)

    def as_env(self) -> dict[str, str]:
        return {PASSPHRASE_KEY: self.value}


class SecretLoader:
    """Reads the repository passphrase from an owner-only env file.

    The file uses the same KEY=VALUE format as the main config (a leading
    ``export`` is accepted) but values are taken literally, without
    variable expansion. Any read failure aborts the invocation.
    """

    def load(self, secret_file: Path) -> Passphrase:
        try:
            values = parse_env_file(secret_file, expand=False)
            mode = secret_file.stat().st_mode
        except OSError as exc:
            raise SystemExit(
                f"Could not read passphrase file {secret_file}: {exc.strerror or exc}"
            ) from exc

        if mode & (stat.S_IRWXG | stat.S_IRWXO):
            logger.warning(
                "Passphrase file %s is accessible by group or others (mode %o)",
                secret_file,
                stat.S_IMODE(mode),
            )

        if PASSPHRASE_KEY not in values:
            raise SystemExit(f"Missing {PASSPHRASE_KEY} in passphrase file: {secret_file}")
        return Passphrase(values[PASSPHRASE_KEY])
