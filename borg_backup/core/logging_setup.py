"""System log configuration."""

from __future__ import annotations

import logging
import logging.handlers
import os

SYSLOG_ADDRESS = "/dev/log"
SYSLOG_IDENT = "borg-backup: "
LOG_LEVEL_ENV = "BORG_BACKUP_LOG_LEVEL"


def _parse_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise SystemExit(f"Invalid log level: {value}")
    return level


def setup_logging(
    level: str | None = None,
    address: str = SYSLOG_ADDRESS,
) -> logging.Handler:
    """Route the package's log records to syslog (facility ``user``).

    Falls back to stderr when no syslog socket is available, e.g. inside
    minimal containers.
    """
    logger = logging.getLogger("borg_backup")
    logger.setLevel(_parse_level(level or os.environ.get(LOG_LEVEL_ENV)))

    fallback = False
    handler: logging.Handler
    try:
        if not os.path.exists(address):
            raise FileNotFoundError(address)
        handler = logging.handlers.SysLogHandler(
            address=address,
            facility=logging.handlers.SysLogHandler.LOG_USER,
        )
        handler.ident = SYSLOG_IDENT
        handler.setFormatter(logging.Formatter("%(message)s"))
    except OSError:
        fallback = True
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)

    if fallback:
        logger.debug("Syslog socket %s unavailable, logging to stderr", address)
    return handler
