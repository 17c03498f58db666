#!/usr/bin/env python3
"""Scheduled backup: create a new archive, then prune old ones.

Meant for cron/anacron, e.g.::

    1   5   remote-backup   borg-backup-run /etc/borg-backup/backup.env
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .commands.factory import CommandFactory
from .core.logging_setup import setup_logging
from .core.signals import install_signal_handlers

logger = logging.getLogger(__name__)

SCHEDULED_ACTIONS = ("create", "prune")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run scheduled Borg backup and prune")
    parser.add_argument(
        "env_file",
        nargs="?",
        default=None,
        help="Path to env file (default: config/backup.env)",
    )
    return parser


def run(env_file: str | None = None) -> int:
    factory = CommandFactory(Path(__file__).resolve().parent.parent)
    status = 0
    for action in SCHEDULED_ACTIONS:
        command = factory.create(action, env_file)
        try:
            result = command.run()
        except SystemExit as exc:
            # prune still runs after a failed create; config errors carry a message
            if not isinstance(exc.code, int):
                raise
            result = exc.code
        if result != 0:
            logger.warning("Scheduled %s finished with exit code %d", action, result)
        status = status or result
    return status


def main() -> int:
    args = build_parser().parse_args()
    setup_logging()
    install_signal_handlers()
    return run(args.env_file)


if __name__ == "__main__":
    raise SystemExit(main())
