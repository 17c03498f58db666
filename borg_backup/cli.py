#!/usr/bin/env python3

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn

from .commands.factory import CommandFactory
from .core.logging_setup import setup_logging
from .core.signals import install_signal_handlers

MODES = (
    ("-c", "--create", "create", "create a new backup"),
    ("-d", "--delete", "delete", "delete repository"),
    ("-h", "--help", "help", "print this help text and exit"),
    ("-i", "--init", "init", "initialize a new repository"),
    ("-l", "--list", "list", "list archives in the repository"),
    ("-p", "--prune", "prune", "prune backups"),
    ("-q", "--quota", "quota", "check remote storage quota usage"),
    ("-v", "--verify", "verify", "verify repository consistency"),
)


class UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


class ModeAction(argparse.Action):
    def __init__(self, option_strings: list[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if getattr(namespace, self.dest, None) is not None:
            parser.error("exactly one mode option is allowed")
        setattr(namespace, self.dest, self.const)


class CliApplication:
    def __init__(self, project_root: Path) -> None:
        self._factory = CommandFactory(project_root)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = UsageParser(
            prog="borg-backup",
            description="Remote BorgBackup operations CLI",
            add_help=False,
        )
        modes = parser.add_argument_group("modes (exactly one required)")
        for short, long, mode, help_text in MODES:
            modes.add_argument(
                short,
                long,
                dest="mode",
                action=ModeAction,
                const=mode,
                default=None,
                help=help_text,
            )
        parser.add_argument(
            "env_file",
            nargs="?",
            default=None,
            help="Optional path to env file (default: config/backup.env)",
        )
        return parser

    def run(self, argv: Sequence[str] | None = None) -> int:
        parser = self.build_parser()
        args = parser.parse_args(argv)
        if args.mode is None:
            parser.error("a mode option is required")
        if args.mode == "help":
            parser.print_help(sys.stdout)
            return 0
        command = self._factory.create(args.mode, args.env_file)
        return command.run()


def main() -> int:
    setup_logging()
    install_signal_handlers()
    project_root = Path(__file__).resolve().parent.parent
    app = CliApplication(project_root)
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
