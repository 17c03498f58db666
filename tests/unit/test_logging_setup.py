from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from borg_backup.core import logging_setup


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    logger = logging.getLogger("borg_backup")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def test_falls_back_to_stderr_without_syslog_socket(tmp_path: Path) -> None:
    handler = logging_setup.setup_logging(address=str(tmp_path / "no-such-socket"))

    assert type(handler) is logging.StreamHandler
    assert logging.getLogger("borg_backup").handlers == [handler]


def test_uses_syslog_handler_when_socket_exists(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    created: dict[str, object] = {}

    class SysLogHandlerStub(logging.Handler):
        LOG_USER = logging.handlers.SysLogHandler.LOG_USER

        def __init__(self, address: str, facility: int) -> None:
            super().__init__()
            created["address"] = address
            created["facility"] = facility

    socket_path = tmp_path / "log"
    socket_path.touch()
    monkeypatch.setattr(logging.handlers, "SysLogHandler", SysLogHandlerStub)

    handler = logging_setup.setup_logging(address=str(socket_path))

    assert isinstance(handler, SysLogHandlerStub)
    assert created == {
        "address": str(socket_path),
        "facility": logging.handlers.SysLogHandler.LOG_USER,
    }
    assert handler.ident == "borg-backup: "  # type: ignore[attr-defined]


def test_repeated_setup_replaces_handlers(tmp_path: Path) -> None:
    address = str(tmp_path / "missing")
    logging_setup.setup_logging(address=address)
    second = logging_setup.setup_logging(address=address)

    assert logging.getLogger("borg_backup").handlers == [second]


def test_level_defaults_to_info_and_honours_env(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    address = str(tmp_path / "missing")
    monkeypatch.delenv(logging_setup.LOG_LEVEL_ENV, raising=False)
    logging_setup.setup_logging(address=address)
    assert logging.getLogger("borg_backup").level == logging.INFO

    monkeypatch.setenv(logging_setup.LOG_LEVEL_ENV, "debug")
    logging_setup.setup_logging(address=address)
    assert logging.getLogger("borg_backup").level == logging.DEBUG


def test_invalid_level_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Invalid log level"):
        logging_setup.setup_logging(level="chatty", address=str(tmp_path / "missing"))
