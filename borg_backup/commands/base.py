from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Command(ABC):
    @abstractmethod
    def run(self) -> int:
        raise NotImplementedError


def exit_status(returncode: int) -> int:
    """Map a child killed by signal N (returncode -N) to the shell's 128+N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def raise_for_returncode(process: subprocess.CompletedProcess[str], description: str) -> None:
    """Exit with the external tool's status when it failed."""
    if process.returncode == 0:
        return
    status = exit_status(process.returncode)
    if process.returncode < 0:
        logger.warning(
            "%s killed by signal %d (exit status %d)",
            description,
            -process.returncode,
            status,
        )
    else:
        logger.warning("%s failed with exit code %d", description, status)
    raise SystemExit(status)
