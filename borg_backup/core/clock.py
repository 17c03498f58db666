from __future__ import annotations

from datetime import datetime


class Clock:
    def archive_name(self, fmt: str = "%Y%m%d") -> str:
        return datetime.now().strftime(fmt)
