from __future__ import annotations

from borg_backup.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
