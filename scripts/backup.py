"""Backup the attendance lists.

Note: Only SQLite databases are supported; a backup is a timestamped copy of
the database file under ``backups/``.
"""

from __future__ import annotations

import importlib
import shutil
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roll_call.roll_call.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    source = DatabaseConnection(DBConfig(url=settings.DATABASE_URL)).sqlite_path()
    if source is None:
        raise SystemExit(f"Cannot back up {settings.DATABASE_URL}: not a SQLite file.")
    if not source.exists():
        raise SystemExit(f"Nothing to back up: {source} does not exist.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{source.stem}_{ts}{source.suffix}"

    shutil.copy2(source, out_file)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
