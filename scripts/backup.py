"""Backup the SQLite database.

Uses SQLite's online backup API, so the app can keep running while it copies.
"""

from __future__ import annotations

import importlib
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from dotenv import load_dotenv

from classroom_attendance.config import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_path = Path(settings.DB_CONFIG["path"])
    if not db_path.is_file():
        raise SystemExit(f"Database not found: {db_path}")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"classroom_attendance_{ts}.db"

    source = sqlite3.connect(str(db_path))
    target = sqlite3.connect(str(out_file))
    try:
        source.backup(target)
    finally:
        target.close()
        source.close()
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
