from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from dotenv import load_dotenv

from classroom_attendance.config import get_settings_module
from classroom_attendance.database.bootstrap import DEMO_TEACHER, apply_schema, seed_sample_data
from classroom_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_path = str(settings.DB_CONFIG["path"])
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = DatabaseConnection.get_instance(DBConfig(path=db_path))
    apply_schema(conn)
    teacher_id = seed_sample_data(conn)
    print(f"OK: Seeded database -> {db_path} (teacher_id={teacher_id}, login={DEMO_TEACHER['email']})")


if __name__ == "__main__":
    main()
