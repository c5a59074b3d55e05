from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, list_tables, seed_sample_data
from .database.connection import MEMORY_PATH, DBConfig, DatabaseConnection
from .groups.controller import register as register_groups
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s db=%s", settings_module, db_config.get("path"))

    db_path = str(db_config["path"])
    if db_path != MEMORY_PATH:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = DatabaseConnection.get_instance(DBConfig(path=db_path))

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
        logger.info("schema ready (tables=%s)", len(list_tables(conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_sample_data(conn)
        logger.info("demo seed ready")

    container = build_container(
        conn=conn,
        reports_dir=getattr(settings, "REPORTS_DIR"),
        photos_dir=getattr(settings, "PHOTOS_DIR"),
        temp_photos_dir=getattr(settings, "TEMP_PHOTOS_DIR"),
        language=getattr(settings, "DEFAULT_LANGUAGE", "es"),
    )
    container.images.clean_temp_files()
    app.extensions["classroom_attendance"] = container

    register_error_handlers(app)
    register_teachers(app, container)
    register_groups(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
