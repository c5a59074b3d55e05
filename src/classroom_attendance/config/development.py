import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "path": os.getenv("DB_PATH", "instance/classroom_attendance.db"),
}

DEBUG = bool(int(os.getenv("DEBUG", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

REPORTS_DIR = os.getenv("REPORTS_DIR", "instance/reportes")
PHOTOS_DIR = os.getenv("PHOTOS_DIR", "instance/photos")
TEMP_PHOTOS_DIR = os.getenv("TEMP_PHOTOS_DIR", "instance/temp_photos")

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "es")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
