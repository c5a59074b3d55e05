import os

SECRET_KEY = os.environ["SECRET_KEY"]

DB_CONFIG = {
    "path": os.getenv("DB_PATH", "/var/lib/classroom_attendance/classroom_attendance.db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = False

REPORTS_DIR = os.getenv("REPORTS_DIR", "/var/lib/classroom_attendance/reportes")
PHOTOS_DIR = os.getenv("PHOTOS_DIR", "/var/lib/classroom_attendance/photos")
TEMP_PHOTOS_DIR = os.getenv("TEMP_PHOTOS_DIR", "/tmp/classroom_attendance/temp_photos")

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "es")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
