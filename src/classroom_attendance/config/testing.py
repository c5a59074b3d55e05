import os

SECRET_KEY = "test-secret-key"

# In-memory store; every container built from this gets a fresh database.
DB_CONFIG = {
    "path": os.getenv("TEST_DB_PATH", ":memory:"),
}

DEBUG = False

AUTO_INIT_DB = True
AUTO_SEED_DB = False

REPORTS_DIR = os.getenv("REPORTS_DIR", "instance/test_reportes")
PHOTOS_DIR = os.getenv("PHOTOS_DIR", "instance/test_photos")
TEMP_PHOTOS_DIR = os.getenv("TEMP_PHOTOS_DIR", "instance/test_temp_photos")

DEFAULT_LANGUAGE = "es"
LOG_LEVEL = "WARNING"
