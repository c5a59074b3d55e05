"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"
DATE_TIME_FORMAT = "%d/%m/%Y %H:%M"
ISO_DATE_FORMAT = "%Y-%m-%d"

MAX_NAME_LENGTH = 50
MIN_NAME_LENGTH = 2
MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 20
MAX_SCHEDULE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_NOTES_LENGTH = 200
MIN_PASSWORD_LENGTH = 4
MIN_PHONE_DIGITS = 8
MAX_PHONE_DIGITS = 15

PDF_MIME_TYPE = "application/pdf"
EXCEL_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

REPORTS_DIR = "reportes"
PHOTOS_DIR = "photos"
TEMP_PHOTOS_DIR = "temp_photos"

MAX_PHOTO_WIDTH = 1024
MAX_PHOTO_HEIGHT = 1024
PHOTO_QUALITY = 85
TEMP_PHOTO_MAX_AGE_HOURS = 24
