import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mdm_attendance_test"),
}
DB_POOL_SIZE = 0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REPORT_LOCALE = "en"
DEFAULT_BREAK_AT = 5
SEMI_MONTHLY_BREAK_AT = 6

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
