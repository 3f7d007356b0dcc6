import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "mdm_attendance"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "0"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Report labels: "en" or "gu"
REPORT_LOCALE = os.getenv("REPORT_LOCALE", "gu")
DEFAULT_BREAK_AT = int(os.getenv("DEFAULT_BREAK_AT", "5"))
SEMI_MONTHLY_BREAK_AT = int(os.getenv("SEMI_MONTHLY_BREAK_AT", "6"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
