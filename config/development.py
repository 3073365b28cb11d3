import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "project_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Capacity used when a user has no monthly_available_hours set.
DEFAULT_MONTHLY_CAPACITY_HOURS = int(os.getenv("DEFAULT_MONTHLY_CAPACITY_HOURS", "160"))
AUDIT_QUERY_LIMIT = int(os.getenv("AUDIT_QUERY_LIMIT", "100"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
