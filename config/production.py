import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "project_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_MONTHLY_CAPACITY_HOURS = int(os.getenv("DEFAULT_MONTHLY_CAPACITY_HOURS", "160"))
AUDIT_QUERY_LIMIT = int(os.getenv("AUDIT_QUERY_LIMIT", "100"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
