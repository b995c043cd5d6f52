import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "vickhardth_ops"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False

FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "4"))

AVAILABLE_DATES_WINDOW_DAYS = int(os.getenv("AVAILABLE_DATES_WINDOW_DAYS", "30"))
AVAILABLE_DATES_LIMIT = int(os.getenv("AVAILABLE_DATES_LIMIT", "30"))
