import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
SEED_DOCUMENTS_PATH = os.getenv("SEED_DOCUMENTS_PATH") or None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_points"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

POINT_VALUE = float(os.getenv("POINT_VALUE", "1000"))
DAYS_PER_SALARY_MONTH = int(os.getenv("DAYS_PER_SALARY_MONTH", "30"))
LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "10"))
ENFORCE_CHECKIN_DEADLINE = bool(int(os.getenv("ENFORCE_CHECKIN_DEADLINE", "0")))
