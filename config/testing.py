import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
SEED_DOCUMENTS_PATH = None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_points_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

POINT_VALUE = 1000
DAYS_PER_SALARY_MONTH = 30
LOCATION_TIMEOUT_SECONDS = 10
ENFORCE_CHECKIN_DEADLINE = False
