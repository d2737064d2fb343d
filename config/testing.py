import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftboard_test"),
    "connection_timeout": 2.0,
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
STORE_TIMEOUT_SECONDS = 2.0
STORE_CONNECT_ATTEMPTS = 1

MIN_SHIFT_HOURS = 4.0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Seeds the demo employees; for the memory backend this fills the directory
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
