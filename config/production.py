import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftboard"),
    "connection_timeout": float(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))
STORE_CONNECT_ATTEMPTS = int(os.getenv("STORE_CONNECT_ATTEMPTS", "3"))

MIN_SHIFT_HOURS = float(os.getenv("MIN_SHIFT_HOURS", "4"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
