import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

ADMIN_PIN = os.getenv("ADMIN_PIN", "")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "instance/time-tracker-state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "time_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
