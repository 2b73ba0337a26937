import os

SECRET_KEY = "test-secret"

ADMIN_PIN = "9999"

STORAGE_BACKEND = "json"
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "instance/test-state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "time_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
