import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Administrator PIN comes from deployment configuration, never from the store.
ADMIN_PIN = os.getenv("ADMIN_PIN", "1234")

# "json" keeps everything in one local file; "mysql" uses the shared database.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "instance/time-tracker-state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "time_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
