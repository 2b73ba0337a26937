from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.time_tracker.time_tracker.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")


def main() -> int:
    """Create the time-tracker tables in the configured MySQL database."""

    load_dotenv(REPO_ROOT / ".env", override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    if getattr(settings, "STORAGE_BACKEND", "json") != "mysql":
        logger.warning("STORAGE_BACKEND is not 'mysql'; applying the schema anyway")

    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info(
        "Schema ready on %s@%s/%s: %s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("database"),
        ", ".join(tables) or "(no tables)",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
