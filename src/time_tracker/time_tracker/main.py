from __future__ import annotations

import importlib
import logging
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .auth.controller import register as register_auth
from .container import build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    PersistenceError,
    StaleStateError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .payroll.controller import register as register_payroll
from .timeclock.controller import register as register_timeclock
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_ERROR_STATUS = (
    (StaleStateError, 409),
    (PersistenceError, 503),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
)


def create_app(settings=None) -> Flask:
    """Build the JSON API.

    ``settings`` is any object with the attributes of a ``config.*`` module;
    by default the module picked by APP_ENV is used.
    """

    load_dotenv(override=False)
    if settings is None:
        settings = importlib.import_module(get_settings_module())

    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORAGE_BACKEND", "json")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("[time-tracker] storage=%s", backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("[time-tracker] schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=backend,
        admin_pin=getattr(settings, "ADMIN_PIN", ""),
        json_store_path=getattr(settings, "JSON_STORE_PATH", None),
        db_config=db_config,
    )
    app.extensions["time_tracker"] = container

    register_auth(app, container)
    register_workers(app, container)
    register_timeclock(app, container)
    register_payroll(app, container)

    last_rollover: dict[str, date] = {}

    @app.before_request
    def roll_over_days():
        # Clients tick every second; the day rollover only needs checking once per date.
        today = date.today()
        if last_rollover.get("date") != today:
            container.timeclock_service.check_new_day()
            last_rollover["date"] = today

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status in _ERROR_STATUS:
            if isinstance(e, exc_type):
                return jsonify({"error": str(e)}), status
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    return app
