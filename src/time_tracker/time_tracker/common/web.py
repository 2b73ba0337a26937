"""Small helpers shared by the Flask controllers."""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import abort, jsonify, request, session

from ..auth.model import Session
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

SESSION_KEY = "auth"


def current_session() -> Optional[Session]:
    return Session.from_dict(session.get(SESSION_KEY))


def store_session(s: Optional[Session]) -> None:
    if s is None:
        session.pop(SESSION_KEY, None)
    else:
        session[SESSION_KEY] = s.to_dict()


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            return jsonify({"error": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def date_arg(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def not_found(what: str):
    abort(404, description=f"{what} not found")
