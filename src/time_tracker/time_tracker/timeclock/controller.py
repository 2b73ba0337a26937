from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..auth.service import require_worker_access
from ..common.datetime_utils import format_worked_time
from ..common.web import current_session, date_arg, json_body, login_required, not_found
from ..container import Container
from ..core.enums import EventKind
from ..core.exceptions import ValidationError
from ..database.serialization import decode_photo, event_to_dict


def register(app: Flask, container: Container) -> None:
    clock = container.timeclock_service

    @app.route("/workers/<worker_id>/events", methods=["POST"], endpoint="events_append")
    @login_required
    def events_append(worker_id: str):
        data = json_body()
        try:
            kind = EventKind(data.get("type"))
        except ValueError:
            raise ValidationError(f"Unknown event type: {data.get('type')!r}") from None
        try:
            photo = decode_photo(data.get("photo"))
        except ValueError as e:
            raise ValidationError(str(e)) from None

        event = clock.append_event(worker_id, kind, photo, session=current_session())
        if event is None:
            not_found("Worker")
        out = event_to_dict(event)
        out["status"] = clock.day_status(worker_id).value
        return jsonify(out), 201

    @app.route("/workers/<worker_id>/today", methods=["GET"], endpoint="events_today")
    @login_required
    def events_today(worker_id: str):
        require_worker_access(current_session(), worker_id)
        worker = container.worker_registry.get_worker(worker_id)
        if not worker:
            not_found("Worker")

        minutes = clock.worked_minutes(worker_id)
        return jsonify(
            {
                "status": clock.day_status(worker_id).value,
                "workedMinutes": minutes,
                "workedTime": format_worked_time(minutes),
                "earnings": str(container.payroll_service.daily_earnings(worker, minutes)),
                "events": [asdict(e) for e in clock.get_today_events_ui(worker_id)],
            }
        )

    @app.route("/workers/<worker_id>/history", methods=["GET"], endpoint="events_history")
    @login_required
    def events_history(worker_id: str):
        require_worker_access(current_session(), worker_id)
        return jsonify([asdict(d) for d in clock.get_history_ui(worker_id)])

    @app.route("/workers/<worker_id>/days/<day>/events/<int:index>", methods=["PATCH"], endpoint="events_edit")
    @login_required
    def events_edit(worker_id: str, day: str, index: int):
        data = json_body()
        updates: dict = {}
        if "type" in data:
            updates["kind"] = data["type"]
        if "time" in data:
            updates["display_time"] = data["time"]
        if "photo" in data:
            try:
                updates["photo"] = decode_photo(data["photo"])
            except ValueError as e:
                raise ValidationError(str(e)) from None

        if not clock.edit_event(worker_id, date_arg(day), index, updates, session=current_session()):
            not_found("Event")
        return jsonify({"ok": True})

    @app.route("/workers/<worker_id>/days/<day>/events/<int:index>", methods=["DELETE"], endpoint="events_delete")
    @login_required
    def events_delete(worker_id: str, day: str, index: int):
        if not clock.delete_event(worker_id, date_arg(day), index, session=current_session()):
            not_found("Event")
        return jsonify({"ok": True})
