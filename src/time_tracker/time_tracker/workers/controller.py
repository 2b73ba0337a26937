from __future__ import annotations

from dataclasses import replace

from flask import Flask, jsonify

from ..auth.service import require_worker_access
from ..common.validators import require_non_negative_amount
from ..common.web import current_session, date_arg, json_body, login_required, not_found
from ..container import Container
from ..core.exceptions import ValidationError
from ..database.serialization import schedule_from_list, worker_to_dict


def register(app: Flask, container: Container) -> None:
    registry = container.worker_registry

    @app.route("/workers", methods=["GET"], endpoint="workers_list")
    def workers_list():
        # Public: the login screen lists who can clock in.
        return jsonify([{"id": w.worker_id, "name": w.name} for w in registry.list_workers()])

    @app.route("/workers", methods=["POST"], endpoint="workers_create")
    @login_required
    def workers_create():
        data = json_body()
        worker = registry.add_worker(
            str(data.get("name", "")),
            str(data.get("pin", "")),
            data.get("paymentType", "monthly"),
            data.get("amount", 0),
            session=current_session(),
        )
        return jsonify(worker_to_dict(worker, include_secret=False)), 201

    @app.route("/workers/<worker_id>", methods=["GET"], endpoint="workers_detail")
    @login_required
    def workers_detail(worker_id: str):
        require_worker_access(current_session(), worker_id)
        worker = registry.get_worker(worker_id)
        if not worker:
            not_found("Worker")
        return jsonify(worker_to_dict(worker, include_secret=False))

    @app.route("/workers/<worker_id>", methods=["PUT"], endpoint="workers_update")
    @login_required
    def workers_update(worker_id: str):
        data = json_body()
        worker = registry.get_worker(worker_id)
        if not worker:
            not_found("Worker")

        pin = data.get("pin")
        try:
            updated = replace(
                worker,
                name=str(data.get("name") or worker.name),
                payment_type=data.get("paymentType", worker.payment_type),
                monthly_salary=require_non_negative_amount(
                    data.get("monthlySalary", worker.monthly_salary), "Monthly salary"
                ),
                hourly_rate=require_non_negative_amount(data.get("hourlyRate", worker.hourly_rate), "Hourly rate"),
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e)) from None

        registry.update_worker(updated, session=current_session(), pin=str(pin) if pin else None)
        return jsonify(worker_to_dict(registry.get_worker(worker_id), include_secret=False))

    @app.route("/workers/<worker_id>", methods=["DELETE"], endpoint="workers_delete")
    @login_required
    def workers_delete(worker_id: str):
        if not registry.remove_worker(worker_id, session=current_session()):
            not_found("Worker")
        return jsonify({"ok": True})

    @app.route("/workers/<worker_id>/schedule", methods=["PUT"], endpoint="workers_schedule")
    @login_required
    def workers_schedule(worker_id: str):
        raw = json_body().get("schedule")
        if not isinstance(raw, list) or not raw or not all(isinstance(d, dict) for d in raw):
            raise ValidationError("schedule must be a list of 7 weekday entries")
        try:
            schedule = schedule_from_list(raw)
        except (AttributeError, TypeError) as e:
            raise ValidationError(f"Invalid schedule: {e}") from None
        if not registry.set_schedule(worker_id, schedule, session=current_session()):
            not_found("Worker")
        return jsonify(worker_to_dict(registry.get_worker(worker_id), include_secret=False))

    @app.route("/workers/<worker_id>/rest-days/<day>", methods=["GET"], endpoint="rest_day_check")
    @login_required
    def rest_day_check(worker_id: str, day: str):
        require_worker_access(current_session(), worker_id)
        worker = registry.get_worker(worker_id)
        if not worker:
            not_found("Worker")
        return jsonify({"date": day, "restDay": container.rest_day_classifier.is_rest_day(worker, date_arg(day))})

    @app.route("/workers/<worker_id>/rest-days/<day>", methods=["POST"], endpoint="rest_day_add")
    @login_required
    def rest_day_add(worker_id: str, day: str):
        if not registry.add_rest_day(worker_id, date_arg(day), session=current_session()):
            not_found("Worker")
        return jsonify(worker_to_dict(registry.get_worker(worker_id), include_secret=False))

    @app.route("/workers/<worker_id>/rest-days/<day>", methods=["DELETE"], endpoint="rest_day_remove")
    @login_required
    def rest_day_remove(worker_id: str, day: str):
        if not registry.remove_rest_day(worker_id, date_arg(day), session=current_session()):
            not_found("Worker")
        return jsonify(worker_to_dict(registry.get_worker(worker_id), include_secret=False))
