from __future__ import annotations

from flask import Flask, jsonify

from ..auth.service import require_worker_access
from ..common.web import current_session, login_required, not_found
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/workers/<worker_id>/stats", methods=["GET"], endpoint="payroll_stats")
    @login_required
    def payroll_stats(worker_id: str):
        require_worker_access(current_session(), worker_id)
        if not container.worker_registry.get_worker(worker_id):
            not_found("Worker")

        stats = container.payroll_service.monthly_stats(worker_id)
        return jsonify(
            {
                "workedMinutes": stats.worked_minutes,
                "hoursWorked": stats.hours_worked,
                "hoursExpected": f"{stats.hours_expected}h",
                "projectedSalary": str(stats.projected_salary),
                "totalEarnings": str(stats.total_earnings),
                "paymentType": stats.payment_type.value,
            }
        )
