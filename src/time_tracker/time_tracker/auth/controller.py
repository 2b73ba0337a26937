from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, store_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        pin = str(data.get("pin", ""))
        worker_id = data.get("worker_id")

        if worker_id:
            s = container.auth_service.login_as_worker(str(worker_id), pin)
        else:
            s = container.auth_service.login_as_admin(pin)

        store_session(s)
        return jsonify(s.to_dict())

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        store_session(None)
        return jsonify({"ok": True})

    @app.route("/session", methods=["GET"], endpoint="session_info")
    def session_info():
        s = current_session()
        return jsonify(s.to_dict() if s else None)
