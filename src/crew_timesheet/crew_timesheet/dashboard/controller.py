from __future__ import annotations

from flask import Flask, jsonify

from ..common.casing import to_view
from ..common.web import app_store, current_user, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        state = app_store(container).state
        view = to_view(container.dashboard_service.build(state))
        view["userName"] = current_user().full_name
        return jsonify(view)
