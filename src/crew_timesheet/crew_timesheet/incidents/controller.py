from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.casing import to_view
from ..common.validators import require_int
from ..common.web import admin_required, commit, current_role, current_user, json_body, login_required
from ..container import Container
from ..state.app_state import AddException, UpdateException


def register(app: Flask, container: Container) -> None:
    @app.route("/api/exceptions", methods=["GET"], endpoint="list_exceptions")
    @login_required
    def list_exceptions():
        pending_only = request.args.get("pending", "").lower() in ("1", "true", "yes")
        items = container.exception_service.list_exceptions(pending_only=pending_only)
        return jsonify([to_view(x) for x in items])

    @app.route("/api/exceptions/<int:exception_id>", methods=["GET"], endpoint="get_exception")
    @login_required
    def get_exception(exception_id: int):
        return jsonify(to_view(container.exception_service.get_exception(exception_id)))

    @app.route("/api/exceptions", methods=["POST"], endpoint="flag_time_entry")
    @admin_required
    def flag_time_entry():
        data = json_body()
        exc = container.exception_service.flag_entry(
            current_role=current_role(),
            flagged_by=current_user().username,
            time_entry_id=require_int(data.get("time_entry_id"), "Time entry"),
            reason=data.get("reason", ""),
            description=data.get("description", ""),
        )
        commit(container, AddException(exc))
        return jsonify(to_view(exc)), 201

    @app.route("/api/exceptions/<int:exception_id>/review", methods=["POST"], endpoint="review_exception")
    @admin_required
    def review_exception(exception_id: int):
        exc = container.exception_service.start_review(current_role=current_role(), exception_id=exception_id)
        commit(container, UpdateException(exc))
        return jsonify(to_view(exc))

    @app.route("/api/exceptions/<int:exception_id>/accept", methods=["POST"], endpoint="accept_exception")
    @admin_required
    def accept_exception(exception_id: int):
        exc = container.exception_service.resolve(
            current_role=current_role(),
            resolved_by=current_user().username,
            exception_id=exception_id,
            accept=True,
            admin_notes=json_body().get("admin_notes", ""),
        )
        commit(container, UpdateException(exc))
        return jsonify(to_view(exc))

    @app.route("/api/exceptions/<int:exception_id>/reject", methods=["POST"], endpoint="reject_exception")
    @admin_required
    def reject_exception(exception_id: int):
        exc = container.exception_service.resolve(
            current_role=current_role(),
            resolved_by=current_user().username,
            exception_id=exception_id,
            accept=False,
            admin_notes=json_body().get("admin_notes", ""),
        )
        commit(container, UpdateException(exc))
        return jsonify(to_view(exc))
