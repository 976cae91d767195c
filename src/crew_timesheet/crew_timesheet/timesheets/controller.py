from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.casing import to_view
from ..common.datetime_utils import parse_hhmm, parse_request_date
from ..common.validators import require_int
from ..common.web import admin_required, commit, current_role, current_user, json_body, login_required
from ..core.exceptions import ValidationError
from ..container import Container
from ..state.app_state import AddTimeEntry, UpdateTimeEntry
from .model import NewTimeEntry, TimeEntry


def entry_view(entry: TimeEntry) -> dict:
    view = to_view(entry)
    view["totalHours"] = entry.total_hours
    return view


def _new_entry(data: dict) -> NewTimeEntry:
    work_date = data.get("date")
    if not work_date:
        raise ValidationError("Date is required")
    return NewTimeEntry(
        crew_id=require_int(data.get("crew_id"), "Crew"),
        member_id=require_int(data.get("member_id"), "Member"),
        date=parse_request_date(work_date, default=None),
        start_time=parse_hhmm(data.get("start_time", "")),
        end_time=parse_hhmm(data.get("end_time", "")),
        hours_regular=data.get("hours_regular", 0),
        hours_overtime=data.get("hours_overtime", 0),
        location=(data.get("location") or "").strip(),
        work_description=data.get("work_description", ""),
        work_package_id=data.get("work_package_id") or None,
        comments=data.get("comments") or None,
        submit=bool(data.get("submit")),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/time-entries", methods=["GET"], endpoint="list_time_entries")
    @login_required
    def list_time_entries():
        crew_id = request.args.get("crewId")
        entries = container.time_entry_service.list_entries(
            require_int(crew_id, "Crew") if crew_id else None
        )
        return jsonify([entry_view(e) for e in entries])

    @app.route("/api/time-entries/<int:entry_id>", methods=["GET"], endpoint="get_time_entry")
    @login_required
    def get_time_entry(entry_id: int):
        return jsonify(entry_view(container.time_entry_service.get_entry(entry_id)))

    @app.route("/api/time-entries", methods=["POST"], endpoint="add_time_entry")
    @admin_required
    def add_time_entry():
        entry = container.time_entry_service.create_entry(
            current_role=current_role(),
            submitted_by=current_user().username,
            entry=_new_entry(json_body()),
        )
        commit(container, AddTimeEntry(entry))
        return jsonify(entry_view(entry)), 201

    @app.route("/api/time-entries/<int:entry_id>/submit", methods=["POST"], endpoint="submit_time_entry")
    @admin_required
    def submit_time_entry(entry_id: int):
        entry = container.time_entry_service.submit_entry(
            current_role=current_role(),
            submitted_by=current_user().username,
            entry_id=entry_id,
        )
        commit(container, UpdateTimeEntry(entry))
        return jsonify(entry_view(entry))

    @app.route("/api/time-entries/<int:entry_id>/approve", methods=["POST"], endpoint="approve_time_entry")
    @admin_required
    def approve_time_entry(entry_id: int):
        entry = container.time_entry_service.approve_entry(current_role=current_role(), entry_id=entry_id)
        commit(container, UpdateTimeEntry(entry))
        return jsonify(entry_view(entry))

    @app.route("/api/time-entries/<int:entry_id>/reject", methods=["POST"], endpoint="reject_time_entry")
    @admin_required
    def reject_time_entry(entry_id: int):
        entry = container.time_entry_service.reject_entry(current_role=current_role(), entry_id=entry_id)
        commit(container, UpdateTimeEntry(entry))
        return jsonify(entry_view(entry))
