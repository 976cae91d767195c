from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.casing import to_view
from ..common.datetime_utils import parse_request_date
from ..common.validators import require_int
from ..common.web import login_required
from ..core.enums import ViewMode
from ..core.exceptions import ValidationError
from ..container import Container
from ..timesheets.controller import entry_view
from .export import week_csv_filename, write_week_csv
from .service import WeeklyGridView


def _flag(name: str, default: bool) -> bool:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def _window_payload(window) -> dict:
    return {
        "weekStart": window.start.strftime("%Y-%m-%d"),
        "weekEnd": window.end.strftime("%Y-%m-%d"),
        "weekLabel": window.format_range(),
    }


def register(app: Flask, container: Container) -> None:
    grid = container.grid_service

    def _build_from_args() -> WeeklyGridView:
        try:
            view_mode = ViewMode(request.args.get("view", ViewMode.ALL.value))
        except ValueError:
            raise ValidationError("Unknown view mode")

        contract_id = request.args.get("contractId")
        utilities = [u for u in request.args.getlist("utility") if u.strip()]
        return grid.build_week(
            week_of=parse_request_date(request.args.get("week"), default=date.today()),
            contract_id=require_int(contract_id, "Contract") if contract_id else None,
            search=request.args.get("search", ""),
            utilities=utilities,
            view_mode=view_mode,
            show_weekends=_flag("weekends", True),
        )

    @app.route("/api/timesheets/week", methods=["GET"], endpoint="weekly_grid")
    @login_required
    def weekly_grid():
        return jsonify(_build_from_args().to_view())

    @app.route("/api/timesheets/week/<direction>", methods=["GET"], endpoint="weekly_navigate")
    @login_required
    def weekly_navigate(direction: str):
        window = grid.window_for(parse_request_date(request.args.get("week"), default=date.today()))
        if direction == "next":
            window = window.next()
        elif direction == "previous":
            window = window.previous()
        elif direction == "today":
            window = grid.window_for(date.today())
        else:
            raise ValidationError("Direction must be next, previous or today")
        return jsonify(_window_payload(window))

    @app.route("/api/timesheets/week/export", methods=["GET"], endpoint="weekly_export")
    @login_required
    def weekly_export():
        view = _build_from_args()
        return app.response_class(
            write_week_csv(view),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={week_csv_filename(view)}"},
        )

    @app.route("/api/timesheets/cell", methods=["GET"], endpoint="weekly_cell")
    @login_required
    def weekly_cell():
        work_date = request.args.get("date")
        if not work_date:
            raise ValidationError("Date is required")
        detail = grid.cell_detail(
            crew_id=require_int(request.args.get("crewId"), "Crew"),
            member_id=require_int(request.args.get("memberId"), "Member"),
            work_date=parse_request_date(work_date, default=date.today()),
        )
        return jsonify(
            {
                "crew": {"id": detail.crew.id, "crewName": detail.crew.crew_name, "utilityCompany": detail.crew.utility_company},
                "member": to_view(detail.member),
                "date": detail.date.strftime("%Y-%m-%d"),
                "cell": detail.cell.to_view(),
                "entries": [entry_view(e) for e in detail.entries],
            }
        )
