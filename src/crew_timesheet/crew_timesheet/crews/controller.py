from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.casing import to_view
from ..common.validators import require_int, require_non_negative
from ..common.web import admin_required, app_store, commit, current_role, json_body, login_required
from ..core.enums import CrewStatusFilter
from ..core.exceptions import ValidationError
from ..container import Container
from ..state.app_state import AddCrew, DeleteCrew, UpdateCrew, contract_crews, time_entries_by_crew
from ..timesheets.controller import entry_view
from .service import crew_stats, filter_crews


def register(app: Flask, container: Container) -> None:
    @app.route("/api/crews", methods=["GET"], endpoint="list_crews")
    @login_required
    def list_crews():
        try:
            status = CrewStatusFilter(request.args.get("status", CrewStatusFilter.ALL.value))
        except ValueError:
            raise ValidationError("Unknown crew status filter")

        scoped = contract_crews(app_store(container).state)
        crews = filter_crews(scoped, search=request.args.get("search", ""), status=status)
        return jsonify({"stats": to_view(crew_stats(scoped)), "crews": [to_view(c) for c in crews]})

    @app.route("/api/crews/<int:crew_id>", methods=["GET"], endpoint="get_crew")
    @login_required
    def get_crew(crew_id: int):
        return jsonify(to_view(container.crew_service.get_crew(crew_id)))

    @app.route("/api/crews/<int:crew_id>/time-entries", methods=["GET"], endpoint="crew_time_entries")
    @login_required
    def crew_time_entries(crew_id: int):
        crew = container.crew_service.get_crew(crew_id)
        entries = sorted(time_entries_by_crew(app_store(container).state, crew.id), key=lambda e: e.date, reverse=True)
        return jsonify([entry_view(e) for e in entries])

    @app.route("/api/crews", methods=["POST"], endpoint="add_crew")
    @admin_required
    def add_crew():
        data = json_body()
        crew = container.crew_service.create_crew(
            current_role=current_role(),
            crew_name=data.get("crew_name", ""),
            utility_contract_id=require_int(data.get("utility_contract_id"), "Contract"),
            supervisor_id=data.get("supervisor_id", ""),
            equipment_assigned=data.get("equipment_assigned"),
        )
        commit(container, AddCrew(crew))
        return jsonify(to_view(crew)), 201

    @app.route("/api/crews/<int:crew_id>", methods=["PATCH"], endpoint="update_crew")
    @admin_required
    def update_crew(crew_id: int):
        data = json_body()
        crew = container.crew_service.update_crew(
            current_role=current_role(),
            crew_id=crew_id,
            crew_name=data.get("crew_name"),
            active=data.get("active"),
        )
        commit(container, UpdateCrew(crew))
        return jsonify(to_view(crew))

    @app.route("/api/crews/<int:crew_id>", methods=["DELETE"], endpoint="delete_crew")
    @admin_required
    def delete_crew(crew_id: int):
        container.crew_service.delete_crew(current_role=current_role(), crew_id=crew_id)
        state = commit(container, DeleteCrew(crew_id))
        return jsonify({"deleted": crew_id, "stats": to_view(crew_stats(contract_crews(state)))})

    @app.route("/api/crews/<int:crew_id>/members", methods=["POST"], endpoint="add_crew_member")
    @admin_required
    def add_crew_member(crew_id: int):
        data = json_body()
        rate = data.get("hourly_rate")
        crew = container.crew_service.add_member(
            current_role=current_role(),
            crew_id=crew_id,
            name=data.get("name", ""),
            role=data.get("role", ""),
            hourly_rate=require_non_negative(rate, "Hourly rate") if rate not in (None, "") else None,
        )
        commit(container, UpdateCrew(crew))
        return jsonify(to_view(crew)), 201

    @app.route("/api/crews/<int:crew_id>/members/<int:member_id>", methods=["DELETE"], endpoint="remove_crew_member")
    @admin_required
    def remove_crew_member(crew_id: int, member_id: int):
        crew = container.crew_service.remove_member(current_role=current_role(), crew_id=crew_id, member_id=member_id)
        commit(container, UpdateCrew(crew))
        return jsonify(to_view(crew))

    @app.route("/api/crews/<int:crew_id>/equipment", methods=["POST"], endpoint="add_crew_equipment")
    @admin_required
    def add_crew_equipment(crew_id: int):
        data = json_body()
        crew = container.crew_service.add_equipment(
            current_role=current_role(), crew_id=crew_id, equipment=data.get("equipment", "")
        )
        commit(container, UpdateCrew(crew))
        return jsonify(to_view(crew)), 201

    @app.route("/api/crews/<int:crew_id>/equipment/<int:index>", methods=["DELETE"], endpoint="remove_crew_equipment")
    @admin_required
    def remove_crew_equipment(crew_id: int, index: int):
        crew = container.crew_service.remove_equipment(current_role=current_role(), crew_id=crew_id, index=index)
        commit(container, UpdateCrew(crew))
        return jsonify(to_view(crew))
