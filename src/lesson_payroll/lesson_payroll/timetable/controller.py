from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetable/week/<int:week>", methods=["GET"], endpoint="api_timetable_week")
    def api_timetable_week(week: int):
        year = request.args.get("year", type=int) or container.current_year()
        return jsonify([e.to_dict() for e in container.timetable_service.list_week(week, year)])

    @app.route("/api/timetable", methods=["POST"], endpoint="api_timetable_create")
    def api_timetable_create():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        timetable_id = container.timetable_service.schedule(
            day_of_week=data.get("day_of_week"),
            start_time=data.get("start_time") or "",
            end_time=data.get("end_time") or "",
            week_number=data.get("week_number"),
            academic_year=data.get("academic_year") or container.current_year(),
            subject_name=data.get("subject_name"),
            teacher_id=data.get("teacher_id"),
            is_break=bool(data.get("is_break", False)),
        )
        return jsonify({"timetable_id": timetable_id}), 201
