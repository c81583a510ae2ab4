from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _year_arg() -> int:
        return request.args.get("year", type=int) or container.current_year()

    @app.route("/api/attendance/week/<int:week>", methods=["GET"], endpoint="api_attendance_week")
    def api_attendance_week(week: int):
        rows = container.attendance_service.list_week(week, _year_arg())
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/week/<int:week>/eligible", methods=["GET"], endpoint="api_attendance_eligible")
    def api_attendance_eligible(week: int):
        year = _year_arg()
        teacher_ids = container.attendance_service.eligible_teachers(week, year)
        return jsonify({"week": week, "year": year, "teacher_ids": sorted(teacher_ids)})

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_create")
    def api_attendance_create():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            attendance_date = parse_iso_date(data.get("attendance_date") or "")
        except (TypeError, ValueError):
            raise ValidationError("attendance_date (YYYY-MM-DD) is required") from None
        teacher_id = require_int(data.get("teacher_id"), "teacher_id must be an integer")

        attendance_id = container.attendance_service.record(
            teacher_id=teacher_id,
            attendance_date=attendance_date,
            status=data.get("status") or "",
            timetable_id=data.get("timetable_id"),
            notes=data.get("notes"),
            week_number=data.get("week_number"),
            academic_year=data.get("academic_year"),
        )
        return jsonify({"attendance_id": attendance_id}), 201
