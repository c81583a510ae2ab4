from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/teachers", methods=["GET"], endpoint="api_teachers")
    def api_teachers():
        return jsonify([t.to_dict() for t in container.teacher_service.list_all()])

    @app.route("/api/teachers", methods=["POST"], endpoint="api_teachers_create")
    def api_teachers_create():
        data = _body()
        date_joined = data.get("date_joined")
        try:
            date_joined = parse_iso_date(date_joined) if date_joined else None
        except (TypeError, ValueError):
            raise ValidationError("date_joined must be YYYY-MM-DD") from None

        teacher_id = container.teacher_service.register(
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            email=data.get("email"),
            teaching_allowance=data.get("teaching_allowance"),
            transport_allowance=data.get("transport_allowance"),
            status=data.get("status") or "active",
            notes=data.get("notes"),
            date_joined=date_joined,
            subjects=data.get("subjects"),
        )
        return jsonify(container.teacher_service.get(teacher_id).to_dict()), 201

    @app.route("/api/teachers/<int:teacher_id>", methods=["GET"], endpoint="api_teacher_detail")
    def api_teacher_detail(teacher_id: int):
        data = container.teacher_service.get(teacher_id).to_dict()
        data["subjects"] = [s.subject_name for s in container.teacher_service.subjects_for(teacher_id)]
        return jsonify(data)

    @app.route("/api/teachers/<int:teacher_id>", methods=["PUT"], endpoint="api_teacher_update")
    def api_teacher_update(teacher_id: int):
        changes = _body()
        changes.pop("teacher_id", None)
        teacher = container.teacher_service.update(teacher_id, **changes)
        return jsonify(teacher.to_dict())

    @app.route("/api/teachers/<int:teacher_id>/deactivate", methods=["POST"], endpoint="api_teacher_deactivate")
    def api_teacher_deactivate(teacher_id: int):
        return jsonify(container.teacher_service.deactivate(teacher_id).to_dict())

    @app.route("/api/subjects", methods=["GET"], endpoint="api_subjects")
    def api_subjects():
        return jsonify(
            [{"subject_id": s.subject_id, "subject_name": s.subject_name} for s in container.teacher_service.list_subjects()]
        )
