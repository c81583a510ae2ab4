from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import PaymentKind


def register(app: Flask, container: Container) -> None:
    def _process(kind: PaymentKind, message: str):
        data = request.get_json(silent=True) or {}
        week = data.get("week_number")
        year = data.get("academic_year") or container.current_year()

        summary = container.payroll_reconciler.process(kind, week, year)
        payload = summary.to_dict()
        payload.update({"message": message, "week": int(week), "year": int(year)})
        return jsonify(payload)

    @app.route("/api/payroll/week/<int:week>", methods=["GET"], endpoint="api_payroll_week")
    def api_payroll_week(week: int):
        year = request.args.get("year", type=int) or container.current_year()
        return jsonify([r.to_dict() for r in container.payroll_service.week_records(week, year)])

    @app.route("/api/payroll/process/transport", methods=["POST"], endpoint="api_payroll_process_transport")
    def api_payroll_process_transport():
        return _process(PaymentKind.TRANSPORT, "Transport payments processed")

    @app.route("/api/payroll/process/weekly", methods=["POST"], endpoint="api_payroll_process_weekly")
    def api_payroll_process_weekly():
        return _process(PaymentKind.TEACHING, "Weekly payments processed")

    @app.route("/api/payroll/schedule", methods=["GET"], endpoint="api_payroll_schedule")
    def api_payroll_schedule():
        return jsonify(
            [
                {"payment_type": e.payment_type.value, "day_of_week": e.day_of_week, "default_amount": e.default_amount}
                for e in container.payroll_service.payment_schedule()
            ]
        )

    @app.route("/api/teachers/<int:teacher_id>/transactions", methods=["GET"], endpoint="api_teacher_transactions")
    def api_teacher_transactions(teacher_id: int):
        return jsonify([t.to_dict() for t in container.payroll_service.transactions_for(teacher_id)])
