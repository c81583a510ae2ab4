from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="api_dashboard_stats")
    def api_dashboard_stats():
        week = request.args.get("week", type=int)
        year = request.args.get("year", type=int)
        if week is None or year is None:
            stats = container.dashboard_service.current_stats()
        else:
            stats = container.dashboard_service.stats(week, year)
        return jsonify(stats.to_dict())
