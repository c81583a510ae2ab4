from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_PAYROLL_TIMEZONE
from .core.exceptions import DataAccessError, NotFoundError, SchedulingViolation, ValidationError
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .payroll.controller import register as register_payroll
from .teachers.controller import register as register_teachers
from .timetable.controller import register as register_timetable

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(SchedulingViolation)
    def _scheduling_violation(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(DataAccessError)
    def _data_access_error(e):
        # PersistenceError included: the run was rolled back, the caller may retry.
        return jsonify({"error": str(e)}), 503


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            timezone_name=getattr(settings, "PAYROLL_TIMEZONE", DEFAULT_PAYROLL_TIMEZONE),
            enforce_payment_day=bool(getattr(settings, "ENFORCE_PAYMENT_DAY", True)),
        )

    _register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        try:
            if container.conn is not None:
                container.conn.ping()
        except Exception:
            logger.exception("health check failed")
            return jsonify({"status": "unhealthy", "database": "disconnected"}), 500
        return jsonify({"status": "healthy", "database": "connected", "service": "Lesson Payroll API"})

    register_teachers(app, container)
    register_attendance(app, container)
    register_timetable(app, container)
    register_payroll(app, container)
    register_dashboard(app, container)

    return app
