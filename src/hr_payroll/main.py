from __future__ import annotations

import importlib
import logging
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS

from config import get_settings_module

from . import __version__
from .common.error_handlers import register_error_handlers
from .common.json_provider import ApiJSONProvider
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .positions.controller import register as register_positions
from .requests.controller import register as register_requests
from .sales.controller import register as register_sales
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"

API_ENDPOINTS = {
    "auth": "/api/auth",
    "employees": "/api/employees",
    "departments": "/api/departments",
    "positions": "/api/positions",
    "attendance": "/api/attendance",
    "requests": "/api/requests",
    "sales": "/api/sales",
    "payroll": "/api/payroll",
    "dashboard": "/api/dashboard",
}


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.pop("request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        logger.info("%s %s %s %.1fms", request.method, request.path, response.status_code, elapsed_ms)
        return response


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = ApiJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", 24)),
            work_start_time=getattr(settings, "WORK_START_TIME", "08:00:00"),
            late_tolerance_minutes=int(getattr(settings, "LATE_TOLERANCE_MINUTES", 15)),
        )

    _register_request_logging(app)
    register_error_handlers(app)

    register_users(app, container)
    register_employees(app, container)
    register_departments(app, container)
    register_positions(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_sales(app, container)
    register_payroll(app, container)
    register_dashboard(app, container)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify({"message": "HR & Payroll API", "version": __version__, "endpoints": API_ENDPOINTS})

    return app
