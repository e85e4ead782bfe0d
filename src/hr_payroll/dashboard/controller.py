from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.dashboard_service

    @app.route("/api/dashboard/admin", methods=["GET"], endpoint="dashboard_admin")
    @guards.admin_required
    def admin_dashboard():
        return jsonify(service.admin_overview())

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="dashboard_employee")
    @guards.token_required
    def employee_dashboard():
        return jsonify(service.employee_overview(current_user()))

    @app.route("/api/dashboard/stats/monthly", methods=["GET"], endpoint="dashboard_monthly")
    @guards.admin_required
    def monthly_stats():
        return jsonify(service.monthly_stats(request.args.to_dict()))

    @app.route("/api/dashboard/stats/attendance-summary", methods=["GET"], endpoint="dashboard_attendance_summary")
    @guards.admin_required
    def attendance_summary():
        rows = service.attendance_summary(request.args.to_dict())
        return jsonify({"count": len(rows), "summary": rows})
