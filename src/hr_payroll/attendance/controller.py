from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @guards.token_required
    def check_in():
        record = service.check_in(current_user().employee_id)
        message = "Check-in recorded - late arrival" if record.is_late else "Check-in recorded successfully"
        return jsonify({"message": message, "attendance": record.as_row()})

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @guards.token_required
    def check_out():
        record = service.check_out(current_user().employee_id)
        return jsonify({"message": "Check-out recorded successfully", "attendance": record.as_row()})

    @app.route("/api/attendance/my-attendance", methods=["GET"], endpoint="attendance_mine")
    @guards.token_required
    def my_attendance():
        return jsonify(service.my_attendance(current_user().employee_id, request.args.to_dict()))

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @guards.token_required
    def today():
        return jsonify(service.today(current_user().employee_id))

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_employee")
    @guards.admin_required
    def employee_attendance(employee_id: int):
        rows = service.employee_attendance(employee_id, request.args.to_dict())
        return jsonify({"count": len(rows), "attendance": rows})

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    @guards.admin_required
    def report():
        rows = service.report(request.args.to_dict())
        return jsonify({"count": len(rows), "report": rows})

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    @guards.admin_required
    def manual():
        record = service.record_manual(request.get_json(silent=True) or {})
        return jsonify({"message": "Attendance recorded successfully", "attendance": record.as_row()}), 201
