from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @guards.token_required
    def list_employees():
        employees = service.list_employees(request.args.to_dict())
        return jsonify({"count": len(employees), "employees": employees})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @guards.token_required
    def get_employee(employee_id: int):
        return jsonify(service.get_employee(employee_id))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @guards.admin_required
    def create_employee():
        employee = service.create_employee(request.get_json(silent=True) or {})
        return jsonify({"message": "Employee created successfully", "employee": employee}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @guards.admin_required
    def update_employee(employee_id: int):
        employee = service.update_employee(employee_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Employee updated successfully", "employee": employee})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @guards.admin_required
    def delete_employee(employee_id: int):
        employee = service.deactivate_employee(employee_id)
        return jsonify({"message": "Employee deactivated successfully", "employee": employee})

    @app.route("/api/employees/<int:employee_id>/vacation-balance", methods=["GET"], endpoint="employees_vacation_balance")
    @guards.token_required
    def vacation_balance(employee_id: int):
        return jsonify(service.vacation_balance(current_user(), employee_id))
