from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @guards.token_required
    def list_departments():
        departments = service.list_departments()
        return jsonify({"count": len(departments), "departments": departments})

    @app.route("/api/departments/<int:department_id>", methods=["GET"], endpoint="departments_get")
    @guards.token_required
    def get_department(department_id: int):
        return jsonify(service.get_department(department_id))

    @app.route("/api/departments", methods=["POST"], endpoint="departments_create")
    @guards.admin_required
    def create_department():
        department = service.create_department(request.get_json(silent=True) or {})
        return jsonify({"message": "Department created successfully", "department": department}), 201

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="departments_update")
    @guards.admin_required
    def update_department(department_id: int):
        department = service.update_department(department_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Department updated successfully", "department": department})

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="departments_delete")
    @guards.admin_required
    def delete_department(department_id: int):
        department = service.delete_department(department_id)
        return jsonify({"message": "Department deleted successfully", "department": department})
