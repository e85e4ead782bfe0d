from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = request.get_json(silent=True) or {}
        token, user = container.auth_service.login(data.get("username") or "", data.get("password") or "")
        return jsonify(
            {
                "message": "Login successful",
                "token": token,
                "user": {
                    "id": user.user_id,
                    "employeeId": user.employee_id,
                    "username": user.username,
                    "role": user.role.value,
                    "fullName": user.full_name,
                    "employeeCode": user.employee_code,
                },
            }
        )

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    @guards.admin_required
    def register_user():
        user = container.user_service.register(request.get_json(silent=True) or {})
        return jsonify({"message": "User registered successfully", "user": user}), 201

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @guards.token_required
    def me():
        return jsonify(container.auth_service.me(current_user()))

    @app.route("/api/auth/change-password", methods=["PUT"], endpoint="auth_change_password")
    @guards.token_required
    def change_password():
        data = request.get_json(silent=True) or {}
        container.auth_service.change_password(
            current_user(),
            current_password=data.get("currentPassword") or "",
            new_password=data.get("newPassword") or "",
        )
        return jsonify({"message": "Password updated successfully"})
