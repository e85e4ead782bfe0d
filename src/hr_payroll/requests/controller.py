from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.request_service

    @app.route("/api/requests", methods=["POST"], endpoint="requests_create")
    @guards.token_required
    def create_request():
        created = service.create_request(current_user(), request.get_json(silent=True) or {})
        return jsonify({"message": "Request created successfully", "request": created.as_row()}), 201

    @app.route("/api/requests/my-requests", methods=["GET"], endpoint="requests_mine")
    @guards.token_required
    def my_requests():
        rows = service.my_requests(current_user(), request.args.to_dict())
        return jsonify({"count": len(rows), "requests": rows})

    @app.route("/api/requests", methods=["GET"], endpoint="requests_list")
    @guards.admin_or_supervisor_required
    def list_requests():
        rows = service.list_requests(request.args.to_dict())
        return jsonify({"count": len(rows), "requests": rows})

    @app.route("/api/requests/pending/count", methods=["GET"], endpoint="requests_pending_count")
    @guards.admin_or_supervisor_required
    def pending_count():
        return jsonify({"pendingCount": service.pending_count()})

    @app.route("/api/requests/<int:request_id>", methods=["GET"], endpoint="requests_get")
    @guards.token_required
    def get_request(request_id: int):
        return jsonify(service.get_request(current_user(), request_id))

    @app.route("/api/requests/<int:request_id>/approve", methods=["PUT"], endpoint="requests_approve")
    @guards.admin_or_supervisor_required
    def approve(request_id: int):
        approved = service.approve(current_user(), request_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Request approved successfully", "request": approved.as_row()})

    @app.route("/api/requests/<int:request_id>/reject", methods=["PUT"], endpoint="requests_reject")
    @guards.admin_or_supervisor_required
    def reject(request_id: int):
        rejected = service.reject(current_user(), request_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Request rejected", "request": rejected.as_row()})

    @app.route("/api/requests/<int:request_id>", methods=["DELETE"], endpoint="requests_cancel")
    @guards.token_required
    def cancel(request_id: int):
        cancelled = service.cancel(current_user(), request_id)
        return jsonify({"message": "Request cancelled successfully", "request": cancelled.as_row()})
