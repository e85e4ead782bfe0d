from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.position_service

    @app.route("/api/positions", methods=["GET"], endpoint="positions_list")
    @guards.token_required
    def list_positions():
        positions = service.list_positions()
        return jsonify({"count": len(positions), "positions": positions})

    @app.route("/api/positions/<int:position_id>", methods=["GET"], endpoint="positions_get")
    @guards.token_required
    def get_position(position_id: int):
        return jsonify(service.get_position(position_id))

    @app.route("/api/positions", methods=["POST"], endpoint="positions_create")
    @guards.admin_required
    def create_position():
        position = service.create_position(request.get_json(silent=True) or {})
        return jsonify({"message": "Position created successfully", "position": position}), 201

    @app.route("/api/positions/<int:position_id>", methods=["PUT"], endpoint="positions_update")
    @guards.admin_required
    def update_position(position_id: int):
        position = service.update_position(position_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Position updated successfully", "position": position})

    @app.route("/api/positions/<int:position_id>", methods=["DELETE"], endpoint="positions_delete")
    @guards.admin_required
    def delete_position(position_id: int):
        position = service.delete_position(position_id)
        return jsonify({"message": "Position deleted successfully", "position": position})
