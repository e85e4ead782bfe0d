from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.guards import Guards, current_user


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.sales_service

    @app.route("/api/sales", methods=["POST"], endpoint="sales_create")
    @guards.token_required
    def record_sale():
        sale = service.record_sale(current_user(), request.get_json(silent=True) or {})
        return jsonify({"message": "Sale recorded successfully", "sale": sale.as_row()}), 201

    @app.route("/api/sales", methods=["GET"], endpoint="sales_list")
    @guards.admin_or_supervisor_required
    def list_sales():
        data = service.list_sales(request.args.to_dict())
        return jsonify({"count": len(data["sales"]), **data})

    @app.route("/api/sales/my-sales", methods=["GET"], endpoint="sales_mine")
    @guards.token_required
    def my_sales():
        data = service.my_sales(current_user(), request.args.to_dict())
        return jsonify({"count": len(data["sales"]), **data})

    @app.route("/api/sales/summary", methods=["GET"], endpoint="sales_summary")
    @guards.admin_or_supervisor_required
    def summary():
        return jsonify(service.summary(request.args.to_dict()))

    @app.route("/api/sales/<int:sale_id>", methods=["GET"], endpoint="sales_get")
    @guards.token_required
    def get_sale(sale_id: int):
        return jsonify(service.get_sale(current_user(), sale_id))

    @app.route("/api/sales/<int:sale_id>", methods=["PUT"], endpoint="sales_update")
    @guards.admin_required
    def update_sale(sale_id: int):
        sale = service.update_sale(sale_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Sale updated successfully", "sale": sale.as_row()})

    @app.route("/api/sales/<int:sale_id>", methods=["DELETE"], endpoint="sales_delete")
    @guards.admin_required
    def delete_sale(sale_id: int):
        service.delete_sale(sale_id)
        return jsonify({"message": "Sale deleted successfully"})
