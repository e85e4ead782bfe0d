from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..users.guards import Guards, current_user
from .export import XLSX_MIMETYPE, payroll_xlsx


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)
    service = container.payroll_service

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    @guards.admin_required
    def calculate():
        run = service.calculate(request.get_json(silent=True) or {})
        return (
            jsonify(
                {
                    "message": "Payroll calculated successfully",
                    "count": len(run.records),
                    "payroll": [r.as_row() for r in run.records],
                    "skipped": run.skipped,
                }
            ),
            201,
        )

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @guards.admin_required
    def list_payroll():
        data = service.list_payroll(request.args.to_dict())
        return jsonify({"count": len(data["payroll"]), **data})

    @app.route("/api/payroll/export", methods=["GET"], endpoint="payroll_export")
    @guards.admin_required
    def export_payroll():
        out = payroll_xlsx(service.export_rows(request.args.to_dict()))
        return send_file(out, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name="payroll.xlsx")

    @app.route("/api/payroll/my-payroll", methods=["GET"], endpoint="payroll_mine")
    @guards.token_required
    def my_payroll():
        rows = service.my_payroll(current_user(), request.args.to_dict())
        return jsonify({"count": len(rows), "payroll": rows})

    @app.route("/api/payroll/summary/<int:year>/<int:month>", methods=["GET"], endpoint="payroll_month_summary")
    @guards.admin_required
    def month_summary(year: int, month: int):
        return jsonify(service.month_summary(year, month))

    @app.route("/api/payroll/<int:payroll_id>", methods=["GET"], endpoint="payroll_get")
    @guards.token_required
    def get_payroll(payroll_id: int):
        return jsonify(service.get_payroll(current_user(), payroll_id))

    @app.route("/api/payroll/<int:payroll_id>/mark-paid", methods=["PUT"], endpoint="payroll_mark_paid")
    @guards.admin_required
    def mark_paid(payroll_id: int):
        record = service.mark_paid(payroll_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Payroll marked as paid", "payroll": record.as_row()})

    @app.route("/api/payroll/<int:payroll_id>", methods=["PUT"], endpoint="payroll_update")
    @guards.admin_required
    def update_payroll(payroll_id: int):
        record = service.update_payroll(payroll_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Payroll updated successfully", "payroll": record.as_row()})

    @app.route("/api/payroll/<int:payroll_id>", methods=["DELETE"], endpoint="payroll_delete")
    @guards.admin_required
    def delete_payroll(payroll_id: int):
        record = service.delete_payroll(payroll_id)
        return jsonify({"message": "Payroll record deleted successfully", "payroll": record.as_row()})
