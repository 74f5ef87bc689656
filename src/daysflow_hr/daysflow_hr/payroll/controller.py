from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.auth import admin_required, current_role
from ..common.http import ok


def register(app: Flask, container) -> None:
    ledger = container.payroll_ledger

    def _period() -> tuple[int, int]:
        today = date.today()
        month = request.args.get("month", today.month, type=int)
        year = request.args.get("year", today.year, type=int)
        return month, year

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @admin_required
    def payroll_list():
        month, year = _period()
        rows = ledger.list_period(
            month=month,
            year=year,
            search=request.args.get("search"),
            sort_key=request.args.get("sort"),
            descending=request.args.get("desc", "0") in {"1", "true"},
        )
        summary = ledger.period_summary(month=month, year=year)
        return ok(
            [r.to_dict() for r in rows],
            month=month,
            year=year,
            total_net=str(summary.total_net),
            paid_count=summary.paid_count,
            pending_count=summary.pending_count,
        )

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_create")
    @admin_required
    def payroll_create():
        data = request.get_json(silent=True) or {}
        payroll_id = ledger.create_record(
            current_role=current_role(),
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            basic_salary=data.get("basic_salary", 0),
            allowances=data.get("allowances", 0),
            deductions=data.get("deductions", 0),
            remarks=data.get("remarks", ""),
        )
        return ok({"payroll_id": payroll_id}, status=201)

    @app.route("/api/payroll/<int:payroll_id>/status", methods=["PATCH"], endpoint="payroll_status")
    @admin_required
    def payroll_status(payroll_id: int):
        data = request.get_json(silent=True) or {}
        record = ledger.update_status(
            current_role=current_role(),
            payroll_id=payroll_id,
            new_status=data.get("status") or "",
        )
        return ok(
            {
                "payroll_id": record.payroll_id,
                "status": record.status.value,
                "paid_date": record.paid_date.strftime("%Y-%m-%d") if record.paid_date else None,
            }
        )
