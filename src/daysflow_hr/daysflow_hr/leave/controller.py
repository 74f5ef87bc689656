from __future__ import annotations

from flask import Flask, request

from ..common.auth import admin_required, current_employee_id, current_role, login_required
from ..common.datetime_utils import parse_iso_date
from ..common.http import ok
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    svc = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="new_leave")
    @login_required
    def new_leave():
        data = request.get_json(silent=True) or {}
        if not data.get("leave_type") or not data.get("from_date") or not data.get("to_date"):
            raise ValidationError("Please fill in all required fields")
        try:
            from_date = parse_iso_date(data["from_date"])
            to_date = parse_iso_date(data["to_date"])
        except ValueError:
            raise ValidationError("Dates must be YYYY-MM-DD")

        request_id = svc.create_leave(
            employee_id=current_employee_id(),
            leave_type=data["leave_type"],
            from_date=from_date,
            to_date=to_date,
            reason=data.get("reason", ""),
            is_half_day=bool(data.get("is_half_day", False)),
        )
        return ok({"request_id": request_id}, status=201)

    @app.route("/api/leaves/me", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        return ok(svc.list_my_requests(employee_id=current_employee_id()))

    @app.route("/api/leaves", methods=["GET"], endpoint="all_leaves")
    @admin_required
    def all_leaves():
        status = request.args.get("status")
        if status:
            try:
                status = RequestStatus(status)
            except ValueError:
                raise ValidationError("Invalid request status")
        return ok(svc.list_all(status=status or None))

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @admin_required
    def pending_leaves():
        return ok(svc.list_admin_pending())

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        data = request.get_json(silent=True) or {}
        result = svc.approve_leave(
            current_role=current_role(),
            admin_id=current_employee_id(),
            request_id=request_id,
            admin_note=data.get("admin_note", ""),
        )
        return ok(result.to_dict())

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        data = request.get_json(silent=True) or {}
        svc.reject_leave(
            current_role=current_role(),
            admin_id=current_employee_id(),
            request_id=request_id,
            admin_note=data.get("admin_note", ""),
        )
        return ok({"request_id": request_id, "status": "rejected"})
