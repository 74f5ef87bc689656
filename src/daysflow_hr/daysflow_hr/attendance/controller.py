from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from flask import Flask, request

from ..common.auth import admin_required, current_employee_id, current_role, login_required
from ..common.datetime_utils import parse_iso_date
from ..common.http import ok
from ..common.validators import require_employee_id, to_decimal
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .service import ManualAttendance


def _to_json(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "employee_id": r.employee_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "status": r.status.value,
        "check_in": r.check_in.strftime("%H:%M:%S") if r.check_in else None,
        "check_out": r.check_out.strftime("%H:%M:%S") if r.check_out else None,
        "work_hours": str(r.work_hours) if r.work_hours is not None else None,
        "extra_hours": str(r.extra_hours) if r.extra_hours is not None else None,
        "remarks": r.remarks or "",
        "is_half_day": r.is_half_day,
    }


def _parse_date(value: Optional[str]) -> date:
    try:
        return parse_iso_date(value or "")
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


def _parse_time(value: Optional[str]):
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError("Time must be HH:MM")


def register(app: Flask, container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        attendance_id = svc.check_in(current_employee_id())
        return ok({"attendance_id": attendance_id}, status=201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        hours = svc.check_out(current_employee_id())
        return ok({"work_hours": str(hours)})

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        rows = svc.history(current_employee_id(), limit=limit)
        return ok([_to_json(r) for r in rows])

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_for_date")
    @admin_required
    def attendance_for_date():
        work_date = _parse_date(request.args.get("date")) if request.args.get("date") else date.today()
        return ok([_to_json(r) for r in svc.list_for_date(work_date)])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @admin_required
    def attendance_mark():
        data = request.get_json(silent=True) or {}
        try:
            status = AttendanceStatus(data.get("status") or AttendanceStatus.PRESENT.value)
        except ValueError:
            raise ValidationError("Invalid attendance status")

        entry = ManualAttendance(
            employee_id=require_employee_id(data.get("employee_id")),
            work_date=_parse_date(data.get("date")),
            status=status,
            check_in=_parse_time(data.get("check_in")),
            check_out=_parse_time(data.get("check_out")),
            work_hours=to_decimal(data["work_hours"], "Work hours") if data.get("work_hours") not in (None, "") else None,
            extra_hours=to_decimal(data["extra_hours"], "Extra hours") if data.get("extra_hours") not in (None, "") else None,
            remarks=data.get("remarks"),
            is_half_day=bool(data.get("is_half_day", False)),
        )
        attendance_id = svc.mark_attendance(current_role=current_role(), entry=entry)
        return ok({"attendance_id": attendance_id})
