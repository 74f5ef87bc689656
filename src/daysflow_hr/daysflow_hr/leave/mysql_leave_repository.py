from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: Optional[str],
        is_half_day: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, from_date, to_date, total_days, reason, is_half_day, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    from_date,
                    to_date,
                    int(total_days),
                    reason,
                    1 if is_half_day else 0,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, leave_type, from_date, to_date, reason, is_half_day,
                       status, created_at, decided_by, decided_at, admin_note
                FROM leave_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveRequest(
                request_id=int(r["request_id"]),
                employee_id=int(r["employee_id"]),
                leave_type=LeaveType(r["leave_type"]),
                from_date=r["from_date"],
                to_date=r["to_date"],
                reason=r.get("reason"),
                status=RequestStatus(r["status"]),
                created_at=r["created_at"],
                is_half_day=bool(r.get("is_half_day") or 0),
                decided_by=r.get("decided_by"),
                decided_at=r.get("decided_at"),
                admin_note=r.get("admin_note"),
            )

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.employee_id, e.first_name, e.last_name, e.employee_code,
                       r.leave_type, r.from_date, r.to_date, r.total_days, r.reason, r.is_half_day,
                       r.status, r.created_at, r.decided_by, r.decided_at, r.admin_note
                FROM leave_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "request_id": int(r["request_id"]),
                        "employee_id": int(r["employee_id"]),
                        "full_name": f"{r['first_name']} {r.get('last_name') or ''}".strip(),
                        "employee_code": r["employee_code"],
                        "leave_type": r["leave_type"],
                        "from_date": r["from_date"].strftime("%Y-%m-%d"),
                        "to_date": r["to_date"].strftime("%Y-%m-%d"),
                        "total_days": int(r["total_days"]),
                        "reason": r.get("reason") or "",
                        "is_half_day": bool(r.get("is_half_day") or 0),
                        "status": r["status"],
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                        "decided_at": r["decided_at"].strftime("%Y-%m-%d %H:%M") if r.get("decided_at") else None,
                        "admin_note": r.get("admin_note") or "",
                    }
                )
            return out

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=NOW(), admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(decided_by), admin_note, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
