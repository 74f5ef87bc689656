from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, status, check_in, check_out,
    work_hours, extra_hours, remarks, is_half_day
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        work_hours=r.get("work_hours"),
        extra_hours=r.get("extra_hours"),
        remarks=r.get("remarks"),
        is_half_day=bool(r.get("is_half_day") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY employee_id ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        work_hours: Optional[Decimal] = None,
        extra_hours: Optional[Decimal] = None,
        remarks: Optional[str] = None,
        is_half_day: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, work_date, status, check_in, check_out, work_hours, extra_hours, remarks, is_half_day
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    work_date,
                    status.value,
                    check_in,
                    check_out,
                    work_hours,
                    extra_hours,
                    remarks,
                    int(bool(is_half_day)),
                ),
            )
            return int(cur.lastrowid)

    def update_checkout(self, *, attendance_id: int, check_out: time, work_hours: Optional[Decimal]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, work_hours=%s
                WHERE attendance_id=%s
                """,
                (check_out, work_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_record(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        check_in: Optional[time],
        check_out: Optional[time],
        work_hours: Optional[Decimal],
        extra_hours: Optional[Decimal],
        remarks: Optional[str],
        is_half_day: bool = False,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, check_in=%s, check_out=%s, work_hours=%s, extra_hours=%s, remarks=%s, is_half_day=%s
                WHERE attendance_id=%s
                """,
                (
                    status.value,
                    check_in,
                    check_out,
                    work_hours,
                    extra_hours,
                    remarks,
                    int(bool(is_half_day)),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def set_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s WHERE attendance_id=%s",
                (status.value, int(attendance_id)),
            )
            # rowcount is 0 when the value is unchanged; the row still exists.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return fetchone(cur) is not None

    def mark_on_leave_range(self, *, employee_id: int, days: Sequence[date]) -> int:
        if not days:
            return 0
        # Single connection, single commit: all days or none.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(employee_id, work_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                [(int(employee_id), d, AttendanceStatus.ON_LEAVE.value) for d in days],
            )
            return len(days)
