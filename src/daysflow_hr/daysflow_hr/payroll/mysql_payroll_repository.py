from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollRecord, PayrollRow
from .repository import PayrollRepository


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=Decimal(str(r["basic_salary"])),
        allowances=Decimal(str(r["allowances"])),
        deductions=Decimal(str(r["deductions"])),
        status=PayrollStatus(r["status"]),
        paid_date=r.get("paid_date"),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        status: PayrollStatus,
        remarks: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_records(
                    employee_id, month, year, basic_salary, allowances, deductions, status, remarks
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), int(month), int(year), basic_salary, allowances, deductions, status.value, remarks),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payroll_id, employee_id, month, year, basic_salary, allowances, deductions,
                       status, paid_date, remarks, created_at
                FROM payroll_records
                WHERE payroll_id=%s
                """,
                (int(payroll_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update_status(self, *, payroll_id: int, status: PayrollStatus, paid_date: Optional[date]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, paid_date=%s
                WHERE payroll_id=%s
                """,
                (status.value, paid_date, int(payroll_id)),
            )
            # rowcount is 0 when nothing changed; the row still exists.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            return fetchone(cur) is not None

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.payroll_id, p.employee_id, p.month, p.year, p.basic_salary, p.allowances,
                       p.deductions, p.status, p.paid_date, p.remarks, p.created_at,
                       e.first_name, e.last_name, e.employee_code, e.department
                FROM payroll_records p
                JOIN employees e ON e.employee_id = p.employee_id
                WHERE p.month=%s AND p.year=%s
                ORDER BY p.created_at ASC, p.payroll_id ASC
                """,
                (int(month), int(year)),
            )
            return [
                PayrollRow(
                    record=_to_record(r),
                    full_name=f"{r['first_name']} {r.get('last_name') or ''}".strip(),
                    employee_code=r["employee_code"],
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]
