from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, employee_code, first_name, last_name, department, role
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                employee_id=int(row["employee_id"]),
                employee_code=row["employee_code"],
                first_name=row["first_name"],
                last_name=row.get("last_name") or "",
                department=row.get("department"),
                role=Role(row.get("role") or Role.EMPLOYEE.value),
            )
