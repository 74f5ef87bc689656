from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .compensation.calculator.standard_calculator import StandardCompensationCalculator
from .compensation.model import DEFAULT_WAGE_CONFIG, WageConfig
from .compensation.mysql_wage_config_repository import MySQLWageConfigRepository
from .compensation.service import CompensationService
from .core.enums import ReconcileMode
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leave.factory import ReconcileStrategyFactory
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.reconciler import LeaveReconciler
from .leave.service import LeaveService
from .notifications.notifier import LogNotifier, Notifier
from .payroll.ledger import PayrollLedger
from .payroll.mysql_payroll_repository import MySQLPayrollRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    wage_configs_repo: MySQLWageConfigRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    payroll_repo: MySQLPayrollRepository

    compensation_service: CompensationService
    attendance_service: AttendanceService
    leave_reconciler: LeaveReconciler
    leave_service: LeaveService
    payroll_ledger: PayrollLedger
    notifier: Notifier


def build_container(
    *,
    db_config: dict,
    reconcile_mode: ReconcileMode | str = ReconcileMode.BEST_EFFORT,
    wage_defaults: WageConfig = DEFAULT_WAGE_CONFIG,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    wage_configs_repo = MySQLWageConfigRepository(conn, defaults=wage_defaults)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    compensation_service = CompensationService(
        wage_configs_repo,
        employees_repo,
        calculator=StandardCompensationCalculator(),
        defaults=wage_defaults,
    )
    attendance_service = AttendanceService(attendance_repo, employees_repo)
    leave_reconciler = LeaveReconciler(
        attendance_repo,
        strategy=ReconcileStrategyFactory().for_mode(reconcile_mode),
    )
    leave_service = LeaveService(leaves_repo, employees_repo, leave_reconciler)
    payroll_ledger = PayrollLedger(payroll_repo, employees_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        wage_configs_repo=wage_configs_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        compensation_service=compensation_service,
        attendance_service=attendance_service,
        leave_reconciler=leave_reconciler,
        leave_service=leave_service,
        payroll_ledger=payroll_ledger,
        notifier=LogNotifier(),
    )
