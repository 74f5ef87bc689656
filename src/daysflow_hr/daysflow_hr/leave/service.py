from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import inclusive_day_count, now_local
from ..common.validators import optional_text, require_employee_id
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, PartialReconciliationFailure, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .reconciler import LeaveReconciler
from .repository import LeaveRepository
from .strategies.base import ReconciliationResult

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository, reconciler: LeaveReconciler):
        self._leaves = leaves
        self._employees = employees
        self._reconciler = reconciler

    def create_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType | str,
        from_date: date,
        to_date: date,
        reason: str = "",
        is_half_day: bool = False,
    ) -> int:
        employee_id = require_employee_id(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        try:
            leave_type = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Invalid leave type")

        if to_date < from_date:
            raise ValidationError("End date cannot be before start date")

        request_id = self._leaves.create_leave(
            employee_id=employee_id,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            total_days=inclusive_day_count(from_date, to_date),
            reason=optional_text(reason),
            is_half_day=bool(is_half_day),
        )
        logger.info("Leave request %s submitted by employee %s (%s..%s)", request_id, employee_id, from_date, to_date)
        return request_id

    def _get_existing(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request does not exist")
        return req

    def approve_leave(
        self,
        *,
        current_role: Role,
        admin_id: int,
        request_id: int,
        admin_note: str = "",
    ) -> ReconciliationResult:
        """Approve a pending request and mark its days ON_LEAVE.

        Approving an already approved request only re-runs the attendance
        update, which is how a partially failed approval is resumed.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to approve leave")

        req = self._get_existing(request_id)
        if req.status == RequestStatus.REJECTED:
            raise ValidationError("Request has already been rejected")

        if req.status == RequestStatus.PENDING:
            note = optional_text(admin_note)
            ok = self._leaves.decide_leave(
                request_id=req.request_id,
                status=RequestStatus.APPROVED,
                decided_by=int(admin_id),
                admin_note=note,
            )
            if not ok:
                raise ValidationError("Request has already been processed")
            req = replace(req, status=RequestStatus.APPROVED, decided_by=int(admin_id), decided_at=now_local(), admin_note=note)
            logger.info("Leave request %s approved by %s", req.request_id, admin_id)
        else:
            logger.info("Leave request %s already approved, re-applying attendance", req.request_id)

        result = self._reconciler.reconcile(req)
        if not result.ok:
            raise PartialReconciliationFailure(
                f"Leave approved but {len(result.failed) + len(result.skipped)} day(s) were not updated",
                result=result,
            )
        return result

    def reject_leave(
        self,
        *,
        current_role: Role,
        admin_id: int,
        request_id: int,
        admin_note: str = "",
    ) -> None:
        """Reject a pending request. Attendance is never touched."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to reject leave")

        req = self._get_existing(request_id)
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been processed")

        ok = self._leaves.decide_leave(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            decided_by=int(admin_id),
            admin_note=optional_text(admin_note),
        )
        if not ok:
            raise ValidationError("Request has already been processed")
        logger.info("Leave request %s rejected by %s", req.request_id, admin_id)

    def list_my_requests(self, *, employee_id: int, limit: int = 200) -> list[dict]:
        return list(self._leaves.list_leave_requests(employee_id=int(employee_id), limit=limit))

    def list_admin_pending(self, *, limit: int = DEFAULT_LIST_LIMIT) -> list[dict]:
        return list(self._leaves.list_leave_requests(status=RequestStatus.PENDING, limit=limit))

    def list_all(self, *, status: Optional[RequestStatus] = None, limit: int = DEFAULT_LIST_LIMIT) -> list[dict]:
        return list(self._leaves.list_leave_requests(status=status, limit=limit))
