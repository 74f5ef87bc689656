from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Read side of the employee directory.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
