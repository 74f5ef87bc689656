from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee profile (read-only for this service)."""

    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    department: Optional[str]
    role: Role = Role.EMPLOYEE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
