from __future__ import annotations

from typing import Optional, Protocol

from .model import WageConfig


class WageConfigRepository(Protocol):
    def get_for_employee(self, employee_id: int) -> Optional[WageConfig]:
        raise NotImplementedError

    def save(self, *, employee_id: int, config: WageConfig) -> None:
        """Insert or replace the employee's configuration (no history kept)."""

        raise NotImplementedError
