from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PaySlipBreakdown, WageConfig


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for salary structures)."""

    @abstractmethod
    def breakdown(self, config: WageConfig) -> PaySlipBreakdown:
        raise NotImplementedError
