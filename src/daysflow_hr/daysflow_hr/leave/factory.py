from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ReconcileMode
from ..core.exceptions import ValidationError
from .strategies.base import ReconcileStrategy
from .strategies.batch_strategy import BatchStrategy
from .strategies.best_effort_strategy import BestEffortStrategy
from .strategies.fail_fast_strategy import FailFastStrategy


@dataclass
class ReconcileStrategyFactory:
    """Factory Pattern: choose how leave days are written from the configured mode."""

    def for_mode(self, mode: ReconcileMode | str) -> ReconcileStrategy:
        try:
            mode = ReconcileMode(mode)
        except ValueError:
            raise ValidationError(f"Unknown leave reconcile mode: {mode!r}")

        if mode == ReconcileMode.FAIL_FAST:
            return FailFastStrategy()
        if mode == ReconcileMode.BATCH:
            return BatchStrategy()
        return BestEffortStrategy()
