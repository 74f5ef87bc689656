from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    ok: bool
    detail: Optional[str] = None


class Notifier(Protocol):
    """Outbound messaging (fire-and-forget, no retry contract)."""

    def send(self, template: str, recipient: str, variables: Mapping[str, object]) -> NotificationResult:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Writes messages to the application log instead of delivering them."""

    def send(self, template: str, recipient: str, variables: Mapping[str, object]) -> NotificationResult:
        if not recipient or "@" not in recipient:
            logger.warning("Notification %s dropped: invalid recipient %r", template, recipient)
            return NotificationResult(ok=False, detail="invalid recipient")

        logger.info("Notification %s -> %s %s", template, recipient, dict(variables))
        return NotificationResult(ok=True)
