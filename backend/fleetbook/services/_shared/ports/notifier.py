from __future__ import annotations

import logging
from typing import Protocol

from fleetbook.services._shared.outcome import Outcome

log = logging.getLogger(__name__)


class Notifier(Protocol):
    """
    Outbound message delivery (email).

    Delivery is best effort: implementations return
    :meth:`Outcome.failed <fleetbook.services._shared.outcome.Outcome.failed>`
    instead of raising.
    """

    def send(self, *, to: str, subject: str, body: str) -> Outcome: ...


class LoggingNotifier(Notifier):
    """Write notifications to the log instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send(self, *, to: str, subject: str, body: str) -> Outcome:
        self.sent.append((to, subject, body))
        log.info("notification.logged to=%s subject=%s", to, subject)
        return Outcome.applied()
