"""SMTP delivery for trip notifications."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from fleetbook.services._shared.outcome import Outcome

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SMTPNotifier:
    """
    Send plain-text email through an SMTP relay.

    A new connection is opened per message (trip accept and cancel).
    """

    host: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    sender: str = "no-reply@fleetbook.local"
    timeout: float = 10.0

    def send(self, *, to: str, subject: str, body: str) -> Outcome:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            return Outcome.failed(f"smtp: {exc}")
        log.info("notification.sent to=%s subject=%s", to, subject)
        return Outcome.applied()
