# tests/unit/infra/test_smtp_notifier.py
from __future__ import annotations

import smtplib

import pytest

from fleetbook.infra import build_notifier
from fleetbook.infra.mail import smtp_notifier
from fleetbook.infra.mail.smtp_notifier import SMTPNotifier
from fleetbook.services._shared.ports import LoggingNotifier


class FakeSMTP:
    instances: list[FakeSMTP] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls: list[str] = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(f"login:{user}")

    def send_message(self, msg):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.sent.append(msg)


@pytest.fixture(autouse=True)
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtp_notifier.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_send_delivers_plain_text_message(fake_smtp):
    notifier = SMTPNotifier(host="mail.local", username="bot", password="pw", sender="fleet@x.io")

    outcome = notifier.send(to="c@example.com", subject="Hi", body="Trip confirmed")

    assert outcome.ok
    conn = fake_smtp.instances[0]
    assert conn.calls == ["starttls", "login:bot"]
    msg = conn.sent[0]
    assert msg["To"] == "c@example.com"
    assert msg["From"] == "fleet@x.io"
    assert msg.get_content().strip() == "Trip confirmed"


def test_send_failure_is_an_outcome_not_an_exception(fake_smtp):
    fake_smtp.fail_with = smtplib.SMTPRecipientsRefused({})
    outcome = SMTPNotifier(host="mail.local", use_tls=False).send(to="x@y.z", subject="s", body="b")

    assert not outcome.ok
    assert outcome.reason.startswith("smtp:")


def test_build_notifier_without_host_logs_instead():
    assert isinstance(build_notifier({"MAIL_HOST": None}), LoggingNotifier)
    assert isinstance(build_notifier({"MAIL_HOST": "mail.local"}), SMTPNotifier)
