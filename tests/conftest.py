from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core import mailer as mailer_module
from app.core.mailer import MailDeliveryError, Mailer, get_mailer
from app.main import app
from app.models.quotation import QuotationRecord
from app.services import quotations_service


class FakeMailer:
    """Records every send; raises on the call numbered ``fail_on`` (1-based)."""

    def __init__(self, fail_on: Optional[int] = None):
        self.sent: List[Dict[str, Any]] = []
        self.fail_on = fail_on
        self.calls = 0

    async def send(self, **kwargs) -> str:
        self.calls += 1
        if self.fail_on == self.calls:
            raise MailDeliveryError("smtp refused")
        self.sent.append(kwargs)
        return f"<msg-{self.calls}@test.local>"


class FakeStore:
    def __init__(self, error: Optional[Exception] = None):
        self.records: List[Dict[str, Any]] = []
        self.error = error

    async def insert(self, record: Dict[str, Any]) -> QuotationRecord:
        if self.error is not None:
            raise self.error
        self.records.append(record)
        return QuotationRecord(id=len(self.records), **record)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    monkeypatch.setattr(quotations_service, "insert_quotation_request", fake.insert)
    return fake


@pytest.fixture
def client(mailer):
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def quotation_payload():
    return {
        "service": "Web Design",
        "selectedOptions": ["Landing Page"],
        "timeline": "2 weeks",
        "budget": "$500-1000",
        "projectBrief": "I need a new landing page for my startup",
        "clientName": "Jane Doe",
        "clientEmail": "jane@example.com",
        "preferredContact": "email",
        "consent": True,
        "honeypot": "",
    }


class RecordingSMTP:
    """Stands in for ``smtplib.SMTP``; every sent message lands in ``outbox``."""

    outbox: List[Any] = []

    def __init__(self, host, port, timeout=None):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, message):
        # serialising is where header policy errors surface
        message.as_bytes()
        RecordingSMTP.outbox.append(message)


@pytest.fixture
def smtp_outbox(monkeypatch):
    RecordingSMTP.outbox = []
    monkeypatch.setattr(mailer_module.smtplib, "SMTP", RecordingSMTP)
    return RecordingSMTP.outbox


@pytest.fixture
def smtp_client(smtp_outbox):
    real = Mailer(host="smtp.test", port=2525, default_from="Portfolio <noreply@site.dev>", starttls=False)
    app.dependency_overrides[get_mailer] = lambda: real
    yield TestClient(app)
    app.dependency_overrides.clear()
