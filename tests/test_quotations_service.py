import asyncio
import random
import re
from datetime import datetime, timezone

import pytest

from app.models.quotation import QuotationRequest, QuotationStatus
from app.services import quotations_service
from app.services.quotations_service import build_record, generate_ticket_id, to_base36


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(1_700_000_000_000) == "loyw3v28"
    with pytest.raises(ValueError):
        to_base36(-1)


def test_ticket_id_format():
    ticket = generate_ticket_id(now_ms=1_700_000_000_000, rng=random.Random(7))

    prefix, stamp, suffix = ticket.split("-")
    assert prefix == "QT"
    assert stamp == "LOYW3V28"
    assert re.fullmatch(r"[0-9A-Z]{6}", suffix)


def test_ticket_id_uses_current_time_by_default():
    ticket = generate_ticket_id()

    stamp = int(ticket.split("-")[1], 36)
    now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    assert abs(now_ms - stamp) < 60_000


def test_build_record_maps_to_columns(quotation_payload):
    req = QuotationRequest.model_validate(dict(quotation_payload, clientPhone="", clientCompany="Acme"))
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)

    record = build_record(req, "QT-ABC-123456", created)

    assert record == {
        "ticket_id": "QT-ABC-123456",
        "service": "Web Design",
        "selected_options": ["Landing Page"],
        "timeline": "2 weeks",
        "budget": "$500-1000",
        "project_brief": "I need a new landing page for my startup",
        "client_name": "Jane Doe",
        "client_email": "jane@example.com",
        "client_phone": None,
        "client_company": "Acme",
        "preferred_contact": "email",
        "consent": True,
        "status": "pending",
        "created_at": created,
    }


def test_insert_creates_table_once_and_returns_row(monkeypatch, quotation_payload):
    statements = []
    inserted = []

    async def fake_execute(query, params=None):
        statements.append(query)
        return 0

    async def fake_fetchrow(query, params=None):
        inserted.append((query, params))
        return dict(params, id=41)

    monkeypatch.setattr(quotations_service, "execute", fake_execute)
    monkeypatch.setattr(quotations_service, "fetchrow", fake_fetchrow)
    monkeypatch.setattr(quotations_service, "quotation_table_ready", False)

    req = QuotationRequest.model_validate(quotation_payload)
    record = build_record(req, "QT-ABC-123456", datetime.now(timezone.utc))

    first = asyncio.run(quotations_service.insert_quotation_request(record))
    asyncio.run(quotations_service.insert_quotation_request(record))

    assert first.id == 41
    assert first.status is QuotationStatus.pending
    assert first.ticket_id == "QT-ABC-123456"
    assert "CREATE TABLE IF NOT EXISTS quotation_requests" in statements[0]
    assert len(statements) == 2  # table + index, only on the first insert
    assert len(inserted) == 2
    assert "RETURNING *" in inserted[0][0]


def test_insert_without_returned_row_raises(monkeypatch, quotation_payload):
    async def fake_execute(query, params=None):
        return 0

    async def fake_fetchrow(query, params=None):
        return None

    monkeypatch.setattr(quotations_service, "execute", fake_execute)
    monkeypatch.setattr(quotations_service, "fetchrow", fake_fetchrow)

    req = QuotationRequest.model_validate(quotation_payload)
    record = build_record(req, "QT-ABC-123456", datetime.now(timezone.utc))

    with pytest.raises(RuntimeError):
        asyncio.run(quotations_service.insert_quotation_request(record))
