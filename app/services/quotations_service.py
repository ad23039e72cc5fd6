import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..core.config import settings
from ..core.database import execute, fetchrow
from ..core.mailer import Mailer
from ..models.quotation import QuotationRecord, QuotationRequest, QuotationStatus
from .email_templates import render_quotation_client_email, render_quotation_owner_email

log = logging.getLogger(__name__)

TICKET_PREFIX = "QT"
BASE36_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 6

quotation_table_ready = False


async def _ensure_table():
    global quotation_table_ready
    if quotation_table_ready:
        return
    await execute(
        """
        CREATE TABLE IF NOT EXISTS quotation_requests (
          id SERIAL PRIMARY KEY,
          ticket_id TEXT NOT NULL,
          service TEXT NOT NULL,
          selected_options TEXT[] NOT NULL,
          timeline TEXT NOT NULL,
          budget TEXT NOT NULL,
          project_brief TEXT NOT NULL,
          client_name TEXT NOT NULL,
          client_email TEXT NOT NULL,
          client_phone TEXT,
          client_company TEXT,
          preferred_contact TEXT NOT NULL,
          consent BOOLEAN NOT NULL,
          status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'reviewed', 'quoted', 'completed')),
          created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    await execute("CREATE INDEX IF NOT EXISTS quotation_requests_ticket_idx ON quotation_requests(ticket_id)")
    quotation_table_ready = True


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_ticket_id(now_ms: Optional[int] = None, rng: random.Random = random) -> str:
    """
    Build a ticket id like ``QT-LM3K9X1A-A1B2C3``.

    Millisecond timestamp in base 36 plus a random base-36 suffix. No
    uniqueness check is made against stored records.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(rng.choice(BASE36_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{TICKET_PREFIX}-{to_base36(now_ms)}-{suffix}".upper()


def build_record(req: QuotationRequest, ticket_id: str, created_at: datetime) -> Dict[str, Any]:
    return {
        "ticket_id": ticket_id,
        "service": req.service,
        "selected_options": list(req.selectedOptions),
        "timeline": req.timeline,
        "budget": req.budget,
        "project_brief": req.projectBrief,
        "client_name": req.clientName,
        "client_email": str(req.clientEmail),
        "client_phone": req.clientPhone or None,
        "client_company": req.clientCompany or None,
        "preferred_contact": req.preferredContact,
        "consent": req.consent,
        "status": QuotationStatus.pending.value,
        "created_at": created_at,
    }


async def insert_quotation_request(record: Dict[str, Any]) -> QuotationRecord:
    """Insert one already-validated record and return the stored row."""
    await _ensure_table()
    row = await fetchrow(
        """
        INSERT INTO quotation_requests (
          ticket_id,
          service,
          selected_options,
          timeline,
          budget,
          project_brief,
          client_name,
          client_email,
          client_phone,
          client_company,
          preferred_contact,
          consent,
          status,
          created_at
        )
        VALUES (
          %(ticket_id)s, %(service)s, %(selected_options)s, %(timeline)s, %(budget)s,
          %(project_brief)s, %(client_name)s, %(client_email)s, %(client_phone)s,
          %(client_company)s, %(preferred_contact)s, %(consent)s, %(status)s, %(created_at)s
        )
        RETURNING *
        """,
        record,
    )
    if row is None:
        raise RuntimeError("Failed to save quotation request")
    return QuotationRecord.model_validate(row)


async def submit_quotation(req: QuotationRequest, mailer: Mailer) -> QuotationRecord:
    """
    Persist a validated request, then notify the owner and the client.

    Each step runs only if the previous one succeeded. A mail failure leaves
    the stored record in place.
    """
    ticket_id = generate_ticket_id()
    created_at = datetime.now(timezone.utc)

    stored = await insert_quotation_request(build_record(req, ticket_id, created_at))
    log.info("Stored quotation request %s for service %r", stored.ticket_id, req.service)

    await mailer.send(
        to=settings.owner_email,
        subject=f"New Quotation Request — {req.service} — {req.clientName}",
        html=render_quotation_owner_email(req, stored.ticket_id, created_at),
    )
    await mailer.send(
        to=str(req.clientEmail),
        subject=f"Thanks for your request — {req.service}",
        html=render_quotation_client_email(req, stored.ticket_id),
    )
    return stored
