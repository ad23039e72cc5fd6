from datetime import datetime, timezone

from app.core.config import settings
from app.models.contact import ContactRequest
from app.models.order import ServiceOrder
from app.models.quotation import QuotationRequest
from app.services.email_templates import (
    render_contact_owner_email,
    render_order_client_email,
    render_order_seller_email,
    render_quotation_client_email,
    render_quotation_owner_email,
)

SUBMITTED = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def test_owner_email_lists_everything(quotation_payload):
    req = QuotationRequest.model_validate(
        dict(quotation_payload, selectedOptions=["Landing Page", "SEO"], clientCompany="Acme")
    )

    html = render_quotation_owner_email(req, "QT-ABC-123456", SUBMITTED)

    assert "<li>Landing Page</li>" in html
    assert "<li>SEO</li>" in html
    assert "Company:</strong> Acme" in html
    assert "Phone:" not in html
    assert "QT-ABC-123456" in html
    assert "2024-05-01 09:30:00 UTC" in html


def test_client_email_has_next_steps_and_signature(quotation_payload, monkeypatch):
    monkeypatch.setattr(settings, "owner_whatsapp", None)
    req = QuotationRequest.model_validate(quotation_payload)

    html = render_quotation_client_email(req, "QT-ABC-123456")

    assert "Hi Jane Doe," in html
    assert "my web design service" in html
    assert "What happens next?" in html
    assert f"Email: {settings.owner_email}" in html
    assert "WhatsApp" not in html
    assert settings.owner_name in html


def test_contact_email_escapes_html_but_not_text():
    req = ContactRequest(
        name="<b>Bob</b>",
        email="bob@example.org",
        projectType="web-app",
        message="Please build <i>something</i> nice for us",
    )

    html, text = render_contact_owner_email(req)

    assert "&lt;b&gt;Bob&lt;/b&gt;" in html
    assert "Web Application" in html
    assert "Name: <b>Bob</b>" in text
    assert "Company:" not in text


def test_order_emails():
    order = ServiceOrder(
        name="Ana",
        email="ana@example.org",
        service="Logo Design",
        requirements="Minimal logo",
        budget="$300",
    )

    client_html = render_order_client_email(order)
    seller_html = render_order_seller_email(order, 1, SUBMITTED)

    assert "Budget:</strong><br>$300" in client_html
    assert "Deadline" not in client_html
    assert "1 file attached" in seller_html
    assert "Deadline: Not specified" in seller_html
