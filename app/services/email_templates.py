"""
HTML (and plain-text) bodies for outgoing mail.

Templates are rendered with autoescaping on, so any value coming from a form
is HTML-escaped before it lands in a message body.
"""
from datetime import datetime
from typing import Dict, Optional, Tuple

from jinja2 import BaseLoader, Environment

from ..core.config import settings
from ..models.contact import ContactRequest
from ..models.order import NOT_SPECIFIED, TO_BE_DISCUSSED, ServiceOrder
from ..models.quotation import QuotationRequest

html_env = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True)
text_env = Environment(loader=BaseLoader(), autoescape=False, trim_blocks=True, lstrip_blocks=True)

QUOTATION_OWNER_HTML = html_env.from_string(
    """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #7D27F5;">New Quotation Request — {{ req.service }}</h2>

  <div style="background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3>Client Information</h3>
    <p><strong>Name:</strong> {{ req.clientName }}</p>
    <p><strong>Email:</strong> {{ req.clientEmail }}</p>
    {% if req.clientPhone %}
    <p><strong>Phone:</strong> {{ req.clientPhone }}</p>
    {% endif %}
    {% if req.clientCompany %}
    <p><strong>Company:</strong> {{ req.clientCompany }}</p>
    {% endif %}
    <p><strong>Preferred Contact:</strong> {{ req.preferredContact }}</p>
  </div>

  <div style="background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3>Project Details</h3>
    <p><strong>Service:</strong> {{ req.service }}</p>
    <p><strong>Selected Options:</strong></p>
    <ul>
      {% for option in req.selectedOptions %}
      <li>{{ option }}</li>
      {% endfor %}
    </ul>
    <p><strong>Timeline:</strong> {{ req.timeline }}</p>
    <p><strong>Budget:</strong> {{ req.budget }}</p>
  </div>

  <div style="background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3>Project Brief</h3>
    <p style="white-space: pre-wrap;">{{ req.projectBrief }}</p>
  </div>

  <div style="background: #e3f2fd; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <p><strong>Ticket ID:</strong> {{ ticket_id }}</p>
    <p><strong>Submitted:</strong> {{ submitted_at }}</p>
  </div>
</div>
"""
)

QUOTATION_CLIENT_HTML = html_env.from_string(
    """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #7D27F5;">Thanks for your request — {{ req.service }}</h2>

  <p>Hi {{ req.clientName }},</p>

  <p>Thank you for your interest in my {{ req.service | lower }} service! I've received your quotation request and will review it carefully.</p>

  <div style="background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3>Your Request Summary</h3>
    <p><strong>Service:</strong> {{ req.service }}</p>
    <p><strong>Timeline:</strong> {{ req.timeline }}</p>
    <p><strong>Budget Range:</strong> {{ req.budget }}</p>
    <p><strong>Ticket ID:</strong> {{ ticket_id }}</p>
  </div>

  <div style="background: #e8f5e8; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <h4>What happens next?</h4>
    <ul>
      <li>I'll review your requirements within 24-48 hours</li>
      <li>You'll receive a detailed proposal with timeline and pricing</li>
      <li>We can schedule a call to discuss any questions</li>
    </ul>
  </div>

  <p>If you have any urgent questions, feel free to reach out:</p>
  <ul>
    <li>Email: {{ owner.email }}</li>
    {% if owner.whatsapp %}
    <li>WhatsApp: {{ owner.whatsapp }}</li>
    {% endif %}
    {% if owner.linkedin %}
    <li>LinkedIn: {{ owner.linkedin }}</li>
    {% endif %}
  </ul>

  <p>Looking forward to working together!</p>

  <p>Best regards,<br>
  <strong>{{ owner.name }}</strong><br>
  {{ owner.title }}</p>
</div>
"""
)

CONTACT_OWNER_HTML = html_env.from_string(
    """
<!DOCTYPE html>
<html>
  <head><meta charset="utf-8"></head>
  <body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 32px; background: #ffffff; border-radius: 12px;">
      <div style="border-bottom: 3px solid #8b5cf6; padding-bottom: 20px; margin-bottom: 24px;">
        <h1 style="color: #8b5cf6; margin: 0; font-size: 24px;">New Contact Form Submission</h1>
        <p style="color: #666; margin: 8px 0 0 0;">You have received a new inquiry from your portfolio website</p>
      </div>

      <h3 style="color: #8b5cf6;">Contact Information</h3>
      <p><strong>Name:</strong> {{ req.name }}</p>
      <p><strong>Email:</strong> <a href="mailto:{{ req.email }}" style="color: #8b5cf6;">{{ req.email }}</a></p>
      {% if req.company %}
      <p><strong>Company:</strong> {{ req.company }}</p>
      {% endif %}

      <h3 style="color: #8b5cf6;">Project Details</h3>
      <p><strong>Project Type:</strong> {{ req.project_type_label }}</p>
      {% if req.budget_label %}
      <p><strong>Budget:</strong> {{ req.budget_label }}</p>
      {% endif %}
      {% if req.timeline_label %}
      <p><strong>Timeline:</strong> {{ req.timeline_label }}</p>
      {% endif %}

      <h3 style="color: #8b5cf6;">Message</h3>
      <div style="border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; white-space: pre-wrap;">{{ req.message }}</div>

      <div style="margin-top: 32px; padding-top: 20px; border-top: 1px solid #e5e7eb; text-align: center; color: #999; font-size: 13px;">
        <p>This email was sent from your portfolio contact form</p>
        <p><strong>Reply directly to this email</strong> to respond to {{ req.name }}</p>
      </div>
    </div>
  </body>
</html>
"""
)

CONTACT_OWNER_TEXT = text_env.from_string(
    """New Contact Form Submission

CONTACT INFORMATION
Name: {{ req.name }}
Email: {{ req.email }}
{% if req.company %}
Company: {{ req.company }}
{% endif %}

PROJECT DETAILS
Project Type: {{ req.project_type_label }}
{% if req.budget_label %}
Budget: {{ req.budget_label }}
{% endif %}
{% if req.timeline_label %}
Timeline: {{ req.timeline_label }}
{% endif %}

MESSAGE
{{ req.message }}

---
Reply to this email to respond to {{ req.name }} at {{ req.email }}
"""
)

ORDER_CLIENT_HTML = html_env.from_string(
    """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 30px; border-radius: 10px 10px 0 0; text-align: center;">
      <h1 style="color: white; margin: 0; font-size: 24px;">Order Received Successfully!</h1>
    </div>
    <div style="background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px;">
      <p>Hi {{ order.name }},</p>

      <p>Thank you for your order request! I've received your project details and will review them carefully.</p>

      <div style="background: white; padding: 20px; border-radius: 8px; border-left: 4px solid #667eea;">
        <p><strong>Service Requested:</strong><br>{{ order.service }}</p>
        <p><strong>Project Requirements:</strong><br>{{ order.requirements }}</p>
        {% if order.deadline != not_specified %}
        <p><strong>Deadline:</strong><br>{{ order.deadline }}</p>
        {% endif %}
        {% if order.budget != not_specified %}
        <p><strong>Budget:</strong><br>{{ order.budget }}</p>
        {% endif %}
        {% if order.paymentMethod != to_be_discussed %}
        <p><strong>Preferred Payment Method:</strong><br>{{ order.paymentMethod }}</p>
        {% endif %}
      </div>

      <p><strong>What happens next?</strong></p>
      <ul style="color: #4b5563;">
        <li>I'll review your requirements within 24 hours</li>
        <li>You'll receive a detailed proposal with timeline and pricing</li>
        <li>We'll schedule a call to discuss the project in detail</li>
      </ul>

      <p>Best regards,<br><strong>{{ owner.name }}</strong></p>

      <p style="text-align: center; color: #6b7280; font-size: 14px;">This is an automated confirmation email. Please do not reply to this email.</p>
    </div>
  </div>
</body>
</html>
"""
)

ORDER_SELLER_HTML = html_env.from_string(
    """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: linear-gradient(135deg, #f59e0b 0%, #d97706 100%); padding: 30px; border-radius: 10px 10px 0 0; text-align: center;">
      <h1 style="color: white; margin: 0; font-size: 24px;">New Service Order Received!</h1>
    </div>
    <div style="background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px;">
      <div style="background: #fef3c7; padding: 15px; border-radius: 8px; border-left: 3px solid #f59e0b;">
        <strong>New order from: {{ order.name }}</strong><br>
        <span style="color: #6b7280;">Reply to: {{ order.email }}</span>
      </div>

      <p><strong>SERVICE REQUESTED</strong><br>{{ order.service }}</p>
      <p><strong>CLIENT DETAILS</strong><br>
        Name: {{ order.name }}<br>
        Email: <a href="mailto:{{ order.email }}">{{ order.email }}</a>
      </p>
      <p><strong>PROJECT REQUIREMENTS</strong></p>
      <div style="white-space: pre-wrap; background: #f3f4f6; padding: 15px; border-radius: 6px;">{{ order.requirements }}</div>
      <p><strong>PROJECT DETAILS</strong><br>
        Deadline: {{ order.deadline }}<br>
        Budget: {{ order.budget }}<br>
        Payment Method: {{ order.paymentMethod }}
      </p>
      {% if file_count %}
      <p><strong>ATTACHMENTS</strong><br>{{ file_count }} file{{ "s" if file_count > 1 else "" }} attached</p>
      {% endif %}

      <p style="text-align: center; color: #6b7280; font-size: 14px;">Received at {{ received_at }}</p>
    </div>
  </div>
</body>
</html>
"""
)


def _owner_context() -> Dict[str, Optional[str]]:
    return {
        "name": settings.owner_name,
        "title": settings.owner_title,
        "email": settings.owner_email,
        "whatsapp": settings.owner_whatsapp,
        "linkedin": settings.owner_linkedin,
    }


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def render_quotation_owner_email(req: QuotationRequest, ticket_id: str, submitted_at: datetime) -> str:
    return QUOTATION_OWNER_HTML.render(req=req, ticket_id=ticket_id, submitted_at=_format_timestamp(submitted_at))


def render_quotation_client_email(req: QuotationRequest, ticket_id: str) -> str:
    return QUOTATION_CLIENT_HTML.render(req=req, ticket_id=ticket_id, owner=_owner_context())


def render_contact_owner_email(req: ContactRequest) -> Tuple[str, str]:
    """Return the (html, text) pair for a contact form notification."""
    return CONTACT_OWNER_HTML.render(req=req), CONTACT_OWNER_TEXT.render(req=req)


def render_order_client_email(order: ServiceOrder) -> str:
    return ORDER_CLIENT_HTML.render(
        order=order,
        owner=_owner_context(),
        not_specified=NOT_SPECIFIED,
        to_be_discussed=TO_BE_DISCUSSED,
    )


def render_order_seller_email(order: ServiceOrder, file_count: int, received_at: datetime) -> str:
    return ORDER_SELLER_HTML.render(order=order, file_count=file_count, received_at=_format_timestamp(received_at))
