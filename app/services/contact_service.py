from ..core.config import settings
from ..core.mailer import Mailer
from ..models.contact import ContactRequest
from .email_templates import render_contact_owner_email


async def send_contact_message(req: ContactRequest, mailer: Mailer) -> str:
    html, text = render_contact_owner_email(req)
    return await mailer.send(
        to=settings.contact_recipient,
        subject=f"New Contact Form: {req.project_type_label}",
        html=html,
        text=text,
        reply_to=req.email,
    )
