import logging
from datetime import datetime, timezone
from typing import Sequence, Tuple

from ..core.config import settings
from ..core.mailer import Attachment, Mailer
from ..models.order import ServiceOrder
from .email_templates import render_order_client_email, render_order_seller_email

log = logging.getLogger(__name__)


async def submit_order(order: ServiceOrder, attachments: Sequence[Attachment], mailer: Mailer) -> Tuple[str, str]:
    """Send the client confirmation, then the owner notification with the uploads.

    Returns the message ids of both mails, client first.
    """
    client_id = await mailer.send(
        to=str(order.email),
        subject=f"Order Confirmation - {order.service}",
        html=render_order_client_email(order),
    )
    seller_id = await mailer.send(
        to=settings.owner_email,
        subject=f"New Order: {order.service} from {order.name}",
        html=render_order_seller_email(order, len(attachments), datetime.now(timezone.utc)),
        reply_to=str(order.email),
        attachments=attachments,
    )
    log.info("Order for %r from %s sent with %d attachment(s)", order.service, order.email, len(attachments))
    return client_id, seller_id
