import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr
from functools import lru_cache
from typing import Optional, Sequence

from fastapi.concurrency import run_in_threadpool

from .config import settings

log = logging.getLogger(__name__)


def _header_value(value: str) -> str:
    """Collapse whitespace runs, CR and LF included, into single spaces."""
    return " ".join(value.split())


class MailDeliveryError(Exception):
    """Raised when the SMTP server could not be reached or refused a message."""


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class Mailer:
    """Thin SMTP client. One connection is opened per message."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        default_from: str = "",
        starttls: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.default_from = default_from
        self.starttls = starttls
        self.timeout = timeout

    def build_message(
        self,
        *,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
        sender: Optional[str] = None,
        reply_to: Optional[str] = None,
        attachments: Sequence[Attachment] = (),
    ) -> EmailMessage:
        sender = sender or self.default_from
        message = EmailMessage()
        message["From"] = _header_value(sender)
        message["To"] = _header_value(to)
        message["Subject"] = _header_value(subject)
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid(domain=parseaddr(sender)[1].rpartition("@")[2] or None)
        if reply_to:
            message["Reply-To"] = _header_value(reply_to)

        # html is the primary body; a text part, when given, is the fallback
        if text is not None:
            message.set_content(text)
            message.add_alternative(html, subtype="html")
        else:
            message.set_content(html, subtype="html")

        for attachment in attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            if not subtype:
                maintype, subtype = "application", "octet-stream"
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=_header_value(attachment.filename),
            )
        return message

    def deliver(self, message: EmailMessage) -> str:
        """Send a prepared message synchronously and return its Message-ID."""
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"Failed to send mail to {message['To']}: {exc}") from exc

        log.info("Mail sent to %s (%s)", message["To"], message["Subject"])
        return message["Message-ID"]

    async def send(self, **kwargs) -> str:
        """Build and deliver a message without blocking the event loop.

        Accepts the keyword arguments of :meth:`build_message`.
        """
        message = self.build_message(**kwargs)
        return await run_in_threadpool(self.deliver, message)


@lru_cache(maxsize=1)
def get_mailer() -> Mailer:
    return Mailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_pass,
        default_from=settings.smtp_from,
        starttls=settings.smtp_starttls,
        timeout=settings.smtp_timeout,
    )
