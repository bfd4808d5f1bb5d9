import aiosmtplib
import jinja2
import logging
import os
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Dict, Optional, Protocol

from portfolio_contact.common.config import Settings
from portfolio_contact.common.exceptions import TransportError

logger = logging.getLogger(__name__)

# Configure Jinja2 environment
# portfolio_contact/common/utils/email_service.py -> portfolio_contact/templates/emails
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
TEMPLATE_DIR = os.path.join(BASE_DIR, "templates", "emails")

template_loader = jinja2.FileSystemLoader(searchpath=TEMPLATE_DIR)
template_env = jinja2.Environment(loader=template_loader, autoescape=True)

def render_template(template_name: str, context: Dict[str, Any]) -> str:
    template = template_env.get_template(template_name)
    return template.render(**context)


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: str
    subject: str
    html: str
    reply_to: Optional[str] = None


class Mailer(Protocol):
    async def send(self, email: OutboundEmail) -> None:
        ...


class SmtpMailer:
    """
    Sends email through an SMTP account using aiosmtplib.

    Any failure while talking to the server is raised as TransportError so
    callers never depend on aiosmtplib's exception types.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def send(self, email: OutboundEmail) -> None:
        if not self.settings.SMTP_HOST:
            logger.warning(f"[MOCK EMAIL] To: {email.to}, Subject: {email.subject}")
            return

        message = EmailMessage()
        message["From"] = email.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        if email.reply_to:
            message["Reply-To"] = email.reply_to
        message.set_content(email.html, subtype="html")

        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.SMTP_HOST,
                port=self.settings.SMTP_PORT,
                username=self.settings.OWNER_EMAIL,
                password=self.settings.OWNER_EMAIL_PASS,
                use_tls=self.settings.SMTP_USE_TLS,
                start_tls=not self.settings.SMTP_USE_TLS,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise TransportError(f"Could not deliver '{email.subject}' to {email.to}") from e
