import logging
from email.utils import formataddr
from markupsafe import Markup

from portfolio_contact.common.config import Settings
from portfolio_contact.common.utils.email_service import Mailer, OutboundEmail, render_template
from portfolio_contact.common.utils.global_messages import GlobalMessages
from portfolio_contact.common.utils.sanitize import escape_html, format_message_html
from portfolio_contact.modules.contact.schemas import ContactSubmission, DispatchResult

logger = logging.getLogger(__name__)

def build_owner_notification(submission: ContactSubmission, settings: Settings) -> OutboundEmail:
    """Email telling the site owner about a new submission. Replies go straight to the submitter."""
    # Values are escaped here; Markup keeps the template from escaping them again.
    html_body = render_template("owner_notification.html", {
        "name": Markup(escape_html(submission.name)),
        "email": Markup(escape_html(submission.email)),
        "message": Markup(format_message_html(submission.message)),
    })
    return OutboundEmail(
        sender=formataddr((settings.OWNER_SENDER_NAME, settings.OWNER_EMAIL)),
        to=settings.OWNER_EMAIL,
        reply_to=submission.email,
        subject=GlobalMessages.OWNER_NOTIFICATION_SUBJECT,
        html=html_body,
    )

def build_client_confirmation(submission: ContactSubmission, settings: Settings) -> OutboundEmail:
    html_body = render_template("client_confirmation.html", {
        "name": Markup(escape_html(submission.name)),
        "site_name": settings.SITE_NAME,
    })
    return OutboundEmail(
        sender=formataddr((settings.SITE_NAME, settings.OWNER_EMAIL)),
        to=submission.email,
        subject=GlobalMessages.CLIENT_CONFIRMATION_SUBJECT,
        html=html_body,
    )

async def dispatch_notifications(submission: ContactSubmission, mailer: Mailer, settings: Settings) -> DispatchResult:
    """
    Notify the owner, then confirm to the client.

    The confirmation is only attempted once the owner notification went out.
    A failing send ends the sequence; the error is logged and recorded in the
    result instead of being raised, so the caller decides the HTTP outcome.

    Args:
        submission (ContactSubmission): A validated, unescaped submission.
        mailer (Mailer): The outbound mail capability.
        settings (Settings): Provides the owner address and display names.

    Returns:
        DispatchResult: Which of the two emails were sent.
    """
    result = DispatchResult()

    try:
        await mailer.send(build_owner_notification(submission, settings))
    except Exception:
        logger.exception("Error sending owner notification")
        result.failed_step = "owner_notification"
        return result
    result.owner_sent = True
    logger.info("Feedback email sent to owner.")

    try:
        await mailer.send(build_client_confirmation(submission, settings))
    except Exception:
        logger.exception("Error sending confirmation email to client")
        result.failed_step = "client_confirmation"
        return result
    result.client_sent = True
    logger.info("Confirmation email sent to client.")

    return result
