# 📄 File: authhub/shared/infrastructure/email/email_service.py
#
# 🧭 Purpose (Layman Explanation):
# The mail room. It turns "send the verification email to Jane" into an actual email and hands it
# to the mail server, or just writes it to the log when real sending is switched off.
#
# 🧪 Purpose (Technical Summary):
# EmailService adapters. SMTPEmailService renders the named template into a text/html MIME
# message and sends it with smtplib in a worker thread; verify() opens a connection and issues
# NOOP. LoggingEmailService is used when SMTP_ENABLED is false.
#
# 🔗 Dependencies:
# - smtplib / email.message (stdlib SMTP client)
# - authhub.modules.user_management.domain.services.email (interface, EmailMessage)
# - authhub.shared.core.exceptions.EmailDeliveryError
#
# 🔄 Connected Modules / Calls From:
# - SendEmailOnUserCreation, SendEmailOnForgotPassword (through the composition root)

import asyncio
import logging
import smtplib
from email.message import EmailMessage as MIMEMessage
from typing import Dict, Optional, Tuple

from authhub.modules.user_management.domain.services.email import EmailMessage, EmailService
from authhub.shared.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


# =============================================================================
# TEMPLATES
# =============================================================================

TEMPLATES: Dict[str, Tuple[str, str]] = {
    "email-verification-token": (
        "Hi {name},\n\n"
        "Please confirm your email address by opening the link below:\n"
        "{verification_url}\n\n"
        "The link expires in {expires_in_minutes} minutes.\n\n"
        "(c) {current_year}",
        "<p>Hi {name},</p>"
        "<p>Please confirm your email address by clicking "
        "<a href=\"{verification_url}\">this link</a>.</p>"
        "<p>The link expires in {expires_in_minutes} minutes.</p>"
        "<p>&copy; {current_year}</p>",
    ),
    "reset-password": (
        "Hi {name},\n\n"
        "We received a request to reset your password. Choose a new one here:\n"
        "{reset_url}\n\n"
        "The link expires in {expires_in_minutes} minutes. If you did not ask for this, ignore this email.\n\n"
        "(c) {current_year}",
        "<p>Hi {name},</p>"
        "<p>We received a request to reset your password. "
        "<a href=\"{reset_url}\">Choose a new password</a>.</p>"
        "<p>The link expires in {expires_in_minutes} minutes. "
        "If you did not ask for this, ignore this email.</p>"
        "<p>&copy; {current_year}</p>",
    ),
}


def render(message: EmailMessage) -> Tuple[str, Optional[str]]:
    """
    Text and html bodies for a message.

    Pre-rendered bodies win over the template.

    Raises:
        EmailDeliveryError: If the message names an unknown template
    """
    if message.text is not None or message.html is not None:
        return message.text or "", message.html

    if message.template not in TEMPLATES:
        raise EmailDeliveryError(f"Unknown email template: {message.template}", recipient=message.to)

    text, html = TEMPLATES[message.template]
    try:
        return text.format(**message.context), html.format(**message.context)
    except KeyError as e:
        raise EmailDeliveryError(
            f"Missing template variable {e} for {message.template}", recipient=message.to
        ) from e


class SMTPEmailService(EmailService):
    """Sends mail through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: int = 10,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.use_tls:
            client.starttls()
        if self.username:
            client.login(self.username, self.password)
        return client

    def _verify_sync(self) -> bool:
        with self._connect() as client:
            code, _ = client.noop()
        return code == 250

    def _send_sync(self, mime: MIMEMessage) -> None:
        with self._connect() as client:
            client.send_message(mime)

    async def verify(self) -> bool:
        try:
            return await asyncio.to_thread(self._verify_sync)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"SMTP server {self.host}:{self.port} unavailable: {e}")
            return False

    async def send(self, message: EmailMessage) -> None:
        text, html = render(message)

        mime = MIMEMessage()
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content(text)
        if html:
            mime.add_alternative(html, subtype="html")

        try:
            await asyncio.to_thread(self._send_sync, mime)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {message.to}: {e}")
            raise EmailDeliveryError(f"Failed to send email: {e}", recipient=message.to) from e

        logger.info(f"Email '{message.subject}' sent to {message.to}")


class LoggingEmailService(EmailService):
    """Writes outgoing mail to the log instead of sending it."""

    async def verify(self) -> bool:
        return True

    async def send(self, message: EmailMessage) -> None:
        text, _ = render(message)
        logger.info(f"Email to {message.to} (not sent, SMTP disabled): {message.subject}\n{text}")
