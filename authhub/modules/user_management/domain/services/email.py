# 📄 File: authhub/modules/user_management/domain/services/email.py
# 🧭 Purpose (Layman Explanation):
# Describes what the account rules need from an email sender: a way to check it is reachable and a
# way to send a message built from one of our templates
# 🧪 Purpose (Technical Summary):
# EmailService collaborator interface and the EmailMessage value object handed to it
# 🔗 Dependencies:
# abc, dataclasses, typing
# 🔄 Connected Modules / Calls From:
# SendEmailOnUserCreation, SendEmailOnForgotPassword, shared.infrastructure.email.SMTPEmailService

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EmailMessage:
    """An outgoing email, either pre-rendered or referencing a template."""
    to: str
    subject: str
    template: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    text: Optional[str] = None
    html: Optional[str] = None


class EmailService(ABC):
    """Outbound email."""

    @abstractmethod
    async def verify(self) -> bool:
        """
        Check that the mail server can be reached.

        Returns:
            True if messages can currently be sent
        """
        pass

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Send one message.

        Raises:
            EmailDeliveryError: If the server rejects or drops the message
        """
        pass
