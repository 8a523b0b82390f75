"""Transports hand rendered messages to a delivery channel."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from email.utils import make_msgid
from typing import Dict, List

from django.conf import settings  # type: ignore
from django.core.mail import EmailMultiAlternatives, get_connection  # type: ignore
from django.core.mail.utils import DNS_NAME  # type: ignore

from .exceptions import DispatchFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    to: List[str]
    subject: str
    html: str
    text: str
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    message_id: str = ""
    error: str = ""


class Transport(ABC):
    """Base class for transports"""

    @abstractmethod
    def send(self, envelope: Envelope) -> DispatchResult:
        pass


class EmailTransport(Transport):
    """Send through Django's mail framework with a bounded timeout"""

    def __init__(self, from_email: str | None = None, timeout: float | None = None):
        self.from_email = from_email or getattr(
            settings, "NOTIFICATION_FROM_EMAIL", settings.DEFAULT_FROM_EMAIL
        )
        self.timeout = timeout if timeout is not None else getattr(settings, "EMAIL_TIMEOUT", 10)

    def send(self, envelope: Envelope) -> DispatchResult:
        if not envelope.to:
            return DispatchResult(success=False, error="No recipient")

        message_id = make_msgid(domain=DNS_NAME)
        headers = {"Message-ID": message_id}
        headers.update({f"X-Quarters-{k.title()}": str(v) for k, v in envelope.metadata.items()})

        try:
            connection = get_connection(fail_silently=False, timeout=self.timeout)
            message = EmailMultiAlternatives(
                subject=envelope.subject,
                body=envelope.text,
                from_email=self.from_email,
                to=envelope.to,
                headers=headers,
                connection=connection,
            )
            message.attach_alternative(envelope.html, "text/html")
            message.send()
        except Exception as e:
            logger.error(f"Failed to send email to {envelope.to}: {e}", exc_info=True)
            return DispatchResult(success=False, error=str(e))

        return DispatchResult(success=True, message_id=message_id)


def deliver(transport: Transport, envelope: Envelope) -> DispatchResult:
    """Send and raise ``DispatchFailed`` unless the transport accepted the message."""
    result = transport.send(envelope)
    if not result.success:
        raise DispatchFailed(result.error or "Transport rejected the message")
    return result
