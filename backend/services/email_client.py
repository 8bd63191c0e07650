"""Transactional email integration with the Resend API."""
import time
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import httpx
from config import RESEND_API_KEY, RESEND_API_URL, LEAD_FROM, LEAD_TO

logger = logging.getLogger(__name__)


@dataclass
class EmailError:
    """Structured error response from email operations."""
    code: str
    message: str
    details: Dict[str, Any]


class EmailClientError(Exception):
    """Raised when the email provider does not accept a message."""

    def __init__(self, error: EmailError):
        self.error = error
        super().__init__(error.message)


class EmailClient:
    """Sends plain-text emails from a fixed sender to a fixed recipient."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        sender: str = LEAD_FROM,
        recipients: Optional[List[str]] = None,
        api_url: str = RESEND_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the email client.

        Args:
            api_key: Resend API key (defaults to RESEND_API_KEY from environment)
            sender: "Name <address>" used as the from field
            recipients: Addresses every message is delivered to
            api_url: Email endpoint
            transport: Optional httpx transport, used by tests
        """
        self.api_key = api_key or RESEND_API_KEY
        if not self.api_key:
            raise ValueError("RESEND_API_KEY must be provided or set in environment")

        self.sender = sender
        self.recipients = recipients or [LEAD_TO]
        self.api_url = api_url
        self.transport = transport

        logger.info(f"EmailClient initialized for {len(self.recipients)} recipient(s)")

    async def send(self, subject: str, text: str) -> Dict[str, Any]:
        """
        Send one plain-text email.

        Args:
            subject: Subject line
            text: Plain-text body

        Returns:
            Provider response payload (e.g. ``{"id": "..."}``)

        Raises:
            EmailClientError: If the provider rejects the message or is unreachable
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        payload = {
            "from": self.sender,
            "to": self.recipients,
            "subject": subject,
            "text": text
        }

        start_time = time.time()

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise EmailClientError(EmailError(
                code="TIMEOUT_ERROR",
                message="Email provider timed out",
                details={"original_error": str(e)}
            )) from e
        except httpx.RequestError as e:
            raise EmailClientError(EmailError(
                code="NETWORK_ERROR",
                message=f"Network error: {str(e)}",
                details={"original_error": str(e)}
            )) from e

        elapsed = time.time() - start_time

        if not response.is_success:
            raise EmailClientError(EmailError(
                code="API_ERROR",
                message=f"Email provider returned status {response.status_code}",
                details={"status_code": response.status_code, "response_text": response.text}
            ))

        logger.info(f"Email accepted by provider in {elapsed:.2f}s")
        try:
            return response.json()
        except ValueError:
            return {}
