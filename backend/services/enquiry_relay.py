"""Enquiry relay: contact form in, one lead email out."""
import logging
from typing import Any, Optional

from models.api import LeadResponse, RelayResult
from models.enquiry import EnquiryRecord
from services.email_client import EmailClient, EmailClientError, EmailError

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"

EMAIL_BODY_TEMPLATE = """
New Earthy enquiry

Business: {business_name}
Website: {website}
Email: {email}
Phone: {phone}

Message:
{message}
"""


class EnquiryRelay:
    """Validates a contact-form submission and forwards it as a plain-text email."""

    SUBJECT_TEMPLATE = "New Earthy enquiry – {business_name}"

    def __init__(self, email_client: Optional[EmailClient]):
        self.email_client = email_client

    async def handle(self, body: Any) -> RelayResult:
        """
        Process a lead submission.

        Returns:
            RelayResult with status 200, 400 or 500 and a ``{"success": bool}``
            body. Never raises.
        """
        try:
            record = EnquiryRecord.from_payload(body)

            if record.has_honeypot:
                logger.info("Honeypot field populated, discarding submission")
                return self._respond(200, True)

            invalid_field = record.validate()
            if invalid_field:
                logger.info(f"Rejected lead submission: invalid {invalid_field}")
                return self._respond(400, False)

            await self._send(self.build_subject(record), self.build_email_body(record))
            logger.info("Lead email sent")
            return self._respond(200, True)

        except EmailClientError as e:
            logger.error(
                f"Email provider error: {e.error.message} {e.error.details}",
                extra={"error_code": e.error.code, "error_details": e.error.details}
            )
            return self._respond(500, False)
        except Exception as e:
            logger.error(f"Lead error: {e}", exc_info=True)
            return self.server_error()

    def build_subject(self, record: EnquiryRecord) -> str:
        return self.SUBJECT_TEMPLATE.format(business_name=record.business_name)

    @staticmethod
    def build_email_body(record: EnquiryRecord) -> str:
        """Render the fixed-format plain-text body, using a dash for empty optional fields."""
        return EMAIL_BODY_TEMPLATE.format(
            business_name=record.business_name,
            website=record.website or PLACEHOLDER,
            email=record.email,
            phone=record.phone or PLACEHOLDER,
            message=record.message or PLACEHOLDER,
        )

    async def _send(self, subject: str, text: str) -> None:
        if self.email_client is None:
            raise EmailClientError(EmailError(
                code="NOT_CONFIGURED",
                message="Email API credential is not configured",
                details={}
            ))
        await self.email_client.send(subject, text)

    @classmethod
    def server_error(cls) -> RelayResult:
        return cls._respond(500, False)

    @staticmethod
    def _respond(status_code: int, success: bool) -> RelayResult:
        return RelayResult(status_code=status_code, body=LeadResponse(success=success).model_dump())
