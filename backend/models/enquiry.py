"""Enquiry (contact form) data models."""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def _clean(value: Any) -> str:
    """Trim a submitted field, treating absent values as empty."""
    if value is None:
        return ""
    return str(value).strip()


def _honeypot_value(value: Any) -> str:
    """Untrimmed trap value; falsy non-strings (None, False, 0) count as empty."""
    if isinstance(value, str):
        return value
    return str(value) if value else ""


def normalize_website(website: str) -> str:
    """Prefix a bare domain with https:// (empty stays empty)."""
    if website and not SCHEME_PATTERN.match(website):
        return "https://" + website
    return website


@dataclass
class EnquiryRecord:
    """
    A contact-form submission, normalized for the lead email.

    Attributes:
        business_name: Required, non-empty after trimming
        email: Required, must look like local@domain.tld
        website: Optional, scheme added when missing
        phone: Optional
        message: Optional
        honeypot: Anti-automation trap; real visitors leave it empty
    """
    business_name: str
    email: str
    website: str = ""
    phone: str = ""
    message: str = ""
    honeypot: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "EnquiryRecord":
        """Build a record from a raw JSON body, trimming and defaulting fields."""
        data: Dict[str, Any] = payload if isinstance(payload, dict) else {}
        honeypot = data.get("honeypot")
        return cls(
            business_name=_clean(data.get("businessName")),
            email=_clean(data.get("email")),
            website=normalize_website(_clean(data.get("website"))),
            phone=_clean(data.get("phone")),
            message=_clean(data.get("message")),
            honeypot=_honeypot_value(honeypot),
        )

    @property
    def has_honeypot(self) -> bool:
        return self.honeypot != ""

    def validate(self) -> Optional[str]:
        """Return the name of the first invalid field, or None when valid."""
        if not self.business_name:
            return "businessName"
        if not self.email or not EMAIL_PATTERN.match(self.email):
            return "email"
        return None
