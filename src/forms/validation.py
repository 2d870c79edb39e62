"""
Validation of the landing forms.

Every validator reads a raw mapping of submitted values (strings as a
browser would send them), checks fields in display order and raises
FormValidationError for the first problem found. Nothing here touches
the network.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from src.prompts import messages
from src.schemas.stay_schema import StayRequest
from src.utils import form_checked, form_int, form_text

logger = logging.getLogger(__name__)


class FormValidationError(Exception):
    """A required field is missing or consent was not given.

    ``field`` names the control the inline error belongs to
    ("name", "phone", "checkin", "days", "consent" or "contact").
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass(frozen=True)
class ContactForm:
    """A validated booking or contacts form."""
    name: str
    phone: str
    comment: str = ""
    offer: Optional[str] = None
    consent: bool = True


@dataclass(frozen=True)
class QuoteForm:
    """A validated hero form: contact details plus the stay to price."""
    name: str
    phone: str
    stay: StayRequest
    consent: bool = True


def _parse_checkin(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    text = form_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable check-in date: %r", text)
        return None


def _require_contact(data: Mapping[str, Any]) -> tuple[str, str]:
    name = form_text(data.get("name"))
    phone = form_text(data.get("phone"))
    if not name:
        raise FormValidationError("name", messages.NAME_REQUIRED)
    if not phone:
        raise FormValidationError("phone", messages.PHONE_REQUIRED)
    return name, phone


def _require_consent(data: Mapping[str, Any]) -> None:
    if not form_checked(data.get("consent")):
        raise FormValidationError("consent", messages.CONSENT_REQUIRED)


def validate_contact_form(data: Mapping[str, Any]) -> ContactForm:
    """Booking modal and contacts section: name, phone, consent."""
    name, phone = _require_contact(data)
    _require_consent(data)
    offer = form_text(data.get("offer")) if "offer" in data else None
    return ContactForm(
        name=name,
        phone=phone,
        comment=form_text(data.get("comment")),
        offer=offer,
    )


def validate_quote_form(data: Mapping[str, Any]) -> QuoteForm:
    """Hero form: name, phone, check-in date, nights >= 1, consent."""
    name, phone = _require_contact(data)

    checkin = _parse_checkin(data.get("checkin"))
    if checkin is None:
        raise FormValidationError("checkin", messages.CHECKIN_REQUIRED)

    days = form_int(data.get("days"), 0)
    if days < 1:
        raise FormValidationError("days", messages.DAYS_REQUIRED)

    _require_consent(data)

    stay = StayRequest(
        room_type=form_text(data.get("roomType")) or "standard",
        nights=days,
        adults=form_int(data.get("adults"), 1),
        children=form_int(data.get("children"), 0),
        checkin=checkin,
    )
    return QuoteForm(name=name, phone=phone, stay=stay)


def validate_chat_lead(name: Any, phone: Any, consent: Any) -> tuple[str, str]:
    """Chat sub-panel: both contact fields first, then consent."""
    clean_name = form_text(name)
    clean_phone = form_text(phone)
    if not clean_name or not clean_phone:
        raise FormValidationError("contact", messages.CHAT_LEAD_CONTACT_REQUIRED)
    if not form_checked(consent):
        raise FormValidationError("consent", messages.CHAT_LEAD_CONSENT_REQUIRED)
    return clean_name, clean_phone
