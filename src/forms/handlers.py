"""
Submission handlers for the hero quote form and the lead forms.

Handlers never raise to the UI: validation problems, duplicate submits
and backend failures all come back as a FormOutcome carrying the text to
show inline.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from src.forms.guard import SubmissionGuard, SubmissionInProgressError
from src.forms.validation import FormValidationError, validate_contact_form, validate_quote_form
from src.pricing.engine import compute_quote, default_discount_policy
from src.pricing.formatter import format_lead_text
from src.prompts import messages
from src.schemas.lead_schema import LeadPayload, LeadSource
from src.schemas.stay_schema import DiscountPolicy
from src.state.local_store import LeadDraft
from src.tools.api_client import LandingApiClient, LandingApiError

logger = logging.getLogger(__name__)

BOOKING_FORM_ID = "formBooking"
CONTACTS_FORM_ID = "formContacts"


@dataclass
class FormOutcome:
    """Result of one submit.

    ``field`` points the error at a control ("consent" has its own error
    box); None means the form-level error box or a success message.
    """
    ok: bool
    message: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def invalid(cls, exc: FormValidationError) -> "FormOutcome":
        return cls(ok=False, message=exc.message, field=exc.field)


def build_quote_lead(
    data: Mapping[str, Any], policy: Optional[DiscountPolicy] = None
) -> LeadDraft:
    """Validate the hero form and price the stay.

    Raises:
        FormValidationError: For the first missing or invalid field.
    """
    form = validate_quote_form(data)
    quote = compute_quote(form.stay, policy or default_discount_policy())
    lead_text = format_lead_text(form.stay, quote, name=form.name, phone=form.phone)
    return LeadDraft(
        stay=form.stay,
        quote=quote,
        lead_text=lead_text,
        name=form.name,
        phone=form.phone,
    )


class LeadFormSubmitter:
    """Sends the booking modal and contacts forms to ``/api/lead``."""

    def __init__(self, client: LandingApiClient, page_url: str) -> None:
        self._client = client
        self.page_url = page_url
        self._guard = SubmissionGuard()

    def is_busy(self, form_id: str) -> bool:
        return self._guard.is_busy(form_id)

    async def _submit(
        self, data: Mapping[str, Any], source: LeadSource, form_id: str, with_offer: bool
    ) -> FormOutcome:
        try:
            form = validate_contact_form(data)
        except FormValidationError as exc:
            return FormOutcome.invalid(exc)

        payload = LeadPayload(
            source=source,
            form_id=form_id,
            page_url=self.page_url,
            name=form.name,
            phone=form.phone,
            comment=form.comment,
            offer=(form.offer or "") if with_offer else None,
            consent=form.consent,
        )
        try:
            with self._guard.hold(form_id):
                await self._client.submit_lead(payload)
        except SubmissionInProgressError:
            return FormOutcome(ok=False, message=messages.SUBMISSION_IN_PROGRESS)
        except LandingApiError as exc:
            logger.warning("Lead form %s failed: %s", form_id, exc)
            return FormOutcome(ok=False, message=messages.LEAD_SEND_FAILED)
        return FormOutcome(ok=True, message=messages.LEAD_SENT)

    async def submit_booking(self, data: Mapping[str, Any]) -> FormOutcome:
        return await self._submit(data, LeadSource.BOOKING_MODAL, BOOKING_FORM_ID, with_offer=True)

    async def submit_contacts(self, data: Mapping[str, Any]) -> FormOutcome:
        return await self._submit(data, LeadSource.CONTACTS_FORM, CONTACTS_FORM_ID, with_offer=False)
