"""Lead payloads sent to the backend and its response envelope."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LeadSource(str, Enum):
    BOOKING_MODAL = "booking_modal"
    CONTACTS_FORM = "contacts_form"
    CHAT_LEAD = "chat_lead"


class LeadPayload(BaseModel):
    """Outbound lead record for ``POST /api/lead``.

    Serialize with ``to_wire()``: keys are camelCase and ``consent`` stays
    local, it is checked before the payload is built and never sent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: LeadSource
    form_id: str = Field(alias="formId")
    page_url: str = Field(alias="pageUrl")
    name: str
    phone: str
    comment: str = ""
    offer: Optional[str] = None
    consent: bool = Field(default=False, exclude=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LeadResponse(BaseModel):
    """Backend envelope for lead submissions."""
    ok: bool = False
    error: Optional[str] = None
