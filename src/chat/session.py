"""
Chat session: bounded history, remote answers and contact capture.

Two pieces of state are kept apart on purpose:

* ``transcript`` is what the panel displays. The user line is appended
  as soon as it is sent, before the backend answers.
* ``history`` is the context sent back to the answering service. It only
  grows when an exchange succeeds, and keeps the most recent
  ``history_limit`` entries (12 pairs by default).

A failed request therefore leaves an unsaved user line and a fallback
line in the transcript while the history stays as it was.

Usage:
    session = ChatSession(session_id, client, page_url)
    reply = await session.send_message("Есть ли свободные люксы?")
    if reply.lead_prompt:
        outcome = await session.submit_lead("Анна", "+7 900 000-00-00", consent=True)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.chat.lead_trigger import should_offer_lead
from src.config import settings
from src.forms.guard import SubmissionGuard, SubmissionInProgressError
from src.forms.validation import FormValidationError, validate_chat_lead
from src.logging_context import set_session_id
from src.prompts import messages
from src.schemas.chat_schema import ChatMessage, ChatRole, TranscriptEntry
from src.schemas.lead_schema import LeadPayload, LeadSource
from src.tools.api_client import LandingApiClient, LandingApiError

logger = logging.getLogger(__name__)

CHAT_LEAD_FORM_ID = "aiChatLead"


@dataclass
class ChatReply:
    """What the panel shows after one send."""
    text: str
    ok: bool
    lead_prompt: bool = False


@dataclass
class LeadPanelOutcome:
    """Result of submitting the chat lead sub-panel."""
    ok: bool
    error: Optional[str] = None
    field: Optional[str] = None


class ChatSession:
    """Conversation state for one visitor within one page load."""

    def __init__(
        self,
        session_id: str,
        client: LandingApiClient,
        page_url: str,
        history_limit: Optional[int] = None,
    ) -> None:
        self.session_id = session_id
        self.page_url = page_url
        self._client = client
        if history_limit is None:
            history_limit = settings.chat.history_limit
        if history_limit < 2 or history_limit % 2:
            raise ValueError(f"history_limit must be an even number >= 2, got {history_limit}")
        self._history_limit = history_limit
        self._history: list[ChatMessage] = []
        self._transcript: list[TranscriptEntry] = []
        self._guard = SubmissionGuard()
        self.lead_prompt_pending = False
        set_session_id(session_id)

    @property
    def history(self) -> list[ChatMessage]:
        return list(self._history)

    @property
    def transcript(self) -> list[TranscriptEntry]:
        return list(self._transcript)

    def _show(self, role: ChatRole, text: str, saved: bool) -> TranscriptEntry:
        entry = TranscriptEntry(role=role, text=text, saved=saved)
        self._transcript.append(entry)
        return entry

    def _remember(self, user_text: str, answer: str) -> None:
        self._history.append(ChatMessage(role=ChatRole.USER, content=user_text))
        self._history.append(ChatMessage(role=ChatRole.ASSISTANT, content=answer))
        overflow = len(self._history) - self._history_limit
        if overflow > 0:
            del self._history[:overflow]

    def greet(self) -> Optional[str]:
        """Show the greeting when the panel opens on an empty conversation."""
        if self._history or self._transcript:
            return None
        self._show(ChatRole.ASSISTANT, messages.CHAT_GREETING, saved=False)
        return messages.CHAT_GREETING

    async def send_message(self, user_text: str) -> Optional[ChatReply]:
        """
        Send one visitor message and record the outcome.

        Returns:
            The reply shown in the panel, or None for a blank message.
        """
        text = (user_text or "").strip()
        if not text:
            return None

        set_session_id(self.session_id)
        user_entry = self._show(ChatRole.USER, text, saved=False)
        context = list(self._history)

        try:
            response = await self._client.request_chat_answer(
                session_id=self.session_id,
                user_message=text,
                page_url=self.page_url,
                history=context,
            )
        except LandingApiError as exc:
            logger.warning("Chat answer failed: %s", exc)
            self._show(ChatRole.ASSISTANT, messages.CHAT_FALLBACK, saved=False)
            return ChatReply(text=messages.CHAT_FALLBACK, ok=False)

        answer = response.answer or messages.CHAT_EMPTY_ANSWER
        user_entry.saved = True
        self._show(ChatRole.ASSISTANT, answer, saved=True)
        self._remember(text, answer)

        lead_prompt = should_offer_lead(answer)
        if lead_prompt:
            self.lead_prompt_pending = True
            logger.info("Answer asks for contacts, offering lead sub-panel")
        return ChatReply(text=answer, ok=True, lead_prompt=lead_prompt)

    def dismiss_lead_prompt(self) -> None:
        self.lead_prompt_pending = False

    async def submit_lead(self, name: str, phone: str, consent: bool) -> LeadPanelOutcome:
        """Validate and send the lead sub-panel; it stays open on any failure."""
        try:
            clean_name, clean_phone = validate_chat_lead(name, phone, consent)
        except FormValidationError as exc:
            return LeadPanelOutcome(ok=False, error=exc.message, field=exc.field)

        payload = LeadPayload(
            source=LeadSource.CHAT_LEAD,
            form_id=CHAT_LEAD_FORM_ID,
            page_url=self.page_url,
            name=clean_name,
            phone=clean_phone,
            comment=messages.CHAT_LEAD_COMMENT,
            offer="",
            consent=True,
        )
        try:
            with self._guard.hold(CHAT_LEAD_FORM_ID):
                await self._client.submit_lead(payload)
        except SubmissionInProgressError:
            return LeadPanelOutcome(ok=False, error=messages.SUBMISSION_IN_PROGRESS)
        except LandingApiError as exc:
            logger.warning("Chat lead submission failed: %s", exc)
            return LeadPanelOutcome(ok=False, error=messages.CHAT_LEAD_FAILED)

        self.lead_prompt_pending = False
        self._show(ChatRole.ASSISTANT, messages.CHAT_LEAD_CONFIRMED, saved=False)
        return LeadPanelOutcome(ok=True)
