"""
Landing backend client: the only network boundary of the widget.

Two JSON endpoints share one POST path:
    POST /api/lead  -> {ok, error?}
    POST /api/chat  -> {ok, answer?, error?}

A call succeeds only with a 2xx status *and* an explicit ``ok: true`` in
the body. Transport failures raise NetworkError, everything else raises
ServerRejected. There are no retries; the caller shows "try again" and the
visitor re-triggers the action.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from src.config import settings
from src.schemas.chat_schema import ChatMessage, ChatMeta, ChatRequest, ChatResponse
from src.schemas.lead_schema import LeadPayload, LeadResponse

logger = logging.getLogger(__name__)


class LandingApiError(Exception):
    """Base class for failed backend calls; ``str(err)`` is the user-facing detail."""


class NetworkError(LandingApiError):
    """The request never produced a usable response (transport failure, malformed body)."""


class ServerRejected(LandingApiError):
    """The backend answered with a non-2xx status or without ``ok: true``."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def resolve_api_base(hostname: Optional[str]) -> str:
    """Pick the local or production API root from the page host name."""
    if hostname and hostname.lower() in settings.api.local_hosts:
        return settings.api.local_base
    return settings.api.production_base


def _parse(model, body: dict[str, Any], path: str):
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise NetworkError(f"Malformed response from {path}") from exc


def api_base_for_page(page_url: str) -> str:
    return resolve_api_base(urlsplit(page_url).hostname)


class LandingApiClient:
    """Async JSON client for the lead and chat endpoints."""

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @classmethod
    def for_page(
        cls, page_url: str, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "LandingApiClient":
        return cls(api_base_for_page(page_url), transport=transport)

    async def _post_json(self, path: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        POST ``data`` as JSON and return the decoded body.

        Raises:
            NetworkError: Transport failure or a 2xx body that is not a JSON object.
            ServerRejected: Non-2xx status or a body without ``ok: true``.
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self._transport
            ) as client:
                resp = await client.post(path, json=data or {})
        except httpx.HTTPError as exc:
            logger.warning("POST %s failed: %s", path, exc)
            raise NetworkError(f"Network error: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            if resp.is_success:
                raise NetworkError(f"Malformed response from {path}")
            body = {}

        if not resp.is_success or body.get("ok") is not True:
            error = body.get("error")
            message = error if isinstance(error, str) and error else f"HTTP {resp.status_code}"
            logger.warning("POST %s rejected: %s", path, message)
            raise ServerRejected(message, status_code=resp.status_code)

        return body

    async def submit_lead(self, payload: LeadPayload) -> LeadResponse:
        """Send a lead; returns the parsed envelope or raises LandingApiError."""
        body = await self._post_json(settings.api.lead_path, payload.to_wire())
        logger.info("Lead submitted: source=%s form=%s", payload.source.value, payload.form_id)
        return _parse(LeadResponse, body, settings.api.lead_path)

    async def request_chat_answer(
        self,
        session_id: str,
        user_message: str,
        page_url: str,
        history: list[ChatMessage],
    ) -> ChatResponse:
        """Ask the answering service; ``history`` is the context before this message."""
        request = ChatRequest(
            session_id=session_id,
            user_message=user_message,
            page_url=page_url,
            meta=ChatMeta(history=list(history)),
        )
        body = await self._post_json(settings.api.chat_path, request.to_wire())
        return _parse(ChatResponse, body, settings.api.chat_path)
