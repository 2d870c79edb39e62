"""Shared test fixtures and helpers."""

import json
from datetime import date
from typing import Any, Optional, Union

import httpx
import pytest

from src.app.landing import LandingPage
from src.schemas.stay_schema import DiscountPolicy
from src.state.local_store import LocalStore
from src.tools.api_client import LandingApiClient
from src.ui.overlay import ModalCoordinator

PAGE_URL = "https://vasilevo.example/"
API_BASE = "http://api.test"

RATES = {"standard": 4200, "comfort": 5600, "lux": 7900}

Reply = Union[dict, httpx.Response, Exception]


class FakeBackend:
    """Programmable stand-in for the landing backend behind httpx.MockTransport.

    Queue replies per endpoint; each reply is a JSON dict (sent with 200),
    a ready httpx.Response, or an exception raised by the transport.
    """

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.chat_replies: list[Reply] = []
        self.lead_replies: list[Reply] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content or b"{}")
        self.requests.append((path, body))

        if path == "/api/chat":
            queue, default = self.chat_replies, {"ok": True, "answer": "Ответ"}
        else:
            queue, default = self.lead_replies, {"ok": True}
        reply = queue.pop(0) if queue else default

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    def client(self) -> LandingApiClient:
        return LandingApiClient(API_BASE, transport=httpx.MockTransport(self.handler))

    def bodies(self, path: str) -> list[dict[str, Any]]:
        return [body for p, body in self.requests if p == path]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def policy():
    return DiscountPolicy(percent=10, valid_until=date(2026, 5, 31))


@pytest.fixture
def memory_store():
    return LocalStore()


@pytest.fixture
def coordinator():
    return ModalCoordinator()


@pytest.fixture
def page(backend, memory_store, policy):
    return LandingPage(PAGE_URL, store=memory_store, client=backend.client(), policy=policy)


def quote_form(
    checkin: str = "2026-05-20",
    days: str = "3",
    room: str = "lux",
    adults: str = "2",
    children: str = "1",
    consent: Optional[str] = "on",
    **overrides: str,
) -> dict[str, Any]:
    """Helper to build hero form values the way a browser submits them."""
    data: dict[str, Any] = {
        "name": "Анна",
        "phone": "+7 900 123-45-67",
        "checkin": checkin,
        "days": days,
        "roomType": room,
        "adults": adults,
        "children": children,
    }
    if consent is not None:
        data["consent"] = consent
    data.update(overrides)
    return data


def contact_form(**overrides: str) -> dict[str, Any]:
    """Helper to build booking/contacts form values."""
    data: dict[str, Any] = {
        "name": "Иван",
        "phone": "+7 900 000-00-00",
        "comment": "Хотим в июне",
        "consent": "on",
    }
    data.update(overrides)
    return data
