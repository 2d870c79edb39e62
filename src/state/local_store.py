"""
Process-wide local state: the persisted chat session id, the cookie
consent decision and the "current lead" prepared from the quote modal.

The store plays the role of the browser's local storage. It is created
once at startup and read or written only through the accessors below.

Usage:
    store = LocalStore(settings.storage.state_path)
    session_id = get_or_create_session_id(store)
    if cookie_banner_visible(store):
        set_cookie_consent(store, CookieConsent.ACCEPTED)
"""

import json
import logging
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from src.config import settings
from src.schemas.stay_schema import Quote, StayRequest

logger = logging.getLogger(__name__)


class CookieConsent(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LocalStore:
    """String key/value store persisted as a JSON object, or kept in memory when ``path`` is None."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path is not None else None
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Local state at %s unreadable, starting empty: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Local state at %s is not an object, starting empty", self._path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._save()


def new_session_id() -> str:
    """Opaque id: epoch milliseconds plus random hex."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def get_or_create_session_id(store: LocalStore) -> str:
    """Return the persisted chat session id, creating it on first use."""
    key = settings.storage.session_key
    session_id = store.get(key)
    if not session_id:
        session_id = new_session_id()
        store.set(key, session_id)
        logger.info("New chat session id created: %s", session_id)
    return session_id


def get_cookie_consent(store: LocalStore) -> Optional[CookieConsent]:
    raw = store.get(settings.storage.consent_key)
    try:
        return CookieConsent(raw) if raw else None
    except ValueError:
        return None


def set_cookie_consent(store: LocalStore, decision: Union[CookieConsent, str]) -> CookieConsent:
    """Persist the visitor's decision; raises ValueError for anything but accepted/rejected."""
    consent = CookieConsent(decision)
    store.set(settings.storage.consent_key, consent.value)
    logger.info("Cookie consent recorded: %s", consent.value)
    return consent


def cookie_banner_visible(store: LocalStore) -> bool:
    """Once a decision is stored the banner never reappears."""
    return get_cookie_consent(store) is None


@dataclass
class LeadDraft:
    """The lead computed by the hero form and shown in the quote modal."""
    stay: StayRequest
    quote: Quote
    lead_text: str
    name: str = ""
    phone: str = ""
    created_at: Optional[datetime] = None


@dataclass
class CurrentLeadHolder:
    """Holds at most one LeadDraft; refilling the quote modal replaces it."""

    _current: Optional[LeadDraft] = field(default=None, repr=False)

    @property
    def current(self) -> Optional[LeadDraft]:
        return self._current

    def replace(self, draft: LeadDraft) -> None:
        self._current = draft

    def clear(self) -> None:
        self._current = None

    def prepare_for_manager(self) -> Optional[LeadDraft]:
        """Stamp the current lead for hand-off to a manager; None if nothing is held."""
        if self._current is None:
            return None
        self._current.created_at = datetime.now(timezone.utc)
        logger.info("Lead prepared for manager hand-off")
        return self._current
