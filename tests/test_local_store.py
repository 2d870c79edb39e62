"""Tests for persisted local state and the current-lead holder."""

import json
from datetime import date

import pytest

from src.config import settings
from src.pricing.engine import compute_quote
from src.schemas.stay_schema import DiscountPolicy, StayRequest
from src.state.local_store import (
    CookieConsent,
    CurrentLeadHolder,
    LeadDraft,
    LocalStore,
    cookie_banner_visible,
    get_cookie_consent,
    get_or_create_session_id,
    new_session_id,
    set_cookie_consent,
)
from tests.conftest import RATES


class TestLocalStore:
    def test_memory_store(self, memory_store):
        memory_store.set("k", "v")
        assert memory_store.get("k") == "v"
        memory_store.remove("k")
        assert memory_store.get("k") is None

    def test_persists_to_file(self, tmp_path):
        path = tmp_path / "state.json"
        LocalStore(path).set("k", "значение")

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "значение"}
        assert LocalStore(path).get("k") == "значение"

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        assert LocalStore(path).get("k") is None

    def test_non_object_file_starts_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert LocalStore(path).get("k") is None


class TestSessionId:
    def test_created_once_and_reused(self, memory_store):
        first = get_or_create_session_id(memory_store)
        assert get_or_create_session_id(memory_store) == first
        assert memory_store.get(settings.storage.session_key) == first

    def test_survives_reload(self, tmp_path):
        path = tmp_path / "state.json"
        first = get_or_create_session_id(LocalStore(path))
        assert get_or_create_session_id(LocalStore(path)) == first

    def test_ids_are_unique(self):
        assert new_session_id() != new_session_id()

    def test_id_shape(self):
        millis, token = new_session_id().split("-")
        assert millis.isdigit()
        assert len(token) == 12


class TestCookieConsent:
    def test_banner_visible_without_decision(self, memory_store):
        assert cookie_banner_visible(memory_store)
        assert get_cookie_consent(memory_store) is None

    @pytest.mark.parametrize("decision", [CookieConsent.ACCEPTED, "rejected"])
    def test_decision_hides_banner(self, memory_store, decision):
        set_cookie_consent(memory_store, decision)
        assert not cookie_banner_visible(memory_store)

    def test_decision_persisted_as_plain_string(self, memory_store):
        set_cookie_consent(memory_store, CookieConsent.ACCEPTED)
        assert memory_store.get(settings.storage.consent_key) == "accepted"

    def test_invalid_decision_rejected(self, memory_store):
        with pytest.raises(ValueError):
            set_cookie_consent(memory_store, "maybe")
        assert cookie_banner_visible(memory_store)

    def test_garbage_stored_value_shows_banner(self, memory_store):
        memory_store.set(settings.storage.consent_key, "garbage")
        assert cookie_banner_visible(memory_store)


def _draft(nights=3) -> LeadDraft:
    stay = StayRequest(room_type="lux", nights=nights, checkin=date(2026, 5, 20))
    quote = compute_quote(stay, DiscountPolicy(percent=10, valid_until=date(2026, 5, 31)), rates=RATES)
    return LeadDraft(stay=stay, quote=quote, lead_text=f"{nights} nights")


class TestCurrentLeadHolder:
    def test_empty_holder(self):
        holder = CurrentLeadHolder()
        assert holder.current is None
        assert holder.prepare_for_manager() is None

    def test_replace_keeps_latest(self):
        holder = CurrentLeadHolder()
        holder.replace(_draft(3))
        holder.replace(_draft(5))
        assert holder.current.lead_text == "5 nights"

    def test_prepare_stamps_time(self):
        holder = CurrentLeadHolder()
        holder.replace(_draft())
        prepared = holder.prepare_for_manager()
        assert prepared is holder.current
        assert prepared.created_at is not None

    def test_clear(self):
        holder = CurrentLeadHolder()
        holder.replace(_draft())
        holder.clear()
        assert holder.current is None
