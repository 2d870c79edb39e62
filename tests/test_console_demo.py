"""Tests for the console shell command parsing."""

import pytest

from console_demo import ConsoleSession, _parse_fields
from src.app.landing import QUOTE_MODAL
from src.prompts import messages


@pytest.fixture
def console(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return ConsoleSession("http://localhost/")


class TestParseFields:
    def test_key_value_pairs(self):
        assert _parse_fields(["name=Анна", "phone=1", "junk"]) == {"name": "Анна", "phone": "1"}

    def test_room_alias(self):
        assert _parse_fields(["room=lux"]) == {"roomType": "lux"}


class TestConsoleCommands:
    def test_lead_command_with_name_field(self, console, capsys):
        console._process_input("lead name=Анна phone=+7900")

        out = capsys.readouterr().out
        assert messages.CHAT_LEAD_CONSENT_REQUIRED in out

    def test_quote_command_opens_modal(self, console, capsys):
        console._process_input(
            "quote name=Анна phone=+7900 checkin=2026-05-20 days=3 room=lux consent=on"
        )

        assert console.page.overlays.is_open(QUOTE_MODAL)
        assert "Итого:" in capsys.readouterr().out

    def test_unknown_guest_kind_reported(self, console, capsys):
        console._process_input("guests +pets")
        assert "Unknown guest kind" in capsys.readouterr().out
