"""
Console shell for the landing widgets.

Drives the same LandingPage commands a browser bridge would, using typed
commands instead of clicks. The quote scenario runs fully offline; chat and
lead commands talk to the configured backend.

Usage:
    python console_demo.py
    python console_demo.py --scenario quote
    python console_demo.py --page-url http://localhost/ --scenario chat
"""

import argparse
import asyncio
import shlex
from typing import Any

from src.app.landing import CHAT_LEAD, CHAT_PANEL, LandingPage
from src.config import settings
from src.forms.handlers import FormOutcome
from src.pricing.formatter import discount_line

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

HELP = """Commands:
  quote name=.. phone=.. checkin=YYYY-MM-DD days=N [room=standard|comfort|lux] [adults=N] [children=N] consent=on
  manager                      prepare the current quote for a manager
  book [title]                 open the booking modal (no title: conditions tab)
  booking name=.. phone=.. [comment=..] consent=on
  contacts name=.. phone=.. [comment=..] consent=on
  chat <message>               send a chat message
  lead name=.. phone=.. consent=on
  cookies accept|reject
  guests +adults | -children ...
  faq N                        open/close FAQ answer N
  esc | outside | state | help | quit"""


def _parse_fields(args: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep:
            fields[key] = value
    if "room" in fields:
        fields["roomType"] = fields.pop("room")
    return fields


class ConsoleSession:
    """Reads typed commands and renders the page state after each one."""

    def __init__(self, page_url: str) -> None:
        self.page = LandingPage(page_url)

    def say(self, text: str, color: str = GREEN) -> None:
        print(f"{color}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _run(self, command_name: str, /, **kwargs: Any) -> Any:
        return asyncio.run(self.page.dispatch(command_name, **kwargs))

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "quote": [
            "cookies accept",
            "guests +adults",
            "guests +children",
            "quote name=Анна phone=+79000000000 checkin=2026-05-31 days=3 room=lux consent=on",
            "manager",
            "esc",
            "quote name=Анна phone=+79000000000 checkin=2026-06-01 days=3 room=lux consent=on",
            "state",
        ],
        "chat": [
            "chat Здравствуйте! Есть свободные номера на июнь?",
            "chat Хочу люкс на двоих",
            "state",
        ],
    }

    MAX_INPUT_LENGTH = 500

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.brand.name} - {title}{RESET}")
        print(f"{BOLD}  Page: {self.page.page_url}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        if self.page.cookie_banner_visible:
            self.system_log("Cookie banner shown (cookies accept|reject)")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}> {RESET}{step}")
            self._process_input(step)

    def run(self) -> None:
        self._banner("Console shell (type 'help')")
        while True:
            user_input = input(f"\n{BLUE}> {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.say("Слишком длинная команда.", RED)
                continue
            self._process_input(user_input)

    def _show_outcome(self, outcome: FormOutcome) -> None:
        if outcome.ok:
            if outcome.message:
                self.say(outcome.message)
            return
        target = f"[{outcome.field}] " if outcome.field else ""
        self.say(f"{target}{outcome.message or 'Нечего отправлять.'}", RED)

    def _show_quote(self) -> None:
        draft = self.page.current_lead
        if draft is None:
            return
        self.say(draft.lead_text, YELLOW)
        self.system_log(discount_line(draft.quote))

    def _process_input(self, text: str) -> None:
        try:
            parts = shlex.split(text)
        except ValueError as exc:
            self.say(f"Не удалось разобрать команду: {exc}", RED)
            return
        name, args = parts[0].lower(), parts[1:]

        if name == "help":
            print(HELP)
        elif name == "quote":
            outcome = self._run("submit_quote_form", data=_parse_fields(args))
            self._show_outcome(outcome)
            if outcome.ok:
                self._show_quote()
        elif name == "manager":
            self._show_outcome(self._run("send_to_manager"))
        elif name == "book":
            if args:
                self._run("open_booking_room", title=" ".join(args))
            else:
                self._run("open_booking_conditions")
            self.system_log(f"Offer: {self.page.booking_values['offer']}")
        elif name == "booking":
            self._show_outcome(self._run("submit_booking_form", data=_parse_fields(args)))
        elif name == "contacts":
            self._show_outcome(self._run("submit_contacts_form", data=_parse_fields(args)))
        elif name == "chat":
            self._chat(" ".join(args))
        elif name == "lead":
            fields = _parse_fields(args)
            outcome = self._run(
                "submit_chat_lead",
                name=fields.get("name", ""),
                phone=fields.get("phone", ""),
                consent=fields.get("consent", "") == "on",
            )
            self.say(
                self.page.chat.transcript[-1].text if outcome.ok else outcome.error,
                GREEN if outcome.ok else RED,
            )
        elif name == "cookies" and args and args[0] in ("accept", "reject"):
            self._run(f"{args[0]}_cookies")
            self.system_log("Cookie decision stored")
        elif name == "guests":
            for arg in args:
                sign, kind = arg[:1], arg[1:]
                command = "guest_plus" if sign == "+" else "guest_minus"
                try:
                    self.system_log(f"Guests: {self._run(command, kind=kind)}")
                except ValueError as exc:
                    self.say(str(exc), RED)
        elif name == "faq" and args and args[0].isdigit():
            state = "open" if self._run("toggle_faq", index=int(args[0])) else "closed"
            self.system_log(f"FAQ {args[0]}: {state}")
        elif name == "esc":
            self.system_log(f"Closed: {self._run('press_escape')}")
        elif name == "outside":
            self.system_log(f"Closed: {self._run('click_outside')}")
        elif name == "state":
            self._state()
        else:
            self.say("Неизвестная команда, наберите 'help'.", RED)

    def _chat(self, message: str) -> None:
        if not self.page.overlays.is_open(CHAT_PANEL):
            self._run("toggle_chat")
            greeting = self.page.chat.transcript
            if greeting:
                self.say(f"[Ассистент] {greeting[-1].text}")
        reply = self._run("send_chat", text=message)
        if reply is None:
            return
        self.say(f"[Ассистент] {reply.text}", GREEN if reply.ok else RED)
        if self.page.overlays.is_open(CHAT_LEAD):
            self.system_log("Lead sub-panel opened: lead name=.. phone=.. consent=on")

    def _state(self) -> None:
        overlays = self.page.overlays
        self.system_log(f"Open overlays: {overlays.open_overlays() or 'none'}")
        self.system_log(f"Scroll locked: {overlays.scroll_locked}")
        self.system_log(f"Chat session: {self.page.chat.session_id}")
        self.system_log(f"Chat history entries: {len(self.page.chat.history)}")
        self._show_quote_summary()

    def _show_quote_summary(self) -> None:
        view = self.page.quote_view()
        if view is None:
            return
        for key, value in view.items():
            if value is not None:
                self.system_log(f"{key}: {value}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Landing console shell")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--page-url",
        default="http://localhost/",
        help="Page URL the widgets run on; its host selects the API base",
    )
    args = parser.parse_args()

    session = ConsoleSession(args.page_url)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
