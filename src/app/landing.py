"""
Landing page controller: one named command per visitor action.

A UI adapter (browser bridge, console shell, tests) translates raw events
into ``await page.dispatch("command_name", **kwargs)``. Commands are
registered in a module-level table, the same way the rest of the code
resolves handlers by name instead of wiring callbacks directly.

Usage:
    page = LandingPage("https://vasilevo.example/")
    outcome = await page.dispatch("submit_quote_form", data=form_values)
    reply = await page.dispatch("send_chat", text="Сколько стоит люкс?")
"""

import inspect
import logging
from typing import Any, Callable, Optional

from src.chat.session import ChatReply, ChatSession, LeadPanelOutcome
from src.config import settings
from src.forms.handlers import FormOutcome, LeadFormSubmitter, build_quote_lead
from src.forms.validation import FormValidationError
from src.pricing.formatter import quote_rows
from src.prompts import messages
from src.schemas.stay_schema import DiscountPolicy
from src.state.local_store import (
    CookieConsent,
    CurrentLeadHolder,
    LeadDraft,
    LocalStore,
    cookie_banner_visible,
    get_or_create_session_id,
    set_cookie_consent,
)
from src.tools.api_client import LandingApiClient
from src.ui.overlay import ModalCoordinator, OverlayFamily
from src.ui.widgets import GuestStepper
from src.utils import form_text

logger = logging.getLogger(__name__)

MENU = "mobileMenu"
QUOTE_MODAL = "calcModal"
BOOKING_MODAL = "bookingModal"
CHAT_PANEL = "aiChatPanel"
CHAT_LEAD = "aiChatLead"
GUESTS_DROPDOWN = "guests"
ROOM_SELECT = "roomType"
FAQ_ITEM = "faq-{index}"

_COMMANDS: dict[str, Callable[..., Any]] = {}


class UnknownCommandError(KeyError):
    """Raised when dispatching a command name that was never registered."""


def command(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register a LandingPage method under a command name."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        _COMMANDS[name] = func
        return func

    return decorator


def get_registered_commands() -> list[str]:
    """Return names of all registered commands."""
    return list(_COMMANDS.keys())


class LandingPage:
    """Owns every widget's state for one page load."""

    def __init__(
        self,
        page_url: str,
        store: Optional[LocalStore] = None,
        client: Optional[LandingApiClient] = None,
        policy: Optional[DiscountPolicy] = None,
    ) -> None:
        self.page_url = page_url
        self.store = store if store is not None else LocalStore(settings.storage.state_path)
        self.client = client if client is not None else LandingApiClient.for_page(page_url)
        self.policy = policy

        self.overlays = ModalCoordinator()
        self.overlays.register(MENU, OverlayFamily.MENU)
        self.overlays.register(QUOTE_MODAL, OverlayFamily.QUOTE_MODAL)
        self.overlays.register(BOOKING_MODAL, OverlayFamily.BOOKING_MODAL)
        self.overlays.register(CHAT_PANEL, OverlayFamily.CHAT_PANEL)
        self.overlays.register(CHAT_LEAD, OverlayFamily.CHAT_LEAD)
        self.overlays.register(GUESTS_DROPDOWN, OverlayFamily.GUESTS)
        self.overlays.register(ROOM_SELECT, OverlayFamily.SELECT)

        self.leads = CurrentLeadHolder()
        self.guests = GuestStepper()
        self.forms = LeadFormSubmitter(self.client, page_url)
        self.chat = ChatSession(get_or_create_session_id(self.store), self.client, page_url)
        self.booking_values: dict[str, str] = {"offer": "", "comment": ""}
        self.quote_success: Optional[str] = None

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    async def dispatch(self, command_name: str, /, **kwargs: Any) -> Any:
        """Run a registered command; sync and async commands are both awaited uniformly.

        ``command_name`` is positional-only so commands may take a ``name`` keyword.
        """
        if command_name not in _COMMANDS:
            raise UnknownCommandError(
                f"Command '{command_name}' not registered. Available: {get_registered_commands()}"
            )
        logger.debug("Dispatching command: %s", command_name)
        result = _COMMANDS[command_name](self, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def cookie_banner_visible(self) -> bool:
        return cookie_banner_visible(self.store)

    @property
    def current_lead(self) -> Optional[LeadDraft]:
        return self.leads.current

    def quote_view(self) -> Optional[dict[str, Optional[str]]]:
        draft = self.leads.current
        if draft is None:
            return None
        return quote_rows(draft.stay, draft.quote)

    # ------------------------------------------------------------------ #
    # Menu, cookie banner, generic keys
    # ------------------------------------------------------------------ #

    @command("toggle_menu")
    def toggle_menu(self) -> bool:
        return self.overlays.toggle(MENU)

    @command("close_menu")
    def close_menu(self) -> None:
        self.overlays.close(MENU)

    @command("accept_cookies")
    def accept_cookies(self) -> CookieConsent:
        return set_cookie_consent(self.store, CookieConsent.ACCEPTED)

    @command("reject_cookies")
    def reject_cookies(self) -> CookieConsent:
        return set_cookie_consent(self.store, CookieConsent.REJECTED)

    @command("press_escape")
    def press_escape(self) -> list[str]:
        closed = self.overlays.press_escape()
        if CHAT_LEAD in closed:
            self.chat.dismiss_lead_prompt()
        return closed

    @command("click_outside")
    def click_outside(self) -> list[str]:
        return self.overlays.click_outside()

    @command("toggle_faq")
    def toggle_faq(self, index: int) -> bool:
        """Open or close one FAQ answer; opening it collapses the others."""
        overlay_id = FAQ_ITEM.format(index=index)
        if not self.overlays.is_registered(overlay_id):
            self.overlays.register(overlay_id, OverlayFamily.FAQ)
        return self.overlays.toggle(overlay_id)

    # ------------------------------------------------------------------ #
    # Guests dropdown
    # ------------------------------------------------------------------ #

    @command("toggle_guests")
    def toggle_guests(self) -> bool:
        return self.overlays.toggle(GUESTS_DROPDOWN)

    @command("guest_plus")
    def guest_plus(self, kind: str) -> str:
        self.guests.increment(kind)
        return self.guests.display_value

    @command("guest_minus")
    def guest_minus(self, kind: str) -> str:
        self.guests.decrement(kind)
        return self.guests.display_value

    @command("guests_done")
    def guests_done(self) -> None:
        self.overlays.close(GUESTS_DROPDOWN)

    # ------------------------------------------------------------------ #
    # Quote modal
    # ------------------------------------------------------------------ #

    @command("submit_quote_form")
    def submit_quote_form(self, data: dict[str, Any]) -> FormOutcome:
        values = {**self.guests.as_form_values(), **data}
        try:
            draft = build_quote_lead(values, self.policy)
        except FormValidationError as exc:
            return FormOutcome.invalid(exc)
        self.leads.replace(draft)
        self.quote_success = None
        self.overlays.open(QUOTE_MODAL)
        logger.info("Quote shown: total=%d", draft.quote.total_amount)
        return FormOutcome(ok=True)

    @command("send_to_manager")
    def send_to_manager(self) -> FormOutcome:
        if self.leads.prepare_for_manager() is None:
            return FormOutcome(ok=False)
        self.quote_success = messages.MANAGER_LEAD_PREPARED
        return FormOutcome(ok=True, message=messages.MANAGER_LEAD_PREPARED)

    @command("close_quote_modal")
    def close_quote_modal(self) -> None:
        self.overlays.close(QUOTE_MODAL)

    # ------------------------------------------------------------------ #
    # Booking modal and contacts form
    # ------------------------------------------------------------------ #

    def _open_booking(self, context: str) -> None:
        self.booking_values["offer"] = context
        if context and not self.booking_values.get("comment", "").strip():
            self.booking_values["comment"] = context
        self.overlays.open(BOOKING_MODAL)

    @command("open_booking_conditions")
    def open_booking_conditions(self) -> None:
        self._open_booking(messages.BOOKING_CONTEXT_CONDITIONS)

    @command("open_booking_room")
    def open_booking_room(self, title: str = "") -> None:
        title = form_text(title)
        context = (
            messages.BOOKING_CONTEXT_TEMPLATE.format(title=title)
            if title else messages.BOOKING_CONTEXT_ROOM
        )
        self._open_booking(context)

    @command("close_booking_modal")
    def close_booking_modal(self) -> None:
        self.overlays.close(BOOKING_MODAL)

    @command("submit_booking_form")
    async def submit_booking_form(self, data: dict[str, Any]) -> FormOutcome:
        values = {**self.booking_values, **data}
        outcome = await self.forms.submit_booking(values)
        if outcome.ok:
            self.overlays.close(BOOKING_MODAL)
        return outcome

    @command("submit_contacts_form")
    async def submit_contacts_form(self, data: dict[str, Any]) -> FormOutcome:
        return await self.forms.submit_contacts(data)

    # ------------------------------------------------------------------ #
    # Chat widget
    # ------------------------------------------------------------------ #

    @command("toggle_chat")
    def toggle_chat(self) -> bool:
        if self.overlays.is_open(CHAT_PANEL):
            self.close_chat()
            return False
        self.overlays.open(CHAT_PANEL)
        self.chat.greet()
        return True

    @command("close_chat")
    def close_chat(self) -> None:
        self.overlays.close(CHAT_PANEL)
        self.overlays.close(CHAT_LEAD)
        self.chat.dismiss_lead_prompt()

    @command("send_chat")
    async def send_chat(self, text: str) -> Optional[ChatReply]:
        reply = await self.chat.send_message(text)
        if reply is not None and reply.lead_prompt:
            self.overlays.open(CHAT_LEAD)
        return reply

    @command("submit_chat_lead")
    async def submit_chat_lead(self, name: str, phone: str, consent: bool) -> LeadPanelOutcome:
        outcome = await self.chat.submit_lead(name, phone, consent)
        if outcome.ok:
            self.overlays.close(CHAT_LEAD)
        return outcome

    @command("cancel_chat_lead")
    def cancel_chat_lead(self) -> None:
        self.chat.dismiss_lead_prompt()
        self.overlays.close(CHAT_LEAD)
