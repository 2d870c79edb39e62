"""
Overlay state machines for menus, modals, dropdowns and the chat panel.

Each overlay is a two-state machine (closed/open) driven by explicit
triggers. Overlays are grouped into families; opening one overlay closes
every other open overlay of the same family. Different families are
independent, so the quote modal and the booking modal may both be open.

Usage:
    coordinator = ModalCoordinator()
    coordinator.register("calcModal", OverlayFamily.QUOTE_MODAL)
    coordinator.open("calcModal")
    assert coordinator.scroll_locked
    coordinator.press_escape()
    assert not coordinator.is_open("calcModal")
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class OverlayState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class OverlayTrigger(str, Enum):
    """Events that open or close an overlay."""
    ACTIVATE = "activate"
    CLOSE_CONTROL = "close_control"
    ESCAPE = "escape"
    OUTSIDE_CLICK = "outside_click"
    SIBLING_OPENED = "sibling_opened"


class OverlayFamily(str, Enum):
    MENU = "menu"
    QUOTE_MODAL = "quote_modal"
    BOOKING_MODAL = "booking_modal"
    CHAT_PANEL = "chat_panel"
    CHAT_LEAD = "chat_lead"
    SELECT = "select"
    GUESTS = "guests"
    FAQ = "faq"


# Families whose open state locks page scrolling.
SCROLL_LOCKING_FAMILIES = frozenset({
    OverlayFamily.MENU,
    OverlayFamily.QUOTE_MODAL,
    OverlayFamily.BOOKING_MODAL,
})

# Dropdown-style families, the only ones dismissed by a click elsewhere.
DROPDOWN_FAMILIES = frozenset({OverlayFamily.SELECT, OverlayFamily.GUESTS})

# Accordion items stay as they are when Escape is pressed.
ESCAPE_EXEMPT_FAMILIES = frozenset({OverlayFamily.FAQ})


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: OverlayState
    to_state: OverlayState
    trigger: OverlayTrigger
    dropdown_only: bool = False


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: OverlayState
    entered_at: datetime
    trigger: Optional[OverlayTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class UnknownOverlayError(KeyError):
    """Raised when an overlay id was never registered."""


class OverlayStateMachine:
    """Open/closed state of one overlay instance."""

    TRANSITIONS: list[Transition] = [
        Transition(OverlayState.CLOSED, OverlayState.OPEN, OverlayTrigger.ACTIVATE),
        Transition(OverlayState.OPEN, OverlayState.CLOSED, OverlayTrigger.ACTIVATE),
        Transition(OverlayState.OPEN, OverlayState.CLOSED, OverlayTrigger.CLOSE_CONTROL),
        Transition(OverlayState.OPEN, OverlayState.CLOSED, OverlayTrigger.ESCAPE),
        Transition(OverlayState.OPEN, OverlayState.CLOSED, OverlayTrigger.SIBLING_OPENED),
        Transition(OverlayState.OPEN, OverlayState.CLOSED, OverlayTrigger.OUTSIDE_CLICK,
                   dropdown_only=True),
    ]

    def __init__(self, overlay_id: str, family: OverlayFamily) -> None:
        self.overlay_id = overlay_id
        self.family = family
        self._current_state = OverlayState.CLOSED
        self._history: list[StateEntry] = [
            StateEntry(state=OverlayState.CLOSED, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> OverlayState:
        return self._current_state

    @property
    def is_open(self) -> bool:
        return self._current_state == OverlayState.OPEN

    @property
    def aria_hidden(self) -> bool:
        return not self.is_open

    def transition(self, trigger: OverlayTrigger) -> OverlayState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state != self._current_state or t.trigger != trigger:
                continue
            if t.dropdown_only and self.family not in DROPDOWN_FAMILIES:
                continue

            old_state = self._current_state
            self._current_state = t.to_state
            self._history.append(StateEntry(
                state=self._current_state,
                entered_at=datetime.now(timezone.utc),
                trigger=trigger,
            ))
            logger.debug(
                "Overlay %s: %s -> %s (trigger: %s)",
                self.overlay_id, old_state.value, self._current_state.value, trigger.value,
            )
            return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition for '{self.overlay_id}' from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[OverlayTrigger]:
        """Return all triggers valid from the current state."""
        return [
            t.trigger for t in self.TRANSITIONS
            if t.from_state == self._current_state
            and (not t.dropdown_only or self.family in DROPDOWN_FAMILIES)
        ]

    def get_state_trace(self) -> list[str]:
        return [entry.state.value for entry in self._history]


class ModalCoordinator:
    """
    Registry of overlays enforcing family exclusivity and page-level side effects.

    ``scroll_locked`` is derived: it holds while any open overlay belongs to a
    scroll-locking family, so closing one modal never unlocks the page under
    another one that is still open.
    """

    def __init__(self) -> None:
        self._overlays: dict[str, OverlayStateMachine] = {}

    def register(self, overlay_id: str, family: OverlayFamily) -> OverlayStateMachine:
        if overlay_id in self._overlays:
            raise ValueError(f"Overlay '{overlay_id}' already registered")
        machine = OverlayStateMachine(overlay_id, family)
        self._overlays[overlay_id] = machine
        return machine

    def is_registered(self, overlay_id: str) -> bool:
        return overlay_id in self._overlays

    def _get(self, overlay_id: str) -> OverlayStateMachine:
        try:
            return self._overlays[overlay_id]
        except KeyError:
            raise UnknownOverlayError(
                f"Overlay '{overlay_id}' not registered. Available: {list(self._overlays)}"
            ) from None

    def overlay(self, overlay_id: str) -> OverlayStateMachine:
        return self._get(overlay_id)

    def _siblings(self, machine: OverlayStateMachine) -> list[OverlayStateMachine]:
        return [
            m for m in self._overlays.values()
            if m.family == machine.family and m is not machine
        ]

    def open(self, overlay_id: str) -> None:
        """Open an overlay, first closing open siblings of its family. No-op if already open."""
        machine = self._get(overlay_id)
        if machine.is_open:
            return
        for sibling in self._siblings(machine):
            if sibling.is_open:
                sibling.transition(OverlayTrigger.SIBLING_OPENED)
        machine.transition(OverlayTrigger.ACTIVATE)
        logger.info("Overlay opened: %s", overlay_id)

    def close(self, overlay_id: str) -> None:
        """Close through the overlay's own close control. No-op if already closed."""
        machine = self._get(overlay_id)
        if machine.is_open:
            machine.transition(OverlayTrigger.CLOSE_CONTROL)
            logger.info("Overlay closed: %s", overlay_id)

    def toggle(self, overlay_id: str) -> bool:
        """Trigger activation on an open/close button; returns the new open state."""
        machine = self._get(overlay_id)
        if machine.is_open:
            self.close(overlay_id)
        else:
            self.open(overlay_id)
        return machine.is_open

    def press_escape(self) -> list[str]:
        """Close every open overlay except accordion items; returns the ids that were closed."""
        closed = []
        for machine in self._overlays.values():
            if machine.is_open and machine.family not in ESCAPE_EXEMPT_FAMILIES:
                machine.transition(OverlayTrigger.ESCAPE)
                closed.append(machine.overlay_id)
        return closed

    def click_outside(self) -> list[str]:
        """Close open dropdown-style overlays; other families ignore outside clicks."""
        closed = []
        for machine in self._overlays.values():
            if machine.is_open and machine.family in DROPDOWN_FAMILIES:
                machine.transition(OverlayTrigger.OUTSIDE_CLICK)
                closed.append(machine.overlay_id)
        return closed

    def is_open(self, overlay_id: str) -> bool:
        return self._get(overlay_id).is_open

    def aria_hidden(self, overlay_id: str) -> bool:
        return self._get(overlay_id).aria_hidden

    def open_overlays(self) -> list[str]:
        return [m.overlay_id for m in self._overlays.values() if m.is_open]

    @property
    def scroll_locked(self) -> bool:
        return any(
            m.is_open and m.family in SCROLL_LOCKING_FAMILIES
            for m in self._overlays.values()
        )
