from src.ui.overlay import (
    InvalidTransitionError,
    ModalCoordinator,
    OverlayFamily,
    OverlayState,
    OverlayTrigger,
)
from src.ui.widgets import GuestStepper

__all__ = [
    "ModalCoordinator",
    "OverlayFamily",
    "OverlayState",
    "OverlayTrigger",
    "InvalidTransitionError",
    "GuestStepper",
]
