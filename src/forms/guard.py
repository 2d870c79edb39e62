"""Per-form guard against a second submit while the first is still in flight."""

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class SubmissionInProgressError(Exception):
    """Raised when a form id already has a request in flight."""


class SubmissionGuard:
    def __init__(self) -> None:
        self._in_flight: set[str] = set()

    def is_busy(self, form_id: str) -> bool:
        return form_id in self._in_flight

    @contextmanager
    def hold(self, form_id: str) -> Iterator[None]:
        """Mark ``form_id`` busy for the duration of the block."""
        if form_id in self._in_flight:
            logger.info("Duplicate submit ignored for form %s", form_id)
            raise SubmissionInProgressError(form_id)
        self._in_flight.add(form_id)
        try:
            yield
        finally:
            self._in_flight.discard(form_id)
