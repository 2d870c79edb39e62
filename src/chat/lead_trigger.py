"""
Lead-trigger heuristic for assistant answers.

When the answering service asks for a phone number or offers a call
back, the chat opens its contact-capture sub-panel. Matching is a plain
case-insensitive substring scan, so false positives and misses are
expected.
"""

import logging
from typing import Iterable, Optional

from src.config import settings

logger = logging.getLogger(__name__)


def should_offer_lead(answer: str, trigger_words: Optional[Iterable[str]] = None) -> bool:
    """True when an assistant answer mentions any trigger word."""
    words = settings.chat.lead_trigger_words if trigger_words is None else trigger_words
    lower = str(answer or "").lower()
    for word in words:
        if word.lower() in lower:
            logger.debug("Lead trigger word detected: '%s'", word)
            return True
    return False
