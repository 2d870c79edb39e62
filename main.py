"""
Landing widgets entry point.

Runs the console shell over the landing commands. Quote, booking context,
cookie and overlay commands work offline; chat and lead submissions need
the backend selected by the page host name.

Usage:
    Interactive:   python main.py
    Scripted:      python main.py quote
    Other host:    python main.py --page-url https://vasilevo.example/
"""

import logging
import sys

from src.config import settings

logger = logging.getLogger(__name__)

DEFAULT_PAGE_URL = "http://localhost/"


def _page_url(argv: list[str]) -> str:
    if "--page-url" in argv:
        index = argv.index("--page-url")
        if index + 1 < len(argv):
            return argv[index + 1]
    return DEFAULT_PAGE_URL


def _run_console_mode(argv: list[str]) -> None:
    """Start the console shell, optionally auto-playing a scenario."""
    from console_demo import ConsoleSession

    session = ConsoleSession(_page_url(argv))
    logger.info("Console shell started for %s (pricing rates: %s)",
                session.page.page_url, settings.pricing.room_rates())
    scenarios = [arg for arg in argv if arg in ConsoleSession.SCENARIOS]
    if scenarios:
        session.run_scenario(scenarios[0])
    else:
        session.run()


if __name__ == "__main__":
    _run_console_mode(sys.argv[1:])
