"""
Chat session tagging for log output.

The visitor's persisted chat session id is kept in a ContextVar by the
chat session. ``SessionIdFilter`` copies it onto every record passing
through a handler, and ``LOG_FORMAT`` prints it, so one visitor's chat
exchanges and lead submissions can be grepped out of the log. Records
emitted outside a chat carry ``-``.

Usage:
    install_session_filter()          # done once by load_config()
    set_session_id("1718000000000-a1b2c3")
    logging.getLogger(__name__).info("Sending chat message")
    # 2026-05-20 10:00:00 [src.chat.session] INFO session=1718000000000-a1b2c3: Sending chat message
"""

import logging
from contextvars import ContextVar
from typing import Iterable, Optional

NO_SESSION = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s session=%(session_id)s: %(message)s"

_session_id: ContextVar[str] = ContextVar("chat_session_id", default=NO_SESSION)


def set_session_id(session_id: str) -> None:
    _session_id.set(session_id or NO_SESSION)


def get_session_id() -> str:
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    """Sets ``record.session_id`` unless a caller already passed one via ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def install_session_filter(handlers: Optional[Iterable[logging.Handler]] = None) -> None:
    """Attach a SessionIdFilter to ``handlers`` (the root logger's by default).

    Handler-level filters see records from every logger, so any format
    string using ``%(session_id)s`` resolves.
    """
    targets = list(handlers) if handlers is not None else logging.getLogger().handlers
    for handler in targets:
        if not any(isinstance(f, SessionIdFilter) for f in handler.filters):
            handler.addFilter(SessionIdFilter())
