"""Per-browser interaction sessions.

Each browser gets one InteractionController, looked up by a random cookie
value. Sessions live in a TTL cache and expire after ``session_ttl`` seconds
without a request.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog
from cachetools import TTLCache

from ..core.controller import InteractionController
from ..utils.logging import LogEventNames

log = structlog.get_logger()


@dataclass
class BrowserClipboard:
    """Clipboard whose content is handed to the browser on the next page render."""

    _pending: str | None = field(default=None, repr=False)

    def copy(self, text: str) -> None:
        """Queue text for the browser to write to its clipboard."""
        self._pending = text

    def take(self) -> str | None:
        """Return the queued text once, then forget it."""
        text, self._pending = self._pending, None
        return text


@dataclass
class Session:
    """One browser's interaction state."""

    session_id: str
    controller: InteractionController
    clipboard: BrowserClipboard


ControllerFactory = Callable[[BrowserClipboard], InteractionController]


class SessionStore:
    """Cookie-keyed sessions with sliding expiry.

    Example:
        store = SessionStore(lambda clip: InteractionController(analyzer, clip))
        session = store.resolve(request.cookies.get("session"))
    """

    def __init__(
        self,
        controller_factory: ControllerFactory,
        ttl: float = 3600,
        max_sessions: int = 1000,
    ) -> None:
        """Initialize the store.

        Args:
            controller_factory: Builds a controller bound to a session's clipboard
            ttl: Idle lifetime of a session in seconds
            max_sessions: Least recently used sessions are dropped beyond this
        """
        self._factory = controller_factory
        self._sessions: TTLCache[str, Session] = TTLCache(maxsize=max_sessions, ttl=ttl)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def resolve(self, session_id: str | None) -> Session:
        """Return the caller's session, creating one if missing or expired."""
        if session_id is not None:
            session = self._sessions.get(session_id)
            if session is not None:
                # Re-insert to restart the TTL
                self._sessions[session_id] = session
                return session

        return self.create()

    def create(self) -> Session:
        """Start a new session with a fresh controller."""
        session_id = secrets.token_urlsafe(24)
        clipboard = BrowserClipboard()
        session = Session(
            session_id=session_id,
            controller=self._factory(clipboard),
            clipboard=clipboard,
        )
        self._sessions[session_id] = session
        log.info(LogEventNames.SESSION_CREATED, active_sessions=len(self._sessions))
        return session
