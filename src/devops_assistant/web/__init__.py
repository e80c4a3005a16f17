"""Browser-facing surface of the assistant."""

from .app import SESSION_COOKIE, create_app
from .sessions import BrowserClipboard, Session, SessionStore

__all__ = ["SESSION_COOKIE", "BrowserClipboard", "Session", "SessionStore", "create_app"]
