"""Abstract interface for clipboard access."""

from typing import Protocol


class Clipboard(Protocol):
    """Destination for the copy-to-clipboard action."""

    def copy(self, text: str) -> None:
        """Place text on the clipboard."""
        ...
