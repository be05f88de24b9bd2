"""
Card contract shared by every screen of an interactive session.
"""

from abc import ABC, abstractmethod
from typing import Optional

from navigation.response import Response


class Card(ABC):
    """
    One interactive screen.

    A card knows how to draw itself and how to interpret a line of input. It
    never writes to the terminal and does not know about the stack it lives
    in; it only returns text and responses.
    """

    #: Short name used in logs
    title: str = "card"

    @abstractmethod
    def render(self) -> str:
        """Return the text for the current state. Must not have side effects."""

    @property
    def input_prompt(self) -> Optional[str]:
        """Text shown before the input marker, or None for no prompt line."""
        return None

    @abstractmethod
    def accept_line_input(self, line: str) -> Response:
        """
        Handle one line of input that the engine already trimmed.

        Expected failures are returned as ``Response.pop(error)`` rather than
        raised.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.title!r}>"
