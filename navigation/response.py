"""
Responses a card returns after handling one line of input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from navigation.card import Card


class ResponseKind(Enum):
    """The four outcomes of handling a line of input."""

    NONE = "none"
    PUSH = "push"
    POP = "pop"
    QUIT = "quit"


@dataclass(frozen=True)
class Response:
    """
    Tagged result of ``Card.accept_line_input``.

    Use the constructors instead of building instances directly:
    ``Response.none()``, ``Response.push(card)``, ``Response.pop(error)``
    and ``Response.quit()``.

    Attributes:
        kind: Which transition the engine should apply
        card: Card to show next, only for ``push``
        error: Error to report, only for ``pop``
    """
    kind: ResponseKind
    card: Optional["Card"] = None
    error: Optional[BaseException] = None

    def __post_init__(self):
        if self.kind is ResponseKind.PUSH and self.card is None:
            raise ValueError("push response requires a card")
        if self.kind is not ResponseKind.PUSH and self.card is not None:
            raise ValueError(f"{self.kind.value} response cannot carry a card")
        if self.kind is not ResponseKind.POP and self.error is not None:
            raise ValueError(f"{self.kind.value} response cannot carry an error")

    @classmethod
    def none(cls) -> "Response":
        """Stay on the current card and ask again."""
        return cls(ResponseKind.NONE)

    @classmethod
    def push(cls, card: "Card") -> "Response":
        """Show ``card`` on top of the current one."""
        return cls(ResponseKind.PUSH, card=card)

    @classmethod
    def pop(cls, error: Optional[BaseException] = None) -> "Response":
        """Leave the current card, optionally reporting ``error``."""
        return cls(ResponseKind.POP, error=error)

    @classmethod
    def quit(cls) -> "Response":
        """End the whole session."""
        return cls(ResponseKind.QUIT)
