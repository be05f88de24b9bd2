"""
Card stack navigation engine for interactive terminal sessions.
"""

from .response import Response, ResponseKind
from .card import Card
from .observability import ObservabilityScope
from .card_stack import CardStack, SessionOutcome, CLEAR_SCREEN

__all__ = [
    "Response",
    "ResponseKind",
    "Card",
    "ObservabilityScope",
    "CardStack",
    "SessionOutcome",
    "CLEAR_SCREEN",
]
