"""
Navigation engine for interactive command line sessions.

A ``CardStack`` shows the top card of a stack, reads one line of input at a
time, hands it to that card and applies the card's response: stay, push a new
card, pop the current one (optionally reporting an error) or quit.
"""

import logging
from enum import Enum
from typing import List, Optional

from navigation.card import Card
from navigation.observability import ObservabilityScope
from navigation.response import Response, ResponseKind
from navigation.terminal import Terminal


logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class SessionOutcome(Enum):
    """How an interactive session ended."""

    QUIT = "quit"
    STACK_EMPTY = "stack_empty"
    INPUT_EXHAUSTED = "input_exhausted"


class CardStack:
    """
    A stack of cards to display one at a time at the command line.

    The stack is owned by one session. Only ``apply`` changes the cards or the
    repaint flag, and only between two lines of input.
    """

    INPUT_MARKER = ">>> "

    def __init__(self, terminal: Terminal, root: Card,
                 observability: Optional[ObservabilityScope] = None,
                 colorize: bool = False):
        """
        Initialize the card stack.

        Args:
            terminal: Terminal to draw on and read from
            root: First card shown; the session ends when it is popped
            observability: Sink for errors reported by popping cards
            colorize: Whether the prompt and input marker are styled
        """
        self.terminal = terminal
        self.cards: List[Card] = [root]
        self.observability = observability or ObservabilityScope(colorize=colorize)
        self.colorize = colorize
        # When true, the screen is cleared before the next render
        self._needs_to_clear_screen = True

    @property
    def needs_to_clear_screen(self) -> bool:
        return self._needs_to_clear_screen

    @property
    def top(self) -> Optional[Card]:
        """The current card, or None once the stack is empty."""
        return self.cards[-1] if self.cards else None

    def push(self, card: Card) -> None:
        self.cards.append(card)

    def pop(self) -> Card:
        if not self.cards:
            raise RuntimeError("cannot pop from an empty card stack")
        return self.cards.pop()

    def clear(self) -> None:
        self.cards.clear()

    def ask_for_line_input(self, prompt: Optional[str]) -> Optional[str]:
        """
        Show the prompt and input marker, then read one line.

        Returns:
            The line without its line ending, or None at end of input
        """
        if prompt is not None:
            if self.colorize:
                self.terminal.write(prompt + "\n", fg="bright_black")
            else:
                self.terminal.write(prompt + "\n")

        if self.colorize:
            self.terminal.write(self.INPUT_MARKER, fg="green", bold=True)
        else:
            self.terminal.write(self.INPUT_MARKER)

        return self.terminal.read_line()

    def apply(self, response: Response) -> bool:
        """
        Apply a card's response to the stack.

        Args:
            response: Response returned by the current card

        Returns:
            False if the session must end, True otherwise
        """
        kind = response.kind

        if kind is ResponseKind.NONE:
            return True

        elif kind is ResponseKind.PUSH:
            self.push(response.card)
            self._needs_to_clear_screen = True
            logger.debug(f"Pushed {response.card!r} (depth {len(self.cards)})")
            return True

        elif kind is ResponseKind.POP:
            popped = self.pop()
            if response.error is not None:
                self.observability.emit(response.error)
                # Keep the error on screen until the next clearing transition
                self._needs_to_clear_screen = False
            else:
                self._needs_to_clear_screen = bool(self.cards)
            logger.debug(f"Popped {popped!r} (depth {len(self.cards)})")
            return True

        elif kind is ResponseKind.QUIT:
            logger.debug("Quit requested")
            return False

        raise ValueError(f"Unknown response kind: {kind!r}")

    def run(self) -> SessionOutcome:
        """
        Run the session until quit, an empty stack or end of input.

        Returns:
            The way the session ended
        """
        input_finished = False
        while not input_finished:
            top = self.top
            if top is None:
                return self._finish(SessionOutcome.STACK_EMPTY)

            if self._needs_to_clear_screen:
                self.terminal.clear_screen()
                self._needs_to_clear_screen = False

            self.terminal.write(top.render() + "\n")

            # Assume input finished until a line proves otherwise
            input_finished = True

            while True:
                line = self.ask_for_line_input(top.input_prompt)
                if line is None:
                    break
                input_finished = False

                response = top.accept_line_input(line.strip())
                if not self.apply(response):
                    return self._finish(SessionOutcome.QUIT)
                if response.kind is not ResponseKind.NONE:
                    break

        return self._finish(SessionOutcome.INPUT_EXHAUSTED)

    def _finish(self, outcome: SessionOutcome) -> SessionOutcome:
        logger.debug(f"Session ended ({outcome.value}) with current card {self.top!r}")
        return outcome
