"""
Terminal surface the navigation engine writes to and reads from.
"""

from typing import Optional, Protocol


class Terminal(Protocol):
    """Minimal terminal the card stack depends on."""

    def clear_screen(self) -> None: ...

    def write(self, text: str, fg: Optional[str] = None, bold: bool = False) -> None: ...

    def read_line(self) -> Optional[str]:
        """Return one line without its line ending, or None at end of input."""
        ...
