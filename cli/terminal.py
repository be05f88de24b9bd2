"""
Terminal access for interactive sessions, built on click's streams.
"""

from typing import Optional, TextIO

import click

from cli.exceptions import TerminalUnavailableError
from navigation.card_stack import CLEAR_SCREEN


class ClickTerminal:
    """
    Reads lines from one text stream and writes styled text to another.

    Styling is applied only when ``colorize`` is set; the caller decides that
    from the session configuration.
    """

    def __init__(self, output: TextIO, input: TextIO, colorize: bool = False):
        self.output = output
        self.input = input
        self.colorize = colorize

    @classmethod
    def acquire(cls, colorize: bool = False) -> "ClickTerminal":
        """
        Open the terminal on the current stdout and stdin.

        Raises:
            TerminalUnavailableError: If stdout is missing or closed
        """
        output = click.get_text_stream("stdout")
        if output is None or output.closed:
            raise TerminalUnavailableError()
        return cls(output, click.get_text_stream("stdin"), colorize)

    def clear_screen(self) -> None:
        # Written raw, click.echo would strip the escape codes off a pipe
        self.output.write(CLEAR_SCREEN)
        self.output.flush()

    def write(self, text: str, fg: Optional[str] = None, bold: bool = False) -> None:
        if self.colorize and (fg or bold):
            text = click.style(text, fg=fg, bold=bold)
        click.echo(text, file=self.output, nl=False, color=self.colorize)

    def read_line(self) -> Optional[str]:
        line = self.input.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")
