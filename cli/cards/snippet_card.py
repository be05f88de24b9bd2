"""
Cards showing one snippet and the output of running it.
"""

import logging
from typing import Optional

from cli.cards.rendering import heading
from cli.exceptions import SnippetRunError
from navigation.card import Card
from navigation.response import Response
from snippets.models import Snippet
from toolchain.exceptions import ToolchainError
from toolchain.models import SnippetRunResult
from toolchain.snippet_runner import run_snippet


logger = logging.getLogger(__name__)


class SnippetCard(Card):
    """Shows a snippet's explanation and code, and runs it on request."""

    def __init__(self, ctx, snippet: Snippet):
        self.ctx = ctx
        self.snippet = snippet

    @property
    def title(self) -> str:
        return f"snippet {self.snippet.name}"

    def render(self) -> str:
        lines = [heading(3, self.snippet.name, self.ctx.colorize)]
        if self.snippet.explanation:
            lines.append(self.snippet.explanation)
        lines.append("")
        lines.append(self.snippet.presentation_code)
        return "\n".join(lines)

    @property
    def input_prompt(self) -> Optional[str]:
        return ("Enter 'r' to run this snippet, or press return to go back.\n"
                "To exit, enter 'q'.")

    def accept_line_input(self, line: str) -> Response:
        if not line:
            return Response.pop()
        if line == "q":
            return Response.quit()
        if line != "r":
            return Response.none()

        try:
            result = run_snippet(
                self.snippet,
                self.ctx.get_toolchain(),
                self.ctx.get_package().root,
                should_skip_building=self.ctx.test_configuration.should_skip_building
            )
        except ToolchainError as e:
            logger.debug(f"Running {self.snippet.path} failed at step {e.step}")
            return Response.pop(SnippetRunError(self.snippet.name, str(e)))

        return Response.push(SnippetOutputCard(self.ctx, result))


class SnippetOutputCard(Card):
    """Shows the captured output of a finished snippet run."""

    def __init__(self, ctx, result: SnippetRunResult):
        self.ctx = ctx
        self.result = result

    @property
    def title(self) -> str:
        return f"output of {self.result.snippet.name}"

    def render(self) -> str:
        lines = [heading(3, f"Output of {self.result.snippet.name}", self.ctx.colorize)]
        lines.append("")
        lines.append(self.result.stdout.rstrip() or "(no output)")
        if self.result.stderr.strip():
            lines.append("")
            lines.append("stderr:")
            lines.append(self.result.stderr.rstrip())
        return "\n".join(lines)

    @property
    def input_prompt(self) -> Optional[str]:
        return "Press return to go back.\nTo exit, enter 'q'."

    def accept_line_input(self, line: str) -> Response:
        if not line:
            return Response.pop()
        if line == "q":
            return Response.quit()
        return Response.none()
