"""
Card listing the snippets of one group.
"""

from typing import Optional

from cli.cards.rendering import heading, join_prompt, numbered_list
from cli.cards.snippet_card import SnippetCard
from navigation.card import Card
from navigation.response import Response
from snippets.models import SnippetGroup


class SnippetGroupCard(Card):
    """Lists a group's snippets and opens the chosen one."""

    def __init__(self, ctx, group: SnippetGroup):
        self.ctx = ctx
        self.group = group
        self.hint: Optional[str] = None

    @property
    def title(self) -> str:
        return f"group {self.group.name}"

    def render(self) -> str:
        colorize = self.ctx.colorize
        lines = [heading(2, self.group.name, colorize)]
        if self.group.explanation:
            lines.append(self.group.explanation)
        lines.append("")
        lines.extend(numbered_list(
            [(snippet.name, snippet.explanation) for snippet in self.group.snippets],
            colorize
        ))
        return "\n".join(lines)

    @property
    def input_prompt(self) -> Optional[str]:
        return join_prompt(
            self.hint,
            "Choose a snippet by name or number, or press return to go back.",
            "To exit, enter 'q'."
        )

    def accept_line_input(self, line: str) -> Response:
        self.hint = None

        if not line:
            return Response.pop()
        if line == "q":
            return Response.quit()

        snippet = self.group.find(line)
        if snippet is not None:
            return Response.push(SnippetCard(self.ctx, snippet))

        self.hint = f"There is no snippet named or numbered '{line}' in {self.group.name}."
        return Response.none()
