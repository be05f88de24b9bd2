"""
The first card of a session: the package overview with its snippet groups.
"""

from typing import List, Optional

from cli.cards.rendering import heading, join_prompt, numbered_list
from cli.cards.snippet_group_card import SnippetGroupCard
from cli.cards.test_cards import TestTargetsCard
from navigation.card import Card
from navigation.response import Response
from snippets.models import PackageDescription, SnippetGroup, TestTarget, find_snippet_group


class TopCard(Card):
    """Overview of a package: description, snippet groups and test targets."""

    title = "top"

    def __init__(self, ctx, package: PackageDescription,
                 snippet_groups: List[SnippetGroup],
                 test_targets: Optional[List[TestTarget]] = None):
        """
        Args:
            ctx: LearnContext holding the toolchain and test configuration
            package: Package being browsed
            snippet_groups: Groups listed on this card
            test_targets: Targets reachable with 't'
        """
        self.ctx = ctx
        self.package = package
        self.snippet_groups = snippet_groups
        self.test_targets = test_targets or []
        self.hint: Optional[str] = None

    def render(self) -> str:
        colorize = self.ctx.colorize
        lines = [heading(1, f"{self.package.name} {self.package.version}", colorize)]
        if self.package.description:
            lines.append(self.package.description)
        lines.append("")

        if self.snippet_groups:
            lines.append("Snippet groups:")
            lines.extend(numbered_list(
                [(group.name, group.explanation) for group in self.snippet_groups],
                colorize
            ))
        else:
            lines.append(f"No snippets found in {self.package.snippets_directory}.")

        if self.test_targets:
            lines.append("")
            count = len(self.test_targets)
            lines.append(f"{count} test target{'s' if count != 1 else ''} available, "
                         "enter 't' to browse them.")
        return "\n".join(lines)

    @property
    def input_prompt(self) -> Optional[str]:
        choose = "Choose a group by name or number." if self.snippet_groups else None
        return join_prompt(self.hint, choose, "To exit, enter 'q'.")

    def accept_line_input(self, line: str) -> Response:
        self.hint = None

        if line == "q":
            return Response.quit()
        if not line and not self.snippet_groups:
            return Response.quit()
        if line == "t" and self.test_targets:
            return Response.push(TestTargetsCard(self.ctx, self.test_targets))

        group = find_snippet_group(self.snippet_groups, line)
        if group is not None:
            return Response.push(SnippetGroupCard(self.ctx, group))

        if line:
            self.hint = f"There is no group named or numbered '{line}'."
        return Response.none()
