"""
Text helpers shared by the interactive cards.
"""

from typing import List, Optional, Sequence, Tuple

from cli.formatters import first_line, style_text, truncate_text


def heading(level: int, text: str, colorize: bool) -> str:
    """Render a markdown-like heading, e.g. ``## Group``."""
    marker = style_text("#" * level + " ", colorize, fg="bright_yellow")
    return marker + style_text(text, colorize, fg="cyan", bold=True)


def numbered_list(entries: Sequence[Tuple[str, Optional[str]]], colorize: bool) -> List[str]:
    """
    Render ``(name, explanation)`` pairs as a 1-based numbered list.

    Only the first line of each explanation is shown.
    """
    width = len(str(len(entries)))
    lines = []
    for index, (name, explanation) in enumerate(entries, start=1):
        number = style_text(f"{index:>{width}}.", colorize, fg="bright_black")
        line = f"  {number} {style_text(name, colorize, fg='cyan')}"
        summary = first_line(explanation)
        if summary:
            line += f" - {truncate_text(summary, 70)}"
        lines.append(line)
    return lines


def join_prompt(*parts: Optional[str]) -> str:
    """Join the non-empty prompt parts into one prompt block."""
    return "\n".join(part for part in parts if part)
