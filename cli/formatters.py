"""
Output formatting utilities for the CLI interface.

This module sets up logging and styles text for the terminal. It also
displays data as tables or JSON.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Dict, Any, Optional

import click
from tabulate import tabulate


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Setup logging configuration for the CLI application.

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Suppress non-essential output (WARNING+ only)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def style_text(text: str, enabled: bool, fg: Optional[str] = None,
               bold: bool = False, dim: bool = False) -> str:
    """
    Style text for the terminal when colorized output is enabled.

    Args:
        text: Text to style
        enabled: Whether output is colorized
        fg: Foreground color name understood by click
        bold: Render in bold
        dim: Render dimmed

    Returns:
        Styled text, or the text unchanged when styling is disabled
    """
    if not enabled:
        return text
    return click.style(text, fg=fg, bold=bold, dim=dim)


def truncate_text(text: Optional[str], max_length: int = 50) -> str:
    """
    Truncate text to a maximum length with ellipsis.

    Args:
        text: Text to truncate
        max_length: Maximum length before truncation

    Returns:
        Truncated text with ellipsis if needed
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length - 3] + "..."


def first_line(text: Optional[str]) -> str:
    """Return the first non-empty line of a block of text."""
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""


def format_table(data: List[Dict[str, Any]], headers: Optional[List[str]] = None,
                 tablefmt: str = "simple") -> str:
    """
    Format data as a table using tabulate.

    Args:
        data: List of dictionaries containing row data
        headers: Optional list of column headers
        tablefmt: Table format style

    Returns:
        Formatted table string
    """
    if not data:
        return "No data to display."

    if headers is None:
        headers = list(data[0].keys())

    rows = []
    for row in data:
        formatted_row = []
        for header in headers:
            value = row.get(header, "")
            if isinstance(value, str) and len(value) > 60:
                formatted_row.append(truncate_text(value, 60))
            else:
                formatted_row.append(str(value) if value is not None else "")
        rows.append(formatted_row)

    return tabulate(rows, headers=headers, tablefmt=tablefmt)


def format_json(data: Any, indent: int = 2) -> str:
    """
    Format data as JSON string.

    Args:
        data: Data to format as JSON
        indent: JSON indentation level

    Returns:
        Formatted JSON string
    """
    def json_serializer(obj):
        """Custom JSON serializer for special types."""
        if isinstance(obj, Path):
            return str(obj)
        elif isinstance(obj, Enum):
            return obj.value
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    return json.dumps(data, indent=indent, default=json_serializer, ensure_ascii=False)


def print_success(message: str) -> None:
    """Print a success message with green checkmark."""
    click.echo(click.style(f"✓ {message}", fg='green'))


def print_warning(message: str) -> None:
    """Print a warning message with yellow warning symbol."""
    click.echo(click.style(f"⚠ Warning: {message}", fg='yellow'))


def print_error(message: str, colorize: bool = True) -> None:
    """Print an error message with red X symbol, styled only when colorize is set."""
    click.echo(style_text(f"✗ Error: {message}", colorize, fg='red'), err=True)


def print_info(message: str) -> None:
    """Print an info message with blue info symbol."""
    click.echo(click.style(f"ℹ {message}", fg='blue'))


def display_summary(title: str, stats: Dict[str, Any]) -> None:
    """
    Display a formatted summary with title and statistics.

    Args:
        title: Summary title
        stats: Dictionary of statistics to display
    """
    click.echo(f"\n{title}")
    click.echo("=" * len(title))

    for key, value in stats.items():
        formatted_key = key.replace('_', ' ').title()
        if isinstance(value, bool):
            formatted_value = "Yes" if value else "No"
        else:
            formatted_value = str(value) if value is not None else "N/A"
        click.echo(f"  {formatted_key}: {formatted_value}")
