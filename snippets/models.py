"""
Data models for packages, snippets and test targets.

This module defines the structures the package loader produces and the
interactive cards display.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class PackageError(Exception):
    """Base exception for package loading errors."""
    pass


class PackageNotFoundError(PackageError):
    """Raised when the package directory does not exist."""
    pass


class ManifestError(PackageError):
    """Raised when pyproject.toml cannot be read or parsed."""
    pass


@dataclass
class Snippet:
    """
    A small example program kept in the package's snippets directory.

    Attributes:
        path: Location of the snippet source file
        explanation: Module docstring of the snippet, if any
        presentation_code: Source shown to the user, with hidden regions removed
    """
    path: Path
    explanation: str = ""
    presentation_code: str = ""

    @property
    def name(self) -> str:
        return self.path.stem


@dataclass
class SnippetGroup:
    """Snippets sharing a directory."""
    name: str
    base_directory: Path
    snippets: List[Snippet] = field(default_factory=list)
    explanation: str = ""

    def find(self, token: str) -> Optional[Snippet]:
        """Find a snippet by 1-based number or case-insensitive name."""
        return _find_by_number_or_name(self.snippets, token)


@dataclass
class TestTarget:
    """A test module that can be handed to the test discovery tool."""
    name: str
    path: Path


@dataclass
class PackageDescription:
    """
    What the interactive session knows about the package being browsed.

    Attributes:
        name: Project name from pyproject.toml or the directory name
        version: Project version
        description: One line project summary
        root: Package root directory
        snippets_directory: Directory holding snippet groups
        tests_directory: Directory holding test targets
    """
    name: str
    version: str
    root: Path
    snippets_directory: Path
    tests_directory: Path
    description: str = ""


def find_snippet_group(groups: List[SnippetGroup], token: str) -> Optional[SnippetGroup]:
    """Find a group by 1-based number or case-insensitive name."""
    return _find_by_number_or_name(groups, token)


def find_test_target(targets: List[TestTarget], token: str) -> Optional[TestTarget]:
    """Find a test target by 1-based number or case-insensitive name."""
    return _find_by_number_or_name(targets, token)


def _find_by_number_or_name(items, token: str):
    # Only ASCII digits select by number
    if token.isascii() and token.isdecimal():
        index = int(token)
        if 1 <= index <= len(items):
            return items[index - 1]
        return None
    lowered = token.lower()
    for item in items:
        if item.name.lower() == lowered:
            return item
    return None
