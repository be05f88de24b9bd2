"""
Package, snippet and test target loading.
"""

from .models import (
    PackageDescription,
    Snippet,
    SnippetGroup,
    TestTarget,
    PackageError,
    PackageNotFoundError,
    ManifestError,
)
from .loader import load_package, load_snippet_groups, parse_snippet, discover_test_targets

__all__ = [
    "PackageDescription",
    "Snippet",
    "SnippetGroup",
    "TestTarget",
    "PackageError",
    "PackageNotFoundError",
    "ManifestError",
    "load_package",
    "load_snippet_groups",
    "parse_snippet",
    "discover_test_targets",
]
