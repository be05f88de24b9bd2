"""
Shared fixtures for the pkg-learn test suite.
"""

import textwrap
from pathlib import Path

import pytest


PYPROJECT = """
[project]
name = "demo-lib"
version = "1.2.0"
description = "A library used to exercise the snippet browser"
"""

HELLO_SNIPPET = '''
"""Say hello.

Prints a greeting to standard output.
"""
# snippet.hide
import sys
# snippet.show

print("hello from demo")
'''

SORTING_SNIPPET = '''
"""Sort a few numbers."""

print(sorted([3, 1, 2]))
'''

FAILING_SNIPPET = '''
"""Exit with an error."""

raise SystemExit("boom")
'''


def write_sample_package(root: Path) -> Path:
    """Create a small package with two snippet groups and two test targets."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "pyproject.toml").write_text(textwrap.dedent(PYPROJECT), encoding="utf-8")

    snippets = root / "Snippets"
    (snippets / "Advanced").mkdir(parents=True)
    (snippets / "hello.py").write_text(HELLO_SNIPPET.lstrip(), encoding="utf-8")
    (snippets / "Advanced" / "README.md").write_text("Snippets for experienced users.\n",
                                                     encoding="utf-8")
    (snippets / "Advanced" / "sorting.py").write_text(SORTING_SNIPPET.lstrip(), encoding="utf-8")
    (snippets / "Advanced" / "failing.py").write_text(FAILING_SNIPPET.lstrip(), encoding="utf-8")

    tests = root / "tests"
    (tests / "unit").mkdir(parents=True)
    (tests / "test_greeting.py").write_text("def test_greeting():\n    assert True\n",
                                            encoding="utf-8")
    (tests / "unit" / "math_test.py").write_text("def test_add():\n    assert 1 + 1 == 2\n",
                                                 encoding="utf-8")
    (tests / "helpers.py").write_text("VALUE = 1\n", encoding="utf-8")
    return root


@pytest.fixture
def sample_package(tmp_path) -> Path:
    """Path to a freshly written sample package."""
    return write_sample_package(tmp_path / "demo")
