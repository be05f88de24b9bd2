"""
Package loading for the interactive snippet browser.

This module reads a package's pyproject.toml, collects its snippets into
groups, parses each snippet into an explanation and presentation code, and
finds the package's test targets.
"""

import ast
import logging
import tomllib
from pathlib import Path
from typing import List, Union

from snippets.models import (
    ManifestError, PackageDescription, PackageNotFoundError,
    Snippet, SnippetGroup, TestTarget
)


logger = logging.getLogger(__name__)

DEFAULT_SNIPPETS_DIR = "Snippets"
DEFAULT_TESTS_DIR = "tests"
HIDE_MARKER = "# snippet.hide"
SHOW_MARKER = "# snippet.show"


def load_package(root: Union[str, Path]) -> PackageDescription:
    """
    Load the description of the package at ``root``.

    Args:
        root: Package root directory

    Returns:
        PackageDescription built from pyproject.toml, or from the directory
        name when there is no manifest

    Raises:
        PackageNotFoundError: If the directory does not exist
        ManifestError: If pyproject.toml exists but cannot be parsed
    """
    root = Path(root).expanduser().resolve()
    if not root.is_dir():
        raise PackageNotFoundError(f"Package directory not found: {root}")

    data = {}
    manifest = root / "pyproject.toml"
    if manifest.is_file():
        try:
            with open(manifest, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, OSError) as e:
            raise ManifestError(f"Could not read {manifest}: {e}") from e
    else:
        logger.debug(f"No pyproject.toml in {root}, using directory name")

    project = data.get("project", {})
    settings = data.get("tool", {}).get("pkg-learn", {})

    return PackageDescription(
        name=project.get("name") or root.name,
        version=str(project.get("version") or "0.0.0"),
        description=project.get("description") or "",
        root=root,
        snippets_directory=root / settings.get("snippets-dir", DEFAULT_SNIPPETS_DIR),
        tests_directory=root / settings.get("tests-dir", DEFAULT_TESTS_DIR),
    )


def load_snippet_groups(snippets_dir: Union[str, Path]) -> List[SnippetGroup]:
    """
    Collect snippets into groups.

    Files directly inside ``snippets_dir`` form a group named after the
    directory and come first; every subdirectory holding snippets forms a
    group of its own. Empty groups are dropped.
    """
    snippets_dir = Path(snippets_dir)
    if not snippets_dir.is_dir():
        logger.debug(f"No snippets directory at {snippets_dir}")
        return []

    groups = []
    top_level = _snippet_files(snippets_dir)
    if top_level:
        groups.append(_load_group(snippets_dir.name, snippets_dir, top_level))

    subdirectories = sorted(
        p for p in snippets_dir.iterdir()
        if p.is_dir() and not p.name.startswith(('.', '_'))
    )
    for directory in subdirectories:
        files = _snippet_files(directory)
        if files:
            groups.append(_load_group(directory.name, directory, files))

    logger.debug(f"Loaded {len(groups)} snippet groups from {snippets_dir}")
    return groups


def parse_snippet(path: Union[str, Path]) -> Snippet:
    """
    Parse a snippet file.

    The module docstring becomes the explanation. Lines between
    ``# snippet.hide`` and ``# snippet.show`` are left out of the
    presentation code, together with the markers themselves.
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    lines = source.splitlines()

    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as e:
        logger.warning(f"Snippet {path} is not valid Python, showing it verbatim: {e}")
        return Snippet(path=path, presentation_code="\n".join(_trim_blank_lines(lines)))

    explanation = ast.get_docstring(tree) or ""
    if explanation:
        node = tree.body[0]
        lines = lines[:node.lineno - 1] + lines[node.end_lineno:]

    shown = []
    hidden = False
    for line in lines:
        marker = line.strip().lower()
        if marker == HIDE_MARKER:
            hidden = True
        elif marker == SHOW_MARKER:
            hidden = False
        elif not hidden:
            shown.append(line)

    return Snippet(
        path=path,
        explanation=explanation,
        presentation_code="\n".join(_trim_blank_lines(shown))
    )


def discover_test_targets(tests_dir: Union[str, Path]) -> List[TestTarget]:
    """Find ``test_*.py`` and ``*_test.py`` modules below ``tests_dir``."""
    tests_dir = Path(tests_dir)
    if not tests_dir.is_dir():
        return []

    targets = []
    for path in sorted(tests_dir.rglob("*.py")):
        relative = path.relative_to(tests_dir)
        if any(part.startswith('.') or part == "__pycache__" for part in relative.parts):
            continue
        if path.name.startswith("test_") or path.stem.endswith("_test"):
            targets.append(TestTarget(name=relative.with_suffix("").as_posix(), path=path))
    return targets


def _snippet_files(directory: Path) -> List[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix == ".py" and not p.name.startswith(('.', '_'))
    )


def _load_group(name: str, directory: Path, files: List[Path]) -> SnippetGroup:
    readme = directory / "README.md"
    explanation = readme.read_text(encoding="utf-8").strip() if readme.is_file() else ""
    return SnippetGroup(
        name=name,
        base_directory=directory,
        snippets=[parse_snippet(f) for f in files],
        explanation=explanation
    )


def _trim_blank_lines(lines: List[str]) -> List[str]:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]
