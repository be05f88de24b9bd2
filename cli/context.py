"""
CLI Context module for the interactive package browser.

This module provides the shared context and decorators used across CLI commands
and the interactive cards, preventing circular imports between cli.main and the
card modules.
"""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import click

from cli.exceptions import PackageLoadError
from snippets.loader import discover_test_targets, load_package, load_snippet_groups
from snippets.models import PackageDescription, PackageError, SnippetGroup, TestTarget
from toolchain.models import TestConfiguration
from toolchain.toolchain import Toolchain


logger = logging.getLogger(__name__)

PACKAGE_PATH_VARIABLE = "PKG_LEARN_PACKAGE_PATH"
BUILD_PATH_VARIABLE = "PKG_LEARN_BUILD_PATH"


def resolve_colorize(explicit: Optional[bool] = None, stream=None) -> bool:
    """
    Decide whether output is colorized.

    An explicit ``--color/--no-color`` wins, then ``NO_COLOR``, then whether
    the output stream is a terminal.
    """
    if explicit is not None:
        return explicit
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


class LearnContext:
    """Context object to share state between CLI commands and cards."""

    def __init__(self):
        self.verbose = False
        self.quiet = False
        # Check for environment variable first, then use default
        self.package_path = Path(os.environ.get(PACKAGE_PATH_VARIABLE, "."))
        self.build_path: Optional[Path] = None
        self.colorize = False
        self.test_configuration = TestConfiguration()
        self.toolchain: Optional[Toolchain] = None
        self.package: Optional[PackageDescription] = None

    def resolved_build_path(self) -> Path:
        """Build directory, ``<package>/.build`` unless configured."""
        if self.build_path is not None:
            return Path(self.build_path)
        env_value = os.environ.get(BUILD_PATH_VARIABLE)
        if env_value:
            return Path(env_value)
        return self.get_package().root / ".build"

    def get_toolchain(self) -> Toolchain:
        """Get or create the toolchain instance."""
        if self.toolchain is None:
            self.toolchain = Toolchain.from_environment(self.resolved_build_path())
        return self.toolchain

    def get_package(self) -> PackageDescription:
        """
        Get or load the package being browsed.

        Raises:
            PackageLoadError: If the package directory or manifest is unusable
        """
        if self.package is None:
            try:
                self.package = load_package(self.package_path)
            except PackageError as e:
                raise PackageLoadError(str(e)) from e
            logger.debug(f"Loaded package {self.package.name} from {self.package.root}")
        return self.package

    def get_snippet_groups(self) -> List[SnippetGroup]:
        return load_snippet_groups(self.get_package().snippets_directory)

    def get_test_targets(self) -> List[TestTarget]:
        return discover_test_targets(self.get_package().tests_directory)


# Pass context between commands
pass_context = click.make_pass_decorator(LearnContext, ensure=True)
