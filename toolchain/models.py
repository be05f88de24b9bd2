"""
Data models for test discovery and snippet execution.

This module defines the value types exchanged between the toolchain helpers
and the interactive cards: sanitizers, test configuration, discovered test
suites and snippet run results.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from snippets.models import Snippet


class Sanitizer(Enum):
    """Runtime sanitizers that can be preloaded into test processes."""

    ADDRESS = "address"
    THREAD = "thread"
    UNDEFINED = "undefined"
    LEAK = "leak"

    @property
    def short_name(self) -> str:
        return {
            Sanitizer.ADDRESS: "asan",
            Sanitizer.THREAD: "tsan",
            Sanitizer.UNDEFINED: "ubsan",
            Sanitizer.LEAK: "lsan",
        }[self]

    def runtime_library_name(self, platform: str = sys.platform) -> str:
        """
        Get the file name of this sanitizer's runtime library.

        Args:
            platform: Platform identifier as in ``sys.platform``

        Returns:
            Library file name the C compiler can resolve
        """
        if platform == "darwin":
            return f"libclang_rt.{self.short_name}_osx_dynamic.dylib"
        return f"lib{self.short_name}.so"


@dataclass(frozen=True)
class TestConfiguration:
    """
    Options applied when building and discovering tests.

    Attributes:
        enable_code_coverage: Write coverage data to a unique file per run
        sanitizers: Sanitizer runtimes to preload into the test process
        should_skip_building: Skip the build step before discovery
        experimental_test_output: Ask the test process for experimental output
    """
    enable_code_coverage: bool = False
    sanitizers: Tuple[Sanitizer, ...] = ()
    should_skip_building: bool = False
    experimental_test_output: bool = False

    def describe(self) -> List[str]:
        """Return human readable lines describing the active options."""
        lines = [
            f"Code coverage: {'on' if self.enable_code_coverage else 'off'}",
            "Sanitizers: " + (", ".join(s.value for s in self.sanitizers) or "none"),
            f"Build before discovery: {'no' if self.should_skip_building else 'yes'}",
        ]
        if self.experimental_test_output:
            lines.append("Experimental test output: on")
        return lines


@dataclass
class TestSuite:
    """A group of tests sharing a module or class."""
    name: str
    tests: List[str] = field(default_factory=list)


@dataclass
class SnippetRunResult:
    """Captured result of running one snippet."""
    snippet: "Snippet"
    stdout: str
    stderr: str
    exit_code: int = 0
