"""
Build, run and test-discovery helpers used by the interactive cards.
"""

from .exceptions import (
    ToolchainError,
    ToolNotFoundError,
    ProcessLaunchError,
    NonZeroExitError,
    MalformedOutputError,
)
from .models import Sanitizer, TestConfiguration, TestSuite, SnippetRunResult
from .toolchain import Toolchain

__all__ = [
    "ToolchainError",
    "ToolNotFoundError",
    "ProcessLaunchError",
    "NonZeroExitError",
    "MalformedOutputError",
    "Sanitizer",
    "TestConfiguration",
    "TestSuite",
    "SnippetRunResult",
    "Toolchain",
]
