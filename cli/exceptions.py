"""
Custom exception classes for the CLI interface.

This module defines CLI-specific exceptions that provide clear error messages
and appropriate exit codes for different error conditions. Cards also use the
recoverable ones to report failures while the session keeps running.
"""


class CLIError(Exception):
    """Base exception for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class PackageLoadError(CLIError):
    """Raised when the package to browse cannot be loaded."""

    def __init__(self, message: str):
        super().__init__(f"Package Error: {message}", exit_code=3)


class SnippetRunError(CLIError):
    """Raised when a snippet cannot be built or run."""

    def __init__(self, snippet_name: str, reason: str):
        super().__init__(f"Can't run snippet '{snippet_name}': {reason}", exit_code=6)
        self.snippet_name = snippet_name


class TestDiscoveryError(CLIError):
    """Raised when the tests of a target cannot be listed."""

    def __init__(self, target_name: str, reason: str):
        super().__init__(f"Can't list tests in '{target_name}': {reason}", exit_code=6)
        self.target_name = target_name


class TerminalUnavailableError(CLIError):
    """Raised when no usable terminal stream is available."""

    def __init__(self, message: str = "Standard output is not available"):
        super().__init__(f"Terminal Error: {message}", exit_code=8)


