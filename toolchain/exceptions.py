"""
Custom exceptions for build, run and test-discovery operations.

This module defines specific exception classes for the different steps that can
fail while invoking external tools: locating a tool, launching a process, a
process exiting with a failure status, and a tool producing output that cannot
be parsed.
"""

from typing import Optional, Dict, Any, List


class ToolchainError(Exception):
    """Base exception for all toolchain invocation errors."""

    def __init__(self, message: str, step: str = "invoke",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.step = step
        self.details = details or {}

    def __str__(self) -> str:
        return f"{super().__str__()} (step: {self.step})"


class ToolNotFoundError(ToolchainError):
    """Raised when a required tool cannot be located."""

    def __init__(self, tool: str, tried_paths: Optional[List[str]] = None):
        message = f"{tool} not found"
        if tried_paths:
            message += f", tried {', '.join(tried_paths)}"
        super().__init__(message, step="locate")
        self.tool = tool
        self.tried_paths = tried_paths or []
        self.details['tried_paths'] = self.tried_paths


class ProcessLaunchError(ToolchainError):
    """Raised when a process cannot be started at all."""

    def __init__(self, args: List[str], original_error: Optional[Exception] = None,
                 step: str = "launch"):
        message = f"Could not launch '{' '.join(args)}'"
        if original_error:
            message += f": {original_error}"
        super().__init__(message, step=step)
        self.args_list = list(args)
        self.original_error = original_error
        if original_error:
            self.details['error_type'] = type(original_error).__name__


class NonZeroExitError(ToolchainError):
    """Raised when a process exits with a non-zero status."""

    def __init__(self, args: List[str], exit_code: int, stderr: str = "",
                 step: str = "run"):
        message = f"'{' '.join(args)}' exited with status {exit_code}"
        stderr = (stderr or "").strip()
        if stderr:
            # Keep the tail, that is where tools report the actual failure
            message += f": {stderr.splitlines()[-1]}"
        super().__init__(message, step=step)
        self.args_list = list(args)
        self.exit_code = exit_code
        self.stderr = stderr
        self.details['exit_code'] = exit_code


class MalformedOutputError(ToolchainError):
    """Raised when a tool's output does not have the expected structure."""

    def __init__(self, message: str, context: Optional[str] = None,
                 line: Optional[str] = None):
        if context:
            message = f"{message} (from: {context})"
        super().__init__(message, step="parse")
        self.context = context
        self.line = line
        if line is not None:
            self.details['line'] = line
