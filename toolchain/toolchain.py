"""
Toolchain lookup for the Python interpreter, pytest and the C compiler.
"""

import logging
import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from toolchain.exceptions import ToolNotFoundError, ToolchainError
from toolchain.models import Sanitizer
from toolchain.process import check_non_zero_exit


logger = logging.getLogger(__name__)


@dataclass
class Toolchain:
    """
    The tools used to build, run and discover tests for a package.

    Attributes:
        python_executable: Interpreter used to compile and run code
        c_compiler: C compiler asked for sanitizer runtime libraries
        build_path: Directory for build artifacts such as coverage files
    """
    python_executable: str
    c_compiler: str
    build_path: Path

    @classmethod
    def from_environment(cls, build_path: Path) -> "Toolchain":
        """Create a toolchain from the running interpreter and ``CC``."""
        return cls(
            python_executable=sys.executable,
            c_compiler=os.environ.get("CC") or "cc",
            build_path=Path(build_path)
        )

    def locate_test_discovery_tool(self) -> List[str]:
        """
        Locate pytest, preferring the one installed beside the interpreter.

        Returns:
            Command line prefix that launches pytest

        Raises:
            ToolNotFoundError: If pytest is not installed anywhere we looked
        """
        tried_paths = []

        candidate = Path(self.python_executable).parent / "pytest"
        if candidate.is_file():
            return [str(candidate)]
        tried_paths.append(str(candidate))

        on_path = shutil.which("pytest")
        if on_path:
            return [on_path]
        tried_paths.append("pytest on PATH")

        raise ToolNotFoundError("pytest", tried_paths)

    def runtime_library(self, sanitizer: Sanitizer,
                        platform: Optional[str] = None) -> Path:
        """
        Resolve the runtime library of a sanitizer through the C compiler.

        Raises:
            ToolNotFoundError: If the compiler is missing or does not know the library
        """
        library_name = sanitizer.runtime_library_name(platform or sys.platform)
        try:
            output = check_non_zero_exit(
                [self.c_compiler, f"-print-file-name={library_name}"],
                step="locate"
            ).strip()
        except ToolchainError as e:
            raise ToolNotFoundError(f"{sanitizer.value} sanitizer runtime ({e})") from e

        # The compiler echoes the bare name back when it cannot find the file
        if not output or output == library_name:
            raise ToolNotFoundError(
                f"{sanitizer.value} sanitizer runtime",
                [f"{self.c_compiler} -print-file-name={library_name}"]
            )
        logger.debug(f"Resolved {sanitizer.value} runtime to {output}")
        return Path(output)
