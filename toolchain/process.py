"""
Subprocess helpers shared by the build, run and test-discovery steps.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from toolchain.exceptions import NonZeroExitError, ProcessLaunchError


logger = logging.getLogger(__name__)


def run_process(args: List[str], env: Optional[Dict[str, str]] = None,
                cwd: Optional[Union[str, Path]] = None,
                step: str = "run") -> subprocess.CompletedProcess:
    """
    Run a process to completion and capture its text output.

    Args:
        args: Command line, program first
        env: Environment for the child process (inherits when None)
        cwd: Working directory for the child process
        step: Name of the step reported in errors

    Returns:
        The completed process

    Raises:
        ProcessLaunchError: If the process could not be started
    """
    logger.debug(f"Running {' '.join(args)} (cwd={cwd})")
    try:
        return subprocess.run(
            args,
            env=env,
            cwd=cwd,
            capture_output=True,
            text=True
        )
    except OSError as e:
        raise ProcessLaunchError(args, e, step=step) from e


def check_non_zero_exit(args: List[str], env: Optional[Dict[str, str]] = None,
                        cwd: Optional[Union[str, Path]] = None,
                        step: str = "run") -> str:
    """
    Run a process and return its standard output, failing on a non-zero exit.

    Raises:
        ProcessLaunchError: If the process could not be started
        NonZeroExitError: If the process exited with a failure status
    """
    result = run_process(args, env=env, cwd=cwd, step=step)
    if result.returncode != 0:
        raise NonZeroExitError(args, result.returncode, result.stderr, step=step)
    return result.stdout
