"""
Build and run a single snippet, capturing its output.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from snippets.models import Snippet
from toolchain.exceptions import NonZeroExitError
from toolchain.models import SnippetRunResult
from toolchain.process import check_non_zero_exit, run_process
from toolchain.toolchain import Toolchain


logger = logging.getLogger(__name__)


def construct_run_environment(package_root: Union[str, Path],
                              base_env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Create the environment a snippet runs in.

    The package root (and its ``src`` directory, when present) is put in front
    of ``PYTHONPATH`` so snippets can import the package. Output is captured,
    so color is always turned off.
    """
    env = dict(os.environ if base_env is None else base_env)
    package_root = Path(package_root)

    paths = [str(package_root)]
    if (package_root / "src").is_dir():
        paths.append(str(package_root / "src"))
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)

    env["NO_COLOR"] = "1"
    return env


def run_snippet(snippet: Snippet, toolchain: Toolchain,
                package_root: Union[str, Path],
                should_skip_building: bool = False,
                base_env: Optional[Mapping[str, str]] = None) -> SnippetRunResult:
    """
    Build and run a snippet from the package root.

    Raises:
        ProcessLaunchError: If the interpreter cannot be started
        NonZeroExitError: If building or running the snippet fails
    """
    env = construct_run_environment(package_root, base_env)

    if not should_skip_building:
        check_non_zero_exit(
            [toolchain.python_executable, "-m", "py_compile", str(snippet.path)],
            env=env,
            step="build"
        )

    args = [toolchain.python_executable, str(snippet.path)]
    result = run_process(args, env=env, cwd=package_root, step="run")
    if result.returncode != 0:
        raise NonZeroExitError(args, result.returncode, result.stderr, step="run")

    logger.debug(f"Snippet {snippet.name} finished")
    return SnippetRunResult(
        snippet=snippet,
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.returncode
    )
