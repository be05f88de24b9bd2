"""
Helpers for building test targets, discovering their tests and preparing the
environment test processes run in.

The discovery tool is pytest in ``--collect-only -q`` mode; its node ids are
grouped into suites by stripping the last ``::`` component.
"""

import logging
import os
import re
import sys
import uuid
from pathlib import Path
from typing import Dict, List, Mapping, MutableMapping, Optional, Union

from snippets.models import TestTarget
from toolchain.exceptions import MalformedOutputError, NonZeroExitError
from toolchain.models import TestConfiguration, TestSuite
from toolchain.process import check_non_zero_exit, run_process
from toolchain.toolchain import Toolchain


logger = logging.getLogger(__name__)

# pytest exit status when nothing was collected
NO_TESTS_COLLECTED = 5

COVERAGE_FILE_VARIABLE = "COVERAGE_FILE"
EXPERIMENTAL_OUTPUT_VARIABLE = "PKG_LEARN_EXPERIMENTAL_TEST_OUTPUT"

_SUMMARY_RE = re.compile(
    r"^(no tests (ran|collected)|\d+(/\d+)? tests? (collected|selected)|=+)",
    re.IGNORECASE
)


def preload_variable(platform: Optional[str] = None) -> str:
    """Name of the variable the dynamic loader reads preload libraries from."""
    if (platform or sys.platform) == "darwin":
        return "DYLD_INSERT_LIBRARIES"
    return "LD_PRELOAD"


def construct_test_environment(toolchain: Toolchain,
                               configuration: TestConfiguration,
                               base_env: Optional[Mapping[str, str]] = None,
                               stdout_isatty: Optional[bool] = None,
                               stderr_isatty: Optional[bool] = None,
                               platform: Optional[str] = None) -> Dict[str, str]:
    """
    Create the environment a test process runs in.

    Args:
        toolchain: Toolchain used to resolve sanitizer runtimes
        configuration: Active test configuration
        base_env: Environment to start from (defaults to ``os.environ``)
        stdout_isatty: Whether stdout is a terminal (detected when None)
        stderr_isatty: Whether stderr is a terminal (detected when None)
        platform: Platform identifier as in ``sys.platform``

    Returns:
        A new environment dictionary

    Raises:
        ToolNotFoundError: If a sanitizer runtime cannot be resolved
    """
    env = dict(os.environ if base_env is None else base_env)

    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    if stderr_isatty is None:
        stderr_isatty = sys.stderr.isatty()

    # NO_COLOR tells downstream processes not to emit ANSI escape codes,
    # see https://no-color.org
    if not stdout_isatty or not stderr_isatty:
        env["NO_COLOR"] = "1"

    randomize_coverage_path(env, toolchain.build_path, configuration)

    if configuration.experimental_test_output:
        env[EXPERIMENTAL_OUTPUT_VARIABLE] = "1"

    if not configuration.sanitizers:
        return env

    runtimes = [
        str(toolchain.runtime_library(sanitizer, platform))
        for sanitizer in configuration.sanitizers
    ]

    key = preload_variable(platform)
    existing = env.get(key)
    if existing:
        runtimes.insert(0, existing)

    env[key] = ":".join(runtimes)
    return env


def randomize_coverage_path(env: MutableMapping[str, str],
                            build_path: Union[str, Path],
                            configuration: TestConfiguration) -> None:
    """
    Point coverage output at a fresh file when coverage is enabled.

    Every call picks a new file name so that test processes sharing one
    environment never write to the same coverage file.
    """
    if not configuration.enable_code_coverage:
        return
    coverage_file = Path(build_path) / "codecov" / f"default-{uuid.uuid4()}.coverage"
    env[COVERAGE_FILE_VARIABLE] = str(coverage_file)


def build_test_target(target: TestTarget, toolchain: Toolchain,
                      env: Optional[Dict[str, str]] = None) -> None:
    """Byte-compile a test target so syntax errors surface as a build failure."""
    check_non_zero_exit(
        [toolchain.python_executable, "-m", "py_compile", str(target.path)],
        env=env,
        step="build"
    )


def get_test_suites(target: TestTarget, toolchain: Toolchain,
                    configuration: TestConfiguration,
                    cwd: Optional[Union[str, Path]] = None) -> List[TestSuite]:
    """
    Build a test target and list the suites it contains.

    Returns:
        Suites in collection order; empty when nothing was collected

    Raises:
        ToolchainError: If locating, building, launching or parsing fails
    """
    tool = toolchain.locate_test_discovery_tool()
    env = construct_test_environment(toolchain, configuration)

    if configuration.should_skip_building:
        logger.debug(f"Skipping build of {target.name}")
    else:
        build_test_target(target, toolchain, env)

    args = tool + ["--collect-only", "-q", str(target.path)]
    result = run_process(args, env=env, cwd=cwd, step="discover")

    if result.returncode == NO_TESTS_COLLECTED:
        logger.info(f"No tests collected from {target.name}")
        return []
    if result.returncode != 0:
        # pytest reports collection errors on stdout
        raise NonZeroExitError(args, result.returncode,
                               result.stderr or result.stdout, step="discover")

    return parse_collected_tests(result.stdout, context=" ".join(args))


def get_test_suites_for_targets(targets: List[TestTarget], toolchain: Toolchain,
                                configuration: TestConfiguration,
                                cwd: Optional[Union[str, Path]] = None
                                ) -> Dict[Path, List[TestSuite]]:
    """
    Discover suites for several targets.

    Raises:
        ValueError: If two targets share a path
    """
    suites_by_target: Dict[Path, List[TestSuite]] = {}
    for target in targets:
        if target.path in suites_by_target:
            raise ValueError(f"Duplicate test target: {target.path}")
        suites_by_target[target.path] = get_test_suites(target, toolchain, configuration, cwd)
    return suites_by_target


def parse_collected_tests(output: str, context: Optional[str] = None) -> List[TestSuite]:
    """
    Parse ``pytest --collect-only -q`` output into suites.

    Raises:
        MalformedOutputError: If a line is neither a node id nor the summary
    """
    suites: Dict[str, TestSuite] = {}

    for line in output.splitlines():
        line = line.strip()
        if not line or _SUMMARY_RE.match(line):
            break
        if "::" not in line:
            raise MalformedOutputError("Unexpected line in test listing", context, line)

        suite_name, _, test_name = line.rpartition("::")
        if not suite_name or not test_name:
            raise MalformedOutputError("Incomplete test id in test listing", context, line)
        suites.setdefault(suite_name, TestSuite(name=suite_name)).tests.append(test_name)

    return list(suites.values())
