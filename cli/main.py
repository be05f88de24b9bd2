"""
Main CLI entry point for pkg-learn.

This module provides the command-line interface with the global options and the
commands of the package browser. ``learn`` runs the interactive session and
``list-tests`` lists the discovered tests without it.
"""

import sys
import logging
import platform
from functools import wraps
from typing import Tuple

import click

from cli.cards import TopCard
from cli.context import (
    BUILD_PATH_VARIABLE, PACKAGE_PATH_VARIABLE, LearnContext, pass_context, resolve_colorize
)
from cli.exceptions import CLIError
from cli.formatters import (
    display_summary, format_json, format_table, print_error, print_info,
    print_success, print_warning, setup_logging
)
from cli.terminal import ClickTerminal
from cli.version import __version__, get_version_info
from navigation.card_stack import CardStack
from toolchain.exceptions import ToolchainError
from toolchain.models import Sanitizer, TestConfiguration
from toolchain.testing_support import get_test_suites_for_targets


logger = logging.getLogger(__name__)


def test_options(f):
    """Add the options that configure building and discovering tests."""
    options = [
        click.option('--enable-code-coverage', is_flag=True,
                     help='Write coverage data to a unique file per test process'),
        click.option('--sanitize', 'sanitizers', multiple=True,
                     type=click.Choice([s.value for s in Sanitizer]),
                     help='Preload a sanitizer runtime into test processes (repeatable)'),
        click.option('--skip-build', is_flag=True,
                     help='Do not byte-compile targets and snippets before using them'),
        click.option('--experimental-test-output', is_flag=True,
                     help='Ask test processes for experimental output'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _test_configuration(enable_code_coverage: bool, sanitizers: Tuple[str, ...],
                        skip_build: bool, experimental_test_output: bool) -> TestConfiguration:
    return TestConfiguration(
        enable_code_coverage=enable_code_coverage,
        sanitizers=tuple(Sanitizer(value) for value in sanitizers),
        should_skip_building=skip_build,
        experimental_test_output=experimental_test_output
    )


def handle_cli_errors(f):
    """Turn errors escaping a command into a message and an exit code."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except CLIError as e:
            # Commands taking a LearnContext receive it first
            colorize = getattr(args[0], "colorize", True) if args else True
            print_error(str(e), colorize=colorize)
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            click.echo("")
            print_info("Interrupted by user.")
            sys.exit(130)
        except Exception as e:
            logger.exception(f"{f.__name__} failed")
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return wrapper


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-essential output')
@click.option('--package-path', type=click.Path(file_okay=False), default=".",
              envvar=PACKAGE_PATH_VARIABLE, show_default=True,
              help='Root directory of the package to browse')
@click.option('--build-path', type=click.Path(file_okay=False), default=None,
              envvar=BUILD_PATH_VARIABLE,
              help='Directory for build artifacts [default: <package>/.build]')
@click.option('--color/--no-color', default=None,
              help='Force colored output on or off [default: on for terminals]')
@click.version_option(version=__version__, prog_name="pkg-learn")
@click.pass_context
def cli(ctx, verbose, quiet, package_path, build_path, color):
    """
    pkg-learn - browse a package's snippets and tests

    Shows the snippets kept in a package's Snippets directory and runs them on
    request. The tests of its test targets can be listed as well.

    Examples:
        # Browse the package in the current directory
        pkg-learn

        # Browse another package with code coverage enabled for tests
        pkg-learn --package-path ../mylib learn --enable-code-coverage

        # List all tests without the interactive browser
        pkg-learn list-tests --format json
    """
    learn_ctx = LearnContext()
    learn_ctx.verbose = verbose
    learn_ctx.quiet = quiet
    learn_ctx.package_path = package_path
    learn_ctx.build_path = build_path
    learn_ctx.colorize = resolve_colorize(color)
    ctx.obj = learn_ctx

    setup_logging(verbose, quiet)

    if ctx.invoked_subcommand is None:
        ctx.invoke(learn)


@cli.command()
@test_options
@pass_context
@handle_cli_errors
def learn(ctx, enable_code_coverage, sanitizers, skip_build, experimental_test_output):
    """
    Browse snippets and tests interactively.

    Choose entries by name or number and press return to go back. Enter
    'q' to quit.
    """
    ctx.test_configuration = _test_configuration(
        enable_code_coverage, sanitizers, skip_build, experimental_test_output
    )

    package = ctx.get_package()
    root = TopCard(ctx, package, ctx.get_snippet_groups(), ctx.get_test_targets())

    terminal = ClickTerminal.acquire(ctx.colorize)
    stack = CardStack(terminal, root, colorize=ctx.colorize)
    outcome = stack.run()
    logger.debug(f"Interactive session for {package.name} ended: {outcome.value}")


@cli.command(name='list-tests')
@test_options
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@pass_context
@handle_cli_errors
def list_tests(ctx, enable_code_coverage, sanitizers, skip_build,
               experimental_test_output, output_format):
    """List the tests of every test target of the package."""
    ctx.test_configuration = _test_configuration(
        enable_code_coverage, sanitizers, skip_build, experimental_test_output
    )

    package = ctx.get_package()
    targets = ctx.get_test_targets()
    if not targets:
        print_warning(f"No test targets found in {package.tests_directory}")
        return

    try:
        suites_by_target = get_test_suites_for_targets(
            targets, ctx.get_toolchain(), ctx.test_configuration, cwd=package.root
        )
    except ToolchainError as e:
        raise CLIError(f"Test discovery failed: {e}", exit_code=6) from e

    names = {target.path: target.name for target in targets}

    if output_format == 'json':
        click.echo(format_json({
            names[path]: [{"suite": suite.name, "tests": suite.tests} for suite in suites]
            for path, suites in suites_by_target.items()
        }))
        return

    rows = []
    for path, suites in suites_by_target.items():
        for suite in suites:
            rows.append({"Target": names[path], "Suite": suite.name, "Tests": len(suite.tests)})
    click.echo(format_table(rows))

    total = sum(row["Tests"] for row in rows)
    print_success(f"Found {total} tests in {len(targets)} test targets")


@cli.command()
@click.option('--detailed', is_flag=True, help='Show detailed version and system information')
@handle_cli_errors
def version(detailed):
    """Display version and system information."""
    version_info = get_version_info()
    click.echo(f"pkg-learn v{version_info['version']}")

    if detailed:
        system_info = {
            'Application Version': version_info['version'],
            'Base Version': version_info['base_version'],
            'Python Version': version_info['python_version'],
            'Platform': platform.platform(),
            'Python Executable': sys.executable,
        }
        if version_info['git_available']:
            system_info.update({
                'Git Commit': version_info['commit_hash'],
                'Commit Count': version_info['commit_count'],
                'Repository Status': 'Modified' if version_info['dirty'] else 'Clean'
            })
        else:
            system_info['Git Status'] = 'Not available'
        display_summary("Detailed System Information", system_info)


if __name__ == "__main__":
    cli()
