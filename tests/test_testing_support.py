"""
Tests for the test environment, test discovery and output parsing.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from snippets.models import TestTarget
from toolchain.exceptions import (
    MalformedOutputError, NonZeroExitError, ToolNotFoundError
)
from toolchain.models import Sanitizer, TestConfiguration, TestSuite
from toolchain.testing_support import (
    COVERAGE_FILE_VARIABLE, EXPERIMENTAL_OUTPUT_VARIABLE, construct_test_environment,
    get_test_suites, get_test_suites_for_targets, parse_collected_tests,
    preload_variable, randomize_coverage_path
)
from toolchain.toolchain import Toolchain


COLLECTED = """\
tests/test_math.py::test_add
tests/test_math.py::test_subtract
tests/test_math.py::TestDivision::test_by_zero
tests/test_math.py::TestDivision::test_exact

4 tests collected in 0.01s
"""


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode,
                                       stdout=stdout, stderr=stderr)


class ConstructTestEnvironmentTests:
    """Tests for the environment handed to test processes."""

    def setup_method(self):
        self.toolchain = Toolchain("/usr/bin/python3", "cc", Path("/work/.build"))
        self.base_env = {"PATH": "/usr/bin", "HOME": "/home/user"}

    def build(self, configuration=None, base_env=None, tty=True, platform="linux"):
        return construct_test_environment(
            self.toolchain,
            configuration or TestConfiguration(),
            base_env=self.base_env if base_env is None else base_env,
            stdout_isatty=tty,
            stderr_isatty=tty,
            platform=platform
        )

    def test_copies_base_environment(self):
        env = self.build()

        assert env == self.base_env
        assert env is not self.base_env

    def test_no_color_when_output_is_not_a_terminal(self):
        assert self.build(tty=False)["NO_COLOR"] == "1"
        assert "NO_COLOR" not in self.build(tty=True)

    def test_no_color_when_only_stderr_is_redirected(self):
        env = construct_test_environment(
            self.toolchain, TestConfiguration(), base_env={},
            stdout_isatty=True, stderr_isatty=False
        )
        assert env["NO_COLOR"] == "1"

    def test_coverage_path_unique_per_call(self):
        configuration = TestConfiguration(enable_code_coverage=True)

        first = self.build(configuration)[COVERAGE_FILE_VARIABLE]
        second = self.build(configuration)[COVERAGE_FILE_VARIABLE]

        assert first != second
        assert Path(first).parent == Path("/work/.build/codecov")
        assert Path(first).name.startswith("default-")
        assert first.endswith(".coverage")

    def test_no_coverage_variable_when_disabled(self):
        assert COVERAGE_FILE_VARIABLE not in self.build()

    def test_randomize_coverage_path_replaces_value(self):
        env = {COVERAGE_FILE_VARIABLE: "old"}

        randomize_coverage_path(env, "/b", TestConfiguration(enable_code_coverage=True))

        assert env[COVERAGE_FILE_VARIABLE] != "old"

    def test_experimental_output_variable(self):
        env = self.build(TestConfiguration(experimental_test_output=True))

        assert env[EXPERIMENTAL_OUTPUT_VARIABLE] == "1"

    def test_sanitizer_runtimes_appended_to_existing_preload(self):
        configuration = TestConfiguration(sanitizers=(Sanitizer.ADDRESS, Sanitizer.UNDEFINED))
        base_env = {"LD_PRELOAD": "/opt/libfoo.so"}

        with patch.object(Toolchain, "runtime_library",
                          side_effect=[Path("/rt/libasan.so"), Path("/rt/libubsan.so")]):
            env = self.build(configuration, base_env=base_env)

        assert env["LD_PRELOAD"] == "/opt/libfoo.so:/rt/libasan.so:/rt/libubsan.so"

    def test_sanitizer_on_darwin_uses_insert_libraries(self):
        configuration = TestConfiguration(sanitizers=(Sanitizer.THREAD,))

        with patch.object(Toolchain, "runtime_library",
                          return_value=Path("/rt/libclang_rt.tsan_osx_dynamic.dylib")):
            env = self.build(configuration, platform="darwin")

        assert env["DYLD_INSERT_LIBRARIES"] == "/rt/libclang_rt.tsan_osx_dynamic.dylib"
        assert "LD_PRELOAD" not in env

    def test_missing_sanitizer_runtime_propagates(self):
        configuration = TestConfiguration(sanitizers=(Sanitizer.LEAK,))

        with patch.object(Toolchain, "runtime_library",
                          side_effect=ToolNotFoundError("leak sanitizer runtime")):
            with pytest.raises(ToolNotFoundError):
                self.build(configuration)

    def test_preload_variable(self):
        assert preload_variable("linux") == "LD_PRELOAD"
        assert preload_variable("darwin") == "DYLD_INSERT_LIBRARIES"


class ParseCollectedTestsTests:
    """Tests for parsing pytest's collection listing."""

    def test_groups_by_suite_in_order(self):
        suites = parse_collected_tests(COLLECTED)

        assert [s.name for s in suites] == [
            "tests/test_math.py", "tests/test_math.py::TestDivision"
        ]
        assert suites[0].tests == ["test_add", "test_subtract"]
        assert suites[1].tests == ["test_by_zero", "test_exact"]

    def test_empty_output(self):
        assert parse_collected_tests("") == []

    def test_stops_at_summary_without_blank_line(self):
        output = "t.py::test_a\n1 test collected in 0.00s\n"

        suites = parse_collected_tests(output)

        assert len(suites) == 1
        assert suites[0].tests == ["test_a"]

    def test_unexpected_line(self):
        with pytest.raises(MalformedOutputError) as exc_info:
            parse_collected_tests("ERROR collecting t.py\n", context="pytest")

        assert exc_info.value.step == "parse"
        assert exc_info.value.line == "ERROR collecting t.py"
        assert "pytest" in str(exc_info.value)

    def test_incomplete_node_id(self):
        with pytest.raises(MalformedOutputError):
            parse_collected_tests("t.py::\n")


class GetTestSuitesTests:
    """Tests for building a target and discovering its tests."""

    def setup_method(self):
        self.toolchain = Toolchain("/venv/bin/python", "cc", Path("/work/.build"))
        self.target = TestTarget(name="test_math", path=Path("/work/tests/test_math.py"))

        self.locate_patcher = patch.object(Toolchain, "locate_test_discovery_tool",
                                           return_value=["/venv/bin/pytest"])
        self.env_patcher = patch("toolchain.testing_support.construct_test_environment",
                                 return_value={"NO_COLOR": "1"})
        self.build_patcher = patch("toolchain.testing_support.check_non_zero_exit",
                                   return_value="")
        self.run_patcher = patch("toolchain.testing_support.run_process")

        self.mock_locate = self.locate_patcher.start()
        self.env_patcher.start()
        self.mock_build = self.build_patcher.start()
        self.mock_run = self.run_patcher.start()

    def teardown_method(self):
        patch.stopall()

    def test_builds_then_discovers(self):
        self.mock_run.return_value = completed(stdout=COLLECTED)

        suites = get_test_suites(self.target, self.toolchain, TestConfiguration(),
                                 cwd="/work")

        assert len(suites) == 2
        build_args = self.mock_build.call_args[0][0]
        assert build_args == ["/venv/bin/python", "-m", "py_compile",
                              "/work/tests/test_math.py"]
        assert self.mock_build.call_args[1]["step"] == "build"
        self.mock_run.assert_called_once_with(
            ["/venv/bin/pytest", "--collect-only", "-q", "/work/tests/test_math.py"],
            env={"NO_COLOR": "1"}, cwd="/work", step="discover"
        )

    def test_skip_build(self):
        self.mock_run.return_value = completed(stdout=COLLECTED)

        get_test_suites(self.target, self.toolchain,
                        TestConfiguration(should_skip_building=True))

        self.mock_build.assert_not_called()

    def test_build_failure_stops_discovery(self):
        self.mock_build.side_effect = NonZeroExitError(
            ["python"], 1, "SyntaxError: invalid syntax", step="build"
        )

        with pytest.raises(NonZeroExitError) as exc_info:
            get_test_suites(self.target, self.toolchain, TestConfiguration())

        assert exc_info.value.step == "build"
        self.mock_run.assert_not_called()

    def test_nothing_collected_is_empty(self):
        self.mock_run.return_value = completed(returncode=5, stdout="no tests ran in 0.01s\n")

        assert get_test_suites(self.target, self.toolchain, TestConfiguration()) == []

    def test_collection_error(self):
        self.mock_run.return_value = completed(
            returncode=2, stdout="ERROR tests/test_math.py - ImportError: no module\n"
        )

        with pytest.raises(NonZeroExitError) as exc_info:
            get_test_suites(self.target, self.toolchain, TestConfiguration())

        assert exc_info.value.step == "discover"
        assert exc_info.value.exit_code == 2
        assert "ImportError" in str(exc_info.value)

    def test_tool_not_found(self):
        self.mock_locate.side_effect = ToolNotFoundError("pytest")

        with pytest.raises(ToolNotFoundError):
            get_test_suites(self.target, self.toolchain, TestConfiguration())

        self.mock_build.assert_not_called()

    def test_suites_for_several_targets(self):
        self.mock_run.return_value = completed(stdout=COLLECTED)
        other = TestTarget(name="test_other", path=Path("/work/tests/test_other.py"))

        result = get_test_suites_for_targets([self.target, other], self.toolchain,
                                             TestConfiguration())

        assert list(result) == [self.target.path, other.path]
        assert self.mock_run.call_count == 2

    def test_duplicate_targets_rejected(self):
        self.mock_run.return_value = completed(stdout=COLLECTED)
        duplicate = TestTarget(name="again", path=self.target.path)

        with pytest.raises(ValueError, match="Duplicate"):
            get_test_suites_for_targets([self.target, duplicate], self.toolchain,
                                        TestConfiguration())


class SuitesForTargetsTests:
    """Tests for discovering the suites of several targets at once."""

    def setup_method(self):
        self.toolchain = Toolchain("/venv/bin/python", "cc", Path("/work/.build"))
        self.configuration = TestConfiguration(should_skip_building=True)
        self.targets = [
            TestTarget(name="unit/math_test", path=Path("/work/tests/unit/math_test.py")),
            TestTarget(name="test_api", path=Path("/work/tests/test_api.py")),
            TestTarget(name="test_cli", path=Path("/work/tests/test_cli.py")),
        ]

    @staticmethod
    def suites_named_after(target, toolchain, configuration, cwd=None):
        return [TestSuite(name=f"tests/{target.name}.py", tests=["test_ok"])]

    @patch("toolchain.testing_support.get_test_suites")
    def test_mapping_keyed_by_path_in_target_order(self, mock_suites):
        mock_suites.side_effect = self.suites_named_after

        result = get_test_suites_for_targets(self.targets, self.toolchain,
                                             self.configuration, cwd="/work")

        assert list(result) == [t.path for t in self.targets]
        assert result[Path("/work/tests/test_api.py")] == [
            TestSuite(name="tests/test_api.py", tests=["test_ok"])
        ]
        assert [c[0][0] for c in mock_suites.call_args_list] == self.targets
        for call in mock_suites.call_args_list:
            assert call[0][1] is self.toolchain
            assert call[0][2] is self.configuration
            assert call[0][3] == "/work"

    @patch("toolchain.testing_support.get_test_suites")
    def test_empty_target_list(self, mock_suites):
        assert get_test_suites_for_targets([], self.toolchain, self.configuration) == {}
        mock_suites.assert_not_called()

    @patch("toolchain.testing_support.get_test_suites")
    def test_duplicate_path_raises_before_discovering_it_twice(self, mock_suites):
        mock_suites.side_effect = self.suites_named_after
        duplicate = TestTarget(name="math_again", path=self.targets[0].path)

        with pytest.raises(ValueError, match="Duplicate test target"):
            get_test_suites_for_targets([self.targets[0], self.targets[1], duplicate],
                                        self.toolchain, self.configuration)

        assert mock_suites.call_count == 2

    @patch("toolchain.testing_support.get_test_suites")
    def test_failure_of_one_target_propagates(self, mock_suites):
        mock_suites.side_effect = [
            [TestSuite(name="tests/unit/math_test.py", tests=["test_ok"])],
            NonZeroExitError(["pytest"], 2, "collection error", step="discover"),
        ]

        with pytest.raises(NonZeroExitError):
            get_test_suites_for_targets(self.targets, self.toolchain, self.configuration)
