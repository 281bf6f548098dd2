"""Tests for ecsdeploy.platform.process."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from ecsdeploy.core.result import Err, Ok
from ecsdeploy.platform.process import ProcessError, run, run_silent


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "rev-parse"),
            returncode=128,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git rev-parse failed (exit 128)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("aws", "ecs", "update-service", "--cluster", "c"),
            returncode=255,
            stdout="",
            stderr="",
        )
        assert str(error) == "aws ecs update-service ... failed (exit 255)"

    def test_str_timed_out(self) -> None:
        error = ProcessError(("aws", "ecs", "wait"), -1, "", "", timed_out=True)
        assert str(error) == "aws ecs wait timed out"

    def test_details_prefers_stderr(self) -> None:
        assert ProcessError(("x",), 1, "out", " err \n").details == "err"
        assert ProcessError(("x",), 1, "out\n", "").details == "out"
        assert ProcessError(("x",), 1, "", "").details == "x failed (exit 1)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(42)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert result.error.stderr == "bad"

    def test_input_is_written_to_stdin(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; print(sys.stdin.read().upper())"],
            cwd=tmp_path,
            input="secret",
        )

        assert isinstance(result, Ok)
        assert result.value.strip() == "SECRET"

    def test_timeout(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            cwd=tmp_path,
            timeout=0.2,
        )

        assert isinstance(result, Err)
        assert result.error.timed_out
        assert result.error.returncode == -1

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert not result.error.timed_out


class TestRunSilent:
    def test_success(self, tmp_path: Path) -> None:
        assert run_silent([sys.executable, "-c", "pass"], cwd=tmp_path) == Ok(None)

    def test_failure(self, tmp_path: Path) -> None:
        result = run_silent([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 3
