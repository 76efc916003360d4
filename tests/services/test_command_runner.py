import os
import sys

import pytest

from pgauditsetup.errors import SetupError
from pgauditsetup.services.command_runner import CommandRunner


class DummyLogger:
    def info(self, *_args, **_kwargs):
        return None

    def debug(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


class FakeRunLog:
    def __init__(self):
        self.entries = []

    def record(self, message):
        self.entries.append(message)


def test_command_runner_raises_with_stderr():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(SetupError, match="boom"):
        runner.run([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"])


def test_command_runner_reports_exit_status_without_stderr():
    run_log = FakeRunLog()
    runner = CommandRunner(logger=DummyLogger(), run_log=run_log)

    with pytest.raises(SetupError, match=r"Command failed \(3\)"):
        runner.run([sys.executable, "-c", "import sys; sys.exit(3)"])

    assert run_log.entries[-1] == "Exit status 3"


def test_command_runner_reports_missing_executable():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(SetupError, match="Required command not found"):
        runner.run(["pgaudit-setup-no-such-binary", "--version"])


def test_command_runner_records_command_and_output():
    run_log = FakeRunLog()
    runner = CommandRunner(logger=DummyLogger(), run_log=run_log)

    runner.run([sys.executable, "-c", "print('hello')"])

    assert run_log.entries[0].startswith("Running: ")
    assert "hello" in run_log.entries[0]
    assert run_log.entries[1] == "hello"


def test_command_runner_skips_output_when_not_logged():
    run_log = FakeRunLog()
    runner = CommandRunner(logger=DummyLogger(), run_log=run_log)

    runner.run([sys.executable, "-c", "print('noisy')"], log_output=False)

    assert len(run_log.entries) == 1
    assert run_log.entries[0].startswith("Running: ")


def test_command_runner_records_failure_output():
    run_log = FakeRunLog()
    runner = CommandRunner(logger=DummyLogger(), run_log=run_log)

    with pytest.raises(SetupError):
        runner.run(
            [
                sys.executable,
                "-c",
                "import sys; print('halfway'); sys.stderr.write('broken'); sys.exit(2)",
            ]
        )

    assert run_log.entries[1:] == ["Error running command:", "halfway", "broken"]


def test_command_runner_passes_environment():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import os; print(os.environ['PGAUDIT_TEST_VALUE'])"],
        env=dict(os.environ, PGAUDIT_TEST_VALUE="visible-to-child"),
    )

    assert result.stdout.strip() == "visible-to-child"
