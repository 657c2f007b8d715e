"""Tests for the killtree command line."""

import pytest
from click.testing import CliRunner

from killtree import cli as cli_module
from killtree.cli import cli, format_output
from killtree.config import Config
from killtree.errors import InvalidProcessIdError, TerminationError
from killtree.models import Killed, MaybeAlreadyTerminated


@pytest.fixture
def calls(monkeypatch):
    """Capture kill_tree calls and answer with a fixed result."""
    recorded = []

    def fake_kill_tree(process_id, config):
        recorded.append((process_id, config))
        return [
            MaybeAlreadyTerminated(process_id=11, source=ProcessLookupError()),
            Killed(process_id=10, parent_process_id=1, name="sh"),
        ]

    monkeypatch.setattr(cli_module, "kill_tree", fake_kill_tree)
    return recorded


def test_format_killed():
    """Test the line printed for a killed process."""
    line = format_output(Killed(process_id=10, parent_process_id=1, name="sh"))
    assert line == "Killed process. process id: 10, parent process id: 1, name: sh"


def test_format_maybe_already_terminated():
    """Test the line printed for a maybe-gone process."""
    line = format_output(MaybeAlreadyTerminated(process_id=11, source=ProcessLookupError()))
    assert line == "Maybe already terminated process. process id: 11"


class TestCli:
    """Tests for the click command."""

    def test_prints_outputs(self, calls):
        """Test each output is printed in order."""
        result = CliRunner().invoke(cli, ["10"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Maybe already terminated process. process id: 11",
            "Killed process. process id: 10, parent process id: 1, name: sh",
        ]
        assert calls == [(10, Config())]

    def test_options_build_config(self, calls):
        """Test signal and include-target options reach the Config."""
        result = CliRunner().invoke(cli, ["10", "--signal", "SIGTERM", "--no-include-target"])

        assert result.exit_code == 0
        assert calls == [(10, Config(signal="SIGTERM", include_target=False))]

    def test_quiet(self, calls):
        """Test --quiet prints nothing on success."""
        result = CliRunner().invoke(cli, ["10", "--quiet"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_rejects_negative_id(self, calls):
        """Test a negative id is a usage error."""
        result = CliRunner().invoke(cli, ["--", "-5"])

        assert result.exit_code == 2
        assert calls == []

    @pytest.mark.parametrize(
        "error",
        [
            InvalidProcessIdError(1, "Not allowed to kill init process"),
            TerminationError(10, "Operation not permitted"),
        ],
    )
    def test_error_exits_1(self, monkeypatch, error):
        """Test a killtree error is printed and exits with status 1."""

        def failing_kill_tree(process_id, config):
            raise error

        monkeypatch.setattr(cli_module, "kill_tree", failing_kill_tree)

        result = CliRunner().invoke(cli, ["1"])

        assert result.exit_code == 1
        assert str(error) in result.output
