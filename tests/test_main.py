"""
Tests for the nulenv command line.
"""

import errno
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from nulenv import __version__
from nulenv import main as nulenv_main
from nulenv.main import cli


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, args, input=None, **kwargs):
    return runner.invoke(cli, ["--color", "never", *args], input=input, **kwargs)


class TestOutput:
    """Test printing from stdin and files."""

    def test_stdin_default(self, runner):
        """With no FILE the dump is read from stdin."""
        result = invoke(runner, [], input=b"PATH=/bin\0HOME=/root\0")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"PATH=/bin\nHOME=/root\n"

    def test_stdin_dash_with_pattern(self, runner):
        """'-' reads stdin so patterns can follow."""
        result = invoke(runner, ["-", "B"], input=b"A=1\0B=2\0C=3\0")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"B=2\n"

    def test_file(self, runner, tmp_path):
        """A FILE path is read directly."""
        dump = tmp_path / "environ"
        dump.write_bytes(b"EMPTY=\0KEY=val\0")
        result = invoke(runner, [str(dump)])
        assert result.exit_code == 0
        assert result.stdout_bytes == b"EMPTY=\nKEY=val\n"

    def test_sort(self, runner):
        """--sort orders records by name."""
        result = invoke(runner, ["--sort"], input=b"b=1\0a=2\0a=3\0")
        assert result.stdout_bytes == b"a=2\na=3\nb=1\n"

    def test_glob_case_sensitive(self, runner):
        """-g and -s switch pattern syntax and case handling."""
        data = b"lc_x=1\0LC_ALL=C\0LANG=C\0"
        result = invoke(runner, ["-g", "-s", "-", "LC_*"], input=data)
        assert result.stdout_bytes == b"LC_ALL=C\n"

    def test_multiple_patterns(self, runner):
        """Any matching pattern selects a record."""
        result = invoke(runner, ["-", "^HOME$", "^PATH$"], input=b"HOME=/\0PATH=/bin\0TERM=xterm\0")
        assert result.stdout_bytes == b"HOME=/\nPATH=/bin\n"

    def test_color_always(self, runner):
        """--color always emits escapes even into a pipe."""
        result = runner.invoke(cli, ["--color", "always"], input=b"A=1\0")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"\x1b[32mA\x1b[0m\x1b[34m=\x1b[0m1\n"

    def test_non_utf8(self, runner):
        """Binary content passes through unchanged."""
        result = invoke(runner, [], input=b"K\xff=\xfe\x80\0")
        assert result.stdout_bytes == b"K\xff=\xfe\x80\n"

    @pytest.mark.skipif(not Path("/proc/self/environ").exists(), reason="needs /proc")
    def test_pid(self, runner):
        """--pid reads the environment of a running process."""
        result = invoke(runner, ["--pid", str(os.getpid())])
        assert result.exit_code == 0


class TestErrors:
    """Test failures and exit codes."""

    def test_invalid_regex(self, runner):
        """A bad regex exits 1 and names the pattern."""
        result = invoke(runner, ["-", "("], input=b"A=1\0")
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "invalid regex '('" in result.output

    def test_invalid_glob(self, runner):
        """A bad glob exits 1 and names the pattern."""
        result = invoke(runner, ["-g", "-", "[abc"], input=b"A=1\0")
        assert result.exit_code == 1
        assert "invalid glob '[abc'" in result.output

    def test_pattern_checked_before_input(self, runner, tmp_path):
        """Pattern errors win over a missing file."""
        result = invoke(runner, [str(tmp_path / "missing"), "("])
        assert result.exit_code == 1
        assert "invalid regex" in result.output

    def test_bad_pid(self, runner):
        """A non-numeric PID exits 1."""
        result = invoke(runner, ["--pid", "abc"])
        assert result.exit_code == 1
        assert "failed to parse PID argument as integer" in result.output

    def test_missing_file(self, runner, tmp_path):
        """An unreadable FILE exits 1 with context."""
        result = invoke(runner, [str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "failed to read" in result.output

    def test_pid_requires_file(self, runner):
        """--pid without FILE is a usage error."""
        result = invoke(runner, ["--pid"])
        assert result.exit_code == 2
        assert "--pid requires FILE" in result.output

    @pytest.mark.parametrize("flag", ["--glob", "--case-sensitive"])
    def test_pattern_flags_require_pattern(self, runner, flag):
        """-g and -s without PATTERN are usage errors."""
        result = invoke(runner, [flag, "-"], input=b"")
        assert result.exit_code == 2

    def test_broken_pipe_is_silent(self, runner, monkeypatch):
        """A closed pipe exits 1 without a message."""
        def closed_pipe(*args, **kwargs):
            raise BrokenPipeError(errno.EPIPE, "Broken pipe")

        monkeypatch.setattr(nulenv_main, "print_env", closed_pipe)
        result = invoke(runner, [], input=b"A=1\0")
        assert result.exit_code == 1
        assert "Error" not in result.output


class TestConfiguration:
    """Test environment and meta options."""

    def test_env_var_options(self, runner):
        """NULENV_* variables set options."""
        result = runner.invoke(
            cli, [], input=b"b=1\0a=2\0",
            env={"NULENV_SORT": "1", "NULENV_COLOR": "never"},
            auto_envvar_prefix="NULENV",
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == b"a=2\nb=1\n"

    def test_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_logs_to_stderr(self, runner):
        """-v adds debug logging without touching the records."""
        result = invoke(runner, ["-v"], input=b"A=1\0")
        assert result.exit_code == 0
        assert "wrote 1 record(s)" in result.output

    def test_quiet_by_default(self, runner):
        """Without -v no debug records are logged."""
        result = invoke(runner, [], input=b"A=1\0")
        assert result.exit_code == 0
        assert "wrote 1 record(s)" not in result.output
