"""Tests for external command execution."""

import sys

from engines.command import run_command


def test_zero_exit_is_success():
    assert run_command(sys.executable, ["-c", "import sys; sys.exit(0)"])


def test_nonzero_exit_is_failure():
    assert not run_command(sys.executable, ["-c", "import sys; sys.exit(3)"])


def test_missing_program_is_failure(tmp_path):
    assert not run_command(str(tmp_path / "no-such-tool"), ["a", "b"])


def test_arguments_passed_verbatim(tmp_path):
    out = tmp_path / "args.txt"
    script = "import sys; open(sys.argv[1], 'w').write('|'.join(sys.argv[2:]))"
    assert run_command(sys.executable, ["-c", script, str(out), "-q", "80", "a b"])
    assert out.read_text() == "-q|80|a b"


def test_quiet_discards_output(capfd):
    assert run_command(sys.executable, ["-c", "print('hello from tool')"], quiet=True)
    assert "hello from tool" not in capfd.readouterr().out


def test_output_passes_through(capfd):
    assert run_command(sys.executable, ["-c", "print('hello from tool')"], quiet=False)
    assert "hello from tool" in capfd.readouterr().out
