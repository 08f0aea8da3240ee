import io
import sys

import pytest

from bfvm import cli


@pytest.fixture
def program_file(tmp_path):
    def write(code, name="prog.bf"):
        path = tmp_path / name
        path.write_text(code)
        return str(path)
    return write


@pytest.fixture
def data_file(tmp_path):
    def write(data):
        path = tmp_path / "input.bin"
        path.write_bytes(bytes(data))
        return str(path)
    return write


def piped_stdin(data: bytes):
    return io.TextIOWrapper(io.BytesIO(data))


class TestRunFile:
    def test_hello_world(self, program_file, hello_world, capsys):
        assert cli.main(["-f", program_file(hello_world)]) == 0
        assert capsys.readouterr().out == "Hello, World!"

    def test_with_input_data(self, program_file, data_file, add_two, capsys):
        assert cli.main(["-f", program_file(add_two), "-d", data_file([3, 2])]) == 0
        assert capsys.readouterr().out == "\x05"

    def test_unclosed_loop_fails(self, program_file, capsys):
        assert cli.main(["-f", program_file("+[")]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_program_file(self, tmp_path):
        assert cli.main(["-f", str(tmp_path / "nope.bf")]) == 1

    def test_missing_data_file(self, program_file, tmp_path):
        assert cli.main(["-f", program_file(",."), "-d", str(tmp_path / "nope.bin")]) == 1

    def test_input_exhausted_is_a_clean_stop(self, program_file, capsys):
        assert cli.main(["-f", program_file("+++.,.")]) == 0
        assert capsys.readouterr().out == "\x03"

    def test_on_eof_unchanged(self, program_file, capsys):
        assert cli.main(["-f", program_file("+++,."), "--on-eof", "unchanged"]) == 0
        assert capsys.readouterr().out == "\x03"

    def test_strict_rejects_comments(self, program_file):
        assert cli.main(["-f", program_file("+ add one"), "--strict"]) == 1

    def test_step_limit_flag(self, program_file):
        assert cli.main(["-f", program_file("+[]"), "--step-limit", "100"]) == 1

    def test_step_limit_from_env(self, program_file, monkeypatch):
        monkeypatch.setenv("BF_STEP_LIMIT", "100")
        assert cli.main(["-f", program_file("+[]")]) == 1

    def test_step_limit_zero_means_unlimited(self, program_file, monkeypatch, capsys):
        monkeypatch.setenv("BF_STEP_LIMIT", "1")
        assert cli.main(["-f", program_file("+++."), "--step-limit", "0"]) == 0
        assert capsys.readouterr().out == "\x03"

    def test_invalid_config(self, program_file):
        assert cli.main(["-f", program_file("+"), "--step-limit", "-1"]) == 2


class TestPipedProgram:
    def test_program_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", piped_stdin(b"++++++++[>++++++++<-]>+."))
        assert cli.main([]) == 0
        assert capsys.readouterr().out == "A"

    def test_interactive_after_file(self, program_file, monkeypatch, capsys):
        calls = []
        monkeypatch.setattr(cli, "_start_repl", calls.append)
        assert cli.main(["-f", program_file("+"), "-i"]) == 0
        assert len(calls) == 1
        assert calls[0].dump().cell == 1

    def test_interactive_without_terminal(self, monkeypatch, capsys):
        """Piped program, -i, and no controlling terminal to talk to."""
        def no_tty(*args, **kwargs):
            raise OSError("No such device or address: '/dev/tty'")

        monkeypatch.setattr(sys, "stdin", piped_stdin(b"+++."))
        monkeypatch.setattr(cli, "open", no_tty, raising=False)
        assert cli.main(["-i"]) == 1
        assert capsys.readouterr().out == "\x03"
