"""Tests for the source and output buffers."""

import sys

import pytest

from cpp_scratchpad.buffers import DIAGNOSTICS, TERMINAL, OutputBuffer, SourceBuffer


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "main.cpp"
    path.write_text("int main() { $ }\n")
    return SourceBuffer.visit(path)


class TestSourceBuffer:
    def test_visit(self, source):
        assert source.text == "int main() { $ }\n"
        assert source.point == 0
        assert not source.modified

    def test_take_marker(self, source):
        assert source.take_marker("$") == 13
        assert source.text == "int main() {  }\n"
        assert source.point == 13
        assert source.modified

    def test_take_marker_only_first(self, tmp_path):
        buf = SourceBuffer(tmp_path / "x", "a$b$c")
        buf.take_marker("$")
        assert buf.text == "ab$c"

    def test_take_marker_absent(self, source):
        assert source.take_marker("@") == -1
        assert source.text == "int main() { $ }\n"
        assert not source.modified

    def test_insert_and_save(self, source):
        source.take_marker("$")
        source.insert("return 0;")
        assert source.save()
        assert source.path.read_text() == "int main() { return 0; }\n"
        assert not source.modified

    def test_save_unmodified_is_noop(self, source):
        assert not source.save()

    def test_revert(self, source):
        source.point = 10
        source.path.write_text("x\n")
        source.revert()
        assert source.text == "x\n"
        assert source.point == 2

    def test_close_runs_hooks_once(self, source):
        calls = []
        source.close_hooks.register(lambda: calls.append(1))
        source.close()
        source.close()
        assert calls == [1]
        assert source.closed


class TestOutputBuffer:
    def test_write_and_echo(self, tmp_path, capsys):
        out = OutputBuffer("out", tmp_path, echo=sys.stdout)
        out.write("line 1\n")
        out.write("line 2\n")
        assert out.text == "line 1\nline 2\n"
        assert capsys.readouterr().out == "line 1\nline 2\n"

    def test_diagnostics_is_read_only(self, tmp_path):
        out = OutputBuffer("out", tmp_path)
        out.enter_diagnostics()
        assert out.mode == DIAGNOSTICS
        with pytest.raises(RuntimeError, match="read-only"):
            out.write("x")

    def test_send_requires_terminal(self, tmp_path):
        out = OutputBuffer("out", tmp_path, runner=lambda c, d: 0)
        out.enter_diagnostics()
        with pytest.raises(RuntimeError, match="not a terminal"):
            out.send("ls")

    def test_send_in_terminal(self, tmp_path):
        calls = []
        out = OutputBuffer("out", tmp_path, runner=lambda c, d: calls.append((c, d)) or 3)
        out.enter_terminal()
        assert out.mode == TERMINAL
        assert out.send("./a.out") == 3
        assert calls == [("./a.out", tmp_path)]
        assert out.sent == ["./a.out"]

    def test_default_runner_uses_shell(self, tmp_path, capfd):
        out = OutputBuffer("out", tmp_path)
        out.enter_terminal()
        assert out.send("echo from-terminal && exit 4") == 4
        assert "from-terminal" in capfd.readouterr().out

    def test_killed_buffer_rejects_send(self, tmp_path):
        out = OutputBuffer("out", tmp_path, runner=lambda c, d: 0)
        out.enter_terminal()
        out.kill()
        assert not out.live
        with pytest.raises(RuntimeError, match="killed"):
            out.send("ls")
