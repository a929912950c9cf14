"""
Synacor VM - Command Line Runner Tests

Drives synvm.main() with program images written to tmp_path.
"""

import sys
import os
import io
import struct
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import synvm

R0 = 32768


def _write_program(tmp_path, *words, name="prog.bin"):
    path = tmp_path / name
    path.write_bytes(struct.pack(f'<{len(words)}H', *words))
    return path


class TestRunner:

    def test_hello_then_halt_message(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 19, ord('H'), 19, ord('i'), 19, 10, 0)
        assert synvm.main([str(prog)]) == 0
        out = capsysbinary.readouterr().out
        assert out.startswith(b"Hi\n")
        assert b"The machine halted." in out

    def test_fault_message(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 18)
        assert synvm.main([str(prog)]) == 0
        assert b"stack underflowed" in capsysbinary.readouterr().out

    def test_bad_opcode_message(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 99)
        synvm.main([str(prog)])
        assert b"opcode 99" in capsysbinary.readouterr().out

    def test_input_from_stdin(self, tmp_path, capsysbinary, monkeypatch):
        monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b"Z")))
        prog = _write_program(tmp_path, 20, R0, 19, R0, 0)
        synvm.main([str(prog)])
        out = capsysbinary.readouterr().out
        assert out.startswith(b"Z")
        assert b"The machine halted." in out

    def test_stdin_exhausted(self, tmp_path, capsysbinary, monkeypatch):
        monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b"")))
        prog = _write_program(tmp_path, 20, R0, 0)
        synvm.main([str(prog)])
        assert b"end of file" in capsysbinary.readouterr().out

    def test_max_steps(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 6, 0)
        synvm.main([str(prog), "--max-steps", "0x10"])
        assert b"Stopped after 16 steps." in capsysbinary.readouterr().out

    def test_missing_program(self, tmp_path, capsys):
        assert synvm.main([str(tmp_path / "nope.bin")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_default_program_name(self, tmp_path, capsysbinary, monkeypatch):
        _write_program(tmp_path, 0, name="challenge.bin")
        monkeypatch.chdir(tmp_path)
        assert synvm.main([]) == 0
        assert b"The machine halted." in capsysbinary.readouterr().out

    def test_serial_loopback(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 19, 65, 20, R0, 4, 32769, R0, 65, 7, 32769, 12, 18, 0)
        assert synvm.main([str(prog), "--serial", "loop://"]) == 0
        assert b"The machine halted." in capsysbinary.readouterr().out

    def test_serial_open_failure(self, tmp_path, capsys):
        prog = _write_program(tmp_path, 0)
        assert synvm.main([str(prog), "--serial", str(tmp_path / "tty")]) == 1
        assert "cannot open serial port" in capsys.readouterr().err

    def test_log_file(self, tmp_path, capsysbinary):
        prog = _write_program(tmp_path, 21, 0)
        log_path = tmp_path / "logs" / "run.log"
        synvm.main([str(prog), "--log-file", str(log_path)])
        text = log_path.read_text(encoding='utf-8')
        assert "Loaded 2 words" in text
        assert "Halted at 1" in text

    def test_parse_int_arg(self):
        assert synvm.parse_int_arg("0x20") == 32
        assert synvm.parse_int_arg(" 17 ") == 17

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            synvm.main(["--version"])
        assert "synvm" in capsys.readouterr().out
