from __future__ import annotations

"""
Unit tests for the report fan-out.

Verifies ordered delivery to every sink, scoped open/close, truncation of the
report file and mapping of I/O failures to ReportWriteError.
"""

import contextlib
import io

import pytest

from driveaudit.domain.config import validate_config
from driveaudit.domain.errors import ReportWriteError
from driveaudit.infra.reporter import ConsoleSink, FileSink, Reporter, open_reporter


def test_emit_reaches_all_sinks_in_order(list_sink, tmp_path):
    path = tmp_path / "out.txt"
    with Reporter([list_sink, FileSink(str(path))]) as reporter:
        reporter.emit("first")
        reporter.emit("second ✓")

    assert list_sink.lines == ["first", "second ✓"]
    assert path.read_text(encoding="utf-8") == "first\nsecond ✓\n"
    assert reporter.lines_emitted == 2


def test_sinks_closed_on_error(list_sink):
    with pytest.raises(RuntimeError):
        with Reporter([list_sink]):
            assert list_sink.opened and not list_sink.closed
            raise RuntimeError("abort")

    assert list_sink.closed


def test_file_sink_truncates_previous_content(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("stale\nstale\n", encoding="utf-8")

    with Reporter([FileSink(str(path))]) as reporter:
        reporter.emit("fresh")

    assert path.read_text(encoding="utf-8") == "fresh\n"


def test_file_sink_flushes_each_line(tmp_path):
    path = tmp_path / "out.txt"
    with Reporter([FileSink(str(path))]) as reporter:
        reporter.emit("visible")
        assert path.read_text(encoding="utf-8") == "visible\n"


def test_unopenable_file_raises_report_write_error(tmp_path, list_sink):
    bad = FileSink(str(tmp_path / "missing_dir" / "out.txt"))
    with pytest.raises(ReportWriteError):
        with Reporter([list_sink, bad]):
            pass
    # Sinks opened before the failure are released
    assert list_sink.closed


def test_write_before_open_raises(tmp_path):
    with pytest.raises(ReportWriteError):
        FileSink(str(tmp_path / "x.txt")).write("line")


def test_console_sink_writes_to_stream():
    stream = io.StringIO()
    ConsoleSink(stream).write("hello")
    assert stream.getvalue() == "hello\n"


def test_console_sink_keeps_stdout_bound_at_construction(capsys):
    sink = ConsoleSink()
    diverted = io.StringIO()
    with contextlib.redirect_stdout(diverted):
        sink.write("still on the terminal")

    assert diverted.getvalue() == ""
    assert capsys.readouterr().out == "still on the terminal\n"


def test_open_reporter_respects_console_flag(tmp_path, capsys):
    cfg, _ = validate_config({"drive_id": "D", "output_dir": str(tmp_path), "console": False})
    with open_reporter(cfg) as reporter:
        reporter.emit("file only")

    assert capsys.readouterr().out == ""
    assert (tmp_path / "Shared Drive_D_Contents.txt").read_text(encoding="utf-8") == "file only\n"
