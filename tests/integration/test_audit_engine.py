from __future__ import annotations

"""
Integration tests for the Audit Engine.

Runs complete audits against the in-memory directory service, writing a real
report file, and checks banner placement, console/file parity and the
mirroring of failures into the open report.
"""

from unittest.mock import patch

import pytest

from driveaudit.core.engine import run_audit
from driveaudit.domain.config import validate_config
from driveaudit.domain.errors import AuthError, DirectoryAccessError, ReportWriteError
from driveaudit.infra.reporter import LineSink, Reporter

BANNER = "Contents of Shared Drive (ID: drive):"


@pytest.fixture
def config(tmp_path):
    cfg, _ = validate_config({"drive_id": "drive", "drive_name": "Team", "output_dir": str(tmp_path)})
    return cfg


def _report_lines(config):
    with open(config.output_path, encoding="utf-8") as f:
        return f.read().splitlines()


class BrokenOnErrorSink(LineSink):
    """Accepts report lines but fails when the ERROR line is written."""

    def __init__(self) -> None:
        self.lines = []

    def write(self, line: str) -> None:
        if line.startswith("ERROR:"):
            raise ReportWriteError("disk full")
        self.lines.append(line)


def test_report_file_matches_console(config, sample_service, capsys):
    summary = run_audit(config, service=sample_service)

    file_lines = _report_lines(config)
    console_lines = capsys.readouterr().out.splitlines()

    assert file_lines[0] == BANNER
    assert len(file_lines) == 7
    assert file_lines == console_lines
    assert config.output_path.endswith("Team_Contents.txt")
    assert summary.folders == 6


def test_two_runs_produce_identical_reports(config, sample_service):
    run_audit(config, service=sample_service)
    with open(config.output_path, "rb") as f:
        first = f.read()

    run_audit(config, service=sample_service)
    with open(config.output_path, "rb") as f:
        second = f.read()

    assert first == second


def test_directory_error_is_mirrored_into_report(config, sample_service):
    sample_service.failing_files.add("projects")

    with pytest.raises(DirectoryAccessError):
        run_audit(config, service=sample_service)

    lines = _report_lines(config)
    assert lines[0] == BANNER
    assert lines[-1].startswith("ERROR: Failed to list folder 'projects'")


def test_auth_failure_happens_before_traversal(config):
    with patch("driveaudit.core.engine.load_credentials", side_effect=AuthError("denied")):
        with pytest.raises(AuthError):
            run_audit(config)

    assert _report_lines(config) == [BANNER, "ERROR: denied"]


def test_service_is_built_from_loaded_credentials(config, sample_service):
    creds = object()
    with patch("driveaudit.core.engine.load_credentials", return_value=creds) as load, \
            patch("driveaudit.core.engine.build_drive_service", return_value=sample_service) as build:
        run_audit(config)

    load.assert_called_once()
    assert load.call_args.args == (config,)
    build.assert_called_once_with(creds, config)
    assert len(_report_lines(config)) == 7
    assert load.call_args.kwargs["notify"] is not None


def test_failed_error_line_does_not_mask_original_failure(config, sample_service, caplog):
    sample_service.failing_files.add("projects")
    sink = BrokenOnErrorSink()

    with pytest.raises(DirectoryAccessError):
        run_audit(config, service=sample_service, reporter=Reporter([sink]))

    assert sink.lines[0] == BANNER
    assert "Could not record the failure in the report: disk full" in caplog.text


def test_consent_prompt_is_written_to_report(config, sample_service):
    def consent(cfg, notify):
        notify("Authorize this app by visiting this URL: https://accounts.example/auth")
        return object()

    with patch("driveaudit.core.engine.load_credentials", side_effect=consent), \
            patch("driveaudit.core.engine.build_drive_service", return_value=sample_service):
        run_audit(config)

    lines = _report_lines(config)
    assert lines[:2] == [
        BANNER,
        "Authorize this app by visiting this URL: https://accounts.example/auth",
    ]
    assert len(lines) == 8


def test_closing_log_reports_emitted_line_count(config, sample_service, caplog):
    caplog.set_level("INFO", logger="driveaudit.core.engine")
    run_audit(config, service=sample_service)

    assert f"Report written to: {config.output_path} (7 lines)" in caplog.text
