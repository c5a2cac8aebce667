from __future__ import annotations

"""
Audit Engine.

Runs a complete audit for one configuration: opens the report sinks, writes
the banner, resolves the directory service (authenticating if needed) and
drives the tree walker. Failures are mirrored into the open report before
being re-raised to the interface layer.
"""

import logging
import time
from typing import Optional

from driveaudit.core.analysis.tree_walker import TreeWalker
from driveaudit.core.services.directory import DirectoryService, build_drive_service
from driveaudit.domain.config import AuditConfig
from driveaudit.domain.constants import BANNER_TEMPLATE
from driveaudit.domain.drive_models import WalkSummary
from driveaudit.domain.errors import DriveAuditError, ReportWriteError
from driveaudit.infra.auth import load_credentials
from driveaudit.infra.reporter import Reporter, open_reporter

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_audit(
        config: AuditConfig,
        service: Optional[DirectoryService] = None,
        reporter: Optional[Reporter] = None,
) -> WalkSummary:
    """
    Execute a full audit of the configured shared drive.

    Args:
        config: Run configuration.
        service: Listing capability; when omitted, credentials are loaded
            and a Drive-backed service is built.
        reporter: Output fan-out; when omitted, console + report file.

    Returns:
        WalkSummary: Totals over the emitted folders.

    Raises:
        DriveAuditError: Any configuration, auth, listing or write failure.
    """
    started = time.monotonic()
    writes_report_file = reporter is None
    reporter = reporter or open_reporter(config)

    with reporter:
        reporter.emit(BANNER_TEMPLATE.format(drive_id=config.drive_id))
        try:
            if service is None:
                service = build_drive_service(load_credentials(config, notify=reporter.emit), config)

            walker = TreeWalker(
                service,
                reporter.emit,
                thresholds=config.thresholds,
                max_depth=config.max_depth,
                continue_on_error=config.continue_on_error,
            )
            summary = walker.walk(config.drive_id)
        except DriveAuditError as e:
            if not isinstance(e, ReportWriteError):
                _mirror_error(reporter, e)
            raise

    elapsed = time.monotonic() - started
    logger.info(
        f"Audit complete: {summary.folders} folders, {summary.files} files, "
        f"{summary.total_bytes} bytes in {elapsed:.1f}s"
    )
    if summary.failed_folders:
        logger.warning(f"{len(summary.failed_folders)} folder(s) could not be listed.")
    if writes_report_file:
        logger.info(f"Report written to: {config.output_path} ({reporter.lines_emitted} lines)")

    return summary

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _mirror_error(reporter: Reporter, error: DriveAuditError) -> None:
    """Copy a failure into the report. A broken sink must not mask `error`."""
    try:
        reporter.emit(f"ERROR: {error}")
    except ReportWriteError as write_error:
        logger.error(f"Could not record the failure in the report: {write_error}")
