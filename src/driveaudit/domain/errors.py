from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure surfaced to the operator derives from DriveAuditError so the
CLI controller can map each category onto its own exit code.
"""

from typing import Optional


class DriveAuditError(Exception):
    """Base class for all expected application failures."""

    exit_code: int = 1


class ConfigError(DriveAuditError):
    """Invalid arguments or unreadable client secret material."""

    exit_code = 2


class AuthError(DriveAuditError):
    """Credential exchange, refresh or consent failure."""

    exit_code = 3


class DirectoryAccessError(DriveAuditError):
    """
    A directory listing call failed for a specific folder.

    Attributes:
        folder_id: Identifier of the folder whose listing failed.
        cause: Underlying transport, HTTP or auth exception.
    """

    exit_code = 4

    def __init__(self, folder_id: str, cause: Optional[BaseException] = None) -> None:
        self.folder_id = folder_id
        self.cause = cause
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to list folder '{folder_id}'{reason}")


class ReportWriteError(DriveAuditError):
    """The report artifact could not be opened or written."""

    exit_code = 5
