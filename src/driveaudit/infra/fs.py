from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution for the report artifact, the OAuth
material and the diagnostic log directory. Acts as an abstraction over the
'os' module to ensure uniform behavior across Windows and Unix-like systems.
"""

import os
import re
from typing import Optional

from driveaudit.domain.constants import REPORT_SUFFIX

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "DriveAudit"
UNIX_APP_DIR_NAME = ".driveaudit"

# Path separators, control characters and names reserved on Windows
_UNSAFE_FILENAME_RX = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/DriveAudit
    - Linux/Mac: ~/.driveaudit

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def sanitize_filename(label: str) -> str:
    """
    Make a free-form label safe for use as a single filename component.

    Replaces separators and reserved characters with '_' and strips
    leading/trailing dots and whitespace.
    """
    cleaned = _UNSAFE_FILENAME_RX.sub("_", label).strip().strip(".")
    return cleaned or "_"


def get_report_path(output_dir: str, label: str) -> str:
    """
    Calculate the report destination for a drive label.

    Args:
        output_dir: Directory that receives the artifact.
        label: Human-readable drive label (sanitized here).

    Returns:
        str: Absolute path of '<label>_Contents.txt'.
    """
    return os.path.join(output_dir, f"{sanitize_filename(label)}{REPORT_SUFFIX}")
