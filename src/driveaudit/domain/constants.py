from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the Drive API vocabulary, rendering glyphs, default size
thresholds and artifact naming rules shared by the traversal core and
the interface layers.
"""

from typing import Tuple

APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# DRIVE API VOCABULARY
# -----------------------------------------------------------------------------
DRIVE_SCOPES: Tuple[str, ...] = ("https://www.googleapis.com/auth/drive.readonly",)
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

DEFAULT_PAGE_SIZE = 1000
MAX_PAGE_SIZE = 1000

# -----------------------------------------------------------------------------
# AUTHENTICATION DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_CREDENTIALS_FILE = "credentials_web.json"
DEFAULT_TOKEN_FILE = "token.json"
DEFAULT_CALLBACK_PORT = 3000

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------
FOLDER_ICON = "📁"
BRANCH_TEE = "├── "
BRANCH_CORNER = "└── "
PREFIX_PIPE = "│   "
PREFIX_BLANK = "    "

BYTES_PER_MB = 1024 * 1024
MB_PER_GB = 1024

# Severity thresholds in GB (strictly greater than)
DEFAULT_GREEN_GB = 5.0
DEFAULT_YELLOW_GB = 10.0
DEFAULT_RED_GB = 100.0

# -----------------------------------------------------------------------------
# ARTIFACTS
# -----------------------------------------------------------------------------
REPORT_SUFFIX = "_Contents.txt"
DEFAULT_DRIVE_NAME_TEMPLATE = "Shared Drive_{drive_id}"
BANNER_TEMPLATE = "Contents of Shared Drive (ID: {drive_id}):"
