from __future__ import annotations

"""
Directory Listing Services.

Defines the capability the traversal core depends on and its Google Drive
implementation. The core never touches the Drive client directly: it asks
for child folders of a parent and for pages of non-folder items, and every
backend failure reaches it as a DirectoryAccessError.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from driveaudit.domain.config import AuditConfig
from driveaudit.domain.constants import DEFAULT_PAGE_SIZE, FOLDER_MIME_TYPE
from driveaudit.domain.drive_models import FileEntry, FilePage, FolderEntry
from driveaudit.domain.errors import DirectoryAccessError

logger = logging.getLogger(__name__)

# Failures that mean "the listing could not be obtained"
_BACKEND_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)

# -----------------------------------------------------------------------------
# CAPABILITY INTERFACE
# -----------------------------------------------------------------------------

class DirectoryService(ABC):
    """
    Abstract listing capability scoped to a single storage root.
    """

    @abstractmethod
    def list_child_folders(self, parent_id: str) -> List[FolderEntry]:
        """
        Return every non-trashed folder directly under parent_id.

        Implementations drain any backend pagination before returning.

        Raises:
            DirectoryAccessError: If the listing cannot be obtained.
        """

    @abstractmethod
    def list_file_page(self, parent_id: str, page_token: Optional[str] = None) -> FilePage:
        """
        Return one page of non-folder children of parent_id.

        Args:
            parent_id: Folder to list.
            page_token: Continuation token from the previous page, if any.

        Raises:
            DirectoryAccessError: If the page cannot be obtained.
        """

# -----------------------------------------------------------------------------
# GOOGLE DRIVE IMPLEMENTATION
# -----------------------------------------------------------------------------

class GoogleDriveDirectoryService(DirectoryService):
    """
    Drive v3 backed listing service restricted to one shared drive.

    Args:
        drive: Resource object from googleapiclient.discovery.build('drive', 'v3').
        drive_id: Shared drive identifier used as the corpora scope.
        page_size: Items requested per page.
        num_retries: Retries performed by the client on transient failures.
    """

    def __init__(
            self,
            drive: Any,
            drive_id: str,
            *,
            page_size: int = DEFAULT_PAGE_SIZE,
            num_retries: int = 0,
    ) -> None:
        self._drive = drive
        self._drive_id = drive_id
        self._page_size = page_size
        self._num_retries = num_retries

    def list_child_folders(self, parent_id: str) -> List[FolderEntry]:
        query = (
            f"'{_escape(parent_id)}' in parents and mimeType = '{FOLDER_MIME_TYPE}' "
            f"and trashed = false"
        )
        folders: List[FolderEntry] = []
        page_token: Optional[str] = None

        while True:
            res = self._list(parent_id, query, "nextPageToken, files(id, name)", page_token)
            for f in res.get("files", []):
                folders.append(FolderEntry(id=f["id"], name=f.get("name", "")))
            page_token = res.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Folder {parent_id}: {len(folders)} subfolder(s)")
        return folders

    def list_file_page(self, parent_id: str, page_token: Optional[str] = None) -> FilePage:
        query = (
            f"'{_escape(parent_id)}' in parents and mimeType != '{FOLDER_MIME_TYPE}' "
            f"and trashed = false"
        )
        res = self._list(parent_id, query, "nextPageToken, files(size)", page_token)
        items = [FileEntry(size=_parse_size(f.get("size"))) for f in res.get("files", [])]
        return FilePage(items=items, next_page_token=res.get("nextPageToken"))

    def _list(
            self,
            parent_id: str,
            query: str,
            fields: str,
            page_token: Optional[str],
    ) -> Dict[str, Any]:
        """Execute a single files.list call, translating backend failures."""
        params: Dict[str, Any] = {
            "q": query,
            "fields": fields,
            "pageSize": self._page_size,
            "includeItemsFromAllDrives": True,
            "supportsAllDrives": True,
            "corpora": "drive",
            "driveId": self._drive_id,
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            return self._drive.files().list(**params).execute(num_retries=self._num_retries)
        except _BACKEND_ERRORS as e:
            logger.debug(f"Drive listing failed for {parent_id}: {e}")
            raise DirectoryAccessError(parent_id, e) from e

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _escape(value: str) -> str:
    """Escape a literal for inclusion in a Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _parse_size(raw: Any) -> Optional[int]:
    """Drive reports sizes as decimal strings; absent for native documents."""
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable size value: {raw!r}")
        return None


def build_drive_service(credentials: Any, config: AuditConfig) -> GoogleDriveDirectoryService:
    """
    Create the Drive v3 client and wrap it in the listing service.

    Args:
        credentials: Authorized google.auth credentials.
        config: Run configuration (drive scope, paging and retry policy).

    Returns:
        GoogleDriveDirectoryService: Ready-to-use listing capability.
    """
    drive = build("drive", "v3", credentials=credentials, cache_discovery=False)
    return GoogleDriveDirectoryService(
        drive,
        config.drive_id,
        page_size=config.page_size,
        num_retries=config.num_retries,
    )
