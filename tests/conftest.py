from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory directory service with configurable paging and failures.
3. A list-backed line sink for capturing report output.
"""

import os
import sys
from typing import Dict, List, Optional, Sequence, Set

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from driveaudit.core.services.directory import DirectoryService  # noqa: E402
from driveaudit.domain.drive_models import FileEntry, FilePage, FolderEntry  # noqa: E402
from driveaudit.domain.errors import DirectoryAccessError  # noqa: E402
from driveaudit.infra.reporter import LineSink  # noqa: E402

GB = 1024 ** 3
MB = 1024 ** 2


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class FakeDirectoryService(DirectoryService):
    """
    Dictionary-backed directory tree.

    File listings are split into pages of `page_size` items; the continuation
    token is the offset of the next page.
    """

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.folders: Dict[str, List[FolderEntry]] = {}
        self.files: Dict[str, List[Optional[int]]] = {}
        self.failing_folders: Set[str] = set()
        self.failing_files: Set[str] = set()
        self.calls: List[str] = []

    def add_folder(
            self,
            parent_id: str,
            folder_id: str,
            name: Optional[str] = None,
            sizes: Sequence[Optional[int]] = (),
    ) -> "FakeDirectoryService":
        self.folders.setdefault(parent_id, []).append(FolderEntry(id=folder_id, name=name or folder_id))
        self.files[folder_id] = list(sizes)
        return self

    def list_child_folders(self, parent_id: str) -> List[FolderEntry]:
        self.calls.append(f"folders:{parent_id}")
        if parent_id in self.failing_folders:
            raise DirectoryAccessError(parent_id, RuntimeError("boom"))
        return list(self.folders.get(parent_id, []))

    def list_file_page(self, parent_id: str, page_token: Optional[str] = None) -> FilePage:
        self.calls.append(f"files:{parent_id}:{page_token}")
        if parent_id in self.failing_files:
            raise DirectoryAccessError(parent_id, RuntimeError("boom"))
        sizes = self.files.get(parent_id, [])
        start = int(page_token) if page_token else 0
        end = start + self.page_size
        next_token = str(end) if end < len(sizes) else None
        return FilePage(items=[FileEntry(size=s) for s in sizes[start:end]], next_page_token=next_token)


class ListSink(LineSink):
    """Collects written lines and records open/close calls."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def write(self, line: str) -> None:
        self.lines.append(line)

    def close(self) -> None:
        self.closed = True


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_service() -> FakeDirectoryService:
    """Return an empty in-memory directory service."""
    return FakeDirectoryService()


@pytest.fixture
def sample_service() -> FakeDirectoryService:
    """
    Return a small shared drive.

    Structure (root 'drive'):
      Projects        [1 MB, 2 MB, no size]
        Archive       [6 GB]
        Current       []
      Media           [150 GB]
      docs            []
        Specs         [500 MB]
    """
    svc = FakeDirectoryService(page_size=2)
    svc.add_folder("drive", "media", "Media", [150 * GB])
    svc.add_folder("drive", "projects", "Projects", [1 * MB, 2 * MB, None])
    svc.add_folder("drive", "docs", "docs")
    svc.add_folder("projects", "current", "Current")
    svc.add_folder("projects", "archive", "Archive", [6 * GB])
    svc.add_folder("docs", "specs", "Specs", [500 * MB])
    return svc


@pytest.fixture
def list_sink() -> ListSink:
    return ListSink()
