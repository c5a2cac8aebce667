from __future__ import annotations

"""
Unit tests for the Folder Size Aggregator.

Verifies pagination draining, handling of items without size and error
propagation mid-pagination.
"""

import pytest

from driveaudit.core.analysis.size_aggregator import aggregate_folder
from driveaudit.domain.drive_models import FileEntry, FilePage, FolderStats
from driveaudit.domain.errors import DirectoryAccessError


def test_sums_across_pages(fake_service):
    fake_service.page_size = 2
    fake_service.add_folder("root", "f", sizes=[100, 200, 50])

    stats = aggregate_folder(fake_service, "f")

    assert stats == FolderStats(total_bytes=350, file_count=3)
    assert fake_service.calls == ["files:f:None", "files:f:2"]


def test_result_independent_of_page_boundaries(fake_service):
    fake_service.add_folder("root", "f", sizes=[10, 20, 30, 40, 50])
    results = set()
    for page_size in (1, 2, 3, 5, 10):
        fake_service.page_size = page_size
        results.add(aggregate_folder(fake_service, "f"))
    assert results == {FolderStats(150, 5)}


def test_items_without_size_are_counted(fake_service):
    fake_service.add_folder("root", "f", sizes=[None, 1024, None])
    assert aggregate_folder(fake_service, "f") == FolderStats(1024, 3)


def test_empty_folder_is_zero(fake_service):
    fake_service.add_folder("root", "f")
    assert aggregate_folder(fake_service, "f") == FolderStats(0, 0)


def test_error_on_later_page_propagates():
    class FlakyService:
        def __init__(self):
            self.pages = 0

        def list_file_page(self, parent_id, page_token=None):
            self.pages += 1
            if page_token:
                raise DirectoryAccessError(parent_id, TimeoutError("slow"))
            return FilePage(items=[FileEntry(size=1)], next_page_token="next")

    svc = FlakyService()
    with pytest.raises(DirectoryAccessError) as exc:
        aggregate_folder(svc, "f")

    assert exc.value.folder_id == "f"
    assert isinstance(exc.value.cause, TimeoutError)
    assert svc.pages == 2
