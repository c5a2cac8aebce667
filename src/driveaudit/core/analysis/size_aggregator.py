from __future__ import annotations

"""
Folder Size Aggregator.

Drains the paginated non-folder listing of a single folder and reduces it to
a byte total and an item count. Only direct children are considered; nested
folders are reported independently by the walker.
"""

import logging
from typing import Optional

from driveaudit.core.services.directory import DirectoryService
from driveaudit.domain.drive_models import FolderStats

logger = logging.getLogger(__name__)


def aggregate_folder(service: DirectoryService, folder_id: str) -> FolderStats:
    """
    Sum sizes and count items across every page of a folder's files.

    Items without size information add 0 bytes but are still counted.
    A DirectoryAccessError on any page propagates; there is no partial result.

    Args:
        service: Directory listing capability.
        folder_id: Folder whose direct non-folder children are aggregated.

    Returns:
        FolderStats: Totals for the folder.
    """
    total_bytes = 0
    file_count = 0
    page_token: Optional[str] = None
    pages = 0

    while True:
        page = service.list_file_page(folder_id, page_token)
        pages += 1
        for item in page.items:
            if item.size:
                total_bytes += item.size
            file_count += 1

        page_token = page.next_page_token
        if not page_token:
            break

    logger.debug(
        f"Aggregated folder {folder_id}: {file_count} files, {total_bytes} bytes over {pages} page(s)"
    )
    return FolderStats(total_bytes=total_bytes, file_count=file_count)
