from __future__ import annotations

"""
Drive Tree Walker.

Depth-first, pre-order traversal of a shared drive. For every folder it
aggregates the direct non-folder children, classifies the total and emits a
single annotated tree line before descending into that folder's subtree.

Recursion depth equals folder depth. Drive caps folder nesting at 100
levels, well inside the interpreter's default recursion limit, so no
explicit work stack is used.
"""

import logging
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

from pyuca import Collator

from driveaudit.core.analysis.size_aggregator import aggregate_folder
from driveaudit.core.analysis.size_classifier import classify_size
from driveaudit.core.services.directory import DirectoryService
from driveaudit.domain.config import DEFAULT_THRESHOLDS, SizeThresholds
from driveaudit.domain.constants import BRANCH_CORNER, BRANCH_TEE, FOLDER_ICON
from driveaudit.domain.drive_models import FolderEntry, FolderReport, WalkSummary
from driveaudit.domain.errors import DirectoryAccessError

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

# -----------------------------------------------------------------------------
# ORDERING
# -----------------------------------------------------------------------------

def folder_sort_key(folder: FolderEntry) -> Tuple[Tuple[int, ...], str]:
    """
    Collation key for sibling folders.

    Unicode Collation Algorithm (DUCET) ordering: punctuation and symbols
    before digits and letters, accents and case as secondary and tertiary
    differences, lowercase before uppercase. The raw name breaks exact ties.
    Independent of the process locale.
    """
    return _collator().sort_key(folder.name), folder.name


def sort_folders(folders: List[FolderEntry]) -> List[FolderEntry]:
    return sorted(folders, key=folder_sort_key)


@lru_cache(maxsize=None)
def _collator() -> Collator:
    return Collator()

# -----------------------------------------------------------------------------
# WALKER
# -----------------------------------------------------------------------------

class TreeWalker:
    """
    Render the folder hierarchy below a root as annotated tree lines.

    Args:
        service: Directory listing capability.
        emit: Sink for rendered lines, called in traversal order.
        thresholds: Severity boundaries passed to the classifier.
        max_depth: Deepest level to list (root children are level 1).
        continue_on_error: Report a failing folder and skip its subtree
            instead of aborting the whole walk.
    """

    def __init__(
            self,
            service: DirectoryService,
            emit: Emit,
            *,
            thresholds: SizeThresholds = DEFAULT_THRESHOLDS,
            max_depth: Optional[int] = None,
            continue_on_error: bool = False,
    ) -> None:
        self._service = service
        self._emit = emit
        self._thresholds = thresholds
        self._max_depth = max_depth
        self._continue_on_error = continue_on_error

    def walk(self, folder_id: str, prefix: str = "") -> WalkSummary:
        """
        Emit one line per descendant folder of folder_id, pre-order.

        A listing failure on folder_id itself always propagates.

        Returns:
            WalkSummary: Totals over the emitted folders.
        """
        summary = WalkSummary()
        self._walk(folder_id, prefix, 0, summary)
        return summary

    def _walk(self, folder_id: str, prefix: str, depth: int, summary: WalkSummary) -> None:
        try:
            children = sort_folders(self._service.list_child_folders(folder_id))
        except DirectoryAccessError as e:
            if depth == 0 or not self._continue_on_error:
                raise
            self._record_failure(e, summary)
            self._emit(_render_listing_failure(prefix, e))
            return

        # Terminal case: nothing to emit for a folder without subfolders
        if not children:
            return

        last_index = len(children) - 1
        for i, child in enumerate(children):
            is_last = i == last_index

            try:
                stats = aggregate_folder(self._service, child.id)
            except DirectoryAccessError as e:
                if not self._continue_on_error:
                    raise
                self._record_failure(e, summary)
                self._emit(_render_failure(prefix, is_last, child.name, e))
                continue

            report = FolderReport(
                name=child.name,
                stats=stats,
                label=classify_size(stats.total_bytes, self._thresholds),
                prefix=prefix,
                is_last=is_last,
            )
            self._emit(report.render())
            summary.record(stats)

            if self._max_depth is None or depth + 1 < self._max_depth:
                self._walk(child.id, report.child_prefix, depth + 1, summary)

    @staticmethod
    def _record_failure(error: DirectoryAccessError, summary: WalkSummary) -> None:
        logger.error(f"Skipping folder {error.folder_id}: {error.cause or error}")
        summary.failed_folders.append(error.folder_id)


def _failure_reason(error: DirectoryAccessError) -> str:
    return type(error.cause).__name__ if error.cause is not None else "listing failed"


def _render_failure(prefix: str, is_last: bool, name: str, error: DirectoryAccessError) -> str:
    branch = BRANCH_CORNER if is_last else BRANCH_TEE
    return f"{prefix}{branch}{FOLDER_ICON} {name} (Error: {_failure_reason(error)})"


def _render_listing_failure(prefix: str, error: DirectoryAccessError) -> str:
    """Marker placed where the children of an unlistable folder would appear."""
    return f"{prefix}{BRANCH_CORNER}(Error: {_failure_reason(error)}: subfolders not listed)"
