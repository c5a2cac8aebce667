from __future__ import annotations

"""
Drive Traversal Data Models.

Provides the transient structures exchanged between the directory service,
the aggregation/classification functions and the tree walker. None of them
are persisted; each is produced and consumed within a single recursion frame.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from driveaudit.domain.constants import (
    BRANCH_CORNER,
    BRANCH_TEE,
    FOLDER_ICON,
    PREFIX_BLANK,
    PREFIX_PIPE,
)

# -----------------------------------------------------------------------------
# SEVERITY
# -----------------------------------------------------------------------------

class SeverityTier(IntEnum):
    """Coarse size classification, ordered by increasing threshold."""

    NONE = 0
    GREEN = 1
    YELLOW = 2
    RED = 3

    @property
    def glyph(self) -> str:
        return _TIER_GLYPHS[self]


_TIER_GLYPHS: Dict[SeverityTier, str] = {
    SeverityTier.NONE: "",
    SeverityTier.GREEN: "🟢",
    SeverityTier.YELLOW: "🟡",
    SeverityTier.RED: "🔴",
}

# -----------------------------------------------------------------------------
# SERVICE PAYLOADS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FolderEntry:
    """
    A child folder discovered under a parent.

    Attributes:
        id: Opaque Drive identifier.
        name: Display name of the folder.
    """
    id: str
    name: str


@dataclass(frozen=True)
class FileEntry:
    """A non-folder item. Size is None when the backend reports none."""
    size: Optional[int] = None


@dataclass(frozen=True)
class FilePage:
    """One page of a non-folder listing plus its continuation token."""
    items: List[FileEntry] = field(default_factory=list)
    next_page_token: Optional[str] = None

# -----------------------------------------------------------------------------
# DERIVED RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FolderStats:
    """Byte total and item count of the direct non-folder children of a folder."""
    total_bytes: int = 0
    file_count: int = 0


@dataclass(frozen=True)
class SizeLabel:
    """Human-readable size string and its severity tier."""
    display: str
    tier: SeverityTier = SeverityTier.NONE


@dataclass(frozen=True)
class FolderReport:
    """
    Immutable rendering unit for a single folder line.

    Attributes:
        name: Folder display name.
        stats: Direct-children size and count.
        label: Classified size string and tier.
        prefix: Indentation inherited from the ancestors.
        is_last: Whether the folder is the final sibling at its level.
    """
    name: str
    stats: FolderStats
    label: SizeLabel
    prefix: str = ""
    is_last: bool = False

    @property
    def branch(self) -> str:
        return BRANCH_CORNER if self.is_last else BRANCH_TEE

    @property
    def child_prefix(self) -> str:
        return self.prefix + (PREFIX_BLANK if self.is_last else PREFIX_PIPE)

    def render(self) -> str:
        return (
            f"{self.prefix}{self.branch}{FOLDER_ICON} {self.name} "
            f"(Size: {self.label.display}, Files: {self.stats.file_count}) "
            f"{self.label.tier.glyph}"
        )


@dataclass
class WalkSummary:
    """Running totals collected over a traversal, used for diagnostics only."""
    folders: int = 0
    files: int = 0
    total_bytes: int = 0
    failed_folders: List[str] = field(default_factory=list)

    def record(self, stats: FolderStats) -> None:
        self.folders += 1
        self.files += stats.file_count
        self.total_bytes += stats.total_bytes
