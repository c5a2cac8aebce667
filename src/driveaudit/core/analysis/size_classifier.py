from __future__ import annotations

"""
Folder Size Classifier.

Converts raw byte totals into the display string shown in the tree and the
severity tier that flags unusually large folders.
"""

from driveaudit.domain.config import DEFAULT_THRESHOLDS, SizeThresholds
from driveaudit.domain.constants import BYTES_PER_MB, MB_PER_GB
from driveaudit.domain.drive_models import SeverityTier, SizeLabel

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify_size(total_bytes: int, thresholds: SizeThresholds = DEFAULT_THRESHOLDS) -> SizeLabel:
    """
    Map a byte count to its display string and severity tier.

    Sizes up to 1024 MB are shown in megabytes and never receive a tier.
    Larger sizes are shown in gigabytes; the tier is decided on the value
    after rounding to two decimals, so the string shown and the tier agree.

    Args:
        total_bytes: Sum of direct non-folder children sizes.
        thresholds: Severity boundaries in GB.

    Returns:
        SizeLabel: e.g. ("500.00 MB", NONE) or ("150.00 GB", RED).
    """
    size_mb = total_bytes / BYTES_PER_MB

    if size_mb > MB_PER_GB:
        display_gb = f"{size_mb / MB_PER_GB:.2f}"
        return SizeLabel(f"{display_gb} GB", _tier_for_gb(float(display_gb), thresholds))

    return SizeLabel(f"{size_mb:.2f} MB", SeverityTier.NONE)


def _tier_for_gb(size_gb: float, thresholds: SizeThresholds) -> SeverityTier:
    if size_gb > thresholds.red_gb:
        return SeverityTier.RED
    if size_gb > thresholds.yellow_gb:
        return SeverityTier.YELLOW
    if size_gb > thresholds.green_gb:
        return SeverityTier.GREEN
    return SeverityTier.NONE
