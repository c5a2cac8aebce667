from __future__ import annotations

"""
Unit tests for the Folder Size Classifier.

Verifies MB/GB display formatting, severity thresholds and the rule that
sub-GB folders never receive a tier.
"""

import pytest

from driveaudit.core.analysis.size_classifier import classify_size
from driveaudit.domain.config import SizeThresholds
from driveaudit.domain.drive_models import SeverityTier

MB = 1024 ** 2
GB = 1024 ** 3


@pytest.mark.parametrize(
    "total_bytes, display, tier",
    [
        (500 * MB, "500.00 MB", SeverityTier.NONE),
        (2 * GB, "2.00 GB", SeverityTier.NONE),
        (6 * GB, "6.00 GB", SeverityTier.GREEN),
        (15 * GB, "15.00 GB", SeverityTier.YELLOW),
        (150 * GB, "150.00 GB", SeverityTier.RED),
    ],
)
def test_classify_reference_sizes(total_bytes, display, tier):
    label = classify_size(total_bytes)
    assert label.display == display
    assert label.tier is tier


def test_zero_bytes_is_megabytes():
    label = classify_size(0)
    assert label.display == "0.00 MB"
    assert label.tier is SeverityTier.NONE


def test_exactly_one_gigabyte_stays_in_megabytes():
    """1024 MB is not strictly greater than 1024 MB."""
    assert classify_size(1 * GB).display == "1024.00 MB"


def test_sub_gigabyte_never_gets_a_tier_even_with_tiny_thresholds():
    thresholds = SizeThresholds(green_gb=0.0, yellow_gb=0.0, red_gb=0.0)
    label = classify_size(1000 * MB, thresholds)
    assert label.tier is SeverityTier.NONE


def test_threshold_boundaries_are_exclusive():
    assert classify_size(5 * GB).tier is SeverityTier.NONE
    assert classify_size(10 * GB).tier is SeverityTier.GREEN
    assert classify_size(100 * GB).tier is SeverityTier.YELLOW


def test_tier_uses_rounded_gigabytes():
    """100.004 GB displays as 100.00 GB and must not be flagged red."""
    label = classify_size(int(100.004 * GB))
    assert label.display == "100.00 GB"
    assert label.tier is SeverityTier.YELLOW


def test_custom_thresholds():
    thresholds = SizeThresholds(green_gb=1, yellow_gb=2, red_gb=3)
    assert classify_size(int(1.5 * GB), thresholds).tier is SeverityTier.GREEN
    assert classify_size(int(2.5 * GB), thresholds).tier is SeverityTier.YELLOW
    assert classify_size(4 * GB, thresholds).tier is SeverityTier.RED


def test_tiers_are_ordered():
    assert SeverityTier.NONE < SeverityTier.GREEN < SeverityTier.YELLOW < SeverityTier.RED
    assert SeverityTier.NONE.glyph == ""
    assert len({t.glyph for t in SeverityTier}) == 4
