from __future__ import annotations

"""
Configuration Domain Management.

Builds the immutable run configuration from CLI-derived values. The
configuration is constructed once at startup and passed explicitly to the
walker, the reporter and the auth layer; nothing reads ambient globals.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from driveaudit.domain.constants import (
    DEFAULT_CALLBACK_PORT,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_DRIVE_NAME_TEMPLATE,
    DEFAULT_GREEN_GB,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RED_GB,
    DEFAULT_TOKEN_FILE,
    DEFAULT_YELLOW_GB,
    MAX_PAGE_SIZE,
)
from driveaudit.domain.errors import ConfigError
from driveaudit.infra.fs import get_report_path, normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SizeThresholds:
    """
    Severity boundaries in gigabytes. A tier applies when the size is
    strictly greater than its boundary.
    """
    green_gb: float = DEFAULT_GREEN_GB
    yellow_gb: float = DEFAULT_YELLOW_GB
    red_gb: float = DEFAULT_RED_GB


DEFAULT_THRESHOLDS = SizeThresholds()


@dataclass(frozen=True)
class AuditConfig:
    """
    Immutable specification of a single audit run.

    Attributes:
        drive_id: Shared drive identifier; also the traversal root.
        drive_name: Label used only to name the report file.
        output_dir: Directory receiving the report artifact.
        credentials_path: OAuth client secrets JSON.
        token_path: Cached authorized-user token JSON.
        callback_port: Local port for the consent redirect listener.
        page_size: Drive listing page size.
        num_retries: Retries per Drive request (0 disables retrying).
        max_depth: Deepest level to descend into (None for unlimited).
        continue_on_error: Isolate listing failures to their branch.
        console: Mirror report lines to stdout.
        thresholds: Severity tier boundaries.
    """
    drive_id: str
    drive_name: str
    output_dir: str
    credentials_path: str = DEFAULT_CREDENTIALS_FILE
    token_path: str = DEFAULT_TOKEN_FILE
    callback_port: int = DEFAULT_CALLBACK_PORT
    page_size: int = DEFAULT_PAGE_SIZE
    num_retries: int = 0
    max_depth: Optional[int] = None
    continue_on_error: bool = False
    console: bool = True
    thresholds: SizeThresholds = field(default_factory=SizeThresholds)

    @property
    def output_path(self) -> str:
        return get_report_path(self.output_dir, self.drive_name)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default raw configuration values.

    Returns:
        Dict[str, Any]: Default configuration values keyed by field name.
    """
    return {
        "drive_id": "",
        "drive_name": None,
        "output_dir": os.getcwd(),
        "credentials_path": DEFAULT_CREDENTIALS_FILE,
        "token_path": DEFAULT_TOKEN_FILE,
        "callback_port": DEFAULT_CALLBACK_PORT,
        "page_size": DEFAULT_PAGE_SIZE,
        "num_retries": 0,
        "max_depth": None,
        "continue_on_error": False,
        "console": True,
        "green_gb": DEFAULT_GREEN_GB,
        "yellow_gb": DEFAULT_YELLOW_GB,
        "red_gb": DEFAULT_RED_GB,
    }

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_config(raw: Dict[str, Any]) -> Tuple[AuditConfig, List[str]]:
    """
    Validate and normalize raw configuration values into an AuditConfig.

    Missing keys are filled with defaults and out-of-range numeric values are
    clamped with a warning. Unrecoverable problems raise ConfigError.

    Args:
        raw: Raw values (usually derived from the CLI namespace).

    Returns:
        Tuple[AuditConfig, List[str]]: The configuration and non-fatal warnings.

    Raises:
        ConfigError: If the drive id is missing or thresholds are inconsistent.
    """
    warnings: List[str] = []
    merged: Dict[str, Any] = get_default_config()
    merged.update({k: v for k, v in raw.items() if v is not None})

    drive_id = str(merged["drive_id"] or "").strip()
    if not drive_id:
        raise ConfigError("A shared drive ID is required.")

    drive_name = str(merged["drive_name"] or "").strip()
    if not drive_name:
        drive_name = DEFAULT_DRIVE_NAME_TEMPLATE.format(drive_id=drive_id)

    page_size = _as_int(merged["page_size"], "page_size")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        clamped = min(max(page_size, 1), MAX_PAGE_SIZE)
        warnings.append(f"page_size {page_size} out of range; using {clamped}.")
        page_size = clamped

    num_retries = _as_int(merged["num_retries"], "num_retries")
    if num_retries < 0:
        warnings.append(f"num_retries {num_retries} is negative; using 0.")
        num_retries = 0

    max_depth = merged["max_depth"]
    if max_depth is not None:
        max_depth = _as_int(max_depth, "max_depth")
        if max_depth < 1:
            raise ConfigError(f"max_depth must be at least 1, got {max_depth}.")

    callback_port = _as_int(merged["callback_port"], "callback_port")
    if not 0 <= callback_port <= 65535:
        raise ConfigError(f"callback_port {callback_port} is not a valid TCP port.")

    thresholds = _build_thresholds(merged)

    cfg = AuditConfig(
        drive_id=drive_id,
        drive_name=drive_name,
        output_dir=normalize_path(merged["output_dir"], os.getcwd()),
        credentials_path=normalize_path(merged["credentials_path"], DEFAULT_CREDENTIALS_FILE),
        token_path=normalize_path(merged["token_path"], DEFAULT_TOKEN_FILE),
        callback_port=callback_port,
        page_size=page_size,
        num_retries=num_retries,
        max_depth=max_depth,
        continue_on_error=bool(merged["continue_on_error"]),
        console=bool(merged["console"]),
        thresholds=thresholds,
    )

    for w in warnings:
        logger.warning(w)

    return cfg, warnings

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from e


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}.") from e


def _build_thresholds(merged: Dict[str, Any]) -> SizeThresholds:
    """Coerce and cross-check the three severity boundaries."""
    green = _as_float(merged["green_gb"], "green_gb")
    yellow = _as_float(merged["yellow_gb"], "yellow_gb")
    red = _as_float(merged["red_gb"], "red_gb")

    if not 0 <= green <= yellow <= red:
        raise ConfigError(
            f"Thresholds must satisfy 0 <= green <= yellow <= red "
            f"(got {green}, {yellow}, {red})."
        )
    return SizeThresholds(green_gb=green, yellow_gb=yellow, red_gb=red)
