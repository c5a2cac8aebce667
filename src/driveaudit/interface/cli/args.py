from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed argparse namespace
into raw configuration values for the domain validator.
"""

import argparse
from typing import Any, Dict

from driveaudit.domain.constants import (
    APP_VERSION,
    DEFAULT_CALLBACK_PORT,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_DRIVE_NAME_TEMPLATE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TOKEN_FILE,
    REPORT_SUFFIX,
)

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the driveaudit CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="driveaudit",
        description=(
            "Walk a Google shared drive and report the size and file count "
            "of every folder as an annotated tree."
        ),
    )

    # --- Target ---
    p.add_argument(
        "drive_id",
        help="Shared drive ID to audit (also the traversal root).",
    )
    p.add_argument(
        "drive_name",
        nargs="?",
        default=None,
        help=(
            f"Label used to name the report '<label>{REPORT_SUFFIX}' "
            f"(default: '{DEFAULT_DRIVE_NAME_TEMPLATE.format(drive_id='<drive_id>')}')."
        ),
    )

    # --- Output ---
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory for the report file (default: current directory).",
    )
    p.add_argument(
        "--no-console",
        action="store_true",
        help="Write the report to the file only.",
    )

    # --- Authentication ---
    p.add_argument(
        "--credentials",
        dest="credentials_path",
        default=None,
        help=f"OAuth client secrets JSON (default: {DEFAULT_CREDENTIALS_FILE}).",
    )
    p.add_argument(
        "--token",
        dest="token_path",
        default=None,
        help=f"Cached token file (default: {DEFAULT_TOKEN_FILE}).",
    )
    p.add_argument(
        "--port",
        dest="callback_port",
        type=int,
        default=None,
        help=f"Local port for the authorization callback (default: {DEFAULT_CALLBACK_PORT}).",
    )

    # --- Traversal ---
    p.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Do not descend below this folder depth (root children are depth 1).",
    )
    p.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Report folders that fail to list and keep walking their siblings.",
    )
    p.add_argument(
        "--page-size",
        dest="page_size",
        type=int,
        default=None,
        help=f"Drive listing page size, 1-1000 (default: {DEFAULT_PAGE_SIZE}).",
    )
    p.add_argument(
        "--retries",
        dest="num_retries",
        type=int,
        default=None,
        help="Retries per Drive request on transient errors (default: 0).",
    )

    # --- Severity thresholds ---
    p.add_argument("--green-gb", dest="green_gb", type=float, default=None,
                   help="Green marker above this many GB (default: 5).")
    p.add_argument("--yellow-gb", dest="yellow_gb", type=float, default=None,
                   help="Yellow marker above this many GB (default: 10).")
    p.add_argument("--red-gb", dest="red_gb", type=float, default=None,
                   help="Red marker above this many GB (default: 100).")

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Persist diagnostics to a rotating log (no value: user data directory).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into raw configuration values.

    Unset options are mapped to None so the validator applies its defaults.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Raw configuration values.
    """
    overrides: Dict[str, Any] = {
        "drive_id": args.drive_id,
        "drive_name": args.drive_name,
        "output_dir": args.output_dir,
        "credentials_path": args.credentials_path,
        "token_path": args.token_path,
        "callback_port": args.callback_port,
        "page_size": args.page_size,
        "num_retries": args.num_retries,
        "max_depth": args.max_depth,
        "green_gb": args.green_gb,
        "yellow_gb": args.yellow_gb,
        "red_gb": args.red_gb,
    }

    if args.continue_on_error:
        overrides["continue_on_error"] = True
    if args.no_console:
        overrides["console"] = False

    return overrides
