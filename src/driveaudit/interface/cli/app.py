from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap,
configuration validation and audit execution. Maps each failure category
onto a distinct process exit code.
"""

import sys
from typing import List, Optional

from driveaudit.core.engine import run_audit
from driveaudit.domain.config import validate_config
from driveaudit.domain.errors import DriveAuditError
from driveaudit.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from driveaudit.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase (argparse exits with 2 on usage errors)
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr, optional rotating file)
    log_file = args.log_file
    if log_file == "":
        log_file = get_default_log_path()
    configure_logging(LoggingConfig(
        level="DEBUG" if args.debug else "INFO",
        console=True,
        log_file=log_file,
    ))

    # 3. Configuration validation
    try:
        config, _warnings = validate_config(cli_args.args_to_overrides(args))
    except DriveAuditError as e:
        logger.error(str(e))
        return e.exit_code

    logger.debug(f"Resolved configuration: {config}")

    # 4. Audit execution
    try:
        run_audit(config)
    except KeyboardInterrupt:
        logger.warning("Audit interrupted by user.")
        return EXIT_INTERRUPTED
    except DriveAuditError as e:
        logger.error(str(e))
        return e.exit_code

    return 0

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
