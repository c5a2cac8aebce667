from __future__ import annotations

"""
Report Emission Infrastructure.

Fans every report line out to an ordered set of sinks (terminal and report
file). Writes are synchronous and flushed per line, so the file and the
console always show the same lines in the same order.
"""

import logging
import sys
from contextlib import ExitStack
from typing import IO, List, Optional, Sequence

from driveaudit.domain.config import AuditConfig
from driveaudit.domain.errors import ReportWriteError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SINKS
# -----------------------------------------------------------------------------

class LineSink:
    """Base sink. Subclasses override write(); open/close are optional."""

    def open(self) -> None:
        pass

    def write(self, line: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class ConsoleSink(LineSink):
    """
    Writes lines to an interactive text stream.

    The stream is bound at construction (stdout by default), so later
    redirection of sys.stdout does not divert the report.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()


class FileSink(LineSink):
    """
    Writes lines to a UTF-8 file opened in truncate mode for the run.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._fh: Optional[IO[str]] = None

    def open(self) -> None:
        try:
            self._fh = open(self.path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise ReportWriteError(f"Cannot open report file '{self.path}': {e}") from e
        logger.debug(f"Report file opened: {self.path}")

    def write(self, line: str) -> None:
        if self._fh is None:
            raise ReportWriteError(f"Report file '{self.path}' is not open.")
        try:
            self._fh.write(line + "\n")
            self._fh.flush()
        except OSError as e:
            raise ReportWriteError(f"Cannot write report file '{self.path}': {e}") from e

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

# -----------------------------------------------------------------------------
# REPORTER
# -----------------------------------------------------------------------------

class Reporter:
    """
    Ordered fan-out of report lines with scoped sink lifetime.

    Usage:
        with Reporter([ConsoleSink(), FileSink(path)]) as reporter:
            reporter.emit("line")
    """

    def __init__(self, sinks: Sequence[LineSink]) -> None:
        self._sinks: List[LineSink] = list(sinks)
        self._stack: Optional[ExitStack] = None
        self.lines_emitted = 0

    def __enter__(self) -> Reporter:
        with ExitStack() as stack:
            for sink in self._sinks:
                sink.open()
                stack.callback(sink.close)
            self._stack = stack.pop_all()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._stack is not None:
            stack, self._stack = self._stack, None
            stack.close()

    def emit(self, line: str) -> None:
        for sink in self._sinks:
            sink.write(line)
        self.lines_emitted += 1


def open_reporter(config: AuditConfig) -> Reporter:
    """
    Build the standard reporter for a run: optional console plus report file.
    The caller is responsible for entering the returned context manager.
    """
    sinks: List[LineSink] = []
    if config.console:
        sinks.append(ConsoleSink())
    sinks.append(FileSink(config.output_path))
    return Reporter(sinks)
