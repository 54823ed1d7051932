"""
Weaving context logger.

Weaving code never writes to loguru directly: it reports through a sink with a
single `record(level, text)` method, so tasks can be run and inspected without
a configured logger. LoguruSink is the production sink and adds the [weave]
prefix.
"""

import os
from pathlib import Path
from typing import List, Protocol, Tuple

from loguru import logger

from ajweave.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[weave]"


class ReportSink(Protocol):
    """Destination for leveled report lines ("DEBUG", "INFO", "WARNING", "ERROR", "SUCCESS")."""

    def record(self, level: str, text: str) -> None: ...


class LoguruSink:
    """Forward report lines to loguru with the [weave] prefix."""

    def record(self, level: str, text: str) -> None:
        # opt(depth=1) attributes the record to the caller, not this wrapper
        logger.opt(depth=1).log(level, f"{CONTEXT_PREFIX} {text}")


class RecordingSink:
    """Keep report lines in memory, for tests and embedding tools."""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def record(self, level: str, text: str) -> None:
        self.records.append((level, text))

    def lines(self, level: str = None) -> List[str]:
        return [text for lvl, text in self.records if level is None or lvl == level]


def setup_weaving_logger(log_dir: Path, verbose: bool = False) -> Path:
    """
    Setup logger for weaving context.

    Args:
        log_dir: Directory for this weaving session
        verbose: Show DEBUG output (full ajc argument list) on the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="weave",
        log_dir=log_dir,
        extra_provenance={"AspectJ compiler": os.getenv("AJC_COMPILER", "ajc")},
        console_level="DEBUG" if verbose else "INFO",
    )
