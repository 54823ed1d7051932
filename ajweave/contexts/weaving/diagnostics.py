"""
Diagnostic collection for a single ajc invocation.

Messages are recorded in the order the compiler emits them and queried by
severity, either exactly or "at least as severe as".
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterator, List, Optional


class Severity(IntEnum):
    """Ordinal diagnostic level reported by ajc."""

    INFO = 10
    WEAVEINFO = 20
    WARNING = 30
    ERROR = 40

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class SourceLocation:
    """File position a diagnostic refers to."""

    path: Path
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.path}:{self.line}" if self.line is not None else str(self.path)


@dataclass(frozen=True)
class DiagnosticMessage:
    """
    A single message produced by the compiler.

    Attributes:
        severity: Message level
        text: Free-text content (may span several lines)
        location: Source position, when ajc reported one
    """

    severity: Severity
    text: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        if self.location is None:
            return self.text
        return f"{self.text} ({self.location})"


class DiagnosticCollector:
    """
    Append-only store of compiler messages.

    One collector belongs to exactly one invocation and is not thread-safe.
    Once closed it rejects further messages.
    """

    def __init__(self):
        self._messages: List[DiagnosticMessage] = []
        self._closed = False

    def record(self, message: DiagnosticMessage) -> None:
        if self._closed:
            raise RuntimeError("Diagnostic collector is closed; the invocation has completed")
        self._messages.append(message)

    # Lets the collector be passed directly as a message sink
    __call__ = record

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def messages_of(self, severity: Severity, or_greater: bool = False) -> List[DiagnosticMessage]:
        """
        Messages matching a severity, in recording order.

        Args:
            severity: Severity to match
            or_greater: Also match every more severe level

        Returns:
            List of matching messages
        """
        if or_greater:
            return [m for m in self._messages if m.severity >= severity]
        return [m for m in self._messages if m.severity == severity]

    def count(self, severity: Severity, or_greater: bool = False) -> int:
        return len(self.messages_of(severity, or_greater))

    def has_any(self, severity: Severity, or_greater: bool = False) -> bool:
        return self.count(severity, or_greater) > 0

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[DiagnosticMessage]:
        return iter(self._messages)
