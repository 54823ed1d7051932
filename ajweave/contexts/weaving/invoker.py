"""
ajc process invocation.

Runs the compiler synchronously and streams every message it prints into a
diagnostic sink as soon as the message is complete. Exit codes are not
interpreted: whether the run failed is decided from the recorded diagnostics,
because ajc can exit cleanly after reporting a fatal error.
"""

import re
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ajweave.contexts.weaving.diagnostics import DiagnosticMessage, Severity, SourceLocation
from ajweave.contexts.weaving.exceptions import InvocationError
from ajweave.contexts.weaving.logger import LoguruSink, ReportSink

DiagnosticSink = Callable[[DiagnosticMessage], None]

# Signature shared by CompilerInvoker.run and in-process stand-ins
CompilerRunner = Callable[[Sequence[str], DiagnosticSink], object]

SEVERITY_BY_TAG = {
    "info": Severity.INFO,
    "debug": Severity.INFO,
    "task": Severity.INFO,
    "weaveinfo": Severity.WEAVEINFO,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
    "fail": Severity.ERROR,
    "abort": Severity.ERROR,
    "usage": Severity.ERROR,
}

# "path/File.java:12 [warning] text" or "[error] text"
TAGGED_LINE = re.compile(
    r"^(?:(?P<path>\S.*?)(?::(?P<line>\d+))?\s+)?"
    r"\[(?P<tag>info|debug|task|weaveinfo|warning|error|fail|abort|usage)\]\s*(?P<text>.*)$",
    re.IGNORECASE,
)

# Weave info printed with -showWeaveInfo
WEAVE_INFO_LINE = re.compile(r"^(?:weaveinfo\s+(?P<text>.*)|(?P<joinpoint>Join point '.*))$")


class OutputParser:
    """
    Turn ajc's console output back into DiagnosticMessages.

    Tagged lines open a message; untagged lines (source excerpts, caret
    markers) extend the pending one; blank lines and close() flush it.
    """

    def __init__(self, sink: DiagnosticSink):
        self.sink = sink
        self._severity: Optional[Severity] = None
        self._location: Optional[SourceLocation] = None
        self._lines: List[str] = []

    def feed(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if not line.strip():
            self.flush()
            return

        tagged = TAGGED_LINE.match(line)
        if tagged:
            self.flush()
            location = None
            if tagged.group("path"):
                line_number = tagged.group("line")
                location = SourceLocation(
                    Path(tagged.group("path")), int(line_number) if line_number else None
                )
            self._start(SEVERITY_BY_TAG[tagged.group("tag").lower()], tagged.group("text"), location)
            return

        weave_info = WEAVE_INFO_LINE.match(line)
        if weave_info:
            self.flush()
            self._start(Severity.WEAVEINFO, weave_info.group("text") or weave_info.group("joinpoint"))
            return

        if self._severity is None:
            self._start(Severity.INFO, line)
        else:
            self._lines.append(line)

    def _start(self, severity: Severity, text: str, location: Optional[SourceLocation] = None):
        self._severity = severity
        self._location = location
        self._lines = [text.strip()]

    def flush(self) -> None:
        if self._severity is None:
            return
        message = DiagnosticMessage(self._severity, "\n".join(self._lines), self._location)
        self._severity, self._location, self._lines = None, None, []
        self.sink(message)

    close = flush


class CompilerInvoker:
    """
    Blocking wrapper around the ajc executable.

    Attributes:
        compiler: Executable name or path
    """

    def __init__(self, compiler: str = "ajc", report: Optional[ReportSink] = None):
        self.compiler = compiler
        self.report = report or LoguruSink()

    def run(self, args: Sequence[str], sink: DiagnosticSink) -> int:
        """
        Run ajc to completion.

        Args:
            args: Arguments produced by build_arguments()
            sink: Receives each DiagnosticMessage as it is emitted

        Returns:
            Process exit code (informational only)

        Raises:
            InvocationError: If the process cannot start or fails while running
        """
        cmd = [self.compiler, *args]
        parser = OutputParser(sink)

        try:
            with subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
            ) as process:
                for line in process.stdout:
                    parser.feed(line)
                returncode = process.wait()
            parser.close()
        except Exception as e:
            raise InvocationError(f"Error running {self.compiler}", e) from e

        self.report.record("DEBUG", f"{self.compiler} exited with code {returncode}")
        return returncode

    __call__ = run
