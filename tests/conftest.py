"""Shared fixtures for weaving tests."""

from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from ajweave.contexts.weaving.config import WeaveConfig
from ajweave.contexts.weaving.diagnostics import DiagnosticMessage, Severity
from ajweave.contexts.weaving.logger import RecordingSink


class FakeAjc:
    """
    In-process stand-in for ajc.

    Writes the given class files into the -d directory and emits the given
    messages into the diagnostic sink.
    """

    def __init__(self, messages: List[DiagnosticMessage] = (), files: Dict[str, bytes] = None):
        self.messages = list(messages)
        self.files = files if files is not None else {"com/example/Foo.class": b"\xca\xfe\xba\xbe"}
        self.calls: List[List[str]] = []

    def __call__(self, args: Sequence[str], sink) -> int:
        args = list(args)
        self.calls.append(args)
        out_dir = Path(args[args.index("-d") + 1])
        for name, content in self.files.items():
            target = out_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        for message in self.messages:
            sink(message)
        return 0


def msg(severity: Severity, text: str) -> DiagnosticMessage:
    return DiagnosticMessage(severity, text)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def project(tmp_path):
    """Minimal build tree: compiled classes, one classpath jar and a build root."""
    classes = tmp_path / "build" / "classes" / "java" / "main"
    classes.mkdir(parents=True)
    (classes / "Existing.class").write_bytes(b"old")
    lib = tmp_path / "lib"
    lib.mkdir()
    jar = lib / "aspectjrt.jar"
    jar.write_bytes(b"")
    return tmp_path


@pytest.fixture
def config(project):
    return WeaveConfig(
        class_dirs=(project / "build" / "classes" / "java" / "main",),
        classpath=(project / "lib" / "aspectjrt.jar",),
        build_dir=project / "build",
        output_dir=project / "out",
        source="1.8",
        target="1.8",
    )


@pytest.fixture
def fake_ajc():
    """Factory for FakeAjc runners."""
    return FakeAjc
