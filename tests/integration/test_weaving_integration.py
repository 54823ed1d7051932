"""
Integration tests for the weaving context - runs the real ajc.
"""

import shutil
import subprocess

import pytest

from ajweave.contexts.weaving import InvocationError, WeaveConfig, weave
from ajweave.contexts.weaving.logger import RecordingSink

AJC_AVAILABLE = shutil.which("ajc") is not None and shutil.which("javac") is not None
skip_if_no_ajc = pytest.mark.skipif(
    not AJC_AVAILABLE,
    reason="ajc/javac not installed - install AspectJ tools and a JDK",
)


def _compile(source_dir, classes_dir, name, code):
    source = source_dir / f"{name}.java"
    source.write_text(code)
    classes_dir.mkdir(parents=True, exist_ok=True)
    subprocess.run(["javac", "-d", str(classes_dir), str(source)], check=True)


@pytest.mark.integration
@skip_if_no_ajc
def test_weave_plain_classes(tmp_path):
    """Classes without aspects pass through ajc and are published."""
    classes = tmp_path / "build" / "classes" / "java" / "main"
    _compile(tmp_path, classes, "Hello", "public class Hello { public void run() {} }")

    result = weave(
        WeaveConfig(class_dirs=(classes,), build_dir=tmp_path / "build", source="1.8", target="1.8"),
        sink=RecordingSink(),
    )

    assert result.success
    assert result.files_processed >= 1
    assert (classes / "Hello.class").exists()


@pytest.mark.integration
def test_missing_compiler_is_invocation_error(tmp_path):
    config = WeaveConfig(
        class_dirs=(tmp_path / "classes",),
        build_dir=tmp_path / "build",
        compiler=str(tmp_path / "no-ajc-here"),
    )

    with pytest.raises(InvocationError):
        weave(config, sink=RecordingSink())
