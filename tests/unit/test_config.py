"""Unit tests for weave configuration loading."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from ajweave.contexts.weaving.config import WeaveConfig, load_weave_config


@pytest.mark.unit
def test_defaults():
    config = WeaveConfig()

    assert config.source == "1.7"
    assert config.target == "1.7"
    assert config.write_to_log is False
    assert config.log_path == config.build_dir / "ajc.log"


@pytest.mark.unit
def test_config_is_immutable():
    config = WeaveConfig()
    with pytest.raises(FrozenInstanceError):
        config.source = "1.8"


@pytest.mark.unit
def test_load_from_yaml(tmp_path):
    config_file = tmp_path / "weave.yaml"
    config_file.write_text(
        "source: '1.8'\n"
        "target: 1.8\n"
        "write_to_log: true\n"
        "class_dirs: [build/classes/java/main]\n"
        "classpath: [lib/a.jar, lib/b.jar]\n"
        "build_dir: out/build\n"
    )

    config = load_weave_config(config_file)

    assert config.source == "1.8"
    assert config.target == "1.8"
    assert config.write_to_log is True
    assert config.class_dirs == (Path("build/classes/java/main"),)
    assert config.classpath == (Path("lib/a.jar"), Path("lib/b.jar"))
    assert config.build_dir == Path("out/build")


@pytest.mark.unit
def test_overrides_win_and_none_is_ignored(tmp_path):
    config_file = tmp_path / "weave.yaml"
    config_file.write_text("source: '1.8'\ntarget: '1.8'\n")

    config = load_weave_config(config_file, source="11", target=None, output_dir=tmp_path / "out")

    assert config.source == "11"
    assert config.target == "1.8"
    assert config.output_dir == tmp_path / "out"


@pytest.mark.unit
def test_unknown_keys_rejected(tmp_path):
    config_file = tmp_path / "weave.yaml"
    config_file.write_text("sources: '1.8'\n")

    with pytest.raises(ValueError, match="sources"):
        load_weave_config(config_file)


@pytest.mark.unit
def test_output_dir_prefers_explicit_then_java_then_first(tmp_path):
    kotlin = tmp_path / "classes" / "kotlin"
    java = tmp_path / "classes" / "java"

    assert WeaveConfig(class_dirs=(kotlin, java)).resolve_output_dir() == java.absolute()
    assert WeaveConfig(class_dirs=(kotlin,)).resolve_output_dir() == kotlin.absolute()
    explicit = WeaveConfig(class_dirs=(kotlin, java), output_dir=tmp_path / "out")
    assert explicit.resolve_output_dir() == (tmp_path / "out").absolute()


@pytest.mark.unit
def test_output_dir_requires_class_dirs():
    with pytest.raises(ValueError):
        WeaveConfig().resolve_output_dir()
