"""Unit tests for weaving report sinks."""

import pytest
from loguru import logger

from ajweave.contexts.weaving.logger import LoguruSink, RecordingSink, setup_weaving_logger


@pytest.fixture
def captured():
    lines = []
    handler_id = logger.add(lambda m: lines.append(m.record), level="DEBUG", format="{message}")
    yield lines
    logger.remove(handler_id)


@pytest.mark.unit
def test_loguru_sink_adds_prefix_and_level(captured):
    LoguruSink().record("WARNING", "unused import")

    assert [(r["level"].name, r["message"]) for r in captured] == [("WARNING", "[weave] unused import")]


@pytest.mark.unit
def test_recording_sink_filters_by_level():
    sink = RecordingSink()
    sink.record("INFO", "a")
    sink.record("ERROR", "b")

    assert sink.lines() == ["a", "b"]
    assert sink.lines("ERROR") == ["b"]


@pytest.mark.unit
def test_setup_weaving_logger_writes_file(tmp_path):
    log_file = setup_weaving_logger(tmp_path / "logs")
    LoguruSink().record("INFO", "hello")
    logger.remove()

    assert log_file == tmp_path / "logs" / "weave.log"
    content = log_file.read_text()
    assert "AspectJ compiler" in content
    assert "[weave] hello" in content


@pytest.mark.unit
def test_console_shows_debug_only_when_verbose(tmp_path, capsys):
    setup_weaving_logger(tmp_path / "quiet")
    LoguruSink().record("DEBUG", "quiet args")
    logger.remove()
    quiet = capsys.readouterr().out

    setup_weaving_logger(tmp_path / "verbose", verbose=True)
    LoguruSink().record("DEBUG", "verbose args")
    logger.remove()
    verbose = capsys.readouterr().out

    assert "[weave] quiet args" not in quiet
    assert "[weave] verbose args" in verbose
