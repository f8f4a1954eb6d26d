import json

import pytest

from permshell.config import ShellConfig
from permshell.logger import LogLevel, StructuredLogger, get_logger
from permshell.logging_config import configure_from_config, configure_from_environment
from permshell.permission import PermissionStore


def read_entries(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


@pytest.fixture
def logger(tmp_path):
    log = StructuredLogger()
    log.configure(level="DEBUG", log_directory=str(tmp_path), session_id="test")
    yield log
    log.close()


def test_entries_are_json_lines(logger, tmp_path):
    logger.info("store", "loaded", {"entries": 3, "path": tmp_path})
    logger.close()

    [entry] = read_entries(tmp_path / "permshell_test.jsonl")
    assert entry["level"] == "INFO"
    assert entry["session_id"] == "test"
    assert entry["component"] == "store"
    assert entry["event"] == "loaded"
    assert entry["data"] == {"entries": 3, "path": str(tmp_path)}


def test_level_filtering(logger, tmp_path):
    logger.level = LogLevel.WARN
    logger.info("shell", "ignored")
    logger.warn("shell", "kept")
    logger.close()

    events = [e["event"] for e in read_entries(tmp_path / "permshell_test.jsonl")]
    assert events == ["kept"]


def test_span_records_duration_and_errors(logger, tmp_path):
    with logger.span("store", "save", {"entries": 1}):
        pass
    with pytest.raises(OSError):
        with logger.span("store", "save"):
            raise OSError("disk full")
    logger.close()

    ok, failed = read_entries(tmp_path / "permshell_test.jsonl")
    assert ok["event"] == "save_complete"
    assert "duration_ms" in ok
    assert failed["event"] == "save_error"
    assert failed["level"] == "ERROR"
    assert failed["data"]["error_type"] == "OSError"


def test_disabled_logger_writes_nothing(tmp_path):
    log = StructuredLogger()
    log.configure(enabled=False, log_directory=str(tmp_path))
    log.error("shell", "boom")
    assert list(tmp_path.iterdir()) == []


def test_level_from_string():
    assert LogLevel.from_string("warning") is LogLevel.WARN
    assert LogLevel.from_string("nonsense") is LogLevel.INFO


def test_configure_from_config(tmp_path):
    configure_from_config(ShellConfig(log_level="ERROR", log_directory=str(tmp_path)))
    logger = get_logger()
    assert logger.enabled
    assert logger.level is LogLevel.ERROR


def test_configure_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("PERMSHELL_LOG_ENABLED", "true")
    monkeypatch.setenv("PERMSHELL_LOG_LEVEL", "WARN")
    monkeypatch.setenv("PERMSHELL_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("PERMSHELL_SESSION_ID", "envsession")

    configure_from_environment()
    logger = get_logger()
    assert logger.enabled
    assert logger.level is LogLevel.WARN

    logger.info("shell", "dropped")
    logger.warn("shell", "kept")
    logger.close()
    [entry] = read_entries(tmp_path / "permshell_envsession.jsonl")
    assert entry["event"] == "kept"
    assert entry["session_id"] == "envsession"


def test_configure_from_environment_can_disable(tmp_path, monkeypatch):
    monkeypatch.setenv("PERMSHELL_LOG_ENABLED", "0")
    monkeypatch.setenv("PERMSHELL_LOG_DIR", str(tmp_path))

    configure_from_environment()
    get_logger().error("shell", "boom")
    assert not get_logger().enabled
    assert list(tmp_path.iterdir()) == []


def test_level_from_non_string():
    assert LogLevel.from_string(10) is LogLevel.INFO


def test_store_save_span_records_size(tmp_path):
    log_dir = tmp_path / "logs"
    configure_from_config(ShellConfig(log_level="INFO", log_directory=str(log_dir)))
    store = PermissionStore(tmp_path / ".permissions.txt")
    with store.transaction():
        store.set("a.txt", "-r--------")
    get_logger().close()

    [log_file] = log_dir.iterdir()
    saves = [e for e in read_entries(log_file) if e["event"] == "save_complete"]
    assert saves[-1]["data"]["entries"] == 1
    assert saves[-1]["data"]["bytes"] == len("a.txt -r--------\n")
