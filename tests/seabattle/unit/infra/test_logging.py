import json
import logging

from seabattle.game.infra.logging import (
    JsonFormatter,
    LoggingConfig,
    build_logging_config,
    configure_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"custom": 1}


def test_build_logging_config_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.delenv("SEABATTLE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")

    config = build_logging_config()

    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path is not None
    assert config.file_path.startswith(str(tmp_path / "appdata" / "logs"))


def test_configure_logging_writes_json_lines(tmp_path) -> None:
    log_file = tmp_path / "run.jsonl"
    configure_logging(LoggingConfig(level_name="DEBUG", file_path=str(log_file)))
    logging.getLogger("test.logging.file").info("hello")
    configure_logging(LoggingConfig(level_name="WARNING"))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any(json.loads(line)["msg"] == "hello" for line in lines)
