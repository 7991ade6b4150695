import json
import logging

import pytest

from media_transcriber.logging import NOISY_LOGGERS, UVICORN_LOGGERS, setup_logging


@pytest.fixture
def restore_loggers():
    names = ["", *UVICORN_LOGGERS, *NOISY_LOGGERS]
    saved = {
        name: (
            logging.getLogger(name).level,
            list(logging.getLogger(name).handlers),
            logging.getLogger(name).propagate,
        )
        for name in names
    }
    yield
    for name, (level, handlers, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = handlers
        logger.propagate = propagate


def test_records_are_json_with_renamed_fields(restore_loggers, capsys):
    setup_logging("debug")

    logging.getLogger("media_transcriber.test").info("hello", extra={"url": "https://x"})

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "hello"
    assert record["level"] == "INFO"
    assert record["logger"] == "media_transcriber.test"
    assert record["url"] == "https://x"
    assert "timestamp" in record
    assert "trace_id" in record


def test_uvicorn_shares_handler_without_propagating(restore_loggers):
    root = setup_logging(logging.INFO)

    for name in UVICORN_LOGGERS:
        logger = logging.getLogger(name)
        assert logger.handlers == root.handlers
        assert logger.propagate is False


def test_noisy_libraries_are_quieted_and_bad_level_falls_back(restore_loggers):
    root = setup_logging("verbose")

    assert root.level == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING
