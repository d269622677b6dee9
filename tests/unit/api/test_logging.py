"""Tests for Loguru configuration and stdlib log interception."""

import json
import logging

from loguru import logger

from src.app.api.utils.app_startup import InterceptHandler, configure_logging
from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.context import with_context


class TestConfigureLogging:
    def teardown_method(self):
        # Restore the sinks built from the default configuration
        configure_logging()

    def test_file_sink_writes_json_records(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        test_config = ConfigData()
        test_config.logging.file = str(log_file)
        test_config.logging.format = "json"

        with with_context(test_config):
            configure_logging()

        logger.info("user created")
        logger.complete()

        lines = log_file.read_text().splitlines()
        records = [json.loads(line)["record"] for line in lines]
        assert any(record["message"] == "user created" for record in records)
        assert all(record["extra"]["request_id"] == "-" for record in records)

    def test_stdlib_records_reach_loguru(self):
        configure_logging()
        messages = []
        sink_id = logger.add(messages.append, format="{message}")

        try:
            logging.getLogger("some.library").warning("library warning")
        finally:
            logger.remove(sink_id)

        assert any("library warning" in message for message in messages)


class TestInterceptHandler:
    def test_access_records_are_dropped(self):
        messages = []
        sink_id = logger.add(messages.append, format="{message}")
        record = logging.LogRecord(
            "uvicorn.access", logging.INFO, __file__, 1, "GET / 200", None, None
        )

        try:
            InterceptHandler().emit(record)
        finally:
            logger.remove(sink_id)

        assert messages == []
