"""Unit tests for logging setup."""

import logging

from loguru import logger

from src.authbridge.api.utils.app_startup import configure_logging, library_log_levels
from src.authbridge.runtime.config.config_data import ConfigData


class TestLibraryLogLevels:
    def test_sql_echo_raises_engine_verbosity(self):
        config = ConfigData()
        config.database.echo = True

        assert library_log_levels(config)["sqlalchemy.engine"] == logging.INFO

    def test_quiet_defaults(self):
        levels = library_log_levels(ConfigData())

        assert levels["sqlalchemy.engine"] == logging.WARNING
        assert levels["passlib"] == logging.ERROR
        assert levels["uvicorn.access"] == logging.CRITICAL


class TestConfigureLogging:
    def test_stdlib_records_reach_loguru(self):
        config = ConfigData()
        config.logging.format = "plain"
        configure_logging(config)

        messages = []
        sink_id = logger.add(lambda message: messages.append(message.record), level="INFO")
        try:
            logging.getLogger("sqlalchemy.pool").error("pool exhausted")
        finally:
            logger.remove(sink_id)

        assert messages[0]["message"] == "pool exhausted"
        assert messages[0]["extra"]["logger_name"] == "sqlalchemy.pool"
        assert messages[0]["extra"]["request_id"] == "-"
        assert logging.getLogger("passlib").level == logging.ERROR
