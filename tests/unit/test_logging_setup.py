"""Unit tests for logging configuration."""
from __future__ import annotations

import logging

from synthledger.logging_setup import LOG_FORMAT, configure_logging


class TestConfigureLogging:
    def test_level_name_is_case_insensitive(self) -> None:
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_aiohttp_stays_at_warning_under_debug(self) -> None:
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("aiohttp").level == logging.WARNING

    def test_root_handler_uses_log_format(self) -> None:
        configure_logging("INFO")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].formatter._fmt == LOG_FORMAT

    def test_reconfiguring_replaces_the_handler(self) -> None:
        configure_logging("INFO")
        first = logging.getLogger().handlers[0]

        configure_logging("ERROR")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0] is not first
        assert logging.getLogger().level == logging.ERROR

    def test_engine_records_render_with_logger_name(self) -> None:
        configure_logging("INFO")
        formatter = logging.getLogger().handlers[0].formatter
        record = logging.LogRecord(
            "synthledger.engine.engine", logging.INFO, __file__, 1, "Debt minted: %s %d",
            ("0xuser", 100), None,
        )
        line = formatter.format(record)
        assert line.endswith("INFO     synthledger.engine.engine: Debt minted: 0xuser 100")
