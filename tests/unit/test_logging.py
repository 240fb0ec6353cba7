"""Tests for logging setup."""

import logging
from pathlib import Path

from rich.logging import RichHandler

from canhao.config.logging import LOGGER_NAME, setup_logging


class TestSetupLogging:
    def test_default_level(self) -> None:
        logger = setup_logging()
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_verbose_overrides_level(self) -> None:
        logger = setup_logging(verbose=True, level="ERROR")
        assert logger.level == logging.DEBUG

    def test_repeated_setup_does_not_stack_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "canhao.log"
        logger = setup_logging(log_file=log_file, level="INFO")

        logging.getLogger("canhao.storage").info("saved store")
        for handler in logger.handlers:
            handler.flush()

        assert "saved store" in log_file.read_text(encoding="utf-8")
        setup_logging()
