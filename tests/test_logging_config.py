"""
Unit tests for facescope.utils.logging_config
"""
import logging

import pytest

from facescope.utils.logging_config import get_logging_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestGetLoggingConfig:
    def test_level_and_file_from_arguments(self, tmp_path):
        config = get_logging_config(level="DEBUG", logs_dir=tmp_path)

        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["handlers"]["file"]["filename"] == str(tmp_path / "facescope.log")

    def test_quiets_model_libraries(self, tmp_path):
        loggers = get_logging_config(logs_dir=tmp_path)["loggers"]
        assert loggers["deepface"]["level"] == "WARNING"


class TestSetupLogging:
    def test_creates_dir_and_writes_file(self, tmp_path, restore_root_logger):
        logs_dir = tmp_path / "nested" / "logs"

        setup_logging(level="WARNING", logs_dir=str(logs_dir))
        logging.getLogger("facescope.test").warning("camera opened")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logs_dir.is_dir()
        assert logging.getLogger().level == logging.WARNING
        assert "camera opened" in (logs_dir / "facescope.log").read_text(encoding="utf-8")
