import logging
import logging.config
from pathlib import Path

from facescope.config.settings import LOG_LEVEL, LOGS_DIR


def get_logging_config(level=LOG_LEVEL, logs_dir=LOGS_DIR):
    """
    Console plus one file at <logs_dir>/facescope.log.
    Env:
      FACESCOPE_LOG_LEVEL=INFO|DEBUG|...
      FACESCOPE_LOGS_DIR=<abs or relative>
    """
    logs_dir = Path(logs_dir)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console_text": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "file_text": {
                "format": "%(asctime)s [%(levelname)s] %(name)s %(threadName)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "console_text",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.FileHandler",
                "level": level,
                "formatter": "file_text",
                "filename": str(logs_dir / "facescope.log"),
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
        "loggers": {
            # DeepFace/TensorFlow are chatty at INFO
            "deepface": {"level": "WARNING", "propagate": True},
            "tensorflow": {"level": "WARNING", "propagate": True},
        },
    }


def setup_logging(level=LOG_LEVEL, logs_dir=LOGS_DIR):
    Path(logs_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(get_logging_config(level, logs_dir))
