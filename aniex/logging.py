import logging
from pathlib import Path
from typing import Optional

from concurrent_log_handler import ConcurrentRotatingFileHandler

from aniex.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that drown out catalog activity at INFO
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "apscheduler.executors.default": logging.WARNING,
    "passlib": logging.ERROR,
}


def parse_level(log_level: Optional[str]) -> int:
    """'debug', 'INFO', ... to a logging constant. Unknown names mean INFO."""
    level = logging.getLevelName((log_level or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


class LogConfig:
    """
    Logging for the API workers and the CLI.

    Every worker writes to the same rotating file; the handler's file lock
    keeps rotation safe across processes.
    """

    def __init__(self, log_file: str = "aniex.log"):
        self.log_file = log_file
        self.logger = None

    @property
    def log_path(self) -> Path:
        return Path(settings.log_dir) / self.log_file

    def setup_logging(self, log_level: Optional[str] = None) -> logging.Logger:
        log_level = log_level or settings.log_level
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger("aniex")
        self.logger.setLevel(parse_level(log_level))

        # Re-running setup (tests, reload) must not stack handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        file_handler = ConcurrentRotatingFileHandler(
            filename=str(self.log_path),
            maxBytes=10 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
            use_gzip=True,
        )
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        for name, level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(level)

        if parse_level(log_level) == logging.INFO and log_level.upper() != "INFO":
            self.logger.warning(f"Unknown log level '{log_level}', using INFO")

        return self.logger


log_config = LogConfig()
