"""
Log Manager Module

Sets up file logging for lectern. curses owns the terminal, so nothing is
written to the console.
"""

import os
import logging

from concurrent_log_handler import ConcurrentRotatingFileHandler

import config_paths


class LogManager:
    """Manages application logging configuration."""

    def __init__(self, log_level="INFO", log_file=None):
        self.log_level = log_level
        self.log_file = log_file or config_paths.LOG_PATH
        self.log_dir = os.path.dirname(self.log_file)

    def setup_logging(self):
        """Attach a rotating file handler to the root logger."""
        os.makedirs(self.log_dir, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        # avoid duplicate handlers when called twice
        root_logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler = ConcurrentRotatingFileHandler(
            self.log_file,
            maxBytes=200 * 1024,
            backupCount=2,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        logging.info("Logging initialized")
        logging.info(f"Log file path: {self.log_file}")

    def get_log_file_path(self) -> str:
        return self.log_file


def setup_application_logging(log_level="INFO"):
    """Convenience function to set up logging for the application."""
    log_manager = LogManager(log_level=log_level)
    log_manager.setup_logging()
    return log_manager
