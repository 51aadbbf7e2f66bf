"""
Centralized Logging Configuration for the Placement ATS Engine
"""
import logging
import logging.config
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

LOGGER_ROOT = "placement_ats"


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    enable_console: bool = True,
    enable_file: bool = False,
    format_style: str = "detailed"
) -> None:
    """
    Setup centralized logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (defaults to logs/placement_ats_YYYYMMDD.log)
        enable_console: Enable console logging
        enable_file: Enable rotating file logging
        format_style: Format style ('simple', 'detailed', 'json')
    """
    formats = {
        "simple": "%(levelname)s - %(name)s - %(message)s",
        "detailed": "%(asctime)s | %(levelname)-8s | %(name)-40s | %(funcName)-24s:%(lineno)-4d | %(message)s",
        "json": '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}'
    }

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": formats.get(format_style, formats["detailed"]),
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "simple": {
                "format": formats["simple"]
            }
        },
        "handlers": {},
        "loggers": {
            LOGGER_ROOT: {
                "level": level,
                "handlers": [],
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": [],
                "propagate": False
            }
        }
    }

    if enable_console:
        config["handlers"]["console"] = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "simple" if format_style == "simple" else "detailed",
            "stream": "ext://sys.stdout"
        }
        config["loggers"][LOGGER_ROOT]["handlers"].append("console")
        config["loggers"]["uvicorn"]["handlers"].append("console")

    if enable_file:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        if log_file is None:
            log_file = log_dir / f"placement_ats_{datetime.now().strftime('%Y%m%d')}.log"

        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": str(log_file),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
        config["loggers"][LOGGER_ROOT]["handlers"].append("file")

    logging.config.dictConfig(config)

    logger = get_logger("logging")
    logger.info(f"Logging configured - Level: {level}, Console: {enable_console}, File: {enable_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with consistent naming

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger under the placement_ats namespace
    """
    if name == LOGGER_ROOT or name.startswith(LOGGER_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def configure_for_environment(environment: str = None, log_level: str = None):
    """Configure logging based on environment settings"""
    environment = (environment or os.getenv("ATS_ENVIRONMENT", "development")).lower()
    log_level = (log_level or os.getenv("ATS_LOG_LEVEL", "INFO")).upper()

    if environment == "production":
        setup_logging(level=log_level, enable_file=True, format_style="detailed")
    elif environment == "development":
        setup_logging(level="DEBUG", format_style="detailed")
    elif environment == "testing":
        setup_logging(level="WARNING", format_style="simple")
    else:
        setup_logging(level=log_level)


class PerformanceMonitor:
    """Context manager for timing an operation with logging"""

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        execution_time = (time.perf_counter() - self.start_time) * 1000

        if exc_type is not None:
            self.logger.error(f"{self.operation_name} failed after {execution_time:.2f}ms: {exc_val}")
        elif execution_time > self.threshold_ms:
            self.logger.warning(f"{self.operation_name} completed in {execution_time:.2f}ms (exceeded threshold {self.threshold_ms}ms)")
        else:
            self.logger.debug(f"{self.operation_name} completed in {execution_time:.2f}ms")
        return False
