"""Centralized logging configuration for remote-state-cache hosts.

The library itself only emits through module loggers; applications that want
a ready-made console setup call ``LoggingConfig.configure()`` once at startup.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Warnings and above
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Console output formats."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Logging configuration manager for the remote_state_cache package."""

    PACKAGE_LOGGER = "remote_state_cache"

    # Third-party modules that should only log errors
    ERROR_ONLY_MODULES = [
        "redis",
        "asyncio",
    ]

    @classmethod
    def build_config(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Build a dictConfig mapping from environment variables.

        - ``LOG_VERBOSITY``: QUIET | NORMAL | VERBOSE | DEBUG (default NORMAL)
        - ``LOG_LEVEL``: explicit level for the package logger, wins over verbosity
        - ``LOG_FORMAT``: simple | detailed | json (default simple)
        """
        environ = os.environ if environ is None else environ

        effective_log_level = get_log_level_from_verbosity(environ.get("LOG_VERBOSITY", "NORMAL"))
        package_level = environ.get("LOG_LEVEL", effective_log_level).upper()
        if package_level not in LogLevel.__members__:
            package_level = effective_log_level

        try:
            log_format = LogFormat(environ.get("LOG_FORMAT", "simple").lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": FORMAT_STRINGS[log_format],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": "DEBUG",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {
                cls.PACKAGE_LOGGER: {
                    "level": package_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls, environ: Optional[Mapping[str, str]] = None) -> None:
        """Configure logging based on environment variables."""
        logging_config = cls.build_config(environ)
        logging.config.dictConfig(logging_config)

        logger = logging.getLogger(__name__)
        package_level = logging_config["loggers"][cls.PACKAGE_LOGGER]["level"]
        log_format = logging_config["formatters"]["default"]["format"]
        logger.debug(f"Logging configured: level={package_level}, format={log_format}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Silence all logging from a module."""
        cls.set_module_level(module_name, "CRITICAL")


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    """Convenience wrapper around LoggingConfig.configure()."""
    LoggingConfig.configure(environ)
