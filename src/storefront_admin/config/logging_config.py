"""Logging setup for storefront-admin.

Configured from the environment:

    LOG_LEVEL       explicit level, overrides LOG_VERBOSITY
    LOG_VERBOSITY   QUIET | NORMAL | VERBOSE | DEBUG
    LOG_FORMAT      simple | detailed | json
    AUDIT_LOG_FILE  optional file receiving the audit trail

Domain events are audited on the ``storefront_admin.audit`` logger, which
always logs at INFO regardless of verbosity.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict

AUDIT_LOGGER = "storefront_admin.audit"


class LogVerbosity(str, Enum):
    QUIET = "QUIET"      # errors only
    NORMAL = "NORMAL"    # info and above, repositories quiet
    VERBOSE = "VERBOSE"  # info and above, repositories included
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: "ERROR",
    LogVerbosity.NORMAL: "INFO",
    LogVerbosity.VERBOSE: "INFO",
    LogVerbosity.DEBUG: "DEBUG",
}


class LoggingConfig:
    """Builds and applies the ``dictConfig`` for the process."""

    # SQL-level chatter, shown only with VERBOSE or DEBUG
    REPOSITORY_MODULES = [
        "storefront_admin.database",
        "storefront_admin.features.auth.repositories",
        "storefront_admin.features.permissions.repositories",
        "storefront_admin.features.settings.repositories",
        "storefront_admin.features.categories.repositories",
    ]

    THIRD_PARTY_MODULES = ["asyncpg", "httpx", "httpcore", "asyncio", "uvicorn.access"]

    FORMATS = {
        LogFormat.SIMPLE: "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        LogFormat.DETAILED: "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s",
        LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
    }

    @staticmethod
    def resolve_level(verbosity: str, explicit_level: str = None) -> str:
        if explicit_level:
            return explicit_level.upper()
        try:
            return VERBOSITY_LEVELS[LogVerbosity(verbosity.upper())]
        except ValueError:
            return "INFO"

    @classmethod
    def build(cls, environ=None) -> Dict[str, Any]:
        environ = os.environ if environ is None else environ
        verbosity = environ.get("LOG_VERBOSITY", "NORMAL").upper()
        level = cls.resolve_level(verbosity, environ.get("LOG_LEVEL"))

        try:
            log_format = LogFormat(environ.get("LOG_FORMAT", "simple").lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": cls.FORMATS[log_format], "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {AUDIT_LOGGER: {"level": "INFO"}},
        }

        if verbosity not in (LogVerbosity.VERBOSE.value, LogVerbosity.DEBUG.value) and level != "DEBUG":
            for module in cls.REPOSITORY_MODULES:
                config["loggers"][module] = {"level": "WARNING"}

        for module in cls.THIRD_PARTY_MODULES:
            config["loggers"][module] = {"level": "ERROR"}

        audit_file = environ.get("AUDIT_LOG_FILE")
        if audit_file:
            config["handlers"]["audit_file"] = {
                "class": "logging.FileHandler",
                "formatter": "default",
                "filename": audit_file,
                "encoding": "utf-8",
            }
            config["loggers"][AUDIT_LOGGER]["handlers"] = ["audit_file"]

        return config

    @classmethod
    def configure(cls, environ=None) -> None:
        config = cls.build(environ)
        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug(f"Logging configured at {config['root']['level']}")


def setup_logging() -> None:
    """Apply logging configuration from the environment. Runs on package import."""
    LoggingConfig.configure()
