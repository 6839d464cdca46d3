"""JSON logging configuration for dev certificate provisioning."""

import logging

from pythonjsonlogger import jsonlogger

# Extras passed via ``extra=`` that are worth keeping in the JSON output
CONTEXT_FIELDS = ("strategy", "hostname", "tool")


class ProvisioningJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that keeps the base fields plus provisioning context.

    Base fields: timestamp, level, message, exc_info, funcName, lineno.
    Context fields (strategy, hostname, tool) are kept only when a call
    supplied them through ``extra``.
    """

    def add_fields(self, log_record, record, message_dict):
        """Override to trim the record down to the allowed field set.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        allowed_fields = {
            "timestamp",
            "level",
            "message",
            "exc_info",
            "funcName",
            "lineno",
            *CONTEXT_FIELDS,
        }

        for key in [key for key in log_record if key not in allowed_fields]:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Initialize and configure the package logger.

    Returns:
        Logger named ``dev_certs`` writing JSON lines to stderr
    """
    logger = logging.getLogger("dev_certs")

    # Module reloads must not stack handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        ProvisioningJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def set_log_level(level: int | str) -> None:
    """Change the package logger level (e.g. ``logging.DEBUG`` for command lines)."""
    LOGGER.setLevel(level)


LOGGER = _setup_logger()
