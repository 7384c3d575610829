"""Structured logging configuration for bank-ledger.

The Registry attaches ledger context to its records through ``extra``
(``account_number``, ``account_type``, ``client_id``, ``bank``,
``amount``). Both formatters render whichever of those fields a record
carries, so a rejected withdrawal can be traced to its account without
parsing the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = ("account_number", "account_type", "client_id", "bank", "amount")


def ledger_context(record: logging.LogRecord) -> dict[str, str]:
    """Collect the ledger context fields present on ``record`` as strings."""
    return {
        name: str(getattr(record, name))
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for bank-ledger.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter = JsonFormatter() if format_type == "json" else LedgerFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("bank_ledger").setLevel(log_level)

    # Faker logs locale lookups at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class LedgerFormatter(logging.Formatter):
    """Pipe-separated text formatter with a trailing ``key=value`` context block."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = ledger_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        # Keep the context on the first line when a traceback follows
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(ledger_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)
