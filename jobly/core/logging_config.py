"""
Log formatting for the API process.

JSON records (``JSON_LOGS=true``) carry the service name and version so
lines from several deployments can share one sink; plain text is for
local runs and tests.
"""

import logging
import sys
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Libraries that log every statement or request at INFO
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with service identity and origin."""

    def __init__(self, *args: Any, service: str = "jobly", version: Optional[str] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service = service
        self.version = version

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service
        if self.version:
            log_record['version'] = self.version

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"


def build_formatter(json_logs: bool, service: str = "jobly", version: Optional[str] = None) -> logging.Formatter:
    if json_logs:
        return ServiceJsonFormatter('%(message)s', service=service, version=version)
    return logging.Formatter(PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service: str = "jobly",
    version: Optional[str] = None,
) -> None:
    """
    Route all logging to stdout with a single handler.

    Args:
        log_level: Level name for the root logger (DEBUG, INFO, ...)
        json_logs: JSON records when True, plain text otherwise
        service: Value of the ``service`` field on JSON records
        version: Value of the ``version`` field on JSON records, if any
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(build_formatter(json_logs, service, version))

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
