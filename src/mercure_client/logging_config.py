import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from mercure_client.config import Environment, get_settings

# Configure logger
logger = logging.getLogger("mercure_client")

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": str(get_settings().ENVIRONMENT.value),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in log_record:
                log_record[key] = value
        return json.dumps(log_record, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for applications using the client"""
    settings = get_settings()
    level_name = (level or settings.LOGGING_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    if settings.ENVIRONMENT == Environment.PRODUCTION:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    logging.getLogger("mercure_client").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(
        f"Logging configured with level {level_name} "
        f"and {'JSON' if settings.ENVIRONMENT == Environment.PRODUCTION else 'plain text'} format"
    )
