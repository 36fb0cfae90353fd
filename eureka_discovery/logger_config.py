"""
Logger configuration for the Eureka discovery client
Emits JSON lines suitable for Loki/Grafana, or plain text
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import List, Optional

from eureka_discovery.config import LOG_LEVEL, LOG_FORMAT
from eureka_discovery.constants import LOG_INSTANCE_DISCOVERED, LOG_INSTANCE_REGISTERED

_RESERVED_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "exc_info",
    "exc_text",
    "stack_info",
}


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter, one object per line
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Extra fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class EurekaLogger:
    """
    Centralized logger configuration for the Eureka discovery client
    """

    @staticmethod
    def setup_logging(
        level: str = LOG_LEVEL,
        format_type: str = "structured",
        enable_console: bool = True,
        enable_file: bool = False,
        log_file_path: Optional[str] = None,
    ) -> None:
        """
        Setup logging configuration

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format_type: Format type - "structured" (JSON) or "simple" (text)
            enable_console: Enable console logging
            enable_file: Enable file logging
            log_file_path: Path to log file (required if enable_file=True)
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)

        if format_type == "structured":
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(LOG_FORMAT)

        handlers = []

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            handlers.append(console_handler)

        if enable_file and log_file_path:
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logging.basicConfig(
            level=numeric_level,
            handlers=handlers,
            force=True,  # Override any existing configuration
        )

        EurekaLogger._configure_package_logger(numeric_level, handlers)

    @staticmethod
    def _configure_package_logger(level: int, handlers: List[logging.Handler]) -> None:
        """Route the package loggers to our handlers only"""
        package_logger = logging.getLogger("eureka_discovery")
        package_logger.setLevel(level)
        package_logger.handlers = handlers
        package_logger.propagate = False

        # httpx logs every request at INFO; keep it quiet unless debugging
        if level > logging.DEBUG:
            logging.getLogger("httpx").setLevel(logging.WARNING)

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """Get a logger instance"""
        return logging.getLogger(name)

    @staticmethod
    def log_instance_event(
        logger: logging.Logger,
        level: int,
        message: str,
        app_name: str,
        **kwargs,
    ) -> None:
        """
        Log an instance-related event with structured data

        Args:
            logger: Logger instance
            level: Log level
            message: Log message
            app_name: Eureka application name
            **kwargs: Additional structured data
        """
        extra_data = {
            "app_name": app_name,
            **kwargs,
        }
        logger.log(level, message, extra=extra_data)


def log_instance_registration(
    logger: logging.Logger, app_name: str, host_name: str, ip_address: str, port: int
) -> None:
    """Log instance registration event"""
    EurekaLogger.log_instance_event(
        logger,
        logging.INFO,
        LOG_INSTANCE_REGISTERED.format(host_name, ip_address, port),
        app_name,
        host_name=host_name,
        ip_address=ip_address,
        port=port,
        event_type="registration",
    )


def log_instance_discovery(
    logger: logging.Logger, app_name: str, instance_count: int, address: str
) -> None:
    """Log instance discovery event"""
    EurekaLogger.log_instance_event(
        logger,
        logging.DEBUG,
        LOG_INSTANCE_DISCOVERED.format(instance_count, app_name, address),
        app_name,
        instance_count=instance_count,
        address=address,
        event_type="discovery",
    )


def log_unexpected_status(
    logger: logging.Logger, app_name: str, operation: str, status_code: int
) -> None:
    """Log a registry call that returned the wrong status"""
    EurekaLogger.log_instance_event(
        logger,
        logging.WARNING,
        f"{operation} of {app_name} failed with status {status_code}",
        app_name,
        status_code=status_code,
        event_type=f"{operation}_failure",
    )
