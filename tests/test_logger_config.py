"""
Tests for structured logging
"""

import json
import logging

from eureka_discovery.logger_config import (
    EurekaLogger,
    StructuredFormatter,
    log_instance_registration,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestStructuredLogging:
    """Test cases for the JSON formatter and event helpers"""

    def test_formatter_includes_extra_fields(self):
        """Test that extra= fields end up in the JSON object"""
        record = logging.LogRecord(
            "eureka_discovery.client", logging.INFO, __file__, 10, "hello %s", ("world",), None
        )
        record.app_name = "billing"

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "eureka_discovery.client"
        assert entry["app_name"] == "billing"
        assert "msg" not in entry and "args" not in entry

    def test_registration_event(self):
        """Test the structured data attached to a registration log line"""
        logger = EurekaLogger.get_logger("tests.registration_event")
        logger.setLevel(logging.INFO)
        handler = ListHandler()
        logger.addHandler(handler)
        try:
            log_instance_registration(logger, "billing", "billing-0-8080", "10.0.0.7", 8080)
        finally:
            logger.removeHandler(handler)

        record = handler.records[0]
        assert record.getMessage() == "Instance registered: billing-0-8080 (10.0.0.7:8080)"
        assert record.app_name == "billing"
        assert record.event_type == "registration"
        assert json.loads(StructuredFormatter().format(record))["port"] == 8080
