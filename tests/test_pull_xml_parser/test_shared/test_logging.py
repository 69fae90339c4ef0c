"""Tests for correlation-aware logging."""

import logging

from pull_xml_parser.shared.logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)


class TestCorrelationLogger:
    """Tests for CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self):
        """Test default component naming."""
        logger = get_logger("pull_xml_parser.api.parser")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "parser"
        assert logger.correlation_id is None

    def test_records_carry_correlation(self, caplog):
        """Test that records include component and correlation ID."""
        logger = get_logger("pull_xml_parser.test", "cid-1", "unit")

        with caplog.at_level(logging.DEBUG, logger="pull_xml_parser.test"):
            logger.debug("hello", extra={"offset": 5})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "cid-1"
        assert record.offset == 5

    def test_is_debug_enabled(self):
        """Test DEBUG level detection."""
        logger = get_logger("pull_xml_parser.test_level")
        logger.logger.setLevel(logging.DEBUG)
        assert logger.is_debug_enabled()
        logger.logger.setLevel(logging.ERROR)
        assert not logger.is_debug_enabled()
        logger.logger.setLevel(logging.NOTSET)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_does_not_stack_handlers(self):
        """Test that repeated configuration keeps a single handler."""
        package_logger = logging.getLogger("pull_xml_parser")
        before = list(package_logger.handlers)
        try:
            configure_logging("INFO")
            configure_logging("DEBUG")

            added = [h for h in package_logger.handlers if h not in before]
            assert len(added) == 1
            assert package_logger.level == logging.DEBUG
        finally:
            for handler in list(package_logger.handlers):
                if handler not in before:
                    package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
