"""Tests for catalog_sync/common/log_config.py"""

import io
import logging
import sys

import pytest

from catalog_sync.common.log_config import LOGGER_NAME, setup_logging


@pytest.fixture
def stream(monkeypatch):
    """Capture what the package handler writes to stderr."""
    buffer = io.StringIO()
    monkeypatch.setattr(sys, "stderr", buffer)
    return buffer


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_default_level_is_info(self):
        assert setup_logging().level == logging.INFO

    def test_verbose_sets_debug(self):
        assert setup_logging(verbose=True).level == logging.DEBUG

    def test_quiet_sets_warning(self):
        assert setup_logging(quiet=True).level == logging.WARNING

    def test_single_stderr_handler_after_repeated_setup(self, stream):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is stream

    @pytest.mark.parametrize("module", [
        "catalog_sync.sync.batch_exporter",
        "catalog_sync.stores.magento_store",
        "catalog_sync.delivery.feed_client",
    ])
    def test_pipeline_loggers_reach_handler(self, stream, module):
        setup_logging()
        logging.getLogger(module).warning("Skipped product %s", 42)
        assert stream.getvalue() == f"WARNING  {module}: Skipped product 42\n"

    def test_quiet_hides_batch_progress(self, stream):
        setup_logging(quiet=True)
        logger = logging.getLogger("catalog_sync.sync.batch_exporter")
        logger.info("Batch %d: %d records", 1, 10)
        logger.warning("Duplicate product %s on page %d, skipped", 3, 2)
        assert stream.getvalue() == (
            "WARNING  catalog_sync.sync.batch_exporter: Duplicate product 3 on page 2, skipped\n"
        )
