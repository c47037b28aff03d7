"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['SPRITEFIXER_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Unresolved pixels are reported at WARNING; keep test output readable
    for logger_name in ['spritefixer.repair.repairer', 'spritefixer.pipeline']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
