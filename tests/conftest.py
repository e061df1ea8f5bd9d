"""
Main conftest file that imports and re-exports all fixtures from modular files.
This approach improves maintainability by organizing fixtures into logical modules.
"""

import logging

import pytest

from tests.fixtures.helpers import (  # noqa: F401
    hub_url,
    publisher_jwt,
    publisher_jwt_secret,
    subscriber_jwt_secret,
)
from tests.fixtures.mocks import mock_hub  # noqa: F401


@pytest.fixture
def restore_root_logger():
    """Keep handler and level changes made by a test from leaking into others."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    levels = {
        name: logging.getLogger(name).level
        for name in ("", "mercure_client", "httpx", "httpcore")
    }
    yield root_logger
    root_logger.handlers[:] = handlers
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
