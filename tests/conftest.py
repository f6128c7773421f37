"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_stest_logger():
    """Drop handlers the CLI attaches to the stest logger so tests stay isolated."""
    yield

    logger = logging.getLogger("stest")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
