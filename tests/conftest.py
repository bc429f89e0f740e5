"""Shared fixtures for the Numeric Entry test suite."""

from __future__ import annotations

import pytest

from logger import setup_logger


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Keep log files out of the user's home directory."""
    logger = setup_logger(log_dir=tmp_path / "logs")
    yield logger
    logger.close()
