"""Shared fixtures for the product taxonomy tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks bound to streams captured by a previous CLI invocation."""

    yield
    logger.remove()
