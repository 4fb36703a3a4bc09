"""Pytest configuration for the robotsession test suite."""

from __future__ import annotations

import pytest

from robotsession.framework import Framework, reset_framework


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: tests that start real servers on local ports",
    )


@pytest.fixture(autouse=True)
def reset_default_framework():
    """Drop the process-wide framework before and after each test."""
    reset_framework()
    yield
    reset_framework()


@pytest.fixture
def framework():
    """An isolated framework instance."""
    instance = Framework()
    yield instance
    instance.shutdown()
