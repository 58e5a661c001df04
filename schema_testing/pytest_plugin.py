"""pytest plugin wiring configuration and logging for schema action tests."""

from __future__ import annotations

import logging

import pytest

from .configuration import TestingConfig, get_testing_config


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "actions: tests that drive form component actions")
    settings = get_testing_config()
    logging.getLogger("schema_testing").setLevel(settings.log_level)


@pytest.fixture
def testing_config() -> TestingConfig:
    return get_testing_config()
