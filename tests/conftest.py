"""
Pytest configuration and shared fixtures for elastic-package tests.

Every test runs against an isolated data home so nothing touches the real
``~/.elastic-package``.
"""

import logging
from unittest.mock import MagicMock

import pytest

from elastic_package.configuration import LocationManager
from elastic_package.docker import ProcessRunner
from elastic_package.docker import runtime
from elastic_package.utils.config import DATA_HOME_ENV, reset_config_cache


@pytest.fixture(autouse=True)
def isolated_data_home(tmp_path, monkeypatch):
    """Point the data home at a temporary directory and reset caches."""
    data_home = tmp_path / "data-home"
    monkeypatch.setenv(DATA_HOME_ENV, str(data_home))
    reset_config_cache()
    runtime._cached_compose_cmd = None
    yield data_home
    reset_config_cache()
    runtime._cached_compose_cmd = None


@pytest.fixture(autouse=True)
def restore_root_log_level():
    """Keep a test's ``--verbose`` from leaking DEBUG logging into later tests."""
    root_logger = logging.getLogger()
    original = root_logger.level
    yield
    root_logger.setLevel(original)


@pytest.fixture
def locations(isolated_data_home):
    return LocationManager(isolated_data_home)


@pytest.fixture
def fake_runner():
    """A ProcessRunner double that records calls and never runs docker."""
    runner = MagicMock(spec=ProcessRunner)
    runner.debug = False
    runner.output.return_value = b""
    return runner
