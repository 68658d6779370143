"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real filesystem: config,
data and log directories are redirected into ``tmp_path``.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from tests.fakes import FakeChannel, FakeClock, FakeGateway, ManualTickerFactory


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _reset_app_logger() -> None:
    import todofocus.utils.logger as logger_module

    app_logger = logging.getLogger("todofocus")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    logger_module._logger = None


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs lookups at a per-test temporary directory."""
    import todofocus.config as config_module

    tmpdir = str(tmp_path)
    config_module._config_manager = None
    _reset_app_logger()
    with patch("todofocus.config.user_config_dir", return_value=tmpdir):
        with patch(
            "todofocus.adapters.sqlite.connection.user_data_dir", return_value=tmpdir
        ):
            with patch("todofocus.utils.logger.user_log_dir", return_value=tmpdir):
                yield tmp_path
    config_module._config_manager = None
    _reset_app_logger()


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def gateway(clock):
    return FakeGateway(clock=clock)


@pytest.fixture()
def tickers():
    return ManualTickerFactory()


@pytest.fixture()
def channel():
    return FakeChannel()
