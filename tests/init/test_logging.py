# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Logging initialization test class."""
import logging
from pathlib import Path

import pytest
import pytest_check as check

from hivetree.common import pkg_config
from hivetree.init import logging as hv_logging

from ..unit_test_lib import custom_hivetree_config, get_test_data_path

# pylint: disable=protected-access


@pytest.fixture
def restore_level():
    """Restore the package logger level after the test."""
    logger = logging.getLogger("hivetree")
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_logging_config_defaults(monkeypatch):
    """Test the default logging configuration."""
    monkeypatch.delenv(hv_logging._HV_LOG_LEVEL_ENV, raising=False)
    monkeypatch.delenv(hv_logging._HV_LOG_FILE_ENV, raising=False)
    log_config = hv_logging.get_logging_config()
    check.equal(log_config.log_level, logging.WARNING)
    check.is_none(log_config.log_file)


def test_logging_config_env(monkeypatch, tmp_path):
    """Test environment variables override the settings."""
    log_file = str(tmp_path.joinpath("hivetree.log"))
    monkeypatch.setenv(hv_logging._HV_LOG_LEVEL_ENV, "DEBUG")
    monkeypatch.setenv(hv_logging._HV_LOG_FILE_ENV, log_file)
    log_config = hv_logging.get_logging_config()
    check.equal(log_config.log_level, logging.DEBUG)
    check.equal(log_config.log_file, log_file)

    monkeypatch.setenv(hv_logging._HV_LOG_LEVEL_ENV, "NOTALEVEL")
    check.equal(hv_logging.get_logging_config().log_level, logging.WARNING)


def test_logging_config_numeric_env(monkeypatch):
    """Test a numeric level in the environment is used as is."""
    monkeypatch.setenv(hv_logging._HV_LOG_LEVEL_ENV, "10")
    check.equal(hv_logging.get_logging_config().log_level, logging.DEBUG)
    monkeypatch.setenv(hv_logging._HV_LOG_LEVEL_ENV, "25")
    check.equal(hv_logging.get_logging_config().log_level, 25)


def test_logging_config_settings(monkeypatch):
    """Test the level is read from the config file."""
    monkeypatch.delenv(hv_logging._HV_LOG_LEVEL_ENV, raising=False)
    test_config = Path(get_test_data_path()).joinpath(pkg_config._CONFIG_FILE)
    with custom_hivetree_config(test_config):
        check.equal(hv_logging.get_logging_config().log_level, logging.DEBUG)


def test_set_logging_level(restore_level):
    """Test setting the package logging level."""
    hv_logging.set_logging_level("INFO")
    check.equal(restore_level.level, logging.INFO)
    hv_logging.set_logging_level(logging.ERROR)
    check.equal(restore_level.level, logging.ERROR)
    hv_logging.set_logging_level("30")
    check.equal(restore_level.level, logging.WARNING)
    with pytest.raises(ValueError):
        hv_logging.set_logging_level("LOUD")


def test_setup_logging(monkeypatch, restore_level):
    """Test setup applies the configured level to the package logger."""
    monkeypatch.setenv(hv_logging._HV_LOG_LEVEL_ENV, "ERROR")
    hv_logging.setup_logging()
    check.equal(restore_level.level, logging.ERROR)
