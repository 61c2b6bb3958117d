# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Package logging setup.

The level and log file are taken from the `HIVETREELOGLEVEL` and
`HIVETREELOGFILE` environment variables, falling back to the
`Logging` section of hivetreeconfig.yaml.
"""
import logging
import os
from typing import NamedTuple, Optional, Union

from .._version import VERSION
from ..common.pkg_config import get_config

__version__ = VERSION

_HV_LOG_FILE_ENV = "HIVETREELOGFILE"
_HV_LOG_LEVEL_ENV = "HIVETREELOGLEVEL"
_PKG_LOGGER = "hivetree"
_LOG_FORMAT = "%(asctime)s: %(levelname)s - %(message)s (%(module)s#%(lineno)d)"


class LoggingConfig(NamedTuple):
    """Log file and level for the package logger."""

    log_file: Optional[str] = None
    log_level: int = logging.WARNING


def _level_value(log_level: Union[int, str, None]) -> Optional[int]:
    """Return the numeric level for a level or level name, None if unknown."""
    if isinstance(log_level, int):
        return log_level
    if isinstance(log_level, str) and log_level.isdigit():
        return int(log_level)
    level_num = logging.getLevelName(log_level or "WARNING")
    return level_num if isinstance(level_num, int) else None


def set_logging_level(log_level: Union[int, str]):
    """
    Set the level of the hivetree logger.

    Parameters
    ----------
    log_level : Union[int, str]
        A numeric level such as logging.INFO or a level name
        such as "INFO".

    Raises
    ------
    ValueError
        If `log_level` is not a known level name.

    """
    level_num = _level_value(log_level)
    if level_num is None:
        raise ValueError(f"Invalid log level specified: {log_level}")
    logging.getLogger(_PKG_LOGGER).setLevel(level_num)


def get_logging_config() -> LoggingConfig:
    """Return the logging settings, environment first, then config."""
    log_file = os.environ.get(_HV_LOG_FILE_ENV) or get_config(
        "Logging.FileName", None
    )
    log_level = os.environ.get(_HV_LOG_LEVEL_ENV) or get_config(
        "Logging.LogLevel", None
    )
    level_num = _level_value(log_level)
    return LoggingConfig(
        log_file=log_file,
        log_level=logging.WARNING if level_num is None else level_num,
    )


def setup_logging():
    """Configure the root handler and the hivetree logger level."""
    log_config = get_logging_config()
    logging.basicConfig(
        filename=log_config.log_file,
        level=log_config.log_level,
        format=_LOG_FORMAT,
        encoding="utf-8",
    )
    logging.getLogger(_PKG_LOGGER).setLevel(log_config.log_level)
