# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Unit test common utilities."""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from filelock import FileLock

from hivetree.common import pkg_config

_SETTINGS_LOCK = Path(".hv_settings.lock")


def get_test_data_path() -> Path:
    """Return the testdata folder."""
    return Path(__file__).resolve().parent / "testdata"


TEST_DATA_PATH = str(get_test_data_path())


def _set_config_env(config_path: Optional[str]):
    if config_path is None:
        os.environ.pop(pkg_config._CONFIG_ENV_VAR, None)
    else:
        os.environ[pkg_config._CONFIG_ENV_VAR] = config_path
    pkg_config.refresh_config()


# pylint: disable=protected-access
@contextmanager
def custom_hivetree_config(
    hv_path: Union[str, Path], path_check: bool = True
) -> Iterator[Dict[str, Any]]:
    """
    Load settings from `hv_path` for the duration of the context.

    The package settings are global, so the swap is serialized
    across test workers with a file lock.

    Parameters
    ----------
    hv_path : Union[str, Path]
        Path to hivetree config yaml
    path_check : bool
        If False, allow a path that does not exist

    Yields
    ------
    Dict[str, Any]
        The consolidated settings.

    Raises
    ------
    FileNotFoundError
        If `path_check` is set and hv_path does not exist.

    """
    if path_check and not Path(hv_path).is_file():
        raise FileNotFoundError(f"Config file {hv_path} does not exist")
    with FileLock(str(_SETTINGS_LOCK)):
        saved_path = os.environ.get(pkg_config._CONFIG_ENV_VAR)
        try:
            _set_config_env(str(hv_path))
            yield pkg_config.settings
        finally:
            _set_config_env(saved_path)
