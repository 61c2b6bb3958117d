# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Package configuration reader.

Reads default configuration from package file `hivetreeconfig.yaml`.
Optionally reads custom configuration from file specified in environment
variable `HIVETREECONFIG`. If this is not defined the package will look for
a file `hivetreeconfig.yaml` in the current directory and then in
`~/.hivetree`.

Default settings are accessible as an attribute `default_settings`.
Custom settings are accessible as an attribute `custom_settings`.
Consolidated settings are accessible as an attribute `settings`.

"""
import copy
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from yaml.error import YAMLError

from .._version import VERSION
from . import exceptions
from .exceptions import HivetreeUserConfigError

__version__ = VERSION

_CONFIG_FILE: str = "hivetreeconfig.yaml"
_CONFIG_ENV_VAR: str = "HIVETREECONFIG"
_HOME_PATH = "~/.hivetree/"
_WALKER_LIMITS = ("MaxValueSize", "MaxDepth", "MaxNodes")

_NO_DEFAULT = object()

# pylint: disable=invalid-name
default_settings: Dict[str, Any] = {}
custom_settings: Dict[str, Any] = {}
settings: Dict[str, Any] = {}
_current_config_file: Optional[str] = None


def current_config_path() -> Optional[str]:
    """
    Return the path of the custom config file, if one was loaded.

    Returns
    -------
    Optional[str]
        Absolute path of the custom config file

    """
    return _current_config_file


def refresh_config():
    """Re-read the config settings."""
    # pylint: disable=global-statement
    global default_settings, custom_settings, settings, _current_config_file
    default_settings = _get_default_config()
    config_path = _find_custom_config()
    _current_config_file = str(config_path) if config_path else None
    custom_settings = (
        _read_config_file(_current_config_file) if _current_config_file else {}
    )
    settings = _merge_settings(default_settings, custom_settings)


def get_config(setting_path: str, default: Any = _NO_DEFAULT) -> Any:
    """
    Return setting item for path.

    Parameters
    ----------
    setting_path : str
        Path to setting item expressed as dot-separated
        string, e.g. "Walker.MaxDepth"
    default : Any, optional
        Value to return if the setting path does not exist.
        If not supplied, a missing path raises KeyError.

    Returns
    -------
    Any
        The item at the path location.

    Raises
    ------
    KeyError
        If the path does not exist and no default was supplied.

    """
    cur_node: Any = settings
    for elem in setting_path.split("."):
        if not isinstance(cur_node, dict) or elem not in cur_node:
            if default is _NO_DEFAULT:
                raise KeyError(f"{elem} value of {setting_path} is not a valid path")
            return default
        cur_node = cur_node[elem]
    return cur_node


def set_config(setting_path: str, value: Any):
    """
    Set setting value for path.

    Missing sections along the path are created. The change
    lasts until the next `refresh_config`.

    Parameters
    ----------
    setting_path : str
        Path to setting item expressed as dot-separated
        string
    value : Any
        The value to set.

    Raises
    ------
    KeyError
        If an element of the path is a setting rather than a section.

    """
    *sections, leaf = setting_path.split(".")
    cur_node = settings
    for elem in sections:
        cur_node = cur_node.setdefault(elem, {})
        if not isinstance(cur_node, dict):
            raise KeyError(f"{elem} value of {setting_path} is not a section")
    cur_node[leaf] = value


def _read_config_file(config_file: str) -> Dict[str, Any]:
    """
    Read a yaml config definition file.

    Parameters
    ----------
    config_file : str
        Path to yaml config file

    Returns
    -------
    Dict
        Configuration settings, empty if the file does not exist.

    Raises
    ------
    HivetreeUserConfigError
        If the file is not valid YAML.

    """
    config_path = Path(config_file)
    if not config_path.is_file():
        return {}
    try:
        return yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except YAMLError as yml_err:
        raise HivetreeUserConfigError(
            f"Check that your {config_file} is valid YAML.",
            "The following error was encountered",
            str(yml_err),
            title="config file could not be read",
        ) from yml_err


def _merge_settings(
    base: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Return a copy of `base` updated section by section from `overrides`.

    A None value in `overrides` leaves an existing base setting unchanged.
    """
    merged = copy.deepcopy(base)
    for name, value in overrides.items():
        if value is None and name in merged:
            continue
        if isinstance(value, dict):
            base_section = merged.get(name)
            merged[name] = _merge_settings(
                base_section if isinstance(base_section, dict) else {}, value
            )
        else:
            merged[name] = value
    return merged


def _get_default_config() -> Dict[str, Any]:
    """Return the package default config file."""
    conf_file = resources.files("hivetree").joinpath(_CONFIG_FILE)
    if not conf_file.is_file():
        raise HivetreeUserConfigError(
            f"Unable to locate the package default {_CONFIG_FILE}",
            "hivetree package may be corrupted.",
            title=f"Package {_CONFIG_FILE} missing.",
        )
    return _read_config_file(str(conf_file))


def _custom_config_candidates() -> Iterator[Path]:
    """Yield custom config locations in order of precedence."""
    env_path = os.environ.get(_CONFIG_ENV_VAR)
    if env_path:
        yield Path(env_path)
    yield Path(_CONFIG_FILE)
    yield Path(_HOME_PATH).joinpath(_CONFIG_FILE).expanduser()


def _find_custom_config() -> Optional[Path]:
    """Return the first existing custom config file."""
    return next(
        (path.resolve() for path in _custom_config_candidates() if path.is_file()),
        None,
    )


# read initial config when first imported.
refresh_config()


def validate_config(
    hv_config: Optional[Dict[str, Any]] = None, config_file: Optional[str] = None
) -> Tuple[List[str], List[str]]:
    """
    Validate hivetree config settings.

    Parameters
    ----------
    hv_config : Dict[str, Any], optional
        The settings dictionary, by default it will
        check the currently loaded settings.
    config_file : str
        path to config file to check, by default None

    Returns
    -------
    Tuple[List[str], List[str]]
        Lists of errors and warnings found.

    Raises
    ------
    TypeError
        If the settings are not a dictionary.

    """
    if config_file:
        hv_config = _read_config_file(config_file)
    elif not hv_config:
        hv_config = settings
    if not isinstance(hv_config, dict):
        raise TypeError("Unknown format for configuration settings.")

    hv_errors: List[str] = []
    hv_warnings: List[str] = []
    for check in (_validate_walker, _validate_logging):
        errors, warnings = check(hv_config)
        hv_errors.extend(errors)
        hv_warnings.extend(warnings)
    _print_validation_report(hv_errors, hv_warnings)
    return hv_errors, hv_warnings


def _print_validation_report(hv_errors: List[str], hv_warnings: List[str]):
    for kind, items in (("errors", hv_errors), ("warnings", hv_warnings)):
        if not items:
            print(f"No {kind} found.")
            continue
        title = f"The following configuration {kind} were found:"
        print(f"\n{title}\n{'-' * len(title)}")
        print("\n".join(items))


def _validate_walker(hv_config: Dict[str, Any]) -> Tuple[List[str], List[str]]:
    walker_settings = hv_config.get("Walker")
    if not walker_settings:
        return [], ["Missing or empty 'Walker' section - defaults used."]
    hv_errors = [
        f"Walker/{limit}: must be a non-negative integer."
        for limit in _WALKER_LIMITS
        if walker_settings.get(limit) is not None
        and not _is_limit(walker_settings[limit])
    ]
    hv_warnings = [
        f"Walker/{limit}: not set - default used."
        for limit in _WALKER_LIMITS
        if limit not in walker_settings
    ]
    return hv_errors, hv_warnings


def _is_limit(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _validate_logging(hv_config: Dict[str, Any]) -> Tuple[List[str], List[str]]:
    log_level = (hv_config.get("Logging") or {}).get("LogLevel")
    if not log_level or isinstance(log_level, int):
        return [], []
    if isinstance(logging.getLevelName(log_level), int):
        return [], []
    return [f"Logging/LogLevel: invalid log level '{log_level}'."], []


# Set get_config function in exceptions module
# so that it can be called without having a circular import
# pylint: disable=protected-access
exceptions._get_config = get_config
