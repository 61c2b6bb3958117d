# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Module export and keyword argument checking helpers."""
import difflib
import inspect
import sys
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, TypeVar

from ..._version import VERSION

__version__ = VERSION

T = TypeVar("T")

_NAMED_PARAM_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def export(obj: T) -> T:
    """Decorate function or class to export to __all__."""
    # pylint: disable=no-member
    mod_all = sys.modules[obj.__module__].__dict__.setdefault(  # type: ignore
        "__all__", []
    )
    mod_all.append(obj.__name__)  # type: ignore
    return obj


def _unknown_arg_error(arg_name: str, legal_args: List[str]) -> NameError:
    """Return a NameError suggesting the closest legal names."""
    closest = difflib.get_close_matches(arg_name, legal_args)
    if len(closest) == 1:
        hint = f"Closest match is '{closest[0]}'"
    elif closest:
        hint = "Closest matches are " + ", ".join(f"'{name}'" for name in closest)
    else:
        hint = "Valid options are " + ", ".join(f"'{name}'" for name in legal_args)
    return NameError(arg_name, f"'{arg_name}' is not a recognized argument. {hint}")


@export
def check_kwargs(supplied_args: Dict[str, Any], legal_args: List[str]):
    """
    Check all kwargs names against a list.

    Parameters
    ----------
    supplied_args : Dict[str, Any]
        Arguments to check
    legal_args : List[str]
        List of possible arguments.

    Raises
    ------
    NameError
        If any of the arguments are not legal. The exception
        args hold one NameError per illegal name, each suggesting
        the closest legal names.

    """
    name_errs = [
        _unknown_arg_error(name, legal_args)
        for name in supplied_args
        if name not in legal_args
    ]
    if name_errs:
        raise NameError(name_errs)


@export
def checked_kwargs(legal_args: Iterable[str]) -> Callable[[Callable], Callable]:
    """
    Decorate function to check kwargs names against legal arg names.

    The named parameters of the wrapped function are always legal.

    Parameters
    ----------
    legal_args : Iterable[str]
        Names accepted through `**kwargs`.

    """

    def arg_check_wrapper(func):
        func_args = {
            name
            for name, param in inspect.signature(func).parameters.items()
            if param.kind in _NAMED_PARAM_KINDS
        }
        valid_arg_names = sorted(set(legal_args) | func_args)

        @wraps(func)
        def wrapper(*args, **kwargs):
            check_kwargs(kwargs, valid_arg_names)
            return func(*args, **kwargs)

        return wrapper

    return arg_check_wrapper
