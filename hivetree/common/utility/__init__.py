# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Utility sub-package - module exports, kwarg checks and IPython detection."""
from ..._version import VERSION
from .ipython import is_ipython  # noqa: F401
from .types import check_kwargs, checked_kwargs, export  # noqa: F401

__version__ = VERSION
