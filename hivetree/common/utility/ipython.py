# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""IPython environment detection."""
from IPython import get_ipython

from ..._version import VERSION
from .types import export

__version__ = VERSION

_NOTEBOOK_SHELL = "ZMQInteractiveShell"


@export
def is_ipython(notebook: bool = False) -> bool:
    """
    Return True if running in an IPython shell.

    Parameters
    ----------
    notebook : bool, optional
        Only return True for a Jupyter notebook kernel,
        by default False

    """
    shell = get_ipython()
    if shell is None:
        return False
    return type(shell).__name__ == _NOTEBOOK_SHELL if notebook else True
