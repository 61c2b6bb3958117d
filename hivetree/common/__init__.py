# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Common hivetree modules.

This is sub-package containing core utility and configuration
modules and classes.

- exceptions - exception hierarchy and user-friendly errors
- pkg_config - the main settings management module
- utility - export decorator and argument checking helpers

"""
