# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Registry hive transforms.

- hive_decoder - hive cursor protocol and python-registry adapter
- value_decoder - payload to generic value conversion
- tree_builder - registry key and value node creation
- hive_walker - depth-first hive walk
- registry_plugin - parse a hive held by a file node

"""
from .._version import VERSION

__version__ = VERSION
