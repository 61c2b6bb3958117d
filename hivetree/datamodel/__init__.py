# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Generic attribute tree data model.

- values - typed Value variant
- attributes - named attribute groups
- node - tree node
- tree - n-ary tree container
- vfile - stream builders for evidence data

"""
from .._version import VERSION
from .attributes import Attribute, Attributes  # noqa: F401
from .node import Node  # noqa: F401
from .tree import Tree, TreeNodeId  # noqa: F401
from .values import Value, ValueType  # noqa: F401
from .vfile import BytesVFileBuilder, FileVFileBuilder, VFileBuilder  # noqa: F401

__version__ = VERSION
