# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Windows Registry hive to attribute tree.

-----------------------------------------------

Walks a decoded Windows Registry hive and materializes it as a
generic attribute tree for forensic analysis.

>>> from hivetree import Tree, Node, BytesVFileBuilder, parse_registry
>>> tree = Tree()
>>> file_node = Node("NTUSER.DAT")
>>> file_node.add_attribute("data", BytesVFileBuilder(hive_bytes))
>>> file_id = tree.add_child(tree.root_id, file_node)
>>> result = parse_registry(tree, file_id)
>>> result.summary()

Package structure
-----------------

- common - exceptions, configuration and utility functions
- datamodel - generic tree, nodes, attributes and values
- init - logging initialization
- transform - hive decoding and walking

Configuration
-------------

Set HIVETREECONFIG environment variable to point to the path
of your `hivetreeconfig.yaml` file.

"""
from ._version import VERSION
from .datamodel import (  # noqa: F401
    Attributes,
    BytesVFileBuilder,
    FileVFileBuilder,
    Node,
    Tree,
    Value,
    ValueType,
)
from .init.logging import set_logging_level, setup_logging  # noqa: F401
from .transform.hive_walker import (  # noqa: F401
    HiveWalker,
    IssueKind,
    WalkIssue,
    WalkResult,
    walk_hive,
)
from .transform.registry_plugin import parse_registry  # noqa: F401

__version__ = VERSION

setup_logging()
