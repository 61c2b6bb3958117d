# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Creates registry key and value nodes in an attribute tree."""
from datetime import datetime
from typing import Optional

from .._version import VERSION
from ..common.utility import export
from ..datamodel.attributes import Attributes
from ..datamodel.node import Node
from ..datamodel.tree import Tree, TreeNodeId
from ..datamodel.values import Value

__version__ = VERSION

REGISTRY_GROUP = "registry"
LAST_WRITTEN_ATTR = "last_written"
DATA_ATTR = "data"
DEFAULT_VALUE_NAME = "default"


@export
class RegistryTreeBuilder:
    """Builds registry nodes and inserts them into a Tree."""

    def __init__(self, tree: Tree):
        """
        Create the builder.

        Parameters
        ----------
        tree : Tree
            The destination tree. The builder is its only
            writer for the duration of a walk.

        """
        self.tree = tree
        self.nodes_created = 0

    @staticmethod
    def key_node(name: str, last_written: Optional[datetime] = None) -> Node:
        """Return a key node, with a registry group if a timestamp is known."""
        node = Node(name)
        if last_written is not None:
            attributes = Attributes()
            attributes.add_attribute(LAST_WRITTEN_ATTR, Value.datetime(last_written))
            node.add_attribute(REGISTRY_GROUP, attributes)
        return node

    @staticmethod
    def value_node(name: str, value: Value) -> Node:
        """Return a value node - an empty name becomes "default"."""
        node = Node(name or DEFAULT_VALUE_NAME)
        attributes = Attributes()
        attributes.add_attribute(DATA_ATTR, value)
        node.add_attribute(REGISTRY_GROUP, attributes)
        return node

    def insert(self, parent_id: TreeNodeId, node: Node) -> TreeNodeId:
        """
        Insert `node` under `parent_id`.

        Raises
        ------
        TreeNodeNotFoundError
            If `parent_id` is not in the tree.

        """
        node_id = self.tree.add_child(parent_id, node)
        self.nodes_created += 1
        return node_id
