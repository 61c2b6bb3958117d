# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""N-ary tree of attribute nodes."""
import uuid
from typing import Any, Dict, List, Optional

import networkx as nx

from .._version import VERSION
from ..common.exceptions import TreeNodeNotFoundError
from ..common.utility import export
from .node import Node

__version__ = VERSION

TreeNodeId = uuid.UUID

_NODE_ATTR = "node"


@export
class Tree:
    """
    Tree of named nodes identified by opaque ids.

    Nodes are held in a directed graph with edges running from
    parent to child. Children are returned in insertion order.

    """

    def __init__(self, root_name: str = "root"):
        """
        Create a tree with a single root node.

        Parameters
        ----------
        root_name : str, optional
            Name of the root node, by default "root"

        """
        self._graph = nx.DiGraph(id="HiveTree")
        self.root_id: TreeNodeId = uuid.uuid4()
        self._graph.add_node(self.root_id, **{_NODE_ATTR: Node(root_name)})

    @property
    def graph(self) -> nx.DiGraph:
        """Return the underlying graph."""
        return self._graph

    @property
    def node_count(self) -> int:
        """Return the number of nodes including the root."""
        return self._graph.number_of_nodes()

    def add_child(self, parent_id: TreeNodeId, node: Node) -> TreeNodeId:
        """
        Insert `node` as the last child of `parent_id`.

        Parameters
        ----------
        parent_id : TreeNodeId
            Id of an existing node.
        node : Node
            The node to insert.

        Returns
        -------
        TreeNodeId
            The id of the inserted node.

        Raises
        ------
        TreeNodeNotFoundError
            If `parent_id` is not in the tree.

        """
        if parent_id not in self._graph:
            raise TreeNodeNotFoundError(f"Parent node {parent_id} not found in tree")
        node_id = uuid.uuid4()
        self._graph.add_node(node_id, **{_NODE_ATTR: node})
        self._graph.add_edge(parent_id, node_id)
        return node_id

    def get_node_from_id(self, node_id: TreeNodeId) -> Optional[Node]:
        """Return the node with id `node_id` or None."""
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id][_NODE_ATTR]

    def children(self, node_id: TreeNodeId) -> List[TreeNodeId]:
        """
        Return the child ids of `node_id` in insertion order.

        Raises
        ------
        TreeNodeNotFoundError
            If `node_id` is not in the tree.

        """
        if node_id not in self._graph:
            raise TreeNodeNotFoundError(f"Node {node_id} not found in tree")
        return list(self._graph.successors(node_id))

    def parent(self, node_id: TreeNodeId) -> Optional[TreeNodeId]:
        """Return the parent id of `node_id` (None for the root)."""
        if node_id not in self._graph:
            raise TreeNodeNotFoundError(f"Node {node_id} not found in tree")
        return next(iter(self._graph.predecessors(node_id)), None)

    def to_dict(self, node_id: Optional[TreeNodeId] = None) -> Dict[str, Any]:
        """
        Return the subtree at `node_id` as nested plain dicts.

        Node ids are not included, so two trees built from the same
        input produce equal dictionaries.

        Parameters
        ----------
        node_id : Optional[TreeNodeId], optional
            Subtree root, by default the tree root.

        Returns
        -------
        Dict[str, Any]
            Dictionary with "name", "attributes" and "children" keys.

        """
        start_id = self.root_id if node_id is None else node_id
        if start_id not in self._graph:
            raise TreeNodeNotFoundError(f"Node {start_id} not found in tree")
        start = {**self._graph.nodes[start_id][_NODE_ATTR].to_dict(), "children": []}
        pending = [(start_id, start)]
        while pending:
            cur_id, cur_dict = pending.pop()
            for child_id in self._graph.successors(cur_id):
                child_dict = {
                    **self._graph.nodes[child_id][_NODE_ATTR].to_dict(),
                    "children": [],
                }
                cur_dict["children"].append(child_dict)
                pending.append((child_id, child_dict))
        return start

    def __contains__(self, node_id: object) -> bool:
        """Return True if `node_id` is in the tree."""
        return node_id in self._graph

    def __len__(self) -> int:
        """Return the number of nodes."""
        return self.node_count
