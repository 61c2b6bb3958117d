# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Registry hive walker.

Materializes a decoded hive as nodes of an attribute tree.
Each key becomes a node holding its values (as leaf nodes) followed
by its child keys, in decoder enumeration order.

Problems that the walk recovers from - unreadable or undecodable
values, oversized values, failing key/value cursors and resource
limits - are never raised. They are returned as `WalkIssue` records
in the `WalkResult` so that a truncated tree can be told apart from
a complete one.
"""
import logging
from enum import Enum
from typing import BinaryIO, Dict, List, Optional

import attr
import pandas as pd

from .._version import VERSION
from ..common.exceptions import (
    HiveEnumerationError,
    HiveValueReadError,
    TreeNodeNotFoundError,
)
from ..common.pkg_config import get_config
from ..common.utility import checked_kwargs, export
from ..datamodel.node import Node
from ..datamodel.tree import Tree, TreeNodeId
from .hive_decoder import HiveKey, HiveValue
from .tree_builder import DEFAULT_VALUE_NAME, RegistryTreeBuilder
from .value_decoder import decode_value

__version__ = VERSION

logger = logging.getLogger(__name__)

DEFAULT_MAX_VALUE_SIZE = 100 * 1024 * 1024
DEFAULT_MAX_DEPTH = 512

WALKER_ARGS = ["max_value_size", "max_depth", "max_nodes"]


@export
class IssueKind(Enum):
    """Kinds of recoverable problems met during a walk."""

    VALUE_READ_FAILURE = "ValueReadFailure"
    VALUE_DECODE_FAILURE = "ValueDecodeFailure"
    OVERSIZED_VALUE = "OversizedValue"
    VALUE_ENUMERATION_FAILURE = "ValueEnumerationFailure"
    KEY_ENUMERATION_FAILURE = "KeyEnumerationFailure"
    DEPTH_LIMIT = "DepthLimit"
    NODE_LIMIT = "NodeLimit"
    PARENT_MISSING = "ParentMissing"


# Issues that cut short the enumeration of a key or the walk.
TRUNCATING_ISSUES = frozenset(
    {
        IssueKind.VALUE_ENUMERATION_FAILURE,
        IssueKind.KEY_ENUMERATION_FAILURE,
        IssueKind.DEPTH_LIMIT,
        IssueKind.NODE_LIMIT,
        IssueKind.PARENT_MISSING,
    }
)


@export
@attr.s(auto_attribs=True, frozen=True)
class WalkIssue:
    """
    A recoverable problem recorded during a walk.

    Attributes
    ----------
    kind : IssueKind
        The type of problem.
    key_path : str
        Backslash-separated path of the key (from the walk root)
        where the problem occurred.
    name : Optional[str]
        Name of the value concerned, if any.
    node_id : Optional[TreeNodeId]
        Id of the key node where the problem occurred, if it was created.
    message : str
        Description of the problem.

    """

    kind: IssueKind
    key_path: str
    name: Optional[str] = None
    node_id: Optional[TreeNodeId] = None
    message: str = ""

    @property
    def truncating(self) -> bool:
        """Return True if this issue cut short part of the walk."""
        return self.kind in TRUNCATING_ISSUES


@export
@attr.s(auto_attribs=True)
class WalkResult:
    """Outcome of a hive walk."""

    root_id: Optional[TreeNodeId] = None
    issues: List[WalkIssue] = attr.Factory(list)
    key_count: int = 0
    value_count: int = 0

    @property
    def truncated(self) -> bool:
        """Return True if any part of the hive was not walked."""
        return any(issue.truncating for issue in self.issues)

    def summary(self) -> Dict[str, int]:
        """
        Return counts of keys, values and issues.

        Returns
        -------
        Dict[str, int]
            Counts of keys, values, total issues and of
            each issue kind encountered.

        """
        summary = {
            "Keys": self.key_count,
            "Values": self.value_count,
            "Issues": len(self.issues),
        }
        for issue in self.issues:
            summary[issue.kind.value] = summary.get(issue.kind.value, 0) + 1
        return summary

    def to_df(self) -> pd.DataFrame:
        """Return the issues as a DataFrame, one row per issue."""
        return pd.DataFrame(
            [
                {
                    "Kind": issue.kind.value,
                    "KeyPath": issue.key_path,
                    "Name": issue.name,
                    "NodeId": issue.node_id,
                    "Message": issue.message,
                }
                for issue in self.issues
            ],
            columns=["Kind", "KeyPath", "Name", "NodeId", "Message"],
        )


@attr.s(auto_attribs=True)
class _KeyFrame:
    """Pending or in-progress key on the walk stack."""

    key: HiveKey
    parent_id: TreeNodeId
    depth: int
    path: str
    node_id: Optional[TreeNodeId] = None


def _get_limit(value: Optional[int], setting: str, default: int) -> int:
    """Return `value` or the configured limit, checking it is valid."""
    if value is None:
        value = get_config(setting, default)
        if value is None:
            value = default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{setting} must be a non-negative integer, got {value!r}")
    return value


@export
class HiveWalker:
    """
    Depth-first hive walker.

    Traversal uses an explicit stack of key frames rather than
    recursion. A frame's child keys are requested one at a time
    and each child is walked completely before its next sibling
    is requested.

    """

    def __init__(
        self,
        max_value_size: Optional[int] = None,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
    ):
        """
        Create the walker.

        Parameters
        ----------
        max_value_size : Optional[int], optional
            Values with a larger declared size are skipped.
            Defaults to the `Walker.MaxValueSize` setting (100 MiB).
        max_depth : Optional[int], optional
            Deepest key nesting below the walk root that is descended
            into, 0 for no limit. Defaults to `Walker.MaxDepth` (512).
        max_nodes : Optional[int], optional
            Maximum number of nodes a walk may create, 0 for no limit.
            Defaults to `Walker.MaxNodes` (0).

        Raises
        ------
        ValueError
            If a limit is not a non-negative integer.

        """
        self.max_value_size = _get_limit(
            max_value_size, "Walker.MaxValueSize", DEFAULT_MAX_VALUE_SIZE
        )
        self.max_depth = _get_limit(max_depth, "Walker.MaxDepth", DEFAULT_MAX_DEPTH)
        self.max_nodes = _get_limit(max_nodes, "Walker.MaxNodes", 0)

    def walk(
        self,
        key: HiveKey,
        tree: Tree,
        stream: BinaryIO,
        parent_node_id: TreeNodeId,
    ) -> WalkResult:
        """
        Walk `key` and its descendants into `tree`.

        Parameters
        ----------
        key : HiveKey
            The key to start from (usually the hive root).
        tree : Tree
            Destination tree.
        stream : BinaryIO
            Hive stream, read sequentially by the decoder cursors.
            It must not be used by anything else during the walk.
        parent_node_id : TreeNodeId
            Node under which the node for `key` is inserted.

        Returns
        -------
        WalkResult
            Id of the node created for `key` plus counts and
            any recoverable issues met.

        Raises
        ------
        TreeNodeNotFoundError
            If `parent_node_id` is not in `tree`.

        """
        if parent_node_id not in tree:
            raise TreeNodeNotFoundError(
                f"Parent node {parent_node_id} not found in tree"
            )
        walk = _HiveWalk(self, RegistryTreeBuilder(tree), stream)
        result = walk.run(key, parent_node_id)
        logger.info(
            "Walked hive key %s: %d keys, %d values, %d issues%s",
            key.name(),
            result.key_count,
            result.value_count,
            len(result.issues),
            " (truncated)" if result.truncated else "",
        )
        return result


class _HiveWalk:
    """State of a single walk."""

    def __init__(self, walker: HiveWalker, builder: RegistryTreeBuilder, stream):
        self.walker = walker
        self.builder = builder
        self.stream = stream
        self.result = WalkResult()
        self.halted = False

    def run(self, key: HiveKey, parent_node_id: TreeNodeId) -> WalkResult:
        """Walk from `key` until the stack is empty or the walk halts."""
        stack = [_KeyFrame(key, parent_node_id, depth=0, path=key.name())]
        while stack and not self.halted:
            frame = stack[-1]
            if frame.node_id is None:
                if not self._open_key(frame):
                    stack.pop()
                continue
            child = self._next_child(frame)
            if child is None:
                stack.pop()
                continue
            max_depth = self.walker.max_depth
            if max_depth and frame.depth + 1 > max_depth:
                self._record(
                    IssueKind.DEPTH_LIMIT,
                    frame,
                    message=f"Subkeys deeper than {max_depth} levels not walked.",
                )
                stack.pop()
                continue
            stack.append(
                _KeyFrame(
                    child,
                    frame.node_id,
                    depth=frame.depth + 1,
                    path=f"{frame.path}\\{child.name()}",
                )
            )
        return self.result

    def _open_key(self, frame: _KeyFrame) -> bool:
        """
        Create the key node and run the value phase.

        Returns False if the key phase must not run.
        """
        node = self.builder.key_node(frame.key.name(), frame.key.last_written())
        node_id = self._insert(frame, frame.parent_id, node)
        if node_id is None:
            return False
        frame.node_id = node_id
        self.result.key_count += 1
        if self.result.root_id is None:
            self.result.root_id = node_id

        while True:
            try:
                value = frame.key.next_value(self.stream)
            except HiveEnumerationError as err:
                self._record(
                    IssueKind.VALUE_ENUMERATION_FAILURE, frame, message=str(err)
                )
                return False
            if value is None:
                return True
            if not self._add_value(frame, value):
                return False

    def _add_value(self, frame: _KeyFrame, value: HiveValue) -> bool:
        """Read, decode and insert a value node. Returns False on halt."""
        name = value.name() or DEFAULT_VALUE_NAME
        size = value.size()
        if size > self.walker.max_value_size:
            self._record(
                IssueKind.OVERSIZED_VALUE,
                frame,
                name,
                f"Declared size {size} exceeds limit {self.walker.max_value_size}.",
            )
            return True
        try:
            value.read(self.stream)
        except HiveValueReadError as err:
            self._record(IssueKind.VALUE_READ_FAILURE, frame, name, str(err))
        decoded = decode_value(value)
        if decoded.failed:
            self._record(IssueKind.VALUE_DECODE_FAILURE, frame, name, decoded.error)
        node = self.builder.value_node(name, decoded.value)
        if self._insert(frame, frame.node_id, node) is None:
            return False
        self.result.value_count += 1
        return True

    def _next_child(self, frame: _KeyFrame) -> Optional[HiveKey]:
        try:
            return frame.key.next_key(self.stream)
        except HiveEnumerationError as err:
            self._record(IssueKind.KEY_ENUMERATION_FAILURE, frame, message=str(err))
            return None

    def _insert(
        self, frame: _KeyFrame, parent_id: TreeNodeId, node: Node
    ) -> Optional[TreeNodeId]:
        """Insert a node, None if stopped by the node limit or a missing parent."""
        max_nodes = self.walker.max_nodes
        if max_nodes and self.builder.nodes_created >= max_nodes:
            self._record(
                IssueKind.NODE_LIMIT,
                frame,
                node.name,
                f"Node limit of {max_nodes} reached, walk stopped.",
            )
            self.halted = True
            return None
        try:
            return self.builder.insert(parent_id, node)
        except TreeNodeNotFoundError as err:
            self._record(IssueKind.PARENT_MISSING, frame, node.name, str(err))
            return None

    def _record(
        self,
        kind: IssueKind,
        frame: _KeyFrame,
        name: Optional[str] = None,
        message: str = "",
    ):
        issue = WalkIssue(
            kind=kind,
            key_path=frame.path,
            name=name,
            node_id=frame.node_id,
            message=message,
        )
        self.result.issues.append(issue)
        logger.log(
            logging.WARNING if issue.truncating else logging.DEBUG,
            "%s at %s%s: %s",
            kind.value,
            frame.path,
            f" ({name})" if name is not None else "",
            message,
        )


@export
@checked_kwargs(WALKER_ARGS)
def walk_hive(
    key: HiveKey,
    tree: Tree,
    stream: BinaryIO,
    parent_node_id: TreeNodeId,
    **kwargs,
) -> WalkResult:
    """
    Walk a hive key into a tree.

    Parameters
    ----------
    key : HiveKey
        The key to start from (usually the hive root).
    tree : Tree
        Destination tree.
    stream : BinaryIO
        Hive stream, exclusively owned by the walk.
    parent_node_id : TreeNodeId
        Node under which the node for `key` is inserted.

    Other Parameters
    ----------------
    max_value_size : int, optional
        Values with a larger declared size are skipped.
    max_depth : int, optional
        Deepest key nesting walked, 0 for no limit.
    max_nodes : int, optional
        Maximum nodes created, 0 for no limit.

    Returns
    -------
    WalkResult
        Root node id, counts and recoverable issues.

    See Also
    --------
    HiveWalker

    """
    return HiveWalker(**kwargs).walk(key, tree, stream, parent_node_id)
