# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Parse a registry hive held by a file node into the tree below it."""
import logging
from typing import BinaryIO, Optional

from .._version import VERSION
from ..common.exceptions import (
    HiveArgumentMissingError,
    HiveFormatError,
    HiveValueMissingError,
    HiveValueTypeMismatchError,
)
from ..common.utility import checked_kwargs, export
from ..datamodel.attributes import Attributes
from ..datamodel.tree import Tree, TreeNodeId
from ..datamodel.vfile import VFileBuilder
from .hive_decoder import HiveDecoder, RegfDecoder
from .hive_walker import WALKER_ARGS, HiveWalker, WalkResult
from .tree_builder import REGISTRY_GROUP

__version__ = VERSION

logger = logging.getLogger(__name__)

PLUGIN_NAME = "registry"
PLUGIN_CATEGORY = "Windows"
PLUGIN_DESCRIPTION = "Parse registry file"

DATA_ATTR = "data"


def _open_hive_stream(data_builder: VFileBuilder, node_name: str) -> BinaryIO:
    """Open a stream on the hive data, raising HiveFormatError if it cannot."""
    try:
        return data_builder.open()
    except OSError as err:
        raise HiveFormatError(
            f"The hive data of '{node_name}' could not be opened.",
            str(err),
            title="unreadable hive",
        ) from err


@export
@checked_kwargs(WALKER_ARGS)
def parse_registry(
    tree: Tree,
    file_id: TreeNodeId,
    decoder: Optional[HiveDecoder] = None,
    **kwargs,
) -> WalkResult:
    """
    Parse the hive in the `data` stream of a file node.

    The hive root key is walked into the tree as a child of
    the file node.

    Parameters
    ----------
    tree : Tree
        Tree holding the file node.
    file_id : TreeNodeId
        Id of the node whose `data` attribute holds the hive stream.
    decoder : Optional[HiveDecoder], optional
        Hive decoder to use, by default RegfDecoder (python-registry).

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
        Root key node id, counts and recoverable issues met by the walk.

    Raises
    ------
    HiveArgumentMissingError
        If `file_id` is not in the tree.
    HiveValueMissingError
        If the node has no `data` attribute.
    HiveValueTypeMismatchError
        If the `data` attribute is not a stream.
    HiveFormatError
        If the data cannot be opened or is not a valid registry hive.

    """
    walker = HiveWalker(**kwargs)
    file_node = tree.get_node_from_id(file_id)
    if file_node is None:
        raise HiveArgumentMissingError(
            f"No node with id {file_id}.", argument="file", title="file node not found"
        )
    file_node.add_attribute(REGISTRY_GROUP, Attributes())
    data = file_node.get_value(DATA_ATTR)
    if data is None:
        raise HiveValueMissingError(
            f"Node '{file_node.name}' has no hive data.",
            value=DATA_ATTR,
            title="hive data not found",
        )
    data_builder = data.try_as_vfile_builder()
    if data_builder is None:
        raise HiveValueTypeMismatchError(
            f"The '{DATA_ATTR}' attribute of '{file_node.name}' is {data.type.value},"
            " not a stream.",
            title="hive data is not a stream",
        )
    decoder = decoder or RegfDecoder()
    with _open_hive_stream(data_builder, file_node.name) as hive_stream:
        hive = decoder.decode(hive_stream)
        root_key = hive.root()
    logger.info("Parsing registry hive from node '%s'", file_node.name)
    with _open_hive_stream(data_builder, file_node.name) as walk_stream:
        return walker.walk(root_key, tree, walk_stream, file_id)
