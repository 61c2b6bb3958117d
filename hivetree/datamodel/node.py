# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Generic tree node."""
from typing import Any, Dict, Optional, Union

from .._version import VERSION
from ..common.utility import export
from .attributes import Attributes
from .values import Value

__version__ = VERSION


@export
class Node:
    """A named tree node holding attribute groups."""

    def __init__(self, name: str):
        """
        Create a node.

        Parameters
        ----------
        name : str
            Display name of the node.

        """
        self.name = name
        self.attributes = Attributes()

    def add_attribute(
        self,
        name: str,
        value: Union[Attributes, Value, Any],
        description: Optional[str] = None,
    ):
        """Add a top-level attribute or attribute group to the node."""
        self.attributes.add_attribute(name, value, description)

    def get_attribute(self, name: str) -> Optional[Union[Attributes, Value]]:
        """Return the named top-level attribute value or group."""
        return self.attributes.get_value(name)

    def get_value(self, name: str) -> Optional[Value]:
        """Return the named top-level Value (groups are ignored)."""
        value = self.attributes.get_value(name)
        return value if isinstance(value, Value) else None

    def to_dict(self) -> Dict[str, Any]:
        """Return node name and attributes as plain python objects."""
        return {"name": self.name, "attributes": self.attributes.to_dict()}

    def __repr__(self):
        """Return repr of node."""
        return f"Node(name='{self.name}', attributes={self.attributes.names()})"
