# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Named attribute groups attached to tree nodes."""
from typing import Any, Dict, Iterator, List, Optional, Union

import attr

from .._version import VERSION
from ..common.utility import export
from .values import Value

__version__ = VERSION


@export
@attr.s(auto_attribs=True, frozen=True)
class Attribute:
    """A single named attribute - either a Value or a nested group."""

    name: str
    value: Union[Value, "Attributes"]
    description: Optional[str] = None


@export
class Attributes:
    """
    Ordered collection of named attributes.

    An attribute holds either a typed `Value` or a nested
    `Attributes` group, allowing findings to be attached to a
    node without changing the shape of the tree.

    """

    def __init__(self):
        """Create an empty attribute group."""
        self._attributes: Dict[str, Attribute] = {}

    def add_attribute(
        self,
        name: str,
        value: Union[Value, "Attributes", Any],
        description: Optional[str] = None,
    ) -> "Attributes":
        """
        Add (or replace) an attribute.

        Parameters
        ----------
        name : str
            Attribute name.
        value : Union[Value, Attributes, Any]
            A Value, a nested Attributes group or a plain python
            object that can be converted with `Value.from_python`.
        description : Optional[str], optional
            Optional description of the attribute, by default None

        Returns
        -------
        Attributes
            This group, to allow chaining.

        """
        if not isinstance(value, Attributes):
            value = Value.from_python(value)
        self._attributes[name] = Attribute(name, value, description)
        return self

    def get_attribute(self, name: str) -> Optional[Attribute]:
        """Return the named attribute or None."""
        return self._attributes.get(name)

    def get_value(self, name: str) -> Optional[Union[Value, "Attributes"]]:
        """Return the value of the named attribute or None."""
        attribute = self._attributes.get(name)
        return attribute.value if attribute else None

    def names(self) -> List[str]:
        """Return the attribute names in insertion order."""
        return list(self._attributes)

    def to_dict(self) -> Dict[str, Any]:
        """Return attributes as a nested dict of plain python values."""
        return {
            name: (
                attrib.value.to_dict()
                if isinstance(attrib.value, Attributes)
                else attrib.value.data
            )
            for name, attrib in self._attributes.items()
        }

    def __contains__(self, name: object) -> bool:
        """Return True if `name` is an attribute."""
        return name in self._attributes

    def __len__(self) -> int:
        """Return number of attributes."""
        return len(self._attributes)

    def __iter__(self) -> Iterator[Attribute]:
        """Iterate over attributes in insertion order."""
        return iter(self._attributes.values())

    def __eq__(self, other: object) -> bool:
        """Return True if both groups hold equal attributes in the same order."""
        if not isinstance(other, Attributes):
            return NotImplemented
        return list(self._attributes.items()) == list(other._attributes.items())

    __hash__ = None  # type: ignore

    def __repr__(self):
        """Return repr of the group."""
        return f"Attributes({', '.join(self._attributes)})"
