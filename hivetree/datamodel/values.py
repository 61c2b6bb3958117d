# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Generic typed values held by tree node attributes."""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

import attr

from .._version import VERSION
from ..common.utility import export
from .vfile import VFileBuilder

__version__ = VERSION

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@export
class ValueType(Enum):
    """Type tag of a generic value."""

    NONE = "none"
    STRING = "string"
    I32 = "i32"
    DATETIME = "datetime"
    VFILE = "vfile"


@export
@attr.s(auto_attribs=True, frozen=True)
class Value:
    """
    Immutable tagged value.

    Attributes
    ----------
    type : ValueType
        The type tag.
    data : Any
        The python value - None for `ValueType.NONE`.

    Notes
    -----
    Use the constructor class methods (`none`, `string`, `i32`,
    `datetime`, `vfile`) rather than creating instances directly.

    """

    type: ValueType
    data: Any = None

    @classmethod
    def none(cls) -> "Value":
        """Return the absent value."""
        return cls(ValueType.NONE)

    @classmethod
    def string(cls, data: str) -> "Value":
        """Return a string value."""
        if not isinstance(data, str):
            raise TypeError(f"Expected str, got {type(data).__name__}")
        return cls(ValueType.STRING, data)

    @classmethod
    def i32(cls, data: int) -> "Value":
        """Return a signed 32-bit integer value."""
        if isinstance(data, bool) or not isinstance(data, int):
            raise TypeError(f"Expected int, got {type(data).__name__}")
        if not _I32_MIN <= data <= _I32_MAX:
            raise ValueError(f"{data} is out of range for a 32-bit signed integer")
        return cls(ValueType.I32, data)

    @classmethod
    def datetime(cls, data: datetime) -> "Value":
        """Return a timestamp value."""
        if not isinstance(data, datetime):
            raise TypeError(f"Expected datetime, got {type(data).__name__}")
        return cls(ValueType.DATETIME, data)

    @classmethod
    def vfile(cls, data: VFileBuilder) -> "Value":
        """Return a value wrapping a stream builder."""
        if not isinstance(data, VFileBuilder):
            raise TypeError(f"Expected VFileBuilder, got {type(data).__name__}")
        return cls(ValueType.VFILE, data)

    @classmethod
    def from_python(cls, data: Any) -> "Value":
        """
        Wrap a plain python object in a Value.

        Parameters
        ----------
        data : Any
            None, str, int, datetime or VFileBuilder.
            Value instances are returned unchanged.

        Returns
        -------
        Value
            The wrapped value.

        Raises
        ------
        TypeError
            If the type of `data` has no Value representation.

        """
        if isinstance(data, Value):
            return data
        if data is None:
            return cls.none()
        if isinstance(data, str):
            return cls.string(data)
        if isinstance(data, int) and not isinstance(data, bool):
            return cls.i32(data)
        if isinstance(data, datetime):
            return cls.datetime(data)
        if isinstance(data, VFileBuilder):
            return cls.vfile(data)
        raise TypeError(f"No Value type for {type(data).__name__}")

    @property
    def is_none(self) -> bool:
        """Return True if this is the absent value."""
        return self.type == ValueType.NONE

    def try_as_vfile_builder(self) -> Optional[VFileBuilder]:
        """Return the stream builder or None if this is not a VFILE value."""
        return self.data if self.type == ValueType.VFILE else None

    def __str__(self):
        """Return the string representation of the data."""
        return "None" if self.is_none else str(self.data)
