# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""
Registry hive decoder interface and python-registry adapter.

The walker consumes hives through a small cursor protocol:
a `HiveDecoder` turns a byte stream into a `Hive`, the hive exposes
its root `HiveKey` and each key hands out its values and child keys
one at a time via `next_value` and `next_key`. Cursor failures are
raised as `HiveEnumerationError`.

`RegfDecoder` implements the protocol over the `Registry` package
(python-registry).
"""
import logging
import struct
from datetime import datetime
from typing import BinaryIO, Iterator, Optional, Union

import attr
from Registry import RegistryParse
from typing_extensions import Protocol

from .._version import VERSION
from ..common.exceptions import (
    HiveEnumerationError,
    HiveFormatError,
    HiveValueDecodeError,
    HiveValueReadError,
)
from ..common.utility import export

__version__ = VERSION

logger = logging.getLogger(__name__)

# Exceptions python-registry can raise while reading corrupt records.
_PARSE_ERRORS = (
    RegistryParse.RegistryException,
    struct.error,
    IndexError,
    ValueError,
    OverflowError,
    UnicodeDecodeError,
)

REG_NONE = RegistryParse.RegNone
REG_SZ = RegistryParse.RegSZ
REG_EXPAND_SZ = RegistryParse.RegExpandSZ
REG_DWORD = RegistryParse.RegDWord


# Payload variants
@export
@attr.s(auto_attribs=True, frozen=True)
class NoData:
    """Value explicitly holds no data (REG_NONE)."""


@export
@attr.s(auto_attribs=True, frozen=True)
class StringData:
    """UTF string payload."""

    value: str


@export
@attr.s(auto_attribs=True, frozen=True)
class Int32Data:
    """Signed 32-bit integer payload."""

    value: int


HivePayload = Union[NoData, StringData, Int32Data]


# Decoder protocol
class HiveValue(Protocol):
    """A named value under a hive key."""

    def name(self) -> str:
        """Return the value name - empty for the default value."""

    def size(self) -> int:
        """Return the declared data size in bytes."""

    def read(self, stream: BinaryIO):
        """Read the payload, raising HiveValueReadError on failure."""

    def decode(self) -> Optional[HivePayload]:
        """Decode the payload, raising HiveValueDecodeError on failure."""


class HiveKey(Protocol):
    """A registry key with read-once cursors for values and child keys."""

    def name(self) -> str:
        """Return the key name."""

    def last_written(self) -> Optional[datetime]:
        """Return the last-written timestamp, if available."""

    def next_value(self, stream: BinaryIO) -> Optional[HiveValue]:
        """Return the next value, None when exhausted."""

    def next_key(self, stream: BinaryIO) -> Optional["HiveKey"]:
        """Return the next child key, None when exhausted."""


class Hive(Protocol):
    """A decoded hive."""

    def root(self) -> HiveKey:
        """Return the root key, raising HiveFormatError on failure."""


class HiveDecoder(Protocol):
    """Turns a byte stream into a Hive."""

    def decode(self, stream: BinaryIO) -> Hive:
        """Decode the stream, raising HiveFormatError on failure."""


# python-registry adapter
@export
class RegfValue:
    """HiveValue over a python-registry VKRecord."""

    def __init__(self, vk_record: RegistryParse.VKRecord):
        """
        Wrap a value record.

        Parameters
        ----------
        vk_record : RegistryParse.VKRecord
            The value record.

        Raises
        ------
        HiveEnumerationError
            If the record header cannot be parsed.

        """
        self._vk_record = vk_record
        self._payload: Optional[bytes] = None
        try:
            self._name = vk_record.name() if vk_record.has_name() else ""
            self._size = vk_record.data_length()
            self._data_type = vk_record.data_type()
        except _PARSE_ERRORS as err:
            raise HiveEnumerationError(f"Invalid value record: {err}") from err

    def name(self) -> str:
        """Return the value name."""
        return self._name

    def size(self) -> int:
        """Return the declared data length."""
        return self._size

    @property
    def data_type(self) -> int:
        """Return the registry data type constant."""
        return self._data_type

    def read(self, stream: BinaryIO):
        """
        Read the raw payload.

        Parameters
        ----------
        stream : BinaryIO
            Hive stream. Unused - python-registry serves the payload
            from the buffer read in `RegfDecoder.decode`.

        Raises
        ------
        HiveValueReadError
            If the payload cannot be located or read.

        """
        del stream
        try:
            self._payload = self._vk_record.raw_data()
        except _PARSE_ERRORS as err:
            self._payload = None
            raise HiveValueReadError(
                f"Cannot read data of '{self._name}': {err}"
            ) from err

    def decode(self) -> Optional[HivePayload]:
        """
        Decode the payload read by `read`.

        Returns
        -------
        Optional[HivePayload]
            NoData for REG_NONE, StringData for REG_SZ/REG_EXPAND_SZ,
            Int32Data for REG_DWORD and None for any other type.

        Raises
        ------
        HiveValueDecodeError
            If the payload was not read or is malformed.

        """
        if self._data_type == REG_NONE:
            return NoData()
        if self._data_type not in (REG_SZ, REG_EXPAND_SZ, REG_DWORD):
            return None
        if self._payload is None:
            raise HiveValueDecodeError(f"No payload read for '{self._name}'")
        if self._data_type == REG_DWORD:
            if len(self._payload) < 4:
                raise HiveValueDecodeError(
                    f"DWORD payload of '{self._name}' is {len(self._payload)} bytes"
                )
            return Int32Data(struct.unpack_from("<i", self._payload)[0])
        try:
            return StringData(RegistryParse.decode_utf16le(self._payload))
        except (UnicodeDecodeError, ValueError) as err:
            raise HiveValueDecodeError(
                f"String payload of '{self._name}' is not valid UTF-16: {err}"
            ) from err


@export
class RegfKey:
    """HiveKey over a python-registry NKRecord."""

    def __init__(self, nk_record: RegistryParse.NKRecord):
        """
        Wrap a key record.

        Parameters
        ----------
        nk_record : RegistryParse.NKRecord
            The key record.

        Raises
        ------
        HiveEnumerationError
            If the key name cannot be parsed.

        """
        self._nk_record = nk_record
        self._values: Optional[Iterator[RegistryParse.VKRecord]] = None
        self._subkeys: Optional[Iterator[RegistryParse.NKRecord]] = None
        try:
            self._name = nk_record.name()
        except _PARSE_ERRORS as err:
            raise HiveEnumerationError(f"Invalid key record: {err}") from err

    def name(self) -> str:
        """Return the key name."""
        return self._name

    def last_written(self) -> Optional[datetime]:
        """Return the key timestamp or None if it cannot be parsed."""
        try:
            return self._nk_record.timestamp()
        except _PARSE_ERRORS as err:
            logger.debug("Unreadable timestamp on key %s: %s", self._name, err)
            return None

    def next_value(self, stream: BinaryIO) -> Optional[RegfValue]:
        """
        Return the next value of this key.

        Raises
        ------
        HiveEnumerationError
            If the value list or a value record is corrupt.

        """
        del stream
        try:
            if self._values is None:
                self._values = (
                    iter(self._nk_record.values_list().values())
                    if self._nk_record.values_number()
                    else iter(())
                )
            vk_record = next(self._values, None)
        except _PARSE_ERRORS as err:
            self._values = iter(())
            raise HiveEnumerationError(
                f"Value enumeration of key '{self._name}' failed: {err}"
            ) from err
        return RegfValue(vk_record) if vk_record is not None else None

    def next_key(self, stream: BinaryIO) -> Optional["RegfKey"]:
        """
        Return the next child key of this key.

        Raises
        ------
        HiveEnumerationError
            If the subkey list or a subkey record is corrupt.

        """
        del stream
        try:
            if self._subkeys is None:
                self._subkeys = (
                    iter(self._nk_record.subkey_list().keys())
                    if self._nk_record.subkey_number()
                    else iter(())
                )
            nk_record = next(self._subkeys, None)
        except _PARSE_ERRORS as err:
            self._subkeys = iter(())
            raise HiveEnumerationError(
                f"Subkey enumeration of key '{self._name}' failed: {err}"
            ) from err
        return RegfKey(nk_record) if nk_record is not None else None


@export
class RegfHive:
    """Hive decoded by python-registry."""

    def __init__(self, regf_block: RegistryParse.REGFBlock):
        """Wrap the hive header block."""
        self._regf_block = regf_block

    def root(self) -> RegfKey:
        """
        Return the root key.

        Raises
        ------
        HiveFormatError
            If the root key cannot be located.

        """
        try:
            return RegfKey(self._regf_block.first_key())
        except (StopIteration, HiveEnumerationError, *_PARSE_ERRORS) as err:
            raise HiveFormatError(
                "The root key of the hive could not be located.",
                str(err),
                title="invalid registry hive",
            ) from err


@export
class RegfDecoder:
    """HiveDecoder using python-registry."""

    def decode(self, stream: BinaryIO) -> RegfHive:
        """
        Read `stream` and parse the hive header.

        Parameters
        ----------
        stream : BinaryIO
            Reader positioned at the start of the hive.

        Returns
        -------
        RegfHive
            The decoded hive.

        Raises
        ------
        HiveFormatError
            If the data is not a valid registry hive.

        """
        try:
            buffer = stream.read()
        except OSError as err:
            raise HiveFormatError(
                "The hive data could not be read.", str(err), title="unreadable hive"
            ) from err
        try:
            return RegfHive(RegistryParse.REGFBlock(buffer, 0, False))
        except _PARSE_ERRORS as err:
            raise HiveFormatError(
                "The data is not a valid registry hive.",
                str(err),
                title="invalid registry hive",
            ) from err
