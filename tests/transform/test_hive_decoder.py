# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""python-registry adapter test class."""
import io
import struct
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import pytest_check as check
from Registry import RegistryParse

from hivetree.common.exceptions import (
    HiveEnumerationError,
    HiveFormatError,
    HiveValueDecodeError,
    HiveValueReadError,
)
from hivetree.transform.hive_decoder import (
    REG_DWORD,
    REG_EXPAND_SZ,
    REG_NONE,
    REG_SZ,
    Int32Data,
    NoData,
    RegfDecoder,
    RegfHive,
    RegfKey,
    RegfValue,
    StringData,
)

from .regf_hive import KEY_TIMESTAMP

_BINARY_TYPE = 3


def _vk_record(name="Val", data_type=REG_DWORD, raw=b"\x07\x00\x00\x00"):
    vk_record = MagicMock()
    vk_record.has_name.return_value = bool(name)
    vk_record.name.return_value = name
    vk_record.data_length.return_value = len(raw)
    vk_record.data_type.return_value = data_type
    vk_record.raw_data.return_value = raw
    return vk_record


def _nk_record(name="Key", values=(), subkeys=()):
    nk_record = MagicMock()
    nk_record.name.return_value = name
    nk_record.timestamp.return_value = datetime(2020, 1, 2, 3, 4, 5)
    nk_record.values_number.return_value = len(values)
    nk_record.values_list.return_value.values.return_value = iter(values)
    nk_record.subkey_number.return_value = len(subkeys)
    nk_record.subkey_list.return_value.keys.return_value = iter(subkeys)
    return nk_record


_DECODE_CASES = [
    (REG_DWORD, struct.pack("<i", -5), Int32Data(-5)),
    (REG_DWORD, b"\x07\x00\x00\x00\x00", Int32Data(7)),
    (REG_SZ, "hello\x00".encode("utf-16-le"), StringData("hello")),
    (
        REG_EXPAND_SZ,
        "%SystemRoot%\x00".encode("utf-16-le"),
        StringData("%SystemRoot%"),
    ),
    (REG_NONE, b"", NoData()),
    (_BINARY_TYPE, b"\x01\x02", None),
]


@pytest.mark.parametrize("data_type, raw, expected", _DECODE_CASES)
def test_value_decode(data_type, raw, expected):
    """Test payload decoding by registry type."""
    value = RegfValue(_vk_record(data_type=data_type, raw=raw))
    value.read(io.BytesIO())
    check.equal(value.decode(), expected)
    check.equal(value.size(), len(raw))
    check.equal(value.data_type, data_type)


def test_value_unnamed():
    """Test a value without a name record has an empty name."""
    value = RegfValue(_vk_record(name=""))
    check.equal(value.name(), "")


def test_value_decode_short_dword():
    """Test a truncated DWORD fails to decode."""
    value = RegfValue(_vk_record(raw=b"\x01\x02"))
    value.read(io.BytesIO())
    with pytest.raises(HiveValueDecodeError):
        value.decode()


def test_value_decode_not_read():
    """Test decoding a supported type before reading fails."""
    value = RegfValue(_vk_record())
    with pytest.raises(HiveValueDecodeError):
        value.decode()


def test_value_read_error():
    """Test parse errors while reading surface as HiveValueReadError."""
    vk_record = _vk_record(data_type=REG_SZ)
    vk_record.raw_data.side_effect = RegistryParse.ParseException("bad data cell")
    value = RegfValue(vk_record)
    with pytest.raises(HiveValueReadError):
        value.read(io.BytesIO())
    with pytest.raises(HiveValueDecodeError):
        value.decode()


def test_value_bad_header():
    """Test an unparsable value record is an enumeration error."""
    vk_record = _vk_record()
    vk_record.data_length.side_effect = struct.error("unpack requires 4 bytes")
    with pytest.raises(HiveEnumerationError):
        RegfValue(vk_record)


def test_key_cursors():
    """Test key cursors return values and subkeys then None."""
    child = _nk_record("Child")
    nk_record = _nk_record(
        "Parent", values=[_vk_record("A"), _vk_record("B")], subkeys=[child]
    )
    key = RegfKey(nk_record)
    stream = io.BytesIO()

    check.equal(key.name(), "Parent")
    check.equal(key.last_written(), datetime(2020, 1, 2, 3, 4, 5))
    check.equal(key.next_value(stream).name(), "A")
    check.equal(key.next_value(stream).name(), "B")
    check.is_none(key.next_value(stream))
    check.is_none(key.next_value(stream))
    sub_key = key.next_key(stream)
    check.equal(sub_key.name(), "Child")
    check.is_none(key.next_key(stream))
    check.equal(nk_record.values_list.call_count, 1)


def test_key_empty_lists_not_parsed():
    """Test keys with no values or subkeys do not read the lists."""
    nk_record = _nk_record()
    key = RegfKey(nk_record)
    check.is_none(key.next_value(io.BytesIO()))
    check.is_none(key.next_key(io.BytesIO()))
    nk_record.values_list.assert_not_called()
    nk_record.subkey_list.assert_not_called()


def _failing_iter(items, error):
    yield from items
    raise error


def test_key_subkey_enumeration_error():
    """Test a corrupt subkey list fails once then reports exhaustion."""
    nk_record = _nk_record("Parent", subkeys=[_nk_record("Child")])
    nk_record.subkey_list.return_value.keys.return_value = _failing_iter(
        [_nk_record("Child")], RegistryParse.ParseException("bad subkey list")
    )
    key = RegfKey(nk_record)
    stream = io.BytesIO()

    check.equal(key.next_key(stream).name(), "Child")
    with pytest.raises(HiveEnumerationError):
        key.next_key(stream)
    check.is_none(key.next_key(stream))


def test_key_value_enumeration_error():
    """Test a corrupt value list raises HiveEnumerationError."""
    nk_record = _nk_record("Parent", values=[_vk_record()])
    nk_record.values_list.side_effect = IndexError("offset out of range")
    key = RegfKey(nk_record)
    with pytest.raises(HiveEnumerationError):
        key.next_value(io.BytesIO())


def test_key_bad_timestamp():
    """Test an unreadable timestamp is reported as None."""
    nk_record = _nk_record()
    nk_record.timestamp.side_effect = OverflowError("date value out of range")
    check.is_none(RegfKey(nk_record).last_written())


def test_hive_root():
    """Test the hive root key is wrapped."""
    regf_block = MagicMock()
    regf_block.first_key.return_value = _nk_record("ROOT")
    check.equal(RegfHive(regf_block).root().name(), "ROOT")

    regf_block.first_key.side_effect = RegistryParse.ParseException("no hbin")
    with pytest.raises(HiveFormatError):
        RegfHive(regf_block).root()


@pytest.mark.parametrize("data", [b"", b"not a hive", b"\x00" * 4096])
def test_decoder_invalid_hive(data):
    """Test invalid hive data raises HiveFormatError."""
    with pytest.raises(HiveFormatError):
        RegfDecoder().decode(io.BytesIO(data))


def test_decoder_unreadable_stream():
    """Test a failing stream raises HiveFormatError."""
    stream = MagicMock()
    stream.read.side_effect = OSError("device not ready")
    with pytest.raises(HiveFormatError):
        RegfDecoder().decode(stream)


def test_decoder_regf_cursors(regf_hive):
    """Test the cursors over a decoded regf image."""
    stream = io.BytesIO(regf_hive)
    root = RegfDecoder().decode(stream).root()
    check.equal(root.name(), "Root")
    check.equal(root.last_written(), KEY_TIMESTAMP)

    values = []
    value = root.next_value(stream)
    while value is not None:
        value.read(stream)
        values.append((value.name(), value.size(), value.decode()))
        value = root.next_value(stream)
    check.equal(values, [("Ver", 4, Int32Data(7)), ("", 4, StringData("x"))])

    sub_key = root.next_key(stream)
    check.equal(sub_key.name(), "Sub")
    check.is_none(sub_key.next_value(stream))
    check.is_none(sub_key.next_key(stream))
    check.is_none(root.next_key(stream))
