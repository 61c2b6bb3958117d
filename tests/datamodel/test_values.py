# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Value and vfile test class."""
from datetime import datetime

import attr
import pytest
import pytest_check as check

from hivetree.datamodel.values import Value, ValueType
from hivetree.datamodel.vfile import BytesVFileBuilder, FileVFileBuilder

_TIMESTAMP = datetime(2019, 11, 12, 13, 14, 15)

_FROM_PYTHON_CASES = [
    (None, ValueType.NONE),
    ("text", ValueType.STRING),
    (-12, ValueType.I32),
    (_TIMESTAMP, ValueType.DATETIME),
    (BytesVFileBuilder(b"abc"), ValueType.VFILE),
]


@pytest.mark.parametrize("data, expected_type", _FROM_PYTHON_CASES)
def test_from_python(data, expected_type):
    """Test wrapping of python objects."""
    value = Value.from_python(data)
    check.equal(value.type, expected_type)
    check.equal(value.data, data)
    check.is_(Value.from_python(value), value)


@pytest.mark.parametrize("data", [1.5, b"bytes", True, [1]])
def test_from_python_unsupported(data):
    """Test unsupported python types are rejected."""
    with pytest.raises(TypeError):
        Value.from_python(data)


def test_constructors_check_types():
    """Test the typed constructors validate their input."""
    with pytest.raises(TypeError):
        Value.string(5)
    with pytest.raises(TypeError):
        Value.i32("5")
    with pytest.raises(TypeError):
        Value.i32(False)
    with pytest.raises(TypeError):
        Value.datetime("2019-11-12")
    with pytest.raises(TypeError):
        Value.vfile(b"abc")


@pytest.mark.parametrize("data", [2**31, -(2**31) - 1])
def test_i32_range(data):
    """Test integers outside the 32-bit range are rejected."""
    with pytest.raises(ValueError):
        Value.i32(data)


def test_value_behavior():
    """Test equality, immutability and string form."""
    check.equal(Value.i32(1), Value.i32(1))
    check.not_equal(Value.i32(1), Value.string("1"))
    check.is_true(Value.none().is_none)
    check.is_false(Value.string("").is_none)
    check.equal(str(Value.none()), "None")
    check.equal(str(Value.i32(42)), "42")
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        Value.i32(1).data = 2  # type: ignore


def test_try_as_vfile_builder():
    """Test only stream values return a builder."""
    builder = BytesVFileBuilder(b"abc")
    check.is_(Value.vfile(builder).try_as_vfile_builder(), builder)
    check.is_none(Value.string("abc").try_as_vfile_builder())
    check.is_none(Value.none().try_as_vfile_builder())


def test_bytes_vfile():
    """Test each open returns an independent reader."""
    builder = BytesVFileBuilder(b"regf-data")
    check.equal(builder.size, 9)
    with builder.open() as first, builder.open() as second:
        check.equal(first.read(4), b"regf")
        check.equal(second.read(), b"regf-data")
        check.equal(first.read(), b"-data")


def test_file_vfile(tmp_path):
    """Test file stream builder."""
    hive_file = tmp_path.joinpath("SOFTWARE")
    hive_file.write_bytes(b"\x01\x02\x03")
    builder = FileVFileBuilder(str(hive_file))
    check.equal(builder.path, hive_file)
    check.equal(builder.size, 3)
    with builder.open() as reader:
        check.equal(reader.read(), b"\x01\x02\x03")
    check.is_in("SOFTWARE", repr(builder))

    with pytest.raises(FileNotFoundError):
        FileVFileBuilder(tmp_path.joinpath("missing")).open()
