# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Conversion of decoded hive payloads to generic values."""
from typing import Optional

import attr
from typing_extensions import assert_never

from .._version import VERSION
from ..common.exceptions import HiveValueDecodeError
from ..common.utility import export
from ..datamodel.values import Value
from .hive_decoder import HivePayload, HiveValue, Int32Data, NoData, StringData

__version__ = VERSION


@export
@attr.s(auto_attribs=True, frozen=True)
class DecodedValue:
    """Result of decoding a hive value."""

    value: Value
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Return True if the payload could not be decoded."""
        return self.error is not None


@export
def value_from_payload(payload: Optional[HivePayload]) -> Value:
    """
    Map a decoded payload variant to a generic Value.

    Parameters
    ----------
    payload : Optional[HivePayload]
        NoData, StringData, Int32Data or None if the
        decoder produced no payload.

    Returns
    -------
    Value
        The generic value - `Value.none()` for absent payloads.

    """
    if payload is None or isinstance(payload, NoData):
        return Value.none()
    if isinstance(payload, StringData):
        return Value.string(payload.value)
    if isinstance(payload, Int32Data):
        return Value.i32(payload.value)
    assert_never(payload)


@export
def decode_value(hive_value: HiveValue) -> DecodedValue:
    """
    Decode a hive value, never failing.

    Parameters
    ----------
    hive_value : HiveValue
        Value whose payload has been read.

    Returns
    -------
    DecodedValue
        The generic value. If decoding failed the value is
        `Value.none()` and `error` holds the reason.

    """
    try:
        return DecodedValue(value_from_payload(hive_value.decode()))
    except HiveValueDecodeError as err:
        return DecodedValue(Value.none(), str(err))
    except (TypeError, ValueError) as err:
        return DecodedValue(Value.none(), f"Unrepresentable payload: {err}")
