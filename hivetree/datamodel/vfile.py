# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Stream builders that open fresh readers over evidence bytes."""
import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Union

from .._version import VERSION
from ..common.utility import export

__version__ = VERSION


@export
class VFileBuilder(ABC):
    """Factory for seekable binary readers over the same bytes."""

    @abstractmethod
    def open(self) -> BinaryIO:
        """Return a new seekable reader positioned at offset 0."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Return the size of the underlying data in bytes."""


@export
class BytesVFileBuilder(VFileBuilder):
    """Stream builder for in-memory data."""

    def __init__(self, data: bytes):
        """
        Create the builder.

        Parameters
        ----------
        data : bytes
            The bytes to serve.

        """
        self._data = bytes(data)

    def open(self) -> BinaryIO:
        """Return a new BytesIO reader."""
        return io.BytesIO(self._data)

    @property
    def size(self) -> int:
        """Return the data length."""
        return len(self._data)

    def __repr__(self):
        """Return repr of builder."""
        return f"BytesVFileBuilder(size={self.size})"


@export
class FileVFileBuilder(VFileBuilder):
    """Stream builder for a file on disk."""

    def __init__(self, path: Union[str, Path]):
        """
        Create the builder.

        Parameters
        ----------
        path : Union[str, Path]
            Path to the file.

        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Return the file path."""
        return self._path

    def open(self) -> BinaryIO:
        """Open the file for binary reading."""
        return open(self._path, "rb")  # pylint: disable=consider-using-with

    @property
    def size(self) -> int:
        """Return the file size."""
        return self._path.stat().st_size

    def __repr__(self):
        """Return repr of builder."""
        return f"FileVFileBuilder(path='{self._path}')"
