"""Pytest configuration for tests module."""

from .fixtures import (  # noqa: F401 # pylint: disable=W0611
    create_hive_tree,
    create_regf_hive,
    create_sample_hive,
)
