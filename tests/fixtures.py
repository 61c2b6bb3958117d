"""Fixtures for testing hivetree."""

import pytest

from hivetree.datamodel.tree import Tree

from .transform.fake_hive import FakeKey, sample_root
from .transform.regf_hive import sample_regf


@pytest.fixture(name="hive_tree")
def create_hive_tree() -> Tree:
    """Return an empty destination tree."""
    return Tree()


@pytest.fixture(name="sample_hive")
def create_sample_hive() -> FakeKey:
    """Return a fresh sample hive root key."""
    return sample_root()


@pytest.fixture(name="regf_hive")
def create_regf_hive() -> bytes:
    """Return the bytes of a small regf hive."""
    return sample_regf()
