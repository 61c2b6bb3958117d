# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""common.utility test class."""
import pytest
import pytest_check as check

from hivetree.common import utility as utils


def test_kwarg_check():
    """Test kwargs checker."""
    _DEFAULT_KWARGS = ["max_depth", "max_nodes", "max_value_size"]

    args_ok = {"max_depth": 3}
    args_bad = {"max_depth": 3, "max_value_sz": 4}
    args2_bad = {"max_depth": 3, "nodes": 10, "size": 20}

    utils.check_kwargs(args_ok, _DEFAULT_KWARGS)
    with pytest.raises(NameError) as err:
        utils.check_kwargs(args_bad, _DEFAULT_KWARGS)
    check.is_in("max_value_sz", err.value.args[0][0].args)
    check.is_in("Closest match is 'max_value_size'", err.value.args[0][0].args[1])

    with pytest.raises(NameError) as err:
        utils.check_kwargs(args2_bad, _DEFAULT_KWARGS)
    check.equal(len(err.value.args[0]), 2)
    check.is_in("nodes", err.value.args[0][0].args)
    check.is_in("size", err.value.args[0][1].args)


def test_checked_kwargs():
    """Test the kwargs checking decorator."""

    @utils.checked_kwargs(["max_depth"])
    def _walk(key, depth_hint=None, **kwargs):
        return key, depth_hint, kwargs

    check.equal(_walk("Root", max_depth=2), ("Root", None, {"max_depth": 2}))
    check.equal(_walk("Root", depth_hint=1), ("Root", 1, {}))
    with pytest.raises(NameError):
        _walk("Root", max_dpth=2)


def test_export():
    """Test export adds names to the module __all__."""
    from hivetree.transform import hive_walker

    check.is_in("HiveWalker", hive_walker.__all__)
    check.is_in("walk_hive", hive_walker.__all__)
    check.is_not_in("_HiveWalk", hive_walker.__all__)


def test_is_ipython():
    """Test IPython detection outside a notebook."""
    check.is_false(utils.is_ipython())
    check.is_false(utils.is_ipython(notebook=True))
