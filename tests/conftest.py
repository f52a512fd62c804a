"""Shared fixtures for TreeWalker tests."""

import pytest

from trees import build_tree


@pytest.fixture
def sync_tree():
    """Sample tree whose get_data() answers immediately."""
    return build_tree()


@pytest.fixture
def async_tree():
    """Sample tree whose get_data() returns a coroutine."""
    return build_tree(asynchronous=True)
